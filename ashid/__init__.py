"""
Ashid - time-sortable unique identifiers with optional type prefixes.

    from ashid import ashid, parse

    ashid()            # "1fvszawr42tve3gxvx9900"
    ashid("user")      # "user_1fvszawr42tve3gxvx9900"
    parse("user_1fvszawr42tve3gxvx9900").prefix   # "user_"

The Base32 codec is exposed as ashid.base32 for advanced use and tests.
"""

from ashid import base32
from ashid.identifier import (
    DELIMITER,
    FIXED_LENGTH,
    FOUR_RANDOM_LENGTH,
    MAX_RANDOM,
    MAX_TIMESTAMP,
    RANDOM_WIDTH,
    TIMESTAMP_WIDTH,
    Layout,
    ParsedAshid,
    ashid,
    create,
    create4,
    created_at,
    is_valid,
    normalize,
    normalize_prefix,
    parse,
    parse_ashid,
    prefix,
    random,
    randoms,
    timestamp,
)
from core.errors import DomainError

__version__ = "1.0.0"

__all__ = [
    "base32",
    "DELIMITER",
    "FIXED_LENGTH",
    "FOUR_RANDOM_LENGTH",
    "MAX_RANDOM",
    "MAX_TIMESTAMP",
    "RANDOM_WIDTH",
    "TIMESTAMP_WIDTH",
    "Layout",
    "ParsedAshid",
    "DomainError",
    "ashid",
    "create",
    "create4",
    "created_at",
    "is_valid",
    "normalize",
    "normalize_prefix",
    "parse",
    "parse_ashid",
    "prefix",
    "random",
    "randoms",
    "timestamp",
]
