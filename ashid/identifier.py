"""
Ashid - time-sortable unique identifier with an optional type prefix.

Format: [prefix][timestamp][random]

Prefix rules:
- Any prefix is cleaned to lowercase letters and digits and gets a trailing
  "_" delimiter ("User" -> "user_", "user-" -> "user_"). A prefix that
  cleans to nothing means no prefix.
- With a prefix the base ID is variable length:
  - timestamp is not padded
  - random is padded to 13 chars when timestamp > 0
  - timestamp 0 is omitted and random is left unpadded ("user_0")
- Without a prefix the base ID is fixed at 22 chars:
  9 char timestamp + 13 char random, both zero padded

The four-random variant (create4) replaces the timestamp with a second
random field: two 13 char fields, 26 chars, optional prefix. It has the
most entropy but no time ordering.

Timestamps run from 0 (Unix epoch) to 32**9 - 1 ms (Dec 12, 3084).
Randoms run from 0 to 2**64 - 1.

Examples:
    "1kbg1jmtt4v3x8k9p2m1n0"        no prefix, fixed 22 chars
    "user_1kbg1jmtt4v3x8k9p2m1n0"   prefix, current time
    "user_0"                        prefix, timestamp 0, random 0
"""

import re
from enum import Enum

from ashid import base32
from core.errors import DomainError
from utils.timestamp import now_millis, to_datetime

TIMESTAMP_WIDTH = 9
RANDOM_WIDTH = base32.PAD_WIDTH
FIXED_LENGTH = TIMESTAMP_WIDTH + RANDOM_WIDTH
FOUR_RANDOM_LENGTH = 2 * RANDOM_WIDTH

# Dec 12, 3084; beyond this the timestamp no longer fits 9 chars
MAX_TIMESTAMP = base32.BASE ** TIMESTAMP_WIDTH - 1
MAX_RANDOM = 2 ** base32.RANDOM_BITS - 1

DELIMITER = "_"
_DELIMITERS = ("_", "-")

_PREFIX_STRIP = re.compile(r"[^a-zA-Z0-9]")
_PREFIX_SHAPE = re.compile(r"^[a-zA-Z0-9]+_$")


class Layout(Enum):
    FIXED = "fixed"
    VARIABLE = "variable"
    FOUR_RANDOM = "four_random"


class ParsedAshid:
    """Encoded fields of an ashid.

    Iterates as (prefix, encoded_timestamp, encoded_random), or
    (prefix, encoded_random, encoded_random2) for the four-random layout.
    """

    __slots__ = ("prefix", "encoded_timestamp", "encoded_random", "encoded_random2")

    def __init__(self, prefix, encoded_timestamp, encoded_random, encoded_random2=None):
        self.prefix = prefix
        self.encoded_timestamp = encoded_timestamp
        self.encoded_random = encoded_random
        self.encoded_random2 = encoded_random2

    @property
    def layout(self):
        if self.encoded_random2 is not None:
            return Layout.FOUR_RANDOM
        if self.prefix:
            return Layout.VARIABLE
        return Layout.FIXED

    @property
    def four_random(self):
        return self.layout is Layout.FOUR_RANDOM

    def fields(self):
        if self.four_random:
            return (self.encoded_random, self.encoded_random2)
        return (self.encoded_timestamp, self.encoded_random)

    def __iter__(self):
        yield self.prefix
        yield from self.fields()

    def __repr__(self):
        return f"ParsedAshid(prefix={self.prefix!r}, fields={self.fields()!r}, layout={self.layout.value!r})"

    def to_dict(self):
        return {
            "prefix": self.prefix,
            "layout": self.layout.value,
            "encoded_timestamp": self.encoded_timestamp,
            "encoded_random": self.encoded_random,
            "encoded_random2": self.encoded_random2,
        }


def normalize_prefix(prefix):
    """Clean a raw prefix to lowercase alphanumerics plus '_' ('' for none)."""
    if prefix is None:
        return ""
    if not isinstance(prefix, str):
        raise DomainError(f"Ashid prefix must be a string (got {type(prefix).__name__})", field="prefix")
    cleaned = _PREFIX_STRIP.sub("", prefix).lower()
    return cleaned + DELIMITER if cleaned else ""


def _check_bounded(value, field, maximum, note=""):
    if isinstance(value, bool) or not isinstance(value, int):
        raise DomainError(f"Ashid {field} must be an integer (got {value!r})", field=field, value=repr(value))
    if value < 0:
        raise DomainError(f"Ashid {field} must be non-negative (got {value})", field=field, value=value)
    if value > maximum:
        raise DomainError(f"Ashid {field} must not exceed {maximum}{note} (got {value})", field=field, value=value)


def create(prefix=None, time=None, random_value=None):
    """Create an ashid.

    time defaults to now (ms), random_value to a fresh 64-bit secure random.
    Raises DomainError when either is out of range.
    """
    normalized = normalize_prefix(prefix)
    if time is None:
        time = now_millis()
    if random_value is None:
        random_value = base32.secure_random_value()

    _check_bounded(time, "timestamp", MAX_TIMESTAMP, " (Dec 12, 3084)")
    _check_bounded(random_value, "random value", MAX_RANDOM)

    if normalized:
        if time > 0:
            base_id = base32.encode(time) + base32.encode(random_value, padded=True, width=RANDOM_WIDTH)
        else:
            base_id = base32.encode(random_value)
    else:
        base_id = (base32.encode(time, padded=True, width=TIMESTAMP_WIDTH)
                   + base32.encode(random_value, padded=True, width=RANDOM_WIDTH))

    return normalized + base_id


def create4(prefix=None, random1=None, random2=None):
    """Create a four-random ashid: 26 random chars, no timestamp, not sortable."""
    normalized = normalize_prefix(prefix)
    if random1 is None:
        random1 = base32.secure_random_value()
    if random2 is None:
        random2 = base32.secure_random_value()

    _check_bounded(random1, "random value", MAX_RANDOM)
    _check_bounded(random2, "random value", MAX_RANDOM)

    return (normalized
            + base32.encode(random1, padded=True, width=RANDOM_WIDTH)
            + base32.encode(random2, padded=True, width=RANDOM_WIDTH))


def parse(value):
    """Split an ashid into its prefix and encoded fields.

    Does not decode the fields; use is_valid() for a full check.
    """
    if not isinstance(value, str) or not value:
        raise DomainError("Invalid Ashid: cannot be empty", field="id")

    # Leading alphanumerics followed directly by '_' or '-' form the prefix
    prefix_length = 0
    has_delimiter = False
    for char in value:
        if char.isascii() and char.isalnum():
            prefix_length += 1
        elif char in _DELIMITERS and prefix_length > 0:
            prefix_length += 1
            has_delimiter = True
            break
        else:
            break

    if has_delimiter:
        prefix = value[:prefix_length - 1] + DELIMITER
        base_id = value[prefix_length:]
    else:
        prefix = ""
        base_id = value

    if not base_id:
        raise DomainError("Invalid Ashid: must have a base ID after prefix", field="id", value=value)

    length = len(base_id)
    if length == FOUR_RANDOM_LENGTH:
        return ParsedAshid(prefix, None, base_id[:RANDOM_WIDTH], base_id[RANDOM_WIDTH:])

    if has_delimiter:
        if length <= RANDOM_WIDTH:
            # timestamp 0 was omitted
            return ParsedAshid(prefix, "0", base_id)
        if length <= FIXED_LENGTH:
            return ParsedAshid(prefix, base_id[:-RANDOM_WIDTH], base_id[-RANDOM_WIDTH:])
        raise DomainError(
            f"Invalid Ashid: base ID after a delimiter must be at most {FIXED_LENGTH} "
            f"or exactly {FOUR_RANDOM_LENGTH} characters (got {length})",
            field="id", value=value,
        )

    if length != FIXED_LENGTH:
        raise DomainError(
            f"Invalid Ashid: base ID must be {FIXED_LENGTH} or {FOUR_RANDOM_LENGTH} characters "
            f"without underscore delimiter (got {length})",
            field="id", value=value,
        )
    return ParsedAshid(prefix, base_id[:TIMESTAMP_WIDTH], base_id[TIMESTAMP_WIDTH:])


def _decode_fields(parsed):
    """Decode and range-check every field; returns (time, random1, random2)."""
    time = None
    if parsed.encoded_timestamp is not None:
        time = base32.decode(parsed.encoded_timestamp)
        _check_bounded(time, "timestamp", MAX_TIMESTAMP)

    random1 = base32.decode(parsed.encoded_random)
    _check_bounded(random1, "random value", MAX_RANDOM)

    random2 = None
    if parsed.encoded_random2 is not None:
        random2 = base32.decode(parsed.encoded_random2)
        _check_bounded(random2, "random value", MAX_RANDOM)

    return time, random1, random2


def prefix(value):
    """Prefix of an ashid, '' if none."""
    return parse(value).prefix


def timestamp(value):
    """Timestamp of an ashid in ms since the Unix epoch."""
    parsed = parse(value)
    if parsed.four_random:
        raise DomainError("Invalid Ashid: four-random ids carry no timestamp", field="id", value=value)
    return base32.decode(parsed.encoded_timestamp)


def created_at(value):
    return to_datetime(timestamp(value))


def random(value):
    """Random component; the first of the two for four-random ids."""
    return base32.decode(parse(value).encoded_random)


def randoms(value):
    parsed = parse(value)
    if parsed.four_random:
        return (base32.decode(parsed.encoded_random), base32.decode(parsed.encoded_random2))
    return (base32.decode(parsed.encoded_random),)


def is_valid(value):
    """True if value parses and every field decodes within range."""
    try:
        parsed = parse(value)
        if parsed.prefix and not _PREFIX_SHAPE.match(parsed.prefix):
            return False
        _decode_fields(parsed)
    except DomainError:
        return False
    return True


def normalize(value):
    """Rebuild an ashid in canonical form.

    Lowercases, maps lookalikes (I/L -> 1, O -> 0, U -> v) and turns a '-'
    delimiter into '_' by decoding and re-encoding every field.
    """
    parsed = parse(value)
    time, random1, random2 = _decode_fields(parsed)
    normalized_prefix = parsed.prefix.lower() or None
    if parsed.four_random:
        return create4(normalized_prefix, random1, random2)
    return create(normalized_prefix, time, random1)


def ashid(prefix=None):
    """Create an ashid with the current time and a secure random."""
    return create(prefix)


def parse_ashid(value):
    return parse(value)
