"""
Crockford Base32 codec.

Case-insensitive, human-friendly Base32:
- Alphabet 0-9 plus lowercase letters without i, l, o, u
- Decoding maps lookalikes: o -> 0, i/l -> 1, u -> v
- Anything else is rejected

Values are plain Python ints, so 64-bit randoms decode exactly.
"""

import random as _insecure_random
import secrets

from core.errors import DomainError
from internal.logging import get_logger

ALPHABET = "0123456789abcdefghjkmnpqrstvwxyz"
BASE = len(ALPHABET)

# Pad target for random fields; 13 symbols hold 65 bits.
PAD_WIDTH = 13
RANDOM_BITS = 64

_LOOKALIKES = {"o": "0", "i": "1", "l": "1", "u": "v"}


def _build_decode_map():
    table = {}
    for value, symbol in enumerate(ALPHABET):
        table[symbol] = value
        table[symbol.upper()] = value
    for lookalike, symbol in _LOOKALIKES.items():
        table[lookalike] = table[symbol]
        table[lookalike.upper()] = table[symbol]
    return table


_DECODE_MAP = _build_decode_map()


def _require_natural(n, field="value"):
    if isinstance(n, bool) or not isinstance(n, int):
        raise DomainError(f"{field} must be a non-negative integer (got {n!r})", field=field, value=repr(n))
    if n < 0:
        raise DomainError(f"{field} must be non-negative (got {n})", field=field, value=n)


def encode(n, padded=False, width=PAD_WIDTH):
    """Encode a non-negative integer, optionally left-padded with '0' to width.

    Padding never truncates: a value wider than width comes back longer.
    """
    _require_natural(n, "input")

    if n == 0:
        chars = ["0"]
    else:
        chars = []
        while n > 0:
            n, remainder = divmod(n, BASE)
            chars.append(ALPHABET[remainder])

    encoded = "".join(reversed(chars))
    return encoded.rjust(width, "0") if padded else encoded


def decode(s):
    """Decode a Base32 string, folding case and lookalike characters."""
    if not isinstance(s, str) or not s:
        raise DomainError("Input string cannot be empty", field="input")

    result = 0
    for char in s:
        value = _DECODE_MAP.get(char)
        if value is None:
            raise DomainError(f"Invalid character in Base32 string: {char!r}", field="input", value=char)
        result = result * BASE + value
    return result


def secure_random_value(bits=RANDOM_BITS):
    """Uniform random int in [0, 2**bits) from the OS CSPRNG.

    Falls back to the Mersenne Twister, loudly, when the platform has no
    randomness source. That path is only acceptable in test environments.
    """
    try:
        return secrets.randbits(bits)
    except NotImplementedError as exc:
        get_logger().warn("Secure random source unavailable, using NOT SECURE fallback",
                          error=exc, source="random.getrandbits")
        return _insecure_random.getrandbits(bits)


def is_valid(s):
    """True if s decodes cleanly."""
    try:
        decode(s)
    except DomainError:
        return False
    return True
