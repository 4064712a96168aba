"""Unit tests for the Crockford Base32 codec."""

import json
import secrets

import pytest

from ashid import base32
from core.errors import DomainError


class TestEncode:
    """Tests for encode()."""

    def test_encode_zero(self):
        """Zero encodes to a single zero symbol."""
        assert base32.encode(0) == "0"

    def test_encode_small_values(self):
        """Values below 32 are one symbol, 32 rolls over."""
        assert base32.encode(10) == "a"
        assert base32.encode(31) == "z"
        assert base32.encode(32) == "10"

    def test_encode_1000(self):
        assert base32.encode(1000) == "z8"

    def test_encode_padded(self):
        """Padding left-fills with zeros to 13 by default."""
        assert base32.encode(123, padded=True) == "000000000003v"

    def test_encode_padded_custom_width(self):
        assert base32.encode(1000, padded=True, width=9) == "0000000z8"

    def test_padding_never_truncates(self):
        """A value wider than the pad width comes back longer."""
        encoded = base32.encode(32 ** 13, padded=True)
        assert encoded == "1" + "0" * 13

    def test_encode_max_64_bit(self):
        """Full 64-bit values fit in 13 symbols."""
        assert base32.encode(2 ** 64 - 1) == "f" + "z" * 12

    def test_encode_is_lowercase(self):
        encoded = base32.encode(2 ** 40 + 12345)
        assert encoded == encoded.lower()
        assert all(char in base32.ALPHABET for char in encoded)

    @pytest.mark.parametrize("bad", [-1, 1.5, float("inf"), float("nan"), True, "12", None])
    def test_encode_rejects_non_natural(self, bad):
        """Negative, non-integer and non-finite input raises DomainError."""
        with pytest.raises(DomainError):
            base32.encode(bad)


class TestDecode:
    """Tests for decode()."""

    def test_decode_z8(self):
        assert base32.decode("z8") == 1000

    def test_decode_padded(self):
        """Leading zeros never change the value."""
        assert base32.decode("000000000003v") == 123
        assert base32.decode("3v") == 123

    def test_decode_lookalikes_zero(self):
        assert base32.decode("O") == base32.decode("o") == base32.decode("0") == 0

    def test_decode_lookalikes_one(self):
        assert base32.decode("I") == base32.decode("i") == 1
        assert base32.decode("L") == base32.decode("l") == base32.decode("1") == 1

    def test_decode_lookalikes_v(self):
        assert base32.decode("U") == base32.decode("u") == base32.decode("V") == 27

    @pytest.mark.parametrize("value", ["1kbg1jmtt", "3v", "zzzz", "a0b1c2"])
    def test_decode_case_insensitive(self, value):
        assert base32.decode(value) == base32.decode(value.lower()) == base32.decode(value.upper())

    def test_decode_64_bit_exact(self):
        """64-bit values decode without precision loss."""
        assert base32.decode("f" + "z" * 12) == 2 ** 64 - 1

    def test_decode_empty_raises(self):
        with pytest.raises(DomainError, match="empty"):
            base32.decode("")

    def test_decode_invalid_character_names_it(self):
        """The error message names the offending character."""
        with pytest.raises(DomainError) as exc_info:
            base32.decode("abc-def")
        assert "'-'" in str(exc_info.value)
        assert exc_info.value.context["value"] == "-"

    def test_decode_rejects_non_ascii_lookalikes(self):
        """Only the listed lookalikes are tolerated."""
        with pytest.raises(DomainError):
            base32.decode("İ")  # dotted capital I

    def test_domain_error_is_value_error(self):
        with pytest.raises(ValueError):
            base32.decode("!")


class TestIsValid:
    """Tests for is_valid()."""

    def test_valid_strings(self):
        assert base32.is_valid("z8")
        assert base32.is_valid("OIL")

    def test_invalid_strings(self):
        assert not base32.is_valid("")
        assert not base32.is_valid("abc!")
        assert not base32.is_valid(None)


class TestSecureRandomValue:
    """Tests for secure_random_value()."""

    def test_range_64_bit(self):
        for _ in range(100):
            value = base32.secure_random_value()
            assert 0 <= value < 2 ** 64

    def test_custom_bit_width(self):
        for _ in range(100):
            assert 0 <= base32.secure_random_value(8) < 256

    def test_values_differ(self):
        values = {base32.secure_random_value() for _ in range(100)}
        assert len(values) == 100

    def test_fallback_is_logged(self, monkeypatch, log_stream):
        """Without an OS randomness source, fall back and warn."""
        def unavailable(bits):
            raise NotImplementedError("no randomness source")

        monkeypatch.setattr(secrets, "randbits", unavailable)
        value = base32.secure_random_value()

        assert 0 <= value < 2 ** 64
        record = json.loads(log_stream.getvalue().strip().splitlines()[-1])
        assert record["level"] == "WARN"
        assert "NOT SECURE" in record["msg"]
