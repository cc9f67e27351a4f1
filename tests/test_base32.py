"""Tests for Base32 secret decoding."""

import pytest

from core.base32 import (
    DecodeError,
    InvalidCharacter,
    InvalidLength,
    decode_base32_secret,
    is_valid_secret,
    normalize_secret,
)


class TestDecodeVectors:
    """RFC 4648 section 10 test vectors."""

    @pytest.mark.parametrize(
        "encoded, expected",
        [
            ("MY======", b"f"),
            ("MZXQ====", b"fo"),
            ("MZXW6===", b"foo"),
            ("MZXW6YQ=", b"foob"),
            ("MZXW6YTB", b"fooba"),
            ("MZXW6YTBOI======", b"foobar"),
        ],
    )
    def test_rfc4648_vectors(self, encoded, expected):
        assert decode_base32_secret(encoded) == expected

    def test_foo_bytes(self):
        """Test that MZXW6=== decodes to 0x66 0x6F 0x6F."""
        assert list(decode_base32_secret("MZXW6===")) == [0x66, 0x6F, 0x6F]

    def test_rfc6238_secret(self):
        key = decode_base32_secret("GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ")
        assert key == b"12345678901234567890"

    def test_output_length(self):
        """Test that 16 symbols give floor(16 * 5 / 8) bytes."""
        assert len(decode_base32_secret("JBSWY3DPEHPK3PXP")) == 10

    def test_high_bits_first(self):
        """Test that the first symbol lands in the top bits of byte 0."""
        assert decode_base32_secret("7AAAAAAA")[0] == 0xF8
        assert decode_base32_secret("AAAAAAA7") == b"\x00\x00\x00\x00\x1f"


class TestNormalization:
    """Tests for case and spacing handling."""

    def test_lowercase_accepted(self):
        assert decode_base32_secret("mzxw6===") == b"foo"

    def test_spaces_rejected_by_decoder(self):
        """Test that the decoder does not strip grouping spaces itself."""
        with pytest.raises(DecodeError):
            decode_base32_secret("MZXW 6===")
        with pytest.raises(InvalidCharacter) as exc_info:
            decode_base32_secret("jbsw y3dp ehpk 3pxp mzxw")
        assert exc_info.value.char == " "

    def test_normalize_secret(self):
        assert normalize_secret("ab cd") == "ABCD"
        assert normalize_secret("\tjbsw y3dp ehpk 3pxp\n") == "JBSWY3DPEHPK3PXP"

    def test_normalized_grouped_secret_decodes(self):
        assert decode_base32_secret(normalize_secret("jbsw y3dp ehpk 3pxp")) == decode_base32_secret("JBSWY3DPEHPK3PXP")

    def test_deterministic(self):
        assert decode_base32_secret("JBSWY3DPEHPK3PXP") == decode_base32_secret("JBSWY3DPEHPK3PXP")


class TestStrictErrors:
    """Tests for rejected input."""

    @pytest.mark.parametrize("text", ["", "   "])
    def test_empty_is_invalid_length(self, text):
        with pytest.raises(InvalidLength):
            decode_base32_secret(text)

    @pytest.mark.parametrize("text", ["MZXW6", "MZXW6==", "JBSWY3DPEHPK3PX"])
    def test_length_not_multiple_of_8(self, text):
        with pytest.raises(InvalidLength):
            decode_base32_secret(text)

    def test_only_padding(self):
        with pytest.raises(InvalidLength):
            decode_base32_secret("========")

    @pytest.mark.parametrize("digit", ["0", "1", "8", "9"])
    def test_digits_outside_alphabet(self, digit):
        with pytest.raises(InvalidCharacter) as exc_info:
            decode_base32_secret(f"MZXW{digit}AAA")
        assert exc_info.value.char == digit
        assert exc_info.value.position == 4

    def test_padding_in_middle(self):
        with pytest.raises(InvalidCharacter):
            decode_base32_secret("MZ=W6AAA")

    def test_punctuation(self):
        with pytest.raises(InvalidCharacter):
            decode_base32_secret("MZXW-6AA")

    def test_errors_are_value_errors(self):
        assert issubclass(InvalidLength, DecodeError)
        assert issubclass(InvalidCharacter, DecodeError)
        assert issubclass(DecodeError, ValueError)


class TestIsValidSecret:
    """Tests for the boolean check."""

    def test_valid(self):
        assert is_valid_secret("JBSWY3DPEHPK3PXP")

    def test_invalid(self):
        assert not is_valid_secret("JBSWY3DPEHPK3PX1")
        assert not is_valid_secret("")
