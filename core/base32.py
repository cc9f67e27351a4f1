"""Base32 secret decoding (RFC 4648 alphabet, strict input)."""

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
PADDING = "="

_VALUES = {char: value for value, char in enumerate(ALPHABET)}


class DecodeError(ValueError):
    """Secret text is not valid Base32."""
    pass


class InvalidLength(DecodeError):
    """Secret is empty or its length is not a multiple of 8."""
    pass


class InvalidCharacter(DecodeError):
    """Secret contains a character outside A-Z2-7."""

    def __init__(self, char: str, position: int):
        super().__init__(f"Invalid character {char!r} at position {position}")
        self.char = char
        self.position = position


def normalize_secret(text: str) -> str:
    """Clean up a secret as typed: trim, uppercase, drop grouping spaces."""
    return text.strip().upper().replace(" ", "")


def decode_base32_secret(text: str) -> bytes:
    """Decode a Base32 secret into raw key bytes.

    Args:
        text: Base32 text, padding optional

    Returns:
        Decoded key bytes

    Raises:
        InvalidLength: If the secret is empty or not a multiple of 8 chars
        InvalidCharacter: If a character outside A-Z2-7 remains
    """
    secret = text.upper()
    if not secret or len(secret) % 8:
        raise InvalidLength(
            f"Secret length must be a positive multiple of 8, got {len(secret)}"
        )

    secret = secret.rstrip(PADDING)
    if not secret:
        raise InvalidLength("Secret contains only padding")

    buffer = 0
    bits = 0
    output = bytearray()
    for position, char in enumerate(secret):
        value = _VALUES.get(char)
        if value is None:
            raise InvalidCharacter(char, position)
        buffer = (buffer << 5) | value
        bits += 5
        if bits >= 8:
            bits -= 8
            output.append((buffer >> bits) & 0xFF)
            # Keep only the bits not yet emitted
            buffer &= (1 << bits) - 1

    return bytes(output)


def is_valid_secret(text: str) -> bool:
    """Check if a secret decodes under the strict rules."""
    try:
        decode_base32_secret(text)
    except DecodeError:
        return False
    return True
