"""TOTP code generation (RFC 6238, HMAC-SHA1)."""

import hashlib
import hmac
import logging
import struct
import time
from typing import Optional, Union

from .base32 import DecodeError, decode_base32_secret

PERIOD = 30
DIGITS = 6

log = logging.getLogger(__name__)

Timestamp = Union[int, float]


class GenerationError(Exception):
    """TOTP code could not be generated."""
    pass


class KeyImportFailed(GenerationError):
    """HMAC rejected the key."""
    pass


def time_step(unix_time: Timestamp) -> int:
    """Get the 30-second window counter for a Unix time."""
    if unix_time < 0:
        raise ValueError(f"Unix time must not be negative: {unix_time}")
    return int(unix_time // PERIOD)


def seconds_remaining(unix_time: Timestamp) -> int:
    """Get the whole seconds left before the current code expires."""
    return PERIOD - int(unix_time % PERIOD)


def _truncate(digest: bytes) -> int:
    offset = digest[-1] & 0x0F
    return struct.unpack(">I", digest[offset:offset + 4])[0] & 0x7FFFFFFF


def generate_code(key: bytes, unix_time: Timestamp) -> str:
    """Generate the TOTP code for raw key bytes at a given time.

    Args:
        key: Decoded shared secret
        unix_time: Seconds since the epoch

    Returns:
        6-digit code, zero-padded

    Raises:
        KeyImportFailed: If the key is not usable as an HMAC key
        ValueError: If unix_time is negative
    """
    msg = struct.pack(">Q", time_step(unix_time))
    try:
        mac = hmac.new(key, msg, hashlib.sha1)
    except TypeError as e:
        raise KeyImportFailed(f"Cannot use key for HMAC-SHA1: {e}") from e
    code = _truncate(mac.digest()) % (10 ** DIGITS)
    return str(code).zfill(DIGITS)


def compute_totp(secret: str, unix_time: Timestamp) -> str:
    """Decode a Base32 secret and generate its code at a given time.

    Raises:
        DecodeError: If the secret is not valid Base32
        KeyImportFailed: If the decoded key is rejected
    """
    return generate_code(decode_base32_secret(secret), unix_time)


def generate_totp(secret: str, now: Optional[Timestamp] = None) -> str:
    """Generate current TOTP code from secret."""
    if now is None:
        now = time.time()
    return compute_totp(secret, now)


def validate_secret(secret: str) -> bool:
    """Check if a TOTP secret can produce codes.

    Args:
        secret: Base32-encoded TOTP secret

    Returns:
        True if valid
    """
    try:
        generate_totp(secret)
    except (DecodeError, GenerationError) as e:
        log.debug("Secret rejected: %s", e)
        return False
    return True
