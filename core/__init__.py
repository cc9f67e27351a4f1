"""Keyring Authenticator - Core library.

TOTP codec, keyring-backed account list and view rendering shared by the
CLI and the GUI.
"""

from .base32 import (
    DecodeError,
    InvalidCharacter,
    InvalidLength,
    decode_base32_secret,
    is_valid_secret,
    normalize_secret,
)
from .totp import (
    GenerationError,
    KeyImportFailed,
    compute_totp,
    generate_code,
    generate_totp,
    seconds_remaining,
    time_step,
    validate_secret,
)
from .accounts import (
    get_accounts,
    save_accounts,
    add_account,
    add_account_from_uri,
    parse_otpauth_uri,
    delete_account,
    delete_all,
    find_account,
    new_secret,
)
from .view import (
    PAGE_SIZE,
    PLACEHOLDER_CODE,
    AccountRow,
    RenderedView,
    ViewState,
    filter_accounts,
    render,
)

__all__ = [
    # Base32
    "DecodeError",
    "InvalidCharacter",
    "InvalidLength",
    "decode_base32_secret",
    "is_valid_secret",
    "normalize_secret",
    # TOTP
    "GenerationError",
    "KeyImportFailed",
    "compute_totp",
    "generate_code",
    "generate_totp",
    "seconds_remaining",
    "time_step",
    "validate_secret",
    # Accounts
    "get_accounts",
    "save_accounts",
    "add_account",
    "add_account_from_uri",
    "parse_otpauth_uri",
    "delete_account",
    "delete_all",
    "find_account",
    "new_secret",
    # View
    "PAGE_SIZE",
    "PLACEHOLDER_CODE",
    "AccountRow",
    "RenderedView",
    "ViewState",
    "filter_accounts",
    "render",
]
