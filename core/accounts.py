"""Account list storage via system keyring."""

import json
import logging
import os
from typing import Optional

import keyring
import pyotp
from keyring.errors import PasswordDeleteError

from .base32 import PADDING, decode_base32_secret, normalize_secret
from .totp import DIGITS, PERIOD

KEYRING_SERVICE = os.environ.get("KEYRING_AUTHENTICATOR_SERVICE", "keyring-authenticator")
ACCOUNTS_KEY = "accounts"

log = logging.getLogger(__name__)


def get_accounts() -> list:
    """Get all saved accounts, in display order.

    Returns:
        List of {"name": ..., "secret": ...} dicts
    """
    try:
        data = keyring.get_password(KEYRING_SERVICE, ACCOUNTS_KEY)
    except Exception as e:
        log.warning("Cannot read accounts from keyring: %s", e)
        return []

    if not data:
        return []

    try:
        accounts = json.loads(data)
    except ValueError as e:
        log.warning("Stored account list is corrupt: %s", e)
        return []

    if not isinstance(accounts, list):
        log.warning("Stored account list has unexpected type %s", type(accounts).__name__)
        return []

    return [
        {"name": str(a.get("name", "")), "secret": str(a.get("secret", ""))}
        for a in accounts
        if isinstance(a, dict)
    ]


def save_accounts(accounts: list) -> bool:
    """Replace the stored account list.

    Returns:
        True if saved successfully
    """
    try:
        keyring.set_password(KEYRING_SERVICE, ACCOUNTS_KEY, json.dumps(accounts))
    except Exception as e:
        log.error("Cannot save accounts to keyring: %s", e)
        return False
    return True


def add_account(name: str, secret: str) -> bool:
    """Validate and append an account.

    Args:
        name: Display name (e.g., "GitHub: alice")
        secret: Base32 secret from the provider's setup page

    Returns:
        True if saved successfully

    Raises:
        ValueError: If the name is empty
        DecodeError: If the secret is not valid Base32
    """
    name = name.strip()
    if not name:
        raise ValueError("Account name is required")

    secret = normalize_secret(secret)
    decode_base32_secret(secret)

    accounts = get_accounts()
    accounts.append({"name": name, "secret": secret})
    if save_accounts(accounts):
        log.info("Added account '%s'", name)
        return True
    return False


def parse_otpauth_uri(uri: str) -> tuple:
    """Extract (name, secret) from an otpauth:// TOTP URI.

    Raises:
        ValueError: If the URI is malformed or uses unsupported parameters
    """
    otp = pyotp.parse_uri(uri.strip())
    if not isinstance(otp, pyotp.TOTP):
        raise ValueError("Only TOTP URIs are supported")
    if otp.digest().name != "sha1":
        raise ValueError(f"Unsupported algorithm: {otp.digest().name}")
    if otp.digits != DIGITS:
        raise ValueError(f"Unsupported digit count: {otp.digits}")
    if otp.interval != PERIOD:
        raise ValueError(f"Unsupported period: {otp.interval}")

    label = otp.name or ""
    if otp.issuer and not label.startswith(otp.issuer):
        label = f"{otp.issuer}: {label}" if label else otp.issuer

    # URIs carry unpadded secrets
    secret = normalize_secret(otp.secret)
    secret += PADDING * (-len(secret) % 8)
    return label, secret


def add_account_from_uri(uri: str) -> bool:
    """Append an account described by an otpauth:// URI.

    Raises:
        ValueError: If the URI is unsupported or carries no name
        DecodeError: If the embedded secret is not valid Base32
    """
    name, secret = parse_otpauth_uri(uri)
    return add_account(name, secret)


def delete_account(index: int) -> bool:
    """Delete the account at a position in the list.

    Returns:
        True if deleted
    """
    accounts = get_accounts()
    if not 0 <= index < len(accounts):
        return False
    removed = accounts.pop(index)
    if save_accounts(accounts):
        log.info("Deleted account '%s'", removed["name"])
        return True
    return False


def delete_all() -> bool:
    """Remove the whole account list from the keyring."""
    try:
        keyring.delete_password(KEYRING_SERVICE, ACCOUNTS_KEY)
    except PasswordDeleteError:
        pass
    except Exception as e:
        log.error("Cannot delete accounts from keyring: %s", e)
        return False
    return True


def find_account(name: str) -> Optional[dict]:
    """Get the first account with a given name."""
    for account in get_accounts():
        if account["name"] == name:
            return account
    return None


def new_secret() -> str:
    """Generate a random Base32 secret (32 chars, 160 bits)."""
    return pyotp.random_base32()
