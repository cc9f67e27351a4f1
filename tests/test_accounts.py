"""Tests for keyring account storage."""

import json

import pytest

from core.accounts import (
    ACCOUNTS_KEY,
    KEYRING_SERVICE,
    add_account,
    add_account_from_uri,
    delete_account,
    delete_all,
    find_account,
    get_accounts,
    new_secret,
    parse_otpauth_uri,
    save_accounts,
)
from core.base32 import DecodeError, InvalidCharacter, decode_base32_secret


def _stored(fake_keyring):
    return fake_keyring.passwords.get((KEYRING_SERVICE, ACCOUNTS_KEY))


class TestGetAccounts:
    """Tests for reading the account list."""

    def test_empty_keyring(self, fake_keyring):
        assert get_accounts() == []

    def test_reads_json_list(self, fake_keyring):
        fake_keyring.passwords[(KEYRING_SERVICE, ACCOUNTS_KEY)] = json.dumps(
            [{"name": "GitHub", "secret": "JBSWY3DPEHPK3PXP"}]
        )
        assert get_accounts() == [{"name": "GitHub", "secret": "JBSWY3DPEHPK3PXP"}]

    def test_corrupt_json(self, fake_keyring):
        fake_keyring.passwords[(KEYRING_SERVICE, ACCOUNTS_KEY)] = "{not json"
        assert get_accounts() == []

    def test_unexpected_type(self, fake_keyring):
        fake_keyring.passwords[(KEYRING_SERVICE, ACCOUNTS_KEY)] = json.dumps({"a": 1})
        assert get_accounts() == []

    def test_keyring_error(self, fake_keyring):
        fake_keyring.fail = True
        assert get_accounts() == []

    def test_backend_error(self, fake_keyring):
        """Test that non-keyring backend failures are logged, not raised."""
        fake_keyring.fail = True
        fake_keyring.failure = RuntimeError("org.freedesktop.DBus.Error.ServiceUnknown")
        assert get_accounts() == []


class TestAddAccount:
    """Tests for adding accounts."""

    def test_add_appends_in_order(self, fake_keyring):
        assert add_account("GitHub", "JBSWY3DPEHPK3PXP")
        assert add_account("Mail", "MZXW6YTBOI======")
        assert [a["name"] for a in get_accounts()] == ["GitHub", "Mail"]

    def test_secret_normalized(self, fake_keyring):
        add_account("  GitHub  ", "jbsw y3dp ehpk 3pxp")
        assert json.loads(_stored(fake_keyring)) == [
            {"name": "GitHub", "secret": "JBSWY3DPEHPK3PXP"}
        ]

    def test_secret_trimmed(self, fake_keyring):
        add_account("GitHub", "MZXW6===\t\n")
        assert get_accounts() == [{"name": "GitHub", "secret": "MZXW6==="}]

    def test_invalid_secret_not_saved(self, fake_keyring):
        with pytest.raises(InvalidCharacter):
            add_account("GitHub", "JBSWY3DPEHPK3PX1")
        assert _stored(fake_keyring) is None

    def test_short_secret_not_saved(self, fake_keyring):
        with pytest.raises(DecodeError):
            add_account("GitHub", "JBSWY")
        assert get_accounts() == []

    def test_name_required(self, fake_keyring):
        with pytest.raises(ValueError, match="name is required"):
            add_account("   ", "JBSWY3DPEHPK3PXP")

    def test_duplicate_names_allowed(self, fake_keyring):
        add_account("Work", "JBSWY3DPEHPK3PXP")
        add_account("Work", "MZXW6YTBOI======")
        assert len(get_accounts()) == 2

    def test_save_failure(self, fake_keyring, monkeypatch):
        monkeypatch.setattr("core.accounts.save_accounts", lambda accounts: False)
        assert not add_account("GitHub", "JBSWY3DPEHPK3PXP")


class TestDeleteAccount:
    """Tests for positional deletion."""

    def test_delete_by_index(self, fake_keyring):
        save_accounts([
            {"name": "a", "secret": "JBSWY3DPEHPK3PXP"},
            {"name": "b", "secret": "JBSWY3DPEHPK3PXP"},
            {"name": "c", "secret": "JBSWY3DPEHPK3PXP"},
        ])
        assert delete_account(1)
        assert [a["name"] for a in get_accounts()] == ["a", "c"]

    @pytest.mark.parametrize("index", [-1, 1, 5])
    def test_out_of_range(self, fake_keyring, index):
        save_accounts([{"name": "a", "secret": "JBSWY3DPEHPK3PXP"}])
        assert not delete_account(index)
        assert len(get_accounts()) == 1

    def test_delete_all(self, fake_keyring):
        add_account("a", "JBSWY3DPEHPK3PXP")
        assert delete_all()
        assert get_accounts() == []

    def test_delete_all_when_empty(self, fake_keyring):
        assert delete_all()

    def test_delete_all_keyring_error(self, fake_keyring):
        fake_keyring.fail = True
        assert not delete_all()


class TestSaveAccounts:
    """Tests for writing the account list."""

    def test_keyring_error(self, fake_keyring):
        fake_keyring.fail = True
        assert not save_accounts([])

    def test_backend_error(self, fake_keyring):
        fake_keyring.fail = True
        fake_keyring.failure = RuntimeError("secret service unavailable")
        assert not save_accounts([])
        assert not delete_all()


class TestOtpauthUri:
    """Tests for otpauth:// import."""

    def test_parse_with_issuer(self):
        name, secret = parse_otpauth_uri(
            "otpauth://totp/GitHub:alice?secret=JBSWY3DPEHPK3PXP&issuer=GitHub"
        )
        assert name == "GitHub: alice"
        assert secret == "JBSWY3DPEHPK3PXP"

    def test_parse_without_issuer(self):
        name, _ = parse_otpauth_uri("otpauth://totp/alice?secret=JBSWY3DPEHPK3PXP")
        assert name == "alice"

    def test_unpadded_secret_padded(self):
        _, secret = parse_otpauth_uri("otpauth://totp/x?secret=MZXW6")
        assert secret == "MZXW6==="
        assert decode_base32_secret(secret) == b"foo"

    @pytest.mark.parametrize(
        "uri",
        [
            "otpauth://totp/x?secret=JBSWY3DPEHPK3PXP&algorithm=SHA256",
            "otpauth://totp/x?secret=JBSWY3DPEHPK3PXP&digits=8",
            "otpauth://totp/x?secret=JBSWY3DPEHPK3PXP&period=60",
            "otpauth://hotp/x?secret=JBSWY3DPEHPK3PXP&counter=0",
            "https://example.com/",
        ],
    )
    def test_unsupported(self, uri):
        with pytest.raises(ValueError):
            parse_otpauth_uri(uri)

    def test_add_from_uri(self, fake_keyring):
        assert add_account_from_uri(
            "otpauth://totp/GitHub:alice?secret=JBSWY3DPEHPK3PXP&issuer=GitHub"
        )
        assert get_accounts() == [{"name": "GitHub: alice", "secret": "JBSWY3DPEHPK3PXP"}]


class TestHelpers:
    """Tests for lookup and secret generation."""

    def test_find_account(self, fake_keyring):
        add_account("GitHub", "JBSWY3DPEHPK3PXP")
        assert find_account("GitHub")["secret"] == "JBSWY3DPEHPK3PXP"
        assert find_account("Missing") is None

    def test_new_secret_is_valid(self):
        secret = new_secret()
        assert len(secret) == 32
        assert len(decode_base32_secret(secret)) == 20
