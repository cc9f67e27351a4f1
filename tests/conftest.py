"""Shared fixtures."""

import pytest
from keyring.errors import KeyringError, PasswordDeleteError


class FakeKeyring:
    """In-memory stand-in for the system keyring."""

    def __init__(self):
        self.passwords = {}
        self.fail = False
        self.failure = KeyringError("keyring locked")

    def get_password(self, service, username):
        if self.fail:
            raise self.failure
        return self.passwords.get((service, username))

    def set_password(self, service, username, password):
        if self.fail:
            raise self.failure
        self.passwords[(service, username)] = password

    def delete_password(self, service, username):
        if self.fail:
            raise self.failure
        if (service, username) not in self.passwords:
            raise PasswordDeleteError("not found")
        del self.passwords[(service, username)]


@pytest.fixture
def fake_keyring(monkeypatch):
    fake = FakeKeyring()
    monkeypatch.setattr("core.accounts.keyring.get_password", fake.get_password)
    monkeypatch.setattr("core.accounts.keyring.set_password", fake.set_password)
    monkeypatch.setattr("core.accounts.keyring.delete_password", fake.delete_password)
    return fake
