"""Keyring Authenticator - PyQt6 tray application."""
