#!/usr/bin/env python3
"""
Keyring Authenticator - TOTP codes from the command line

Generates RFC 6238 one-time codes for accounts whose Base32 secrets are
kept in the system keyring.

Features:
- Multiple accounts (listed in the order they were added)
- Secrets stored in GNOME Keyring / KWallet / macOS Keychain
- Secrets validated before they are saved
- Accounts importable from otpauth:// URIs
- Search and paging for long lists
- Live view refreshing every second

Usage:
    ./authenticator.py                      (show codes for all accounts)
    ./authenticator.py --search github      (show matching accounts)
    ./authenticator.py --add NAME           (add account, prompts for secret)
    ./authenticator.py --uri 'otpauth://..' (add account from URI)
    ./authenticator.py --delete 2           (delete account #2 as listed)
    ./authenticator.py --code NAME          (print one code, for scripts)
    ./authenticator.py --watch              (refresh every second)
"""

import argparse
import getpass
import logging
import sys
import time

from core import (
    DecodeError,
    PAGE_SIZE,
    ViewState,
    add_account,
    add_account_from_uri,
    compute_totp,
    delete_account,
    delete_all,
    find_account,
    get_accounts,
    new_secret,
    normalize_secret,
    render,
)
from core.platform import setup_logging

# Colors
GREEN = "\033[32m"
RED = "\033[31m"
YELLOW = "\033[33m"
CYAN = "\033[36m"
BOLD = "\033[1m"
NC = "\033[0m"

CLEAR_SCREEN = "\033[2J\033[H"
REFRESH_INTERVAL = 1.0

log = logging.getLogger(__name__)


def print_header():
    print(f"{GREEN}========================================{NC}")
    print(f"{GREEN}    Keyring Authenticator - TOTP Codes{NC}")
    print(f"{GREEN}========================================{NC}")
    print()


def show_codes(state: ViewState, page_size: int = PAGE_SIZE):
    """Print the codes visible for a view state."""
    view = render(get_accounts(), state, page_size)

    if view.empty_message:
        print(f"{YELLOW}{view.empty_message}{NC}")
        return

    for row in view.rows:
        print(f"  {row.index + 1:>3}) {BOLD}{row.code}{NC}  {row.name}")

    print()
    footer = f"Expires in {view.seconds_remaining:>2}s"
    if view.page_count > 1:
        footer += f"   Page {view.page + 1}/{view.page_count}"
    print(f"{CYAN}{footer}{NC}")


def watch_codes(state: ViewState, page_size: int = PAGE_SIZE):
    """Redraw codes every second until interrupted."""
    try:
        while True:
            print(CLEAR_SCREEN, end="")
            print_header()
            show_codes(state.refreshed(time.time()), page_size)
            print(f"\n{CYAN}Press Ctrl+C to quit.{NC}")
            time.sleep(REFRESH_INTERVAL)
    except KeyboardInterrupt:
        print()


def add_interactive(name: str, secret: str = None) -> bool:
    """Add an account, prompting for the secret if not given."""
    if not secret:
        print(f"{CYAN}Enter the Base32 secret from the provider's 2FA setup page.{NC}")
        secret = getpass.getpass("Secret (hidden): ")

    try:
        saved = add_account(name, secret)
    except DecodeError as e:
        print(f"{RED}Invalid secret: {e}{NC}")
        return False
    except ValueError as e:
        print(f"{RED}Error: {e}{NC}")
        return False

    if not saved:
        print(f"{RED}Failed to save account to keyring.{NC}")
        return False

    code = compute_totp(normalize_secret(secret), time.time())
    print(f"{GREEN}Account '{name.strip()}' saved. Current code: {code}{NC}")
    return True


def add_from_uri(uri: str) -> bool:
    """Add an account from an otpauth:// URI."""
    try:
        saved = add_account_from_uri(uri)
    except ValueError as e:
        # DecodeError is a ValueError too
        print(f"{RED}Cannot import URI: {e}{NC}")
        return False

    if not saved:
        print(f"{RED}Failed to save account to keyring.{NC}")
        return False

    print(f"{GREEN}Account '{get_accounts()[-1]['name']}' saved.{NC}")
    return True


def delete_interactive(number: int) -> bool:
    """Delete an account by the 1-based number shown in the list."""
    accounts = get_accounts()
    if not 1 <= number <= len(accounts):
        print(f"{YELLOW}No account #{number}.{NC}")
        return False

    name = accounts[number - 1]["name"]
    if delete_account(number - 1):
        print(f"{GREEN}Account '{name}' deleted.{NC}")
        return True
    print(f"{RED}Failed to delete account '{name}'.{NC}")
    return False


def print_code(name: str) -> bool:
    """Print only the current code for an account."""
    account = find_account(name)
    if not account:
        print(f"{RED}Account '{name}' not found.{NC}", file=sys.stderr)
        return False

    try:
        print(compute_totp(account["secret"], time.time()))
    except DecodeError as e:
        print(f"{RED}Stored secret for '{name}' is invalid: {e}{NC}", file=sys.stderr)
        return False
    return True


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="TOTP authenticator with secrets stored in the system keyring"
    )
    parser.add_argument("--list", "-l", action="store_true", help="Show codes (default)")
    parser.add_argument("--search", "-q", default="", help="Only show accounts whose name contains this")
    parser.add_argument("--page", "-p", type=int, default=1, help="Page to show")
    parser.add_argument("--add", "-a", metavar="NAME", help="Add account with this name")
    parser.add_argument("--secret", help="Base32 secret for --add (prompted if omitted)")
    parser.add_argument("--uri", help="Add account from an otpauth:// URI")
    parser.add_argument("--delete", type=int, metavar="NUMBER", help="Delete account by list number")
    parser.add_argument("--delete-all", action="store_true", help="Delete all accounts")
    parser.add_argument("--code", "-c", metavar="NAME", help="Print only the code for an account")
    parser.add_argument("--watch", "-w", action="store_true", help="Refresh codes every second")
    parser.add_argument("--new-secret", action="store_true", help="Print a random Base32 secret")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    setup_logging(debug=args.debug)

    if args.code:
        if not print_code(args.code):
            sys.exit(1)
        return

    if args.new_secret:
        print(new_secret())
        return

    print_header()

    if args.add:
        if not add_interactive(args.add, args.secret):
            sys.exit(1)
        return

    if args.uri:
        if not add_from_uri(args.uri):
            sys.exit(1)
        return

    if args.delete is not None:
        if not delete_interactive(args.delete):
            sys.exit(1)
        return

    if args.delete_all:
        if delete_all():
            print(f"{GREEN}All accounts deleted.{NC}")
        else:
            print(f"{RED}Error deleting accounts.{NC}")
            sys.exit(1)
        return

    state = ViewState(page=args.page - 1, query=args.search)

    if args.watch:
        watch_codes(state)
        return

    show_codes(state.refreshed(time.time()))


if __name__ == "__main__":
    main()
