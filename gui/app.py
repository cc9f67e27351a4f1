"""Main GUI application."""

import argparse
import logging
import sys
from typing import Optional

from PyQt6.QtWidgets import QApplication, QMessageBox

from core import get_accounts
from core.platform import setup_logging

from .account_form import AddAccountDialog
from .accounts_window import AccountsWindow
from .constants import APP_ID, APP_NAME, VERSION, get_icon
from .notifications import NotificationManager
from .tray import AuthenticatorTrayIcon

log = logging.getLogger(__name__)


class AuthenticatorApplication:
    """Main authenticator application controller."""

    def __init__(self, argv: Optional[list] = None):
        self.app = QApplication(argv if argv is not None else sys.argv)

        # Application metadata
        self.app.setApplicationName(APP_NAME)
        self.app.setApplicationDisplayName(APP_NAME)
        self.app.setApplicationVersion(VERSION)
        self.app.setDesktopFileName(APP_ID)

        # Icon
        app_icon = get_icon("app-icon")
        if not app_icon.isNull():
            self.app.setWindowIcon(app_icon)

        self._has_tray = AuthenticatorTrayIcon.is_system_tray_available()
        # Without a tray the window is the only way back in
        self.app.setQuitOnLastWindowClosed(not self._has_tray)

        self.window = AccountsWindow()
        self.window.accounts_changed.connect(self._update_accounts_menu)

        # Create tray
        self.tray = AuthenticatorTrayIcon()
        self.notifications = NotificationManager(self.tray.tray)

        # Connect signals
        self.tray.show_requested.connect(self._show_window)
        self.tray.add_requested.connect(self._show_add_dialog)
        self.tray.copy_requested.connect(self._copy_code)
        self.tray.quit_requested.connect(self._quit)
        self.window.code_copied.connect(self.notifications.copied)
        self.window.error_occurred.connect(self._on_error)

        self._add_dialog: Optional[AddAccountDialog] = None

        self._update_accounts_menu()

    def run(self) -> int:
        """Run the application."""
        if self._has_tray:
            self.tray.show()
        else:
            log.warning("System tray not available, running as a window")

        # Show window on first start or when there is no tray to open it from
        if not self._has_tray or not get_accounts():
            self._show_window()

        return self.app.exec()

    def _update_accounts_menu(self):
        self.tray.update_accounts(get_accounts())

    def _show_window(self):
        self.window.show()
        self.window.raise_()
        self.window.activateWindow()

    def _show_add_dialog(self):
        if self._add_dialog is None:
            self._add_dialog = AddAccountDialog()
            self._add_dialog.account_added.connect(self._on_account_added)

        self._add_dialog.show()
        self._add_dialog.raise_()
        self._add_dialog.activateWindow()

    def _on_account_added(self, name: str):
        self.window.reload()
        self._update_accounts_menu()
        self.notifications.account_added(name)

    def _copy_code(self, name: str, code: str):
        QApplication.clipboard().setText(code)
        self.notifications.copied(name)

    def _on_error(self, message: str):
        log.error(message)
        if self._has_tray:
            self.notifications.error(message)
        else:
            QMessageBox.critical(self.window, "Error", message)

    def _quit(self):
        self.window.stop_refresh()
        self.tray.hide()
        self.app.quit()


def main() -> int:
    """Entry point."""
    parser = argparse.ArgumentParser(description=f"{APP_NAME} tray application")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args, qt_args = parser.parse_known_args()

    setup_logging(debug=args.debug)

    app = AuthenticatorApplication([sys.argv[0]] + qt_args)
    return app.run()


if __name__ == "__main__":
    sys.exit(main())
