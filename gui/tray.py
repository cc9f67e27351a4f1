"""System tray icon and menu."""

import time
from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal
from PyQt6.QtWidgets import QMenu, QSystemTrayIcon

from core import PLACEHOLDER_CODE
from core.view import code_for

from .constants import APP_NAME, get_icon


class AuthenticatorTrayIcon(QObject):
    """System tray icon with per-account copy actions."""

    show_requested = pyqtSignal()
    add_requested = pyqtSignal()
    copy_requested = pyqtSignal(str, str)  # name, code
    quit_requested = pyqtSignal()

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)

        self.tray = QSystemTrayIcon(parent)
        self.tray.setToolTip(APP_NAME)
        self.tray.setIcon(get_icon("app-icon"))

        self._accounts: list = []

        self._setup_menu()

        # Click to show codes
        self.tray.activated.connect(self._on_activated)

    def _setup_menu(self):
        self.menu = QMenu()

        show_action = self.menu.addAction("Show Codes")
        show_action.triggered.connect(self.show_requested.emit)

        # Copy submenu, codes computed when opened
        self._copy_menu = self.menu.addMenu("Copy Code")
        self._copy_menu.aboutToShow.connect(self._fill_copy_menu)
        self._copy_menu.setEnabled(False)

        self.menu.addSeparator()

        add_action = self.menu.addAction("Add Account...")
        add_action.triggered.connect(self.add_requested.emit)

        self.menu.addSeparator()

        quit_action = self.menu.addAction("Quit")
        quit_action.triggered.connect(self.quit_requested.emit)

        self.tray.setContextMenu(self.menu)

    def _on_activated(self, reason: QSystemTrayIcon.ActivationReason):
        if reason in (
                QSystemTrayIcon.ActivationReason.Trigger,
                QSystemTrayIcon.ActivationReason.DoubleClick,
        ):
            self.show_requested.emit()

    def update_accounts(self, accounts: list):
        """Update copy menu contents."""
        self._accounts = accounts
        self._copy_menu.setEnabled(bool(accounts))

    def _fill_copy_menu(self):
        self._copy_menu.clear()
        now = time.time()
        for account in self._accounts:
            name = account["name"]
            code = code_for(account, now)
            action = self._copy_menu.addAction(f"{name}  {code}")
            action.setEnabled(code != PLACEHOLDER_CODE)
            action.triggered.connect(
                lambda checked, n=name, c=code: self.copy_requested.emit(n, c)
            )

    def show(self):
        self.tray.show()

    def hide(self):
        self.tray.hide()

    @staticmethod
    def is_system_tray_available() -> bool:
        return QSystemTrayIcon.isSystemTrayAvailable()
