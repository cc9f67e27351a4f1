"""Popup window listing accounts and their current codes."""

import time
from typing import Optional

from PyQt6.QtCore import QTimer, pyqtSignal
from PyQt6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QProgressBar,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from core import PAGE_SIZE, PLACEHOLDER_CODE, ViewState, delete_account, get_accounts, render
from core.totp import PERIOD

from .account_form import AddAccountDialog
from .constants import APP_NAME, REFRESH_INTERVAL_MS, get_icon


class AccountRowWidget(QWidget):
    """One account: name, code, copy and delete buttons."""

    copy_requested = pyqtSignal(str, str)  # name, code
    delete_requested = pyqtSignal(int, str)  # index, name

    def __init__(self, index: int, name: str, code: str, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.index = index
        self.name = name
        self.code = code

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 2, 0, 2)

        name_label = QLabel(name)
        name_label.setToolTip(name)
        layout.addWidget(name_label, 1)

        code_label = QLabel(f"<b>{code[:3]} {code[3:]}</b>")
        code_label.setStyleSheet("font-family: monospace; font-size: 16px;")
        layout.addWidget(code_label)

        copy_btn = QPushButton(get_icon("edit-copy"), "Copy")
        copy_btn.setEnabled(code != PLACEHOLDER_CODE)
        copy_btn.clicked.connect(lambda: self.copy_requested.emit(self.name, self.code))
        layout.addWidget(copy_btn)

        delete_btn = QPushButton(get_icon("list-remove"), "Delete")
        delete_btn.clicked.connect(lambda: self.delete_requested.emit(self.index, self.name))
        layout.addWidget(delete_btn)


class AccountsWindow(QWidget):
    """Window showing codes for the stored accounts."""

    accounts_changed = pyqtSignal()
    code_copied = pyqtSignal(str)  # account name
    error_occurred = pyqtSignal(str)  # message

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setWindowTitle(APP_NAME)
        self.setMinimumSize(460, 320)

        self._state = ViewState()
        self._accounts: list = []
        self._add_dialog: Optional[AddAccountDialog] = None

        self._setup_ui()

        self._refresh_timer = QTimer(self)
        self._refresh_timer.timeout.connect(self._on_tick)

        self.reload()

    def _setup_ui(self):
        layout = QVBoxLayout(self)

        # Search
        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("Search accounts...")
        self.search_edit.setClearButtonEnabled(True)
        self.search_edit.textChanged.connect(self._on_search_changed)
        layout.addWidget(self.search_edit)

        # Rows
        self._rows_widget = QWidget()
        self._rows_layout = QVBoxLayout(self._rows_widget)
        self._rows_layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self._rows_widget)
        layout.addStretch()

        # Countdown
        self.countdown = QProgressBar()
        self.countdown.setRange(0, PERIOD)
        self.countdown.setTextVisible(True)
        layout.addWidget(self.countdown)

        # Pager and add button
        bottom = QHBoxLayout()
        self.prev_btn = QPushButton("<")
        self.prev_btn.setFixedWidth(40)
        self.prev_btn.clicked.connect(lambda: self._go_to_page(self._state.page - 1))
        self.page_label = QLabel()
        self.next_btn = QPushButton(">")
        self.next_btn.setFixedWidth(40)
        self.next_btn.clicked.connect(lambda: self._go_to_page(self._state.page + 1))
        self.add_btn = QPushButton("Add Account")
        self.add_btn.clicked.connect(self.show_add_dialog)

        bottom.addWidget(self.prev_btn)
        bottom.addWidget(self.page_label)
        bottom.addWidget(self.next_btn)
        bottom.addStretch()
        bottom.addWidget(self.add_btn)
        layout.addLayout(bottom)

    def reload(self):
        """Re-read the account list from the keyring and redraw."""
        self._accounts = get_accounts()
        self._redraw()

    def start_refresh(self):
        self._refresh_timer.start(REFRESH_INTERVAL_MS)

    def stop_refresh(self):
        self._refresh_timer.stop()

    def showEvent(self, event):
        self.reload()
        self.start_refresh()
        super().showEvent(event)

    def hideEvent(self, event):
        self.stop_refresh()
        super().hideEvent(event)

    def _on_tick(self):
        self._redraw()

    def _on_search_changed(self, text: str):
        self._state = self._state.with_query(text)
        self._redraw()

    def _go_to_page(self, page: int):
        self._state = self._state.with_page(page)
        self._redraw()

    def _redraw(self):
        self._state = self._state.refreshed(time.time())
        view = render(self._accounts, self._state, PAGE_SIZE)
        # Keep the stored page in range after deletes or searches
        self._state = self._state.with_page(view.page)

        while self._rows_layout.count():
            item = self._rows_layout.takeAt(0)
            if item.widget():
                item.widget().deleteLater()

        if view.empty_message:
            label = QLabel(view.empty_message)
            label.setStyleSheet("color: gray;")
            self._rows_layout.addWidget(label)

        for row in view.rows:
            row_widget = AccountRowWidget(row.index, row.name, row.code)
            row_widget.copy_requested.connect(self._copy_code)
            row_widget.delete_requested.connect(self._delete_account)
            self._rows_layout.addWidget(row_widget)

        self.countdown.setValue(view.seconds_remaining)
        self.countdown.setFormat(f"{view.seconds_remaining}s")

        self.page_label.setText(f"Page {view.page + 1}/{view.page_count}")
        self.prev_btn.setEnabled(view.page > 0)
        self.next_btn.setEnabled(view.page < view.page_count - 1)

    def _copy_code(self, name: str, code: str):
        QApplication.clipboard().setText(code)
        self.code_copied.emit(name)

    def _delete_account(self, index: int, name: str):
        reply = QMessageBox.question(
            self, "Delete Account",
            f"Delete '{name}'? You will no longer get codes for it.",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        )
        if reply != QMessageBox.StandardButton.Yes:
            return

        if delete_account(index):
            self.reload()
            self.accounts_changed.emit()
        else:
            self.error_occurred.emit(f"Failed to delete '{name}' from the keyring")

    def show_add_dialog(self):
        if self._add_dialog is None:
            self._add_dialog = AddAccountDialog(self)
            self._add_dialog.account_added.connect(self._on_account_added)

        self._add_dialog.show()
        self._add_dialog.raise_()
        self._add_dialog.activateWindow()

    def _on_account_added(self, name: str):
        self.reload()
        self.accounts_changed.emit()
