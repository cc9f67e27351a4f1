"""Add-account form widget."""

import time
from typing import Optional

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from core import (
    DecodeError,
    add_account,
    add_account_from_uri,
    compute_totp,
    normalize_secret,
    parse_otpauth_uri,
)

from .constants import APP_NAME

OTPAUTH_PREFIX = "otpauth://"


class AccountForm(QWidget):
    """Widget for entering a new account."""

    saved = pyqtSignal(str)  # account name
    cancelled = pyqtSignal()

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._setup_ui()

    def _setup_ui(self):
        layout = QFormLayout(self)
        layout.setContentsMargins(10, 10, 10, 10)
        layout.setSpacing(10)

        # Account name
        self.name_edit = QLineEdit()
        self.name_edit.setPlaceholderText("e.g., GitHub: alice")
        layout.addRow("Account Name:", self.name_edit)

        # Secret with show/hide
        self.secret_edit = QLineEdit()
        self.secret_edit.setEchoMode(QLineEdit.EchoMode.Password)
        self.secret_edit.setPlaceholderText("Base32 secret or otpauth:// URI")
        self.secret_edit.textChanged.connect(self._on_secret_changed)
        self._secret_visible = False
        self.toggle_secret_btn = QPushButton("Show")
        self.toggle_secret_btn.setFixedWidth(60)
        self.toggle_secret_btn.clicked.connect(self._toggle_secret)

        secret_layout = QHBoxLayout()
        secret_layout.addWidget(self.secret_edit)
        secret_layout.addWidget(self.toggle_secret_btn)
        layout.addRow("Secret:", secret_layout)

        # Secret test
        test_layout = QHBoxLayout()
        self.test_btn = QPushButton("Test Secret")
        self.test_btn.clicked.connect(self._test_secret)
        self.result_label = QLabel()
        test_layout.addWidget(self.test_btn)
        test_layout.addWidget(self.result_label)
        test_layout.addStretch()
        layout.addRow("", test_layout)

        # Buttons
        btn_layout = QHBoxLayout()
        self.cancel_btn = QPushButton("Cancel")
        self.cancel_btn.clicked.connect(self._cancel)
        self.save_btn = QPushButton("Save")
        self.save_btn.setDefault(True)
        self.save_btn.clicked.connect(self._save)
        btn_layout.addStretch()
        btn_layout.addWidget(self.cancel_btn)
        btn_layout.addWidget(self.save_btn)
        layout.addRow("", btn_layout)

    def _toggle_secret(self):
        self._secret_visible = not self._secret_visible
        mode = QLineEdit.EchoMode.Normal if self._secret_visible else QLineEdit.EchoMode.Password
        self.secret_edit.setEchoMode(mode)
        self.toggle_secret_btn.setText("Hide" if self._secret_visible else "Show")

    def _is_uri(self) -> bool:
        return self.secret_edit.text().strip().lower().startswith(OTPAUTH_PREFIX)

    def _on_secret_changed(self):
        self.result_label.clear()
        # URIs carry their own label
        self.name_edit.setEnabled(not self._is_uri())

    def _current_secret(self) -> str:
        text = self.secret_edit.text().strip()
        if self._is_uri():
            return parse_otpauth_uri(text)[1]
        return normalize_secret(text)

    def _test_secret(self):
        if not self.secret_edit.text().strip():
            self.result_label.setText("No secret entered")
            self.result_label.setStyleSheet("color: orange;")
            return

        try:
            code = compute_totp(self._current_secret(), time.time())
        except ValueError as e:
            self.result_label.setText(f"Invalid: {e}")
            self.result_label.setStyleSheet("color: red;")
            return

        self.result_label.setText(f"Current code: {code}")
        self.result_label.setStyleSheet("color: green;")

    def clear(self):
        """Clear all fields."""
        self.name_edit.clear()
        self.name_edit.setEnabled(True)
        self.secret_edit.clear()
        self.result_label.clear()
        self.name_edit.setFocus()

    def _cancel(self):
        self.clear()
        self.cancelled.emit()

    def _save(self):
        text = self.secret_edit.text().strip()
        if not text:
            QMessageBox.warning(self, "Validation Error", "Secret is required")
            return

        try:
            if self._is_uri():
                name = parse_otpauth_uri(text)[0]
                saved = add_account_from_uri(text)
            else:
                name = self.name_edit.text().strip()
                saved = add_account(name, text)
        except DecodeError as e:
            QMessageBox.warning(self, "Invalid Secret", f"The secret is not valid Base32.\n\n{e}")
            return
        except ValueError as e:
            QMessageBox.warning(self, "Validation Error", str(e))
            return

        if not saved:
            QMessageBox.critical(self, "Error", f"Failed to save '{name}' to the keyring")
            return

        self.clear()
        self.saved.emit(name)


class AddAccountDialog(QDialog):
    """Dialog wrapping AccountForm."""

    account_added = pyqtSignal(str)

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setWindowTitle(f"{APP_NAME} - Add Account")
        self.setMinimumWidth(420)

        layout = QVBoxLayout(self)
        layout.addWidget(QLabel("<b>Add Account</b>"))

        self.form = AccountForm()
        self.form.saved.connect(self._on_saved)
        self.form.cancelled.connect(self.reject)
        layout.addWidget(self.form)

    def _on_saved(self, name: str):
        self.account_added.emit(name)
        self.accept()
