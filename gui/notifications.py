"""Desktop notifications via system tray."""

from PyQt6.QtWidgets import QSystemTrayIcon


class NotificationManager:
    """Shows tray balloons for copy, add and error events."""

    def __init__(self, tray_icon: QSystemTrayIcon):
        self.tray = tray_icon

    def show(
            self,
            title: str,
            message: str,
            critical: bool = False,
            duration_ms: int = 3000,
    ):
        """Show a notification if the tray icon is visible."""
        if not self.tray.isVisible():
            return

        icon = (
            QSystemTrayIcon.MessageIcon.Critical if critical
            else QSystemTrayIcon.MessageIcon.Information
        )
        self.tray.showMessage(title, message, icon, duration_ms)

    def copied(self, name: str):
        self.show("Code Copied", f"Code for {name} copied to clipboard")

    def account_added(self, name: str):
        self.show("Account Added", f"{name} is ready")

    def error(self, message: str, title: str = "Authenticator Error"):
        self.show(title, message, critical=True, duration_ms=8000)
