"""Constants and configuration for GUI."""

from pathlib import Path

from PyQt6.QtGui import QIcon

# Application info
APP_NAME = "Keyring Authenticator"
APP_ID = "com.github.keyring-authenticator"
VERSION = "1.0.0"

# Paths
RESOURCES_DIR = Path(__file__).parent / "resources"
ICONS_DIR = RESOURCES_DIR / "icons"

# Codes change every 30s; redraw often enough for the countdown
REFRESH_INTERVAL_MS = 1000


def get_icon(name: str) -> QIcon:
    """Get an icon from bundled resources or system theme.

    Args:
        name: Icon name (without extension)

    Returns:
        QIcon instance
    """
    # Try bundled resource
    for ext in (".svg", ".png"):
        path = ICONS_DIR / f"{name}{ext}"
        if path.exists():
            return QIcon(str(path))

    # Try system theme
    icon = QIcon.fromTheme(name)
    if not icon.isNull():
        return icon

    # Fallback mappings
    fallbacks = {
        "app-icon": "dialog-password",
        "edit-copy": "edit-copy-symbolic",
        "list-remove": "list-remove-symbolic",
    }

    if name in fallbacks:
        icon = QIcon.fromTheme(fallbacks[name])
        if not icon.isNull():
            return icon

    return QIcon()
