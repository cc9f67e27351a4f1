"""Per-user paths and logging setup."""

import logging
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "keyring-authenticator"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def get_log_file() -> Path:
    """Get the user log file path, creating its directory."""
    log_dir = Path(user_log_dir(APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / f"{APP_NAME}.log"


def setup_logging(debug: bool = False, log_to_file: bool = True):
    """Configure root logging for an entry point.

    Args:
        debug: Log at DEBUG instead of WARNING on the console
        log_to_file: Also append INFO and above to the user log file
    """
    level = logging.DEBUG if debug else logging.WARNING
    console = logging.StreamHandler()
    console.setLevel(level)
    handlers: list[logging.Handler] = [console]

    file_error = None
    if log_to_file:
        try:
            file_handler = logging.FileHandler(get_log_file())
        except OSError as e:
            file_error = e
        else:
            file_handler.setLevel(logging.DEBUG if debug else logging.INFO)
            handlers.append(file_handler)

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )

    if file_error:
        logging.getLogger(__name__).warning("Cannot open log file: %s", file_error)
