"""Services package initialization."""

from notepad.services.logs import configure_logging, get_log_file_path, get_logger

__all__ = [
    "configure_logging",
    "get_log_file_path",
    "get_logger",
]
