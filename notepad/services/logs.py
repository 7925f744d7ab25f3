"""
Logging for Notepad.

Everything goes through structlog, rendered by standard library handlers: one
JSON line per event in a rotating file under the data directory, and a
human-readable copy on stdout while debugging.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Final

import structlog

from notepad.utils import get_app_data_path, is_truthy

#: File name of the current log inside the ``logs`` directory.
LOG_FILE_NAME: Final[str] = "notepad.log.json"
#: Start a new log file every this many days.
ROTATE_EVERY_DAYS: Final[int] = 21
#: Number of rotated log files to keep.
ROTATED_FILES_KEPT: Final[int] = 5

#: Processors applied to every event before it reaches a handler.
EVENT_PROCESSORS: Final = (
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
)


def get_log_dir(data_dir: Path | None = None) -> Path:
    """
    Get the log directory, creating it if needed.

    Keyword Args:
        data_dir: Application data directory; defaults to the per-platform one

    """
    log_dir = (data_dir or get_app_data_path()) / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def get_log_file_path(data_dir: Path | None = None) -> Path:
    """
    Get the path of the log file currently being written.
    """
    return get_log_dir(data_dir) / LOG_FILE_NAME


def file_handler(log_file: Path) -> logging.Handler:
    """
    Build the rotating JSON-lines handler for ``log_file``.
    """
    handler = logging.handlers.TimedRotatingFileHandler(
        log_file,
        when="D",
        interval=ROTATE_EVERY_DAYS,
        backupCount=ROTATED_FILES_KEPT,
        encoding="utf-8",
    )
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer()
        )
    )
    return handler


def console_handler() -> logging.Handler:
    """
    Build the coloured stdout handler used while debugging.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=structlog.dev.ConsoleRenderer())
    )
    return handler


def configure_logging(
    data_dir: Path | None = None,
    console: bool | None = None,  # noqa: FBT001
) -> None:
    """
    Route structlog and standard logging to the Notepad handlers.

    Calling this again replaces the handlers installed by an earlier call.

    Keyword Args:
        data_dir: Application data directory; defaults to the per-platform one
        console: Also log to stdout.  When ``None``, log to stdout only if
            ``NOTEPAD_DEBUG`` is set

    """
    if console is None:
        console = is_truthy(os.environ.get("NOTEPAD_DEBUG", ""))

    handlers = [file_handler(get_log_file_path(data_dir))]
    if console:
        handlers.append(console_handler())
    logging.basicConfig(handlers=handlers, level=logging.INFO, force=True)

    # Request lines from the development server
    logging.getLogger("werkzeug").setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            *EVENT_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structlog logger, named after the calling module by convention.
    """
    return structlog.get_logger(name)
