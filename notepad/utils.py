"""Utility functions for Notepad."""

import os
import sys
from datetime import UTC, datetime
from pathlib import Path


def get_app_data_path() -> Path:
    """
    Get the application data directory.

    - If ``NOTEPAD_DATA_DIR`` is set, use it.
    - On Windows, use ``AppData/Local/notepad``.
    - On macOS, use ``~/Library/Application Support/notepad``.
    - On Linux, use ``~/.config/notepad``.
    - If the platform is not supported, raise a ValueError.

    Returns:
        Path to the (existing) application data directory

    """
    override = os.environ.get("NOTEPAD_DATA_DIR")
    if override:
        data_path = Path(override)
    elif sys.platform == "win32":
        data_path = Path.home() / "AppData" / "Local" / "notepad"
    elif sys.platform == "darwin":
        data_path = Path.home() / "Library" / "Application Support" / "notepad"
    elif sys.platform == "linux":
        data_path = Path.home() / ".config" / "notepad"
    else:
        msg = f"Unsupported platform: {sys.platform}"
        raise ValueError(msg)
    data_path.mkdir(parents=True, exist_ok=True)
    return data_path


def utc_now() -> datetime:
    """
    Get the current time as a timezone-aware UTC datetime.

    Returns:
        Current UTC datetime

    """
    return datetime.now(UTC)


def to_utc_iso(dt: datetime | None) -> str | None:
    """
    Convert datetime to UTC ISO format string.

    Args:
        dt: Datetime object to convert, or None

    Returns:
        ISO format string with UTC timezone, or None

    """
    if dt is None:
        return None
    # Naive datetimes are assumed to already be UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat()


def from_utc_iso(iso_str: str | None) -> datetime | None:
    """
    Parse an ISO format string to a UTC datetime.

    Args:
        iso_str: ISO format string, or None

    Returns:
        Timezone-aware UTC datetime, or None

    """
    if iso_str is None:
        return None
    # Browsers emit a trailing "Z", which older parsers reject
    if iso_str.endswith("Z"):
        iso_str = iso_str[:-1] + "+00:00"
    dt = datetime.fromisoformat(iso_str)
    return dt.replace(tzinfo=UTC) if dt.tzinfo is None else dt.astimezone(UTC)


def is_truthy(value: str) -> bool:
    """
    Interpret a configuration string as a boolean.

    Args:
        value: Raw string, e.g. from an environment variable

    Returns:
        True for ``1``, ``true``, ``yes`` or ``on`` (case-insensitive)

    """
    return value.strip().lower() in {"1", "true", "yes", "on"}
