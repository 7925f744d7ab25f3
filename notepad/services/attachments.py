"""Encoding files as inline note attachments."""

import base64
import binascii
import mimetypes
from pathlib import Path
from typing import Final
from urllib.parse import unquote_to_bytes

from notepad.exc import ValidationError
from notepad.models.note import Attachment

#: Largest attachment accepted by default.
DEFAULT_MAX_ATTACHMENT_BYTES: Final[int] = 5 * 1024 * 1024
#: Media type used when none is given and none can be guessed.
FALLBACK_MEDIA_TYPE: Final[str] = "application/octet-stream"


def format_size(num_bytes: int) -> str:
    """
    Format a byte count for an error message.

    Args:
        num_bytes: Size in bytes

    Returns:
        e.g. ``"512 B"``, ``"2.0 KB"``, ``"5.0 MB"``

    """
    if num_bytes < 1024:  # noqa: PLR2004
        return f"{num_bytes} B"
    if num_bytes < 1024 * 1024:
        return f"{num_bytes / 1024:.1f} KB"
    return f"{num_bytes / (1024 * 1024):.1f} MB"


def encode_attachment(
    name: str,
    data: bytes,
    media_type: str | None = None,
    max_bytes: int = DEFAULT_MAX_ATTACHMENT_BYTES,
) -> Attachment:
    """
    Encode a file as an attachment with a ``data:`` URL.

    Args:
        name: File name shown for the attachment
        data: Raw file contents

    Keyword Args:
        media_type: Media type; guessed from ``name`` if not given
        max_bytes: Largest accepted payload

    Returns:
        The new :class:`~notepad.models.note.Attachment`

    Raises:
        ValidationError: If the name is empty or the file is too large

    """
    name = Path(name).name.strip() if name else ""
    if not name:
        msg = "Attachment name is required"
        raise ValidationError(msg, "attachments")
    if len(data) > max_bytes:
        msg = (
            f'"{name}" is {format_size(len(data))}; '
            f"attachments are limited to {format_size(max_bytes)}"
        )
        raise ValidationError(msg, "attachments")
    if not media_type:
        media_type = mimetypes.guess_type(name)[0] or FALLBACK_MEDIA_TYPE
    payload = base64.b64encode(data).decode("ascii")
    return Attachment(name=name, url=f"data:{media_type};base64,{payload}", type=media_type)


def encode_attachment_file(
    path: Path, max_bytes: int = DEFAULT_MAX_ATTACHMENT_BYTES
) -> Attachment:
    """
    Encode a file on disk as an attachment.

    The size is checked before the file is read.

    Args:
        path: Path to the file

    Keyword Args:
        max_bytes: Largest accepted payload

    Returns:
        The new :class:`~notepad.models.note.Attachment`

    Raises:
        ValidationError: If the file is too large

    """
    size = path.stat().st_size
    if size > max_bytes:
        msg = (
            f'"{path.name}" is {format_size(size)}; '
            f"attachments are limited to {format_size(max_bytes)}"
        )
        raise ValidationError(msg, "attachments")
    return encode_attachment(path.name, path.read_bytes(), max_bytes=max_bytes)


def decode_attachment(attachment: Attachment) -> bytes:
    """
    Get the raw contents of an attachment.

    Args:
        attachment: An attachment whose URL is a ``data:`` URL

    Returns:
        The decoded bytes

    Raises:
        ValueError: If the URL is not a ``data:`` URL or is malformed

    """
    url = attachment.url
    if not url.startswith("data:") or "," not in url:
        msg = f"Not a data URL: {url[:32]}"
        raise ValueError(msg)
    header, payload = url[len("data:") :].split(",", 1)
    if header.endswith(";base64"):
        try:
            return base64.b64decode(payload, validate=True)
        except binascii.Error as e:
            msg = f"Invalid base64 payload in {attachment.name}"
            raise ValueError(msg) from e
    # Plain data URLs are percent-encoded text
    return unquote_to_bytes(payload)
