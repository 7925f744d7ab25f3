"""Note and attachment models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Final

from notepad.utils import from_utc_iso, to_utc_iso, utc_now

#: The folder notes land in when none is given.
DEFAULT_FOLDER: Final[str] = "General"


@dataclass(frozen=True)
class Attachment:
    """
    A small file embedded in a note as a ``data:`` URL.
    """

    #: The display name (usually the original file name).
    name: str
    #: The payload as a self-contained ``data:`` URL.
    url: str
    #: The declared media type.
    type: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "url": self.url, "type": self.type}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Attachment:
        return cls(name=data["name"], url=data["url"], type=data["type"])


@dataclass(frozen=True)
class Note:
    """
    Represents a note.

    Notes are never edited once created, hence frozen.
    """

    #: The note ID.
    id: int
    #: The note title.
    title: str
    #: The note body.
    content: str
    #: The name of the folder the note belongs to.
    folder: str = DEFAULT_FOLDER
    #: Files embedded in the note.
    attachments: tuple[Attachment, ...] = ()
    #: The date and time the note was created (UTC).
    created_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize the note to its persisted/JSON form.

        Returns:
            Dictionary with camelCase ``createdAt``

        """
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "folder": self.folder,
            "attachments": [a.to_dict() for a in self.attachments],
            "createdAt": to_utc_iso(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Note:
        """
        Load a note from its persisted form.

        Missing folders fall back to :data:`DEFAULT_FOLDER` and missing or
        ``null`` attachment lists are treated as empty.

        Args:
            data: The persisted dictionary

        Returns:
            The new :class:`Note` object

        """
        created_at = from_utc_iso(data.get("createdAt")) or utc_now()
        return cls(
            id=int(data["id"]),
            title=data["title"],
            content=data["content"],
            folder=data.get("folder") or DEFAULT_FOLDER,
            attachments=tuple(
                Attachment.from_dict(a) for a in data.get("attachments") or []
            ),
            created_at=created_at,
        )
