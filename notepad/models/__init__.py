"""Data models for Notepad."""

from notepad.models.note import DEFAULT_FOLDER, Attachment, Note
from notepad.models.storage_slot import StorageSlot

__all__ = [
    "DEFAULT_FOLDER",
    "Attachment",
    "Note",
    "StorageSlot",
]
