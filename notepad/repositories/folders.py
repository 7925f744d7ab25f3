"""Folder repository."""

from __future__ import annotations

import builtins
from typing import TYPE_CHECKING

from notepad.exc import ProtectedFolder, ValidationError
from notepad.models.note import DEFAULT_FOLDER
from notepad.services.logs import get_logger
from notepad.stores import FOLDERS_SLOT, NOTES_SLOT

if TYPE_CHECKING:
    from notepad.stores import Store

logger = get_logger(__name__)


def normalize_folder_name(name: str | None) -> str:
    """
    Strip surrounding whitespace from a folder name.

    Args:
        name: Raw folder name

    Returns:
        The stripped name, or an empty string for ``None``

    """
    return (name or "").strip()


def sort_folder_names(names: set[str]) -> builtins.list[str]:
    """
    Sort folder names case-insensitively, breaking ties by exact value.

    Args:
        names: Folder names

    Returns:
        Sorted list

    """
    return sorted(names, key=lambda name: (name.casefold(), name))


class FolderRepository:
    """
    Folders addressed by name.

    A folder exists when it was created explicitly or when any note refers to
    it.  The explicit names are persisted in the ``folders`` slot; the full
    listing is derived on every read instead of being kept in sync.

    Deleting a folder deletes the notes inside it.  :data:`DEFAULT_FOLDER`
    can never be deleted.
    """

    def __init__(self, store: Store) -> None:
        #: The backing store.
        self.store = store

    def explicit(self) -> builtins.list[str]:
        """
        Get the explicitly created folder names, in creation order.

        Returns:
            List of folder names

        """
        return [str(name) for name in self.store.read(FOLDERS_SLOT)]

    def referenced(self) -> set[str]:
        """
        Get the folder names referenced by existing notes.

        Returns:
            Set of folder names

        """
        return {
            note.get("folder") or DEFAULT_FOLDER
            for note in self.store.read(NOTES_SLOT)
        }

    def list(self) -> builtins.list[str]:
        """
        Get all folders.

        This is the union of :data:`DEFAULT_FOLDER`, the folders referenced by
        notes and the explicitly created folders, deduplicated and sorted.

        Returns:
            Sorted list of folder names

        """
        names = {DEFAULT_FOLDER, *self.explicit(), *self.referenced()}
        return sort_folder_names(names)

    def exists(self, name: str) -> bool:
        """
        Check whether a folder is listed.

        Args:
            name: Folder name

        Returns:
            True if :meth:`list` would include it

        """
        return normalize_folder_name(name) in self.list()

    def create(self, name: str) -> str:
        """
        Create a folder.  Creating an existing folder does nothing.

        Args:
            name: Folder name

        Returns:
            The normalized folder name

        Raises:
            ValidationError: If the name is empty

        """
        name = normalize_folder_name(name)
        if not name:
            msg = "Folder name is required"
            raise ValidationError(msg, "name")
        explicit = self.explicit()
        if name not in explicit:
            explicit.append(name)
            self.store.write(FOLDERS_SLOT, explicit)
            logger.info("folder.created", folder=name)
        return name

    def delete(self, name: str) -> int:
        """
        Delete a folder and every note in it.

        Deleting a folder that does not exist does nothing.

        Args:
            name: Folder name

        Returns:
            The number of notes removed

        Raises:
            ValidationError: If the name is empty
            ProtectedFolder: If the folder is :data:`DEFAULT_FOLDER`

        """
        name = normalize_folder_name(name)
        if not name:
            msg = "Folder name is required"
            raise ValidationError(msg, "name")
        if name == DEFAULT_FOLDER:
            raise ProtectedFolder(name)

        explicit = self.explicit()
        if name in explicit:
            self.store.write(FOLDERS_SLOT, [n for n in explicit if n != name])

        notes = self.store.read(NOTES_SLOT)
        kept = [n for n in notes if (n.get("folder") or DEFAULT_FOLDER) != name]
        removed = len(notes) - len(kept)
        if removed:
            self.store.write(NOTES_SLOT, kept)
        logger.info("folder.deleted", folder=name, notes_removed=removed)
        return removed
