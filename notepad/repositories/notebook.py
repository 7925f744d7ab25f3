"""Notebook: the note and folder repositories over one store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from notepad.models.note import DEFAULT_FOLDER
from notepad.repositories.folders import FolderRepository
from notepad.repositories.notes import NoteRepository
from notepad.services.logs import get_logger

if TYPE_CHECKING:
    from notepad.models.note import Note
    from notepad.stores import Store

#: (title, content) of the notes created in an empty notebook.
WELCOME_NOTES: Final[tuple[tuple[str, str], ...]] = (
    (
        "Welcome to your Notes",
        "This is a simple notepad. You can create, view, and delete notes.",
    ),
    (
        "Organising with folders",
        "Notes without a folder go to General. Give a note a folder name to "
        "create that folder; deleting a folder deletes the notes inside it.",
    ),
)

logger = get_logger(__name__)


class Notebook:
    """
    Owns the note and folder repositories for one store.

    Loading a notebook repairs it: if no note lives in :data:`DEFAULT_FOLDER`
    the welcome notes are created there.
    """

    def __init__(self, store: Store, seed: bool = True) -> None:  # noqa: FBT001, FBT002
        """
        Initialize the notebook.

        Args:
            store: The backing store

        Keyword Args:
            seed: Whether to create the welcome notes when needed

        """
        #: The backing store.
        self.store = store
        #: The folder repository.
        self.folders = FolderRepository(store)
        #: The note repository.
        self.notes = NoteRepository(store, folders=self.folders)
        if seed:
            self.ensure_defaults()

    def ensure_defaults(self) -> list[Note]:
        """
        Create the welcome notes if :data:`DEFAULT_FOLDER` holds no note.

        Once the default folder has a note this does nothing.

        Returns:
            The notes created (empty if none were needed)

        """
        if self.notes.list(folder=DEFAULT_FOLDER):
            return []
        created = [
            self.notes.create(title, content, folder=DEFAULT_FOLDER)
            for title, content in WELCOME_NOTES
        ]
        logger.info("notebook.seeded", count=len(created))
        return created

    def close(self) -> None:
        """Close the backing store."""
        self.store.close()
