"""Note repository."""

from __future__ import annotations

import builtins
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from notepad.exc import DoesNotExist, ValidationError
from notepad.models.note import DEFAULT_FOLDER, Attachment, Note
from notepad.repositories.folders import FolderRepository, normalize_folder_name
from notepad.services.logs import get_logger
from notepad.stores import META_SLOT, NOTES_SLOT
from notepad.utils import utc_now

if TYPE_CHECKING:
    from notepad.stores import Store

#: Key of the meta record holding the last assigned note id.
LAST_ID_KEY = "lastNoteId"

logger = get_logger(__name__)


class NoteRepository:
    """
    Notes kept in insertion order in the ``notes`` slot.

    The last assigned id is recorded in the ``meta`` slot, so an id is never
    handed out twice even after the note holding it is deleted.  Assignment
    is still a read-modify-write and is only safe with a single writer.
    """

    def __init__(self, store: Store, folders: FolderRepository | None = None) -> None:
        #: The backing store.
        self.store = store
        #: Folder repository updated when a note names a new folder.
        self.folders = folders if folders is not None else FolderRepository(store)

    def _load(self) -> builtins.list[Note]:
        return [Note.from_dict(item) for item in self.store.read(NOTES_SLOT)]

    def _save(self, notes: Iterable[Note]) -> None:
        self.store.write(NOTES_SLOT, [note.to_dict() for note in notes])

    def last_id(self) -> int:
        """
        Get the highest id ever assigned, or 0 if none has been.
        """
        for record in self.store.read(META_SLOT):
            if isinstance(record, dict) and LAST_ID_KEY in record:
                return int(record[LAST_ID_KEY])
        return 0

    def _save_last_id(self, note_id: int) -> None:
        records = [
            record
            for record in self.store.read(META_SLOT)
            if not (isinstance(record, dict) and LAST_ID_KEY in record)
        ]
        records.append({LAST_ID_KEY: note_id})
        self.store.write(META_SLOT, records)

    @staticmethod
    def next_id(notes: Iterable[Note], last_id: int = 0) -> int:
        """
        Get the id for the next note.

        Args:
            notes: Existing notes

        Keyword Args:
            last_id: The highest id ever assigned, including deleted notes

        Returns:
            One more than the larger of ``last_id`` and the highest existing
            id; 1 on an empty store

        """
        return max(last_id, max((note.id for note in notes), default=0)) + 1

    def list(self, folder: str | None = None) -> builtins.list[Note]:
        """
        Get notes in the order they were created.

        Keyword Args:
            folder: Only return notes in this folder

        Returns:
            List of notes (possibly empty)

        """
        notes = self._load()
        if folder is not None:
            folder = normalize_folder_name(folder) or DEFAULT_FOLDER
            notes = [note for note in notes if note.folder == folder]
        return notes

    def get(self, note_id: int) -> Note | None:
        """
        Get a note by ID.
        """
        for note in self._load():
            if note.id == note_id:
                return note
        return None

    def get_or_raise(self, note_id: int) -> Note:
        """
        Get a note by ID.

        Args:
            note_id: Note ID

        Returns:
            The note

        Raises:
            DoesNotExist: If there is no note with that ID

        """
        note = self.get(note_id)
        if note is None:
            raise DoesNotExist("Note", note_id)  # noqa: EM101
        return note

    def create(
        self,
        title: str,
        content: str,
        folder: str | None = None,
        attachments: Iterable[Attachment | Mapping[str, Any]] | None = None,
    ) -> Note:
        """
        Create a new note and append it to the collection.

        If the note's folder has not been created yet it is created too; that
        is a second, separate write to the store.

        Args:
            title: Note title
            content: Note body

        Keyword Args:
            folder: Folder name; blank or ``None`` means :data:`DEFAULT_FOLDER`
            attachments: Attachments, as :class:`Attachment` objects or dicts

        Returns:
            The new :class:`~notepad.models.note.Note` object

        Raises:
            ValidationError: If the title or content is empty

        """
        if not title or not title.strip():
            msg = "Title is required"
            raise ValidationError(msg, "title")
        if not content or not content.strip():
            msg = "Content is required"
            raise ValidationError(msg, "content")

        folder = normalize_folder_name(folder) or DEFAULT_FOLDER
        notes = self._load()
        note = Note(
            id=self.next_id(notes, last_id=self.last_id()),
            title=title,
            content=content,
            folder=folder,
            attachments=tuple(
                a if isinstance(a, Attachment) else Attachment.from_dict(a)
                for a in attachments or ()
            ),
            created_at=utc_now(),
        )
        notes.append(note)
        self._save(notes)
        self._save_last_id(note.id)
        logger.info(
            "note.created",
            note_id=note.id,
            folder=note.folder,
            attachments=len(note.attachments),
        )

        self.folders.create(folder)
        return note

    def delete(self, note_id: int) -> bool:
        """
        Delete a note.  Deleting a note that does not exist does nothing.

        Args:
            note_id: Note ID

        Returns:
            True if a note was removed, False otherwise

        """
        notes = self._load()
        kept = [note for note in notes if note.id != note_id]
        if len(kept) == len(notes):
            return False
        self._save(kept)
        logger.info("note.deleted", note_id=note_id)
        return True

