"""
Named-slot persistence for Notepad.

A store holds a handful of named slots, each containing one JSON array.  Slots
are always read and written wholesale; there are no partial updates, no
locking and no transactions spanning more than one slot.  Concurrent writers
sharing a file or database store are last-write-wins.
"""

from __future__ import annotations

import copy
import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

from sqlalchemy.orm import scoped_session

from notepad.db import create_engine_with_path, create_session_factory, init_db
from notepad.exc import StoreCorrupted
from notepad.models.storage_slot import StorageSlot
from notepad.services.logs import get_logger

if TYPE_CHECKING:
    from sqlalchemy import Engine
    from sqlalchemy.orm import Session

    from notepad.settings import Settings

#: Slot holding the serialized note collection.
NOTES_SLOT: Final[str] = "notes"
#: Slot holding the explicitly created folder names.
FOLDERS_SLOT: Final[str] = "folders"
#: Slot holding bookkeeping records such as the last assigned note id.
META_SLOT: Final[str] = "meta"

logger = get_logger(__name__)


class Store(ABC):
    """Base class for slot stores."""

    @abstractmethod
    def read(self, slot: str) -> list[Any]:
        """
        Read the items held in a slot.

        Args:
            slot: Slot name

        Returns:
            A fresh copy of the items; an empty list if the slot was never
            written

        """

    @abstractmethod
    def write(self, slot: str, items: list[Any]) -> None:
        """
        Replace the items held in a slot.

        Args:
            slot: Slot name
            items: JSON-serializable list

        """

    def close(self) -> None:  # noqa: B027
        """Release any resources held by the store."""


class MemoryStore(Store):
    """Store that keeps slots in a dictionary for the life of the process."""

    def __init__(self, initial: dict[str, list[Any]] | None = None) -> None:
        #: Slot name to items.
        self._slots: dict[str, list[Any]] = copy.deepcopy(initial or {})

    def read(self, slot: str) -> list[Any]:
        return copy.deepcopy(self._slots.get(slot, []))

    def write(self, slot: str, items: list[Any]) -> None:
        self._slots[slot] = copy.deepcopy(list(items))


class JsonFileStore(Store):
    """
    Store that keeps each slot in ``<directory>/<slot>.json``.

    Writes go to a temporary file in the same directory which then replaces
    the target, so a reader never sees a half-written file.
    """

    def __init__(self, directory: Path) -> None:
        #: Directory holding the slot files.
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, slot: str) -> Path:
        """
        Get the file path for a slot.

        Args:
            slot: Slot name

        Returns:
            Path to the slot's JSON file

        """
        return self.directory / f"{slot}.json"

    def read(self, slot: str) -> list[Any]:
        path = self.path_for(slot)
        if not path.exists():
            return []
        try:
            items = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise StoreCorrupted(slot, e) from e
        if not isinstance(items, list):
            raise StoreCorrupted(slot, "payload is not a JSON array")
        return items

    def write(self, slot: str, items: list[Any]) -> None:
        path = self.path_for(slot)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.directory, prefix=f".{slot}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(list(items), f, ensure_ascii=False, indent=2)
            Path(tmp_name).replace(path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class DatabaseStore(Store):
    """
    Store that keeps each slot as a row of :class:`StorageSlot`.

    Each thread gets its own session from :attr:`session`, and that session is
    discarded after every read or write, so requests served on different
    threads never share one.
    """

    def __init__(self, engine: Engine) -> None:
        #: The SQLAlchemy engine.
        self.engine = engine
        #: Thread-local session registry.
        self.session: scoped_session[Session] = scoped_session(
            create_session_factory(engine)
        )

    @classmethod
    def open(cls, db_path: Path | None = None) -> DatabaseStore:
        """
        Open a store on the SQLite database at ``db_path``.

        Args:
            db_path: Optional path to database file. If None, uses default path.

        Returns:
            The new :class:`DatabaseStore`

        """
        engine = create_engine_with_path(db_path)
        init_db(engine)
        return cls(engine)

    def read(self, slot: str) -> list[Any]:
        try:
            return StorageSlot.read(self.session, slot)
        finally:
            self.session.remove()

    def write(self, slot: str, items: list[Any]) -> None:
        try:
            StorageSlot.write(self.session, slot, list(items))
        except Exception:
            self.session.rollback()
            raise
        finally:
            self.session.remove()

    def close(self) -> None:
        self.session.remove()
        self.engine.dispose()


def create_store(settings: Settings) -> Store:
    """
    Build the store selected by ``settings.store``.

    Args:
        settings: Application settings

    Returns:
        A :class:`MemoryStore`, :class:`JsonFileStore` or :class:`DatabaseStore`

    """
    if settings.store == "file":
        store: Store = JsonFileStore(settings.resolved_data_dir / "store")
    elif settings.store == "database":
        store = DatabaseStore.open(settings.resolved_db_path)
    else:
        store = MemoryStore()
    logger.info("store.opened", kind=settings.store)
    return store
