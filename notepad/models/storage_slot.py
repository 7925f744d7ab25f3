"""Storage slot model."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, String, Text, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Mapped, Session, mapped_column

from notepad.db import Base
from notepad.exc import StoreCorrupted


class StorageSlot(Base):
    """
    A named slot holding one JSON array, read and written wholesale.
    """

    __tablename__ = "storage_slots"

    #: The slot name (e.g. ``notes`` or ``folders``).
    name: Mapped[str] = mapped_column(String, primary_key=True)
    #: The serialized JSON array.
    payload: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    #: The date and time the slot was last written.
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.now, onupdate=datetime.now, nullable=False
    )

    @classmethod
    def get(cls, session: Session, name: str) -> StorageSlot | None:
        """
        Get a slot by name.
        """
        return session.get(cls, name)

    @classmethod
    def names(cls, session: Session) -> list[str]:
        """
        Get the names of all slots that have been written.
        """
        return list(session.scalars(select(cls.name).order_by(cls.name)).all())

    @classmethod
    def read(cls, session: Session, name: str) -> list[Any]:
        """
        Read the items held in a slot.

        Args:
            session: SQLAlchemy session
            name: Slot name

        Returns:
            The decoded list, or an empty list if the slot was never written

        Raises:
            StoreCorrupted: If the payload is not a JSON array

        """
        slot = cls.get(session, name)
        if slot is None:
            return []
        try:
            items = json.loads(slot.payload)
        except json.JSONDecodeError as e:
            raise StoreCorrupted(name, e) from e
        if not isinstance(items, list):
            raise StoreCorrupted(name, "payload is not a JSON array")
        return items

    @classmethod
    def write(
        cls,
        session: Session,
        name: str,
        items: list[Any],
        commit: bool = True,  # noqa: FBT001, FBT002
    ) -> StorageSlot:
        """
        Replace the items held in a slot, creating it if needed.

        Args:
            session: SQLAlchemy session
            name: Slot name
            items: JSON-serializable list

        Keyword Args:
            commit: Whether to commit the changes

        Returns:
            The written :class:`StorageSlot`

        """
        payload = json.dumps(items, ensure_ascii=False)
        now = datetime.now()  # noqa: DTZ005
        # Upsert so two first writes of the same slot cannot collide
        stmt = sqlite_insert(cls).values(name=name, payload=payload, updated_at=now)
        stmt = stmt.on_conflict_do_update(
            index_elements=[cls.name],
            set_={"payload": payload, "updated_at": now},
        )
        session.execute(stmt)
        if commit:
            session.commit()
        return session.get(cls, name, populate_existing=True)
