"""SQLAlchemy database setup for Notepad."""

from pathlib import Path
from typing import Final

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from notepad.utils import get_app_data_path

#: The default database name.
DEFAULT_DB_NAME: Final[str] = "notepad.db"


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""


def get_default_db_path() -> Path:
    """
    Get the path to the default database.

    The database lives in the ``db`` folder of the application data directory
    (see :func:`notepad.utils.get_app_data_path`).

    Returns:
        Path to the database file

    """
    db_dir = get_app_data_path() / "db"
    db_dir.mkdir(parents=True, exist_ok=True)
    return db_dir / DEFAULT_DB_NAME


def create_engine_with_path(db_path: Path | None = None) -> Engine:
    """
    Create SQLAlchemy engine with proper SQLite settings.

    Args:
        db_path: Optional path to database file. If None, uses default path.

    Returns:
        SQLAlchemy engine

    """
    if db_path is None:
        db_path = get_default_db_path()

    db_path.parent.mkdir(parents=True, exist_ok=True)
    db_path.touch(exist_ok=True)

    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},  # Flask serves from threads
        echo=False,
    )

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        """Set SQLite pragmas on connection."""
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    return engine


def init_db(engine: Engine) -> None:
    """
    Create any missing tables.

    Args:
        engine: SQLAlchemy engine

    """
    # Register the models on the metadata before creating tables
    import notepad.models  # noqa: F401, PLC0415

    Base.metadata.create_all(engine)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """
    Create a session factory bound to ``engine``.

    Args:
        engine: SQLAlchemy engine

    Returns:
        SQLAlchemy session factory

    """
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
