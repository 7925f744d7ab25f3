"""Shared pytest fixtures and test helpers for Notepad tests."""

import pytest

from notepad.repositories import FolderRepository, Notebook, NoteRepository
from notepad.settings import Settings
from notepad.state import ApplicationState
from notepad.stores import DatabaseStore, JsonFileStore, MemoryStore
from notepad.web import create_app

#: Environment variables that would change the behaviour under test.
NOTEPAD_ENV_VARS = (
    "NOTEPAD_USERNAME",
    "NOTEPAD_PASSWORD",
    "NOTEPAD_STORE",
    "NOTEPAD_DB_PATH",
    "NOTEPAD_SIMULATED_LATENCY",
    "NOTEPAD_SEED_WELCOME_NOTES",
    "NOTEPAD_HOST",
    "NOTEPAD_PORT",
    "NOTEPAD_DEBUG",
)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep every test out of the user's real data directory and settings."""
    for name in NOTEPAD_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    data_dir = tmp_path / "data"
    monkeypatch.setenv("NOTEPAD_DATA_DIR", str(data_dir))
    return data_dir


@pytest.fixture
def memory_store():
    """An empty in-memory store."""
    return MemoryStore()


@pytest.fixture
def file_store(tmp_path):
    """An empty JSON file store."""
    return JsonFileStore(tmp_path / "store")


@pytest.fixture
def db_store(tmp_path):
    """An empty SQLite-backed store."""
    store = DatabaseStore.open(tmp_path / "notepad.db")
    yield store
    store.close()


@pytest.fixture(params=["memory_store", "file_store", "db_store"])
def store(request):
    """Each kind of store in turn."""
    return request.getfixturevalue(request.param)


@pytest.fixture
def folders(store):
    """A folder repository over an empty store."""
    return FolderRepository(store)


@pytest.fixture
def notes(store, folders):
    """A note repository over an empty store."""
    return NoteRepository(store, folders=folders)


@pytest.fixture
def notebook(store):
    """A notebook over an empty store, without the welcome notes."""
    return Notebook(store, seed=False)


@pytest.fixture
def settings(tmp_path):
    """Settings for tests: no welcome notes, data under ``tmp_path``."""
    return Settings(
        username="admin",
        password="s3cret",  # noqa: S106
        data_dir=tmp_path / "data",
        seed_welcome_notes=False,
    )


@pytest.fixture
def app(settings):
    """A Flask app over a fresh in-memory store."""
    state = ApplicationState()
    state.reset()
    app = create_app(settings, store=MemoryStore())
    app.config.update(TESTING=True)

    yield app

    state.close()
    ApplicationState._instance = None


@pytest.fixture
def client(app):
    """A Flask test client."""
    return app.test_client()


# Test helper functions (not fixtures, but available for import)


def create_test_note(notes, title="Title", content="Content", folder=None, **kwargs):
    """
    Helper to create a note with defaults.

    Args:
        notes: Note repository
        title: Note title
        content: Note content
        folder: Folder name

    Returns:
        Created Note instance
    """
    return notes.create(title, content, folder=folder, **kwargs)
