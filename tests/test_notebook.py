"""Tests for Notebook, including the end-to-end folder scenario."""

from notepad.models import DEFAULT_FOLDER
from notepad.repositories import Notebook
from notepad.repositories.notebook import WELCOME_NOTES


class TestNotebookScenario:
    """Walk through create, list, delete and cascade on one notebook."""

    def test_scenario(self, notebook):
        """Test the full create/list/delete/cascade sequence."""
        first = notebook.notes.create("A", "B")
        assert first.id == 1
        assert first.folder == DEFAULT_FOLDER
        assert notebook.notes.list() == [first]

        second = notebook.notes.create("C", "D", folder="Work")
        assert second.id == 2
        assert second.folder == "Work"
        assert notebook.folders.list() == [DEFAULT_FOLDER, "Work"]

        notebook.notes.delete(1)
        assert [n.id for n in notebook.notes.list()] == [2]

        notebook.folders.delete("Work")
        assert notebook.notes.list() == []
        assert notebook.folders.list() == [DEFAULT_FOLDER]


class TestWelcomeSeed:
    """Test cases for Notebook.ensure_defaults()."""

    def test_seeds_empty_store(self, store):
        """Test that loading an empty store creates the welcome notes."""
        notebook = Notebook(store)

        titles = [n.title for n in notebook.notes.list()]
        assert titles == [title for title, _ in WELCOME_NOTES]
        assert all(n.folder == DEFAULT_FOLDER for n in notebook.notes.list())

    def test_seeds_when_default_folder_empty(self, store):
        """Test that notes elsewhere do not prevent the seed."""
        Notebook(store, seed=False).notes.create("A", "B", folder="Work")

        notebook = Notebook(store)

        assert len(notebook.notes.list(folder=DEFAULT_FOLDER)) == len(WELCOME_NOTES)
        assert len(notebook.notes.list(folder="Work")) == 1

    def test_does_not_reseed(self, store):
        """Test that reloading a seeded store does not duplicate the notes."""
        Notebook(store)
        notebook = Notebook(store)

        assert len(notebook.notes.list()) == len(WELCOME_NOTES)
        assert notebook.ensure_defaults() == []

    def test_user_note_in_default_folder_prevents_seed(self, store):
        """Test that any note in the default folder counts."""
        Notebook(store, seed=False).notes.create("Mine", "text")

        notebook = Notebook(store)

        assert [n.title for n in notebook.notes.list()] == ["Mine"]

    def test_seed_disabled(self, store):
        """Test that seed=False leaves the store empty."""
        assert Notebook(store, seed=False).notes.list() == []
