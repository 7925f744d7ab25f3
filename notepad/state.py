from __future__ import annotations

from typing import TYPE_CHECKING, cast

from notepad.repositories.notebook import Notebook
from notepad.settings import Settings
from notepad.stores import create_store

if TYPE_CHECKING:
    from notepad.stores import Store


class ApplicationState(dict):
    """
    Application state singleton.

    Holds the settings, the open store and the notebook built on it for the
    life of the process.  The dictionary itself is free for ad-hoc values.
    """

    _instance: ApplicationState | None = None
    #: The open store.
    _store: Store | None = None
    #: The notebook over :attr:`store`.
    _notebook: Notebook | None = None
    #: Settings
    settings: Settings

    def __new__(cls) -> ApplicationState:  # noqa: PYI034
        """
        Create a new instance of the application state singleton.

        - If the instance is not initialized, initialize it by calling :meth:`reset`.
        - Return the instance.

        """
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.reset()
        return cast("ApplicationState", cls._instance)

    @property
    def store(self) -> Store:
        """
        Get the store.

        If the store is not open, open the one named by the settings.

        Returns:
            The store.

        """
        if self._store is None:
            self._store = create_store(self.settings)
        return self._store

    @property
    def notebook(self) -> Notebook:
        """
        Get the notebook.

        The notebook is built on first use, which is when the welcome notes
        are seeded.

        Returns:
            The notebook.

        """
        if self._notebook is None:
            self._notebook = Notebook(self.store, seed=self.settings.seed_welcome_notes)
        return self._notebook

    def configure(self, settings: Settings, store: Store | None = None) -> None:
        """
        Replace the settings and, optionally, the store.  This is used for our
        tests and by the application factory.

        Args:
            settings: The new settings

        Keyword Args:
            store: Use this store instead of the one named by ``settings``

        """
        self.close()
        self.settings = settings
        self._store = store

    def close(self) -> None:
        """Close the store and forget the notebook."""
        if self._store is not None:
            self._store.close()
        self._store = None
        self._notebook = None

    def reset(self) -> None:
        """
        Reset the application state.

        - Close the current store.
        - Forget the notebook.
        - Clear the application state dictionary.
        - Load fresh settings from the environment.
        """
        self.close()
        self.settings = Settings.from_env()
        self.clear()
