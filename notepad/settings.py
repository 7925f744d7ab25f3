"""Runtime configuration for Notepad."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final, Literal

from notepad.utils import get_app_data_path, is_truthy

#: Prefix shared by every environment variable we read.
ENV_PREFIX: Final[str] = "NOTEPAD_"

StoreKind = Literal["memory", "file", "database"]
STORE_KINDS: Final[tuple[str, ...]] = ("memory", "file", "database")


@dataclass
class Settings:
    """Application settings."""

    #: The only username accepted by the login check.
    username: str = "admin"
    #: The only password accepted by the login check.
    password: str = "admin"  # noqa: S105
    #: Which storage medium backs the notebook.
    store: StoreKind = "memory"
    #: Directory for the file store, the default database and logs.
    data_dir: Path | None = None
    #: Explicit path to the SQLite database for the ``database`` store.
    db_path: Path | None = None
    #: Artificial delay in seconds before mutating requests complete.
    simulated_latency: float = 0.0
    #: Whether to create the welcome notes when "General" is empty.
    seed_welcome_notes: bool = True
    #: Host for the development server.
    host: str = "127.0.0.1"
    #: Port for the development server.
    port: int = 5000
    #: Debug mode (also turns on console logging).
    debug: bool = False
    #: Extra Flask configuration values.
    flask_config: dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.store not in STORE_KINDS:
            msg = f"Invalid store: {self.store}. Must be one of: {', '.join(STORE_KINDS)}"
            raise ValueError(msg)
        if self.simulated_latency < 0:
            msg = "simulated_latency cannot be negative"
            raise ValueError(msg)

    @property
    def resolved_data_dir(self) -> Path:
        """
        The data directory, falling back to the per-platform default.

        Returns:
            Path to the data directory

        """
        if self.data_dir is not None:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            return self.data_dir
        return get_app_data_path()

    @property
    def resolved_db_path(self) -> Path:
        """
        The database path, falling back to ``<data dir>/notepad.db``.

        Returns:
            Path to the SQLite database file

        """
        if self.db_path is not None:
            return self.db_path
        return self.resolved_data_dir / "notepad.db"

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        """
        Build settings from ``NOTEPAD_*`` environment variables.

        Unset or empty variables keep their defaults.

        Keyword Args:
            environ: Mapping to read instead of :data:`os.environ`

        Returns:
            The new :class:`Settings` object

        Raises:
            ValueError: If a variable holds a value of the wrong type

        """
        env = os.environ if environ is None else environ

        def get(name: str) -> str | None:
            value = env.get(ENV_PREFIX + name, "").strip()
            return value or None

        kwargs: dict = {}
        for name in ("username", "password", "store", "host"):
            value = get(name.upper())
            if value is not None:
                kwargs[name] = value
        if (value := get("DATA_DIR")) is not None:
            kwargs["data_dir"] = Path(value)
        if (value := get("DB_PATH")) is not None:
            kwargs["db_path"] = Path(value)
        if (value := get("SIMULATED_LATENCY")) is not None:
            kwargs["simulated_latency"] = float(value)
        if (value := get("PORT")) is not None:
            kwargs["port"] = int(value)
        for name in ("seed_welcome_notes", "debug"):
            value = get(name.upper())
            if value is not None:
                kwargs[name] = is_truthy(value)
        return cls(**kwargs)
