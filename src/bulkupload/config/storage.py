"""Where the reference-data database lives.

``DATABASE_URI`` wins outright. Otherwise a SQLite file is placed in
``BULKUPLOAD_DATA_DIR`` or the platform's per-user data directory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var

APP_DIR_NAME: Final[str] = "bulkupload"
DEFAULT_DB_FILENAME: Final[str] = "bulkupload.db"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    database_filename: str = DEFAULT_DB_FILENAME

    @property
    def database_path(self) -> Path:
        return self.data_dir.expanduser().resolve() / self.database_filename

    def sqlite_uri(self, *, create_dir: bool = True) -> str:
        path = self.database_path
        if create_dir:
            path.parent.mkdir(parents=True, exist_ok=True)
        return f"sqlite+pysqlite:///{path}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def _user_data_root() -> Path:
    if os.name == "nt":
        return Path(optional_env_var("LOCALAPPDATA") or Path.home() / "AppData" / "Local")
    return Path(optional_env_var("XDG_DATA_HOME") or Path.home() / ".local" / "share")


def get_storage_config() -> StorageConfig:
    data_dir = optional_env_var("BULKUPLOAD_DATA_DIR")
    return StorageConfig(data_dir=Path(data_dir) if data_dir else _user_data_root() / APP_DIR_NAME)


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    uri = optional_env_var("DATABASE_URI")
    if uri is None:
        uri = (storage or get_storage_config()).sqlite_uri()
    return DatabaseConfig(uri=uri)
