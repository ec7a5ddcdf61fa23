"""Database factory functions."""

import os
from pathlib import Path
from typing import Optional

from spendwise.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV = "SPENDWISE_DB_PATH"
MEMORY = ":memory:"


def default_database_path() -> Path:
    """Return ``~/.spendwise/spendwise.db``, creating the directory."""
    data_dir = Path.home() / ".spendwise"
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / "spendwise.db"


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite-backed database.

    Args:
        database_path: SQLite file, or ":memory:" for a throwaway database.
            When None, SPENDWISE_DB_PATH is used if set, otherwise
            ``~/.spendwise/spendwise.db``.

    Returns:
        SQLAlchemyDatabase instance
    """
    path = database_path or os.environ.get(DB_PATH_ENV) or str(default_database_path())
    if path == MEMORY:
        return SQLAlchemyDatabase("sqlite://")
    return SQLAlchemyDatabase(f"sqlite:///{Path(path).expanduser()}")
