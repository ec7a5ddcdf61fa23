"""Database layer for spendwise application."""

from spendwise.database.base import Database, LearnedCategoryStore
from spendwise.database.factories import create_sqlite_database
from spendwise.database.memory import InMemoryLearnedCategoryStore

__all__ = [
    "Database",
    "LearnedCategoryStore",
    "InMemoryLearnedCategoryStore",
    "create_sqlite_database",
]
