"""In-memory learned-category store.

Used by tests and when the categorization engine is embedded without a
database.
"""

from typing import Optional

from spendwise.database.base import LearnedCategoryStore


class InMemoryLearnedCategoryStore(LearnedCategoryStore):
    """Dict-backed learned-category store."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, category: str) -> None:
        self._data[key] = category

    def clear(self) -> int:
        count = len(self._data)
        self._data.clear()
        return count

    def items(self) -> list[tuple[str, str]]:
        return list(self._data.items())
