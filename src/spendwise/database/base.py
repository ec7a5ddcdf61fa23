"""Abstract persistence interfaces."""

from abc import ABC, abstractmethod
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from spendwise.domain.entities import Transaction


class LearnedCategoryStore(ABC):
    """Key -> category mapping learned from user corrections.

    Keys are lowercased descriptions or core names. Writes are last-write-wins
    and take effect immediately.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the learned category for a key, or None."""
        pass

    @abstractmethod
    def set(self, key: str, category: str) -> None:
        """Store a mapping, replacing any existing one for the key."""
        pass

    @abstractmethod
    def clear(self) -> int:
        """Remove every mapping. Returns the number removed."""
        pass

    @abstractmethod
    def items(self) -> list[tuple[str, str]]:
        """Return all (key, category) pairs."""
        pass

    def count(self) -> int:
        """Return the number of learned keys."""
        return len(self.items())


class Database(ABC):
    """Abstract database interface for spendwise."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @property
    @abstractmethod
    def learned_categories(self) -> LearnedCategoryStore:
        """Learned-category store backed by this database."""
        pass

    # Transaction operations
    @abstractmethod
    def add_transactions(self, transactions: list[Transaction]) -> None:
        """Append transactions, preserving their order."""
        pass

    @abstractmethod
    def list_transactions(self) -> list[Transaction]:
        """List all transactions in insertion order."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def update_transaction_categories(self, updates: dict[str, str]) -> None:
        """Set the category of each transaction ID in ``updates``."""
        pass

    @abstractmethod
    def delete_transactions(self, transaction_ids: list[str]) -> int:
        """Delete transactions by ID. Returns the number deleted."""
        pass

    @abstractmethod
    def clear_transactions(self) -> int:
        """Delete all transactions. Returns the number deleted."""
        pass

    @abstractmethod
    def replace_transactions(self, transactions: list[Transaction]) -> None:
        """Replace the whole transaction list."""
        pass

    # Upload snapshot operations
    @abstractmethod
    def save_snapshot(self, transactions: list[Transaction]) -> None:
        """Save the pre-upload transaction list, discarding any older snapshot."""
        pass

    @abstractmethod
    def load_snapshot(self) -> Optional[list[Transaction]]:
        """Return the saved snapshot, or None if there is none."""
        pass

    @abstractmethod
    def clear_snapshot(self) -> None:
        """Discard the saved snapshot."""
        pass
