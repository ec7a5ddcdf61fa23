"""Duplicate detection across overlapping statement uploads."""

from decimal import Decimal
from typing import Iterable

from spendwise.database.base import Database
from spendwise.domain.entities import Transaction
from spendwise.domain.merchant import description_key
from spendwise.logging_setup import get_logger
from spendwise.utils.amount_parser import round_amount

logger = get_logger(__name__)

DuplicateKey = tuple[str, str, Decimal]


def duplicate_key(transaction: Transaction) -> DuplicateKey:
    """Return ``(date, description key, amount to the cent)``.

    The description key is the first 20 alphanumeric characters of the
    lowercased core name, so case, punctuation, store numbers and trailing
    locations do not keep two uploads of the same purchase apart.
    """
    return (
        transaction.date.strip(),
        description_key(transaction.description),
        round_amount(transaction.amount),
    )


def find_duplicates(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Return every transaction whose key was already seen earlier in the list."""
    return remove_duplicates(transactions)[1]


def remove_duplicates(transactions: Iterable[Transaction]) -> tuple[list[Transaction], list[Transaction]]:
    """Split transactions into (kept, removed), keeping first occurrences."""
    seen: set[DuplicateKey] = set()
    kept, removed = [], []
    for txn in transactions:
        key = duplicate_key(txn)
        if key in seen:
            removed.append(txn)
        else:
            seen.add(key)
            kept.append(txn)
    return kept, removed


class DuplicateService:
    """Service for reporting and removing duplicate transactions.

    The key is approximate (two same-day purchases of the same amount at the
    same merchant collide), so removal is only ever an explicit action.
    """

    def __init__(self, db: Database):
        """Initialize duplicate service.

        Args:
            db: Database instance
        """
        self.db = db

    def find_duplicates(self) -> list[Transaction]:
        """Return the transactions that would be removed."""
        return find_duplicates(self.db.list_transactions())

    def duplicate_count(self) -> int:
        """Return the number of duplicate transactions in the current set."""
        return len(self.find_duplicates())

    def remove_duplicates(self) -> int:
        """Delete all current duplicates, keeping first occurrences.

        Returns:
            Number of transactions removed
        """
        duplicates = self.find_duplicates()
        removed = self.db.delete_transactions([txn.id for txn in duplicates])
        logger.info("Removed %d duplicate transactions", removed)
        return removed
