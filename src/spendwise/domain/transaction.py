"""Transaction domain service."""

from typing import Optional

from spendwise.database.base import Database
from spendwise.domain.categories import DEFAULT_CATEGORY, is_valid_category
from spendwise.domain.categorization import CategorizationService, learned_key
from spendwise.domain.entities import SmartHint, Transaction
from spendwise.domain.errors import (
    NotFoundError,
    ValidationError,
    transaction_not_found,
    unknown_category,
)
from spendwise.logging_setup import get_logger

logger = get_logger(__name__)


class TransactionService:
    """Service for managing the transaction list."""

    def __init__(self, db: Database, categorizer: Optional[CategorizationService] = None):
        """Initialize transaction service.

        Args:
            db: Database instance
            categorizer: Categorization service (defaults to one on db's learned store)
        """
        self.db = db
        self.categorizer = categorizer or CategorizationService(db.learned_categories)

    def list_transactions(self, category: Optional[str] = None) -> list[Transaction]:
        """List transactions in order, optionally only one category."""
        transactions = self.db.list_transactions()
        if category is not None:
            transactions = [txn for txn in transactions if txn.category == category]
        return transactions

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def update_category(self, transaction_id: str, category: str) -> list[Transaction]:
        """Set a transaction's category and apply it to identical descriptions.

        Every transaction whose lowercased description equals the edited one
        gets the same category, and the choice is learned for future uploads.

        Args:
            transaction_id: Transaction ID
            category: New category label

        Returns:
            The transactions whose category was set (including the edited one)

        Raises:
            ValidationError: If the category is unknown
            NotFoundError: If the transaction doesn't exist
        """
        if not is_valid_category(category):
            raise ValidationError(unknown_category(category))
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        self.categorizer.learn(txn.description, category)

        key = learned_key(txn.description)
        matching = [
            other for other in self.db.list_transactions() if learned_key(other.description) == key
        ]
        self.db.update_transaction_categories({other.id: category for other in matching})
        logger.info("Set %d transaction(s) matching %r to %s", len(matching), key, category)
        return matching

    def refresh_categories(self) -> int:
        """Re-run categorization over every transaction.

        Returns:
            Number of transactions whose category changed
        """
        updates = {}
        for txn in self.db.list_transactions():
            category = self.categorizer.categorize(txn.description)
            if category != txn.category:
                updates[txn.id] = category
        self.db.update_transaction_categories(updates)
        logger.info("Refresh changed %d categories", len(updates))
        return len(updates)

    def get_suggestions(self) -> list[tuple[Transaction, SmartHint]]:
        """Return smart hints for uncategorized transactions."""
        suggestions = []
        for txn in self.db.list_transactions():
            if txn.category != DEFAULT_CATEGORY:
                continue
            hint = self.categorizer.suggest(txn.description)
            if hint is not None:
                suggestions.append((txn, hint))
        return suggestions

    def accept_suggestions(self) -> int:
        """Apply every current smart hint. Returns the number applied."""
        updates = {txn.id: hint.category for txn, hint in self.get_suggestions()}
        self.db.update_transaction_categories(updates)
        return len(updates)

    def delete_transaction(self, transaction_id: str) -> None:
        """Delete one transaction.

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        if self.db.delete_transactions([transaction_id]) == 0:
            raise NotFoundError(transaction_not_found(transaction_id))

    def clear_transactions(self) -> int:
        """Delete every transaction. Returns the number deleted."""
        return self.db.clear_transactions()

    def undo_last_upload(self) -> int:
        """Restore the transaction list saved before the last upload.

        Only one upload generation is kept; the snapshot is consumed.

        Returns:
            Number of transactions after the restore

        Raises:
            NotFoundError: If there is no upload to undo
        """
        snapshot = self.db.load_snapshot()
        if snapshot is None:
            raise NotFoundError("Nothing to undo")
        self.db.replace_transactions(snapshot)
        self.db.clear_snapshot()
        logger.info("Restored %d transactions from upload snapshot", len(snapshot))
        return len(snapshot)
