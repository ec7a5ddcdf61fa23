"""Generic SQLAlchemy database implementation."""

from typing import Callable, Optional
from sqlalchemy.orm import Session

from spendwise.database.base import Database, LearnedCategoryStore
from spendwise.database.models import (
    LearnedCategory,
    SnapshotTransaction,
    Transaction,
    UploadSnapshot,
    create_session_factory,
)
from spendwise.database.mappers import (
    snapshot_transaction_to_domain,
    transaction_to_domain,
    transaction_to_orm,
    transaction_to_snapshot_orm,
)
from spendwise.domain.entities import Transaction as DomainTransaction


class SQLAlchemyLearnedCategoryStore(LearnedCategoryStore):
    """Learned-category store on the ``learned_categories`` table."""

    def __init__(self, get_session: Callable[[], Session]):
        self._get_session = get_session

    def get(self, key: str) -> Optional[str]:
        session = self._get_session()
        row = session.get(LearnedCategory, key)
        return row.category if row is not None else None

    def set(self, key: str, category: str) -> None:
        session = self._get_session()
        row = session.get(LearnedCategory, key)
        if row is None:
            session.add(LearnedCategory(key=key, category=category))
        else:
            row.category = category
        session.commit()

    def clear(self) -> int:
        session = self._get_session()
        count = session.query(LearnedCategory).delete()
        session.commit()
        return count

    def items(self) -> list[tuple[str, str]]:
        session = self._get_session()
        rows = session.query(LearnedCategory).order_by(LearnedCategory.key).all()
        return [(row.key, row.category) for row in rows]

    def count(self) -> int:
        session = self._get_session()
        return session.query(LearnedCategory).count()


class SQLAlchemyDatabase(Database):
    """SQLAlchemy-based implementation of Database interface."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy database.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None
        self._learned = SQLAlchemyLearnedCategoryStore(self._get_session)

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    @property
    def learned_categories(self) -> LearnedCategoryStore:
        return self._learned

    # Transaction operations
    def add_transactions(self, transactions: list[DomainTransaction]) -> None:
        """Append transactions, preserving their order."""
        session = self._get_session()
        session.add_all([transaction_to_orm(txn) for txn in transactions])
        session.commit()

    def list_transactions(self) -> list[DomainTransaction]:
        """List all transactions in insertion order."""
        session = self._get_session()
        rows = session.query(Transaction).order_by(Transaction.id).all()
        return [transaction_to_domain(row) for row in rows]

    def get_transaction(self, transaction_id: str) -> Optional[DomainTransaction]:
        """Get transaction by ID."""
        session = self._get_session()
        row = (
            session.query(Transaction)
            .filter(Transaction.transaction_id == transaction_id)
            .first()
        )
        if row is None:
            return None
        return transaction_to_domain(row)

    def update_transaction_categories(self, updates: dict[str, str]) -> None:
        """Set the category of each transaction ID in ``updates``."""
        if not updates:
            return
        session = self._get_session()
        rows = (
            session.query(Transaction)
            .filter(Transaction.transaction_id.in_(list(updates)))
            .all()
        )
        for row in rows:
            row.category = updates[row.transaction_id]
        session.commit()

    def delete_transactions(self, transaction_ids: list[str]) -> int:
        """Delete transactions by ID. Returns the number deleted."""
        if not transaction_ids:
            return 0
        session = self._get_session()
        count = (
            session.query(Transaction)
            .filter(Transaction.transaction_id.in_(transaction_ids))
            .delete(synchronize_session=False)
        )
        session.commit()
        return count

    def clear_transactions(self) -> int:
        """Delete all transactions. Returns the number deleted."""
        session = self._get_session()
        count = session.query(Transaction).delete()
        session.commit()
        return count

    def replace_transactions(self, transactions: list[DomainTransaction]) -> None:
        """Replace the whole transaction list."""
        session = self._get_session()
        session.query(Transaction).delete()
        session.add_all([transaction_to_orm(txn) for txn in transactions])
        session.commit()

    # Upload snapshot operations
    def save_snapshot(self, transactions: list[DomainTransaction]) -> None:
        """Save the pre-upload transaction list, discarding any older snapshot."""
        session = self._get_session()
        self._delete_snapshots(session)
        snapshot = UploadSnapshot()
        snapshot.transactions = [transaction_to_snapshot_orm(txn) for txn in transactions]
        session.add(snapshot)
        session.commit()

    def load_snapshot(self) -> Optional[list[DomainTransaction]]:
        """Return the saved snapshot, or None if there is none."""
        session = self._get_session()
        snapshot = session.query(UploadSnapshot).order_by(UploadSnapshot.id.desc()).first()
        if snapshot is None:
            return None
        return [snapshot_transaction_to_domain(row) for row in snapshot.transactions]

    def clear_snapshot(self) -> None:
        """Discard the saved snapshot."""
        session = self._get_session()
        self._delete_snapshots(session)
        session.commit()

    def _delete_snapshots(self, session: Session) -> None:
        session.query(SnapshotTransaction).delete()
        session.query(UploadSnapshot).delete()
