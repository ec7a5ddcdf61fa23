"""Mapper functions to convert between domain models and SQLAlchemy models."""

from spendwise.domain import entities as domain
from spendwise.database.models import (
    Transaction as ORMTransaction,
    SnapshotTransaction as ORMSnapshotTransaction,
)


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.transaction_id,
        date=orm_transaction.date,
        description=orm_transaction.description,
        amount=orm_transaction.amount,
        category=orm_transaction.category,
    )


def snapshot_transaction_to_domain(orm_row: ORMSnapshotTransaction) -> domain.Transaction:
    """Convert a snapshot row back to a domain Transaction entity."""
    return domain.Transaction(
        id=orm_row.transaction_id,
        date=orm_row.date,
        description=orm_row.description,
        amount=orm_row.amount,
        category=orm_row.category,
    )


def transaction_to_orm(transaction: domain.Transaction) -> ORMTransaction:
    """Build a SQLAlchemy Transaction row from a domain entity."""
    return ORMTransaction(
        transaction_id=transaction.id,
        date=transaction.date,
        description=transaction.description,
        amount=transaction.amount,
        category=transaction.category,
    )


def transaction_to_snapshot_orm(transaction: domain.Transaction) -> ORMSnapshotTransaction:
    """Build a snapshot row from a domain entity."""
    return ORMSnapshotTransaction(
        transaction_id=transaction.id,
        date=transaction.date,
        description=transaction.description,
        amount=transaction.amount,
        category=transaction.category,
    )
