"""SQLAlchemy models for spendwise database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Numeric,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Transaction(Base):
    """Transaction model. Row ``id`` gives the list order."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    transaction_id = Column(String, unique=True, nullable=False)
    date = Column(String, nullable=False)
    description = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    category = Column(String, nullable=False, default="Other")
    imported_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class LearnedCategory(Base):
    """Learned description/core-name -> category mapping."""

    __tablename__ = "learned_categories"

    key = Column(String, primary_key=True)
    category = Column(String, nullable=False)
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )


class UploadSnapshot(Base):
    """Marker for the single retained pre-upload snapshot."""

    __tablename__ = "upload_snapshots"

    id = Column(Integer, primary_key=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    transactions = relationship(
        "SnapshotTransaction",
        back_populates="snapshot",
        cascade="all, delete-orphan",
        order_by="SnapshotTransaction.id",
    )


class SnapshotTransaction(Base):
    """Copy of a transaction as it was before the last upload."""

    __tablename__ = "snapshot_transactions"

    id = Column(Integer, primary_key=True)
    snapshot_id = Column(Integer, ForeignKey("upload_snapshots.id"), nullable=False)
    transaction_id = Column(String, nullable=False)
    date = Column(String, nullable=False)
    description = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    category = Column(String, nullable=False)

    # Relationships
    snapshot = relationship("UploadSnapshot", back_populates="transactions")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
