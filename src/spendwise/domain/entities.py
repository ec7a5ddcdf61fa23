"""Domain model entities for spendwise.

These are pure data classes representing business concepts, independent of
database schema and of the file formats statements arrive in.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    ``date`` keeps the statement's native text (``MM/DD`` or ``MM/DD/YYYY``);
    the calendar year is only inferred when grouping.
    """

    id: str
    date: str
    description: str
    amount: Decimal
    category: str = "Other"


@dataclass(frozen=True)
class CandidateTransaction:
    """A transaction-shaped match produced by a parser, before id and category."""

    date: str
    description: str
    amount: Decimal


@dataclass(frozen=True)
class SmartHint:
    """Non-binding category suggestion for an uncategorized transaction."""

    pattern: str
    category: str
    reason: str


@dataclass(frozen=True)
class ExtractedDocument:
    """Text recovered from a PDF, in reading order."""

    lines: tuple[str, ...]
    page_count: int

    @property
    def text(self) -> str:
        """All lines joined into one block for whole-text matching."""
        return "\n".join(self.lines)


@dataclass(frozen=True)
class FileImportResult:
    """Outcome of importing one file from an upload batch."""

    filename: str
    status: str
    transactions: tuple[Transaction, ...] = ()
    message: Optional[str] = None

    @property
    def count(self) -> int:
        return len(self.transactions)


@dataclass(frozen=True)
class ImportBatchResult:
    """Outcome of an upload batch of one or more files."""

    files: tuple[FileImportResult, ...] = field(default_factory=tuple)

    @property
    def imported(self) -> int:
        return sum(result.count for result in self.files)

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return tuple(txn for result in self.files for txn in result.transactions)


@dataclass(frozen=True)
class CategoryTotal:
    """Spending total for one category."""

    category: str
    total: Decimal
    count: int


@dataclass(frozen=True)
class PeriodTotal:
    """Spending total for one month or week bucket."""

    period: str
    total: Decimal
    by_category: dict[str, Decimal]


@dataclass(frozen=True)
class SpendingInsights:
    """Headline figures over the expense transactions."""

    total: Decimal
    count: int
    average: Decimal
    largest: Optional[Transaction]
    top_category: Optional[str]


@dataclass(frozen=True)
class StatementFile:
    """A file handed over for import."""

    filename: str
    content: bytes
    content_type: Optional[str] = None
