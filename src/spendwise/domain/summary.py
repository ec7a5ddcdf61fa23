"""Summary grouping domain service."""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, Optional

from spendwise.database.base import Database
from spendwise.domain.categories import is_expense_category
from spendwise.domain.entities import (
    CategoryTotal,
    PeriodTotal,
    SpendingInsights,
    Transaction,
)
from spendwise.logging_setup import get_logger
from spendwise.utils.amount_parser import round_amount
from spendwise.utils.date_parser import month_key, parse_statement_date, week_start

logger = get_logger(__name__)


def expense_transactions(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Return debits in categories that count as spending."""
    return [
        txn for txn in transactions if txn.amount < 0 and is_expense_category(txn.category)
    ]


class SummaryService:
    """Service for grouping categorized transactions."""

    def __init__(self, db: Database, reference_date: Optional[date] = None):
        """Initialize summary service.

        Args:
            db: Database instance
            reference_date: Date used to infer years of "M/D" dates (defaults to today)
        """
        self.db = db
        self.reference_date = reference_date

    def _expenses(self, transactions: Optional[list[Transaction]]) -> list[Transaction]:
        if transactions is None:
            transactions = self.db.list_transactions()
        return expense_transactions(transactions)

    def category_totals(self, transactions: Optional[list[Transaction]] = None) -> list[CategoryTotal]:
        """Spending per category, largest first."""
        totals: dict[str, Decimal] = defaultdict(Decimal)
        counts: dict[str, int] = defaultdict(int)
        for txn in self._expenses(transactions):
            totals[txn.category] += abs(txn.amount)
            counts[txn.category] += 1
        return sorted(
            (CategoryTotal(cat, round_amount(total), counts[cat]) for cat, total in totals.items()),
            key=lambda ct: (-ct.total, ct.category),
        )

    def monthly_totals(self, transactions: Optional[list[Transaction]] = None) -> list[PeriodTotal]:
        """Spending per calendar month ("YYYY-MM"), oldest first."""
        return self._period_totals(self._expenses(transactions), month_key)

    def weekly_totals(self, transactions: Optional[list[Transaction]] = None) -> list[PeriodTotal]:
        """Spending per week, keyed by the ISO date of its Monday, oldest first."""
        return self._period_totals(self._expenses(transactions), lambda d: week_start(d).isoformat())

    def _period_totals(
        self, transactions: list[Transaction], bucket: Callable[[date], str]
    ) -> list[PeriodTotal]:
        reference = self.reference_date or date.today()
        by_period: dict[str, dict[str, Decimal]] = defaultdict(lambda: defaultdict(Decimal))
        for txn in transactions:
            try:
                day = parse_statement_date(txn.date, reference)
            except ValueError:
                logger.debug("Skipping transaction %s with unparseable date %r", txn.id, txn.date)
                continue
            by_period[bucket(day)][txn.category] += abs(txn.amount)

        return [
            PeriodTotal(
                period=period,
                total=round_amount(sum(categories.values(), Decimal("0"))),
                by_category={cat: round_amount(v) for cat, v in categories.items()},
            )
            for period, categories in sorted(by_period.items())
        ]

    def insights(self, transactions: Optional[list[Transaction]] = None) -> SpendingInsights:
        """Headline figures: total, count, average, largest expense, top category."""
        expenses = self._expenses(transactions)
        if not expenses:
            return SpendingInsights(Decimal("0.00"), 0, Decimal("0.00"), None, None)

        total = sum((abs(txn.amount) for txn in expenses), Decimal("0"))
        largest = max(expenses, key=lambda txn: abs(txn.amount))
        top = self.category_totals(expenses)[0].category
        return SpendingInsights(
            total=round_amount(total),
            count=len(expenses),
            average=round_amount(total / len(expenses)),
            largest=largest,
            top_category=top,
        )
