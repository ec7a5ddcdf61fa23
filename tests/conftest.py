"""Shared pytest fixtures for spendwise tests."""

import itertools
import os
import tempfile
from decimal import Decimal

import pytest

from spendwise.database.factories import create_sqlite_database
from spendwise.database.memory import InMemoryLearnedCategoryStore
from spendwise.domain.categorization import CategorizationService
from spendwise.domain.entities import Transaction
from spendwise.domain.statement_import import StatementImportService
from spendwise.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def memory_store():
    """Create an empty in-memory learned-category store."""
    return InMemoryLearnedCategoryStore()


@pytest.fixture
def categorizer(memory_store):
    """Create a CategorizationService over an in-memory store."""
    return CategorizationService(memory_store)


@pytest.fixture
def id_factory():
    """Deterministic transaction ID factory: txn-0001, txn-0002, ..."""
    counter = itertools.count(1)
    return lambda: f"txn-{next(counter):04d}"


@pytest.fixture
def import_service(temp_db, id_factory):
    """Create a StatementImportService with a temporary database."""
    return StatementImportService(temp_db, id_factory=id_factory)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def make_transaction():
    """Build domain transactions with sensible defaults."""

    def _make(id, description, amount, date="3/12", category="Other"):
        return Transaction(
            id=id,
            date=date,
            description=description,
            amount=Decimal(str(amount)),
            category=category,
        )

    return _make


@pytest.fixture
def sample_transactions(temp_db, make_transaction):
    """Store a small transaction list and return it."""
    transactions = [
        make_transaction("aaaa1111", "STARBUCKS STORE 123", "-5.75", "3/12", "Coffee & Bakery"),
        make_transaction("bbbb2222", "SAFEWAY #1234", "-82.10", "3/13", "Groceries"),
        make_transaction("cccc3333", "SQ *BLUE DOOR", "-14.00", "3/14", "Other"),
        make_transaction("dddd4444", "PAYMENT THANK YOU", "-500.00", "3/15", "Payment"),
        make_transaction("eeee5555", "starbucks store 123", "-4.25", "3/20", "Coffee & Bakery"),
    ]
    temp_db.add_transactions(transactions)
    return transactions


class FakePage:
    """Stands in for a pdfplumber page."""

    def __init__(self, words):
        self._words = words

    def extract_words(self):
        return list(self._words)


class FakePDF:
    """Stands in for the object returned by ``pdfplumber.open``."""

    def __init__(self, pages):
        self.pages = [FakePage(words) for words in pages]

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False


def words_for_lines(lines, line_height=12.0, char_width=5.0):
    """Lay out text lines as pdfplumber-style word dicts."""
    words = []
    for row, line in enumerate(lines):
        x = 10.0
        for token in line.split():
            words.append({"text": token, "x0": x, "top": 50.0 + row * line_height})
            x += (len(token) + 1) * char_width
    return words


@pytest.fixture
def fake_pdf(monkeypatch):
    """Patch ``pdfplumber.open`` to serve pages built from text lines.

    Call the fixture with a list of pages, each a list of text lines.
    """

    def _install(pages):
        pdf = FakePDF([words_for_lines(lines) for lines in pages])
        monkeypatch.setattr("spendwise.domain.extraction.pdfplumber.open", lambda stream: pdf)
        return pdf

    return _install


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
