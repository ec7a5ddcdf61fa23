"""Tests for Database interface returning domain models."""

import pytest
from decimal import Decimal

from spendwise.database.factories import create_sqlite_database
from spendwise.database.memory import InMemoryLearnedCategoryStore
from spendwise.domain import entities


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_list_transactions_returns_domain_models(self, temp_db, sample_transactions):
        transactions = temp_db.list_transactions()

        assert len(transactions) == 5
        for txn in transactions:
            assert isinstance(txn, entities.Transaction)
            assert isinstance(txn.amount, Decimal)

    def test_get_transaction_returns_domain_model(self, temp_db, sample_transactions):
        txn = temp_db.get_transaction("cccc3333")

        assert isinstance(txn, entities.Transaction)
        assert txn == sample_transactions[2]

    def test_get_missing_transaction(self, temp_db):
        assert temp_db.get_transaction("missing") is None

    def test_update_transaction_categories(self, temp_db, sample_transactions):
        temp_db.update_transaction_categories({"aaaa1111": "Dining", "bbbb2222": "Shopping"})

        assert temp_db.get_transaction("aaaa1111").category == "Dining"
        assert temp_db.get_transaction("bbbb2222").category == "Shopping"
        assert temp_db.get_transaction("cccc3333").category == "Other"

    def test_delete_transactions_counts_only_existing(self, temp_db, sample_transactions):
        assert temp_db.delete_transactions(["aaaa1111", "missing"]) == 1
        assert temp_db.delete_transactions([]) == 0

    def test_replace_transactions(self, temp_db, sample_transactions, make_transaction):
        replacement = [make_transaction("new1", "UBER TRIP", "-9.10"), sample_transactions[0]]

        temp_db.replace_transactions(replacement)

        assert temp_db.list_transactions() == replacement

    def test_snapshot_round_trip(self, temp_db, sample_transactions):
        assert temp_db.load_snapshot() is None

        temp_db.save_snapshot(sample_transactions[:2])
        temp_db.save_snapshot(sample_transactions[2:])

        assert temp_db.load_snapshot() == sample_transactions[2:]
        temp_db.clear_snapshot()
        assert temp_db.load_snapshot() is None

    def test_empty_snapshot_is_not_missing(self, temp_db):
        temp_db.save_snapshot([])
        assert temp_db.load_snapshot() == []

    def test_data_survives_reconnect(self, temp_db, sample_transactions):
        temp_db.learned_categories.set("safeway", "Groceries")
        temp_db.disconnect()

        reopened = create_sqlite_database(database_path=temp_db.database_path)
        reopened.connect()
        try:
            assert len(reopened.list_transactions()) == 5
            assert reopened.learned_categories.get("safeway") == "Groceries"
        finally:
            reopened.disconnect()


@pytest.fixture(params=["sqlite", "memory"])
def store(request, temp_db):
    if request.param == "sqlite":
        return temp_db.learned_categories
    return InMemoryLearnedCategoryStore()


class TestLearnedCategoryStore:
    """Both store implementations behave the same."""

    def test_get_missing_key(self, store):
        assert store.get("unknown") is None

    def test_set_overwrites(self, store):
        store.set("joes pizza", "Dining")
        store.set("joes pizza", "Bars")

        assert store.get("joes pizza") == "Bars"
        assert store.count() == 1

    def test_clear_returns_count(self, store):
        store.set("a", "Dining")
        store.set("b", "Bars")

        assert store.clear() == 2
        assert store.items() == []


class TestFactory:
    """Database location resolution."""

    def test_environment_variable(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SPENDWISE_DB_PATH", str(tmp_path / "env.db"))

        db = create_sqlite_database()

        assert db.database_url == f"sqlite:///{tmp_path / 'env.db'}"

    def test_explicit_path_wins(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SPENDWISE_DB_PATH", str(tmp_path / "env.db"))

        db = create_sqlite_database(str(tmp_path / "explicit.db"))

        assert db.database_url.endswith("explicit.db")

    def test_memory_database(self, make_transaction):
        db = create_sqlite_database(":memory:")
        db.connect()
        try:
            db.add_transactions([make_transaction("a", "SAFEWAY", "-10.00")])
            assert [t.id for t in db.list_transactions()] == ["a"]
        finally:
            db.disconnect()
