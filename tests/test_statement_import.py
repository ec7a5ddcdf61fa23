"""Tests for statement parsing and import."""

from decimal import Decimal

import pytest

from spendwise.domain.categorization import CategorizationService
from spendwise.domain.entities import ExtractedDocument, StatementFile
from spendwise.domain.errors import ExtractionError, NotFoundError, UnsupportedFileError
from spendwise.domain.statement_import import (
    STATUS_EMPTY,
    STATUS_FAILED,
    STATUS_IMPORTED,
    STATUS_UNSUPPORTED,
    StatementParser,
)
from spendwise.domain.transaction import TransactionService

STARBUCKS_CSV = b"Date,Description,Amount\n01/15/2026,STARBUCKS STORE 123,-5.75\n"


def csv_file(text, filename="activity.csv"):
    return StatementFile(filename=filename, content=text.encode("utf-8"))


def test_csv_import_keeps_sign_and_categorizes(import_service):
    transactions = import_service.parse_file(StatementFile("activity.csv", STARBUCKS_CSV))

    assert len(transactions) == 1
    txn = transactions[0]
    assert txn.id == "txn-0001"
    assert txn.date == "01/15/2026"
    assert txn.description == "STARBUCKS STORE 123"
    assert txn.amount == Decimal("-5.75")
    assert txn.category == "Coffee & Bakery"


def test_csv_credits_stay_positive(import_service):
    transactions = import_service.parse_file(
        csv_file("Date,Description,Amount\n03/02/2026,PAYMENT THANK YOU,500.00\n")
    )
    assert transactions[0].amount == Decimal("500.00")
    assert transactions[0].category == "Payment"


def test_csv_skips_malformed_rows(import_service):
    text = (
        "Posted,Payee,Amount,Balance\n"
        "03/02/2026,WHOLE FOODS MARKET,-54.20,946.80\n"
        "not a row\n"
        "03/03/2026,,\n"
        '03/04/2026,"UBER, TRIP",-12.00,934.80\n'
    )
    transactions = import_service.parse_file(csv_file(text))
    assert [(t.description, t.amount) for t in transactions] == [
        ("WHOLE FOODS MARKET", Decimal("-54.20")),
        ("UBER, TRIP", Decimal("-12.00")),
    ]


def test_repeated_statement_lines_are_dropped(import_service):
    text = (
        "Date,Description,Amount\n"
        "03/02/2026,NETFLIX.COM,-15.49\n"
        "03/02/2026,Netflix.com,-15.49\n"
        "03/09/2026,NETFLIX.COM,-15.49\n"
    )
    transactions = import_service.parse_file(csv_file(text))
    assert [t.date for t in transactions] == ["03/02/2026", "03/09/2026"]


def test_pdf_amounts_are_stored_as_expenses(import_service, fake_pdf):
    fake_pdf([["3/12 AMAZON.COM*AB1C2 45.00", "3/15 REFUND BOOKSHOP -20.00"]])

    transactions = import_service.parse_file(StatementFile("march.pdf", b"%PDF-1.4"))

    assert [(t.description, t.amount) for t in transactions] == [
        ("AMAZON.COM*AB1C2", Decimal("-45.00")),
        ("REFUND BOOKSHOP", Decimal("-20.00")),
    ]
    assert transactions[0].category == "Shopping"


def test_pdf_repeated_summary_page_is_dropped(import_service, fake_pdf):
    fake_pdf([["3/12 UBER TRIP 9.10"], ["Account summary", "3/12 UBER TRIP 9.10"]])

    transactions = import_service.parse_file(StatementFile("march.pdf", b"%PDF-1.4"))

    assert len(transactions) == 1


def test_pdf_falls_back_to_whole_text(import_service, fake_pdf):
    fake_pdf([["3/12", "LYFT RIDE", "18.40"]])

    transactions = import_service.parse_file(StatementFile("march.pdf", b"%PDF-1.4"))

    assert [(t.date, t.description, t.amount) for t in transactions] == [
        ("3/12", "LYFT RIDE", Decimal("-18.40"))
    ]


def test_parser_accepts_extracted_document(categorizer):
    ids = iter(["first", "second"])
    parser = StatementParser(categorizer, id_factory=lambda: next(ids))

    document = ExtractedDocument(lines=("3/12 SAFEWAY #1234 62.05", "3/13 SHELL OIL 40.00"), page_count=1)
    transactions = parser.parse_pdf(document)

    assert [t.id for t in transactions] == ["first", "second"]
    assert [t.category for t in transactions] == ["Groceries", "Transport"]


def test_import_uses_learned_categories(temp_db, import_service):
    CategorizationService(temp_db.learned_categories).learn("STARBUCKS STORE 999", "Dining")

    transactions = import_service.parse_file(StatementFile("activity.csv", STARBUCKS_CSV))

    # Same core name as the learned description
    assert transactions[0].category == "Dining"


def test_parse_file_rejects_unsupported_file(import_service):
    with pytest.raises(UnsupportedFileError):
        import_service.parse_file(StatementFile("receipt.png", b"\x89PNG"))


def test_parse_file_raises_extraction_error(import_service):
    with pytest.raises(ExtractionError):
        import_service.parse_file(StatementFile("march.pdf", b"garbage"))


def test_import_file_stores_transactions(temp_db, import_service):
    result = import_service.import_file(StatementFile("activity.csv", STARBUCKS_CSV))

    assert result.status == STATUS_IMPORTED
    assert result.count == 1
    assert temp_db.list_transactions() == list(result.transactions)


def test_import_file_reports_empty_statement(temp_db, import_service):
    result = import_service.import_file(csv_file("Date,Description,Amount\n"))

    assert result.status == STATUS_EMPTY
    assert result.message == "No transactions found in 'activity.csv'"
    assert temp_db.list_transactions() == []


def test_failed_file_does_not_abort_batch(temp_db, import_service, monkeypatch):
    def broken_open(stream):
        raise ValueError("bad xref table")

    monkeypatch.setattr("spendwise.domain.extraction.pdfplumber.open", broken_open)

    result = import_service.import_files(
        [
            StatementFile("photo.jpg", b"\xff\xd8"),
            StatementFile("corrupt.pdf", b"%PDF-1.4"),
            StatementFile("activity.csv", STARBUCKS_CSV),
        ]
    )

    assert [f.status for f in result.files] == [STATUS_UNSUPPORTED, STATUS_FAILED, STATUS_IMPORTED]
    assert "CSV export" in result.files[1].message
    assert result.imported == 1
    assert len(temp_db.list_transactions()) == 1


def test_batch_files_are_appended_in_order(temp_db, import_service):
    result = import_service.import_files(
        [
            csv_file("Date,Description,Amount\n03/01/2026,SAFEWAY,-10.00\n", "a.csv"),
            csv_file("Date,Description,Amount\n03/02/2026,UBER TRIP,-8.00\n", "b.csv"),
        ]
    )

    assert [t.description for t in result.transactions] == ["SAFEWAY", "UBER TRIP"]
    assert [t.description for t in temp_db.list_transactions()] == ["SAFEWAY", "UBER TRIP"]


def test_undo_restores_list_before_last_upload(temp_db, import_service):
    import_service.import_files([csv_file("Date,Description,Amount\n03/01/2026,SAFEWAY,-10.00\n")])
    before = temp_db.list_transactions()
    import_service.import_files([StatementFile("activity.csv", STARBUCKS_CSV)])
    assert len(temp_db.list_transactions()) == 2

    service = TransactionService(temp_db)
    assert service.undo_last_upload() == 1
    assert temp_db.list_transactions() == before


def test_undo_keeps_only_one_generation(temp_db, import_service):
    import_service.import_files([csv_file("Date,Description,Amount\n03/01/2026,SAFEWAY,-10.00\n")])
    import_service.import_files([StatementFile("activity.csv", STARBUCKS_CSV)])

    service = TransactionService(temp_db)
    service.undo_last_upload()

    with pytest.raises(NotFoundError, match="Nothing to undo"):
        service.undo_last_upload()
    assert len(temp_db.list_transactions()) == 1
