"""Statement import domain service."""

from typing import Callable, Iterable, Optional, Sequence
import uuid

from spendwise.database.base import Database
from spendwise.domain.categorization import CategorizationService
from spendwise.domain.entities import (
    CandidateTransaction,
    ExtractedDocument,
    FileImportResult,
    ImportBatchResult,
    StatementFile,
    Transaction,
)
from spendwise.domain.errors import (
    DomainError,
    ExtractionError,
    UnsupportedFileError,
    no_transactions_found,
)
from spendwise.domain.extraction import (
    CSV,
    DEFAULT_Y_TOLERANCE,
    decode_text,
    detect_file_kind,
    extract_pdf_lines,
    read_csv_rows,
)
from spendwise.domain.line_parsers import (
    DEFAULT_LINE_PARSERS,
    LineParser,
    WholeTextParser,
    parse_csv_fields,
    parse_line,
)
from spendwise.domain.merchant import description_key
from spendwise.logging_setup import get_logger

logger = get_logger(__name__)

STATUS_IMPORTED = "imported"
STATUS_EMPTY = "empty"
STATUS_UNSUPPORTED = "unsupported"
STATUS_FAILED = "failed"


def new_transaction_id() -> str:
    """Default transaction ID factory."""
    return uuid.uuid4().hex


class StatementParser:
    """Turns extracted statement text into categorized transactions."""

    def __init__(
        self,
        categorizer: CategorizationService,
        id_factory: Callable[[], str] = new_transaction_id,
        line_parsers: Sequence[LineParser] = DEFAULT_LINE_PARSERS,
        fallback_parser: Optional[WholeTextParser] = None,
    ):
        """Initialize statement parser.

        Args:
            categorizer: Categorization service used to set initial categories
            id_factory: Callable returning a fresh transaction ID
            line_parsers: Ordered PDF line strategies
            fallback_parser: Whole-text recovery parser
        """
        self.categorizer = categorizer
        self.id_factory = id_factory
        self.line_parsers = tuple(line_parsers)
        self.fallback_parser = fallback_parser or WholeTextParser()

    def parse_csv(self, text: str) -> list[Transaction]:
        """Parse CSV statement text. CSV amounts keep their sign."""
        candidates = (parse_csv_fields(fields) for fields in read_csv_rows(text))
        return self._accept(c for c in candidates if c is not None)

    def parse_pdf(self, document: ExtractedDocument) -> list[Transaction]:
        """Parse extracted PDF lines, falling back to whole-text matching.

        Purchase statements list spending as positive numbers, so every
        amount is stored as an expense.
        """
        candidates = []
        for line in document.lines:
            candidate = parse_line(line, self.line_parsers)
            if candidate is not None:
                candidates.append(candidate)

        if not candidates:
            candidates = list(self.fallback_parser.parse(document.text))
            if candidates:
                logger.info("Line matching found nothing; whole-text fallback found %d", len(candidates))

        return self._accept(
            CandidateTransaction(
                date=c.date, description=c.description, amount=-abs(c.amount)
            )
            for c in candidates
        )

    def _accept(self, candidates: Iterable[CandidateTransaction]) -> list[Transaction]:
        """Build transactions, dropping repeats of a (date, description) pair."""
        seen: set[tuple[str, str]] = set()
        transactions = []
        for candidate in candidates:
            key = (candidate.date, description_key(candidate.description))
            if key in seen:
                logger.debug("Dropped repeated line %s %s", candidate.date, candidate.description)
                continue
            seen.add(key)
            transactions.append(
                Transaction(
                    id=self.id_factory(),
                    date=candidate.date,
                    description=candidate.description,
                    amount=candidate.amount,
                    category=self.categorizer.categorize(candidate.description),
                )
            )
        return transactions


class StatementImportService:
    """Service for importing statement files into the transaction list."""

    def __init__(
        self,
        db: Database,
        categorizer: Optional[CategorizationService] = None,
        id_factory: Callable[[], str] = new_transaction_id,
        y_tolerance: float = DEFAULT_Y_TOLERANCE,
    ):
        """Initialize statement import service.

        Args:
            db: Database instance
            categorizer: Categorization service (defaults to one on db's learned store)
            id_factory: Callable returning a fresh transaction ID
            y_tolerance: Vertical tolerance for PDF line grouping
        """
        self.db = db
        self.categorizer = categorizer or CategorizationService(db.learned_categories)
        self.parser = StatementParser(self.categorizer, id_factory=id_factory)
        self.y_tolerance = y_tolerance

    def parse_file(self, statement: StatementFile) -> list[Transaction]:
        """Parse one file without storing anything.

        Raises:
            UnsupportedFileError: If the file is not a CSV or PDF
            ExtractionError: If a PDF cannot be read
        """
        kind = detect_file_kind(statement.filename, statement.content_type)
        if kind == CSV:
            return self.parser.parse_csv(decode_text(statement.content))
        document = extract_pdf_lines(
            statement.content, filename=statement.filename, y_tolerance=self.y_tolerance
        )
        return self.parser.parse_pdf(document)

    def import_file(self, statement: StatementFile) -> FileImportResult:
        """Parse one file and append its transactions.

        Failures are reported in the result rather than raised.
        """
        logger.info("Importing %s", statement.filename)
        try:
            transactions = self.parse_file(statement)
        except UnsupportedFileError as e:
            logger.warning("Rejected %s: %s", statement.filename, e)
            return FileImportResult(statement.filename, STATUS_UNSUPPORTED, message=str(e))
        except ExtractionError as e:
            return FileImportResult(statement.filename, STATUS_FAILED, message=str(e))

        if not transactions:
            logger.info("No transactions found in %s", statement.filename)
            return FileImportResult(
                statement.filename, STATUS_EMPTY, message=no_transactions_found(statement.filename)
            )

        self.db.add_transactions(transactions)
        logger.info("Imported %d transactions from %s", len(transactions), statement.filename)
        return FileImportResult(statement.filename, STATUS_IMPORTED, transactions=tuple(transactions))

    def import_files(self, statements: Iterable[StatementFile]) -> ImportBatchResult:
        """Import an upload batch, one file at a time.

        The transaction list as it was before the batch is saved as the undo
        snapshot, replacing the snapshot of any earlier upload. A file that
        fails does not stop the rest of the batch.
        """
        self.db.save_snapshot(self.db.list_transactions())
        results = []
        for statement in statements:
            try:
                results.append(self.import_file(statement))
            except DomainError as e:
                logger.warning("Import of %s failed: %s", statement.filename, e)
                results.append(FileImportResult(statement.filename, STATUS_FAILED, message=str(e)))
        return ImportBatchResult(files=tuple(results))
