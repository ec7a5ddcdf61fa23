"""Field extraction: raw statement bytes to rows and lines of text."""

import csv
import io
from pathlib import PurePath
from typing import Any, Iterable, Optional

import pdfplumber

from spendwise.domain.entities import ExtractedDocument
from spendwise.domain.errors import (
    ExtractionError,
    UnsupportedFileError,
    pdf_extraction_failed,
    unsupported_file,
)
from spendwise.logging_setup import get_logger

logger = get_logger(__name__)

CSV = "csv"
PDF = "pdf"

_CSV_TYPES = {"text/csv", "application/csv"}
_PDF_TYPES = {"application/pdf", "application/x-pdf"}

DEFAULT_Y_TOLERANCE = 3.0


def detect_file_kind(filename: str, content_type: Optional[str] = None) -> str:
    """Decide whether a file is a CSV or PDF statement.

    Args:
        filename: Original file name
        content_type: Optional MIME type reported by the uploader

    Returns:
        "csv" or "pdf"

    Raises:
        UnsupportedFileError: If neither extension nor MIME type is recognized
    """
    suffix = PurePath(filename).suffix.lower()
    if suffix == ".csv":
        return CSV
    if suffix == ".pdf":
        return PDF
    if not suffix and content_type in _CSV_TYPES:
        return CSV
    if not suffix and content_type in _PDF_TYPES:
        return PDF
    raise UnsupportedFileError(unsupported_file(filename))


def decode_text(content: bytes) -> str:
    """Decode CSV bytes as UTF-8, tolerating a BOM and stray bytes."""
    return content.decode("utf-8-sig", errors="replace")


def read_csv_rows(text: str) -> list[list[str]]:
    """Split CSV text into data rows.

    The first line is a header and is dropped without validation. Quoted
    fields may contain commas. Blank rows are skipped.
    """
    rows = []
    reader = csv.reader(io.StringIO(text.lstrip("\ufeff")))
    for index, row in enumerate(reader):
        if index == 0:
            continue
        fields = [field.strip() for field in row]
        if not any(fields):
            continue
        rows.append(fields)
    return rows


def group_words_into_lines(
    words: Iterable[dict[str, Any]], y_tolerance: float = DEFAULT_Y_TOLERANCE
) -> list[str]:
    """Rebuild text lines from positioned word fragments.

    Fragments whose ``top`` lies within ``y_tolerance`` of a line's first
    fragment belong to that line. Lines come out top-to-bottom with their
    fragments ordered left-to-right by ``x0``.

    Args:
        words: Dicts with at least "text", "x0" and "top" keys (the shape
            pdfplumber's ``extract_words`` returns)
        y_tolerance: Maximum vertical distance for fragments on one line

    Returns:
        List of line strings
    """
    lines: list[tuple[float, list[dict[str, Any]]]] = []
    for word in sorted(words, key=lambda w: (float(w["top"]), float(w["x0"]))):
        text = str(word.get("text", "")).strip()
        if not text:
            continue
        top = float(word["top"])
        if lines and abs(top - lines[-1][0]) <= y_tolerance:
            lines[-1][1].append(word)
        else:
            lines.append((top, [word]))

    result = []
    for _, fragments in lines:
        fragments.sort(key=lambda w: float(w["x0"]))
        result.append(" ".join(str(w["text"]).strip() for w in fragments))
    return result


def extract_pdf_lines(
    content: bytes,
    filename: str = "statement.pdf",
    y_tolerance: float = DEFAULT_Y_TOLERANCE,
) -> ExtractedDocument:
    """Extract reading-order lines from every page of a PDF.

    Args:
        content: Raw PDF bytes
        filename: Used in error messages
        y_tolerance: Vertical tolerance for line grouping

    Returns:
        ExtractedDocument with all lines of all pages, in page order

    Raises:
        ExtractionError: If the PDF cannot be opened or read
    """
    lines: list[str] = []
    try:
        with pdfplumber.open(io.BytesIO(content)) as pdf:
            page_count = len(pdf.pages)
            for page_number, page in enumerate(pdf.pages, start=1):
                words = page.extract_words()
                page_lines = group_words_into_lines(words, y_tolerance=y_tolerance)
                logger.debug("Page %d of %s: %d lines", page_number, filename, len(page_lines))
                lines.extend(page_lines)
    except Exception as e:
        logger.warning("PDF extraction failed for %s: %s", filename, e)
        raise ExtractionError(pdf_extraction_failed(filename)) from e

    return ExtractedDocument(lines=tuple(lines), page_count=page_count)
