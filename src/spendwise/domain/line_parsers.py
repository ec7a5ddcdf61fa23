"""Line-level parsers that turn statement text into candidate transactions.

PDF lines are tried against an ordered list of ``LineParser`` strategies;
the first one that returns a candidate wins. ``WholeTextParser`` is the
recovery path used when no line of a document matched at all.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
import re
from typing import Iterator, Optional, Sequence

from spendwise.domain.entities import CandidateTransaction
from spendwise.utils.amount_parser import looks_like_amount, parse_amount

DATE_FIELD_RE = re.compile(r"\d{1,2}[-/]\d{1,2}[-/]\d{2,4}")

_AMOUNT = r"-?\$?-?[\d,]*\d\.\d{2}"

# Foreign-currency conversion annotations printed next to the merchant
NOISE_PATTERNS = (
    re.compile(r"\d[\d,]*\.\d+\s*X\s*\d+(?:\.\d+)?\s*\(EXCHG RATE\)", re.IGNORECASE),
    re.compile(r"\(?EXCHG RATE\)?", re.IGNORECASE),
    re.compile(r"\bEXCHANGE RATE\b.*$", re.IGNORECASE),
    re.compile(
        r"\b(?:EURO|POUND STERLING|CANADIAN DOLLAR|MEXICAN PESO|JAPANESE YEN|"
        r"SWISS FRANC|AUSTRALIAN DOLLAR)\b",
        re.IGNORECASE,
    ),
)

HEADER_KEYWORDS = frozenset(
    {
        "purchase",
        "purchases",
        "payment",
        "payments",
        "date",
        "date of transaction",
        "merchant name or transaction description",
        "payments and other credits",
        "purchases and adjustments",
        "account activity",
        "transaction",
        "description",
        "amount",
        "fees charged",
        "interest charged",
    }
)
_HEADER_PREFIXES = ("date of transaction", "total ", "transaction date", "page ")

MIN_DESCRIPTION_LENGTH = 3


def clean_description(description: str) -> str:
    """Remove conversion annotations and collapse whitespace."""
    for pattern in NOISE_PATTERNS:
        description = pattern.sub(" ", description)
    return " ".join(description.split())


def is_rejected_description(description: str) -> bool:
    """Return True for descriptions that are headers or too short to be real."""
    if len(description) < MIN_DESCRIPTION_LENGTH:
        return True
    lowered = description.lower()
    if lowered in HEADER_KEYWORDS:
        return True
    return lowered.startswith(_HEADER_PREFIXES)


def _candidate(date: str, description: str, amount_text: str) -> Optional[CandidateTransaction]:
    description = clean_description(description)
    if is_rejected_description(description):
        return None
    try:
        amount = parse_amount(amount_text)
    except ValueError:
        return None
    if amount == 0:
        return None
    return CandidateTransaction(date=date, description=description, amount=amount)


class LineParser(ABC):
    """Strategy that maps one text line to at most one candidate."""

    name = "line"

    @abstractmethod
    def try_parse(self, line: str) -> Optional[CandidateTransaction]:
        """Return a candidate for the line, or None if it does not match."""
        pass


class RegexLineParser(LineParser):
    """Line parser driven by a regex with date, description and amount groups."""

    pattern: re.Pattern

    def try_parse(self, line: str) -> Optional[CandidateTransaction]:
        match = self.pattern.match(line.strip())
        if match is None:
            return None
        return _candidate(match.group("date"), match.group("description"), match.group("amount"))


class ShortDateLineParser(RegexLineParser):
    """``3/12 MERCHANT NAME 45.00`` as printed on card statements."""

    name = "short-date"
    pattern = re.compile(
        rf"^(?P<date>\d{{1,2}}/\d{{1,2}})\s+(?P<description>.+?)\s+(?P<amount>{_AMOUNT})$"
    )


class FullDateLineParser(RegexLineParser):
    """``03/12/2026 MERCHANT NAME 45.00`` as printed on account statements."""

    name = "full-date"
    pattern = re.compile(
        rf"^(?P<date>\d{{1,2}}/\d{{1,2}}/\d{{2,4}})\s+(?P<description>.+?)\s+(?P<amount>{_AMOUNT})$"
    )


DEFAULT_LINE_PARSERS: tuple[LineParser, ...] = (ShortDateLineParser(), FullDateLineParser())


def parse_line(line: str, parsers: Sequence[LineParser] = DEFAULT_LINE_PARSERS) -> Optional[CandidateTransaction]:
    """Try each parser in order and return the first candidate."""
    for parser in parsers:
        candidate = parser.try_parse(line)
        if candidate is not None:
            return candidate
    return None


class WholeTextParser:
    """Looser match over the whole document text, ignoring line breaks.

    Recovers statements whose layout defeats line reconstruction, e.g. when
    the date, merchant and amount land on separate extracted lines.
    """

    name = "whole-text"
    pattern = re.compile(
        rf"(?<![\d/])(?P<date>\d{{1,2}}/\d{{1,2}})\s+(?P<description>\S.{{1,118}}?)\s+(?P<amount>{_AMOUNT})(?![\d.])"
    )

    def parse(self, text: str) -> Iterator[CandidateTransaction]:
        flattened = " ".join(text.split())
        for match in self.pattern.finditer(flattened):
            candidate = _candidate(match.group("date"), match.group("description"), match.group("amount"))
            if candidate is not None:
                yield candidate


def _is_bare_integer(field: str) -> bool:
    return field.replace(",", "").isdigit()


def parse_csv_fields(fields: Sequence[str]) -> Optional[CandidateTransaction]:
    """Sniff the date, amount and description out of one CSV row.

    Each field is classified on its own: the first date-like field is the
    date and the longest remaining text field is the description. The
    amount is the first non-zero field that reads as money (a decimal
    fraction, "$", a sign or parentheses), so a running balance column
    after it is ignored and an empty debit or credit column is passed over.
    Bare integers such as card numbers or references are used only when
    the row has no such field.

    Returns:
        A candidate, or None when the row has no date, no description or a
        zero amount.
    """
    if len(fields) < 3:
        return None

    date = None
    description = ""
    money: list[Decimal] = []
    integers: list[Decimal] = []
    for field in fields:
        field = field.strip()
        if not field:
            continue
        if DATE_FIELD_RE.search(field):
            if date is None:
                date = field
        elif looks_like_amount(field):
            try:
                value = parse_amount(field)
            except ValueError:
                continue
            if value != 0:
                (integers if _is_bare_integer(field) else money).append(value)
        elif len(field) > len(description):
            description = field

    amounts = money or integers
    if date is None or not description or not amounts:
        return None
    return CandidateTransaction(date=date, description=description, amount=amounts[0])
