"""Statement date utilities.

Statement dates are kept in their native text form on transactions
("3/12", "03/12/2026"). These helpers turn them into calendar dates when
transactions are grouped by month or week.
"""

from datetime import date, datetime, timedelta
import re
from typing import Optional

from dateutil import parser as date_parser

_SLASH_DATE_RE = re.compile(r"^(\d{1,2})[/-](\d{1,2})(?:[/-](\d{2}|\d{4}))?$")


def infer_year(month: int, reference_date: date) -> int:
    """Infer the year of a month-only date relative to a reference date.

    A month later than the reference month cannot have happened yet this
    year, so it belongs to the previous year (a December purchase on a
    statement read in January).

    Args:
        month: Month number 1-12
        reference_date: Date the statement is being interpreted at

    Returns:
        Four-digit year
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}")
    if month > reference_date.month:
        return reference_date.year - 1
    return reference_date.year


def parse_statement_date(date_str: str, reference_date: Optional[date] = None) -> date:
    """Parse a statement date string into a date.

    Supports "M/D" (year inferred), "M/D/YY", "M/D/YYYY", the same with
    dashes, and anything else python-dateutil understands (e.g. ISO dates).

    Args:
        date_str: Date text as captured from the statement
        reference_date: Used for year inference; defaults to today

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    if reference_date is None:
        reference_date = date.today()
    text = date_str.strip()

    match = _SLASH_DATE_RE.match(text)
    if match:
        month, day, year_text = match.groups()
        month, day = int(month), int(day)
        if year_text is None:
            year = infer_year(month, reference_date)
        elif len(year_text) == 2:
            year = datetime.strptime(year_text, "%y").year
        else:
            year = int(year_text)
        return date(year, month, day)

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def week_start(day: date) -> date:
    """Return the Monday of the week containing ``day``."""
    return day - timedelta(days=day.weekday())


def month_key(day: date) -> str:
    """Return a "YYYY-MM" bucket key."""
    return f"{day.year:04d}-{day.month:02d}"
