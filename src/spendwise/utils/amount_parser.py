"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

# Optional parentheses, optional sign, optional "$", thousands separators
AMOUNT_PATTERN = re.compile(r"^\(?\s*[-+]?\s*\$?\s*[-+]?\d[\d,]*(?:\.\d+)?\s*\)?$")

CENT = Decimal("0.01")


def looks_like_amount(text: str) -> bool:
    """Return True if a field looks like a currency amount."""
    return bool(text) and AMOUNT_PATTERN.match(text.strip()) is not None


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "-123.45"
    - "-$123.45" / "$-123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Parentheses or a minus anywhere before the digits mean a debit
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]
    if "-" in amount_str:
        is_negative = True

    # Remove currency symbols, signs and thousands separators
    amount_str = re.sub(r"[$€£¥+\-,\s]", "", amount_str)

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}'") from e
    return -abs(amount) if is_negative else amount


def round_amount(amount: Decimal) -> Decimal:
    """Round to cents, half up."""
    return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)
