"""Merchant name normalization.

Reduces a raw statement description to a "core name" by dropping the
point-of-sale processor prefix and the location and numeric noise card
networks append to merchant names. Worked example::

    "SQ *JOES PIZZA 123 MAIN ST NY"
      -> lowercase/trim            "sq *joes pizza 123 main st ny"
      -> processor prefix "sq"     "joes pizza 123 main st ny"
      -> trailing state code       "joes pizza 123 main st"
      -> trailing street address   "joes pizza"

The transform is lossy and best-effort. It never raises; when stripping
would leave nothing, the lowercased, trimmed input is returned unchanged.
"""

import re
from typing import Optional

# Processor tokens that precede the merchant name, e.g. "SQ *", "TST* ", "PAYPAL *"
_PREFIX_RE = re.compile(r"^(sq|sqc|tst|sp|pp|paypal|py|dd|clv|ic|bt)\s*\*\s*")

_US_STATES = frozenset(
    """
    al ak az ar ca co ct de dc fl ga hi id il in ia ks ky la me md ma mi mn ms
    mo mt ne nv nh nj nm ny nc nd oh ok or pa ri sc sd tn tx ut vt va wa wv wi
    wy pr
    """.split()
)

_CITIES = (
    "new york", "brooklyn", "queens", "bronx", "manhattan", "long island city",
    "san francisco", "oakland", "berkeley", "san jose", "los angeles",
    "santa monica", "san diego", "seattle", "portland", "chicago", "boston",
    "cambridge", "austin", "houston", "dallas", "denver", "miami", "atlanta",
    "philadelphia", "washington", "las vegas", "phoenix", "nyc", "sf", "la",
    "mexico city", "ciudad de mexico", "cdmx", "london", "paris", "toronto",
)

_PHONE_RE = re.compile(r"\s+\(?\d{3}\)?[\s.-]?\d{3}[\s.-]?\d{4}$")
_STATE_RE = re.compile(r"\s+([a-z]{2})$")
_CITY_RE = re.compile(
    r"\s+(?:" + "|".join(re.escape(c) for c in sorted(_CITIES, key=len, reverse=True)) + r")$"
)
_STORE_NUMBER_RE = re.compile(r"\s*#\s*\d+$")
_BARE_NUMBER_RE = re.compile(r"\s+\d+$")
_STREET_RE = re.compile(
    r"\s+\d+[a-z]?(?:\s+[\w.'-]+){0,3}?\s+"
    r"(?:st|street|ave|avenue|rd|road|blvd|dr|drive|ln|lane|way|hwy|pl|ct|pkwy)\.?$"
)
_TRAILING_PUNCT = " -*,.#/"


def _strip_state(text: str) -> str:
    match = _STATE_RE.search(text)
    if match and match.group(1) in _US_STATES:
        return text[: match.start()]
    return text


def _strip_trailing_noise(text: str) -> str:
    text = _PHONE_RE.sub("", text)
    text = _strip_state(text)
    text = _CITY_RE.sub("", text)
    text = _STORE_NUMBER_RE.sub("", text)
    text = _BARE_NUMBER_RE.sub("", text)
    text = _STREET_RE.sub("", text)
    return text.rstrip(_TRAILING_PUNCT)


def normalize_merchant(description: Optional[str]) -> tuple[str, Optional[str]]:
    """Return ``(core_name, prefix)`` for a raw description.

    Args:
        description: Raw merchant text as it appears on the statement

    Returns:
        Tuple of the lowercased core name and the processor prefix token
        (e.g. "sq", "tst") or None when the description has none.
    """
    trimmed = " ".join(str(description or "").lower().split())
    if not trimmed:
        return "", None

    prefix = None
    text = trimmed
    match = _PREFIX_RE.match(text)
    if match:
        prefix = match.group(1)
        text = text[match.end():]

    # Each pass may expose another trailing token (state after phone, etc.)
    while True:
        stripped = _strip_trailing_noise(text)
        if stripped == text:
            break
        text = stripped

    core = " ".join(text.split())
    if not core:
        return trimmed, prefix
    return core, prefix


def core_name(description: Optional[str]) -> str:
    """Return only the core name of a description."""
    return normalize_merchant(description)[0]


def description_key(description: Optional[str], length: int = 20) -> str:
    """Return the first ``length`` alphanumeric characters of the core name.

    Used to compare descriptions for duplicate detection, so that
    "STARBUCKS STORE 123" and "Starbucks Store #123 NY" compare equal.
    """
    compact = re.sub(r"[^a-z0-9]", "", core_name(description))
    return compact[:length]
