"""Value normalizers: raw CSV cells into typed amounts, dates and enums.

Every function here returns ``None`` for input it cannot make sense of and
never raises.
"""

import math
import re
from datetime import datetime

from dateutil import parser as dateutil_parser

from .constants import CURRENCY_SYMBOLS, OPPORTUNITY_STATUS_ALIASES

_AMOUNT_NOISE = re.compile(rf"[{re.escape(CURRENCY_SYMBOLS)},\s]")

_ISO_DATE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")

# Numeric triples where the third group is the year
_SEPARATED_DATES = (
    re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4}|\d{2})$"),
    re.compile(r"^(\d{1,2})-(\d{1,2})-(\d{4}|\d{2})$"),
    re.compile(r"^(\d{1,2})\.(\d{1,2})\.(\d{4}|\d{2})$"),
)

# Two different fill-in values: if parsing with each gives different dates,
# the text was missing a day, month or year.
_FILL_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def clean_cell(value: str | None) -> str | None:
    """Trim a cell, returning None when nothing is left."""
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def parse_amount(value: str | None) -> float | None:
    """Parse a money amount.

    Currency symbols, thousands separators and whitespace are ignored. A value
    wrapped in parentheses is negative (accounting convention).

    Args:
        value: Raw cell text, e.g. ``"$1,234.56"`` or ``"(100.00)"``.

    Returns:
        The amount, or None for empty or non-numeric input.
    """
    if value is None:
        return None
    cleaned = _AMOUNT_NOISE.sub("", value)
    if not cleaned:
        return None
    if cleaned.startswith("(") and cleaned.endswith(")"):
        cleaned = "-" + cleaned[1:-1]
    try:
        amount = float(cleaned)
    except ValueError:
        return None
    if not math.isfinite(amount):
        return None
    return amount


def _pivot_year(year_text: str) -> int:
    year = int(year_text)
    if len(year_text) == 2:
        return 2000 + year if year < 50 else 1900 + year
    return year


def _format_date(year: int, month: int, day: int) -> str | None:
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        return None
    return f"{year:04d}-{month:02d}-{day:02d}"


def _parse_positional_date(text: str) -> str | None:
    match = _ISO_DATE.match(text)
    if match:
        year, month, day = (int(group) for group in match.groups())
        return _format_date(year, month, day)

    for pattern in _SEPARATED_DATES:
        match = pattern.match(text)
        if not match:
            continue
        first, second, year_text = match.groups()
        a, b = int(first), int(second)
        year = _pivot_year(year_text)
        if a > 12:
            # Only a day can exceed 12
            day, month = a, b
        else:
            # Month first when the second value is a day, and when it is
            # ambiguous (US convention)
            month, day = a, b
        return _format_date(year, month, day)

    return None


def _parse_natural_date(text: str) -> str | None:
    try:
        parsed = [dateutil_parser.parse(text, default=default) for default in _FILL_DEFAULTS]
    except (ValueError, OverflowError):
        return None
    if parsed[0].date() != parsed[1].date():
        return None
    return parsed[0].date().isoformat()


def _is_positional(text: str) -> bool:
    return bool(_ISO_DATE.match(text)) or any(p.match(text) for p in _SEPARATED_DATES)


def parse_date(value: str | None) -> str | None:
    """Parse a date into ``YYYY-MM-DD``.

    Free-form dates (``"Jan 15, 2024"``, ``"2024-01-15T10:00:00"``) go through
    dateutil and must name a day, month and year. Numeric triples are read
    positionally: ``YYYY-MM-DD``, or ``A/B/Y``, ``A-B-Y``, ``A.B.Y`` where
    ``Y`` is the year (two-digit years below 50 are 20xx, others 19xx). If
    ``A > 12`` it is the day; otherwise ``A`` is taken as the month, so an
    ambiguous ``03/04/2024`` is read as March 4th.

    Args:
        value: Raw cell text.

    Returns:
        ISO date string, or None if the value is not a recognisable date.
    """
    if value is None:
        return None
    text = value.strip()
    if not text:
        return None
    if _is_positional(text):
        return _parse_positional_date(text)
    return _parse_natural_date(text)


def parse_probability(value: str | None) -> float | None:
    """Parse a win probability as a percentage in ``[0, 100]``.

    Accepts ``"40"``, ``"40%"`` and fractions such as ``"0.4"``.
    """
    if value is None:
        return None
    text = value.strip()
    if not text:
        return None
    has_percent = text.endswith("%")
    try:
        number = float(text.rstrip("%").strip())
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    if not has_percent and 0 < number < 1:
        number *= 100
    return min(max(number, 0.0), 100.0)


def normalize_opportunity_status(value: str | None) -> str | None:
    """Map a deal status onto ``active``, ``won`` or ``lost`` when recognisable.

    Unrecognised statuses are returned lower-cased.
    """
    text = clean_cell(value)
    if text is None:
        return None
    lowered = " ".join(text.lower().split())
    return OPPORTUNITY_STATUS_ALIASES.get(lowered, lowered)


def normalize_email(value: str | None) -> str | None:
    """Trim and lower-case an email address."""
    text = clean_cell(value)
    return text.lower() if text else None
