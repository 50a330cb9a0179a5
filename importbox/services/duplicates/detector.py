"""Duplicate checks for transactions and leads against existing records.

Inputs may be schema models, dicts or any objects with matching attributes
(e.g. ``ParsedTransaction`` rows straight from the transformer).
"""

from collections.abc import Iterable
from typing import Any

from importbox.schemas.duplicates import DateRange, DuplicateCheckResult

from .constants import DEFAULT_AMOUNT_TOLERANCE, DEFAULT_SIMILARITY_THRESHOLD
from .leads import LeadMatchStrategy
from .transactions import TransactionMatchStrategy


def check_single_duplicate(
    candidate: Any,
    existing: Iterable[Any],
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
    amount_tolerance: float = DEFAULT_AMOUNT_TOLERANCE,
) -> DuplicateCheckResult:
    """Check one transaction against stored transactions.

    Args:
        candidate: Transaction with ``date``, ``amount`` and ``description``.
        existing: Stored transactions (``id``, ``date``, ``amount``,
            ``description``).
        threshold: Minimum description similarity, 0-100.
        amount_tolerance: Amounts closer than this count as equal.

    Returns:
        The best match, or ``is_duplicate=False`` with similarity 0.
    """
    strategy = TransactionMatchStrategy(threshold, amount_tolerance)
    return strategy.check(candidate, existing)


def check_for_duplicates(
    candidates: Iterable[Any],
    existing: Iterable[Any],
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
    amount_tolerance: float = DEFAULT_AMOUNT_TOLERANCE,
) -> list[DuplicateCheckResult]:
    """Check a batch of transactions; results are in candidate order.

    Candidates are only compared with ``existing``, never with each other.
    """
    strategy = TransactionMatchStrategy(threshold, amount_tolerance)
    return strategy.check_many(candidates, existing)


def check_lead_duplicate(candidate: Any, existing: Iterable[Any]) -> DuplicateCheckResult:
    """Check one lead (``name``, ``website``) against stored leads."""
    return LeadMatchStrategy().check(candidate, existing)


def check_leads_for_duplicates(candidates: Iterable[Any], existing: Iterable[Any]) -> list[DuplicateCheckResult]:
    return LeadMatchStrategy().check_many(candidates, existing)


def get_date_range(transactions: Iterable[Any]) -> DateRange | None:
    """Earliest and latest date across transactions.

    Used to narrow the stored transactions fetched for a duplicate check.
    Entries without a date are ignored; ISO strings compare chronologically.

    Returns:
        DateRange, or None if no transaction has a date.
    """
    dates = []
    for transaction in transactions:
        date = transaction.get("date") if isinstance(transaction, dict) else getattr(transaction, "date", None)
        if date:
            dates.append(date)
    if not dates:
        return None
    return DateRange(min_date=min(dates), max_date=max(dates))
