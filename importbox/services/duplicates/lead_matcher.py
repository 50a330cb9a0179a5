"""Resolve company names in contact/opportunity/task imports to existing leads."""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from importbox.schemas.duplicates import ExistingLead, LeadMatchResult

from .constants import DEFAULT_LEAD_MATCH_THRESHOLD
from .leads import normalize_company_name
from .similarity import calculate_similarity


def lead_key(name: str | None) -> str:
    """Lookup key for a lead name: lower-cased and trimmed."""
    return (name or "").lower().strip()


def get_unique_lead_names(names: Iterable[str | None]) -> list[str]:
    """Distinct non-blank names in first-seen order, compared case-insensitively.

    The first spelling seen is kept.
    """
    seen: set[str] = set()
    unique: list[str] = []
    for name in names:
        key = lead_key(name)
        if not key or key in seen:
            continue
        seen.add(key)
        unique.append(name.strip())
    return unique


def _coerce_leads(existing: Iterable[Any]) -> list[ExistingLead]:
    return [
        lead if isinstance(lead, ExistingLead) else ExistingLead.model_validate(lead)
        for lead in existing
    ]


def match_lead_by_name(
    name: str,
    existing: Sequence[ExistingLead],
    threshold: float = DEFAULT_LEAD_MATCH_THRESHOLD,
) -> LeadMatchResult:
    """Match one company name against existing leads.

    An equal normalized name is an exact match with confidence 100. Otherwise
    the most similar lead at or above ``threshold`` is a fuzzy match; ties
    keep the first lead.
    """
    normalized = normalize_company_name(name)
    if not normalized:
        return LeadMatchResult(name=name)

    best: ExistingLead | None = None
    best_score = -1
    for lead in existing:
        candidate = normalize_company_name(lead.name)
        if candidate == normalized:
            return LeadMatchResult(name=name, matched_lead=lead, match_type="exact", confidence=100)
        score = calculate_similarity(normalized, candidate)
        if score > best_score:
            best, best_score = lead, score

    if best is not None and best_score >= threshold:
        return LeadMatchResult(name=name, matched_lead=best, match_type="fuzzy", confidence=best_score)
    return LeadMatchResult(name=name)


def match_leads_by_name(
    names: Iterable[str | None],
    existing: Iterable[Any],
    threshold: float = DEFAULT_LEAD_MATCH_THRESHOLD,
) -> list[LeadMatchResult]:
    """Match each distinct name against existing leads.

    Args:
        names: Company names from the CSV; blanks and repeats are dropped.
        existing: Stored leads (``id``, ``name``, ``website``).
        threshold: Minimum similarity for a fuzzy match, 0-100.

    Returns:
        One LeadMatchResult per distinct name, in first-seen order.
    """
    leads = _coerce_leads(existing)
    return [match_lead_by_name(name, leads, threshold) for name in get_unique_lead_names(names)]


def build_lead_match_map(results: Iterable[LeadMatchResult]) -> dict[str, LeadMatchResult]:
    """Index match results by :func:`lead_key` of the CSV name."""
    return {lead_key(result.name): result for result in results}


def resolve_lead(match_map: Mapping[str, LeadMatchResult], name: str | None) -> ExistingLead | None:
    """Existing lead a CSV name was matched to, or None."""
    result = match_map.get(lead_key(name))
    return result.matched_lead if result else None
