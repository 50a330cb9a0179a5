"""Unit tests for matching CSV company names to existing leads."""

from importbox.schemas.duplicates import ExistingLead
from importbox.services.duplicates import (
    build_lead_match_map,
    get_unique_lead_names,
    lead_key,
    match_leads_by_name,
    resolve_lead,
)


def test_get_unique_lead_names() -> None:
    """Test blanks and case/whitespace repeats are dropped, first spelling kept."""
    names = [" Acme ", "acme", "", None, "Beta", "  ", "BETA"]
    assert get_unique_lead_names(names) == ["Acme", "Beta"]


def test_match_leads_by_name(existing_leads: list[dict]) -> None:
    """Test exact, fuzzy and unmatched names."""
    results = match_leads_by_name(["Acme Inc", "Initech System", "Unknown Co", "acme inc"], existing_leads)
    assert [r.name for r in results] == ["Acme Inc", "Initech System", "Unknown Co"]

    exact, fuzzy, missing = results
    assert exact.match_type == "exact"
    assert exact.confidence == 100
    assert exact.matched_lead == ExistingLead(**existing_leads[0])

    assert fuzzy.match_type == "fuzzy"
    assert fuzzy.matched_lead.id == "l3"
    assert fuzzy.confidence == 93

    assert missing.match_type == "none"
    assert missing.matched_lead is None
    assert missing.confidence == 0


def test_match_ignores_legal_suffixes(existing_leads: list[dict]) -> None:
    """Test "Gamma" is an exact match for "Gamma LLC"."""
    [result] = match_leads_by_name(["Gamma"], existing_leads)
    assert result.match_type == "exact"
    assert result.matched_lead.id == "l2"


def test_match_threshold(existing_leads: list[dict]) -> None:
    """Test a fuzzy score below the threshold is no match."""
    [result] = match_leads_by_name(["Initech System"], existing_leads, threshold=95)
    assert result.match_type == "none"


def test_exact_match_beats_earlier_fuzzy_match() -> None:
    """Test an exact name anywhere in the list wins over fuzzy candidates."""
    existing = [{"id": "x", "name": "Acmee"}, {"id": "y", "name": "ACME LLC"}]
    [result] = match_leads_by_name(["Acme Inc"], existing, threshold=50)
    assert result.match_type == "exact"
    assert result.matched_lead.id == "y"


def test_no_existing_leads() -> None:
    """Test every name is unmatched when there are no leads."""
    results = match_leads_by_name(["Acme"], [])
    assert results[0].match_type == "none"


def test_build_lead_match_map(existing_leads: list[dict]) -> None:
    """Test results are keyed by lower-cased trimmed name."""
    results = match_leads_by_name(["Acme Inc", "Unknown Co"], existing_leads)
    match_map = build_lead_match_map(results)
    assert set(match_map) == {"acme inc", "unknown co"}
    assert resolve_lead(match_map, "  ACME INC ").id == "l1"
    assert resolve_lead(match_map, "Unknown Co") is None
    assert resolve_lead(match_map, "never seen") is None
    assert lead_key("  Mixed Case ") == "mixed case"
