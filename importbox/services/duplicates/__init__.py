"""Duplicate detection for imported and hand-entered records."""

from .base import MatchStrategy, get_match_strategy
from .detector import (
    check_for_duplicates,
    check_lead_duplicate,
    check_leads_for_duplicates,
    check_single_duplicate,
    get_date_range,
)
from .lead_matcher import (
    build_lead_match_map,
    get_unique_lead_names,
    lead_key,
    match_lead_by_name,
    match_leads_by_name,
    resolve_lead,
)
from .leads import LeadMatchStrategy, extract_domain, normalize_company_name
from .similarity import calculate_similarity
from .transactions import TransactionMatchStrategy

__all__ = [
    "MatchStrategy",
    "TransactionMatchStrategy",
    "LeadMatchStrategy",
    "get_match_strategy",
    "calculate_similarity",
    "normalize_company_name",
    "extract_domain",
    "check_single_duplicate",
    "check_for_duplicates",
    "check_lead_duplicate",
    "check_leads_for_duplicates",
    "get_date_range",
    "get_unique_lead_names",
    "match_lead_by_name",
    "match_leads_by_name",
    "build_lead_match_map",
    "lead_key",
    "resolve_lead",
]
