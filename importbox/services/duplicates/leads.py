"""Lead duplicate rule: normalized company name, disambiguated by website domain."""

import re

from importbox.schemas.duplicates import (
    DuplicateCheckResult,
    ExistingLead,
    LeadCandidate,
    MatchReason,
)

from .base import MatchStrategy
from .constants import COMPANY_SUFFIXES

_SUFFIX_RE = re.compile(
    r"[\s,]+(?:" + "|".join(re.escape(suffix) for suffix in COMPANY_SUFFIXES) + r")$"
)
_TRAILING_PUNCTUATION_RE = re.compile(r"[\s.,;:!]+$")
_SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.\-]*://")
_DOMAIN_RE = re.compile(r"^[a-z0-9\-]+(?:\.[a-z0-9\-]+)+$")

# Higher wins when several stored leads match
_REASON_RANK = {
    MatchReason.EXACT_NAME_AND_DOMAIN: 2,
    MatchReason.EXACT_NAME: 1,
}


def normalize_company_name(name: str | None) -> str:
    """Lower-case a company name and strip legal suffixes and trailing punctuation.

    ``"Acme, Inc."``, ``"ACME Inc"`` and ``"acme"`` all normalize to ``"acme"``.
    """
    text = (name or "").lower().strip()
    previous = None
    while text != previous:
        previous = text
        text = _SUFFIX_RE.sub("", text)
        text = _TRAILING_PUNCTUATION_RE.sub("", text)
    return " ".join(text.split())


def extract_domain(url: str | None) -> str | None:
    """Bare host of a website or URL, or None if there is no usable domain.

    Protocol, ``www.``, credentials, path, query and port are removed, so
    ``https://www.acme.com:8080/about`` gives ``acme.com``.
    """
    text = (url or "").strip().lower()
    if not text:
        return None
    text = _SCHEME_RE.sub("", text)
    text = re.split(r"[/?#]", text, maxsplit=1)[0]
    text = text.rsplit("@", 1)[-1]
    text = text.split(":", 1)[0].strip(".")
    if text.startswith("www."):
        text = text[4:]
    if not _DOMAIN_RE.match(text):
        return None
    return text


class LeadMatchStrategy(MatchStrategy):
    """Flag a lead as a duplicate of a stored one.

    Names must be equal after :func:`normalize_company_name`. Equal domains
    give ``exact_name_and_domain``. When neither side has a usable website
    domain the name alone gives ``exact_name``. A name match with differing or
    one-sided domains is not a duplicate.
    """

    candidate_model = LeadCandidate
    existing_model = ExistingLead

    def compare(self, candidate: LeadCandidate, existing: ExistingLead) -> DuplicateCheckResult | None:
        name = normalize_company_name(candidate.name)
        if not name or name != normalize_company_name(existing.name):
            return None

        candidate_domain = extract_domain(candidate.website)
        existing_domain = extract_domain(existing.website)
        if candidate_domain and candidate_domain == existing_domain:
            reason = MatchReason.EXACT_NAME_AND_DOMAIN
        elif candidate_domain is None and existing_domain is None:
            reason = MatchReason.EXACT_NAME
        else:
            return None

        return DuplicateCheckResult(
            is_duplicate=True,
            matched_record=existing,
            similarity=100,
            match_reason=reason,
        )

    def rank(self, result: DuplicateCheckResult) -> tuple[float, ...]:
        return (_REASON_RANK.get(result.match_reason, 0), result.similarity)
