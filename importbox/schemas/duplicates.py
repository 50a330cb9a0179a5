"""Pydantic schemas for duplicate detection and lead matching."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class MatchReason(str, Enum):
    """Rule that justified flagging a candidate as a duplicate."""

    EXACT_NAME_AND_DOMAIN = "exact_name_and_domain"
    EXACT_NAME = "exact_name"
    FUZZY_DESCRIPTION = "fuzzy_description"
    NONE = "none"


class ExistingTransaction(BaseModel):
    """Projection of a stored transaction used for duplicate checks."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str | int
    date: str
    amount: float
    description: str = ""


class ExistingLead(BaseModel):
    """Projection of a stored lead used for duplicate checks and name matching."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str | int
    name: str
    website: str | None = None


class TransactionCandidate(BaseModel):
    """A transaction about to be imported or entered by hand."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    date: str | None = None
    amount: float = 0.0
    description: str = ""


class LeadCandidate(BaseModel):
    """A lead about to be imported or entered by hand."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    name: str = ""
    website: str | None = None


class DuplicateCheckResult(BaseModel):
    """Outcome of comparing one candidate against the existing records."""

    model_config = ConfigDict(frozen=True)

    is_duplicate: bool
    matched_record: ExistingTransaction | ExistingLead | None = None
    similarity: float = Field(0, ge=0, le=100)
    match_reason: MatchReason = MatchReason.NONE


class LeadMatchResult(BaseModel):
    """Which existing lead (if any) a company name in a CSV refers to."""

    model_config = ConfigDict(frozen=True)

    name: str
    matched_lead: ExistingLead | None = None
    match_type: Literal["exact", "fuzzy", "none"] = "none"
    confidence: int = Field(0, ge=0, le=100)


class DateRange(BaseModel):
    """Earliest and latest ISO dates across a set of transactions."""

    model_config = ConfigDict(frozen=True)

    min_date: str
    max_date: str
