"""Pydantic schemas for importbox."""

from importbox.schemas.duplicates import (
    DateRange,
    DuplicateCheckResult,
    ExistingLead,
    ExistingTransaction,
    LeadCandidate,
    LeadMatchResult,
    MatchReason,
    TransactionCandidate,
)
from importbox.schemas.import_schemas import (
    AnyParsedRecord,
    ContactSlot,
    DetectedMapping,
    EntityType,
    LeadContact,
    MappingValidation,
    ParsedContact,
    ParsedGrid,
    ParsedLead,
    ParsedOpportunity,
    ParsedRecord,
    ParsedTask,
    ParsedTransaction,
    coerce_entity,
)
from importbox.schemas.preview import ImportPreview

__all__ = [
    "AnyParsedRecord",
    "ContactSlot",
    "DateRange",
    "DetectedMapping",
    "DuplicateCheckResult",
    "EntityType",
    "ExistingLead",
    "ExistingTransaction",
    "ImportPreview",
    "LeadCandidate",
    "LeadContact",
    "LeadMatchResult",
    "MappingValidation",
    "MatchReason",
    "ParsedContact",
    "ParsedGrid",
    "ParsedLead",
    "ParsedOpportunity",
    "ParsedRecord",
    "ParsedTask",
    "ParsedTransaction",
    "TransactionCandidate",
    "coerce_entity",
]
