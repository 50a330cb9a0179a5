"""Column mapping detection and validation for CSV imports."""

import re
from collections.abc import Mapping, Sequence

from importbox.schemas.import_schemas import DetectedMapping, EntityType, MappingValidation, coerce_entity

from .constants import (
    CONFIDENCE_STEP,
    ENTITY_PATTERNS,
    REQUIRED_FIELDS,
    TRANSACTION_AMOUNT_ERROR,
)
from .contacts import detect_contact_slots


def create_empty_mapping(entity: EntityType | str) -> dict[str, str | None]:
    """Return a mapping with every canonical field of ``entity`` unmapped."""
    return {field: None for field in ENTITY_PATTERNS[coerce_entity(entity)]}


def score_header(header: str, patterns: Sequence[re.Pattern[str]]) -> float:
    """Score how specifically a header matches a field's pattern list.

    The first matching pattern at index ``i`` gives ``1 - i * 0.1``; no match
    gives 0.
    """
    text = header.strip()
    if not text:
        return 0.0
    for i, pattern in enumerate(patterns):
        if pattern.search(text):
            return round(1 - i * CONFIDENCE_STEP, 2)
    return 0.0


def detect_column_mapping(headers: Sequence[str], entity: EntityType | str) -> DetectedMapping:
    """Auto-detect which header feeds each canonical field.

    Each field keeps the header with the strictly highest score, so with equal
    scores the earlier header wins. A header may feed several fields.

    Args:
        headers: Column headers from the CSV.
        entity: Entity type whose field table to use.

    Returns:
        DetectedMapping with the mapping and per-field confidence. For leads,
        contact slots are detected as well.
    """
    entity = coerce_entity(entity)
    table = ENTITY_PATTERNS[entity]

    mapping: dict[str, str | None] = {field: None for field in table}
    confidence: dict[str, float] = {field: 0.0 for field in table}

    for header in headers:
        for field, patterns in table.items():
            score = score_header(header, patterns)
            if score > confidence[field]:
                mapping[field] = header
                confidence[field] = score

    contact_slots = detect_contact_slots(headers) if entity is EntityType.LEAD else []

    return DetectedMapping(
        entity=entity,
        mapping=mapping,
        confidence=confidence,
        contact_slots=contact_slots,
    )


def detect_transaction_mapping(headers: Sequence[str]) -> DetectedMapping:
    return detect_column_mapping(headers, EntityType.TRANSACTION)


def detect_lead_mapping(headers: Sequence[str]) -> DetectedMapping:
    return detect_column_mapping(headers, EntityType.LEAD)


def detect_contact_mapping(headers: Sequence[str]) -> DetectedMapping:
    return detect_column_mapping(headers, EntityType.CONTACT)


def detect_opportunity_mapping(headers: Sequence[str]) -> DetectedMapping:
    return detect_column_mapping(headers, EntityType.OPPORTUNITY)


def detect_task_mapping(headers: Sequence[str]) -> DetectedMapping:
    return detect_column_mapping(headers, EntityType.TASK)


def validate_mapping(
    mapping: Mapping[str, str | None],
    entity: EntityType | str,
) -> MappingValidation:
    """Check that a mapping covers the entity's required columns.

    Transactions need a date, an amount source (an amount column or at least
    one of debit/credit) and a description. Other entities need their
    linking and name fields.

    Args:
        mapping: Canonical field -> header name or None. Not modified.
        entity: Entity type.

    Returns:
        MappingValidation with one message per missing requirement.
    """
    entity = coerce_entity(entity)
    errors: list[str] = []

    for field, message in REQUIRED_FIELDS[entity]:
        if not mapping.get(field):
            errors.append(message)

    if entity is EntityType.TRANSACTION:
        has_amount_source = any(mapping.get(field) for field in ("amount", "debit", "credit"))
        if not has_amount_source:
            # Keep the messages in column order: date, amount, description
            errors.insert(1 if not mapping.get("date") else 0, TRANSACTION_AMOUNT_ERROR)

    return MappingValidation(valid=not errors, errors=errors)


def validate_transaction_mapping(mapping: Mapping[str, str | None]) -> MappingValidation:
    return validate_mapping(mapping, EntityType.TRANSACTION)


def validate_lead_mapping(mapping: Mapping[str, str | None]) -> MappingValidation:
    return validate_mapping(mapping, EntityType.LEAD)


def validate_contact_mapping(mapping: Mapping[str, str | None]) -> MappingValidation:
    return validate_mapping(mapping, EntityType.CONTACT)


def validate_opportunity_mapping(mapping: Mapping[str, str | None]) -> MappingValidation:
    return validate_mapping(mapping, EntityType.OPPORTUNITY)


def validate_task_mapping(mapping: Mapping[str, str | None]) -> MappingValidation:
    return validate_mapping(mapping, EntityType.TASK)
