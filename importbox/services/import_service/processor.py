"""Import preview pipeline: tokenize, map, validate, transform, check duplicates."""

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from importbox.config import get_settings
from importbox.schemas.import_schemas import ContactSlot, EntityType, coerce_entity
from importbox.schemas.preview import ImportPreview
from importbox.services.duplicates import check_for_duplicates, check_leads_for_duplicates, match_leads_by_name

from .mapping import create_empty_mapping, detect_column_mapping, validate_mapping
from .parsers import parse_csv_text
from .transformers import transform_rows

logger = logging.getLogger(__name__)

# Auto-detected fields scoring below this are logged for review
LOW_CONFIDENCE = 0.7

LEAD_LINKED_ENTITIES = (EntityType.CONTACT, EntityType.OPPORTUNITY, EntityType.TASK)


def preview_import(
    text: str,
    entity: EntityType | str,
    existing: Iterable[Any] = (),
    mapping: Mapping[str, str | None] | None = None,
    contact_slots: Sequence[ContactSlot] | None = None,
    max_rows: int | None = None,
) -> ImportPreview:
    """Run a CSV through the import pipeline without committing anything.

    Args:
        text: Raw CSV text.
        entity: Entity type the rows describe.
        existing: Stored records to check against: transactions for
            ``transaction``, leads for every other entity.
        mapping: Reviewed column mapping. Auto-detected when None; fields
            missing from a reviewed mapping count as unmapped.
        contact_slots: Reviewed contact slots for leads. When a reviewed
            mapping is given without slots, its ``contact_*`` keys are used.
        max_rows: Row cap; defaults to ``import.max_rows`` from config.

    Returns:
        ImportPreview. With an invalid mapping it carries the mapping errors
        and no records.
    """
    settings = get_settings()
    entity = coerce_entity(entity)
    limit = max_rows if max_rows is not None else settings.max_rows

    grid = parse_csv_text(text)
    rows = grid.rows
    total_rows = len(rows)
    truncated = total_rows > limit
    if truncated:
        logger.warning("Import has %d rows; only the first %d are previewed", total_rows, limit)
        rows = rows[:limit]
    logger.info("Parsed %d %s rows with %d columns", total_rows, entity.value, len(grid.headers))

    detected = detect_column_mapping(grid.headers, entity)
    if mapping is None:
        effective = dict(detected.mapping)
        slots = list(detected.contact_slots) if entity is EntityType.LEAD else None
        for field, score in detected.confidence.items():
            if effective.get(field) and score < LOW_CONFIDENCE:
                logger.debug("Low confidence %.1f mapping %r -> %s", score, effective[field], field)
    else:
        effective = {**create_empty_mapping(entity), **mapping}
        slots = list(contact_slots) if contact_slots is not None else None

    mapped = sorted(field for field, header in effective.items() if header)
    logger.info("Column mapping for %s: %s", entity.value, ", ".join(mapped) or "(none)")

    validation = validate_mapping(effective, entity)
    preview_fields: dict[str, Any] = {
        "entity": entity,
        "headers": grid.headers,
        "mapping": effective,
        "confidence": detected.confidence,
        "contact_slots": slots or [],
        "total_rows": total_rows,
        "truncated": truncated,
    }
    if not validation.valid:
        logger.warning("Invalid %s mapping: %s", entity.value, "; ".join(validation.errors))
        return ImportPreview(mapping_errors=validation.errors, **preview_fields)

    records = transform_rows(rows, grid.headers, effective, entity, contact_slots=slots)

    existing = list(existing)
    duplicates = []
    lead_matches = []
    if entity is EntityType.TRANSACTION:
        duplicates = check_for_duplicates(
            records,
            existing,
            threshold=settings.similarity_threshold,
            amount_tolerance=settings.amount_tolerance,
        )
    elif entity is EntityType.LEAD:
        duplicates = check_leads_for_duplicates(records, existing)
    elif entity in LEAD_LINKED_ENTITIES:
        lead_matches = match_leads_by_name(
            (record.lead_name for record in records),
            existing,
            threshold=settings.lead_match_threshold,
        )

    preview = ImportPreview(
        records=records,
        duplicates=duplicates,
        lead_matches=lead_matches,
        **preview_fields,
    )
    logger.info(
        "Previewed %d %s records: %d valid, %d invalid, %d duplicates",
        len(records),
        entity.value,
        preview.valid_count,
        preview.invalid_count,
        preview.duplicate_count,
    )
    return preview
