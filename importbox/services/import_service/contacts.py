"""Multi-contact slot detection for lead imports.

A lead CSV may carry several people per row, e.g. ``Primary Email``,
``Secondary Email`` or ``contact_2_email``. Headers are grouped into ordered
slots; slot 0 is always the primary contact.
"""

import re
from collections.abc import Sequence

from importbox.schemas.import_schemas import ContactSlot

from .constants import (
    CONTACT_SLOT_FIELD_PATTERNS,
    CONTACT_SLOT_FIELDS,
    HEADER_SEPARATOR,
    MAX_CONTACTS_PER_LEAD,
    PRIMARY_SLOT_LABEL,
    PRIMARY_SLOT_WORDS,
    SECONDARY_SLOT_WORDS,
)

_SEP = HEADER_SEPARATOR
_CONTACT = rf"(?:contact{_SEP})"


def _compile(source: str) -> re.Pattern[str]:
    return re.compile(source, re.IGNORECASE)


# field -> (primary, secondary, numbered-prefix, numbered-suffix, generic)
_SLOT_PATTERNS = {
    field: (
        _compile(rf"^{PRIMARY_SLOT_WORDS}{_SEP}{_CONTACT}?{fragment}$"),
        _compile(rf"^{SECONDARY_SLOT_WORDS}{_SEP}{_CONTACT}?{fragment}$"),
        _compile(rf"^contact{_SEP}(\d+){_SEP}{fragment}$"),
        _compile(rf"^{_CONTACT}?{fragment}{_SEP}(\d+)$"),
        _compile(rf"^{_CONTACT}?{fragment}$"),
    )
    for field, fragment in CONTACT_SLOT_FIELD_PATTERNS.items()
}


def slot_label(slot_index: int) -> str:
    """Human-readable label for a contact slot."""
    if slot_index == 0:
        return PRIMARY_SLOT_LABEL
    return f"Contact {slot_index + 1}"


def create_empty_contact_slot(slot_index: int) -> ContactSlot:
    """Return a slot with no contact fields mapped."""
    return ContactSlot(
        slot_index=slot_index,
        slot_label=slot_label(slot_index),
        fields={field: None for field in CONTACT_SLOT_FIELDS},
    )


def _clamp_slot(number: int) -> int:
    return min(max(number - 1, 0), MAX_CONTACTS_PER_LEAD - 1)


def _explicit_slot(header: str, field: str) -> int | None:
    """Slot index named by a header for ``field``, or None."""
    primary, secondary, numbered_prefix, numbered_suffix, _ = _SLOT_PATTERNS[field]
    if primary.match(header):
        return 0
    if secondary.match(header):
        return 1
    for pattern in (numbered_prefix, numbered_suffix):
        match = pattern.match(header)
        if match:
            return _clamp_slot(int(match.group(1)))
    return None


def detect_contact_slots(headers: Sequence[str]) -> list[ContactSlot]:
    """Group contact-related headers into ordered slots.

    First pass: headers naming a slot explicitly (primary/main, secondary/other,
    ``contact_2_email``, ``email_2``). Second pass: bare headers such as
    ``Email`` or ``First Name`` fill the primary slot where it is still empty.
    Each header is used at most once.

    Args:
        headers: Column headers from the CSV.

    Returns:
        Slots ordered by index, with ``slots[i].slot_index == i``. Slot 0
        ("Primary Contact") is always present, and any slot below the highest
        detected one is filled in empty.
    """
    slots: dict[int, dict[str, str | None]] = {0: dict.fromkeys(CONTACT_SLOT_FIELDS)}
    assigned: set[str] = set()

    for header in headers:
        text = header.strip()
        if not text:
            continue
        for field in CONTACT_SLOT_FIELDS:
            index = _explicit_slot(text, field)
            if index is None:
                continue
            fields = slots.setdefault(index, dict.fromkeys(CONTACT_SLOT_FIELDS))
            if fields[field] is None:
                fields[field] = header
                assigned.add(header)
            break

    primary = slots[0]
    for header in headers:
        text = header.strip()
        if not text or header in assigned:
            continue
        for field in CONTACT_SLOT_FIELDS:
            generic = _SLOT_PATTERNS[field][4]
            if generic.match(text) and primary[field] is None:
                primary[field] = header
                assigned.add(header)
                break

    # slot_index doubles as the list position, so gaps become empty slots
    return [
        ContactSlot(slot_index=index, slot_label=slot_label(index), fields=slots[index])
        if index in slots
        else create_empty_contact_slot(index)
        for index in range(max(slots) + 1)
    ]
