"""Row transformation: grid rows plus a column mapping into typed records.

Every input row yields exactly one record. Problems are collected in the
record's ``errors`` (``"Row {n}: ..."`` where ``n`` counts the header as line
1) and the record keeps best-effort defaults. Nothing here raises for bad data.
"""

from collections.abc import Mapping, Sequence

from importbox.schemas.import_schemas import (
    AnyParsedRecord,
    ContactSlot,
    EntityType,
    LeadContact,
    ParsedContact,
    ParsedLead,
    ParsedOpportunity,
    ParsedTask,
    ParsedTransaction,
    coerce_entity,
)

from .constants import CONTACT_SLOT_FIELDS
from .contacts import slot_label
from .converters import (
    clean_cell,
    normalize_email,
    normalize_opportunity_status,
    parse_amount,
    parse_date,
    parse_probability,
)

Row = Sequence[str]

LEGACY_CONTACT_KEYS = {field: f"contact_{field}" for field in CONTACT_SLOT_FIELDS}


class _RowReader:
    """Reads mapped cells out of one row and records row-scoped errors."""

    def __init__(self, row: Row, row_number: int, columns: Mapping[str, int]):
        self.row = row
        self.row_number = row_number
        self.columns = columns
        self.errors: list[str] = []

    def is_mapped(self, field: str) -> bool:
        return self.columns.get(field, -1) >= 0

    def text(self, field: str) -> str:
        """Trimmed cell for ``field``, or ``""`` if unmapped or missing."""
        return self.cell_at(self.columns.get(field, -1))

    def cell_at(self, index: int) -> str:
        if 0 <= index < len(self.row):
            return (self.row[index] or "").strip()
        return ""

    def optional(self, field: str) -> str | None:
        return clean_cell(self.text(field))

    def required(self, field: str) -> str:
        value = self.text(field)
        if not value:
            self.missing(field)
        return value

    def missing(self, field: str) -> None:
        self.errors.append(f"Row {self.row_number}: Missing {field.replace('_', ' ')}")

    def invalid(self, field: str, raw: str) -> None:
        self.errors.append(f'Row {self.row_number}: Invalid {field.replace("_", " ")} "{raw}"')

    def date(self, field: str, required: bool = False) -> str | None:
        raw = self.required(field) if required else self.text(field)
        if not raw:
            return None
        parsed = parse_date(raw)
        if parsed is None:
            self.invalid(field, raw)
        return parsed


def column_index(headers: Sequence[str], header: str | None) -> int:
    """Position of ``header`` in ``headers`` (first occurrence), or -1."""
    if not header:
        return -1
    try:
        return list(headers).index(header)
    except ValueError:
        return -1


def resolve_columns(headers: Sequence[str], mapping: Mapping[str, str | None]) -> dict[str, int]:
    """Map each canonical field to its column index (-1 when unmapped)."""
    return {field: column_index(headers, header) for field, header in mapping.items()}


def _readers(rows: Sequence[Row], headers: Sequence[str], mapping: Mapping[str, str | None]):
    columns = resolve_columns(headers, mapping)
    for i, row in enumerate(rows):
        yield _RowReader(row, i + 2, columns)


# =============================================================================
# Transactions
# =============================================================================


def _transaction_amount(reader: _RowReader) -> float:
    """Amount from a single amount column, else from debit/credit columns.

    Debit is checked first and becomes negative; credit becomes positive.
    A row where neither side parses to a non-zero number has no amount.
    """
    if reader.is_mapped("amount"):
        raw = reader.required("amount")
        if not raw:
            return 0.0
        amount = parse_amount(raw)
        if amount is None:
            reader.invalid("amount", raw)
            return 0.0
        return amount

    if reader.is_mapped("debit") or reader.is_mapped("credit"):
        raw_debit = reader.text("debit")
        raw_credit = reader.text("credit")
        debit = parse_amount(raw_debit)
        credit = parse_amount(raw_credit)
        if debit:
            return -abs(debit)
        if credit:
            return abs(credit)
        # Neither side holds a non-zero amount
        invalid = False
        for field, raw, value in (("debit", raw_debit, debit), ("credit", raw_credit, credit)):
            if raw and value is None:
                reader.invalid(field, raw)
                invalid = True
        if not invalid:
            reader.missing("amount")
        return 0.0

    reader.missing("amount")
    return 0.0


def transform_to_transactions(
    rows: Sequence[Row],
    headers: Sequence[str],
    mapping: Mapping[str, str | None],
) -> list[ParsedTransaction]:
    """Convert rows into transactions.

    Args:
        rows: Grid rows.
        headers: Header row the mapping refers to.
        mapping: Transaction field -> header name or None.

    Returns:
        One ParsedTransaction per row, valid or not.
    """
    transactions: list[ParsedTransaction] = []
    for reader in _readers(rows, headers, mapping):
        date = reader.date("date", required=True)
        amount = _transaction_amount(reader)
        description = reader.required("description")
        transactions.append(
            ParsedTransaction(
                row_number=reader.row_number,
                date=date,
                amount=amount,
                description=description,
                notes=reader.optional("notes"),
                errors=reader.errors,
            )
        )
    return transactions


# =============================================================================
# Leads
# =============================================================================


def _legacy_slot(mapping: Mapping[str, str | None]) -> list[ContactSlot]:
    """Build a primary slot from single-contact ``contact_*`` mapping keys."""
    fields = {field: mapping.get(key) for field, key in LEGACY_CONTACT_KEYS.items()}
    if not any(fields.values()):
        return []
    return [ContactSlot(slot_index=0, slot_label=slot_label(0), fields=fields)]


def _slot_contact(reader: _RowReader, headers: Sequence[str], slot: ContactSlot) -> LeadContact | None:
    values = {
        field: clean_cell(reader.cell_at(column_index(headers, slot.fields.get(field))))
        for field in CONTACT_SLOT_FIELDS
    }
    if not values["first_name"]:
        return None
    values["email"] = normalize_email(values["email"])
    return LeadContact(**values)


def transform_to_leads(
    rows: Sequence[Row],
    headers: Sequence[str],
    mapping: Mapping[str, str | None],
    contact_slots: Sequence[ContactSlot] | None = None,
) -> list[ParsedLead]:
    """Convert rows into leads with zero or more contacts each.

    A contact is kept only when its first name is present. The first kept
    contact also fills the single-contact ``contact_*`` fields.

    Args:
        rows: Grid rows.
        headers: Header row the mapping refers to.
        mapping: Lead field -> header name or None. When ``contact_slots`` is
            not given, ``contact_first_name`` etc. keys describe one contact.
        contact_slots: Detected or user-edited contact slots.

    Returns:
        One ParsedLead per row, valid or not.
    """
    slots = list(contact_slots) if contact_slots is not None else _legacy_slot(mapping)
    lead_mapping = {k: v for k, v in mapping.items() if k not in LEGACY_CONTACT_KEYS.values()}

    leads: list[ParsedLead] = []
    for reader in _readers(rows, headers, lead_mapping):
        name = reader.required("name")
        contacts = [
            contact
            for contact in (_slot_contact(reader, headers, slot) for slot in slots)
            if contact is not None
        ]
        first = contacts[0] if contacts else None
        leads.append(
            ParsedLead(
                row_number=reader.row_number,
                name=name,
                website=reader.optional("website"),
                industry=reader.optional("industry"),
                status=reader.optional("status"),
                notes=reader.optional("notes"),
                address=reader.optional("address"),
                city=reader.optional("city"),
                state=reader.optional("state"),
                country=reader.optional("country"),
                postal_code=reader.optional("postal_code"),
                source=reader.optional("source"),
                contacts=contacts,
                contact_first_name=first.first_name if first else None,
                contact_last_name=first.last_name if first else None,
                contact_email=first.email if first else None,
                contact_phone=first.phone if first else None,
                contact_title=first.title if first else None,
                errors=reader.errors,
            )
        )
    return leads


# =============================================================================
# Contacts, opportunities, tasks
# =============================================================================


def transform_to_contacts(
    rows: Sequence[Row],
    headers: Sequence[str],
    mapping: Mapping[str, str | None],
) -> list[ParsedContact]:
    """Convert rows into contacts linked to leads by company name."""
    contacts: list[ParsedContact] = []
    for reader in _readers(rows, headers, mapping):
        lead_name = reader.required("lead_name")
        first_name = reader.required("first_name")
        email = normalize_email(reader.text("email"))
        if email and "@" not in email:
            reader.invalid("email", email)
        contacts.append(
            ParsedContact(
                row_number=reader.row_number,
                lead_name=lead_name,
                first_name=first_name,
                last_name=reader.optional("last_name"),
                email=email,
                phone=reader.optional("phone"),
                title=reader.optional("title"),
                notes=reader.optional("notes"),
                errors=reader.errors,
            )
        )
    return contacts


def transform_to_opportunities(
    rows: Sequence[Row],
    headers: Sequence[str],
    mapping: Mapping[str, str | None],
) -> list[ParsedOpportunity]:
    """Convert rows into opportunities linked to leads by company name."""
    opportunities: list[ParsedOpportunity] = []
    for reader in _readers(rows, headers, mapping):
        lead_name = reader.required("lead_name")
        name = reader.required("name")

        raw_value = reader.text("value")
        value = parse_amount(raw_value) if raw_value else None
        if raw_value and value is None:
            reader.invalid("value", raw_value)

        raw_probability = reader.text("probability")
        probability = parse_probability(raw_probability) if raw_probability else None
        if raw_probability and probability is None:
            reader.invalid("probability", raw_probability)

        opportunities.append(
            ParsedOpportunity(
                row_number=reader.row_number,
                lead_name=lead_name,
                name=name,
                value=value,
                probability=probability,
                expected_close_date=reader.date("expected_close_date"),
                status=normalize_opportunity_status(reader.text("status")),
                notes=reader.optional("notes"),
                errors=reader.errors,
            )
        )
    return opportunities


def transform_to_tasks(
    rows: Sequence[Row],
    headers: Sequence[str],
    mapping: Mapping[str, str | None],
) -> list[ParsedTask]:
    """Convert rows into tasks linked to leads by company name."""
    tasks: list[ParsedTask] = []
    for reader in _readers(rows, headers, mapping):
        lead_name = reader.required("lead_name")
        title = reader.required("title")
        tasks.append(
            ParsedTask(
                row_number=reader.row_number,
                lead_name=lead_name,
                title=title,
                description=reader.optional("description"),
                due_date=reader.date("due_date"),
                notes=reader.optional("notes"),
                errors=reader.errors,
            )
        )
    return tasks


def transform_rows(
    rows: Sequence[Row],
    headers: Sequence[str],
    mapping: Mapping[str, str | None],
    entity: EntityType | str,
    contact_slots: Sequence[ContactSlot] | None = None,
) -> list[AnyParsedRecord]:
    """Dispatch to the transformer for ``entity``."""
    entity = coerce_entity(entity)
    if entity is EntityType.TRANSACTION:
        return list(transform_to_transactions(rows, headers, mapping))
    if entity is EntityType.LEAD:
        return list(transform_to_leads(rows, headers, mapping, contact_slots))
    if entity is EntityType.CONTACT:
        return list(transform_to_contacts(rows, headers, mapping))
    if entity is EntityType.OPPORTUNITY:
        return list(transform_to_opportunities(rows, headers, mapping))
    return list(transform_to_tasks(rows, headers, mapping))
