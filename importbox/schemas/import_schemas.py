"""Pydantic schemas for CSV import: grids, mappings and typed records."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from importbox.exceptions import UnknownEntityError


class EntityType(str, Enum):
    """Kinds of record an import can produce."""

    TRANSACTION = "transaction"
    LEAD = "lead"
    CONTACT = "contact"
    OPPORTUNITY = "opportunity"
    TASK = "task"


def coerce_entity(entity: EntityType | str) -> EntityType:
    """Turn an entity name into an EntityType.

    Raises:
        UnknownEntityError: If the name is not a supported entity.
    """
    if isinstance(entity, EntityType):
        return entity
    try:
        return EntityType(entity)
    except ValueError:
        raise UnknownEntityError(str(entity)) from None


class ParsedGrid(BaseModel):
    """Header row plus a rectangular grid of string cells."""

    model_config = ConfigDict(frozen=True)

    headers: list[str]
    rows: list[list[str]] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_rectangular(self) -> "ParsedGrid":
        """Every row must have exactly one cell per header."""
        width = len(self.headers)
        for i, row in enumerate(self.rows):
            if len(row) != width:
                raise ValueError(
                    f"Row {i} has {len(row)} cells but there are {width} headers"
                )
        return self


class ContactSlot(BaseModel):
    """One group of contact columns attached to a lead row."""

    model_config = ConfigDict(frozen=True)

    slot_index: int = Field(..., ge=0)
    slot_label: str
    fields: dict[str, str | None]

    @property
    def mapped_count(self) -> int:
        """Number of contact fields with a source header."""
        return sum(1 for header in self.fields.values() if header is not None)


class DetectedMapping(BaseModel):
    """Auto-detected column mapping with per-field confidence."""

    model_config = ConfigDict(frozen=True)

    entity: EntityType
    mapping: dict[str, str | None]
    confidence: dict[str, float]
    contact_slots: list[ContactSlot] = Field(default_factory=list)


class MappingValidation(BaseModel):
    """Result of checking a mapping against an entity's required columns."""

    model_config = ConfigDict(frozen=True)

    valid: bool
    errors: list[str] = Field(default_factory=list)


# =============================================================================
# Typed records
# =============================================================================


class ParsedRecord(BaseModel):
    """Common fields for every record produced from a CSV row."""

    model_config = ConfigDict(frozen=True)

    row_number: int = Field(..., ge=2, description="1-indexed source line, header is line 1")
    errors: list[str] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_valid(self) -> bool:
        return not self.errors


class ParsedTransaction(ParsedRecord):
    """A bank statement line."""

    date: str | None = None
    amount: float = 0.0
    description: str = ""
    notes: str | None = None


class LeadContact(BaseModel):
    """A person attached to an imported lead."""

    model_config = ConfigDict(frozen=True)

    first_name: str
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    title: str | None = None


class ParsedLead(ParsedRecord):
    """A company/organization lead, optionally carrying several contacts."""

    name: str = ""
    website: str | None = None
    industry: str | None = None
    status: str | None = None
    notes: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    postal_code: str | None = None
    source: str | None = None

    contacts: list[LeadContact] = Field(default_factory=list)

    # Single-contact fields kept for older consumers
    contact_first_name: str | None = None
    contact_last_name: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    contact_title: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def contact_count(self) -> int:
        return len(self.contacts)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_contact_data(self) -> bool:
        return bool(self.contacts)


class ParsedContact(ParsedRecord):
    """A contact row linked to a lead by company name."""

    lead_name: str = ""
    first_name: str = ""
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    title: str | None = None
    notes: str | None = None


class ParsedOpportunity(ParsedRecord):
    """A deal row linked to a lead by company name."""

    lead_name: str = ""
    name: str = ""
    value: float | None = None
    probability: float | None = Field(None, ge=0, le=100)
    expected_close_date: str | None = None
    status: str | None = None
    notes: str | None = None


class ParsedTask(ParsedRecord):
    """A to-do row linked to a lead by company name."""

    lead_name: str = ""
    title: str = ""
    description: str | None = None
    due_date: str | None = None
    notes: str | None = None


AnyParsedRecord = ParsedTransaction | ParsedLead | ParsedContact | ParsedOpportunity | ParsedTask
