"""Pydantic schema for an import preview."""

from pydantic import BaseModel, ConfigDict, Field, computed_field

from importbox.schemas.duplicates import DuplicateCheckResult, LeadMatchResult
from importbox.schemas.import_schemas import AnyParsedRecord, ContactSlot, EntityType


class ImportPreview(BaseModel):
    """Everything the review step needs before records are committed.

    ``duplicates`` is parallel to ``records`` for transactions and leads;
    ``lead_matches`` lists one result per distinct company name for contacts,
    opportunities and tasks.
    """

    model_config = ConfigDict(frozen=True)

    entity: EntityType
    headers: list[str]
    mapping: dict[str, str | None]
    confidence: dict[str, float] = Field(default_factory=dict)
    contact_slots: list[ContactSlot] = Field(default_factory=list)
    mapping_errors: list[str] = Field(default_factory=list)
    records: list[AnyParsedRecord] = Field(default_factory=list)
    duplicates: list[DuplicateCheckResult] = Field(default_factory=list)
    lead_matches: list[LeadMatchResult] = Field(default_factory=list)
    total_rows: int = 0
    truncated: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def mapping_valid(self) -> bool:
        return not self.mapping_errors

    @computed_field  # type: ignore[prop-decorator]
    @property
    def valid_count(self) -> int:
        return sum(1 for record in self.records if record.is_valid)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def invalid_count(self) -> int:
        return len(self.records) - self.valid_count

    @computed_field  # type: ignore[prop-decorator]
    @property
    def duplicate_count(self) -> int:
        return sum(1 for result in self.duplicates if result.is_duplicate)
