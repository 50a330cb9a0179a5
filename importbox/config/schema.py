"""Pydantic models for importbox configuration.

These models define the structure of config.toml.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ImportConfig(BaseModel):
    """Import pipeline limits."""

    # Rows beyond this are dropped from a single preview
    max_rows: int = Field(5000, gt=0)


class DuplicatesConfig(BaseModel):
    """Duplicate detection and lead-name matching thresholds."""

    similarity_threshold: float = Field(80, ge=0, le=100)
    amount_tolerance: float = Field(0.01, ge=0)
    lead_match_threshold: float = Field(85, ge=0, le=100)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


class ImportboxConfig(BaseModel):
    """Main importbox configuration loaded from config.toml."""

    # "import" is a keyword, so the section is exposed as ``import_``
    model_config = ConfigDict(populate_by_name=True)

    import_: ImportConfig = Field(default_factory=ImportConfig, alias="import")
    duplicates: DuplicatesConfig = Field(default_factory=DuplicatesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
