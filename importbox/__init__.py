"""ImportBox: schema-less CSV import, column mapping and duplicate detection."""

__version__ = "0.3.0"
