"""Exceptions raised by ImportBox.

Expected data problems (bad cells, missing columns, no duplicate found) are
reported through return values, never raised. These exceptions cover caller
mistakes only.
"""


class ImportboxError(Exception):
    """Base class for ImportBox errors."""


class UnknownEntityError(ImportboxError, ValueError):
    """Raised when an entity type outside the supported set is requested."""

    def __init__(self, entity: str):
        self.entity = entity
        super().__init__(f"Unknown entity type: {entity!r}")
