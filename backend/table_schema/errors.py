"""Exception types raised by the table schema toolkit."""

from __future__ import annotations

from typing import Optional


class TableSchemaError(ValueError):
    """Base class for schema construction and validation failures."""


class FilterNotAllowedError(TableSchemaError):
    """Raised at the call site when a filter type is not legal for a column kind."""


class InvalidDisplayError(TableSchemaError):
    """Raised at the call site for an unknown or malformed display config."""


class SchemaValidationError(TableSchemaError):
    """Raised once, at schema creation, naming the offending column."""

    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message)
        self.key = key
