"""Data layer error hierarchy."""

from furever.errors import FureverError


class DataError(FureverError):
    """Base for all furever.data errors."""


class QueryError(DataError):
    """Raised when a SQL statement fails."""


class IntegrityError(QueryError):
    """Raised when a statement violates a constraint (UNIQUE, NOT NULL, ...)."""
