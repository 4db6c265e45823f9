"""Validation result: immutable container for validated data or errors."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """The outcome of validating a request body against a set of rules.

    The result is falsy when invalid, so you can write::

        result = validate(body, rules)
        if not result:
            return invalid_body(result.issues)

    ``data`` holds the validated values (only populated when there are
    no errors). ``errors`` maps field names to lists of messages; the
    empty field name ``""`` is used for problems with the body as a whole.
    """

    data: dict[str, Any]
    errors: dict[str, list[str]]

    @property
    def is_valid(self) -> bool:
        """True if validation passed with no errors."""
        return not self.errors

    def __bool__(self) -> bool:
        """Falsy when invalid: enables ``if not result:`` pattern."""
        return self.is_valid

    @property
    def issues(self) -> list[dict[str, Any]]:
        """Errors flattened to ``[{"path": [...], "message": ...}]``."""
        return [
            {"path": [field] if field else [], "message": message}
            for field, messages in self.errors.items()
            for message in messages
        ]
