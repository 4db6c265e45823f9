"""JSON body validation: composable rules, clean results.

Usage::

    from furever.validation import validate, required, string, email

    result = validate(body, {
        "email": [required, string, email],
        "password": [required, string, min_length(8), max_length(72)],
    })
    if not result:
        ...  # result.issues -> [{"path": ["email"], "message": "..."}]
"""

from collections.abc import Mapping
from typing import Any

from furever.validation.result import ValidationResult
from furever.validation.rules import (
    GATES,
    Validator,
    email,
    integer,
    max_length,
    min_length,
    one_of,
    required,
    string,
    utf8,
)

__all__ = [
    "ValidationResult",
    "Validator",
    "email",
    "integer",
    "malformed",
    "max_length",
    "min_length",
    "one_of",
    "required",
    "string",
    "utf8",
    "validate",
]


def malformed(message: str) -> ValidationResult:
    """A failed result for a body that could not be parsed at all."""
    return ValidationResult(data={}, errors={"": [message]})


def validate(
    data: Any,
    rules: dict[str, list[Validator]],
) -> ValidationResult:
    """Validate a decoded JSON body against a set of rules.

    Args:
        data: The decoded body. Anything other than a JSON object fails
            with a single body-level error.
        rules: A dict mapping field names to lists of validator
            functions. Each validator returns an error message string
            on failure, or ``None`` on success.

    Returns:
        A ``ValidationResult`` with ``.data`` (validated values) and
        ``.errors`` (field -> list of error messages).
    """
    if not isinstance(data, Mapping):
        return malformed("Expected a JSON object")

    errors: dict[str, list[str]] = {}
    cleaned: dict[str, Any] = {}

    for field_name, validators in rules.items():
        value = data.get(field_name)

        field_errors: list[str] = []
        for validator in validators:
            error = validator(value)
            if error is not None:
                field_errors.append(error)
                # No point checking the length of a missing or mistyped value
                if validator in GATES:
                    break

        if field_errors:
            errors[field_name] = field_errors
        else:
            cleaned[field_name] = value

    if errors:
        return ValidationResult(data={}, errors=errors)
    return ValidationResult(data=cleaned, errors={})
