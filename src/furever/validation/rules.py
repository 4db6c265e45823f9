"""Built-in validation rules for JSON request bodies.

Each validator is a callable with the signature::

    def rule(value: Any) -> str | None:
        '''Return error message, or None if valid.'''

Parameterized validators are factory functions that return a validator::

    def max_length(n: int) -> Validator:
        def check(value: Any) -> str | None:
            if len(value) > n:
                return f"Must be at most {n} characters"
            return None
        return check

``required``, ``string``, ``utf8`` and ``integer`` are *gate* rules: when one
fails, the remaining rules for that field are skipped.
"""

import re
from collections.abc import Callable
from typing import Any, TypeAlias

# Type alias for a validator function
Validator: TypeAlias = Callable[[Any], str | None]


# ---------------------------------------------------------------------------
# Presence and type
# ---------------------------------------------------------------------------


def required(value: Any) -> str | None:
    """Field must be present and not null."""
    if value is None:
        return "This field is required"
    return None


def string(value: Any) -> str | None:
    """Value must be a JSON string."""
    if not isinstance(value, str):
        return "Expected a string"
    return None


def utf8(value: Any) -> str | None:
    """String must be encodable as UTF-8 (no lone surrogates)."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return "Must be valid UTF-8 text"
    return None


def integer(value: Any) -> str | None:
    """Value must be a JSON integer (booleans excluded)."""
    if isinstance(value, bool) or not isinstance(value, int):
        return "Expected an integer"
    return None


GATES: frozenset[Validator] = frozenset({required, string, utf8, integer})


# ---------------------------------------------------------------------------
# Length
# ---------------------------------------------------------------------------


def max_length(n: int) -> Validator:
    """String must be at most *n* characters."""

    def check(value: Any) -> str | None:
        if len(value) > n:
            return f"Must be at most {n} characters"
        return None

    return check


def min_length(n: int) -> Validator:
    """String must be at least *n* characters."""

    def check(value: Any) -> str | None:
        if len(value) < n:
            return f"Must be at least {n} characters"
        return None

    return check


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------

# Basic email pattern: checks structure, not deliverability
_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")


def email(value: Any) -> str | None:
    """Value must be a valid email address (basic format check)."""
    if not _EMAIL_RE.match(value):
        return "Must be a valid email address"
    return None


# ---------------------------------------------------------------------------
# Choice
# ---------------------------------------------------------------------------


def one_of(*choices: Any) -> Validator:
    """Value must be one of the given choices."""
    allowed = tuple(choices)

    def check(value: Any) -> str | None:
        if value not in allowed:
            options = ", ".join(str(choice) for choice in allowed)
            return f"Must be one of: {options}"
        return None

    return check
