"""Path templates compiled into structural matchers.

Template syntax::

    "/"                      -> root only
    "/users/sign-in"         -> literal segments
    "/animals/:id"           -> ``id`` captures exactly one segment
    "/client/{*path}"        -> ``path`` captures the remaining segments
                                (zero or more) as a list

A rest parameter must be the last segment and may appear at most once.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from furever.errors import ConfigurationError

_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class SegmentKind(Enum):
    LITERAL = "literal"
    PARAM = "param"
    REST = "rest"


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a path template.

    Literal: ``users``      (kind=LITERAL, value="users")
    Param:   ``:id``        (kind=PARAM, value="id")
    Rest:    ``{*path}``    (kind=REST, value="path")
    """

    kind: SegmentKind
    value: str


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Result of matching a concrete path against a template.

    ``params`` maps each parameter name to the captured segment, or to
    the list of captured segments for a rest parameter.
    """

    path: str
    params: Mapping[str, str | list[str]]


def _check_name(name: str, template: str) -> str:
    if not _NAME_RE.match(name):
        msg = f"Invalid parameter name {name!r} in route template {template!r}."
        raise ConfigurationError(msg)
    return name


def parse_template(template: str) -> list[PathSegment]:
    """Parse a route template into segments.

    Examples::

        "/"                -> []
        "/users/sign-up"   -> [LITERAL users, LITERAL sign-up]
        "/animals/:id"     -> [LITERAL animals, PARAM id]
        "/client/{*path}"  -> [LITERAL client, REST path]

    Raises ``ConfigurationError`` for malformed templates.
    """
    if not template.startswith("/"):
        msg = f"Route template {template!r} must start with '/'."
        raise ConfigurationError(msg)

    segments: list[PathSegment] = []
    seen: set[str] = set()
    for part in template.strip("/").split("/"):
        if not part:
            if segments or template.strip("/"):
                msg = f"Empty segment in route template {template!r}."
                raise ConfigurationError(msg)
            continue

        if segments and segments[-1].kind is SegmentKind.REST:
            msg = f"Rest parameter must be the last segment in {template!r}."
            raise ConfigurationError(msg)

        if part.startswith("{*") and part.endswith("}"):
            segment = PathSegment(SegmentKind.REST, _check_name(part[2:-1], template))
        elif part.startswith(":"):
            segment = PathSegment(SegmentKind.PARAM, _check_name(part[1:], template))
        elif "{" in part or "}" in part or "*" in part:
            msg = (
                f"Unsupported segment {part!r} in route template {template!r}. "
                "Use ':name' for a parameter or '{*name}' for a trailing rest parameter."
            )
            raise ConfigurationError(msg)
        else:
            segment = PathSegment(SegmentKind.LITERAL, part)

        if segment.kind is not SegmentKind.LITERAL:
            if segment.value in seen:
                msg = f"Duplicate parameter {segment.value!r} in route template {template!r}."
                raise ConfigurationError(msg)
            seen.add(segment.value)
        segments.append(segment)
    return segments


def split_path(path: str) -> list[str]:
    """Split a concrete request path into segments.

    A single trailing slash is ignored, so ``/users/`` and ``/users``
    both split to ``["users"]``. ``/`` splits to ``[]``.
    """
    stripped = path[1:] if path.startswith("/") else path
    if stripped.endswith("/"):
        stripped = stripped[:-1]
    if not stripped:
        return []
    return stripped.split("/")


class PathPattern:
    """A compiled path template.

    Usage::

        pattern = PathPattern("/animals/:id")
        result = pattern.match("/animals/42")
        # MatchResult(path="/animals/42", params={"id": "42"})
    """

    __slots__ = ("_rest", "_segments", "template")

    def __init__(self, template: str) -> None:
        self.template = template
        segments = parse_template(template)
        if segments and segments[-1].kind is SegmentKind.REST:
            self._rest: str | None = segments[-1].value
            segments = segments[:-1]
        else:
            self._rest = None
        self._segments: tuple[PathSegment, ...] = tuple(segments)

    @property
    def segments(self) -> tuple[PathSegment, ...]:
        """Fixed-position segments (excluding a trailing rest parameter)."""
        return self._segments

    @property
    def rest_name(self) -> str | None:
        """Name of the trailing rest parameter, if any."""
        return self._rest

    def match(self, path: str) -> MatchResult | None:
        """Match *path* structurally. Returns ``None`` when it doesn't match."""
        parts = split_path(path)
        fixed = len(self._segments)

        if self._rest is None:
            if len(parts) != fixed:
                return None
        elif len(parts) < fixed:
            return None

        params: dict[str, str | list[str]] = {}
        for segment, part in zip(self._segments, parts, strict=False):
            if segment.kind is SegmentKind.LITERAL:
                if part != segment.value:
                    return None
            elif not part:
                return None
            else:
                params[segment.value] = part

        if self._rest is not None:
            remaining = parts[fixed:]
            if any(not part for part in remaining):
                return None
            params[self._rest] = remaining

        return MatchResult(path=path, params=params)

    def __repr__(self) -> str:
        return f"PathPattern({self.template!r})"
