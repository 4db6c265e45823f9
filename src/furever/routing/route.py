"""Route abstraction and the matching adaptor the router keeps per route."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable
from typing import ClassVar

from furever._internal.invoke import invoke
from furever.errors import ConfigurationError, InconsistentMatchError
from furever.http.request import Request
from furever.http.response import Response
from furever.routing.matcher import MatchResult, PathPattern

METHODS: frozenset[str] = frozenset({"GET", "POST", "DELETE", "PUT"})


class Route(ABC):
    """One logical endpoint: a path template, an HTTP method, and a handler.

    Subclasses declare ``pattern`` and ``method`` as class attributes and
    implement ``handle``. Instances are created once at startup with the
    collaborators they need and live as long as the router::

        class GetHome(Route):
            pattern = "/"
            method = "GET"

            def handle(self, request, match):
                return json_response({"message": "Hello, World!"})

    ``handle`` may be sync or async.
    """

    pattern: ClassVar[str]
    method: ClassVar[str]

    @property
    def name(self) -> str:
        """Identity used in logs (the class name)."""
        return type(self).__name__

    @abstractmethod
    def handle(self, request: Request, match: MatchResult) -> Response | Awaitable[Response]:
        """Produce the response for a request this route matched."""


class RouteHandler:
    """Wraps a ``Route`` with its compiled ``PathPattern``.

    The router only ever talks to routes through this adaptor, so the
    "does it match" decision and the call are made against the same
    compiled pattern.
    """

    __slots__ = ("_pattern", "route")

    def __init__(self, route: Route) -> None:
        method = route.method.upper()
        if method not in METHODS:
            allowed = ", ".join(sorted(METHODS))
            msg = f"{route.name} declares unsupported method {route.method!r} (allowed: {allowed})."
            raise ConfigurationError(msg)
        self.route = route
        self._pattern = PathPattern(route.pattern)

    @property
    def name(self) -> str:
        return self.route.name

    @property
    def method(self) -> str:
        return self.route.method.upper()

    @property
    def pattern(self) -> PathPattern:
        return self._pattern

    def should_handle(self, request: Request) -> bool:
        """True iff the path matches the template and the method matches."""
        return request.method == self.method and self._pattern.match(request.path) is not None

    async def handle(self, request: Request) -> Response:
        """Invoke the wrapped route.

        Raises ``InconsistentMatchError`` when called for a request that
        ``should_handle`` would reject.
        """
        match = self._pattern.match(request.path)
        if match is None or request.method != self.method:
            raise InconsistentMatchError(self.name, request.method, request.path)
        return await invoke(self.route.handle, request, match)

    def __repr__(self) -> str:
        return f"RouteHandler({self.name}: {self.method} {self._pattern.template})"
