"""Exhaustive router with conflict detection.

Every request is tested against every registered route. There is no
precedence between routes: a request is served only when exactly one
route matches both path and method.
"""

import logging

from furever.http.request import Request
from furever.http.response import Response, json_response
from furever.routing.route import Route, RouteHandler

logger = logging.getLogger("furever.routing")


def not_found() -> Response:
    return json_response({"message": "Not Found"}, status=404)


def server_error() -> Response:
    return json_response({"message": "Server Error"}, status=500)


class Router:
    """Ordered collection of routes, each wrapped in a ``RouteHandler``.

    Usage::

        router = Router()
        router.register(GetHome())
        router.register(PostSignIn(users, hasher, sessions))
        router.compile()
        response = await router.dispatch(request)

    Routes are registered once at startup; ``compile()`` freezes the
    set so the runtime path never mutates it.
    """

    __slots__ = ("_compiled", "_handlers")

    def __init__(self) -> None:
        self._handlers: list[RouteHandler] = []
        self._compiled = False

    def register(self, route: Route) -> None:
        """Add a route. Must be called before ``compile()``."""
        if self._compiled:
            msg = "Cannot register routes after compilation."
            raise RuntimeError(msg)
        self._handlers.append(RouteHandler(route))

    def compile(self) -> None:
        """Freeze the router. No more routes can be registered."""
        self._compiled = True

    @property
    def routes(self) -> list[Route]:
        """All registered routes, in registration order."""
        return [handler.route for handler in self._handlers]

    def matching(self, request: Request) -> list[RouteHandler]:
        """Return every handler whose pattern and method match *request*."""
        return [handler for handler in self._handlers if handler.should_handle(request)]

    async def dispatch(self, request: Request) -> Response:
        """Route *request* to the single matching handler.

        - no match: 404 ``{"message": "Not Found"}``
        - one match: the handler's response, unchanged
        - several matches: logged as a configuration defect, 500
          ``{"message": "Server Error"}``
        """
        matched = self.matching(request)

        if not matched:
            logger.debug("404 %s %s", request.method, request.path)
            return not_found()

        if len(matched) == 1:
            return await matched[0].handle(request)

        logger.error(
            "Multiple routes matched the same request: %s: %s: [%s]",
            request.method,
            request.path,
            ", ".join(handler.name for handler in matched),
        )
        return server_error()
