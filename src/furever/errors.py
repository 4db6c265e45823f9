"""Furever exception hierarchy.

Shared across Router, App, handler, and routes so every module
raises and catches the same types.
"""


class FureverError(Exception):
    """Base for all furever-specific errors."""


class ConfigurationError(FureverError):
    """Raised when app configuration or a route template is invalid.

    Typically raised at startup, while routes are compiled.
    """


class InconsistentMatchError(FureverError):
    """A route handler was invoked for a request its pattern does not match.

    This is a router bug, never a request problem. The ASGI handler
    re-raises it instead of turning it into a response.
    """

    def __init__(self, route_name: str, method: str, path: str) -> None:
        self.route_name = route_name
        self.method = method
        self.path = path
        super().__init__(
            f"Inconsistent state: {route_name} was asked to handle "
            f"{method} {path!r}, which it does not match"
        )
