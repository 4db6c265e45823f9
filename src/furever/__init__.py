"""Furever Home: backend service for a pet-adoption site.

Routes requests through an exhaustive pattern router and manages
bearer-token sessions for registered users.

Basic usage::

    from furever import App, AppConfig

    app = App(AppConfig(database_url="sqlite:///data.sqlite"))

Serve it with ``furever run`` or any ASGI server.
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "FureverError",
    "InconsistentMatchError",
    "Request",
    "Response",
    "Route",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import furever`` fast while providing a clean top-level API.
    """
    if name == "App":
        from furever.app import App

        return App

    if name == "AppConfig":
        from furever.config import AppConfig

        return AppConfig

    if name in ("ConfigurationError", "FureverError", "InconsistentMatchError"):
        from furever import errors

        return getattr(errors, name)

    if name == "Request":
        from furever.http.request import Request

        return Request

    if name == "Response":
        from furever.http.response import Response

        return Response

    if name == "Route":
        from furever.routing.route import Route

        return Route

    msg = f"module 'furever' has no attribute {name!r}"
    raise AttributeError(msg)
