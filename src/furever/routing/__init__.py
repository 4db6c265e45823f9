"""Routing: pattern-matched routes dispatched by an exhaustive router.

Routes are registered during setup. Every request is tested against
every route; exactly one must match.
"""

from furever.routing.matcher import MatchResult, PathPattern, parse_template
from furever.routing.route import Route, RouteHandler
from furever.routing.router import Router

__all__ = ["MatchResult", "PathPattern", "Route", "RouteHandler", "Router", "parse_template"]
