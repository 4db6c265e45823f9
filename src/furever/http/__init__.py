"""HTTP primitives: immutable requests, chainable responses."""

from furever.http.headers import Headers
from furever.http.request import Request
from furever.http.response import Response, json_response

__all__ = ["Headers", "Request", "Response", "json_response"]
