"""Immutable HTTP response.

Routes build a ``Response`` and refine it with ``.with_*()`` calls, each
of which returns a copy::

    Response(status=301).with_header("Location", "/client/")
    json_response({"message": "Not Found"}, status=404)
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

JSON_CONTENT_TYPE = "application/json"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"


@dataclass(frozen=True, slots=True)
class Response:
    """Status, content type, extra headers, and a ``str`` or ``bytes`` body.

    ``content-type`` and ``content-length`` are emitted by the sender;
    ``headers`` holds everything else, in order.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = TEXT_CONTENT_TYPE
    headers: tuple[tuple[str, str], ...] = ()

    def with_status(self, status: int) -> Response:
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Copy with one more header appended."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        """Copy with every pair in *headers* appended."""
        return replace(self, headers=self.headers + tuple(headers.items()))

    def with_content_type(self, content_type: str) -> Response:
        return replace(self, content_type=content_type)

    def header(self, name: str) -> str | None:
        """First value of header *name*, compared case-insensitively."""
        wanted = name.lower()
        return next((value for key, value in self.headers if key.lower() == wanted), None)

    @property
    def body_bytes(self) -> bytes:
        """The body encoded as UTF-8 when it was given as text."""
        return self.body.encode("utf-8") if isinstance(self.body, str) else self.body

    @property
    def text(self) -> str:
        return self.body.decode("utf-8") if isinstance(self.body, bytes) else self.body

    def json(self) -> Any:
        """Decode the body as JSON. Raises ``ValueError`` when it isn't."""
        return json.loads(self.body_bytes)


def json_response(data: Any, status: int = 200) -> Response:
    """A ``Response`` carrying *data* serialized as JSON."""
    return Response(body=json.dumps(data), status=status, content_type=JSON_CONTENT_TYPE)
