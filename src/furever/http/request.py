"""Immutable HTTP request.

Method, path and headers are fixed when the request is built from the
ASGI scope. The body is pulled from ``receive`` on first use and kept.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qs

from furever._internal.asgi import Receive, Scope
from furever.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """What a route sees of an incoming request.

    ``method`` is upper-case. ``path`` is the decoded ASGI path, without
    the query string.
    """

    method: str
    path: str
    headers: Headers
    query_string: bytes = b""
    client: tuple[str, int] | None = None

    _receive: Receive | None = field(default=None, repr=False, compare=False)
    # Holds the body once read; the dict itself is mutable
    _cache: dict[str, bytes] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        client = scope.get("client")
        raw_headers = tuple((bytes(name), bytes(value)) for name, value in scope.get("headers", ()))
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            headers=Headers(raw_headers),
            query_string=scope.get("query_string", b""),
            client=(client[0], client[1]) if client else None,
            _receive=receive,
        )

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def query(self) -> dict[str, list[str]]:
        """Query parameters, each mapped to every value it was given."""
        return parse_qs(self.query_string.decode("latin-1"), keep_blank_values=True)

    async def chunks(self) -> AsyncIterator[bytes]:
        """Yield body chunks straight from ``receive``. Single use."""
        if self._receive is None:
            return
        more = True
        while more:
            message = await self._receive()
            if chunk := message.get("body", b""):
                yield chunk
            more = message.get("more_body", False)

    async def body(self) -> bytes:
        """The whole body. Later calls return the same bytes."""
        if "body" not in self._cache:
            self._cache["body"] = b"".join([chunk async for chunk in self.chunks()])
        return self._cache["body"]

    async def text(self) -> str:
        return (await self.body()).decode("utf-8")

    async def json(self) -> Any:
        """The body decoded as JSON.

        Raises ``ValueError`` (``JSONDecodeError`` or ``UnicodeDecodeError``)
        for anything that isn't a UTF-8 JSON document.
        """
        return json.loads(await self.body())
