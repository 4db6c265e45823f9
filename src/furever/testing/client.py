"""In-process client that drives a furever ``App`` over ASGI.

Requests never touch a socket. Responses come back as the same
``Response`` type the routes produce.
"""

from __future__ import annotations

import json
from typing import Any

from furever.app import App
from furever.http.response import Response

_DEFAULT_CONTENT_TYPE = "text/plain; charset=utf-8"


def _http_scope(method: str, target: str, headers: dict[str, str]) -> dict[str, Any]:
    path, _, query = target.partition("?")
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method.upper(),
        "path": path,
        "raw_path": path.encode("latin-1"),
        "query_string": query.encode("latin-1"),
        "root_path": "",
        "headers": [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in headers.items()
        ],
        "server": ("testserver", 8080),
        "client": ("127.0.0.1", 0),
    }


class _Exchange:
    """One request body going in, the ASGI response messages coming out."""

    __slots__ = ("_body", "_delivered", "body", "headers", "status")

    def __init__(self, body: bytes) -> None:
        self._body = body
        self._delivered = False
        self.status = 500
        self.headers: list[tuple[bytes, bytes]] = []
        self.body = bytearray()

    async def receive(self) -> dict[str, Any]:
        if self._delivered:
            return {"type": "http.disconnect"}
        self._delivered = True
        return {"type": "http.request", "body": self._body, "more_body": False}

    async def send(self, message: dict[str, Any]) -> None:
        if message["type"] == "http.response.start":
            self.status = message["status"]
            self.headers = list(message.get("headers", ()))
        elif message["type"] == "http.response.body":
            self.body += message.get("body", b"")

    def to_response(self) -> Response:
        content_type = _DEFAULT_CONTENT_TYPE
        extra: list[tuple[str, str]] = []
        for raw_name, raw_value in self.headers:
            name, value = raw_name.decode("latin-1"), raw_value.decode("latin-1")
            if name == "content-type":
                content_type = value
            elif name != "content-length":
                extra.append((name, value))
        return Response(
            body=bytes(self.body),
            status=self.status,
            content_type=content_type,
            headers=tuple(extra),
        )


class TestClient:
    """Async test client for furever applications.

    Entering the context runs ``App.startup()`` (database connect and
    schema), leaving it runs ``App.shutdown()``::

        async with TestClient(app) as client:
            response = await client.post("/users/sign-up", json=credentials)
            assert response.status == 201
    """

    __test__ = False  # not a pytest test class
    __slots__ = ("app",)

    def __init__(self, app: App) -> None:
        self.app = app

    async def __aenter__(self) -> TestClient:
        await self.app.startup()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.app.shutdown()

    async def get(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        return await self.request("GET", path, headers=headers)

    async def post(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
        json: Any = None,
    ) -> Response:
        return await self.request("POST", path, headers=headers, body=body, json=json)

    async def put(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
        json: Any = None,
    ) -> Response:
        return await self.request("PUT", path, headers=headers, body=body, json=json)

    async def delete(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        return await self.request("DELETE", path, headers=headers)

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
        json: Any = None,
    ) -> Response:
        """Send one request through the app and collect its response.

        ``json`` is serialized and sent with ``content-type:
        application/json``; otherwise ``body`` is sent as-is.
        """
        request_headers = dict(headers or {})
        payload = body or b""
        if json is not None:
            payload = _dumps(json)
            request_headers.setdefault("content-type", "application/json")

        exchange = _Exchange(payload)
        await self.app(_http_scope(method, path, request_headers), exchange.receive, exchange.send)
        return exchange.to_response()


def _dumps(data: Any) -> bytes:
    return json.dumps(data).encode("utf-8")
