"""Tests for ASGI response sending."""

from typing import Any

from furever.http.response import Response, json_response
from furever.server.sender import send_response


async def _capture(response: Response) -> list[dict[str, Any]]:
    messages: list[dict[str, Any]] = []

    async def send(message: dict[str, Any]) -> None:
        messages.append(message)

    await send_response(response, send)
    return messages


class TestSendResponse:
    async def test_json_response(self) -> None:
        start, body = await _capture(json_response({"message": "Hello, World!"}))
        assert start["type"] == "http.response.start"
        assert start["status"] == 200
        headers = dict(start["headers"])
        assert headers[b"content-type"] == b"application/json"
        assert headers[b"content-length"] == str(len(body["body"])).encode()
        assert body["body"] == b'{"message": "Hello, World!"}'

    async def test_extra_headers_lowercased(self) -> None:
        response = Response(status=301).with_header("Location", "/client/")
        start, _ = await _capture(response)
        assert (b"location", b"/client/") in start["headers"]

    async def test_no_content_drops_body(self) -> None:
        start, body = await _capture(Response(body="ignored", status=204))
        assert body["body"] == b""
        assert dict(start["headers"])[b"content-length"] == b"0"
