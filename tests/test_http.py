"""Tests for furever.http: Headers, Request, Response."""

from typing import Any

import pytest

from furever.http import Headers, Request, Response, json_response


def _receive_chunks(*chunks: bytes):
    queue = list(chunks)

    async def receive() -> dict[str, Any]:
        body = queue.pop(0)
        return {"type": "http.request", "body": body, "more_body": bool(queue)}

    return receive


class TestHeaders:
    def test_case_insensitive(self) -> None:
        headers = Headers(((b"authorization", b"Bearer abc"),))
        assert headers["Authorization"] == "Bearer abc"
        assert "AUTHORIZATION" in headers

    def test_get_default(self) -> None:
        assert Headers().get("authorization") is None
        assert Headers().get("x", "fallback") == "fallback"

    def test_multiple_values(self) -> None:
        headers = Headers(((b"accept", b"a"), (b"Accept", b"b")))
        assert headers["accept"] == "a"
        assert headers.get_list("accept") == ["a", "b"]
        assert len(headers) == 1

    def test_from_dict(self) -> None:
        headers = Headers.from_dict({"Content-Type": "application/json"})
        assert headers.raw == ((b"content-type", b"application/json"),)


class TestRequest:
    def test_from_asgi(self) -> None:
        scope = {
            "type": "http",
            "method": "delete",
            "path": "/users/sign-out",
            "headers": [(b"authorization", b"Bearer abc")],
            "query_string": b"a=1&a=2",
            "client": ("127.0.0.1", 5000),
        }
        request = Request.from_asgi(scope, _receive_chunks(b""))
        assert request.method == "DELETE"
        assert request.path == "/users/sign-out"
        assert request.headers["authorization"] == "Bearer abc"
        assert request.query == {"a": ["1", "2"]}
        assert request.client == ("127.0.0.1", 5000)

    async def test_body_joins_chunks_and_caches(self) -> None:
        request = Request("POST", "/", Headers(), _receive=_receive_chunks(b'{"a"', b": 1}"))
        assert await request.body() == b'{"a": 1}'
        assert await request.body() == b'{"a": 1}'
        assert await request.json() == {"a": 1}

    async def test_invalid_json_raises_value_error(self) -> None:
        request = Request("POST", "/", Headers(), _receive=_receive_chunks(b"{nope"))
        with pytest.raises(ValueError):
            await request.json()

    async def test_no_receive_means_empty_body(self) -> None:
        assert await Request("GET", "/", Headers()).body() == b""


class TestResponse:
    def test_with_methods_return_new_objects(self) -> None:
        base = Response("hi")
        changed = base.with_status(404).with_header("X-Test", "1")
        assert base.status == 200
        assert base.headers == ()
        assert changed.status == 404
        assert changed.header("x-test") == "1"

    def test_with_headers_and_content_type(self) -> None:
        response = Response().with_headers({"A": "1", "B": "2"}).with_content_type("text/html")
        assert response.headers == (("A", "1"), ("B", "2"))
        assert response.content_type == "text/html"

    def test_body_accessors(self) -> None:
        assert Response(b"caf\xc3\xa9").text == "café"
        assert Response("café").body_bytes == b"caf\xc3\xa9"

    def test_json_response(self) -> None:
        response = json_response({"message": "Not Found"}, status=404)
        assert response.status == 404
        assert response.content_type == "application/json"
        assert response.json() == {"message": "Not Found"}
