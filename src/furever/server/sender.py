"""Emit a ``Response`` as the two ASGI HTTP response messages."""

from furever._internal.asgi import Send
from furever.http.response import Response

# 1xx, 204 No Content and 304 Not Modified never carry a body
_BODYLESS = frozenset({204, 304})


def _encode_headers(response: Response, length: int) -> list[tuple[bytes, bytes]]:
    pairs = [("content-type", response.content_type)]
    pairs.extend((name.lower(), value) for name, value in response.headers)
    pairs.append(("content-length", str(length)))
    return [(name.encode("latin-1"), value.encode("latin-1")) for name, value in pairs]


async def send_response(response: Response, send: Send) -> None:
    """Send ``http.response.start`` then a single ``http.response.body``."""
    if response.status < 200 or response.status in _BODYLESS:
        body = b""
    else:
        body = response.body_bytes

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": _encode_headers(response, len(body)),
        }
    )
    await send({"type": "http.response.body", "body": body})
