"""ASGI handler: translates ASGI scope/messages to furever types.

The only component that touches raw ASGI for HTTP. Converts the scope
to a ``Request``, dispatches through the router, and sends the
``Response`` back through ASGI ``send()``.
"""

import logging

from furever._internal.asgi import Receive, Scope, Send
from furever.errors import InconsistentMatchError
from furever.http.request import Request
from furever.routing.router import Router, server_error
from furever.server.sender import send_response

logger = logging.getLogger("furever.server")


async def handle_request(scope: Scope, receive: Receive, send: Send, *, router: Router) -> None:
    """Process a single HTTP request through the router."""
    request = Request.from_asgi(scope, receive)

    try:
        response = await router.dispatch(request)
    except InconsistentMatchError:
        logger.critical("Router invariant violated on %s %s", request.method, request.path)
        raise
    except Exception:
        logger.exception("500 %s %s", request.method, request.path)
        response = server_error()

    peer = request.client[0] if request.client else "-"
    logger.info("%s %s %s %d", peer, request.method, request.path, response.status)
    await send_response(response, send)
