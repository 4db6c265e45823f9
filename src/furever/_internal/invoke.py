"""Invoke helpers: call sync or async handlers uniformly.

Route ``handle`` methods can be ``def`` or ``async def``. Any code that
calls one must handle both cases. This module keeps the sync/async
check in exactly one place.

Usage::

    from furever._internal.invoke import invoke

    response = await invoke(route.handle, request, match)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable.

    Works with both sync and async callables::

        # sync: returns immediately
        class GetHome(Route):
            def handle(self, request, match):
                return json_response({"message": "Hello, World!"})

        # async: returns a coroutine, awaited here
        class PostSignIn(Route):
            async def handle(self, request, match):
                user = await self._users.find_by_email(...)
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
