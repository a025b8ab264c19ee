"""Invoke helpers — call sync or async handlers uniformly.

Route handlers are plain ``(request, response)`` callables and usually
block. Sync handlers run in a worker thread so the event loop keeps
serving other requests; async handlers are awaited directly. The
sync/async check lives in exactly one place.

Usage::

    from wicket._internal.invoke import invoke

    await invoke(handler, request, response)
"""

import functools
import inspect
from typing import Any

import anyio.to_thread


async def invoke(handler: Any, *args: Any) -> Any:
    """Call a handler, off-loop if it is synchronous.

    Coroutine functions (and callables whose ``__call__`` is one) are
    awaited on the event loop. Everything else runs via
    ``anyio.to_thread.run_sync``.
    """
    if inspect.iscoroutinefunction(handler) or inspect.iscoroutinefunction(
        getattr(handler, "__call__", None)
    ):
        return await handler(*args)
    result = await anyio.to_thread.run_sync(functools.partial(handler, *args))
    if inspect.isawaitable(result):
        result = await result
    return result
