"""ASGI handler — one request through the full pipeline.

The only component that touches raw ASGI directly:

1. static prefix: answered by ``StaticFiles``, routing never runs
2. ``Router.match()`` selects the entry (404/405 on failure)
3. the adapter builds ``Request`` and a fresh ``Response``
4. the handler runs, its outcome captured as a value
5. the finalizer produces one ``Reply``, which is sent
6. one access line is logged
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wicket._internal.asgi import Receive, Scope, Send
from wicket.errors import HTTPError
from wicket.http.request import Request
from wicket.http.response import Reply, Response
from wicket.routing.dispatcher import Router
from wicket.server.access_log import log_access
from wicket.server.finalizer import finalize, http_error_reply
from wicket.server.outcome import run_handler
from wicket.server.sender import send_reply
from wicket.static import StaticFiles

if TYPE_CHECKING:
    from kida import Environment

    from wicket.config import AppConfig


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    config: AppConfig,
    static: StaticFiles | None = None,
    env: Environment | None = None,
) -> None:
    """Process a single HTTP request and write exactly one reply."""
    if scope["type"] != "http":
        return

    method: str = scope["method"].upper()
    path: str = scope["path"]

    reply = await _resolve(
        scope, receive, method, path, router=router, config=config, static=static, env=env
    )

    await send_reply(reply, send, head=method == "HEAD")
    if config.access_log:
        log_access(method, path, reply.status)


async def _resolve(
    scope: Scope,
    receive: Receive,
    method: str,
    path: str,
    *,
    router: Router,
    config: AppConfig,
    static: StaticFiles | None,
    env: Environment | None,
) -> Reply:
    """Produce the terminal reply for one request."""
    # Static prefix takes priority over every route table
    if static is not None and static.handles(path):
        return static.serve(method, path)

    try:
        match = router.match(method, path)
        request = await Request.from_asgi(
            scope, receive, match, max_body=config.max_content_length
        )
    except HTTPError as exc:
        return http_error_reply(exc)

    response = Response(env)
    outcome = await run_handler(match.entry.handler, request, response)
    return finalize(outcome, response, request, expose_tracebacks=config.expose_tracebacks)
