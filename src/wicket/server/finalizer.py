"""Response finalizer — one handler outcome in, one terminal reply out.

Priority, highest first:

1. the handler raised: 500 failure page
2. the handler disallowed the method: 405
3. the handler set a redirect target: 301 with ``Location``
4. otherwise: the handler's status, content type, and body verbatim

Lower-priority fields the handler set are discarded.
"""

import logging

from wicket.errors import HTTPError
from wicket.http.request import Request
from wicket.http.response import Reply, Response
from wicket.server.debug_page import render_failure_page
from wicket.server.outcome import Completed, Failed, Outcome

logger = logging.getLogger("wicket.server")

NOT_FOUND_BODY = "404 (Not Found)\n"
METHOD_NOT_ALLOWED_BODY = "405 (Method Not Allowed)\n"
PLAIN_TEXT = "text/plain; charset=utf-8"


def not_found_reply() -> Reply:
    return Reply(status=404, body=NOT_FOUND_BODY, content_type=PLAIN_TEXT)


def method_not_allowed_reply() -> Reply:
    return Reply(status=405, body=METHOD_NOT_ALLOWED_BODY, content_type=PLAIN_TEXT)


def redirect_reply(url: str) -> Reply:
    return Reply(
        status=301,
        body=f"Redirecting to {url}",
        content_type=PLAIN_TEXT,
        headers=(("Location", url),),
    )


def failure_reply(exc: Exception, request: Request, *, expose_tracebacks: bool = True) -> Reply:
    """Log a handler failure and render it as a 500."""
    logger.error(
        "500 %s %s", request.method, request.path, exc_info=(type(exc), exc, exc.__traceback__)
    )
    body = render_failure_page(exc, request, include_trace=expose_tracebacks)
    return Reply(status=500, body=body)


def http_error_reply(exc: HTTPError) -> Reply:
    """Map a router or adapter ``HTTPError`` to its terminal reply."""
    if exc.status == 404:
        reply = not_found_reply()
    elif exc.status == 405:
        reply = method_not_allowed_reply()
    else:
        reply = Reply(status=exc.status, body=f"{exc}\n", content_type=PLAIN_TEXT)
    for name, value in exc.headers:
        reply = reply.with_header(name, value)
    return reply


def _invalid_field(response: Response) -> str | None:
    """Describe the first response field the sender cannot write, if any."""
    if isinstance(response.status, bool) or not isinstance(response.status, int):
        return f"Response status must be an int, got {type(response.status).__name__}."
    if not isinstance(response.body, (str, bytes)):
        return f"Response body must be str or bytes, got {type(response.body).__name__}."
    if not isinstance(response.content_type, str):
        return f"Response content type must be a str, got {type(response.content_type).__name__}."
    return None


def finalize(
    outcome: Outcome,
    response: Response,
    request: Request,
    *,
    expose_tracebacks: bool = True,
) -> Reply:
    """Turn a finished handler invocation into exactly one reply."""
    match outcome:
        case Failed(error=exc):
            return failure_reply(exc, request, expose_tracebacks=expose_tracebacks)
        case Completed():
            pass

    if not response.method_allowed:
        return method_not_allowed_reply()

    if response.redirect_url is not None:
        return redirect_reply(response.redirect_url)

    # Fields may be assigned directly, bypassing the setters
    problem = _invalid_field(response)
    if problem is not None:
        return failure_reply(TypeError(problem), request, expose_tracebacks=expose_tracebacks)

    return Reply(
        status=response.status,
        body=response.body,
        content_type=response.content_type,
        headers=tuple(response.headers),
    )
