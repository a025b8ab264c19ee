"""Immutable inbound request.

Built once per request from the ASGI exchange and the dispatcher's
match, then handed to the handler. Nothing on it changes afterwards.
"""

from __future__ import annotations

import json as json_module
from dataclasses import dataclass, field
from typing import Any

from wicket._internal.asgi import Receive, Scope
from wicket.errors import PayloadTooLarge
from wicket.http.headers import Headers
from wicket.http.query import QueryParams
from wicket.routing.route import RouteMatch


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``path_params`` maps the matched entry's declared names to captures.
    ``wildcards`` keeps every capture in ``*`` order, including ones no
    name was declared for.
    """

    method: str
    path: str
    path_params: dict[str, str] = field(default_factory=dict)
    wildcards: tuple[str, ...] = ()
    body: bytes = b""
    headers: Headers = field(default_factory=Headers)
    query: QueryParams = field(default_factory=QueryParams)
    client: tuple[str, int] | None = None

    # -- Convenience accessors --

    def param(self, name: str, default: str | None = None) -> str | None:
        """Return a path parameter, or *default* if it was left unbound."""
        return self.path_params.get(name, default)

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def url(self) -> str:
        """Path plus query string, as requested."""
        qs = self.query.raw
        if qs:
            return f"{self.path}?{qs.decode('latin-1')}"
        return self.path

    def text(self) -> str:
        """The body decoded as UTF-8."""
        return self.body.decode("utf-8")

    def json(self) -> Any:
        """The body parsed as JSON."""
        return json_module.loads(self.body)

    # -- Factory --

    @classmethod
    async def from_asgi(
        cls,
        scope: Scope,
        receive: Receive,
        match: RouteMatch | None = None,
        *,
        max_body: int | None = None,
    ) -> Request:
        """Create a Request from an ASGI scope, draining the body.

        Raises ``PayloadTooLarge`` once more than *max_body* bytes arrive.
        """
        body = await read_body(receive, max_body)
        client = scope.get("client")
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            path_params=match.path_params if match is not None else {},
            wildcards=match.captures if match is not None else (),
            body=body,
            headers=Headers(tuple(scope.get("headers", ()))),
            query=QueryParams(scope.get("query_string", b"")),
            client=tuple(client) if client else None,
        )


async def read_body(receive: Receive, limit: int | None = None) -> bytes:
    """Drain ``http.request`` messages into one bytes value."""
    chunks: list[bytes] = []
    size = 0
    while True:
        message = await receive()
        if message["type"] != "http.request":
            break
        chunk = message.get("body", b"")
        if chunk:
            size += len(chunk)
            if limit is not None and size > limit:
                raise PayloadTooLarge(limit)
            chunks.append(chunk)
        if not message.get("more_body", False):
            break
    return b"".join(chunks)
