"""Handler-facing response and the wire-level reply.

``Response`` is the mutable value a handler fills in: status, content
type, body, and optionally a redirect target or a method-not-allowed
signal. The finalizer reads it exactly once after the handler returns
and turns it into a ``Reply``, the frozen value the sender writes.
"""

from __future__ import annotations

import json as json_module
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from wicket.errors import ConfigurationError

if TYPE_CHECKING:
    from kida import Environment

DEFAULT_CONTENT_TYPE = "text/html; charset=utf-8"


class Response:
    """A mutable outbound response, populated by the handler.

    Defaults: status 200, HTML content type, empty body, no redirect,
    method allowed. Every setter returns ``self`` so calls can chain::

        def show(request, response):
            response.set_status(201).json({"id": request.param("id")})
    """

    __slots__ = (
        "_env",
        "body",
        "content_type",
        "headers",
        "method_allowed",
        "redirect_url",
        "status",
    )

    def __init__(self, env: Environment | None = None) -> None:
        self.status: int = 200
        self.content_type: str = DEFAULT_CONTENT_TYPE
        self.body: str | bytes = ""
        self.redirect_url: str | None = None
        self.method_allowed: bool = True
        self.headers: list[tuple[str, str]] = []
        self._env = env

    def __repr__(self) -> str:
        return (
            f"Response(status={self.status!r}, content_type={self.content_type!r}, "
            f"redirect_url={self.redirect_url!r}, method_allowed={self.method_allowed!r})"
        )

    # -- Setters --

    def set_status(self, status: int) -> Response:
        if isinstance(status, bool) or not isinstance(status, int):
            msg = f"Response status must be an int, got {type(status).__name__}."
            raise TypeError(msg)
        self.status = status
        return self

    def set_content_type(self, content_type: str) -> Response:
        self.content_type = content_type
        return self

    def set_header(self, name: str, value: str) -> Response:
        """Add an extra header to a successful reply."""
        self.headers.append((name, value))
        return self

    def send(self, body: str | bytes) -> Response:
        """Set the body content. Raises ``TypeError`` unless *body* is str or bytes."""
        if not isinstance(body, (str, bytes)):
            msg = f"Response body must be str or bytes, got {type(body).__name__}."
            raise TypeError(msg)
        self.body = body
        return self

    def json(self, data: Any) -> Response:
        """Serialize *data* as the body with a JSON content type."""
        self.body = json_module.dumps(data)
        self.content_type = "application/json"
        return self

    def render(self, template: str, /, **context: Any) -> Response:
        """Render a kida template from the app's template directory as the body."""
        if self._env is None:
            msg = "No template environment available; create the Response through the app."
            raise ConfigurationError(msg)
        self.body = self._env.get_template(template).render(context)
        return self

    def redirect(self, url: str) -> Response:
        """Answer with a 301 to *url*, overriding status and content type."""
        self.redirect_url = url
        return self

    def disallow_method(self) -> Response:
        """Answer with a 405, overriding every other field."""
        self.method_allowed = False
        return self


@dataclass(frozen=True, slots=True)
class Reply:
    """One terminal wire response. Immutable; written exactly once."""

    status: int
    body: str | bytes = ""
    content_type: str | None = DEFAULT_CONTENT_TYPE
    headers: tuple[tuple[str, str], ...] = ()

    def with_header(self, name: str, value: str) -> Reply:
        """Return a new Reply with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def header(self, name: str) -> str | None:
        """First value of header *name* (case-insensitive), or ``None``."""
        wanted = name.lower()
        for key, value in self.headers:
            if key.lower() == wanted:
                return value
        return None

    @property
    def body_bytes(self) -> bytes:
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body
