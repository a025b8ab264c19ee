"""Wicket exception hierarchy.

Shared across Router, App, handler pipeline, and static serving so
every module raises and catches the same types.
"""

from dataclasses import dataclass


class WicketError(Exception):
    """Base for all wicket-specific errors."""


class ConfigurationError(WicketError):
    """Raised when app configuration or route registration is invalid.

    Typically raised during setup, before the app starts serving.
    """


class InvalidPatternError(ConfigurationError):
    """Raised when a wildcard route pattern cannot be compiled."""


@dataclass(frozen=True, slots=True)
class HTTPError(WicketError):
    """An error that maps directly to an HTTP status code.

    Raised by the router and the request adapter. The request pipeline
    catches these and writes the matching terminal reply.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no route entry matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — the request verb is not one of the supported methods.

    Never reaches a handler.
    """

    def __init__(self, method: str, detail: str = "") -> None:
        super().__init__(
            status=405,
            detail=detail or f"Method {method!r} is not supported",
            headers=(("Allow", "DELETE, GET, PATCH, POST, PUT"),),
        )


class PayloadTooLarge(HTTPError):  # noqa: N818
    """413 — request body exceeds ``AppConfig.max_content_length``."""

    def __init__(self, limit: int) -> None:
        super().__init__(status=413, detail=f"Request body exceeds {limit} bytes")
