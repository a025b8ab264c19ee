"""Tests for the immutable Request and its ASGI adapter."""

from typing import Any

import pytest

from wicket.errors import PayloadTooLarge
from wicket.http.headers import Headers
from wicket.http.query import QueryParams
from wicket.http.request import Request, read_body
from wicket.routing.pattern import compile_pattern
from wicket.routing.route import RouteEntry, RouteMatch


def _handler(request, response) -> None:
    pass


def _scope(**overrides: Any) -> dict[str, Any]:
    scope: dict[str, Any] = {
        "type": "http",
        "method": "post",
        "path": "/users/7",
        "query_string": b"tab=posts&tab=likes",
        "headers": [(b"content-type", b"application/json"), (b"x-tag", b"a"), (b"x-tag", b"b")],
        "client": ("10.0.0.1", 5000),
    }
    scope.update(overrides)
    return scope


def _receiver(*chunks: bytes):
    messages = [
        {"type": "http.request", "body": chunk, "more_body": i < len(chunks) - 1}
        for i, chunk in enumerate(chunks)
    ] or [{"type": "http.request", "body": b"", "more_body": False}]

    async def receive() -> dict[str, Any]:
        if messages:
            return messages.pop(0)
        return {"type": "http.disconnect"}

    return receive


def _match(params: tuple[str, ...], captures: tuple[str, ...]) -> RouteMatch:
    entry = RouteEntry(params=params, pattern=compile_pattern("/users/*"), handler=_handler)
    return RouteMatch(entry=entry, captures=captures)


class TestFromASGI:
    @pytest.mark.asyncio
    async def test_basic_fields(self) -> None:
        request = await Request.from_asgi(
            _scope(), _receiver(b'{"a": ', b"1}"), _match(("id",), ("7",))
        )
        assert request.method == "POST"
        assert request.path == "/users/7"
        assert request.path_params == {"id": "7"}
        assert request.wildcards == ("7",)
        assert request.json() == {"a": 1}
        assert request.client == ("10.0.0.1", 5000)

    @pytest.mark.asyncio
    async def test_headers_and_query(self) -> None:
        request = await Request.from_asgi(_scope(), _receiver())
        assert request.content_type == "application/json"
        assert request.headers.get_list("X-Tag") == ["a", "b"]
        assert request.query["tab"] == "posts"
        assert request.query.get_list("tab") == ["posts", "likes"]
        assert request.url == "/users/7?tab=posts&tab=likes"

    @pytest.mark.asyncio
    async def test_without_match(self) -> None:
        request = await Request.from_asgi(_scope(), _receiver())
        assert request.path_params == {}
        assert request.wildcards == ()

    @pytest.mark.asyncio
    async def test_more_captures_than_names(self) -> None:
        request = await Request.from_asgi(_scope(), _receiver(), _match(("id",), ("7", "8")))
        assert request.path_params == {"id": "7"}
        assert request.wildcards == ("7", "8")

    @pytest.mark.asyncio
    async def test_more_names_than_captures(self) -> None:
        request = await Request.from_asgi(_scope(), _receiver(), _match(("id", "tab"), ("7",)))
        assert request.param("id") == "7"
        assert request.param("tab") is None
        assert request.param("tab", "home") == "home"


class TestReadBody:
    @pytest.mark.asyncio
    async def test_joins_chunks(self) -> None:
        assert await read_body(_receiver(b"ab", b"cd", b"e")) == b"abcde"

    @pytest.mark.asyncio
    async def test_limit_exceeded(self) -> None:
        with pytest.raises(PayloadTooLarge) as exc_info:
            await read_body(_receiver(b"12345", b"678"), limit=6)
        assert exc_info.value.status == 413

    @pytest.mark.asyncio
    async def test_limit_exact_ok(self) -> None:
        assert await read_body(_receiver(b"123456"), limit=6) == b"123456"

    @pytest.mark.asyncio
    async def test_disconnect_ends_body(self) -> None:
        async def receive() -> dict[str, Any]:
            return {"type": "http.disconnect"}

        assert await read_body(receive) == b""


class TestRequestValue:
    def test_frozen(self) -> None:
        request = Request(method="GET", path="/")
        with pytest.raises(AttributeError):
            request.path = "/other"  # type: ignore[misc]

    def test_text(self) -> None:
        assert Request(method="POST", path="/", body="ünï".encode()).text() == "ünï"

    def test_url_without_query(self) -> None:
        assert Request(method="GET", path="/a", query=QueryParams()).url == "/a"


class TestHeaders:
    def test_case_insensitive(self) -> None:
        headers = Headers.from_dict({"Content-Type": "text/plain"})
        assert headers["content-type"] == "text/plain"
        assert headers["CONTENT-TYPE"] == "text/plain"
        assert "Content-Type" in headers

    def test_missing(self) -> None:
        headers = Headers()
        assert headers.get("x") is None
        with pytest.raises(KeyError):
            headers["x"]

    def test_iter_deduplicates(self) -> None:
        headers = Headers(((b"a", b"1"), (b"A", b"2")))
        assert list(headers) == ["a"]
        assert len(headers) == 1
