"""Tests for wicket.server.finalizer — outcome priority rules."""

import logging

import pytest

from wicket.errors import HTTPError, MethodNotAllowed, NotFound, PayloadTooLarge
from wicket.http.request import Request
from wicket.http.response import Response
from wicket.server.finalizer import (
    METHOD_NOT_ALLOWED_BODY,
    NOT_FOUND_BODY,
    finalize,
    http_error_reply,
)
from wicket.server.outcome import Completed, Failed, run_handler


def _request() -> Request:
    return Request(method="GET", path="/boom")


def _failed(message: str = "kaboom") -> Failed:
    try:
        raise RuntimeError(message)
    except RuntimeError as exc:
        return Failed(exc)


class TestPriority:
    def test_failure_beats_everything(self) -> None:
        response = Response().disallow_method().redirect("/elsewhere").send("ignored")
        reply = finalize(_failed(), response, _request())
        assert reply.status == 500
        assert "kaboom" in reply.text
        assert reply.header("Location") is None

    def test_disallow_beats_redirect(self) -> None:
        response = Response().redirect("/elsewhere").disallow_method()
        reply = finalize(Completed(), response, _request())
        assert reply.status == 405
        assert reply.text == METHOD_NOT_ALLOWED_BODY
        assert reply.header("Location") is None

    def test_disallow_discards_status_and_body(self) -> None:
        response = Response().set_status(201).send("created").disallow_method()
        reply = finalize(Completed(), response, _request())
        assert reply.status == 405
        assert "created" not in reply.text

    def test_redirect_beats_status_and_content_type(self) -> None:
        response = Response().set_status(200).set_content_type("text/csv").redirect("/new")
        reply = finalize(Completed(), response, _request())
        assert reply.status == 301
        assert reply.header("Location") == "/new"
        assert reply.text == "Redirecting to /new"
        assert reply.content_type != "text/csv"

    def test_verbatim_otherwise(self) -> None:
        response = (
            Response()
            .set_status(201)
            .set_content_type("text/plain")
            .set_header("X-Trace", "abc")
            .send("made")
        )
        reply = finalize(Completed(), response, _request())
        assert reply.status == 201
        assert reply.content_type == "text/plain"
        assert reply.text == "made"
        assert reply.header("x-trace") == "abc"

    def test_defaults_untouched_response(self) -> None:
        reply = finalize(Completed(), Response(), _request())
        assert reply.status == 200
        assert reply.content_type == "text/html; charset=utf-8"
        assert reply.text == ""


class TestFailureReply:
    def test_logs_the_exception(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR, logger="wicket.server"):
            finalize(_failed("logged"), Response(), _request())
        record = next(r for r in caplog.records if r.name == "wicket.server")
        assert record.exc_info is not None
        assert "GET" in record.getMessage()

    def test_trace_hidden_when_not_exposed(self) -> None:
        reply = finalize(_failed("quiet"), Response(), _request(), expose_tracebacks=False)
        assert reply.status == 500
        assert "quiet" in reply.text
        assert "Traceback" not in reply.text

    def test_trace_shown_by_default(self) -> None:
        reply = finalize(_failed(), Response(), _request())
        assert "Traceback" in reply.text


class TestUnwritableFields:
    @pytest.mark.parametrize(
        ("field", "value"),
        [("body", 42), ("body", {"id": 1}), ("status", "200"), ("content_type", None)],
    )
    def test_assigned_directly_becomes_500(self, field: str, value: object) -> None:
        response = Response()
        setattr(response, field, value)
        reply = finalize(Completed(), response, _request())
        assert reply.status == 500
        assert "TypeError" in reply.text
        assert isinstance(reply.body, str)


class TestHTTPErrorReply:
    def test_not_found(self) -> None:
        reply = http_error_reply(NotFound())
        assert reply.status == 404
        assert reply.text == NOT_FOUND_BODY

    def test_method_not_allowed_carries_allow(self) -> None:
        reply = http_error_reply(MethodNotAllowed("TRACE"))
        assert reply.status == 405
        assert reply.text == METHOD_NOT_ALLOWED_BODY
        assert reply.header("Allow") == "DELETE, GET, PATCH, POST, PUT"

    def test_payload_too_large(self) -> None:
        reply = http_error_reply(PayloadTooLarge(10))
        assert reply.status == 413
        assert "10 bytes" in reply.text

    def test_generic_status(self) -> None:
        reply = http_error_reply(HTTPError(status=418, detail="teapot"))
        assert reply.status == 418
        assert reply.text == "418: teapot\n"


class TestRunHandler:
    @pytest.mark.asyncio
    async def test_sync_handler_completes(self) -> None:
        def handler(request, response):
            response.send("ok")
            return "value"

        response = Response()
        outcome = await run_handler(handler, _request(), response)
        assert outcome == Completed("value")
        assert response.body == "ok"

    @pytest.mark.asyncio
    async def test_async_handler_completes(self) -> None:
        async def handler(request, response):
            response.send("async")

        response = Response()
        outcome = await run_handler(handler, _request(), response)
        assert isinstance(outcome, Completed)
        assert response.body == "async"

    @pytest.mark.asyncio
    async def test_raise_becomes_failed(self) -> None:
        def handler(request, response):
            raise ValueError("bad")

        outcome = await run_handler(handler, _request(), Response())
        assert isinstance(outcome, Failed)
        assert isinstance(outcome.error, ValueError)
