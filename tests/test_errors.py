"""Tests for the wicket exception hierarchy."""

import pytest

from wicket.errors import (
    ConfigurationError,
    HTTPError,
    InvalidPatternError,
    MethodNotAllowed,
    NotFound,
    PayloadTooLarge,
    WicketError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "exc_type", [ConfigurationError, InvalidPatternError, HTTPError]
    )
    def test_all_are_wicket_errors(self, exc_type: type[Exception]) -> None:
        assert issubclass(exc_type, WicketError)

    def test_pattern_error_is_configuration_error(self) -> None:
        assert issubclass(InvalidPatternError, ConfigurationError)


class TestHTTPErrors:
    def test_not_found(self) -> None:
        exc = NotFound()
        assert exc.status == 404
        assert str(exc) == "404: Not Found"

    def test_method_not_allowed(self) -> None:
        exc = MethodNotAllowed("TRACE")
        assert exc.status == 405
        assert "'TRACE'" in exc.detail
        assert ("Allow", "DELETE, GET, PATCH, POST, PUT") in exc.headers

    def test_payload_too_large(self) -> None:
        exc = PayloadTooLarge(1024)
        assert exc.status == 413
        assert "1024" in str(exc)

    def test_status_only(self) -> None:
        assert str(HTTPError(status=418)) == "418"

    def test_raisable(self) -> None:
        with pytest.raises(HTTPError):
            raise NotFound("missing")
