"""Unit tests for the postline exception hierarchy."""

import pytest

from postline.core.exceptions import (
    ConfigurationError,
    InvalidHeaderError,
    PostlineException,
    RequestError,
    RequestTimeoutError,
    UnknownContentTypeError,
    UnknownMethodError,
    UsageError,
)


class TestPostlineException:
    def test_defaults(self):
        exc = PostlineException(message="Test error")

        assert exc.message == "Test error"
        assert exc.error_code == "PostlineException"
        assert exc.details == {}
        assert str(exc) == "Test error"

    def test_to_dict(self):
        exc = RequestError(message="Request failed", error_code="request_failed", details={"url": "http://x"})

        assert exc.to_dict() == {
            "error": "request_failed",
            "message": "Request failed",
            "details": {"url": "http://x"},
        }

    def test_to_dict_without_details(self):
        assert ConfigurationError(message="bad").to_dict()["details"] is None


class TestHierarchy:
    @pytest.mark.parametrize(
        "exc",
        [UnknownMethodError("X"), UnknownContentTypeError("x"), InvalidHeaderError("h")],
    )
    def test_usage_errors(self, exc):
        assert isinstance(exc, UsageError)
        assert isinstance(exc, PostlineException)

    def test_timeout_is_request_error(self):
        assert issubclass(RequestTimeoutError, RequestError)

    def test_catch_all_with_base(self):
        with pytest.raises(PostlineException):
            raise RequestTimeoutError(message="slow")

    def test_usage_error_codes(self):
        assert UnknownMethodError("TRACE").error_code == "unknown_method"
        assert UnknownContentTypeError("xml").error_code == "unknown_content_type"
        assert InvalidHeaderError("nope").message == "Invalid header (expected 'Name: value'): nope"
