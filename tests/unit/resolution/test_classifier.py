"""Tests for fetch outcome classification."""

from __future__ import annotations

import pytest

from suimvr.core.exceptions import (
    NetworkError,
    NotFoundError,
    RateLimitedError,
    RequestTimeoutError,
    SerializationError,
    ServerError,
)
from suimvr.core.types import NameKind
from suimvr.resolution.classifier import ErrorClassifier
from suimvr.resolution.fetcher import FetchResponse, FetchTransportError


@pytest.fixture
def classifier() -> ErrorClassifier:
    return ErrorClassifier(timeout=30.0)


# ============================================================================
# Status Classification
# ============================================================================


class TestClassifyResponse:
    """Tests for HTTP status mapping."""

    @pytest.mark.parametrize("status", [200, 201, 204])
    def test_success_is_not_an_error(self, classifier, status: int):
        response = FetchResponse(status_code=status, body="")
        assert classifier.classify_response("@a/b", NameKind.PACKAGE, response) is None

    def test_not_found(self, classifier, mock_responses):
        error = classifier.classify_response(
            "@suifrens/core", NameKind.PACKAGE, mock_responses["status"](404)
        )
        assert isinstance(error, NotFoundError)
        assert error.name == "@suifrens/core"
        assert error.name_kind == NameKind.PACKAGE

    def test_rate_limited_uses_retry_after(self, classifier, mock_responses):
        response = mock_responses["status"](429, Retry_After="5")
        error = classifier.classify_response("@a/b", NameKind.PACKAGE, response)
        assert isinstance(error, RateLimitedError)
        assert error.retry_after == 5

    def test_rate_limited_default_delay(self, classifier, mock_responses):
        error = classifier.classify_response("@a/b", NameKind.PACKAGE, mock_responses["status"](429))
        assert isinstance(error, RateLimitedError)
        assert error.retry_after == 60

    @pytest.mark.parametrize("status", [400, 403, 500, 502, 503])
    def test_other_statuses_are_server_errors(self, classifier, mock_responses, status: int):
        response = mock_responses["status"](status, body="Internal Server Error")
        error = classifier.classify_response("@a/b", NameKind.PACKAGE, response)
        assert isinstance(error, ServerError)
        assert error.status_code == status
        assert error.server_message == "Internal Server Error"

    def test_empty_error_body(self, classifier, mock_responses):
        error = classifier.classify_response("@a/b", NameKind.TYPE, mock_responses["status"](500, body=""))
        assert error.server_message == "Unknown error"


class TestParseRetryAfter:
    """Tests for Retry-After parsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("120", 120.0),
            (" 2.5 ", 2.5),
            ("-3", 0.0),
            ("Wed, 21 Oct 2015 07:28:00 GMT", 60.0),
            (None, 60.0),
            ("nan", 60.0),
            ("inf", 60.0),
            ("-inf", 60.0),
        ],
    )
    def test_parse(self, value: str | None, expected: float):
        assert ErrorClassifier.parse_retry_after(value) == expected


# ============================================================================
# Exception Classification
# ============================================================================


class TestClassifyException:
    """Tests for transport failure mapping."""

    def test_timeout_reports_configured_timeout(self, classifier):
        error = classifier.classify_exception(TimeoutError())
        assert isinstance(error, RequestTimeoutError)
        assert error.timeout_secs == 30.0

    def test_transport_error(self, classifier):
        error = classifier.classify_exception(FetchTransportError("connection refused"))
        assert isinstance(error, NetworkError)
        assert "connection refused" in error.message

    def test_mvr_error_passes_through(self, classifier):
        original = NotFoundError("@a/b")
        assert classifier.classify_exception(original) is original

    def test_unknown_exception(self, classifier):
        with pytest.raises(TypeError):
            classifier.classify_exception(ValueError("boom"))


# ============================================================================
# Body Extraction
# ============================================================================


class TestExtractValue:
    """Tests for decoding successful bodies."""

    def test_plain_address_body(self, classifier):
        assert classifier.extract_value("@a/b", NameKind.PACKAGE, "0x123abc\n") == "0x123abc"

    def test_json_address(self, classifier):
        body = '{"address": "0xdef", "name": "@a/b", "version": "1"}'
        assert classifier.extract_value("@a/b", NameKind.PACKAGE, body) == "0xdef"

    def test_json_package_id(self, classifier):
        assert classifier.extract_value("@a/b", NameKind.PACKAGE, '{"package_id": "0x9"}') == "0x9"

    def test_type_signature(self, classifier):
        body = '{"type_signature": "0x1::m::T"}'
        assert classifier.extract_value("@a/b::m::T", NameKind.TYPE, body) == "0x1::m::T"

    def test_type_signature_fallback_field(self, classifier):
        body = '{"signature": "0x1::m::T"}'
        assert classifier.extract_value("@a/b::m::T", NameKind.TYPE, body) == "0x1::m::T"

    @pytest.mark.parametrize(
        "kind,body",
        [
            (NameKind.PACKAGE, "not json"),
            (NameKind.PACKAGE, '{"name": "@a/b"}'),
            (NameKind.PACKAGE, ""),
            (NameKind.TYPE, "0x1::m::T"),
            (NameKind.TYPE, '{"module": "m"}'),
        ],
    )
    def test_undecodable_bodies(self, classifier, kind: NameKind, body: str):
        with pytest.raises(SerializationError):
            classifier.extract_value("@a/b", kind, body)

    def test_serialization_error_keeps_body_excerpt(self, classifier):
        body = "x" * 500
        with pytest.raises(SerializationError) as exc_info:
            classifier.extract_value("@a/b", NameKind.PACKAGE, body)
        assert exc_info.value.details["body"] == "x" * 200
        assert not exc_info.value.is_retryable()
