"""Unit test fixtures with HTTP mocking."""

from __future__ import annotations

import pytest
import respx
from httpx import Response

# ============================================================================
# HTTP Mocking Fixtures
# ============================================================================


@pytest.fixture
def respx_mock():
    """Provide a respx mock router for HTTP mocking.

    Use this when you need fine-grained control over mocked responses.
    The mock is automatically started and stopped by respx.
    """
    with respx.mock(assert_all_called=False) as router:
        yield router


# ============================================================================
# Mock HTTP Response Helpers
# ============================================================================


def mock_rate_limit_response(retry_after: int = 60) -> Response:
    """Create a mock 429 rate limit response."""
    return Response(
        status_code=429,
        json={"error": "Rate limit exceeded"},
        headers={
            "Content-Type": "application/json",
            "Retry-After": str(retry_after),
        },
    )


@pytest.fixture
def mock_http_responses():
    """Provide helper functions for creating httpx responses."""
    return {
        "rate_limit": mock_rate_limit_response,
    }
