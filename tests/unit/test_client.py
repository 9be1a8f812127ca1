"""Tests for the one-off convenience functions."""

from __future__ import annotations

import pytest
from httpx import Response

from suimvr.client import resolve_package, resolve_type
from suimvr.config import MvrSettings
from suimvr.core.exceptions import RateLimitedError

ENDPOINT = "https://mvr.test"


@pytest.fixture
def settings() -> MvrSettings:
    return MvrSettings(endpoint_url=ENDPOINT)


class TestConvenienceFunctions:
    """Tests for resolve_package / resolve_type."""

    async def test_resolve_package(self, respx_mock, settings):
        respx_mock.get(f"{ENDPOINT}/resolve/package/@suifrens/core").mock(
            return_value=Response(200, json={"package_id": "0xabc"})
        )
        assert await resolve_package("@suifrens/core", settings=settings) == "0xabc"

    async def test_resolve_type(self, respx_mock, settings):
        respx_mock.get(f"{ENDPOINT}/resolve/type/@suifrens/core::suifren::SuiFren").mock(
            return_value=Response(200, json={"type_signature": "0xabc::suifren::SuiFren"})
        )
        value = await resolve_type("@suifrens/core::suifren::SuiFren", settings=settings)
        assert value == "0xabc::suifren::SuiFren"

    async def test_rate_limit_surfaces(self, respx_mock, settings, mock_http_responses):
        respx_mock.get(f"{ENDPOINT}/resolve/package/@suifrens/core").mock(
            return_value=mock_http_responses["rate_limit"](15)
        )
        with pytest.raises(RateLimitedError) as exc_info:
            await resolve_package("@suifrens/core", settings=settings)
        assert exc_info.value.retry_after == 15
