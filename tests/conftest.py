"""Shared test fixtures for all tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable

import pytest

from suimvr.core.models import MvrOverrides, ResolverConfig
from suimvr.resolution.fetcher import FetchResponse

TEST_ENDPOINT = "https://mvr.test"


# ============================================================================
# Test Doubles
# ============================================================================


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        self._now += seconds


Outcome = FetchResponse | BaseException | Callable[[str], FetchResponse]


class StubFetcher:
    """
    Fetcher returning canned outcomes keyed by URL.

    Records every call and the peak number of concurrent calls, so tests can
    assert on fetch counts and on the concurrency limit. Unknown URLs answer
    404 unless a default outcome is set.
    """

    def __init__(self, endpoint: str = TEST_ENDPOINT, *, delay: float = 0.0) -> None:
        self.endpoint = endpoint
        self.delay = delay
        self.responses: dict[str, Outcome] = {}
        self.default: Outcome | None = None
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False

    def package_url(self, name: str) -> str:
        return f"{self.endpoint}/resolve/package/{name}"

    def type_url(self, name: str) -> str:
        return f"{self.endpoint}/resolve/type/{name}"

    def on_package(self, name: str, outcome: Outcome) -> StubFetcher:
        self.responses[self.package_url(name)] = outcome
        return self

    def on_type(self, name: str, outcome: Outcome) -> StubFetcher:
        self.responses[self.type_url(name)] = outcome
        return self

    def calls_for_package(self, name: str) -> int:
        return self.calls.count(self.package_url(name))

    async def perform_get(self, url: str) -> FetchResponse:
        self.calls.append(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            outcome = self.responses.get(url, self.default)
            if outcome is None:
                return FetchResponse(status_code=404, body="not found")
            if isinstance(outcome, BaseException):
                raise outcome
            if callable(outcome):
                return outcome(url)
            return outcome
        finally:
            self.in_flight -= 1

    async def close(self) -> None:
        self.closed = True


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def stub_fetcher() -> StubFetcher:
    return StubFetcher()


@pytest.fixture
def make_fetcher() -> Callable[..., StubFetcher]:
    """Factory fixture for stub fetchers with custom options (e.g. delay)."""

    def _make(**kwargs) -> StubFetcher:
        return StubFetcher(**kwargs)

    return _make


@pytest.fixture
def test_config() -> ResolverConfig:
    return ResolverConfig(
        endpoint_url=TEST_ENDPOINT,
        cache_ttl=60.0,
        timeout=5.0,
        max_concurrent_requests=4,
        cache_max_size=100,
    )


@pytest.fixture
def sample_overrides() -> MvrOverrides:
    """Overrides mirroring a typical local development setup."""
    return (
        MvrOverrides()
        .with_package("@suifrens/core", "0xABC")
        .with_package("@suifrens/accessories", "0x987654321")
        .with_type("@suifrens/core::suifren::SuiFren", "0xABC::suifren::SuiFren")
        .with_type("@suifrens/core::bullshark::Bullshark", "0xABC::bullshark::Bullshark")
    )


# ============================================================================
# Mock Response Helpers
# ============================================================================


def address_response(address: str) -> FetchResponse:
    """A 200 response carrying a package address."""
    return FetchResponse(status_code=200, body=f'{{"address": "{address}"}}')


def signature_response(signature: str) -> FetchResponse:
    """A 200 response carrying a type signature."""
    return FetchResponse(status_code=200, body=f'{{"type_signature": "{signature}"}}')


def status_response(status_code: int, body: str = "error", **headers: str) -> FetchResponse:
    """A response with an arbitrary status."""
    return FetchResponse(
        status_code=status_code,
        body=body,
        headers={k.replace("_", "-"): v for k, v in headers.items()},
    )


@pytest.fixture
def mock_responses():
    """Provide helper functions for creating fetch responses."""
    return {
        "address": address_response,
        "signature": signature_response,
        "status": status_response,
    }
