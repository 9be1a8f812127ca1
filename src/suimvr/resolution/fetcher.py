"""Fetcher capability and the default httpx-backed implementation."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

import httpx


@dataclass(frozen=True)
class FetchResponse:
    """Raw outcome of a GET that reached the server."""

    status_code: int
    body: str
    headers: Mapping[str, str] = field(default_factory=dict)

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None


class FetchTransportError(Exception):
    """The request never produced an HTTP response."""


@runtime_checkable
class Fetcher(Protocol):
    """
    Performs the actual network call for the resolver.

    Implementations return a :class:`FetchResponse` for any HTTP answer
    (including error statuses), raise :class:`FetchTransportError` when no
    response was received, and may raise :class:`TimeoutError` when their own
    deadline elapses.
    """

    async def perform_get(self, url: str) -> FetchResponse: ...


class HttpxFetcher:
    """
    Fetcher backed by a lazily created ``httpx.AsyncClient``.

    Usage:
        async with HttpxFetcher(timeout=10.0) as fetcher:
            response = await fetcher.perform_get(url)
    """

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None
        self._closed = False

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                headers=self._get_default_headers(),
                follow_redirects=True,
            )
            self._owns_client = True
        return self._client

    def _get_default_headers(self) -> dict[str, str]:
        return {
            "User-Agent": "suimvr/0.1.0",
            "Accept": "application/json",
        }

    async def perform_get(self, url: str) -> FetchResponse:
        if self._closed:
            # A closed fetcher never creates a new client
            raise FetchTransportError("Fetcher is closed")
        client = self._get_client()
        try:
            response = await client.get(url)
        except httpx.TimeoutException as e:
            raise TimeoutError(f"Request to {url} timed out") from e
        except httpx.HTTPError as e:
            raise FetchTransportError(f"HTTP error: {e}") from e
        return FetchResponse(
            status_code=response.status_code,
            body=response.text,
            headers=dict(response.headers),
        )

    async def close(self) -> None:
        """Close the HTTP client if this fetcher created it. Later fetches fail."""
        self._closed = True
        if self._owns_client and self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> HttpxFetcher:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
