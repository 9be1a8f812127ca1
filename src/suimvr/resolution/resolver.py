"""MVR resolver: overrides, caching, and concurrency-limited remote lookups."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING
from urllib.parse import quote

from suimvr.cache.clock import Clock
from suimvr.cache.keys import CacheKeys
from suimvr.cache.store import ResolutionCache
from suimvr.core.exceptions import MvrError
from suimvr.core.models import CacheStats, MvrOverrides, ResolverConfig
from suimvr.core.names import parse_move_target, validate_name
from suimvr.core.types import NameKind
from suimvr.resolution.classifier import ErrorClassifier
from suimvr.resolution.fetcher import Fetcher, FetchTransportError, HttpxFetcher
from suimvr.resolution.limiter import ConcurrencyLimiter

if TYPE_CHECKING:
    from suimvr.config import MvrSettings

logger = logging.getLogger(__name__)


class MvrResolver:
    """
    Resolves MVR package and type names to on-chain values.

    Each lookup runs through the same stages, stopping at the first that
    produces an answer or an error:

    1. Validate the name syntax
    2. Static overrides (the cache is not consulted or updated)
    3. Cache
    4. Wait for a fetch slot
    5. Fetch from the registry under the configured timeout
    6. Release the slot, classify the outcome
    7. Cache and return the value, or raise the classified error

    No retries happen here; use ``MvrError.is_retryable()`` and
    ``MvrError.retry_delay()`` to drive them.

    Usage:
        async with MvrResolver.mainnet() as resolver:
            address = await resolver.resolve_package("@suifrens/core")

    A resolver is safe to share between concurrent tasks.
    """

    def __init__(
        self,
        config: ResolverConfig | None = None,
        *,
        fetcher: Fetcher | None = None,
        clock: Clock | None = None,
    ) -> None:
        """
        Initialize the resolver.

        Args:
            config: Resolver configuration. Defaults to testnet.
            fetcher: Transport used for remote lookups. Defaults to an
                httpx-backed fetcher owned (and closed) by this resolver.
            clock: Time source for cache expiry.
        """
        self._config = config or ResolverConfig()
        self._owns_fetcher = fetcher is None
        self._fetcher: Fetcher = fetcher or HttpxFetcher(timeout=self._config.timeout)
        self._clock = clock
        self._overrides = self._config.overrides or MvrOverrides()
        self._cache = ResolutionCache(
            self._config.cache_ttl,
            self._config.cache_max_size,
            clock=clock,
        )
        self._limiter = ConcurrencyLimiter(self._config.max_concurrent_requests)
        self._classifier = ErrorClassifier(self._config.timeout)

    @classmethod
    def mainnet(cls, **kwargs) -> MvrResolver:
        """Create a resolver for the mainnet registry."""
        return cls(ResolverConfig.mainnet(), **kwargs)

    @classmethod
    def testnet(cls, **kwargs) -> MvrResolver:
        """Create a resolver for the testnet registry."""
        return cls(ResolverConfig.testnet(), **kwargs)

    @classmethod
    def from_settings(cls, settings: MvrSettings, **kwargs) -> MvrResolver:
        """Create a resolver configured from environment settings."""
        settings.configure_logging()
        return cls(settings.to_config(), **kwargs)

    def with_overrides(self, overrides: MvrOverrides) -> MvrResolver:
        """
        Return a new resolver using ``overrides``.

        The new resolver shares this resolver's fetcher and clock but starts
        with an empty cache and its own concurrency limit. This resolver is
        left unchanged. The fetcher stays owned by this resolver, so closing
        it also ends remote lookups for every derived resolver.
        """
        resolver = MvrResolver(
            self._config.with_overrides(overrides),
            fetcher=self._fetcher,
            clock=self._clock,
        )
        resolver._owns_fetcher = False
        return resolver

    @property
    def config(self) -> ResolverConfig:
        return self._config

    # ------------------------------------------------------------------
    # Single lookups
    # ------------------------------------------------------------------

    async def resolve_package(self, package_name: str) -> str:
        """
        Resolve a package name to its on-chain address.

        Raises:
            MvrError: the classified failure
        """
        return await self.resolve(package_name, NameKind.PACKAGE)

    async def resolve_type(self, type_name: str) -> str:
        """
        Resolve a type name to its full type signature.

        Raises:
            MvrError: the classified failure
        """
        return await self.resolve(type_name, NameKind.TYPE)

    async def resolve(self, name: str, kind: NameKind) -> str:
        """Resolve ``name`` as a package or type name."""
        value = self._resolve_locally(name, kind)
        if value is not None:
            return value
        return await self._fetch_and_store(name, kind)

    async def resolve_target(self, target: str) -> str:
        """
        Resolve the package part of a Move call target.

        ``"@suifrens/core::mint::new"`` becomes ``"<address>::mint::new"``.
        Targets that do not start with ``@`` are returned unchanged.
        """
        if not target.startswith("@"):
            return target
        package_name, remainder = parse_move_target(target)
        address = await self.resolve_package(package_name)
        return f"{address}::{remainder}"

    # ------------------------------------------------------------------
    # Batch lookups
    # ------------------------------------------------------------------

    async def resolve_packages(self, package_names: Iterable[str]) -> dict[str, str]:
        """Resolve several package names. See :meth:`resolve_many`."""
        return await self.resolve_many(package_names, NameKind.PACKAGE)

    async def resolve_types(self, type_names: Iterable[str]) -> dict[str, str]:
        """Resolve several type names. See :meth:`resolve_many`."""
        return await self.resolve_many(type_names, NameKind.TYPE)

    async def resolve_many(self, names: Iterable[str], kind: NameKind) -> dict[str, str]:
        """
        Resolve a batch of names of the same kind.

        Every name is validated and checked against overrides and the cache
        before any remote call is made. Remaining misses are fetched
        concurrently under the resolver's concurrency limit.

        The batch fails fast: the first classified failure cancels the
        outstanding fetches and is raised on its own. Results already fetched
        by other names are discarded (though they stay cached).

        Returns:
            Mapping of each requested name to its resolved value
        """
        results: dict[str, str] = {}
        misses: list[str] = []

        for name in names:
            if name in results or name in misses:
                continue
            value = self._resolve_locally(name, kind)
            if value is None:
                misses.append(name)
            else:
                results[name] = value

        if not misses:
            return results

        logger.debug(f"Fetching {len(misses)} {kind} name(s) from registry")
        tasks = {
            asyncio.create_task(self._fetch_and_store(name, kind)): name for name in misses
        }
        try:
            pending = set(tasks)
            while pending:
                done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_EXCEPTION)
                # Request order decides between failures that land together
                for task in (t for t in tasks if t in done):
                    error = task.exception()
                    if error is not None:
                        raise error
                    results[tasks[task]] = task.result()
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        return results

    # ------------------------------------------------------------------
    # Cache management
    # ------------------------------------------------------------------

    def clear_cache(self) -> None:
        """Remove all cached resolutions and reset hit statistics."""
        self._cache.clear()

    def cache_stats(self) -> CacheStats:
        return self._cache.stats()

    def cleanup_expired_cache(self) -> int:
        """Drop expired cache entries, returning how many were removed."""
        return self._cache.cleanup_expired()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _resolve_locally(self, name: str, kind: NameKind) -> str | None:
        """Validate, then consult overrides and the cache."""
        validate_name(name, kind)

        override = self._overrides.lookup(name, kind)
        if override is not None:
            logger.debug(f"Override hit for {kind} {name}")
            return override

        cached = self._cache.get(CacheKeys.for_kind(name, kind))
        if cached is not None:
            logger.debug(f"Cache hit for {kind} {name}")
        return cached

    def _build_url(self, name: str, kind: NameKind) -> str:
        endpoint = self._config.endpoint_url.rstrip("/")
        return f"{endpoint}/resolve/{kind.value}/{quote(name, safe='@/:')}"

    async def _fetch_and_store(self, name: str, kind: NameKind) -> str:
        url = self._build_url(name, kind)

        try:
            async with self._limiter.slot():
                logger.debug(f"Fetching {url}")
                async with asyncio.timeout(self._config.timeout):
                    response = await self._fetcher.perform_get(url)
        except (TimeoutError, FetchTransportError) as e:
            error = self._classifier.classify_exception(e)
            logger.warning(f"Resolution of {kind} {name} failed: {error.message}")
            raise error from e

        try:
            error = self._classifier.classify_response(name, kind, response)
            if error is not None:
                raise error
            value = self._classifier.extract_value(name, kind, response.body)
        except MvrError as e:
            logger.warning(f"Resolution of {kind} {name} failed: {e.message}")
            raise

        self._cache.put(CacheKeys.for_kind(name, kind), value)
        logger.info(f"Resolved {kind} {name} -> {value}")
        return value

    async def close(self) -> None:
        """Close the fetcher if this resolver created it."""
        if self._owns_fetcher:
            close = getattr(self._fetcher, "close", None)
            if close is not None:
                await close()

    async def __aenter__(self) -> MvrResolver:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
