"""Bound on the number of in-flight remote lookups."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator

from suimvr.core.exceptions import ConfigError


class ConcurrencyLimiter:
    """
    Suspends callers until a fetch slot is free.

    Callers are queued rather than rejected when the limit is reached. Prefer
    :meth:`slot` over manual ``acquire``/``release`` so that failures and
    cancellation still free the slot.
    """

    def __init__(self, max_concurrent: int) -> None:
        if max_concurrent < 1:
            raise ConfigError(
                f"max_concurrent_requests must be positive, got {max_concurrent}"
            )
        self._max_concurrent = max_concurrent
        self._semaphore = asyncio.BoundedSemaphore(max_concurrent)
        self._in_flight = 0

    @property
    def max_concurrent(self) -> int:
        return self._max_concurrent

    @property
    def in_flight(self) -> int:
        """Number of slots currently held."""
        return self._in_flight

    async def acquire(self) -> None:
        await self._semaphore.acquire()
        self._in_flight += 1

    def release(self) -> None:
        """Free a slot. Raises ValueError if no slot is held."""
        self._semaphore.release()
        self._in_flight -= 1

    @asynccontextmanager
    async def slot(self) -> AsyncIterator[None]:
        """Hold a slot for the duration of the block."""
        await self.acquire()
        try:
            yield
        finally:
            self.release()
