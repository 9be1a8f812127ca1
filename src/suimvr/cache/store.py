"""Bounded in-memory cache with lazy TTL expiry and LRU eviction."""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass

from suimvr.cache.clock import Clock, MonotonicClock
from suimvr.core.exceptions import ConfigError
from suimvr.core.models import CacheStats

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """A cached resolution."""

    value: str
    inserted_at: float
    hit_count: int = 0

    def is_expired(self, now: float, ttl: float) -> bool:
        return now - self.inserted_at >= ttl


class ResolutionCache:
    """
    Thread-safe TTL + LRU cache of resolved names.

    Entries live in an OrderedDict kept in recency order: the first entry is
    the least recently used. ``get`` and ``put`` move an entry to the end, so
    eviction simply pops from the front, and ties fall back to insertion order.

    Expiry is lazy: an expired entry is reported as a miss by ``get`` but stays
    in place until it is overwritten, evicted, or swept by
    ``cleanup_expired``.

    Every public operation runs under a single lock, so no caller can observe
    a half-applied put or eviction.
    """

    def __init__(
        self,
        ttl: float,
        max_size: int = 1000,
        *,
        clock: Clock | None = None,
    ) -> None:
        if max_size < 1:
            raise ConfigError(f"Cache max_size must be positive, got {max_size}")
        if ttl < 0:
            raise ConfigError(f"Cache ttl must not be negative, got {ttl}")
        self._ttl = ttl
        self._max_size = max_size
        self._clock = clock or MonotonicClock()
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._hits = 0
        self._lock = threading.Lock()

    @property
    def ttl(self) -> float:
        return self._ttl

    @property
    def max_size(self) -> int:
        return self._max_size

    def get(self, key: str) -> str | None:
        """Return the cached value if present and unexpired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock.now(), self._ttl):
                return None
            entry.hit_count += 1
            self._hits += 1
            self._entries.move_to_end(key)
            return entry.value

    def put(self, key: str, value: str) -> None:
        """Insert or overwrite an entry, evicting the LRU entry when full."""
        with self._lock:
            if key not in self._entries and len(self._entries) >= self._max_size:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Evicted least recently used cache entry: {evicted}")
            self._entries[key] = CacheEntry(value=value, inserted_at=self._clock.now())
            self._entries.move_to_end(key)

    def remove(self, key: str) -> str | None:
        """Remove an entry, returning its value if it was present."""
        with self._lock:
            entry = self._entries.pop(key, None)
            return entry.value if entry else None

    def cleanup_expired(self) -> int:
        """Remove all expired entries and return how many were removed."""
        with self._lock:
            now = self._clock.now()
            expired = [
                key for key, entry in self._entries.items() if entry.is_expired(now, self._ttl)
            ]
            for key in expired:
                del self._entries[key]
            return len(expired)

    def clear(self) -> None:
        """Remove every entry and reset the hit counter."""
        with self._lock:
            self._entries.clear()
            self._hits = 0

    def stats(self) -> CacheStats:
        """Return a consistent snapshot of cache occupancy."""
        with self._lock:
            now = self._clock.now()
            total = len(self._entries)
            expired = sum(
                1 for entry in self._entries.values() if entry.is_expired(now, self._ttl)
            )
            return CacheStats(
                total_entries=total,
                expired_entries=expired,
                valid_entries=total - expired,
                total_hits=self._hits,
                max_size=self._max_size,
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        # Presence only; expired entries still count until swept
        with self._lock:
            return key in self._entries
