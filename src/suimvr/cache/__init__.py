"""In-memory resolution cache."""

from .clock import Clock, MonotonicClock
from .keys import CacheKeys
from .store import CacheEntry, ResolutionCache

__all__ = [
    "CacheEntry",
    "CacheKeys",
    "Clock",
    "MonotonicClock",
    "ResolutionCache",
]
