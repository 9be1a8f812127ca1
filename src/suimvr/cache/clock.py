"""Clock abstraction used for cache expiry."""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Source of monotonic timestamps in seconds."""

    def now(self) -> float: ...


class MonotonicClock:
    """Clock backed by :func:`time.monotonic`."""

    def now(self) -> float:
        return time.monotonic()
