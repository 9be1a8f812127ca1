"""Exception hierarchy for suimvr.

Every failure the resolver surfaces is one of the concrete subclasses below,
one per :class:`ErrorKind`. Each carries its payload as attributes so callers
can dispatch with class patterns::

    match error:
        case RateLimitedError(retry_after=delay):
            ...
        case NotFoundError(name=name):
            ...
"""

from __future__ import annotations

from typing import Any, ClassVar

from .types import ErrorKind, NameKind

_RETRYABLE_KINDS = frozenset(
    {
        ErrorKind.NETWORK,
        ErrorKind.TIMEOUT,
        ErrorKind.SERVER_ERROR,
        ErrorKind.RATE_LIMITED,
    }
)


class MvrError(Exception):
    """Base exception for all suimvr errors."""

    kind: ClassVar[ErrorKind]

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def is_retryable(self) -> bool:
        """Whether the caller may reasonably retry the same request."""
        return self.kind in _RETRYABLE_KINDS

    def retry_delay(self) -> float | None:
        """Server-requested delay in seconds, if any.

        Only rate-limit errors carry one; backoff for everything else is the
        caller's decision.
        """
        return None

    def is_client_error(self) -> bool:
        """Whether the request itself was at fault."""
        return self.kind in (ErrorKind.INVALID_NAME, ErrorKind.NOT_FOUND)


class InvalidNameError(MvrError):
    """Name does not follow the registry naming rules."""

    kind = ErrorKind.INVALID_NAME
    __match_args__ = ("name",)

    def __init__(self, name: str, name_kind: NameKind = NameKind.PACKAGE) -> None:
        if name_kind == NameKind.TYPE:
            expected = "@namespace/package::module::Type"
        else:
            expected = "@namespace/package"
        super().__init__(
            f"Invalid {name_kind} name format: '{name}'. Expected format: {expected}",
            {"name": name, "name_kind": str(name_kind)},
        )
        self.name = name
        self.name_kind = name_kind


class NotFoundError(MvrError):
    """Name is not registered."""

    kind = ErrorKind.NOT_FOUND
    __match_args__ = ("name",)

    def __init__(self, name: str, name_kind: NameKind = NameKind.PACKAGE) -> None:
        super().__init__(
            f"{name_kind.capitalize()} '{name}' not found in MVR",
            {"name": name, "name_kind": str(name_kind)},
        )
        self.name = name
        self.name_kind = name_kind


class RateLimitedError(MvrError):
    """Registry asked us to slow down."""

    kind = ErrorKind.RATE_LIMITED
    __match_args__ = ("retry_after",)

    def __init__(self, retry_after: float) -> None:
        super().__init__(
            f"Rate limit exceeded. Try again in {retry_after:g} seconds",
            {"retry_after": retry_after},
        )
        self.retry_after = retry_after

    def retry_delay(self) -> float | None:
        return self.retry_after


class RequestTimeoutError(MvrError):
    """Remote lookup exceeded the configured deadline."""

    kind = ErrorKind.TIMEOUT
    __match_args__ = ("timeout_secs",)

    def __init__(self, timeout_secs: float) -> None:
        super().__init__(
            f"Request timed out after {timeout_secs:g} seconds",
            {"timeout_secs": timeout_secs},
        )
        self.timeout_secs = timeout_secs


class ServerError(MvrError):
    """Registry answered with an unexpected status."""

    kind = ErrorKind.SERVER_ERROR
    __match_args__ = ("status_code", "server_message")

    def __init__(self, status_code: int, server_message: str) -> None:
        super().__init__(
            f"Server error: {status_code} - {server_message}",
            {"status_code": status_code},
        )
        self.status_code = status_code
        self.server_message = server_message

    def is_retryable(self) -> bool:
        return self.status_code >= 500

    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500


class NetworkError(MvrError):
    """Transport-level failure before a response was received."""

    kind = ErrorKind.NETWORK


class SerializationError(MvrError):
    """Response body could not be decoded."""

    kind = ErrorKind.SERIALIZATION


class ConfigError(MvrError):
    """Invalid configuration."""

    kind = ErrorKind.CONFIG_ERROR


class CacheFailureError(MvrError):
    """Cache backend failed.

    Reserved for persistent backends; the in-memory cache never raises it.
    """

    kind = ErrorKind.CACHE_FAILURE


class ConcurrencyExceededError(MvrError):
    """Concurrency limit could not be honoured."""

    kind = ErrorKind.CONCURRENCY_EXCEEDED
    __match_args__ = ("max_concurrent",)

    def __init__(self, max_concurrent: int) -> None:
        super().__init__(
            f"Too many concurrent requests. Maximum allowed: {max_concurrent}",
            {"max_concurrent": max_concurrent},
        )
        self.max_concurrent = max_concurrent
