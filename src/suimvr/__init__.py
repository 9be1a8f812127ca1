"""suimvr - Move Registry (MVR) name resolution for Sui with caching and overrides."""

from suimvr.cache.store import ResolutionCache
from suimvr.client import resolve_package, resolve_type
from suimvr.config import MvrSettings
from suimvr.core.exceptions import (
    CacheFailureError,
    ConcurrencyExceededError,
    ConfigError,
    InvalidNameError,
    MvrError,
    NetworkError,
    NotFoundError,
    RateLimitedError,
    RequestTimeoutError,
    SerializationError,
    ServerError,
)
from suimvr.core.models import CacheStats, MvrOverrides, ResolverConfig
from suimvr.core.types import ErrorKind, NameKind, Network
from suimvr.resolution.fetcher import FetchResponse, FetchTransportError, HttpxFetcher
from suimvr.resolution.resolver import MvrResolver

__version__ = "0.1.0"
__all__ = [
    # Resolver
    "MvrResolver",
    "resolve_package",
    "resolve_type",
    # Configuration
    "MvrOverrides",
    "MvrSettings",
    "ResolverConfig",
    # Cache
    "CacheStats",
    "ResolutionCache",
    # Fetcher
    "FetchResponse",
    "FetchTransportError",
    "HttpxFetcher",
    # Types
    "ErrorKind",
    "NameKind",
    "Network",
    # Errors
    "CacheFailureError",
    "ConcurrencyExceededError",
    "ConfigError",
    "InvalidNameError",
    "MvrError",
    "NetworkError",
    "NotFoundError",
    "RateLimitedError",
    "RequestTimeoutError",
    "SerializationError",
    "ServerError",
    # Version
    "__version__",
]
