"""Core types, models, and name validation."""

from .exceptions import (
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
from .models import CacheStats, MvrOverrides, ResolverConfig
from .names import (
    PackageName,
    TypeName,
    parse_move_target,
    validate_name,
    validate_package_name,
    validate_type_name,
)
from .types import ErrorKind, NameKind, Network

__all__ = [
    # Types
    "ErrorKind",
    "NameKind",
    "Network",
    # Names
    "PackageName",
    "TypeName",
    "parse_move_target",
    "validate_name",
    "validate_package_name",
    "validate_type_name",
    # Models
    "CacheStats",
    "MvrOverrides",
    "ResolverConfig",
    # Exceptions
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
]
