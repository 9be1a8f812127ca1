"""Core enums and type definitions."""

from enum import StrEnum


class NameKind(StrEnum):
    """Kinds of registry names that can be resolved."""

    PACKAGE = "package"
    TYPE = "type"


class Network(StrEnum):
    """Sui networks with a public MVR endpoint."""

    MAINNET = "mainnet"
    TESTNET = "testnet"

    @property
    def endpoint_url(self) -> str:
        """Public MVR endpoint for this network."""
        return f"https://{self.value}.mvr.mystenlabs.com"


class ErrorKind(StrEnum):
    """Closed set of failure categories raised by the resolver."""

    INVALID_NAME = "invalid_name"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    TIMEOUT = "timeout"
    SERVER_ERROR = "server_error"
    NETWORK = "network"
    SERIALIZATION = "serialization"
    CONFIG_ERROR = "config_error"
    CACHE_FAILURE = "cache_failure"
    CONCURRENCY_EXCEEDED = "concurrency_exceeded"
