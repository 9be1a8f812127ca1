"""Immutable configuration and result models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import ConfigError
from .types import NameKind, Network


class MvrOverrides(BaseModel):
    """
    Static name-to-value overrides.

    Overrides take precedence over the cache and the remote registry. Builder
    methods return a new instance; an existing instance is never modified.

    Usage:
        overrides = (
            MvrOverrides()
            .with_package("@suifrens/core", "0x123")
            .with_type("@suifrens/core::suifren::SuiFren", "0x123::suifren::SuiFren")
        )
    """

    model_config = ConfigDict(frozen=True)

    packages: dict[str, str] = Field(
        default_factory=dict, description="Package name -> on-chain address"
    )
    types: dict[str, str] = Field(
        default_factory=dict, description="Type name -> full type signature"
    )

    def with_package(self, name: str, address: str) -> MvrOverrides:
        """Return a copy with a package override added (last write wins)."""
        return self.model_copy(update={"packages": {**self.packages, name: address}})

    def with_type(self, name: str, type_signature: str) -> MvrOverrides:
        """Return a copy with a type override added (last write wins)."""
        return self.model_copy(update={"types": {**self.types, name: type_signature}})

    def lookup_package(self, name: str) -> str | None:
        return self.packages.get(name)

    def lookup_type(self, name: str) -> str | None:
        return self.types.get(name)

    def lookup(self, name: str, kind: NameKind) -> str | None:
        """Look up an override for ``name`` in the section matching ``kind``."""
        if kind == NameKind.TYPE:
            return self.lookup_type(name)
        return self.lookup_package(name)

    @property
    def is_empty(self) -> bool:
        return not self.packages and not self.types

    def __len__(self) -> int:
        return len(self.packages) + len(self.types)

    @classmethod
    def from_json(cls, data: str | bytes) -> MvrOverrides:
        """
        Load overrides from a JSON document.

        Expected shape: ``{"packages": {...}, "types": {...}}``. Either
        section may be omitted.

        Raises:
            ConfigError: if the document is not valid JSON or has the wrong shape
        """
        try:
            return cls.model_validate_json(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid overrides document: {e}") from e

    def to_json(self, *, indent: int | None = 2) -> str:
        """Serialize overrides to a JSON document."""
        return self.model_dump_json(indent=indent)


class ResolverConfig(BaseModel):
    """
    Immutable resolver configuration.

    Durations are in seconds. ``with_*`` helpers return a new config.
    """

    model_config = ConfigDict(frozen=True)

    endpoint_url: str = Field(
        default=Network.TESTNET.endpoint_url,
        min_length=1,
        description="MVR API endpoint URL",
    )
    cache_ttl: float = Field(default=3600.0, ge=0.0, description="Cache TTL in seconds")
    timeout: float = Field(default=30.0, gt=0.0, description="Request timeout in seconds")
    max_concurrent_requests: int = Field(
        default=10, ge=1, description="Maximum number of in-flight remote lookups"
    )
    cache_max_size: int = Field(default=1000, ge=1, description="Maximum cache entries")
    overrides: MvrOverrides | None = Field(default=None, description="Static overrides")

    def __init__(self, **values: object) -> None:
        try:
            super().__init__(**values)
        except ValidationError as e:
            raise ConfigError(f"Invalid resolver configuration: {e}") from e

    @classmethod
    def mainnet(cls) -> ResolverConfig:
        return cls(endpoint_url=Network.MAINNET.endpoint_url)

    @classmethod
    def testnet(cls) -> ResolverConfig:
        return cls(endpoint_url=Network.TESTNET.endpoint_url)

    @classmethod
    def build(cls, **values: object) -> ResolverConfig:
        """Construct a config from keyword values. Invalid values raise ConfigError."""
        return cls(**values)

    def _replace(self, **changes: object) -> ResolverConfig:
        # model_copy skips validation, so rebuild through __init__
        values = self.model_dump(exclude={"overrides"})
        values["overrides"] = self.overrides
        values.update(changes)
        return self.build(**values)

    def with_endpoint(self, endpoint_url: str) -> ResolverConfig:
        return self._replace(endpoint_url=endpoint_url)

    def with_cache_ttl(self, ttl: float) -> ResolverConfig:
        return self._replace(cache_ttl=ttl)

    def with_timeout(self, timeout: float) -> ResolverConfig:
        return self._replace(timeout=timeout)

    def with_max_concurrent_requests(self, max_concurrent: int) -> ResolverConfig:
        return self._replace(max_concurrent_requests=max_concurrent)

    def with_cache_max_size(self, max_size: int) -> ResolverConfig:
        return self._replace(cache_max_size=max_size)

    def with_overrides(self, overrides: MvrOverrides) -> ResolverConfig:
        return self._replace(overrides=overrides)


class CacheStats(BaseModel):
    """Point-in-time snapshot of cache occupancy."""

    model_config = ConfigDict(frozen=True)

    total_entries: int = 0
    expired_entries: int = 0
    valid_entries: int = 0
    total_hits: int = 0
    max_size: int = 0

    @property
    def utilization(self) -> float:
        """Fraction of capacity in use (expired entries included)."""
        if self.max_size == 0:
            return 0.0
        return self.total_entries / self.max_size

    @property
    def hit_rate(self) -> float:
        if self.total_hits == 0:
            return 0.0
        return self.total_hits / (self.total_hits + self.total_entries)
