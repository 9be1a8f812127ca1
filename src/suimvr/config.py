"""Application configuration using Pydantic Settings."""

import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from suimvr.core.models import MvrOverrides, ResolverConfig
from suimvr.core.types import Network


class MvrSettings(BaseSettings):
    """Resolver configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="MVR_",
    )

    # Registry
    network: Network = Field(
        default=Network.MAINNET,
        description="Network whose public endpoint is used when endpoint_url is unset",
    )
    endpoint_url: str | None = Field(
        default=None,
        description="Custom MVR endpoint URL (overrides network)",
    )

    # Remote lookups
    timeout: float = Field(
        default=30.0,
        gt=0.0,
        description="Request timeout in seconds",
    )
    max_concurrent_requests: int = Field(
        default=10,
        ge=1,
        description="Maximum number of in-flight registry requests",
    )

    # Cache
    cache_ttl: float = Field(
        default=3600.0,
        ge=0.0,
        description="Cache TTL in seconds",
    )
    cache_max_size: int = Field(
        default=1000,
        ge=1,
        description="Maximum number of cached resolutions",
    )

    # Static overrides, as a JSON document {"packages": {...}, "types": {...}}
    overrides: MvrOverrides | None = Field(
        default=None,
        description="Static package and type overrides",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    @property
    def resolved_endpoint_url(self) -> str:
        return self.endpoint_url or self.network.endpoint_url

    def configure_logging(self) -> None:
        """Apply ``log_level`` to the package logger. No handlers are installed."""
        logging.getLogger("suimvr").setLevel(self.log_level.upper())

    def to_config(self) -> ResolverConfig:
        """Build an immutable resolver configuration from these settings."""
        return ResolverConfig.build(
            endpoint_url=self.resolved_endpoint_url,
            cache_ttl=self.cache_ttl,
            timeout=self.timeout,
            max_concurrent_requests=self.max_concurrent_requests,
            cache_max_size=self.cache_max_size,
            overrides=self.overrides,
        )


@lru_cache
def get_settings() -> MvrSettings:
    """Get cached settings instance."""
    return MvrSettings()
