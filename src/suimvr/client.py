"""Convenience functions for one-off resolutions."""

from __future__ import annotations

from suimvr.config import MvrSettings
from suimvr.resolution.resolver import MvrResolver


async def resolve_package(
    package_name: str,
    *,
    settings: MvrSettings | None = None,
) -> str:
    """
    Resolve a package name (convenience function).

    For multiple resolutions, keep an MvrResolver around so the cache is reused.
    """
    async with MvrResolver.from_settings(settings or MvrSettings()) as resolver:
        return await resolver.resolve_package(package_name)


async def resolve_type(
    type_name: str,
    *,
    settings: MvrSettings | None = None,
) -> str:
    """
    Resolve a type name (convenience function).

    For multiple resolutions, keep an MvrResolver around so the cache is reused.
    """
    async with MvrResolver.from_settings(settings or MvrSettings()) as resolver:
        return await resolver.resolve_type(type_name)
