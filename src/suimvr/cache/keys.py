"""Cache key builders for consistent key formatting."""

from suimvr.core.types import NameKind


class CacheKeys:
    """Cache key builders for consistent key formatting.

    Package and type resolutions share one cache, so keys are namespaced by
    kind. Names are case-sensitive and used verbatim.
    """

    PACKAGE_PREFIX = "pkg"
    TYPE_PREFIX = "type"

    @classmethod
    def package(cls, package_name: str) -> str:
        """Key for a resolved package address."""
        return f"{cls.PACKAGE_PREFIX}:{package_name}"

    @classmethod
    def type_name(cls, type_name: str) -> str:
        """Key for a resolved type signature."""
        return f"{cls.TYPE_PREFIX}:{type_name}"

    @classmethod
    def for_kind(cls, name: str, kind: NameKind | str) -> str:
        if kind == NameKind.TYPE:
            return cls.type_name(name)
        return cls.package(name)
