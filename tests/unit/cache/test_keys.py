"""Tests for cache key builders."""

from __future__ import annotations

import pytest

from suimvr.cache.keys import CacheKeys
from suimvr.core.types import NameKind


class TestCacheKeys:
    """Tests for resolution cache keys."""

    @pytest.mark.parametrize(
        "name,kind,expected",
        [
            ("@suifrens/core", NameKind.PACKAGE, "pkg:@suifrens/core"),
            ("@suifrens/core::suifren::SuiFren", NameKind.TYPE, "type:@suifrens/core::suifren::SuiFren"),
            ("@a/b", "package", "pkg:@a/b"),
            ("@a/b::m::T", "type", "type:@a/b::m::T"),
        ],
    )
    def test_key_format(self, name: str, kind: NameKind | str, expected: str):
        """Keys should be prefixed by kind."""
        assert CacheKeys.for_kind(name, kind) == expected

    def test_kinds_do_not_collide(self):
        """The same string resolved as package and type maps to different keys."""
        assert CacheKeys.package("@a/b") != CacheKeys.type_name("@a/b")

    def test_case_sensitive(self):
        """Names are used verbatim."""
        assert CacheKeys.package("@A/B") != CacheKeys.package("@a/b")
