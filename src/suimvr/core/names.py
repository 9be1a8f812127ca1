"""Registry name value objects and syntax validation."""

from __future__ import annotations

import re
from typing import ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .exceptions import InvalidNameError
from .types import NameKind


class PackageName(BaseModel):
    """An MVR package name such as ``@suifrens/core``."""

    model_config = ConfigDict(frozen=True)

    value: str = Field(..., description="Full package name including the leading @")

    PATTERN: ClassVar[re.Pattern[str]] = re.compile(
        r"^@(?P<namespace>[A-Za-z0-9_-]+)/(?P<package>[A-Za-z0-9_-]+)$"
    )

    @model_validator(mode="after")
    def validate_package_name(self) -> Self:
        if not self.PATTERN.match(self.value):
            raise ValueError(f"Invalid package name: {self.value}")
        return self

    @property
    def namespace(self) -> str:
        """Namespace segment without the leading @."""
        return self.PATTERN.match(self.value).group("namespace")

    @property
    def package(self) -> str:
        return self.PATTERN.match(self.value).group("package")

    @classmethod
    def parse(cls, value: str) -> PackageName:
        """Parse a package name, raising InvalidNameError on bad syntax."""
        try:
            return cls(value=value)
        except ValidationError as e:
            raise InvalidNameError(value, NameKind.PACKAGE) from e

    def __str__(self) -> str:
        return self.value


class TypeName(BaseModel):
    """An MVR type name such as ``@suifrens/core::suifren::SuiFren``.

    The type identifier may carry generic parameters, e.g.
    ``@ns/pkg::coin::Coin<T>``.
    """

    model_config = ConfigDict(frozen=True)

    value: str = Field(..., description="Full type name including the leading @")

    PATTERN: ClassVar[re.Pattern[str]] = re.compile(
        r"^(?P<package>@[A-Za-z0-9_-]+/[A-Za-z0-9_-]+)"
        r"::(?P<module>[A-Za-z0-9_]+)"
        r"::(?P<type_name>[A-Za-z0-9_]+(?:<(?P<generics>.+)>)?)$"
    )
    # Generic parameter lists must not be empty
    EMPTY_GENERICS: ClassVar[re.Pattern[str]] = re.compile(r"<\s*>")

    @model_validator(mode="after")
    def validate_type_name(self) -> Self:
        match = self.PATTERN.match(self.value)
        if (
            not match
            or self.EMPTY_GENERICS.search(self.value)
            or not _brackets_balanced(match.group("generics") or "")
        ):
            raise ValueError(f"Invalid type name: {self.value}")
        return self

    @property
    def package_name(self) -> PackageName:
        return PackageName(value=self.PATTERN.match(self.value).group("package"))

    @property
    def module(self) -> str:
        return self.PATTERN.match(self.value).group("module")

    @property
    def type_name(self) -> str:
        return self.PATTERN.match(self.value).group("type_name")

    @classmethod
    def parse(cls, value: str) -> TypeName:
        """Parse a type name, raising InvalidNameError on bad syntax."""
        try:
            return cls(value=value)
        except ValidationError as e:
            raise InvalidNameError(value, NameKind.TYPE) from e

    def __str__(self) -> str:
        return self.value


def _brackets_balanced(text: str) -> bool:
    # Depth must never drop below zero and must close at zero
    depth = 0
    for char in text:
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


def validate_package_name(name: str) -> None:
    """Raise InvalidNameError unless ``name`` is a well-formed package name."""
    PackageName.parse(name)


def validate_type_name(name: str) -> None:
    """Raise InvalidNameError unless ``name`` is a well-formed type name."""
    TypeName.parse(name)


def validate_name(name: str, kind: NameKind) -> None:
    """Validate ``name`` according to its kind."""
    if kind == NameKind.TYPE:
        validate_type_name(name)
    else:
        validate_package_name(name)


def parse_move_target(target: str) -> tuple[str, str]:
    """
    Split a Move call target into its package name and the remainder.

    ``"@suifrens/core::mint::new"`` -> ``("@suifrens/core", "mint::new")``

    Raises:
        InvalidNameError: if the package part is malformed or nothing follows it
    """
    package, sep, remainder = target.partition("::")
    if not sep or not remainder:
        raise InvalidNameError(target, NameKind.PACKAGE)
    validate_package_name(package)
    return package, remainder
