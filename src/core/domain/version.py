"""Semantic versions as the registry orders them.

This module lives in the domain layer because both the registry adapter
(parsing API payloads) and the services (bumping, comparing) need the same
notion of a version. It has no I/O.

Grammar: SemVer 2.0 (`MAJOR.MINOR.PATCH[-PRE][+BUILD]`).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from functools import total_ordering
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

_NUM = r"0|[1-9]\d*"
_PRE_IDENT = r"0|[1-9]\d*|\d*[A-Za-z-][0-9A-Za-z-]*"
_BUILD_IDENT = r"[0-9A-Za-z-]+"

SEMVER_RE = re.compile(
    rf"(?P<major>{_NUM})\.(?P<minor>{_NUM})\.(?P<patch>{_NUM})"
    rf"(?:-(?P<pre>(?:{_PRE_IDENT})(?:\.(?:{_PRE_IDENT}))*))?"
    rf"(?:\+(?P<build>{_BUILD_IDENT}(?:\.{_BUILD_IDENT})*))?",
    re.ASCII,
)


def _ident_key(ident: str) -> tuple[int, int, str]:
    # Numeric identifiers sort before alphanumeric ones.
    if ident.isascii() and ident.isdigit():
        return (0, int(ident), "")
    return (1, 0, ident)


def _idents_key(idents: tuple[str, ...]) -> tuple[tuple[int, int, str], ...]:
    return tuple(_ident_key(i) for i in idents)


@total_ordering
@dataclass(frozen=True)
class Version:
    """A `major.minor.patch` triple with optional pre-release and build metadata."""

    major: int
    minor: int
    patch: int
    pre: tuple[str, ...] = ()
    build: tuple[str, ...] = ()

    @classmethod
    def parse(cls, text: str) -> "Version":
        """Parse a version string, raising `ValueError` when it is not valid SemVer."""

        m = SEMVER_RE.fullmatch(text)
        if not m:
            raise ValueError(f"invalid semantic version: {text!r}")
        pre = tuple(m.group("pre").split(".")) if m.group("pre") else ()
        build = tuple(m.group("build").split(".")) if m.group("build") else ()
        return cls(
            int(m.group("major")),
            int(m.group("minor")),
            int(m.group("patch")),
            pre,
            build,
        )

    def bump_patch(self) -> "Version":
        """Return the next patch version.

        Pre-release and build metadata are kept as-is; only `patch` moves.
        """

        return replace(self, patch=self.patch + 1)

    def _precedence(self) -> tuple[Any, ...]:
        # A release (no pre-release) ranks above any pre-release of the same triple.
        pre_key = (1,) if not self.pre else (0, _idents_key(self.pre))
        return (self.major, self.minor, self.patch, pre_key, _idents_key(self.build))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._precedence() < other._precedence()

    def __str__(self) -> str:
        out = f"{self.major}.{self.minor}.{self.patch}"
        if self.pre:
            out += "-" + ".".join(self.pre)
        if self.build:
            out += "+" + ".".join(self.build)
        return out

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.to_string_ser_schema(),
        )

    @classmethod
    def _validate(cls, value: Any) -> "Version":
        if isinstance(value, Version):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        raise ValueError(f"expected a version string, got {type(value).__name__}")
