"""Semantic version value type built atop the ``semver`` library.

Versions follow the semver 2.0.0 grammar: ``major.minor.patch`` with an
optional ``-prerelease`` and ``+build`` suffix. Build metadata is kept for
display but never participates in precedence, equality or hashing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TypeAlias

import semver

from ..errors import InvalidVersionFormat

Identifier: TypeAlias = int | str

# semver's own pattern uses ``\d`` and ``$``, which accept non-ASCII digits
# and a trailing newline.
_VERSION_CHARS_RE = re.compile(r"[0-9A-Za-z.+-]+")


def split_prerelease(text: str) -> tuple[Identifier, ...]:
    """Split a dotted prerelease string into typed identifiers."""
    return tuple(int(part) if part.isdigit() else part for part in text.split("."))


def _parse_semver(text: str) -> semver.Version:
    if not _VERSION_CHARS_RE.fullmatch(text):
        raise InvalidVersionFormat(f"Invalid version: {text!r}")
    try:
        return semver.Version.parse(text)
    except ValueError as exc:
        raise InvalidVersionFormat(f"Invalid version: {text!r}") from exc


def _render(major: int, minor: int, patch: int, prerelease: tuple, build: tuple) -> str:
    text = f"{major}.{minor}.{patch}"
    if prerelease:
        text += "-" + ".".join(str(part) for part in prerelease)
    if build:
        text += "+" + ".".join(build)
    return text


@dataclass(frozen=True, eq=False)
class Version:
    """Immutable semantic version."""

    major: int
    minor: int
    patch: int
    prerelease: tuple[Identifier, ...] = ()
    build: tuple[str, ...] = ()
    _semver: semver.Version = field(init=False, repr=False)

    def __post_init__(self) -> None:
        for name in ("major", "minor", "patch"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidVersionFormat(f"{name} must be a non-negative integer, got {value!r}")

        object.__setattr__(self, "prerelease", tuple(self.prerelease))
        object.__setattr__(self, "build", tuple(self.build))

        for identifier in self.prerelease:
            if isinstance(identifier, bool):
                raise InvalidVersionFormat(f"Invalid prerelease identifier: {identifier!r}")
            if isinstance(identifier, int):
                if identifier < 0:
                    raise InvalidVersionFormat(f"Invalid prerelease identifier: {identifier!r}")
            elif not isinstance(identifier, str) or identifier.isdigit() or "." in identifier:
                raise InvalidVersionFormat(f"Invalid prerelease identifier: {identifier!r}")

        if any(not isinstance(identifier, str) or "." in identifier for identifier in self.build):
            raise InvalidVersionFormat(f"Invalid build identifiers: {self.build!r}")

        text = _render(self.major, self.minor, self.patch, self.prerelease, self.build)
        object.__setattr__(self, "_semver", _parse_semver(text))

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse ``text`` as a strict semantic version.

        Raises:
            InvalidVersionFormat: wrong arity, leading zeros, illegal characters.
        """
        if not isinstance(text, str):
            raise InvalidVersionFormat(f"Version must be a string, got {type(text).__name__}")

        parsed = _parse_semver(text)
        return cls(
            major=parsed.major,
            minor=parsed.minor,
            patch=parsed.patch,
            prerelease=split_prerelease(parsed.prerelease) if parsed.prerelease else (),
            build=tuple(parsed.build.split(".")) if parsed.build else (),
        )

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    @property
    def main_version(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def main_version_equals(self, other: Version) -> bool:
        """Return True when both versions share ``major.minor.patch``."""
        return self.main_version == other.main_version

    def compare(self, other: Version) -> int:
        """Return -1, 0 or 1 by semver precedence; build metadata is ignored."""
        return self._semver.compare(other._semver)

    def without_build(self) -> Version:
        if not self.build:
            return self
        return Version(self.major, self.minor, self.patch, self.prerelease)

    def __str__(self) -> str:
        return _render(self.major, self.minor, self.patch, self.prerelease, self.build)

    def __repr__(self) -> str:
        return f"Version('{self}')"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) == 0

    def __hash__(self) -> int:
        return hash((self.major, self.minor, self.patch, self.prerelease))

    def __lt__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) >= 0


# Lowest version the grammar can express: 0 is the lowest numeric identifier,
# numeric identifiers sort below alphanumeric ones and a single identifier is
# the shortest non-empty prerelease.
MIN_VERSION = Version(0, 0, 0, (0,))
ZERO_VERSION = Version(0, 0, 0)


def parse_version(text: str) -> Version:
    return Version.parse(text)
