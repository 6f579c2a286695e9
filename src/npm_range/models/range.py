"""Parsed range: OR across groups, AND within a group."""

from __future__ import annotations

from dataclasses import dataclass

from .comparator import Comparator
from .version import Version


@dataclass(frozen=True)
class Range:
    """Immutable result of parsing a range expression.

    Each group is passed to its own comparators as their siblings, so a
    prerelease bound in a group can admit prereleases of the same base
    version for the other comparators in that group.
    """

    groups: tuple[tuple[Comparator, ...], ...]

    def includes(self, candidate: Version) -> bool:
        return any(self._group_includes(group, candidate) for group in self.groups)

    @staticmethod
    def _group_includes(group: tuple[Comparator, ...], candidate: Version) -> bool:
        return all(comparator.includes(candidate, group) for comparator in group)

    def __contains__(self, candidate: object) -> bool:
        return isinstance(candidate, Version) and self.includes(candidate)

    def __str__(self) -> str:
        return " || ".join(" ".join(str(c) for c in group) for group in self.groups)
