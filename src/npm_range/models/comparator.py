"""Single range constraints.

A comparator is either :class:`AnyComparator` (``*``) or an
:class:`ExactComparator` pairing an :class:`Operator` with a target version.
Comparators are plain values; the AND-group a comparator belongs to is
handed to :meth:`includes` by the owning range so prerelease targets of
sibling comparators can unlock matching prereleases.
"""

from __future__ import annotations

import operator as _op
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import TypeAlias

from ..errors import RangeParseError
from .options import DEFAULT_OPTIONS, ParseOptions
from .version import MIN_VERSION, Version


class Operator(str, Enum):
    LESS_THAN = "<"
    LESS_THAN_OR_EQUAL = "<="
    GREATER_THAN = ">"
    GREATER_THAN_OR_EQUAL = ">="
    EQUAL = "="

    @classmethod
    def from_token(cls, token: str) -> Operator:
        """Return the operator for ``token``; an empty token means equality."""
        if token == "":
            return cls.EQUAL
        try:
            return cls(token)
        except ValueError as exc:
            raise RangeParseError(f"Unknown comparator operator: {token!r}") from exc

    def test(self, comparison: int) -> bool:
        return _OPERATOR_TESTS[self](comparison, 0)


_OPERATOR_TESTS: dict[Operator, Callable[[int, int], bool]] = {
    Operator.LESS_THAN: _op.lt,
    Operator.LESS_THAN_OR_EQUAL: _op.le,
    Operator.GREATER_THAN: _op.gt,
    Operator.GREATER_THAN_OR_EQUAL: _op.ge,
    Operator.EQUAL: _op.eq,
}


@lru_cache(maxsize=1024)
def _format_exact(operator: Operator, version: Version, build: tuple[str, ...]) -> str:
    # Version equality ignores build metadata, so it is part of the key.
    return f"{operator.value}{version}"


def _prerelease_unlocked(
    candidate: Version, comparator: Comparator, siblings: Sequence[Comparator]
) -> bool:
    """Return True if an explicit prerelease bound admits ``candidate``."""
    if isinstance(comparator, ExactComparator) and comparator.unlocks(candidate):
        return True

    for other in siblings:
        if other is comparator:
            continue
        if isinstance(other, ExactComparator) and other.unlocks(candidate):
            return True
    return False


@dataclass(frozen=True)
class AnyComparator:
    """Matches every version (subject to prerelease gating)."""

    options: ParseOptions = field(default=DEFAULT_OPTIONS)

    def includes(self, candidate: Version, siblings: Sequence[Comparator] = ()) -> bool:
        if candidate.is_prerelease and not self.options.include_prerelease:
            return _prerelease_unlocked(candidate, self, siblings)
        return True

    def compare(self, candidate: Version) -> int:
        return 0

    def __str__(self) -> str:
        return "*"


@dataclass(frozen=True)
class ExactComparator:
    """An operator applied to a concrete target version."""

    operator: Operator
    version: Version
    options: ParseOptions = field(default=DEFAULT_OPTIONS)

    def __post_init__(self) -> None:
        if not isinstance(self.operator, Operator):
            raise RangeParseError(f"Invalid comparator operator: {self.operator!r}")
        if not isinstance(self.version, Version):
            raise RangeParseError(
                f"Comparator {self.operator.value!r} requires a target version; "
                "use AnyComparator to match any version"
            )

    def unlocks(self, candidate: Version) -> bool:
        return self.version.is_prerelease and self.version.main_version_equals(candidate)

    def includes(self, candidate: Version, siblings: Sequence[Comparator] = ()) -> bool:
        """Return True if ``candidate`` satisfies this comparator.

        A prerelease candidate is rejected unless prereleases are included by
        the parse options, or this comparator or one of its ``siblings`` in
        the same AND-group targets a prerelease of the same
        ``major.minor.patch``.
        """
        if candidate.is_prerelease and not self.options.include_prerelease:
            if not _prerelease_unlocked(candidate, self, siblings):
                return False

        return self.operator.test(self.compare(candidate))

    def compare(self, candidate: Version) -> int:
        """Three-way comparison of ``candidate`` against the target.

        Prerelease identifiers only take part when the main versions are
        equal and at least one side carries a prerelease.
        """
        return candidate.compare(self.version)

    def __str__(self) -> str:
        return _format_exact(self.operator, self.version, self.version.build)


Comparator: TypeAlias = AnyComparator | ExactComparator


def is_all_inclusive(comparator: Comparator) -> bool:
    """True for ``*`` and its equivalents ``>=0.0.0`` and ``>=0.0.0-0``."""
    if isinstance(comparator, AnyComparator):
        return True
    return (
        comparator.operator is Operator.GREATER_THAN_OR_EQUAL
        and comparator.version.main_version == (0, 0, 0)
        and comparator.version.prerelease in ((), (0,))
    )


def is_all_exclusive(comparator: Comparator) -> bool:
    """True for ``<0.0.0-0``, which no version can satisfy."""
    return (
        isinstance(comparator, ExactComparator)
        and comparator.operator is Operator.LESS_THAN
        and comparator.version == MIN_VERSION
    )
