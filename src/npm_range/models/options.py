"""Parse options shared by every comparator created in one parse call."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class ParseOptions:
    """Options to use when parsing a range with npm syntax.

    ``include_prerelease`` lets prerelease versions match comparators that do
    not explicitly name a prerelease of the same ``major.minor.patch``.
    """

    include_prerelease: bool = False

    def to_dict(self) -> dict[str, object]:
        return {"includePrerelease": self.include_prerelease}


DEFAULT_OPTIONS = ParseOptions()
