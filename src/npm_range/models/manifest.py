"""Plugin manifest model."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from .range import Range
from .version import Version


@dataclass(frozen=True)
class PluginManifest:
    """A plugin's identity plus the version ranges it requires of other plugins."""

    name: str
    version: Version
    authors: tuple[str, ...]
    description: str
    dependencies: Mapping[str, Range] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Plugin name must be non-empty")
        if not self.authors:
            raise ValueError("Plugin must list at least one author")
        if any(not author for author in self.authors):
            raise ValueError("Authors must be non-empty strings")
        if any(not name for name in self.dependencies):
            raise ValueError("Dependency names must be non-empty strings")

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "version": str(self.version),
            "authors": list(self.authors),
            "description": self.description,
            "dependencies": {name: str(range_) for name, range_ in self.dependencies.items()},
        }

    @classmethod
    def from_parts(
        cls,
        *,
        name: str,
        version: Version,
        authors: Iterable[str],
        description: str,
        dependencies: Mapping[str, Range] | None = None,
    ) -> PluginManifest:
        return cls(
            name=name,
            version=version,
            authors=tuple(authors),
            description=description,
            dependencies=dict(dependencies or {}),
        )
