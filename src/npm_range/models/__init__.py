"""Value types for versions, comparators and ranges."""

from __future__ import annotations

from .comparator import AnyComparator, Comparator, ExactComparator, Operator
from .manifest import PluginManifest
from .options import DEFAULT_OPTIONS, ParseOptions
from .range import Range
from .version import MIN_VERSION, Identifier, Version, parse_version

__all__ = [
    "AnyComparator",
    "Comparator",
    "DEFAULT_OPTIONS",
    "ExactComparator",
    "Identifier",
    "MIN_VERSION",
    "Operator",
    "ParseOptions",
    "PluginManifest",
    "Range",
    "Version",
    "parse_version",
]
