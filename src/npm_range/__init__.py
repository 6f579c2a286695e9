"""npm-range core package.

Semantic-version range matching with npm range syntax: comparators, ``||``
groups, x-ranges, tilde, caret and hyphen shorthands, and prerelease gating.
Host applications usually only need :func:`parse_range`,
:func:`parse_version` and :meth:`Range.includes`.
"""

from .core import filter_satisfying, max_satisfying, parse_range, parse_version, satisfies
from .errors import InvalidVersionFormat, ManifestError, RangeParseError
from .models import (
    AnyComparator,
    Comparator,
    ExactComparator,
    Operator,
    ParseOptions,
    Range,
    Version,
)
from .parsers.manifest import parse as load_manifest
from .validators.dependencies import check_dependencies

__all__ = [
    "AnyComparator",
    "Comparator",
    "ExactComparator",
    "InvalidVersionFormat",
    "ManifestError",
    "Operator",
    "ParseOptions",
    "Range",
    "RangeParseError",
    "Version",
    "check_dependencies",
    "filter_satisfying",
    "load_manifest",
    "max_satisfying",
    "parse_range",
    "parse_version",
    "satisfies",
]
