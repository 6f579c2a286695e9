"""Error types raised by the version and range parsers."""

from __future__ import annotations


class InvalidVersionFormat(ValueError):
    """Raised when a version string is not valid semantic-version text."""


class RangeParseError(ValueError):
    """Raised when a range expression or one of its comparators is malformed."""


class ManifestError(RuntimeError):
    """Raised when a plugin manifest cannot be read, validated or parsed."""
