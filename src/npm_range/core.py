"""Core matching entrypoints.

This module is what host applications call: parse a range once, then ask
whether candidate versions satisfy it. Parsed ranges are immutable and are
memoised per ``(text, options)`` so repeated lookups of the same dependency
constraint are cheap.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable
from functools import lru_cache

from .config import DEFAULT_CACHE_SIZE, Settings, load_settings
from .models.options import ParseOptions
from .models.range import Range
from .models.version import Version
from .models.version import parse_version as _parse_version
from .parsers.range import parse_range as _parse_range

_lock = threading.Lock()
_settings: Settings | None = None
_cached_parse: Callable[[str, ParseOptions], Range] | None = None


def configure(settings: Settings | None = None) -> Settings:
    """Install ``settings`` (or reload them from disk) and reset the range cache."""
    global _settings, _cached_parse

    resolved = settings if settings is not None else load_settings()
    with _lock:
        _settings = resolved
        _cached_parse = lru_cache(maxsize=resolved.cache_size)(_parse_range)
    return resolved


def get_settings() -> Settings:
    if _settings is None:
        return configure()
    return _settings


def _range_cache() -> Callable[[str, ParseOptions], Range]:
    global _cached_parse

    with _lock:
        if _cached_parse is None:
            _cached_parse = lru_cache(maxsize=DEFAULT_CACHE_SIZE)(_parse_range)
        return _cached_parse


def parse_version(text: str) -> Version:
    """Parse a strict semantic version; raises InvalidVersionFormat."""
    return _parse_version(text)


def parse_range(text: str, options: ParseOptions | None = None) -> Range:
    """Parse a range expression; raises RangeParseError.

    ``options`` defaults to the configured settings (see :mod:`npm_range.config`).
    Settings are only loaded when ``options`` is omitted.
    """
    if options is None:
        options = get_settings().parse_options()
    return _range_cache()(text, options)


def _coerce(version: Version | str) -> Version:
    if isinstance(version, Version):
        return version
    return _parse_version(version)


def satisfies(
    version: Version | str,
    expr: str | Range,
    options: ParseOptions | None = None,
) -> bool:
    """Return True if ``version`` is included by the range ``expr``."""
    range_ = expr if isinstance(expr, Range) else parse_range(expr, options)
    return range_.includes(_coerce(version))


def filter_satisfying(
    versions: Iterable[Version | str],
    expr: str | Range,
    options: ParseOptions | None = None,
) -> list[Version]:
    """Return the versions included by ``expr``, in input order."""
    range_ = expr if isinstance(expr, Range) else parse_range(expr, options)
    matched: list[Version] = []
    for version in versions:
        candidate = _coerce(version)
        if range_.includes(candidate):
            matched.append(candidate)
    return matched


def max_satisfying(
    versions: Iterable[Version | str],
    expr: str | Range,
    options: ParseOptions | None = None,
) -> Version | None:
    """Return the highest version included by ``expr``, or None."""
    return max(filter_satisfying(versions, expr, options), default=None)
