"""Configuration loader for range matching defaults.

Reads settings from a JSON file (default: ``npm-range.json`` in the working
directory) and validates the structure. Recognised keys are
``includePrerelease`` (default False) and ``cacheSize`` (default 256), the
number of parsed ranges kept by :func:`npm_range.core.parse_range`.

The ``NPM_RANGE_INCLUDE_PRERELEASE`` environment variable overrides the file
value for ``includePrerelease``.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .models.options import ParseOptions

DEFAULT_CONFIG_PATH = Path("npm-range.json")
CONFIG_PATH_ENV_VAR = "NPM_RANGE_CONFIG"
INCLUDE_PRERELEASE_ENV_VAR = "NPM_RANGE_INCLUDE_PRERELEASE"
DEFAULT_CACHE_SIZE = 256

_TRUTHY = {"1", "true", "yes", "y"}
_FALSY = {"0", "false", "no", "n"}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be loaded or is invalid."""


@dataclass(slots=True, frozen=True)
class Settings:
    """Top-level settings container."""

    include_prerelease: bool = False
    cache_size: int = DEFAULT_CACHE_SIZE

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create Settings from a dictionary, validating field types."""
        include_prerelease = data.get("includePrerelease", False)
        if not isinstance(include_prerelease, bool):
            raise ConfigError("'includePrerelease' must be a boolean")

        cache_size = data.get("cacheSize", DEFAULT_CACHE_SIZE)
        if isinstance(cache_size, bool) or not isinstance(cache_size, int) or cache_size < 0:
            raise ConfigError("'cacheSize' must be a non-negative integer")

        unknown = sorted(set(data) - {"includePrerelease", "cacheSize"})
        if unknown:
            raise ConfigError(f"Unknown configuration key(s): {', '.join(unknown)}")

        return cls(include_prerelease=include_prerelease, cache_size=cache_size)

    def parse_options(self) -> ParseOptions:
        return ParseOptions(include_prerelease=self.include_prerelease)


def _resolve_config_path(path: Path | str | None = None) -> tuple[Path, bool]:
    """Resolve the configuration file path and whether it must exist.

    Priority:
    1. Explicit path argument
    2. NPM_RANGE_CONFIG environment variable
    3. Default path (npm-range.json in the working directory)
    """
    if path is not None:
        return Path(path), True

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path), True

    return DEFAULT_CONFIG_PATH, False


def _env_override(settings: Settings) -> Settings:
    raw = os.environ.get(INCLUDE_PRERELEASE_ENV_VAR)
    if raw is None or not raw.strip():
        return settings

    value = raw.strip().lower()
    if value in _TRUTHY:
        include_prerelease = True
    elif value in _FALSY:
        include_prerelease = False
    else:
        raise ConfigError(f"{INCLUDE_PRERELEASE_ENV_VAR} has invalid value: {raw!r}")

    return Settings(include_prerelease=include_prerelease, cache_size=settings.cache_size)


def load_settings(path: Path | str | None = None) -> Settings:
    """Load and validate settings from a JSON file.

    Args:
        path: Optional path to the config file. If not provided, uses the
            NPM_RANGE_CONFIG env var or falls back to npm-range.json.

    Returns:
        A Settings object; defaults when the default file does not exist.

    Raises:
        ConfigError: If the file cannot be read or contains invalid data.
    """
    config_path, required = _resolve_config_path(path)

    if not config_path.exists():
        if required:
            raise ConfigError(f"Configuration file not found: {config_path}")
        return _env_override(Settings())

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a JSON object")

    return _env_override(Settings.from_dict(data))
