"""Parse plugin manifests (JSON or YAML) and their dependency ranges."""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

from ..errors import InvalidVersionFormat, ManifestError, RangeParseError
from ..models.manifest import PluginManifest
from ..models.options import DEFAULT_OPTIONS, ParseOptions
from ..models.range import Range
from ..models.version import Version
from .range import parse_range

MANIFEST_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["name", "version", "authors", "description"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "version": {"type": "string", "minLength": 1},
        "authors": {
            "type": "array",
            "minItems": 1,
            "items": {"type": "string", "minLength": 1},
        },
        "description": {"type": "string"},
        "dependencies": {
            "type": "object",
            "propertyNames": {"minLength": 1},
            "additionalProperties": {"type": "string"},
        },
    },
}

_YAML_SUFFIXES = {".yaml", ".yml"}


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def validate_document(document: Any) -> None:
    """Raise ManifestError listing every schema violation in ``document``."""
    validator = Draft202012Validator(MANIFEST_SCHEMA)
    errors = sorted(validator.iter_errors(document), key=lambda e: list(e.path))
    if errors:
        raise ManifestError("Manifest failed validation:\n" + _format_errors(errors))


def _read_document(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestError(f"Failed to read manifest {path}: {exc}") from exc

    if path.suffix.lower() in _YAML_SUFFIXES:
        import yaml

        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ManifestError(f"Invalid YAML in manifest {path}: {exc}") from exc

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestError(f"Invalid JSON in manifest {path}: {exc}") from exc


def from_document(document: Any, options: ParseOptions = DEFAULT_OPTIONS) -> PluginManifest:
    """Build a PluginManifest from an already-decoded JSON/YAML document."""
    validate_document(document)

    try:
        version = Version.parse(document["version"])
    except InvalidVersionFormat as exc:
        raise ManifestError(f"Invalid plugin version: {exc}") from exc

    dependencies: dict[str, Range] = {}
    for name, expr in (document.get("dependencies") or {}).items():
        try:
            dependencies[name] = parse_range(expr, options)
        except RangeParseError as exc:
            raise ManifestError(f"Invalid range for dependency '{name}': {exc}") from exc

    return PluginManifest.from_parts(
        name=document["name"],
        version=version,
        authors=document["authors"],
        description=document["description"],
        dependencies=dependencies,
    )


def parse(path: Path, options: ParseOptions = DEFAULT_OPTIONS) -> PluginManifest:
    """Load the manifest at ``path``; ``.yaml``/``.yml`` files are read as YAML."""
    return from_document(_read_document(Path(path)), options)
