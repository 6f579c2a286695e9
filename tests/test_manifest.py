from __future__ import annotations

import json
from pathlib import Path

import pytest

from npm_range.errors import InvalidVersionFormat, ManifestError, RangeParseError
from npm_range.models.options import ParseOptions
from npm_range.models.version import parse_version
from npm_range.parsers.manifest import from_document, parse

MANIFEST = {
    "name": "speedrun-timer",
    "version": "1.4.0-beta.2",
    "authors": ["Ada"],
    "description": "Shows split times",
    "dependencies": {"core": "^1.2.0", "ui": ">=0.3.0 <0.5.0 || 1.x"},
}


def test_parse_json_manifest(tmp_path: Path) -> None:
    path = tmp_path / "plugin.json"
    path.write_text(json.dumps(MANIFEST), encoding="utf-8")

    manifest = parse(path)

    assert manifest.name == "speedrun-timer"
    assert manifest.version == parse_version("1.4.0-beta.2")
    assert manifest.authors == ("Ada",)
    assert list(manifest.dependencies) == ["core", "ui"]
    assert manifest.dependencies["core"].includes(parse_version("1.9.0"))
    assert manifest.to_dict()["dependencies"] == {
        "core": ">=1.2.0 <2.0.0",
        "ui": ">=0.3.0 <0.5.0 || >=1.0.0 <2.0.0",
    }


def test_parse_yaml_manifest(tmp_path: Path) -> None:
    path = tmp_path / "plugin.yaml"
    path.write_text(
        "name: speedrun-timer\n"
        "version: 2.0.0\n"
        "authors:\n  - Ada\n  - Lin\n"
        "description: Shows split times\n"
        "dependencies:\n  core: '~2.1'\n",
        encoding="utf-8",
    )

    manifest = parse(path)

    assert str(manifest.version) == "2.0.0"
    assert manifest.authors == ("Ada", "Lin")
    assert str(manifest.dependencies["core"]) == ">=2.1.0 <2.2.0"


def test_dependencies_are_optional() -> None:
    document = {key: value for key, value in MANIFEST.items() if key != "dependencies"}
    assert from_document(document).dependencies == {}


def test_options_are_used_for_dependency_ranges() -> None:
    options = ParseOptions(include_prerelease=True)
    manifest = from_document(MANIFEST, options)
    assert manifest.dependencies["core"].includes(parse_version("1.5.0-rc.1"))


def test_schema_errors_are_listed() -> None:
    document = {"name": "", "version": "1.0.0", "authors": [], "dependencies": {"x": 1}}
    with pytest.raises(ManifestError) as excinfo:
        from_document(document)

    message = str(excinfo.value)
    assert "<root>: 'description' is a required property" in message
    assert "- name:" in message
    assert "- authors:" in message
    assert "- dependencies/x:" in message


def test_invalid_version_is_chained() -> None:
    with pytest.raises(ManifestError) as excinfo:
        from_document({**MANIFEST, "version": "1.4"})
    assert isinstance(excinfo.value.__cause__, InvalidVersionFormat)


def test_invalid_range_is_chained() -> None:
    with pytest.raises(ManifestError, match="dependency 'core'") as excinfo:
        from_document({**MANIFEST, "dependencies": {"core": "^^1"}})
    assert isinstance(excinfo.value.__cause__, RangeParseError)


def test_unreadable_and_malformed_files(tmp_path: Path) -> None:
    with pytest.raises(ManifestError, match="Failed to read"):
        parse(tmp_path / "missing.json")

    broken_json = tmp_path / "plugin.json"
    broken_json.write_text("{", encoding="utf-8")
    with pytest.raises(ManifestError, match="Invalid JSON"):
        parse(broken_json)

    broken_yaml = tmp_path / "plugin.yml"
    broken_yaml.write_text("name: [unclosed", encoding="utf-8")
    with pytest.raises(ManifestError, match="Invalid YAML"):
        parse(broken_yaml)
