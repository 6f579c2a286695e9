from __future__ import annotations

import logging

import pytest

from npm_range.models.version import parse_version
from npm_range.parsers.manifest import from_document
from npm_range.report import aggregate
from npm_range.validators.dependencies import DependencyFinding, check_dependencies

MANIFEST = from_document(
    {
        "name": "speedrun-timer",
        "version": "1.4.0",
        "authors": ["Ada"],
        "description": "Shows split times",
        "dependencies": {"core": "^1.2.0", "ui": "~0.3.1", "maps": "*"},
    }
)


def test_all_dependencies_satisfied() -> None:
    findings = check_dependencies(
        MANIFEST, {"core": "1.8.2", "ui": parse_version("0.3.9"), "maps": "4.0.0"}
    )
    assert [f.status for f in findings] == ["ok", "ok", "ok"]
    assert [f.installed for f in findings] == ["1.8.2", "0.3.9", "4.0.0"]

    report = aggregate(MANIFEST, findings)
    assert report["hasProblems"] is False
    assert report["totals"] == {"dependencies": 3, "ok": 3, "missing": 0, "incompatible": 0}


def test_missing_and_incompatible(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="npm_range.validators.dependencies"):
        findings = check_dependencies(MANIFEST, {"core": "2.0.0", "ui": "not-a-version"})

    assert [(f.name, f.status) for f in findings] == [
        ("core", "incompatible"),
        ("ui", "incompatible"),
        ("maps", "missing"),
    ]
    assert findings[2].installed is None
    assert "Ignoring installed version of ui" in caplog.text

    report = aggregate(MANIFEST, findings)
    assert report["plugin"] == "speedrun-timer"
    assert report["version"] == "1.4.0"
    assert report["hasProblems"] is True
    assert report["totals"] == {"dependencies": 3, "ok": 0, "missing": 1, "incompatible": 2}
    assert report["dependencies"][0] == {
        "name": "core",
        "required": ">=1.2.0 <2.0.0",
        "installed": "2.0.0",
        "status": "incompatible",
    }


def test_prerelease_installed_version_is_gated() -> None:
    findings = check_dependencies(MANIFEST, {"core": "1.5.0-rc.1", "ui": "0.3.2", "maps": "1.0.0"})
    assert findings[0].status == "incompatible"


def test_finding_rejects_unknown_status() -> None:
    with pytest.raises(ValueError):
        DependencyFinding("core", "*", "1.0.0", "broken")
