from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    project_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(project_root / "src"))


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    from npm_range import core
    from npm_range.config import Settings

    monkeypatch.delenv("NPM_RANGE_CONFIG", raising=False)
    monkeypatch.delenv("NPM_RANGE_INCLUDE_PRERELEASE", raising=False)
    monkeypatch.chdir(tmp_path)
    core.configure(Settings())
    yield
    core.configure(Settings())
