from __future__ import annotations

import pytest

from npm_range import core
from npm_range.config import ConfigError, Settings
from npm_range.errors import InvalidVersionFormat, RangeParseError
from npm_range.models.options import ParseOptions
from npm_range.models.version import parse_version


def test_satisfies_accepts_strings_and_versions() -> None:
    assert core.satisfies("1.5.0", "^1.2.3")
    assert core.satisfies(parse_version("1.5.0"), "^1.2.3")
    assert not core.satisfies("2.0.0", "^1.2.3")


def test_satisfies_accepts_parsed_range() -> None:
    range_ = core.parse_range("1.x || 2.x")
    assert core.satisfies("2.1.0", range_)


def test_satisfies_propagates_parse_errors() -> None:
    with pytest.raises(InvalidVersionFormat):
        core.satisfies("1.2", "^1.0.0")
    with pytest.raises(RangeParseError):
        core.satisfies("1.2.0", "^1.0.0 || nope")


def test_parse_range_is_memoised() -> None:
    first = core.parse_range(">=1.0.0 <2.0.0")
    assert core.parse_range(">=1.0.0 <2.0.0") is first
    assert core.parse_range(">=1.0.0 <2.0.0", ParseOptions(include_prerelease=True)) is not first


def test_configured_defaults_apply_when_options_omitted() -> None:
    assert not core.satisfies("1.5.0-beta", ">=1.0.0")
    core.configure(Settings(include_prerelease=True))
    assert core.satisfies("1.5.0-beta", ">=1.0.0")
    assert not core.satisfies("1.5.0-beta", ">=1.0.0", ParseOptions())


def test_explicit_options_do_not_load_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(core, "_settings", None)
    monkeypatch.setattr(core, "_cached_parse", None)
    monkeypatch.setenv("NPM_RANGE_INCLUDE_PRERELEASE", "maybe")

    range_ = core.parse_range(">=1.0.0", ParseOptions())
    assert range_.includes(parse_version("1.2.0"))
    assert core.satisfies("1.2.0", ">=1.0.0", ParseOptions())
    assert core._settings is None


def test_omitted_options_surface_config_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(core, "_settings", None)
    monkeypatch.setenv("NPM_RANGE_INCLUDE_PRERELEASE", "maybe")

    with pytest.raises(ConfigError):
        core.parse_range(">=1.0.0")


def test_zero_cache_size_still_parses() -> None:
    core.configure(Settings(cache_size=0))
    first = core.parse_range("^1.0.0")
    assert core.parse_range("^1.0.0") == first
    assert core.parse_range("^1.0.0") is not first


def test_filter_and_max_satisfying() -> None:
    versions = ["1.0.0", "2.1.0", "1.9.3", "1.10.0-rc.1", "3.0.0"]
    matched = core.filter_satisfying(versions, "^1.0.0")
    assert [str(v) for v in matched] == ["1.0.0", "1.9.3"]
    assert str(core.max_satisfying(versions, "^1.0.0")) == "1.9.3"
    assert str(core.max_satisfying(versions, ">=1.0.0 || 1.10.0-rc.1")) == "3.0.0"
    assert core.max_satisfying(versions, "^4.0.0") is None


def test_parse_version_wrapper() -> None:
    assert str(core.parse_version("1.2.3-rc.1")) == "1.2.3-rc.1"
    with pytest.raises(InvalidVersionFormat):
        core.parse_version("1.2.3.4")
