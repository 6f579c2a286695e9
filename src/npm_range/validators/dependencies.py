"""Check a plugin manifest's dependency ranges against installed plugins."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from ..errors import InvalidVersionFormat
from ..models.manifest import PluginManifest
from ..models.version import Version

logger = logging.getLogger(__name__)

STATUS_OK = "ok"
STATUS_MISSING = "missing"
STATUS_INCOMPATIBLE = "incompatible"
_VALID_STATUSES = {STATUS_OK, STATUS_MISSING, STATUS_INCOMPATIBLE}


@dataclass(frozen=True)
class DependencyFinding:
    """Outcome of checking one declared dependency."""

    name: str
    required: str
    installed: str | None
    status: str

    def __post_init__(self) -> None:
        if self.status not in _VALID_STATUSES:
            raise ValueError(f"Invalid status: {self.status}")

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "required": self.required,
            "installed": self.installed,
            "status": self.status,
        }


def _coerce_installed(name: str, value: Version | str) -> Version | None:
    if isinstance(value, Version):
        return value
    try:
        return Version.parse(value)
    except InvalidVersionFormat as exc:
        logger.warning("Ignoring installed version of %s: %s", name, exc)
        return None


def check_dependencies(
    manifest: PluginManifest,
    installed: Mapping[str, Version | str],
) -> list[DependencyFinding]:
    """Return one finding per declared dependency, in declaration order.

    An installed version that cannot be parsed is reported as incompatible.
    """
    findings: list[DependencyFinding] = []
    for name, range_ in manifest.dependencies.items():
        required = str(range_)
        if name not in installed:
            findings.append(DependencyFinding(name, required, None, STATUS_MISSING))
            continue

        raw = installed[name]
        version = _coerce_installed(name, raw)
        if version is not None and range_.includes(version):
            status = STATUS_OK
        else:
            status = STATUS_INCOMPATIBLE
        findings.append(DependencyFinding(name, required, str(raw), status))

    return findings
