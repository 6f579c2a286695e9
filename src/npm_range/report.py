"""Report aggregation and schema-friendly output."""

from __future__ import annotations

from typing import Any

from .models.manifest import PluginManifest
from .validators.dependencies import STATUS_INCOMPATIBLE, STATUS_MISSING, DependencyFinding


def aggregate(manifest: PluginManifest, findings: list[DependencyFinding]) -> dict[str, Any]:
    """Aggregate dependency findings for one plugin into a single report.

    Computes totals per status and the top-level ``hasProblems`` flag, and
    passes the individual findings through in declaration order.
    """

    problems = [f for f in findings if not f.ok]
    totals = {
        "dependencies": len(findings),
        "ok": len(findings) - len(problems),
        "missing": sum(1 for f in problems if f.status == STATUS_MISSING),
        "incompatible": sum(1 for f in problems if f.status == STATUS_INCOMPATIBLE),
    }

    report: dict[str, Any] = {
        "plugin": manifest.name,
        "version": str(manifest.version),
        "hasProblems": bool(problems),
        "dependencies": [f.to_dict() for f in findings],
        "totals": totals,
    }

    return report
