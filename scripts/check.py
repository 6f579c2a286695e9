#!/usr/bin/env python3
"""Local CLI to evaluate npm ranges and plugin dependency constraints.

Usage:
  python scripts/check.py match ">=1.0.0 <2.0.0" 1.2.3 2.0.0 [--include-prerelease]
  python scripts/check.py deps plugin.json --installed core=1.4.0 --installed ui=0.3.1

Exit codes: 0 when everything matches, 10 when a version does not satisfy
the range or a dependency has problems, 1 on invalid input.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from npm_range.config import ConfigError, load_settings
from npm_range.core import parse_range, parse_version
from npm_range.errors import InvalidVersionFormat, ManifestError, RangeParseError
from npm_range.models.options import ParseOptions
from npm_range.parsers.manifest import parse as load_manifest
from npm_range.report import aggregate
from npm_range.validators.dependencies import check_dependencies

EXIT_MISMATCH = 10


def _installed_pair(value: str) -> tuple[str, str]:
    name, sep, version = value.partition("=")
    if not sep or not name or not version:
        raise argparse.ArgumentTypeError(f"expected NAME=VERSION, got {value!r}")
    return name, version


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--config", type=Path, default=None, help="Path to npm-range.json")
    parser.add_argument("--include-prerelease", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true")

    # Also accepted after the subcommand; absent there, the top-level value stands.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--include-prerelease", action="store_true", default=argparse.SUPPRESS)
    sub = parser.add_subparsers(dest="command", required=True)

    match = sub.add_parser("match", parents=[common], help="Check versions against a range")
    match.add_argument("range")
    match.add_argument("versions", nargs="+")

    deps = sub.add_parser("deps", parents=[common], help="Check a manifest's dependencies")
    deps.add_argument("manifest", type=Path)
    deps.add_argument(
        "--installed",
        type=_installed_pair,
        action="append",
        default=[],
        metavar="NAME=VERSION",
    )
    return parser.parse_args(argv)


def _run_match(args: argparse.Namespace, options: ParseOptions) -> int:
    range_ = parse_range(args.range, options)
    results = {text: range_.includes(parse_version(text)) for text in args.versions}
    print(json.dumps({"range": str(range_), "results": results}, indent=2))
    return 0 if all(results.values()) else EXIT_MISMATCH


def _run_deps(args: argparse.Namespace, options: ParseOptions) -> int:
    manifest = load_manifest(args.manifest, options)
    findings = check_dependencies(manifest, dict(args.installed))
    report = aggregate(manifest, findings)
    print(json.dumps(report, indent=2))
    return EXIT_MISMATCH if report["hasProblems"] else 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(args.config)
    except ConfigError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    options = settings.parse_options()
    if args.include_prerelease:
        options = ParseOptions(include_prerelease=True)

    try:
        if args.command == "match":
            return _run_match(args, options)
        return _run_deps(args, options)
    except (InvalidVersionFormat, RangeParseError, ManifestError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
