"""Parse one AND-group of npm range syntax into comparators.

Supported comparator forms:
- exact versions (e.g., "1.2.3", "=1.2.3", "v1.2.3")
- primitive comparators "<", "<=", ">", ">=" followed by a version
- tilde ranges ~x.y.z → >=x.y.z <x.y+1.0 (also written "~>")
- caret ranges ^x.y.z → >=x.y.z <x+1.0.0, narrower when x or y is 0
- hyphen ranges "x.y.z - a.b.c" → >=x.y.z <=a.b.c
- x-ranges "1.x", "1.2.*", "1", "*" → equivalent >=/< pairs or any
- comparators separated by spaces or commas, e.g. ">=1.0.0 <2.0.0"
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..errors import InvalidVersionFormat, RangeParseError
from ..models.comparator import AnyComparator, Comparator, ExactComparator, Operator
from ..models.options import DEFAULT_OPTIONS, ParseOptions
from ..models.version import MIN_VERSION, Version

_XR = r"0|[1-9][0-9]*|[xX*]"
_PARTIAL_RE = re.compile(
    rf"v?(?P<major>{_XR})"
    rf"(?:\.(?P<minor>{_XR})"
    rf"(?:\.(?P<patch>{_XR})"
    r"(?P<suffix>[-+][0-9A-Za-z.+-]*)?)?)?"
)
_OPERATOR_RE = re.compile(r"<=|>=|<|>|=|~>|~|\^")
_OPERATOR_SPACING_RE = re.compile(r"(<=|>=|<|>|=|~>|~|\^)\s+")
_WILDCARDS = {"x", "X", "*"}
HYPHEN = "-"


@dataclass(slots=True, frozen=True)
class Partial:
    """A possibly incomplete version; ``None`` marks a wildcard or missing part.

    ``full`` holds the parsed version once all three parts are numbers.
    """

    major: int | None
    minor: int | None = None
    patch: int | None = None
    full: Version | None = None

    @property
    def is_full(self) -> bool:
        return self.full is not None


def _component(text: str | None) -> int | None:
    if text is None or text in _WILDCARDS:
        return None
    return int(text)


def parse_partial(text: str) -> Partial:
    """Parse a full or partial version such as ``1``, ``1.2.x`` or ``1.2.3-rc.1``."""
    match = _PARTIAL_RE.fullmatch(text)
    if match is None:
        raise RangeParseError(f"Invalid version in range: {text!r}")

    major = _component(match.group("major"))
    minor = _component(match.group("minor")) if major is not None else None
    patch = _component(match.group("patch")) if minor is not None else None
    suffix = match.group("suffix") or ""

    if patch is None:
        if suffix:
            raise RangeParseError(f"Prerelease or build on a wildcard version: {text!r}")
        return Partial(major=major, minor=minor)

    try:
        version = Version.parse(f"{major}.{minor}.{patch}{suffix}")
    except InvalidVersionFormat as exc:
        raise RangeParseError(f"Invalid version in range: {text!r}") from exc
    return Partial(major=major, minor=minor, patch=patch, full=version)


def _next_major(major: int) -> Version:
    return Version(major + 1, 0, 0)


def _next_minor(major: int, minor: int) -> Version:
    return Version(major, minor + 1, 0)


class ComparatorParser:
    """Turn one AND-group into a list of comparators stamped with ``options``."""

    def __init__(self, options: ParseOptions = DEFAULT_OPTIONS) -> None:
        self.options = options

    def parse(self, group: str) -> list[Comparator]:
        text = group.strip()
        if not text:
            return [self._any()]

        text = _OPERATOR_SPACING_RE.sub(r"\1", text.replace(",", " "))
        tokens = text.split()

        comparators: list[Comparator] = []
        index = 0
        while index < len(tokens):
            token = tokens[index]
            if token == HYPHEN:
                raise RangeParseError(f"Hyphen without a lower bound in {group!r}")

            if index + 1 < len(tokens) and tokens[index + 1] == HYPHEN:
                if index + 2 >= len(tokens):
                    raise RangeParseError(f"Hyphen without an upper bound in {group!r}")
                comparators.extend(self._hyphen(token, tokens[index + 2]))
                index += 3
                continue

            comparators.extend(self._comparator(token))
            index += 1

        return comparators

    # ---- builders -----------------------------------------------------------------------

    def _any(self) -> AnyComparator:
        return AnyComparator(options=self.options)

    def _exact(self, operator: Operator, version: Version) -> ExactComparator:
        return ExactComparator(operator=operator, version=version, options=self.options)

    def _between(self, lower: Version, upper: Version) -> list[Comparator]:
        return [
            self._exact(Operator.GREATER_THAN_OR_EQUAL, lower),
            self._exact(Operator.LESS_THAN, upper),
        ]

    # ---- forms --------------------------------------------------------------------------

    def _comparator(self, token: str) -> list[Comparator]:
        prefix = _OPERATOR_RE.match(token)
        op_token = prefix.group() if prefix else ""
        partial = parse_partial(token[len(op_token):])

        if op_token in ("~", "~>"):
            return self._tilde(partial)
        if op_token == "^":
            return self._caret(partial)
        return self._xrange(Operator.from_token(op_token), partial)

    def _xrange(self, operator: Operator, p: Partial) -> list[Comparator]:
        if p.full is not None:
            return [self._exact(operator, p.full)]

        if p.major is None:
            if operator in (Operator.LESS_THAN, Operator.GREATER_THAN):
                return [self._exact(Operator.LESS_THAN, MIN_VERSION)]
            return [self._any()]

        if operator is Operator.EQUAL:
            if p.minor is None:
                return self._between(Version(p.major, 0, 0), _next_major(p.major))
            return self._between(Version(p.major, p.minor, 0), _next_minor(p.major, p.minor))

        if operator is Operator.GREATER_THAN:
            if p.minor is None:
                return [self._exact(Operator.GREATER_THAN_OR_EQUAL, _next_major(p.major))]
            return [
                self._exact(Operator.GREATER_THAN_OR_EQUAL, _next_minor(p.major, p.minor))
            ]

        if operator is Operator.LESS_THAN_OR_EQUAL:
            if p.minor is None:
                return [self._exact(Operator.LESS_THAN, _next_major(p.major))]
            return [self._exact(Operator.LESS_THAN, _next_minor(p.major, p.minor))]

        return [self._exact(operator, Version(p.major, p.minor or 0, 0))]

    def _tilde(self, p: Partial) -> list[Comparator]:
        if p.major is None:
            return [self._any()]
        if p.minor is None:
            return self._between(Version(p.major, 0, 0), _next_major(p.major))
        if p.full is None:
            return self._between(Version(p.major, p.minor, 0), _next_minor(p.major, p.minor))
        return self._between(p.full, _next_minor(p.major, p.minor))

    def _caret(self, p: Partial) -> list[Comparator]:
        if p.major is None:
            return [self._any()]
        if p.minor is None:
            return self._between(Version(p.major, 0, 0), _next_major(p.major))
        if p.full is None:
            if p.major == 0:
                return self._between(Version(0, p.minor, 0), _next_minor(0, p.minor))
            return self._between(Version(p.major, p.minor, 0), _next_major(p.major))

        if p.major == 0 and p.minor == 0:
            upper = Version(0, 0, p.full.patch + 1)
        elif p.major == 0:
            upper = _next_minor(0, p.minor)
        else:
            upper = _next_major(p.major)
        return self._between(p.full, upper)

    def _hyphen(self, lower_text: str, upper_text: str) -> list[Comparator]:
        lower = parse_partial(lower_text)
        upper = parse_partial(upper_text)
        comparators: list[Comparator] = []

        if lower.major is not None:
            start = lower.full or Version(lower.major, lower.minor or 0, 0)
            comparators.append(self._exact(Operator.GREATER_THAN_OR_EQUAL, start))

        if upper.major is not None:
            if upper.minor is None:
                comparators.append(self._exact(Operator.LESS_THAN, _next_major(upper.major)))
            elif upper.full is None:
                comparators.append(
                    self._exact(Operator.LESS_THAN, _next_minor(upper.major, upper.minor))
                )
            else:
                comparators.append(self._exact(Operator.LESS_THAN_OR_EQUAL, upper.full))

        return comparators or [self._any()]


def parse(group: str, options: ParseOptions = DEFAULT_OPTIONS) -> list[Comparator]:
    """Return the comparators of one AND-group (duplicates are kept)."""
    return ComparatorParser(options).parse(group)
