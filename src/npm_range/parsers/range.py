"""Parse full npm range expressions.

A range is one or more AND-groups joined by ``||``. Each group is handed to
:class:`~npm_range.parsers.comparator.ComparatorParser`, duplicate
comparators are dropped, and degenerate ranges are simplified:

- a group made only of ``*`` (or ``>=0.0.0``) turns the whole range into
  that single group, since it matches every version;
- otherwise a group containing ``<0.0.0-0`` turns the whole range into that
  single group, which matches nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..errors import RangeParseError
from ..models.comparator import AnyComparator, Comparator, is_all_exclusive, is_all_inclusive
from ..models.options import DEFAULT_OPTIONS, ParseOptions
from ..models.range import Range
from .comparator import ComparatorParser

logger = logging.getLogger(__name__)

OR_SEPARATOR = "||"


def _unique(comparators: Sequence[Comparator]) -> list[Comparator]:
    return list(dict.fromkeys(comparators))


def _simplify(groups: list[list[Comparator]]) -> list[list[Comparator]]:
    all_inclusive: Comparator | None = None
    all_exclusive: Comparator | None = None

    for group in groups:
        if all_inclusive is None and all(is_all_inclusive(c) for c in group):
            all_inclusive = group[0]
        if all_exclusive is None:
            all_exclusive = next((c for c in group if is_all_exclusive(c)), None)
        if all_inclusive is not None and all_exclusive is not None:
            break

    # "*" wins over "<0.0.0-0" when both are present.
    if all_inclusive is not None:
        if len(groups) > 1 or len(groups[0]) > 1:
            logger.debug("Range simplified to %s", all_inclusive)
        return [[all_inclusive]]

    if all_exclusive is not None:
        logger.debug("Range simplified to %s", all_exclusive)
        return [[all_exclusive]]

    return groups


class RangeParser:
    """Split on ``||`` and build an immutable :class:`Range`."""

    def __init__(self, options: ParseOptions = DEFAULT_OPTIONS) -> None:
        self.options = options

    def parse(self, text: str) -> Range:
        if not isinstance(text, str):
            raise RangeParseError(f"Range must be a string, got {type(text).__name__}")

        raw_groups = text.split(OR_SEPARATOR)
        if all(not raw.strip() for raw in raw_groups):
            return Range(groups=((AnyComparator(options=self.options),),))

        comparator_parser = ComparatorParser(self.options)
        groups = [_unique(comparator_parser.parse(raw)) for raw in raw_groups]
        groups = _simplify(groups)

        return Range(groups=tuple(tuple(group) for group in groups))


def parse_range(text: str, options: ParseOptions = DEFAULT_OPTIONS) -> Range:
    """Parse ``text`` into a :class:`Range`.

    Raises:
        RangeParseError: if any group contains an unrecognised comparator.
    """
    return RangeParser(options).parse(text)
