"""Conditional-compilation regions inside a using block.

Two views of the same ``#if``/``#region`` structure:

- ConditionalRegionTracker.find_ranges: matched (start, end) index pairs,
  used to protect usings inside a region from removal.
- conditional_segments: the statements cut into plain runs and whole
  conditional blocks, used by the sorter and group splitter so that nothing
  is ever moved in or out of a region.

Malformed nesting never raises. Unmatched closers are ignored and an
unterminated opener simply runs to the end of the statements.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from usingtidy.usings.statement import UsingStatement

logger = logging.getLogger(__name__)

_OPENERS = {"if": "if", "region": "region"}
_CLOSERS = {"endif": "if", "endregion": "region"}
_BRANCHES = ("elif", "else")


@dataclass(frozen=True)
class _OpenMarker:
    directive: str
    index: int


class ConditionalRegionTracker:
    """Find matched conditional ranges with a stack machine."""

    def find_ranges(self, statements: Sequence[UsingStatement]) -> list[tuple[int, int]]:
        """Return inclusive ``(start, end)`` statement index pairs.

        ``#elif``/``#else`` close the current ``#if`` branch and open a new
        one at the same line, so each branch is its own range. A closer only
        pops the stack when it matches the open marker's kind.
        """
        ranges: list[tuple[int, int]] = []
        stack: list[_OpenMarker] = []

        for index, stmt in enumerate(statements):
            if not stmt.is_directive:
                continue
            directive = stmt.directive

            if directive in _OPENERS:
                stack.append(_OpenMarker(directive, index))
            elif directive in _BRANCHES:
                if stack and stack[-1].directive == "if":
                    ranges.append((stack[-1].index, index))
                    stack[-1] = _OpenMarker("if", index)
            elif directive in _CLOSERS:
                if stack and stack[-1].directive == _CLOSERS[directive]:
                    marker = stack.pop()
                    ranges.append((marker.index, index))
                else:
                    logger.debug("Ignoring unmatched #%s at block line %d", directive, index)

        if stack:
            logger.debug("%d conditional region(s) left open", len(stack))
        return ranges

    @staticmethod
    def in_ranges(index: int, ranges: Sequence[tuple[int, int]]) -> bool:
        """True if ``index`` falls within any range, bounds included."""
        return any(start <= index <= end for start, end in ranges)


def conditional_segments(
    statements: Sequence[UsingStatement],
) -> list[tuple[bool, list[UsingStatement]]]:
    """Split statements into plain runs and whole conditional blocks.

    Returns
    -------
    list[tuple[bool, list[UsingStatement]]]
        ``(is_conditional, statements)`` pairs in order. A conditional block
        starts at a directive seen outside any block and ends when the
        ``#if``/``#region`` depth returns to zero. A stray ``#else`` or
        ``#endif`` forms a one-line block of its own.
    """
    segments: list[tuple[bool, list[UsingStatement]]] = []
    plain: list[UsingStatement] = []
    current: list[UsingStatement] | None = None
    depth = 0

    for stmt in statements:
        if current is None:
            if not stmt.is_directive:
                plain.append(stmt)
                continue
            if plain:
                segments.append((False, plain))
                plain = []
            current = []

        current.append(stmt)
        if stmt.is_directive:
            if stmt.directive in _OPENERS:
                depth += 1
            elif stmt.directive in _CLOSERS:
                depth = max(0, depth - 1)
        if depth == 0:
            segments.append((True, current))
            current = None

    if current is not None:
        segments.append((True, current))
    if plain:
        segments.append((False, plain))
    return segments
