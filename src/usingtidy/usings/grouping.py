"""Blank-line separation between groups of usings."""
from __future__ import annotations

import logging
from typing import Sequence

from usingtidy.core.options import FormatOptions, StaticPlacement
from usingtidy.usings.directives import conditional_segments
from usingtidy.usings.statement import UsingStatement

logger = logging.getLogger(__name__)


class UsingGroupSplitter:
    """Insert blank lines into an already sorted sequence.

    A blank line is always placed between orphaned comments and the usings
    that follow them, and around conditional blocks; without it an orphaned
    comment would be attached to the next using on the following run. With
    ``split_groups`` enabled a blank line also separates usings whose root
    namespace differs, and the global usings from the local ones. Existing
    blank lines are reused, never doubled, so the operation is idempotent.
    """

    def __init__(self, options: FormatOptions) -> None:
        self.options = options

    def _group_of(self, stmt: UsingStatement) -> tuple[bool, bool, str]:
        static_section = stmt.is_static and self.options.static_placement is StaticPlacement.BOTTOM
        return (stmt.is_global, static_section, stmt.root_namespace)

    @staticmethod
    def _separate(result: list[UsingStatement]) -> None:
        if result and not result[-1].is_blank:
            result.append(UsingStatement.blank_line())

    def split(self, statements: Sequence[UsingStatement]) -> list[UsingStatement]:
        result: list[UsingStatement] = []
        previous: str | None = None
        previous_group: tuple[bool, bool, str] | None = None

        for is_conditional, segment in conditional_segments(statements):
            if is_conditional:
                self._separate(result)
                result.extend(segment)
                previous = "conditional"
                continue

            for stmt in segment:
                if stmt.is_blank:
                    if result and not result[-1].is_blank:
                        result.append(stmt)
                    continue

                if stmt.is_actual_using():
                    group = self._group_of(stmt)
                    if previous in ("comment", "conditional"):
                        self._separate(result)
                    elif previous == "using" and self.options.split_groups and group != previous_group:
                        self._separate(result)
                    result.append(stmt)
                    previous = "using"
                    previous_group = group
                else:
                    if previous in ("using", "conditional"):
                        self._separate(result)
                    result.append(stmt)
                    previous = "comment"

        added = sum(1 for s in result if s.is_blank) - sum(1 for s in statements if s.is_blank)
        if added > 0:
            logger.debug("Added %d blank line(s) between groups", added)
        return result
