"""Sort and deduplicate using statements."""
from __future__ import annotations

import logging
from typing import Sequence

from usingtidy.core.options import AliasPlacement, FormatOptions, StaticPlacement
from usingtidy.usings.comparator import UsingComparator
from usingtidy.usings.directives import conditional_segments
from usingtidy.usings.statement import UsingStatement

logger = logging.getLogger(__name__)


def attach_comments(statements: Sequence[UsingStatement]) -> list[UsingStatement]:
    """Attach comments directly preceding a using to that using.

    Comments followed by a directive, a blank line or the end of input stay
    in the output as orphans, in their original position.
    """
    result: list[UsingStatement] = []
    pending: list[UsingStatement] = []

    for stmt in statements:
        if stmt.is_comment:
            pending.append(stmt)
        elif stmt.is_actual_using():
            if pending:
                stmt = stmt.with_comments(stmt.attached_comments + tuple(pending))
                pending = []
            result.append(stmt)
        else:
            result.extend(pending)
            pending = []
            result.append(stmt)

    result.extend(pending)
    return result


class UsingSorter:
    """Sort using statements according to the configured placement rules.

    Output order is: orphaned comments, global usings, usings, conditional
    blocks. Global usings apply to the whole compilation and always form
    their own leading section. Within the other usings, aliases and static usings are placed according to
    ``alias_placement`` and ``static_placement``. Lines inside ``#if`` or
    ``#region`` blocks are never reordered or moved out of their block.
    """

    def __init__(self, options: FormatOptions) -> None:
        self.options = options
        self.comparator = UsingComparator(options.primary_sort_namespace)

    def sort(self, statements: Sequence[UsingStatement]) -> list[UsingStatement]:
        orphans: list[UsingStatement] = []
        global_usings: list[UsingStatement] = []
        regular: list[UsingStatement] = []
        static: list[UsingStatement] = []
        aliases: list[UsingStatement] = []
        conditional: list[UsingStatement] = []

        split_aliases = self.options.alias_placement is not AliasPlacement.INTERMIXED
        split_static = self.options.static_placement is not StaticPlacement.INTERMIXED

        for is_conditional, segment in conditional_segments(statements):
            if is_conditional:
                conditional.extend(segment)
                continue
            for stmt in attach_comments(segment):
                if stmt.is_comment:
                    orphans.append(stmt)
                elif stmt.is_actual_using() and stmt.is_global:
                    global_usings.append(stmt)
                elif stmt.is_alias and split_aliases:
                    aliases.append(stmt)
                elif stmt.is_actual_using() and stmt.is_static and split_static:
                    static.append(stmt)
                elif stmt.is_actual_using():
                    regular.append(stmt)

        logger.debug(
            "Categorized: %d orphaned comment(s), %d global, %d regular, %d static, %d alias(es), "
            "%d conditional line(s)",
            len(orphans), len(global_usings), len(regular), len(static), len(aliases), len(conditional),
        )

        sorted_global = self._sort_and_deduplicate(global_usings)
        sorted_regular = self._sort_and_deduplicate(regular)
        sorted_static = self._sort_and_deduplicate(static)
        sorted_aliases = self._sort_and_deduplicate(aliases)

        removed = (
            len(global_usings) - len(sorted_global)
            + len(regular) - len(sorted_regular)
            + len(static) - len(sorted_static)
            + len(aliases) - len(sorted_aliases)
        )
        if removed:
            logger.debug("Removed %d duplicate(s) during sorting", removed)

        if self.options.static_placement is StaticPlacement.GROUPED_WITH_NAMESPACE:
            usings = self._interleave_by_namespace(sorted_regular, sorted_static)
        else:
            usings = sorted_regular + sorted_static

        if self.options.alias_placement is AliasPlacement.TOP:
            usings = sorted_aliases + usings
        else:
            usings = usings + sorted_aliases

        return orphans + sorted_global + usings + conditional

    def _sort_and_deduplicate(self, usings: list[UsingStatement]) -> list[UsingStatement]:
        result: list[UsingStatement] = []
        position: dict[tuple, int] = {}

        for stmt in sorted(usings, key=self.comparator.key):
            key = stmt.dedup_key
            if key not in position:
                position[key] = len(result)
                result.append(stmt)
                continue
            # Keep the first occurrence but not at the cost of its duplicate's comments
            survivor = result[position[key]]
            extra = tuple(c for c in stmt.attached_comments if c not in survivor.attached_comments)
            if extra:
                result[position[key]] = survivor.with_comments(survivor.attached_comments + extra)

        return result

    @staticmethod
    def _interleave_by_namespace(
        regular: list[UsingStatement],
        static: list[UsingStatement],
    ) -> list[UsingStatement]:
        """Place static usings right after the regular usings of the same root."""
        by_root: dict[str, list[UsingStatement]] = {}
        for stmt in static:
            by_root.setdefault(stmt.root_namespace, []).append(stmt)

        result: list[UsingStatement] = []
        for i, stmt in enumerate(regular):
            result.append(stmt)
            last_of_group = i == len(regular) - 1 or regular[i + 1].root_namespace != stmt.root_namespace
            if last_of_group and stmt.root_namespace in by_root:
                result.extend(by_root.pop(stmt.root_namespace))

        for remaining in by_root.values():
            result.extend(remaining)
        return result
