"""Removal of usings reported as unused by an external analyzer.

The remover only applies judgments that were already computed. It decides
which of them to trust:

- lines that also carry a namespace-not-found error (CS0246) are kept; the
  analyzer cannot know whether an unresolved using is unused
- usings inside ``#if``/``#region`` ranges are kept unless
  ``process_conditional_regions`` is enabled
- anything that does not map onto a using in the block is ignored
"""
from __future__ import annotations

import logging
from typing import Iterable

from usingtidy.core.options import FormatOptions
from usingtidy.usings.block import UsingBlock
from usingtidy.usings.diagnostics import Diagnostic, not_found_lines, unused_diagnostics
from usingtidy.usings.directives import ConditionalRegionTracker
from usingtidy.usings.statement import UsingStatement

logger = logging.getLogger(__name__)


class DiagnosticLineMapper:
    """Map file-absolute diagnostic lines onto block-local statement indices."""

    def __init__(self, block: UsingBlock) -> None:
        self.block = block

    def unused_indices(self, diagnostics: Iterable[Diagnostic]) -> set[int]:
        """Block-local indices flagged unused, minus lines with CS0246.

        Multi-line diagnostics are expanded line by line, so a CS0246 on one
        line of the span only protects that line.
        """
        diagnostics = list(diagnostics)
        protected = not_found_lines(diagnostics)
        indices: set[int] = set()

        for diagnostic in unused_diagnostics(diagnostics):
            for file_line in diagnostic.lines():
                if file_line in protected:
                    logger.debug("Skipping file line %d - has CS0246 error", file_line)
                    continue
                index = self.block.index_of(file_line)
                if 0 <= index < len(self.block.statements):
                    indices.add(index)

        return indices

    def covered_usings(self, diagnostics: Iterable[Diagnostic]) -> int:
        """Number of usings in the block touched by any unused diagnostic."""
        lines: set[int] = set()
        for diagnostic in unused_diagnostics(diagnostics):
            lines.update(diagnostic.lines())
        return sum(
            1
            for index, stmt in enumerate(self.block.statements)
            if stmt.is_actual_using() and self.block.file_line_of(index) in lines
        )


class UnusedRemover:
    """Decide which statements of a block to drop."""

    def __init__(self, options: FormatOptions) -> None:
        self.options = options
        self.tracker = ConditionalRegionTracker()

    def removable_indices(self, block: UsingBlock, diagnostics: Iterable[Diagnostic]) -> set[int]:
        if self.options.disable_unused_removal:
            logger.debug("Unused using removal is disabled")
            return set()

        indices = DiagnosticLineMapper(block).unused_indices(diagnostics)

        if not self.options.process_conditional_regions and indices:
            ranges = self.tracker.find_ranges(block.statements)
            kept = {i for i in indices if self.tracker.in_ranges(i, ranges)}
            if kept:
                logger.debug("Preserving %d line(s) inside conditional regions", len(kept))
            indices -= kept

        return {i for i in indices if block.statements[i].is_actual_using()}

    def remove(self, block: UsingBlock, diagnostics: Iterable[Diagnostic] = ()) -> list[UsingStatement]:
        """Return the block's statements without the removable ones."""
        indices = self.removable_indices(block, diagnostics)
        if indices:
            logger.debug("Removing %d unused using(s) at block line(s) %s", len(indices), sorted(indices))
        return [stmt for i, stmt in enumerate(block.statements) if i not in indices]
