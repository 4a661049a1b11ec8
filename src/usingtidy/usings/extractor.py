"""Find using blocks in C# source text and splice rewritten blocks back in.

A block is a maximal run of using, comment, blank and conditional-directive
lines that contains at least one using. The run is split into:

- leading content: lines before the first using or directive
- statements: from the first using or directive to the last one, followed
  by every blank line up to the terminating line

The trailing blank lines are always captured as a whole, so a rewritten
block replaces exactly the same span on every run. Comments after the last
using are left outside the block; they belong to the code that follows.
"""
from __future__ import annotations

import logging
from typing import Sequence

from usingtidy.usings.block import UsingBlock
from usingtidy.usings.statement import UsingStatement

logger = logging.getLogger(__name__)

BOM = "\ufeff"


def _split_lines(source: str, line_ending: str) -> list[str]:
    """Split ``source`` into lines, ignoring a leading byte order mark."""
    if source.startswith(BOM):
        source = source[len(BOM) :]
    return source.split(line_ending)


def detect_line_ending(text: str) -> str:
    """Return ``"\\r\\n"`` if the text uses CRLF, otherwise ``"\\n"``."""
    return "\r\n" if "\r\n" in text else "\n"


class UsingBlockExtractor:
    """Extract using blocks from source code."""

    def extract(self, source: str, line_ending: str = "\n") -> list[UsingBlock]:
        """Extract all using blocks from ``source`` in file order."""
        lines = _split_lines(source, line_ending)
        parsed = [UsingStatement.parse(line) for line in lines]
        blocks: list[UsingBlock] = []

        i = 0
        while i < len(parsed):
            if not parsed[i].is_block_line():
                i += 1
                continue

            run_start = i
            while i < len(parsed) and parsed[i].is_block_line():
                i += 1
            block = self._build_block(lines, parsed, run_start, i)
            if block is not None:
                blocks.append(block)

        logger.debug("Extracted %d using block(s)", len(blocks))
        return blocks

    def _build_block(
        self,
        lines: list[str],
        parsed: list[UsingStatement],
        run_start: int,
        run_end: int,
    ) -> UsingBlock | None:
        run = parsed[run_start:run_end]
        if not any(s.is_actual_using() for s in run):
            return None

        first = next(k for k, s in enumerate(run) if s.is_actual_using() or s.is_directive)
        last = max(k for k, s in enumerate(run) if s.is_actual_using() or s.is_directive)

        end = last + 1
        while end < len(run) and run[end].is_blank:
            end += 1

        first_using = next(s for s in run if s.is_actual_using())
        indent = first_using.raw_text[: len(first_using.raw_text) - len(first_using.raw_text.lstrip())]

        end_line = run_start + end - 1
        return UsingBlock(
            start_line=run_start,
            end_line=end_line,
            leading_content=tuple(lines[run_start : run_start + first]),
            statements=tuple(run[first:end]),
            indent=indent,
            at_end_of_file=end_line == len(lines) - 1,
        )

    def replace(
        self,
        source: str,
        line_ending: str,
        rewritten: Sequence[tuple[UsingBlock, list[str]]],
    ) -> str:
        """Replace each block's span with its new lines.

        Parameters
        ----------
        source : str
            The text the blocks were extracted from.
        line_ending : str
            Line terminator used for both splitting and joining.
            A leading byte order mark is kept in place.
        rewritten : Sequence[tuple[UsingBlock, list[str]]]
            Pairs of (original block, replacement lines).
        """
        lines = _split_lines(source, line_ending)
        for block, new_lines in sorted(rewritten, key=lambda pair: pair[0].start_line, reverse=True):
            lines[block.start_line : block.end_line + 1] = new_lines
        text = line_ending.join(lines)
        return BOM + text if source.startswith(BOM) else text
