"""Organize the using directives of a C# document.

Pipeline, run once per block:

1. extract blocks from the document text
2. remove usings confirmed unused by the analyzer
3. sort and deduplicate
4. insert group separators
5. serialize and splice back into the document

The pipeline is pure: it takes text plus an immutable diagnostics snapshot
and returns an OrganizeResult. Only ``organize_file`` touches the disk.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from usingtidy.core.diff import generate_diff
from usingtidy.core.options import FormatOptions
from usingtidy.core.results import ErrorResult, OrganizeResult, Result
from usingtidy.usings.block import UsingBlock
from usingtidy.usings.diagnostics import Diagnostic, diagnostics_reliable
from usingtidy.usings.extractor import UsingBlockExtractor, detect_line_ending
from usingtidy.usings.grouping import UsingGroupSplitter
from usingtidy.usings.remover import DiagnosticLineMapper, UnusedRemover
from usingtidy.usings.sorter import UsingSorter

logger = logging.getLogger(__name__)


class UsingOrganizer:
    """Sort, group, deduplicate and clean up using directives.

    Parameters
    ----------
    options : FormatOptions | None
        Formatting options. Defaults to ``FormatOptions()``.
    """

    def __init__(self, options: FormatOptions | None = None) -> None:
        self.options = options or FormatOptions()
        self.extractor = UsingBlockExtractor()
        self.remover = UnusedRemover(self.options)
        self.sorter = UsingSorter(self.options)
        self.splitter = UsingGroupSplitter(self.options)

    def _removal_allowed(self, blocks: list[UsingBlock], diagnostics: tuple[Diagnostic, ...]) -> bool:
        if self.options.disable_unused_removal or not diagnostics:
            return False
        if not self.options.check_reliability:
            return True

        total = sum(block.using_count() for block in blocks)
        flagged = sum(DiagnosticLineMapper(block).covered_usings(diagnostics) for block in blocks)
        logger.debug("Total usings in document: %d, flagged unused: %d", total, flagged)
        if not diagnostics_reliable(diagnostics, total, flagged, self.options):
            logger.info("Diagnostics are not reliable yet; skipping unused using removal")
            return False
        return True

    def organize_text(
        self,
        text: str,
        diagnostics: Iterable[Diagnostic] = (),
        line_ending: str | None = None,
    ) -> OrganizeResult:
        """Organize the usings in a whole document.

        Parameters
        ----------
        text : str
            The document content.
        diagnostics : Iterable[Diagnostic]
            Analyzer diagnostics for this document. Empty means nothing is
            removed.
        line_ending : str | None
            ``"\\n"`` or ``"\\r\\n"``. Detected from ``text`` if omitted.

        Returns
        -------
        OrganizeResult
            CHANGED with the new content, NO_CHANGE, or FAILED with the
            original text left untouched.
        """
        try:
            eol = line_ending or detect_line_ending(text)
            snapshot = tuple(diagnostics)

            blocks = self.extractor.extract(text, eol)
            if not blocks:
                return OrganizeResult.no_change("No using blocks found")

            remove_unused = self._removal_allowed(blocks, snapshot)

            rewritten: list[tuple[UsingBlock, list[str]]] = []
            removed = 0
            for number, block in enumerate(blocks, start=1):
                logger.debug(
                    "Processing using block %d of %d (lines %d-%d, %d statement(s))",
                    number, len(blocks), block.start_line, block.end_line, len(block.statements),
                )
                if remove_unused:
                    cleaned = self.remover.remove(block, snapshot)
                    removed += len(block.statements) - len(cleaned)
                else:
                    cleaned = list(block.statements)
                statements = self.splitter.split(self.sorter.sort(cleaned))
                rewritten.append((block, block.to_lines(statements)))

            new_text = self.extractor.replace(text, eol, rewritten)
        except Exception as e:
            logger.exception("Failed to organize usings")
            return OrganizeResult.failed(f"Failed to organize usings: {e}", exception=e)

        if new_text == text:
            return OrganizeResult.no_change()
        message = f"Organized usings ({removed} unused removed)" if removed else "Organized usings"
        return OrganizeResult.changed(new_text, message=message, removed=removed)

    def organize_file(
        self,
        path: Path | str,
        diagnostics: Iterable[Diagnostic] = (),
        dry_run: bool = False,
    ) -> Result:
        """Organize usings in a file on disk.

        Parameters
        ----------
        path : Path | str
            Path to the C# file.
        diagnostics : Iterable[Diagnostic]
            Analyzer diagnostics for this file.
        dry_run : bool
            Report the change and its diff without writing the file.

        Returns
        -------
        Result
            Result of the operation, with the diff of any change.
        """
        path = Path(path)
        if not path.exists():
            return ErrorResult(message=f"File not found: {path}", operation="organize_usings", target_repr=str(path))

        try:
            with open(path, encoding="utf-8", newline="") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            return ErrorResult(
                message=f"Failed to read file: {e}",
                exception=e,
                operation="organize_usings",
                target_repr=str(path),
            )

        result = self.organize_text(content, diagnostics)
        if not result.success:
            return ErrorResult(
                message=f"{result.message} ({path})",
                exception=result.exception,
                operation="organize_usings",
                target_repr=str(path),
            )
        if not result.has_changes():
            return Result(success=True, message=f"Usings already organized in {path}")

        diff = generate_diff(content, result.content, path)

        if dry_run:
            return Result(
                success=True,
                message=f"[DRY RUN] Would organize usings in {path}",
                files_changed=[path],
                data=result,
                diff=diff,
                diffs={path: diff},
            )

        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(result.content)
        return Result(
            success=True,
            message=f"Organized usings in {path}",
            files_changed=[path],
            data=result,
            diff=diff,
            diffs={path: diff},
        )
