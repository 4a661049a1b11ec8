"""A contiguous using block and its re-serialization."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Sequence

from usingtidy.usings.statement import UsingStatement


@dataclass(frozen=True)
class UsingBlock:
    """A block of using statements found in a C# source file.

    Line numbers are zero-based and absolute within the file. They are only
    used to map diagnostics onto statements; the statements themselves are
    indexed block-locally.

    Attributes
    ----------
    start_line : int
        First file line of the block, including leading content.
    end_line : int
        Last file line of the block, including trailing blank lines.
    leading_content : tuple[str, ...]
        Raw lines before the first using or directive (header comments,
        blank lines). Re-emitted verbatim.
    statements : tuple[UsingStatement, ...]
        One statement per physical line, blank lines included, from the
        first using or directive to ``end_line``.
    indent : str
        Indentation applied to rendered usings and comments.
    at_end_of_file : bool
        True if no terminating line follows the block.
    """

    start_line: int
    end_line: int
    leading_content: tuple[str, ...] = ()
    statements: tuple[UsingStatement, ...] = ()
    indent: str = ""
    at_end_of_file: bool = False
    trailing_blank_count: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        count = 0
        for stmt in reversed(self.statements):
            if not stmt.is_blank:
                break
            count += 1
        object.__setattr__(self, "trailing_blank_count", count)

    @property
    def statements_start_line(self) -> int:
        """File line of ``statements[0]``."""
        return self.start_line + len(self.leading_content)

    def file_line_of(self, index: int) -> int:
        """File line of the statement at block-local ``index``."""
        return self.statements_start_line + index

    def index_of(self, file_line: int) -> int:
        """Block-local statement index for an absolute ``file_line``."""
        return file_line - self.start_line - len(self.leading_content)

    def using_count(self) -> int:
        """Number of actual usings (comments, directives and blanks excluded)."""
        return sum(1 for s in self.statements if s.is_actual_using())

    def with_statements(self, statements: Sequence[UsingStatement]) -> UsingBlock:
        return replace(self, statements=tuple(statements))

    def to_lines(self, statements: Sequence[UsingStatement] | None = None) -> list[str]:
        """Serialize the block back into lines.

        Parameters
        ----------
        statements : Sequence[UsingStatement] | None
            Rewritten statements to render in place of the block's own.

        Returns
        -------
        list[str]
            Leading content, rendered statements with surrounding blank lines
            stripped, then the trailer: exactly one blank line when code
            follows the block, or at most one at end of file.
        """
        if statements is None:
            statements = self.statements

        body: list[str] = []
        for stmt in statements:
            body.extend(stmt.to_lines(self.indent))

        while body and not body[-1].strip():
            body.pop()
        first = 0
        while first < len(body) and not body[first].strip():
            first += 1
        body = body[first:]

        lines = list(self.leading_content)
        lines.extend(body)

        if not body:
            # Everything was removed; keep the original trailer.
            trailer = self.trailing_blank_count if self.at_end_of_file else 0
        elif self.at_end_of_file:
            trailer = min(1, self.trailing_blank_count)
        else:
            trailer = 1
        lines.extend([""] * trailer)
        return lines
