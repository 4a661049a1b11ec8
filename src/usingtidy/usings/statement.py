"""Line-level model of a using block.

Every physical line in or around a using block is parsed into a
UsingStatement with exactly one StatementKind:

- REGULAR_USING - ``using System.Text;``, ``global using static System.Math;``
- ALIAS_USING - ``using Json = Newtonsoft.Json;``
- COMMENT - ``// ...`` or a one-line ``/* ... */``
- CONDITIONAL_DIRECTIVE - ``#if``, ``#elif``, ``#else``, ``#endif``,
  ``#region``, ``#endregion``
- BLANK_LINE - whitespace only
- OTHER - anything else; never part of a block
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from enum import Enum

CONDITIONAL_KEYWORDS = ("if", "elif", "else", "endif", "region", "endregion")

_DIRECTIVE_RE = re.compile(r"^#\s*(if|elif|else|endif|region|endregion)\b")

# Block comments, then an optional line comment, after the semicolon
_TRAILING_COMMENT = r"\s*(?P<comment>(?:/\*(?:(?!\*/).)*\*/\s*)*(?://.*)?)$"

_ALIAS_RE = re.compile(
    r"^(?:(?P<global>global)\s+)?using\s+(?P<alias>@?[A-Za-z_]\w*)\s*=\s*"
    r"(?P<target>[^;=]+?)\s*;" + _TRAILING_COMMENT
)

_REGULAR_RE = re.compile(
    r"^(?:(?P<global>global)\s+)?using\s+(?:(?P<static>static)\s+)?"
    r"(?P<path>(?:global\s*::\s*)?@?[A-Za-z_]\w*(?:\s*\.\s*@?[A-Za-z_]\w*)*(?:\s*<[^;]*>)?)"
    r"\s*;" + _TRAILING_COMMENT
)


class StatementKind(Enum):
    """Kind of a single line in a using block."""

    REGULAR_USING = "regular_using"
    ALIAS_USING = "alias_using"
    COMMENT = "comment"
    CONDITIONAL_DIRECTIVE = "conditional_directive"
    BLANK_LINE = "blank_line"
    OTHER = "other"


def _normalize_path(text: str) -> str:
    """Collapse whitespace inside a namespace or type path."""
    text = re.sub(r"\s*::\s*", "::", text.strip())
    text = re.sub(r"\s*\.\s*", ".", text)
    text = re.sub(r"\s*<\s*", "<", text)
    text = re.sub(r"\s*>", ">", text)
    text = re.sub(r"\s*,\s*", ", ", text)
    return re.sub(r"\s+", " ", text)


def _root_of(namespace: str) -> str:
    if namespace.startswith("global::"):
        namespace = namespace[len("global::"):]
    return namespace.split("<", 1)[0].split(".", 1)[0]


def _is_comment(trimmed: str) -> bool:
    if trimmed.startswith("//"):
        return True
    return trimmed.startswith("/*") and trimmed.endswith("*/") and len(trimmed) >= 4


@dataclass(frozen=True)
class UsingStatement:
    """A single parsed line.

    Attributes
    ----------
    raw_text : str
        The line exactly as it appeared in the source. Not part of equality,
        so a re-parsed canonical rendering compares equal to the original.
    kind : StatementKind
        What the line is.
    namespace : str
        Right-hand side for aliases, the whole path for regular usings,
        empty for everything else.
    root_namespace : str
        First dot-separated segment of ``namespace``.
    alias : str
        Alias name for alias usings.
    is_static : bool
        ``using static``.
    is_global : bool
        ``global using``.
    directive : str
        Keyword of a conditional directive (``if``, ``endregion``...).
    trailing_comment : str
        A ``// ...`` or ``/* ... */`` comment on the same line as a using.
    attached_comments : tuple[UsingStatement, ...]
        Comments that travel with this using when it is reordered.
    """

    raw_text: str = field(compare=False)
    kind: StatementKind
    namespace: str = ""
    root_namespace: str = ""
    alias: str = ""
    is_static: bool = False
    is_global: bool = False
    directive: str = ""
    trailing_comment: str = ""
    attached_comments: tuple[UsingStatement, ...] = ()

    @classmethod
    def parse(cls, line: str) -> UsingStatement:
        """Parse one line of source text."""
        trimmed = line.strip()

        if not trimmed:
            return cls(line, StatementKind.BLANK_LINE)

        match = _DIRECTIVE_RE.match(trimmed)
        if match:
            return cls(line, StatementKind.CONDITIONAL_DIRECTIVE, directive=match.group(1))

        match = _ALIAS_RE.match(trimmed)
        if match:
            namespace = _normalize_path(match.group("target"))
            return cls(
                line,
                StatementKind.ALIAS_USING,
                namespace=namespace,
                root_namespace=_root_of(namespace),
                alias=match.group("alias"),
                is_global=match.group("global") is not None,
                trailing_comment=(match.group("comment") or "").strip(),
            )

        match = _REGULAR_RE.match(trimmed)
        if match:
            namespace = _normalize_path(match.group("path"))
            return cls(
                line,
                StatementKind.REGULAR_USING,
                namespace=namespace,
                root_namespace=_root_of(namespace),
                is_static=match.group("static") is not None,
                is_global=match.group("global") is not None,
                trailing_comment=(match.group("comment") or "").strip(),
            )

        if _is_comment(trimmed):
            return cls(line, StatementKind.COMMENT)

        return cls(line, StatementKind.OTHER)

    @classmethod
    def blank_line(cls) -> UsingStatement:
        return cls("", StatementKind.BLANK_LINE)

    @property
    def is_blank(self) -> bool:
        return self.kind is StatementKind.BLANK_LINE

    @property
    def is_comment(self) -> bool:
        return self.kind is StatementKind.COMMENT

    @property
    def is_directive(self) -> bool:
        return self.kind is StatementKind.CONDITIONAL_DIRECTIVE

    @property
    def is_alias(self) -> bool:
        return self.kind is StatementKind.ALIAS_USING

    def is_actual_using(self) -> bool:
        """True for regular and alias usings only."""
        return self.kind in (StatementKind.REGULAR_USING, StatementKind.ALIAS_USING)

    def is_block_line(self) -> bool:
        """True if the line may appear inside a using block."""
        return self.kind is not StatementKind.OTHER

    @property
    def dedup_key(self) -> tuple[bool, str, str, bool, bool] | None:
        """Key under which two usings are duplicates; None for non-usings."""
        if not self.is_actual_using():
            return None
        return (True, self.alias, self.namespace, self.is_static, self.is_global)

    def with_comments(self, comments: tuple[UsingStatement, ...] | list[UsingStatement]) -> UsingStatement:
        """Return a copy of this using with ``comments`` attached.

        Raises
        ------
        ValueError
            If this is not a using, or if any of ``comments`` is not a comment.
        """
        if not self.is_actual_using():
            raise ValueError(f"Only using statements can own comments: {self.raw_text!r}")
        for comment in comments:
            if not comment.is_comment:
                raise ValueError(f"Only comments can be attached: {comment.raw_text!r}")
        return replace(self, attached_comments=tuple(comments))

    def to_string(self) -> str:
        """Canonical single-line rendering, without indentation."""
        if self.kind is StatementKind.BLANK_LINE:
            return ""
        if self.kind is StatementKind.REGULAR_USING:
            parts = []
            if self.is_global:
                parts.append("global")
            parts.append("using")
            if self.is_static:
                parts.append("static")
            text = " ".join(parts) + f" {self.namespace};"
        elif self.kind is StatementKind.ALIAS_USING:
            prefix = "global using" if self.is_global else "using"
            text = f"{prefix} {self.alias} = {self.namespace};"
        else:
            return self.raw_text.strip()

        if self.trailing_comment:
            text += f" {self.trailing_comment}"
        return text

    def to_lines(self, indent: str = "") -> list[str]:
        """Render attached comments followed by the statement itself."""
        lines = [indent + comment.to_string() for comment in self.attached_comments]
        if self.kind is StatementKind.BLANK_LINE:
            lines.append("")
        elif self.kind is StatementKind.CONDITIONAL_DIRECTIVE:
            lines.append(self.raw_text.rstrip())
        else:
            lines.append(indent + self.to_string())
        return lines

    def __str__(self) -> str:
        return self.to_string()
