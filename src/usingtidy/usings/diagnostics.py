"""Boundary adapter for analyzer diagnostics.

Diagnostics arrive from a language server or a JSON dump in a couple of
shapes. The code may be a bare string (``"CS8019"``) or a structured object
(``{"value": "IDE0005", "target": ...}``), and the range may be nested
(``range.start.line``) or flat (``start_line``). Everything is normalized
here into a frozen Diagnostic with a DiagnosticKind, so the rest of the
pipeline never inspects raw shapes.

Recognized codes:

- ``CS8019`` / ``IDE0005`` - unnecessary using directive (two analyzer
  generations)
- ``CS0246`` - type or namespace name could not be found
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterable, Mapping

if TYPE_CHECKING:
    from usingtidy.core.options import FormatOptions

logger = logging.getLogger(__name__)

UNUSED_DIRECTIVE_CODES = frozenset({"CS8019", "IDE0005"})
NAMESPACE_NOT_FOUND_CODES = frozenset({"CS0246"})


class DiagnosticKind(Enum):
    UNUSED_DIRECTIVE = "unused_directive"
    NAMESPACE_NOT_FOUND = "namespace_not_found"
    OTHER = "other"


@dataclass(frozen=True)
class Diagnostic:
    """A single analyzer diagnostic with zero-based line/column positions."""

    start_line: int
    end_line: int
    code: str = ""
    source: str = ""
    start_column: int = 0
    end_column: int = 0
    structured: bool = False

    @property
    def kind(self) -> DiagnosticKind:
        if self.code in UNUSED_DIRECTIVE_CODES:
            return DiagnosticKind.UNUSED_DIRECTIVE
        if self.code in NAMESPACE_NOT_FOUND_CODES:
            return DiagnosticKind.NAMESPACE_NOT_FOUND
        return DiagnosticKind.OTHER

    def lines(self) -> range:
        """Every file line covered by this diagnostic."""
        return range(self.start_line, max(self.start_line, self.end_line) + 1)


def normalize_code(code: Any) -> tuple[str, bool]:
    """Normalize a diagnostic code.

    Returns
    -------
    tuple[str, bool]
        The code as a string and whether it arrived in structured form.
    """
    if code is None:
        return "", False
    if isinstance(code, Mapping):
        return str(code.get("value", "")), True
    if hasattr(code, "value") and not isinstance(code, (str, int)):
        return str(code.value), True
    return str(code), False


def diagnostic_from_dict(data: Mapping[str, Any]) -> Diagnostic:
    """Build a Diagnostic from a language-server or flat dict.

    Raises
    ------
    ValueError
        If no line information can be found.
    """
    code, structured = normalize_code(data.get("code"))
    source = str(data.get("source") or "")

    if "range" in data:
        try:
            start = data["range"]["start"]
            end = data["range"]["end"]
            return Diagnostic(
                start_line=int(start["line"]),
                end_line=int(end["line"]),
                start_column=int(start.get("character", 0)),
                end_column=int(end.get("character", 0)),
                code=code,
                source=source,
                structured=structured,
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise ValueError(f"Malformed diagnostic range: {data.get('range')!r}") from e

    if "start_line" in data:
        start_line = int(data["start_line"])
        return Diagnostic(
            start_line=start_line,
            end_line=int(data.get("end_line", start_line)),
            start_column=int(data.get("start_column", 0)),
            end_column=int(data.get("end_column", 0)),
            code=code,
            source=source,
            structured=structured,
        )

    raise ValueError(f"Diagnostic has no line information: {dict(data)!r}")


def _from_entries(entries: Iterable[Any]) -> tuple[Diagnostic, ...]:
    result: list[Diagnostic] = []
    for entry in entries:
        if isinstance(entry, Diagnostic):
            result.append(entry)
            continue
        try:
            result.append(diagnostic_from_dict(entry))
        except (ValueError, TypeError, AttributeError) as e:
            logger.debug("Skipping diagnostic: %s", e)
    return tuple(result)


def _entry_list(entries: Any, path: str | None = None) -> list | tuple:
    if isinstance(entries, (list, tuple)):
        return entries
    where = f" for {path}" if path else ""
    raise ValueError(f"Diagnostics{where} must be a list or an object of lists, got {type(entries).__name__}")


def load_diagnostics(source: Path | str | Any) -> tuple[Diagnostic, ...] | dict[str, tuple[Diagnostic, ...]]:
    """Load diagnostics from a JSON file or already-decoded data.

    A JSON list yields a tuple of diagnostics for a single file. A JSON
    object maps file paths to lists and yields a dict of tuples. Anything
    else raises ValueError.
    """
    if isinstance(source, (str, Path)):
        data = json.loads(Path(source).read_text())
    else:
        data = source

    if isinstance(data, Mapping):
        return {str(path): _from_entries(_entry_list(entries, str(path))) for path, entries in data.items()}
    return _from_entries(_entry_list(data))


def unused_diagnostics(diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
    return [d for d in diagnostics if d.kind is DiagnosticKind.UNUSED_DIRECTIVE]


def not_found_lines(diagnostics: Iterable[Diagnostic]) -> set[int]:
    """File lines carrying a namespace-not-found error."""
    lines: set[int] = set()
    for d in diagnostics:
        if d.kind is DiagnosticKind.NAMESPACE_NOT_FOUND:
            lines.update(d.lines())
    return lines


def diagnostics_reliable(
    diagnostics: Iterable[Diagnostic],
    total_usings: int,
    flagged_usings: int,
    options: FormatOptions,
) -> bool:
    """Decide whether unused-using diagnostics can be trusted for this run.

    Diagnostics are considered premature when the language analyzer has not
    reported anything for the file yet, or when every using is flagged as
    unused and there are more than ``options.reliability_threshold`` of
    them. The latter typically happens while project references are still
    being loaded.
    """
    diagnostics = list(diagnostics)
    has_language = any(d.source == options.language_source or d.structured for d in diagnostics)
    if not has_language:
        logger.debug("No %s diagnostics found; analyzer may not have started", options.language_source)
        return False

    if flagged_usings == total_usings and total_usings > options.reliability_threshold:
        logger.debug("All %d usings are flagged unused; diagnostics appear premature", total_usings)
        return False

    return True
