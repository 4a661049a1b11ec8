"""Using directive organization.

Provides the building blocks of the organize pipeline:
- Parsing lines into typed statements and extracting using blocks
- Sorting, deduplicating and grouping usings
- Removing usings reported unused by an analyzer, guarded against
  unresolved namespaces and conditional-compilation regions
"""
from __future__ import annotations

from usingtidy.usings.block import UsingBlock
from usingtidy.usings.comparator import UsingComparator
from usingtidy.usings.diagnostics import (
    Diagnostic,
    DiagnosticKind,
    diagnostic_from_dict,
    diagnostics_reliable,
    load_diagnostics,
    normalize_code,
)
from usingtidy.usings.directives import ConditionalRegionTracker, conditional_segments
from usingtidy.usings.extractor import UsingBlockExtractor, detect_line_ending
from usingtidy.usings.grouping import UsingGroupSplitter
from usingtidy.usings.organizer import UsingOrganizer
from usingtidy.usings.remover import DiagnosticLineMapper, UnusedRemover
from usingtidy.usings.sorter import UsingSorter, attach_comments
from usingtidy.usings.statement import StatementKind, UsingStatement

__all__ = [
    "ConditionalRegionTracker",
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticLineMapper",
    "StatementKind",
    "UnusedRemover",
    "UsingBlock",
    "UsingBlockExtractor",
    "UsingComparator",
    "UsingGroupSplitter",
    "UsingOrganizer",
    "UsingSorter",
    "UsingStatement",
    "attach_comments",
    "conditional_segments",
    "detect_line_ending",
    "diagnostic_from_dict",
    "diagnostics_reliable",
    "load_diagnostics",
    "normalize_code",
]
