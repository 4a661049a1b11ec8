"""
usingtidy - Organize C# using directives.

Sorts, groups and deduplicates the using block at the top of a C# file and
optionally strips usings that an external analyzer reports as unused, while
preserving comments, conditional-compilation regions and line endings.
Running it twice gives the same result as running it once.

Example
-------
>>> from usingtidy import UsingOrganizer
>>>
>>> result = UsingOrganizer().organize_text("using B;\\nusing A;\\n")
>>> print(result.content)
using A;
<BLANKLINE>
using B;
<BLANKLINE>

Classes
-------
UsingTidy
    Entry point for organizing a set of files on disk.

UsingOrganizer
    Organizes a single document, as text or as a file.

FormatOptions
    Immutable formatting options, loadable from pyproject.toml.

Result
    Result class for all operations. Contains success status, message, and
    list of changed files. Operations never raise exceptions.

OrganizeResult
    Result of organizing one document: CHANGED, NO_CHANGE or FAILED.

BatchResult
    Aggregate result for operations applied to multiple files.
"""
from __future__ import annotations

from usingtidy.core import (
    AliasPlacement,
    BatchResult,
    ErrorResult,
    FormatOptions,
    OrganizeResult,
    OrganizeStatus,
    Result,
    StaticPlacement,
)
from usingtidy.usings import (
    Diagnostic,
    DiagnosticKind,
    UsingBlock,
    UsingOrganizer,
    UsingStatement,
    load_diagnostics,
)
from usingtidy.core.tidy import UsingTidy

__version__ = "0.1.0"

__all__ = [
    "AliasPlacement",
    "BatchResult",
    "Diagnostic",
    "DiagnosticKind",
    "ErrorResult",
    "FormatOptions",
    "OrganizeResult",
    "OrganizeStatus",
    "Result",
    "StaticPlacement",
    "UsingBlock",
    "UsingOrganizer",
    "UsingStatement",
    "UsingTidy",
    "load_diagnostics",
]
