"""Result types for all operations.

This module defines the core result classes:
- Result - Base result for all operations
- ErrorResult - Result for failed operations
- BatchResult - Aggregate result for batch operations
- OrganizeResult - Result of organizing the usings of one document
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Iterator


@dataclass
class Result:
    """Base result for all operations.

    Operations never raise exceptions. Instead, they return Result objects
    that indicate success or failure.

    Attributes:
        success: Whether the operation succeeded
        message: Human-readable description of what happened
        files_changed: List of files that were modified
        data: Optional payload for operations that return data
        diff: Combined unified diff of all changes (if any)
        diffs: Per-file diffs mapping path to diff string
    """

    success: bool
    message: str
    files_changed: list[Path] = field(default_factory=list)
    data: Any = None
    diff: str | None = None
    diffs: dict[Path, str] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return self.success


@dataclass
class ErrorResult(Result):
    """Result for failed operations - never raises automatically.

    Attributes:
        exception: The original exception, if any
        operation: Name of the attempted operation
        target_repr: String representation of the target
    """

    success: bool = field(default=False, init=False)
    exception: Exception | None = None
    operation: str = ""
    target_repr: str = ""

    def raise_if_error(self) -> None:
        """Explicitly re-raise the exception if the programmer wants to."""
        if self.exception:
            raise self.exception
        raise RuntimeError(self.message)


class OrganizeStatus(Enum):
    """Terminal state of an organize run."""

    CHANGED = "changed"
    NO_CHANGE = "no_change"
    FAILED = "failed"


@dataclass
class OrganizeResult(Result):
    """Result of organizing the usings of a single document.

    ``content`` holds the rewritten text only when ``status`` is CHANGED.
    Callers use ``has_changes()`` to avoid issuing a no-op edit.

    Attributes:
        status: CHANGED, NO_CHANGE or FAILED
        content: The rewritten document text
        exception: The exception behind a FAILED status
        removed: Number of usings removed as unused
    """

    status: OrganizeStatus = OrganizeStatus.NO_CHANGE
    content: str = ""
    exception: Exception | None = None
    removed: int = 0

    @classmethod
    def changed(cls, content: str, message: str = "Organized usings", removed: int = 0) -> OrganizeResult:
        return cls(success=True, message=message, status=OrganizeStatus.CHANGED, content=content, removed=removed)

    @classmethod
    def no_change(cls, message: str = "No changes needed") -> OrganizeResult:
        return cls(success=True, message=message, status=OrganizeStatus.NO_CHANGE)

    @classmethod
    def failed(cls, message: str, exception: Exception | None = None) -> OrganizeResult:
        return cls(success=False, message=message, status=OrganizeStatus.FAILED, exception=exception)

    def has_changes(self) -> bool:
        """Returns true if the document text was changed."""
        return self.status is OrganizeStatus.CHANGED

    def raise_if_error(self) -> None:
        """Re-raise the exception behind a failed run, if any."""
        if self.status is not OrganizeStatus.FAILED:
            return
        if self.exception:
            raise self.exception
        raise RuntimeError(self.message)


@dataclass
class BatchResult:
    """Aggregate result for operations applied to multiple files."""

    results: list[Result] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True if all operations succeeded."""
        return all(r.success for r in self.results)

    @property
    def failed(self) -> list[Result]:
        """Results that failed."""
        return [r for r in self.results if not r.success]

    @property
    def files_changed(self) -> list[Path]:
        """All files changed across all operations."""
        files: list[Path] = []
        for r in self.results:
            files.extend(r.files_changed)
        return sorted(set(files))

    @property
    def diff(self) -> str | None:
        """Combined diff from all results."""
        from usingtidy.core.diff import combine_diffs

        all_diffs = self.diffs
        if not all_diffs:
            return None
        return combine_diffs(all_diffs)

    @property
    def diffs(self) -> dict[Path, str]:
        """Merged diffs from all results."""
        merged: dict[Path, str] = {}
        for r in self.results:
            merged.update(r.diffs)
        return merged

    def __bool__(self) -> bool:
        return self.success

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self) -> Iterator[Result]:
        return iter(self.results)
