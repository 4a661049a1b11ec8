"""Main UsingTidy class - entry point for organizing a set of C# files."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Mapping

from usingtidy.core.options import FormatOptions, find_config
from usingtidy.core.results import BatchResult, Result
from usingtidy.usings.diagnostics import Diagnostic
from usingtidy.usings.organizer import UsingOrganizer

logger = logging.getLogger(__name__)

_GLOB_CHARS = "*?["


def _split_glob(path_str: str) -> tuple[Path, str]:
    """Split a glob into the directory before its first wildcard and the rest.

    A pattern with no directory part, such as ``*.cs``, is relative to the
    current directory.
    """
    first = min((path_str.index(c) for c in _GLOB_CHARS if c in path_str), default=len(path_str))
    prefix = path_str[:first]
    if "/" not in prefix:
        return Path("."), path_str
    base = prefix.rsplit("/", 1)[0] or "/"
    return Path(base), path_str[len(base) :].lstrip("/")


class UsingTidy:
    """
    Organize usings across one or more C# files.

    Parameters
    ----------
    path : str | Path
        A directory path, file path, or glob pattern defining the files to work with.
        - Directory: All .cs files under this directory (recursive)
        - File: Just this single file
        - Glob pattern: All files matching the pattern (e.g., "src/**/*Controller.cs")
    dry_run : bool, optional
        If True, report what would change without writing files. Defaults to False.
    options : FormatOptions | None, optional
        Formatting options. If None, ``[tool.usingtidy]`` from the nearest
        pyproject.toml is used, falling back to the defaults.

    Examples
    --------
    >>> tidy = UsingTidy("src/", dry_run=True)
    >>> result = tidy.organize()
    >>> print(result.diff)
    """

    def __init__(self, path: str | Path, dry_run: bool = False, options: FormatOptions | None = None):
        self.path = Path(path) if isinstance(path, str) else path
        self.dry_run = dry_run
        self._options = options
        self._files: list[Path] | None = None
        self._root_path: Path | None = None

    @property
    def root(self) -> Path:
        """Resolved directory used as the base for relative paths."""
        if self._root_path is None:
            if self.path.is_file():
                self._root_path = self.path.parent.resolve()
            elif self.path.is_dir():
                self._root_path = self.path.resolve()
            else:
                # Glob pattern - use the base directory
                base, _ = _split_glob(str(self.path))
                self._root_path = base.resolve()
        return self._root_path

    @property
    def options(self) -> FormatOptions:
        if self._options is None:
            config = find_config(self.root)
            self._options = FormatOptions.from_pyproject(config) if config else FormatOptions()
            if config:
                logger.debug("Loaded options from %s", config)
        return self._options

    @property
    def files(self) -> list[Path]:
        """C# files in the working set, computed on first access."""
        if self._files is None:
            self._files = self._discover_files()
        return self._files

    def _discover_files(self) -> list[Path]:
        if self.path.is_file():
            return [self.path.resolve()]
        elif self.path.is_dir():
            return sorted(self.path.resolve().rglob("*.cs"))
        else:
            path_str = str(self.path)
            if any(c in path_str for c in _GLOB_CHARS):
                base_path, pattern = _split_glob(path_str)
                return sorted(p for p in base_path.resolve().glob(pattern) if p.is_file())
            return []

    def _diagnostics_for(
        self,
        path: Path,
        diagnostics: Mapping[str, Iterable[Diagnostic]],
    ) -> tuple[Diagnostic, ...]:
        for key, entries in diagnostics.items():
            candidate = Path(key)
            if not candidate.is_absolute():
                candidate = self.root / candidate
            if candidate.resolve() == path:
                return tuple(entries)
        return ()

    def organize_file(self, path: str | Path, diagnostics: Iterable[Diagnostic] = ()) -> Result:
        """Organize usings in a single file, relative to ``root`` if not absolute."""
        p = Path(path)
        if not p.is_absolute():
            p = self.root / p
        return UsingOrganizer(self.options).organize_file(p, diagnostics, dry_run=self.dry_run)

    def organize(self, diagnostics: Mapping[str, Iterable[Diagnostic]] | None = None) -> BatchResult:
        """Organize usings in every file of the working set.

        Parameters
        ----------
        diagnostics : Mapping[str, Iterable[Diagnostic]] | None
            Analyzer diagnostics keyed by file path (absolute or relative to
            ``root``). Files without an entry get no unused-using removal.

        Returns
        -------
        BatchResult
            One result per file.
        """
        organizer = UsingOrganizer(self.options)
        diagnostics = diagnostics or {}
        results = [
            organizer.organize_file(path, self._diagnostics_for(path, diagnostics), dry_run=self.dry_run)
            for path in self.files
        ]
        logger.info("Organized %d file(s), %d changed", len(results), len(BatchResult(results).files_changed))
        return BatchResult(results)
