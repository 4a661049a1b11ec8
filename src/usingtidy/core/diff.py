"""Unified diffs between original and organized file content."""
from __future__ import annotations

import difflib
from pathlib import Path


def generate_diff(
    original: str,
    modified: str,
    path: Path,
    context_lines: int = 3,
) -> str:
    """Generate unified diff between original and modified content.

    CRLF line endings are compared as-is; only a missing final newline is
    patched so the diff stays well-formed.

    Parameters
    ----------
    original : str
        Original file content.
    modified : str
        Modified file content.
    path : Path
        Path to the file (used in diff header).
    context_lines : int
        Number of context lines to include around changes.

    Returns
    -------
    str
        Unified diff string, or empty string if no changes.

    Examples
    --------
    >>> print(generate_diff("using B;\\nusing A;\\n", "using A;\\nusing B;\\n", Path("Foo.cs")))
    --- a/Foo.cs
    +++ b/Foo.cs
    @@ -1,2 +1,2 @@
    -using B;
    +using A;
    ...
    """
    if original == modified:
        return ""

    original_lines = original.splitlines(keepends=True)
    modified_lines = modified.splitlines(keepends=True)

    if original_lines and not original_lines[-1].endswith("\n"):
        original_lines[-1] += "\n"
    if modified_lines and not modified_lines[-1].endswith("\n"):
        modified_lines[-1] += "\n"

    diff = difflib.unified_diff(
        original_lines,
        modified_lines,
        fromfile=f"a/{path}",
        tofile=f"b/{path}",
        n=context_lines,
    )
    return "".join(diff)


def combine_diffs(diffs: dict[Path, str]) -> str:
    """Join per-file diffs into one string, ordered by path."""
    non_empty = {p: d for p, d in diffs.items() if d}
    if not non_empty:
        return ""
    return "\n".join(d for _, d in sorted(non_empty.items(), key=lambda x: str(x[0])))
