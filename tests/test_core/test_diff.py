"""
Tests for usingtidy.core.diff module.
"""
from __future__ import annotations

from pathlib import Path

from usingtidy.core.diff import combine_diffs, generate_diff


class TestGenerateDiff:
    """Tests for generate_diff()."""

    def test_no_changes(self):
        assert generate_diff("using A;\n", "using A;\n", Path("A.cs")) == ""

    def test_headers(self):
        diff = generate_diff("using B;\nusing A;\n", "using A;\nusing B;\n", Path("src/A.cs"))

        assert diff.startswith("--- a/src/A.cs\n+++ b/src/A.cs\n")
        assert "@@" in diff

    def test_missing_final_newline(self):
        """Every diff line ends with a newline even if the file does not."""
        diff = generate_diff("using B;", "using A;", Path("A.cs"))

        assert diff.endswith("+using A;\n")
        assert "-using B;\n" in diff


class TestCombineDiffs:
    """Tests for combine_diffs()."""

    def test_ordered_by_path(self):
        diffs = {Path("b.cs"): "diff b\n", Path("a.cs"): "diff a\n"}

        assert combine_diffs(diffs) == "diff a\n\ndiff b\n"

    def test_empty_diffs_skipped(self):
        assert combine_diffs({Path("a.cs"): "", Path("b.cs"): "diff b\n"}) == "diff b\n"
        assert combine_diffs({}) == ""
