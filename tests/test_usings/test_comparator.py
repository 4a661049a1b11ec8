"""
Tests for usingtidy.usings.comparator module.
"""
from __future__ import annotations

from usingtidy.usings.comparator import UsingComparator
from usingtidy.usings.statement import UsingStatement


def parse_all(lines: list[str]) -> list[UsingStatement]:
    return [UsingStatement.parse(line) for line in lines]


def _sorted(primary: str, lines: list[str]) -> list[str]:
    comparator = UsingComparator(primary)
    return [s.namespace for s in sorted(parse_all(lines), key=comparator.key)]


class TestUsingComparator:
    """Tests for the using sort order."""

    def test_alphabetical_without_priority(self):
        assert _sorted("", ["using B;", "using A;"]) == ["A", "B"]

    def test_priority_namespace_first(self):
        """The priority root and its children sort before everything else."""
        result = _sorted("System", ["using Foo;", "using System.Text;", "using Microsoft;", "using System;"])

        assert result == ["System", "System.Text", "Foo", "Microsoft"]

    def test_multiple_priority_namespaces_in_list_order(self):
        result = _sorted("System Microsoft", ["using Zeta;", "using Microsoft.Extensions;", "using System;"])

        assert result == ["System", "Microsoft.Extensions", "Zeta"]

    def test_priority_matches_whole_root_only(self):
        """``SystemX`` does not share the ``System`` priority."""
        result = _sorted("System", ["using SystemX;", "using Alpha;", "using System;"])

        assert result == ["System", "Alpha", "SystemX"]

    def test_case_insensitive(self):
        assert _sorted("", ["using foo;", "using Bar;"]) == ["Bar", "foo"]

    def test_compare_returns_sign(self):
        comparator = UsingComparator("System")
        system, foo, again = parse_all(["using System;", "using Foo;", "  using System;"])

        assert comparator.compare(system, foo) == -1
        assert comparator.compare(foo, system) == 1
        assert comparator.compare(system, again) == 0

    def test_case_tie_break_puts_uppercase_first(self):
        """Namespaces differing only in case are ordered uppercase first."""
        assert _sorted("", ["using foo;", "using Foo;"]) == ["Foo", "foo"]
        assert _sorted("", ["using Foo.bar;", "using Foo.Bar;"]) == ["Foo.Bar", "Foo.bar"]
