"""Ordering of using statements."""
from __future__ import annotations

from usingtidy.usings.statement import UsingStatement


class UsingComparator:
    """Total order over using statements.

    Usings whose root namespace appears in the priority list come first, in
    list order. Everything else follows alphabetically by root namespace and
    then by full namespace, case-insensitively with a case-sensitive tie
    break. Combined with Python's stable sort, equal keys keep their
    original relative order.

    Parameters
    ----------
    primary_sort_namespace : str
        Space-separated root namespaces to sort first, e.g. ``"System Microsoft"``.
        Empty for no preference.
    """

    def __init__(self, primary_sort_namespace: str = "") -> None:
        self.priority_namespaces = primary_sort_namespace.split()

    def _rank(self, stmt: UsingStatement) -> int:
        try:
            return self.priority_namespaces.index(stmt.root_namespace)
        except ValueError:
            return len(self.priority_namespaces)

    def key(self, stmt: UsingStatement) -> tuple:
        """Sort key for ``sorted(..., key=comparator.key)``."""
        return (
            self._rank(stmt),
            stmt.root_namespace.lower(),
            stmt.namespace.lower(),
            stmt.namespace,
        )

    def compare(self, a: UsingStatement, b: UsingStatement) -> int:
        """Return -1, 0 or 1 like a classic ``cmp``."""
        ka, kb = self.key(a), self.key(b)
        return (ka > kb) - (ka < kb)
