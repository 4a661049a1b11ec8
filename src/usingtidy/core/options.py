"""Formatting options.

Options are an immutable snapshot taken once per run. They can be built
directly, from a mapping, or from the ``[tool.usingtidy]`` table of a
``pyproject.toml``::

    [tool.usingtidy]
    primary-sort-namespace = "System Microsoft"
    split-groups = true
    disable-unused-removal = false
    process-conditional-regions = false
    alias-placement = "bottom"
    static-placement = "intermixed"
"""
from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

# Python 3.11+ has tomllib built-in
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


class AliasPlacement(Enum):
    """Where alias usings go relative to regular usings."""

    TOP = "top"
    BOTTOM = "bottom"
    INTERMIXED = "intermixed"


class StaticPlacement(Enum):
    """Where ``using static`` directives go relative to regular usings."""

    INTERMIXED = "intermixed"
    BOTTOM = "bottom"
    GROUPED_WITH_NAMESPACE = "grouped_with_namespace"


# camelCase setting names of the VS Code extension
_LEGACY_KEYS = {
    "sortOrder": "primary_sort_namespace",
    "splitGroups": "split_groups",
    "disableUnusedUsingsRemoval": "disable_unused_removal",
    "processUsingsInPreprocessorDirectives": "process_conditional_regions",
    "usingStaticPlacement": "static_placement",
    "usingAliasPlacement": "alias_placement",
}


@dataclass(frozen=True)
class FormatOptions:
    """Configuration for one organize run.

    Attributes:
        primary_sort_namespace: Space-separated root namespaces sorted first
        split_groups: Insert blank lines between root namespace groups
        disable_unused_removal: Never remove usings flagged as unused
        process_conditional_regions: Allow removal inside #if/#region ranges
        alias_placement: Placement of alias usings
        static_placement: Placement of static usings
        check_reliability: Skip removal when diagnostics look premature
        reliability_threshold: "All unused" is only suspicious above this count
        language_source: Diagnostic source tag of the language analyzer
    """

    primary_sort_namespace: str = "System"
    split_groups: bool = True
    disable_unused_removal: bool = False
    process_conditional_regions: bool = False
    alias_placement: AliasPlacement = AliasPlacement.BOTTOM
    static_placement: StaticPlacement = StaticPlacement.INTERMIXED
    check_reliability: bool = True
    reliability_threshold: int = 3
    language_source: str = "csharp"

    def __post_init__(self) -> None:
        # Accept plain strings for the enum fields
        if not isinstance(self.alias_placement, AliasPlacement):
            object.__setattr__(self, "alias_placement", _to_enum(AliasPlacement, self.alias_placement))
        if not isinstance(self.static_placement, StaticPlacement):
            object.__setattr__(self, "static_placement", _to_enum(StaticPlacement, self.static_placement))
        if self.reliability_threshold < 0:
            raise ValueError(f"reliability_threshold must be >= 0, got {self.reliability_threshold}")

    def with_changes(self, **changes: Any) -> FormatOptions:
        """Return a copy with some fields replaced."""
        return replace(self, **changes)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> FormatOptions:
        """Build options from a mapping of setting names.

        Keys may be snake_case, kebab-case, or the VS Code extension camelCase
        setting names.

        Raises
        ------
        ValueError
            On unknown keys or invalid values.
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _LEGACY_KEYS.get(key, key.replace("-", "_"))
            if name not in known:
                raise ValueError(f"Unknown option: {key}")
            kwargs[name] = value
        return cls(**kwargs)

    @classmethod
    def from_pyproject(cls, path: Path | str) -> FormatOptions:
        """Load options from ``[tool.usingtidy]`` in a pyproject.toml.

        A missing file or table yields the defaults.
        """
        path = Path(path)
        if not path.is_file():
            return cls()
        with open(path, "rb") as f:
            data = tomllib.load(f)
        return cls.from_mapping(data.get("tool", {}).get("usingtidy", {}))


def _to_enum(enum_cls: type[Enum], value: Any) -> Any:
    text = str(value).strip()
    # groupedWithNamespace -> grouped_with_namespace
    camel = "".join(f"_{c.lower()}" if c.isupper() else c for c in text).lstrip("_")
    for candidate in (text.lower().replace("-", "_"), camel.replace("-", "_")):
        try:
            return enum_cls(candidate)
        except ValueError:
            continue
    choices = ", ".join(m.value for m in enum_cls)
    raise ValueError(f"Invalid {enum_cls.__name__} {value!r}; expected one of: {choices}")


def find_config(start: Path | str) -> Path | None:
    """Find the nearest pyproject.toml at or above ``start``."""
    current = Path(start).resolve()
    if current.is_file():
        current = current.parent
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None
