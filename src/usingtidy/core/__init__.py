"""
Core module.

Example
-------
>>> from usingtidy import UsingTidy
>>>
>>> # Organize every .cs file under a directory
>>> result = UsingTidy("src/").organize()
>>>
>>> # Preview without writing
>>> print(UsingTidy("src/", dry_run=True).organize().diff)
"""
from __future__ import annotations

from .options import AliasPlacement, FormatOptions, StaticPlacement, find_config
from .results import BatchResult, ErrorResult, OrganizeResult, OrganizeStatus, Result

__all__ = [
    "AliasPlacement",
    "BatchResult",
    "ErrorResult",
    "FormatOptions",
    "OrganizeResult",
    "OrganizeStatus",
    "Result",
    "StaticPlacement",
    "find_config",
]
