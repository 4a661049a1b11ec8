"""
Shared pytest fixtures for the usingtidy test suite.

This module provides:
- Sample C# source fixtures with various using layouts
- Temporary project fixtures with .cs files on disk

Fixture Naming Convention:
- sample_* : Fixtures that provide sample content strings
- tmp_* : Fixtures that create temporary directories/files
"""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest


# =============================================================================
# Sample C# Code Fixtures
# =============================================================================

@pytest.fixture
def sample_unsorted_code() -> str:
    """
    C# file with an unsorted using block.

    Contains:
    - A header comment separated by a blank line
    - A comment attached to one using
    - Usings from two root namespaces, out of order
    """
    return textwrap.dedent('''\
        // Copyright (c) Contoso

        using Newtonsoft.Json;
        // Needed for LINQ queries
        using System.Linq;
        using System;

        namespace Contoso.App;

        public class Program
        {
        }
    ''')


@pytest.fixture
def sample_organized_code() -> str:
    """The organized form of sample_unsorted_code."""
    return textwrap.dedent('''\
        // Copyright (c) Contoso

        using System;
        // Needed for LINQ queries
        using System.Linq;

        using Newtonsoft.Json;

        namespace Contoso.App;

        public class Program
        {
        }
    ''')


@pytest.fixture
def sample_conditional_code() -> str:
    """
    C# file with a conditional-compilation region inside the using block.
    """
    return textwrap.dedent('''\
        using System;
        #if DEBUG
        using System.Diagnostics;
        #endif
        using Foo;

        namespace X;
    ''')


@pytest.fixture
def sample_messy_code() -> str:
    """
    C# file exercising most layout features at once.

    Contains:
    - Duplicates, aliases, static and global usings
    - Orphaned comments and a #region
    - Several blank lines before the namespace
    """
    return textwrap.dedent('''\
        global using System.Linq;
        using Zeta.Core;
        using static System.Math;
        // orphaned comment

        using Json = Newtonsoft.Json;
        using Alpha;
        using Zeta.Core;
        #region Extras
        using Extras.One;
        #endregion
        using System;



        namespace Messy
        {
            public class C { }
        }
    ''')


@pytest.fixture
def sample_nested_namespace_code() -> str:
    """C# file with usings inside a namespace body."""
    return textwrap.dedent('''\
        namespace X
        {
            using System.Text;
            using System;

            class C {}
        }
    ''')


@pytest.fixture
def sample_global_code() -> str:
    """
    C# file mixing global and local usings.

    Contains:
    - Global usings interleaved with local ones
    - A global static using with an attached comment
    """
    return textwrap.dedent('''\
        using System.Text;
        global using Zeta.Core;
        // shared helpers
        global using static Acme.Helpers;
        using Acme;
        global using System;

        namespace App;
    ''')


# =============================================================================
# Temporary Directory Fixtures
# =============================================================================

@pytest.fixture
def tmp_cs_project(tmp_path: Path, sample_unsorted_code: str, sample_organized_code: str) -> Path:
    """
    Create a temporary C# project structure.

    Structure:
    tmp_path/
    ├── src/
    │   ├── Program.cs     (sample_unsorted_code)
    │   ├── Clean.cs       (sample_organized_code)
    │   └── notes.txt
    └── tools/
        └── helper.py

    Returns the project root path (tmp_path).
    """
    src_dir = tmp_path / "src"
    src_dir.mkdir()
    tools_dir = tmp_path / "tools"
    tools_dir.mkdir()

    (src_dir / "Program.cs").write_text(sample_unsorted_code)
    (src_dir / "Clean.cs").write_text(sample_organized_code)
    (src_dir / "notes.txt").write_text("using B;\nusing A;\n")
    (tools_dir / "helper.py").write_text("import os\n")

    return tmp_path

