"""Command line interface for usingtidy."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from usingtidy.core.options import FormatOptions, find_config
from usingtidy.core.results import BatchResult
from usingtidy.core.tidy import UsingTidy
from usingtidy.usings.diagnostics import load_diagnostics


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="usingtidy",
        description="Sort, group, deduplicate and clean up C# using directives",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  usingtidy src/
  usingtidy Program.cs --diagnostics diagnostics.json
  usingtidy "src/**/*.cs" --check --diff
        """,
    )
    parser.add_argument(
        "paths",
        nargs="+",
        help="Files, directories or glob patterns to organize",
    )
    parser.add_argument(
        "--diagnostics",
        help="JSON file with analyzer diagnostics: a list, or an object mapping file paths to lists",
    )
    parser.add_argument(
        "--config",
        help="pyproject.toml to read [tool.usingtidy] from (default: nearest one)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Do not write files; exit with status 1 if any file would change",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Do not write files",
    )
    parser.add_argument(
        "--diff",
        action="store_true",
        help="Print a unified diff of the changes",
    )
    parser.add_argument(
        "--no-remove",
        action="store_true",
        help="Never remove usings flagged as unused",
    )
    parser.add_argument(
        "--no-split",
        action="store_true",
        help="Do not insert blank lines between namespace groups",
    )
    parser.add_argument(
        "--sort-order",
        help='Space-separated root namespaces to sort first (default: "System")',
    )
    parser.add_argument(
        "--verbose", "-v",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )
    return parser


def _load_options(args: argparse.Namespace) -> FormatOptions:
    config = Path(args.config) if args.config else find_config(args.paths[0])
    options = FormatOptions.from_pyproject(config) if config else FormatOptions()

    changes = {}
    if args.no_remove:
        changes["disable_unused_removal"] = True
    if args.no_split:
        changes["split_groups"] = False
    if args.sort_order is not None:
        changes["primary_sort_namespace"] = args.sort_order
    return options.with_changes(**changes) if changes else options


def main(argv: Sequence[str] | None = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        options = _load_options(args)
        diagnostics = load_diagnostics(args.diagnostics) if args.diagnostics else {}
    except (OSError, ValueError) as e:
        print(f"usingtidy: {e}", file=sys.stderr)
        return 2

    dry_run = args.dry_run or args.check
    batch = BatchResult()
    for path in args.paths:
        tidy = UsingTidy(path, dry_run=dry_run, options=options)
        if isinstance(diagnostics, dict):
            per_file = diagnostics
        elif len(tidy.files) == 1:
            per_file = {str(tidy.files[0]): diagnostics}
        else:
            print("usingtidy: a diagnostics list needs exactly one file; use a path mapping", file=sys.stderr)
            return 2
        batch.results.extend(tidy.organize(per_file))

    failed = batch.failed
    for result in failed:
        print(result.message, file=sys.stderr)
    if args.verbose:
        for result in batch:
            if result.success:
                print(result.message, file=sys.stderr)
    if args.diff and batch.diff:
        print(batch.diff)

    if failed:
        return 1
    if args.check and batch.files_changed:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
