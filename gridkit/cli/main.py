"""Main entry point for the gridkit CLI."""
from __future__ import annotations

import logging
import sys
from pathlib import Path

from gridkit import __version__
from gridkit.cli.repl import Repl
from gridkit.config import settings
from gridkit.kernel.attributes import AttributeParseError
from gridkit.kernel.engine import GridEngine


def print_help():
    """Print help message."""
    print(f"""
gridkit v{__version__}

Usage:
  gridkit [options]

Options:
  --data FILE         JSON array of row objects
  --columns FILE      JSON array of column descriptors (default: keys of the first row)
  --page-size N       Rows per page (default: {settings.DEFAULT_PAGE_SIZE})
  --selectable MODE   Selection mode: none, single, multiple (default: single)
  --strict            Fail on malformed data/columns instead of showing an empty table
  -h, --help          Show this help
  -v, --version       Show version

Environment:
  GRIDKIT_PAGE_SIZE           Default rows per page
  GRIDKIT_STRICT_ATTRIBUTES   Same as --strict when "true"
  GRIDKIT_LOG_LEVEL           Log level (default: WARNING)

Examples:
  gridkit --data people.json
  gridkit --data people.json --columns columns.json --page-size 5 --selectable multiple
""")


def parse_args(args: list[str]) -> dict:
    """
    Parse command line arguments.

    Returns dict with:
        data: str | None
        columns: str | None
        page_size: str | None
        selectable: str
        strict: bool
        show_help: bool
        show_version: bool
    """
    result = {
        "data": None,
        "columns": None,
        "page_size": None,
        "selectable": "single",
        "strict": False,
        "show_help": False,
        "show_version": False,
    }
    valued = {
        "--data": "data",
        "--columns": "columns",
        "--page-size": "page_size",
        "--selectable": "selectable",
    }

    i = 0
    while i < len(args):
        arg = args[i]

        if arg in valued:
            if i + 1 < len(args):
                result[valued[arg]] = args[i + 1]
                i += 1
            else:
                print(f"Error: {arg} requires a value")
                sys.exit(1)
        elif arg == "--strict":
            result["strict"] = True
        elif arg in ("--help", "-h"):
            result["show_help"] = True
        elif arg in ("--version", "-v"):
            result["show_version"] = True
        elif arg.startswith("-"):
            print(f"Unknown option: {arg}")
            print("Run 'gridkit --help' for usage.")
            sys.exit(1)
        else:
            print(f"Unknown argument: {arg}")
            print("Run 'gridkit --help' for usage.")
            sys.exit(1)

        i += 1

    return result


def read_file(path: str) -> str:
    """Read a JSON file for an attribute; the engine parses it."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        print(f"Error: cannot read {path}: {e.strerror}")
        sys.exit(1)


def build_engine(args: dict) -> GridEngine:
    """Create an engine with every affordance on and the given attributes applied."""
    engine = GridEngine(strict=args["strict"] or None)
    for flag in ("sortable", "searchable", "pageable"):
        engine.set_attribute(flag, "")
    engine.set_attribute("selectable", args["selectable"])
    if args["page_size"] is not None:
        engine.set_attribute("page-size", args["page_size"])
    if args["data"]:
        engine.set_data(read_file(args["data"]))

    if args["columns"]:
        engine.set_columns(read_file(args["columns"]))
    elif engine.state.rows:
        engine.set_columns([{"key": key} for key in engine.state.rows[0]])

    return engine


def main():
    """Main entry point."""
    args = parse_args(sys.argv[1:])

    if args["show_help"]:
        print_help()
        return

    if args["show_version"]:
        print(f"gridkit {__version__}")
        return

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        engine = build_engine(args)
    except AttributeParseError as e:
        print(f"Error: {e}")
        sys.exit(1)

    Repl(engine).start()


if __name__ == "__main__":
    main()
