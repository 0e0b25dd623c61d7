"""
CLI entrypoint for contextify package.
"""
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from colorama import just_fix_windows_console

from . import __version__, console
from .core import generate_report
from .exceptions import ContextifyError
from .rules import DEFAULT_OUTPUT_NAME


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="contextify",
        description="Generate a single text file containing a project tree + file contents.",
    )
    p.add_argument(
        "root",
        nargs="?",
        type=Path,
        default=Path("."),
        help="Path to the target folder (default: current directory)",
    )
    p.add_argument(
        "output",
        nargs="?",
        type=Path,
        default=Path(DEFAULT_OUTPUT_NAME),
        help=f"Output file (default: {DEFAULT_OUTPUT_NAME})",
    )
    p.add_argument(
        "-f",
        "--filter",
        action="append",
        metavar="PATTERNS",
        help="Additional patterns to filter, separated by commas (repeatable)",
    )
    p.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to a file with extra ignore patterns (gitignore syntax, one per line)",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    just_fix_windows_console()
    try:
        ns = _parse_args(argv)
        generate_report(
            ns.root,
            ns.output,
            filters=ns.filter,
            config_path=ns.config,
            verbose=ns.verbose,
        )
    except ContextifyError as e:
        console.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nCancelled.", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
