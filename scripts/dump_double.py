#!/usr/bin/env python3
"""Print the Python source generated for a test double.

Usage:
    poetry run python scripts/dump_double.py collections.abc.Iterator
    poetry run python scripts/dump_double.py mypkg.repo.Repository --stub
    poetry run python scripts/dump_double.py mypkg.repo.Repository --methods get,put -v
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure repo root is importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from doublegen.api import dump_double_source
from doublegen.exceptions import DoubleError


def main():
    parser = argparse.ArgumentParser(description="Dump generated test double source")
    parser.add_argument("type", help="Dotted name of the class or interface to double")
    parser.add_argument(
        "--stub",
        action="store_true",
        help="Generate a stub instead of a mock object",
    )
    parser.add_argument(
        "--methods",
        default=None,
        help="Comma-separated method names to double (default: all eligible)",
    )
    parser.add_argument("--class-name", default="", help="Explicit class name")
    parser.add_argument(
        "--no-clone",
        action="store_true",
        help="Do not proxy copy.copy to the original __copy__",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    methods = [m.strip() for m in args.methods.split(",")] if args.methods else []
    try:
        source = dump_double_source(
            args.type,
            mock_object=not args.stub,
            methods=methods,
            class_name=args.class_name,
            call_original_clone=not args.no_clone,
        )
    except DoubleError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)
    print(source)


if __name__ == "__main__":
    main()
