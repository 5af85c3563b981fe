"""Command-line interface for mapsmi.

Reads mapped structure lines from a file or standard input, renumbers the
atom map numbers of each line and writes the result to a file or standard
output. Lines that fail are reported on standard error.
"""

import argparse
import logging
import sys
from contextlib import ExitStack
from typing import List, Optional

from mapsmi import __version__
from mapsmi.renumber import Renumberer
from mapsmi.stream import process_stream


def setup_logging(verbose: bool = False) -> None:
    """Set up logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mapsmi",
        description="Renumber atom map numbers of mapped structure lines to 1..N",
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="Input file (default: standard input)",
    )
    parser.add_argument(
        "-o", "--output",
        default="-",
        help="Output file (default: standard output)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject lines with duplicate atom map numbers",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    logger = logging.getLogger("mapsmi.cli")

    with ExitStack() as stack:
        if args.input == "-":
            source = sys.stdin
        else:
            source = stack.enter_context(open(args.input, encoding="utf-8"))
        if args.output == "-":
            sink = sys.stdout
        else:
            sink = stack.enter_context(open(args.output, "w", encoding="utf-8"))

        stats = process_stream(
            source,
            sink,
            sys.stderr,
            renumberer=Renumberer(strict=args.strict),
        )

    logger.info(
        f"Processed {stats.processed} lines, {stats.failed} failed"
    )
    return 0 if stats.ok else 1


if __name__ == "__main__":
    sys.exit(main())
