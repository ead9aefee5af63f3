"""CLI for converting USX/USFM/SFM scripture files to CSV."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from usxcsv.config import settings
from usxcsv.errors import ConversionError
from usxcsv.export.converter import convert_paths
from usxcsv.schemas import ErrorReport

LOG_FORMAT = "%(levelname)-5.5s [%(name)s] %(message)s"

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="usxcsv",
        description="Convert USX/USFM/SFM scripture files to verse-level CSV",
    )
    parser.add_argument(
        "inputs",
        nargs="*",
        help="Files, folders or wildcards (comma-separated lists allowed)",
    )
    parser.add_argument(
        "-i",
        "--input",
        "-input",
        dest="extra_inputs",
        action="append",
        default=[],
        metavar="PATH",
        help="Additional input; may be repeated",
    )
    parser.add_argument(
        "-o",
        "--output",
        "-output",
        type=Path,
        default=settings.output_dir,
        help="Output folder (default: next to each input)",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        "-quiet",
        action="store_true",
        help="Only log warnings and errors",
    )
    parser.add_argument(
        "--json",
        "-json",
        action="store_true",
        help="Print a JSON summary instead of a completion message",
    )
    return parser


def configure_logging(quiet: bool) -> None:
    level = logging.WARNING if quiet else settings.log_level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    inputs = [*args.inputs, *args.extra_inputs]
    if not inputs:
        parser.print_help()
        return 0

    configure_logging(args.quiet)

    try:
        summary = convert_paths(
            inputs,
            output_folder=args.output,
            encoding=settings.csv_encoding,
        )
    except ConversionError as e:
        if args.json:
            print(ErrorReport(error=str(e)).model_dump_json(indent=2))
        else:
            logger.error(str(e))
        return 1

    if args.json:
        print(summary.model_dump_json(indent=2))
    else:
        print("All conversions completed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
