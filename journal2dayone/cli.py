"""Command line entry point.

Usage:
    journal2dayone <input> <output.zip> [--tz America/New_York] [--verbose]

``input`` is either the ZIP produced by Apple Journal's export or a folder
that already holds the extracted export.
"""

import argparse
import dataclasses
import logging
import sys
import tempfile
from pathlib import Path
from typing import List, Optional

from .archive import (
    extract_archive,
    find_entry_documents,
    locate_export_roots,
    write_dayone_archive,
)
from .errors import ConversionError, InputPathError
from .journal import ConversionSummary, JournalAggregator, convert_documents
from .markup import MarkupTransformer
from .media import MediaResolver
from .parser import EntryParser

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class ConversionOptions:
    input_path: Path
    output_path: Path
    time_zone: str = "UTC"
    verbose: bool = False


def parse_arguments(argv: Optional[List[str]] = None) -> ConversionOptions:
    parser = argparse.ArgumentParser(
        description="Convert an Apple Journal export into a Day One import archive."
    )
    parser.add_argument("input", help="Apple Journal export (.zip or extracted folder)")
    parser.add_argument("output", help="Day One ZIP file to write")
    parser.add_argument(
        "--tz",
        default="UTC",
        help="Olson time zone stored on every entry, e.g. America/New_York",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every step")
    args = parser.parse_args(argv)
    return ConversionOptions(
        input_path=Path(args.input),
        output_path=Path(args.output),
        time_zone=args.tz,
        verbose=args.verbose,
    )


def validate_input_path(input_path: Path) -> None:
    if not input_path.exists():
        raise InputPathError(f"Input '{input_path}' does not exist.")
    if input_path.is_file() and input_path.suffix.lower() != ".zip":
        raise InputPathError(f"Input '{input_path}' is not a zip archive or a folder.")


def convert_export(export_root: Path, options: ConversionOptions) -> ConversionSummary:
    entries, _ = locate_export_roots(export_root)
    parser = EntryParser(
        transformer=MarkupTransformer(),
        resolver=MediaResolver(),
        time_zone=options.time_zone,
    )
    aggregator = JournalAggregator()

    logger.info("Processing HTML entries from: %s", entries)
    summary = convert_documents(find_entry_documents(entries), parser, aggregator)

    logger.info("Creating Day One zip file: %s", options.output_path)
    write_dayone_archive(options.output_path, aggregator)
    return summary


def run(options: ConversionOptions) -> ConversionSummary:
    validate_input_path(options.input_path)
    if options.input_path.is_dir():
        return convert_export(options.input_path, options)

    with tempfile.TemporaryDirectory(prefix="applejournal_extract_") as tmp:
        logger.info("Unzipping %s to %s", options.input_path, tmp)
        extract_archive(options.input_path, Path(tmp))
        return convert_export(Path(tmp), options)


def main(argv: Optional[List[str]] = None) -> int:
    options = parse_arguments(argv)
    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )
    logger.info("Starting conversion from %s to %s", options.input_path, options.output_path)
    try:
        summary = run(options)
    except ConversionError as e:
        logger.error("Conversion failed: %s", e)
        return 1

    logger.info("Conversion complete: %s", summary)
    logger.info("Output written to: %s", options.output_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
