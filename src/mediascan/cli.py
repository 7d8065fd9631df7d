"""CLI entry point for mediascan — I/O boundary only."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from mediascan import MediascanError, __version__
from mediascan.client import CollectingClient, ScannedItem
from mediascan.config import SKIPLIST_ENV, WHITELIST_ENV, load_config
from mediascan.logging_setup import setup_logging
from mediascan.scanner import MediaScanner, MediaScanResult

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser.

    Returns:
        argparse.ArgumentParser: Configured parser for the ``mediascan`` command.
    """
    parser = argparse.ArgumentParser(
        prog="mediascan",
        description="walk a directory tree and list media candidates, honoring "
        "skip lists, whitelist mode and .nomedia/.noscanandnomtp markers",
    )
    parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Root directory to scan (default: current directory)",
    )
    parser.add_argument(
        "--skip-list",
        default=None,
        dest="skip_list",
        help=f"Comma-separated directory paths to skip, each with a trailing "
        f"separator (default: ${SKIPLIST_ENV})",
    )
    parser.add_argument(
        "--whitelist",
        default=None,
        dest="whitelist_path",
        help=f"Whitelist file enabling whitelist mode (default: ${WHITELIST_ENV} "
        "or /sdcard/.mediascanner_whitelist)",
    )
    parser.add_argument(
        "--locale",
        default=None,
        help="Locale handed to the scan client",
    )
    parser.add_argument(
        "--csv",
        action="store_true",
        dest="csv_mode",
        help="Output as CSV (path, mtime, size, is_directory, no_media)",
    )
    parser.add_argument(
        "-F",
        "--files-only",
        action="store_true",
        dest="files_only",
        help="Omit directory entries from the output",
    )
    parser.add_argument(
        "--noreport",
        action="store_true",
        dest="no_report",
        help="Omit the directory/file count report at the end",
    )
    parser.add_argument(
        "--max-items",
        type=int,
        default=None,
        dest="max_items",
        help="Abort the scan once this many items were reported",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        dest="output_file",
        help="Write output to a file instead of stdout",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log skipped directories and marker hits",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        dest="log_file",
        help="Also write logs to this file",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run_mediascan(argv: list[str] | None = None) -> str:
    """Run mediascan with provided CLI args and return formatted output.

    This function is intentionally side-effect free and is the primary
    test target for CLI behavior.

    Args:
        argv: Command-line argument list without program name.

    Returns:
        str: Final rendered output.

    Raises:
        MediascanError: On any user-facing validation error or aborted scan.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    return _run_with_args(args)


def _resolve_root(directory: str) -> Path:
    """Validate that the directory argument is a directory.

    The path is kept as given so skip-list entries match what the user
    typed.

    Raises:
        MediascanError: If directory does not exist or is not a directory.
    """
    root = Path(directory)
    if not root.is_dir():
        raise MediascanError(f"'{directory}' is not a directory")
    return root


def _validate_options(args: argparse.Namespace) -> None:
    """Validate option values.

    Raises:
        MediascanError: If an option value is out of range.
    """
    if args.max_items is not None and args.max_items < 1:
        raise MediascanError("--max-items must be a positive integer")
    if args.csv_mode and args.no_report:
        raise MediascanError("--noreport is incompatible with --csv")


def _format_output(args: argparse.Namespace, items: list[ScannedItem]) -> str:
    if args.csv_mode:
        from mediascan.formatter.csv_ import CsvOptions, format_csv

        return format_csv(items, CsvOptions(files_only=args.files_only))

    from mediascan.formatter.listing import ListingOptions, format_listing

    return format_listing(
        items, ListingOptions(files_only=args.files_only, no_report=args.no_report)
    )


def _run_with_args(args: argparse.Namespace) -> str:
    """Run the scan/format pipeline for parsed arguments.

    Raises:
        MediascanError: On any user-facing validation error or aborted scan.
    """
    _validate_options(args)
    root = _resolve_root(args.directory)

    config = load_config(
        overrides={
            "skip_list": args.skip_list,
            "whitelist_path": args.whitelist_path,
            "locale": args.locale,
        }
    )
    scanner = MediaScanner.from_config(config)
    client = CollectingClient(max_items=args.max_items)

    result = scanner.scan(root, client)
    if result is MediaScanResult.ERROR:
        raise MediascanError(f"scan aborted after {len(client.items)} items")
    if result is MediaScanResult.SKIPPED:
        logger.warning("Scan of %s was skipped", root)

    return _format_output(args, client.items)


def main() -> None:
    """Run the CLI entry point with process arguments.

    Parses args exactly once and writes output to stdout or ``-o`` file.
    Exits with code 1 on user-facing errors.
    """
    parser = build_parser()
    args = parser.parse_args()  # single parse

    setup_logging("DEBUG" if args.verbose else "WARNING", args.log_file)

    try:
        output = _run_with_args(args)
    except MediascanError as exc:
        sys.stderr.write(f"mediascan: {exc}\n")
        sys.exit(1)

    if args.output_file:
        try:
            Path(args.output_file).write_text(output + "\n", encoding="utf-8", newline="")
        except OSError as exc:
            sys.stderr.write(f"mediascan: cannot write to '{args.output_file}': {exc}\n")
            sys.exit(1)
    else:
        sys.stdout.write(output + "\n")


if __name__ == "__main__":
    main()
