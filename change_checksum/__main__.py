"""Entry point for the change checksum CLI."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import NoReturn

from change_checksum.config import Settings, get_settings
from change_checksum.core.checksum import Checksum
from change_checksum.core.errors import ChecksumError, ConfigurationError, ValidationError
from change_checksum.core.logging import configure_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CHANGED = 1
EXIT_VERSION_MISMATCH = 2
EXIT_IO_ERROR = 3
EXIT_INVALID = 4

STDIN_PATH = "-"


def _positive_int(raw: str) -> int:
    """Convert a CLI argument to an integer of at least 1."""
    try:
        value = int(raw)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid value: '{raw}': {e}") from e
    if value < 1:
        raise argparse.ArgumentTypeError(f"Invalid value: '{raw}': must be at least 1")
    return value


def _compute_from_args(args: argparse.Namespace, settings: Settings) -> Checksum:
    """Compute the checksum of the content selected on the command line.

    Args:
        args: Parsed command line arguments.
        settings: Active settings.

    Returns:
        Freshly computed checksum.

    Raises:
        ValidationError: If neither a path nor --text was given.
        OSError: If the input cannot be read.
    """
    if args.text is not None:
        return Checksum.compute_text(args.text)

    if args.path is None:
        raise ValidationError("Provide a PATH (or '-' for stdin) or --text")

    if args.raw:
        if args.path == STDIN_PATH:
            text = sys.stdin.read()
        else:
            text = Path(args.path).read_text(encoding="utf-8", errors="replace")
        return Checksum.compute_text(text)

    standardize = args.standardize
    if standardize is None:
        standardize = settings.standardize_line_endings
    chunk_size = args.chunk_size or settings.stream_chunk_size

    if args.path == STDIN_PATH:
        return Checksum.compute_stream(sys.stdin.buffer, standardize, chunk_size)
    with open(args.path, "rb") as stream:
        return Checksum.compute_stream(stream, standardize, chunk_size)


def run_compute(args: argparse.Namespace) -> int:
    """Print the checksum of a file, stdin or a string.

    Args:
        args: Parsed command line arguments.

    Returns:
        Exit code (0 for success, 3 for I/O errors, 4 for invalid input).
    """
    settings = get_settings()

    try:
        checksum = _compute_from_args(args, settings)
    except OSError as e:
        logger.error(f"Failed to read input: {e}", exc_info=args.verbose)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_IO_ERROR
    except ChecksumError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID

    print(checksum)
    return EXIT_OK


def run_parse(args: argparse.Namespace) -> int:
    """Show how a stored checksum string is interpreted.

    Args:
        args: Parsed command line arguments.

    Returns:
        Exit code (always 0, parsing never fails).
    """
    checksum = Checksum.parse(args.value)
    assert checksum is not None

    print(f"Version: {checksum.version}")
    print(f"Digest: {checksum.digest}")
    if checksum.is_current_version:
        print("Algorithm: current")
    else:
        print(f"Algorithm: outdated (current version is {Checksum.current_version()})")
    return EXIT_OK


def run_verify(args: argparse.Namespace) -> int:
    """Compare a stored checksum against the current content.

    A stored checksum from another algorithm version cannot be compared
    against a fresh one; that case gets its own exit code so the caller can
    decide whether to recompute and re-record it.

    Args:
        args: Parsed command line arguments.

    Returns:
        Exit code: 0 unchanged, 1 changed, 2 algorithm version mismatch,
        3 I/O error, 4 invalid input.
    """
    settings = get_settings()
    stored = Checksum.parse(args.stored)
    assert stored is not None

    try:
        actual = _compute_from_args(args, settings)
    except OSError as e:
        logger.error(f"Failed to read input: {e}", exc_info=args.verbose)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_IO_ERROR
    except ChecksumError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID

    if stored.version != actual.version:
        print(
            f"Stored checksum uses algorithm version {stored.version}, "
            f"current is {actual.version}. Recompute: {actual}"
        )
        return EXIT_VERSION_MISMATCH

    if stored == actual:
        print(f"Unchanged: {actual}")
        return EXIT_OK

    print(f"Changed: stored {stored}, actual {actual}")
    return EXIT_CHANGED


def _add_content_arguments(parser: argparse.ArgumentParser) -> None:
    """Register the arguments that select the content to checksum."""
    parser.add_argument(
        "path",
        nargs="?",
        help="File to checksum ('-' reads stdin)",
    )
    parser.add_argument(
        "--text",
        help="Checksum this string instead of a file",
    )
    parser.add_argument(
        "--raw",
        action="store_true",
        help="Read the file as UTF-8 text and apply full text normalization",
    )
    parser.add_argument(
        "--standardize",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Collapse CRLF and CR to LF while streaming (default from settings)",
    )
    parser.add_argument(
        "--chunk-size",
        type=_positive_int,
        default=None,
        help="Bytes read per chunk while streaming (default from settings)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="change-checksum",
        description="Versioned content checksums for change tracking",
    )
    parser.add_argument(
        "--version",
        "-V",
        action="store_true",
        help="Show version and exit",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        description="Available commands",
    )

    compute_parser = subparsers.add_parser(
        "compute",
        help="Print the checksum of a file, stdin or a string",
    )
    _add_content_arguments(compute_parser)

    parse_parser = subparsers.add_parser(
        "parse",
        help="Show the version and digest of a stored checksum",
    )
    parse_parser.add_argument(
        "value",
        help="Stored checksum string, e.g. 8:2cdf9876e74347162401315d34b83746",
    )

    verify_parser = subparsers.add_parser(
        "verify",
        help="Check content against a stored checksum",
    )
    verify_parser.add_argument(
        "stored",
        help="Previously stored checksum string",
    )
    _add_content_arguments(verify_parser)

    return parser


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point with subcommand support."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        from change_checksum import __version__

        print(f"change-checksum {__version__}")
        sys.exit(EXIT_OK)

    try:
        settings = get_settings()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_INVALID)

    configure_logging(
        level="DEBUG" if args.verbose else settings.log_level,
        json_format=settings.log_json,
    )

    if args.command == "compute":
        sys.exit(run_compute(args))
    elif args.command == "parse":
        sys.exit(run_parse(args))
    elif args.command == "verify":
        sys.exit(run_verify(args))

    parser.print_help()
    sys.exit(EXIT_INVALID)


if __name__ == "__main__":
    main()
