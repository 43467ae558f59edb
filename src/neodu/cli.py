"""CLI entry point for neodu, I/O boundary only."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from neodu import NeoduError, __version__
from neodu.formatter.tree import TreeOptions, format_tree
from neodu.ignore import IgnoreConfig, IgnoreFunc
from neodu.scanner import ScanOptions, scan_usage

logger = logging.getLogger(__name__)

DEFAULT_IGNORE_DIRS: tuple[str, ...] = ("/proc", "/dev", "/sys", "/run")

# -vv and above maps to DEBUG
_VERBOSE_DEBUG_THRESHOLD = 2


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser.

    Returns:
        argparse.ArgumentParser: Configured parser for the ``neodu`` command.
    """
    parser = argparse.ArgumentParser(
        prog="neodu",
        description="tree-compatible disk usage viewer with path and regex ignore rules",
    )
    parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Root directory to analyze (default: current directory)",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    # ignore rules
    parser.add_argument(
        "-i",
        "--ignore-dirs",
        action="append",
        default=None,
        dest="ignore_dirs",
        help=(
            "Paths to ignore, separated by comma; absolute or relative to the "
            "current directory (default: " + ",".join(DEFAULT_IGNORE_DIRS) + ")"
        ),
    )
    parser.add_argument(
        "-I",
        "--ignore-dirs-pattern",
        action="append",
        default=[],
        dest="ignore_patterns",
        help="Regular expression of paths to ignore (can be specified multiple times)",
    )
    parser.add_argument(
        "-X",
        "--ignore-from",
        type=str,
        default=None,
        dest="ignore_from",
        help="Read regular expressions of paths to ignore from a file, one per line",
    )
    parser.add_argument(
        "-H",
        "--no-hidden",
        action="store_true",
        dest="no_hidden",
        help="Ignore hidden entries (beginning with dot)",
    )

    # tree-compat options
    parser.add_argument(
        "-L",
        "--level",
        type=int,
        default=None,
        dest="max_depth",
        help="Max display depth of the directory tree",
    )
    parser.add_argument(
        "-d",
        "--dirs-only",
        action="store_true",
        dest="dirs_only",
        help="List directories only",
    )
    parser.add_argument(
        "--dirsfirst",
        action="store_true",
        dest="dirs_first",
        help="List directories before files",
    )
    parser.add_argument(
        "--sort",
        choices=["name", "size"],
        default="name",
        dest="sort_by",
        help="Sibling order: name (default) or size, largest first",
    )
    parser.add_argument(
        "--noreport",
        action="store_true",
        dest="no_report",
        help="Omit the directory/file/size report at the end",
    )
    parser.add_argument(
        "--charset",
        choices=["unicode", "ascii"],
        default="unicode",
        help="Character set for tree drawing (default: unicode)",
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
        action="count",
        default=0,
        help="Increase log verbosity (use -vv for debug)",
    )
    return parser


def run_neodu(argv: list[str] | None = None) -> str:
    """Run neodu with provided CLI args and return formatted output.

    This function is intentionally side-effect free and is the primary
    test target for CLI behavior.

    Args:
        argv: Command-line argument list without program name. If ``None``,
            uses process arguments via ``argparse`` defaults.

    Returns:
        str: Final rendered output.

    Raises:
        NeoduError: On any user-facing validation or I/O error, including
            invalid ignore patterns and unreadable ignore files.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    return _run_with_args(args)


def _configure_logging(verbose: int) -> None:
    """Set the root log level from the ``-v`` count."""
    if verbose >= _VERBOSE_DEBUG_THRESHOLD:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, force=True)


def _resolve_root(directory: str) -> Path:
    """Validate the directory argument.

    The path is kept as given so that relative ignore rules see the
    same relative entry paths the user typed.

    Args:
        directory: Directory argument from CLI.

    Returns:
        Path: Root path.

    Raises:
        NeoduError: If directory does not exist or is not a directory.
    """
    root = Path(directory)
    if not root.is_dir():
        raise NeoduError(f"'{directory}' is not a directory")
    return root


def _split_paths(values: list[str] | None) -> list[str]:
    """Flatten comma-separated ``-i`` values, falling back to the defaults.

    Args:
        values: Raw ``-i`` values, or ``None`` when the flag was not given.

    Returns:
        list[str]: Non-empty path strings.
    """
    if values is None:
        return list(DEFAULT_IGNORE_DIRS)
    return [part for value in values for part in value.split(",") if part]


def _build_ignore_func(args: argparse.Namespace) -> IgnoreFunc:
    """Populate an ``IgnoreConfig`` from CLI options and build the predicate.

    Args:
        args: Parsed CLI namespace.

    Returns:
        IgnoreFunc: Skip predicate for the scanner.

    Raises:
        PatternSyntaxError: If a ``-I`` pattern or a ``-X`` line is invalid.
        FileAccessError: If the ``-X`` file cannot be read.
    """
    config = IgnoreConfig()
    config.set_ignore_dir_paths(_split_paths(args.ignore_dirs))
    if args.ignore_patterns:
        config.set_ignore_dir_patterns(args.ignore_patterns)
    if args.ignore_from:
        config.set_ignore_from_file(args.ignore_from)
    config.set_ignore_hidden(args.no_hidden)

    if config.is_empty:
        logger.info("No ignore rules configured")
    return config.create_ignore_func()


def _translate_level_to_scan_depth(level_arg: int | None) -> int | None:
    """Translate ``-L`` level semantics to scanner depth.

    Args:
        level_arg: CLI value of ``-L/--level``.

    Returns:
        int | None: Scanner depth value, or ``None`` when not set.

    Raises:
        NeoduError: If level is less than 1.
    """
    if level_arg is None:
        return None
    if level_arg < 1:
        raise NeoduError("Invalid level, must be greater than 0.")
    return level_arg - 1


def _run_with_args(args: argparse.Namespace) -> str:
    """Run the core configure/scan/format pipeline for parsed arguments.

    Args:
        args: Parsed CLI namespace.

    Returns:
        str: Rendered output.

    Raises:
        NeoduError: On any user-facing validation or I/O error.
    """
    root = _resolve_root(args.directory)
    scan_max_depth = _translate_level_to_scan_depth(args.max_depth)
    should_skip = _build_ignore_func(args)

    scan_opts = ScanOptions(
        max_depth=scan_max_depth,
        dirs_only=args.dirs_only,
    )
    scanned = scan_usage(root, scan_opts, should_skip)
    logger.info("Scanned %d entries under %s", len(scanned.entries), root)

    tree_opts = TreeOptions(
        charset=args.charset,
        dirs_first=args.dirs_first,
        sort_by=args.sort_by,
        no_report=args.no_report,
        root_path=root,
    )
    return format_tree(scanned.entries, tree_opts, total=scanned.total)


def main() -> None:
    """Run the CLI entry point with process arguments.

    Parses args exactly once and writes output to stdout or ``-o`` file.
    Exits with code 1 on user-facing errors.
    """
    parser = build_parser()
    args = parser.parse_args()  # single parse
    _configure_logging(args.verbose)

    try:
        output = _run_with_args(args)
    except NeoduError as exc:
        sys.stderr.write(f"neodu: {exc}\n")
        sys.exit(1)

    if args.output_file:
        try:
            Path(args.output_file).write_text(
                output + "\n", encoding="utf-8", newline=""
            )
        except OSError as exc:
            sys.stderr.write(f"neodu: cannot write to '{args.output_file}': {exc}\n")
            sys.exit(1)
    else:
        sys.stdout.write(output + "\n")
