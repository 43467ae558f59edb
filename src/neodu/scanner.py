"""Core directory scanner using os.scandir with explicit stack (DFS)."""

from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from neodu.ignore import IgnoreFunc

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Entry:
    """A single filesystem entry discovered during scanning.

    Attributes:
        path: Path of the entry, built from the scan root as given.
        name: Basename of the entry.
        is_dir: Whether the entry is a directory.
        depth: Parent directory depth from scanning root.
        parent_path: Parent directory path.
        size: Apparent size in bytes. For directories, the recursive total
            of every non-skipped file beneath, whether displayed or not.
    """

    path: Path
    name: str
    is_dir: bool
    depth: int
    parent_path: Path
    size: int = 0


@dataclass(frozen=True, slots=True)
class ScanOptions:
    """Options controlling scanner behavior.

    Both options limit what is reported, never what is measured.

    Attributes:
        max_depth: Maximum parent depth to report. ``None`` means unlimited.
        dirs_only: Whether to report only directories.
    """

    max_depth: int | None = None
    dirs_only: bool = False


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Reported entries plus the usage of the whole scanned tree.

    Attributes:
        entries: Entries to display, in DFS order.
        total: Apparent size of every non-skipped file under the root.
    """

    entries: list[Entry]
    total: int = 0


def _never_skip(name: str, path: str) -> bool:
    return False


def scan(
    root: Path,
    options: ScanOptions | None = None,
    should_skip: IgnoreFunc | None = None,
) -> list[Entry]:
    """Scan root directory and return entries in deterministic DFS order.

    See ``scan_usage`` for the traversal rules.

    Args:
        root: Root directory to scan.
        options: Scanner options. Defaults to ``ScanOptions()``.
        should_skip: Optional skip predicate.

    Returns:
        list[Entry]: Flat list of discovered entries.
    """
    return scan_usage(root, options, should_skip).entries


def scan_usage(
    root: Path,
    options: ScanOptions | None = None,
    should_skip: IgnoreFunc | None = None,
) -> ScanResult:
    """Walk *root*, measuring every non-skipped entry.

    ``should_skip(name, path)`` is called once for every entry found. A
    skipped entry is not reported, not measured and, for directories, not
    descended into. Symlinks are never followed. ``max_depth`` and
    ``dirs_only`` only filter the reported entries, so directory sizes
    and the total always cover the full subtree.

    Args:
        root: Root directory to scan. Relative roots produce relative
            entry paths.
        options: Scanner options. Defaults to ``ScanOptions()``.
        should_skip: Optional skip predicate, usually built by
            ``IgnoreConfig.create_ignore_func``.

    Returns:
        ScanResult: Reported entries and the total size.
    """
    scan_options = options or ScanOptions()
    skip = should_skip or _never_skip
    root = Path(root)

    if not root.is_dir():
        return ScanResult(entries=[])

    result: list[Entry] = []
    usage: dict[Path, int] = {root: 0}
    parents: dict[Path, Path] = {}

    # Stack items: (directory_path, depth)
    stack: list[tuple[Path, int]] = [(root, 0)]

    while stack:
        current_dir, depth = stack.pop()
        reported = scan_options.max_depth is None or depth <= scan_options.max_depth

        try:
            with os.scandir(current_dir) as it:
                raw_entries = list(it)
        except PermissionError:
            logger.debug("Permission denied: %s", current_dir)
            continue
        except OSError:
            logger.debug("Cannot list: %s", current_dir)
            continue

        raw_entries.sort(key=lambda e: e.name)
        # Mirror a cleaned join: "." + "abc" gives "abc", not "./abc"
        base = os.fspath(current_dir)
        if base == os.curdir:
            base = ""

        child_dirs: list[tuple[Path, int]] = []

        for dir_entry in raw_entries:
            name = dir_entry.name
            path_str = os.path.join(base, name)
            if skip(name, path_str):
                logger.debug("Skipped: %s", path_str)
                continue

            try:
                is_dir = dir_entry.is_dir(follow_symlinks=False)
                size = 0 if is_dir else dir_entry.stat(follow_symlinks=False).st_size
            except OSError:
                logger.debug("Cannot stat: %s", dir_entry.path)
                continue

            entry_path = Path(path_str)
            if is_dir:
                usage[entry_path] = 0
                parents[entry_path] = current_dir
                child_dirs.append((entry_path, depth + 1))
            else:
                ancestor: Path | None = current_dir
                while ancestor is not None:
                    usage[ancestor] += size
                    ancestor = parents.get(ancestor)

            if not reported or (scan_options.dirs_only and not is_dir):
                continue

            result.append(
                Entry(
                    path=entry_path,
                    name=name,
                    is_dir=is_dir,
                    depth=depth,
                    parent_path=current_dir,
                    size=size,
                )
            )

        # Push children in reverse so first-alphabetical is popped first
        for child in reversed(child_dirs):
            stack.append(child)

    entries = [
        dataclasses.replace(e, size=usage[e.path]) if e.is_dir else e for e in result
    ]
    return ScanResult(entries=entries, total=usage[root])
