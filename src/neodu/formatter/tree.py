"""Tree-compatible box-drawing output with disk usage per entry."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from neodu.scanner import Entry

_UNITS = ("K", "M", "G", "T", "P", "E")


@dataclass(frozen=True, slots=True)
class Glyphs:
    """Box-drawing character set for tree rendering."""

    branch: str  # ├──
    last_branch: str  # └──
    vertical: str  # │
    space: str  # (indent)


UNICODE_GLYPHS = Glyphs(
    branch="├── ",
    last_branch="└── ",
    vertical="│   ",
    space="    ",
)

ASCII_GLYPHS = Glyphs(
    branch="|-- ",
    last_branch="\\-- ",
    vertical="|   ",
    space="    ",
)


@dataclass(frozen=True, slots=True)
class TreeOptions:
    """Options for the tree formatter.

    Attributes:
        charset: Output charset, ``unicode`` or ``ascii``.
        dirs_first: Whether directories are sorted before files.
        sort_by: Sibling order, by ``name`` ascending or ``size`` descending.
        no_report: Whether to omit summary report line.
        root_path: Root shown on the first line; ``.`` when ``None``.
    """

    charset: Literal["unicode", "ascii"] = "unicode"
    dirs_first: bool = False
    sort_by: Literal["name", "size"] = "name"
    no_report: bool = False
    root_path: Path | None = None


def format_size(size: int) -> str:
    """Render a byte count in 1024-based units.

    Args:
        size: Size in bytes.

    Returns:
        str: ``512B``, ``4.0K``, ``1.5M`` and so on.
    """
    if size < 1024:
        return f"{size}B"
    value = float(size)
    unit = ""
    for unit in _UNITS:
        value /= 1024
        if value < 1024:
            break
    return f"{value:.1f}{unit}"


def _group_by_parent(entries: list[Entry]) -> dict[Path, list[Entry]]:
    """Group entries by parent path preserving insertion order."""
    groups: dict[Path, list[Entry]] = {}
    for entry in entries:
        groups.setdefault(entry.parent_path, []).append(entry)
    return groups


def _sort_children(
    children: list[Entry],
    dirs_first: bool,
    sort_by: str,
) -> list[Entry]:
    """Sort siblings by name, or by size (largest first, name breaks ties)."""
    if sort_by == "size":
        ordered = sorted(children, key=lambda e: (-e.size, e.name))
    else:
        ordered = sorted(children, key=lambda e: e.name)
    if dirs_first:
        return [e for e in ordered if e.is_dir] + [e for e in ordered if not e.is_dir]
    return ordered


def _report_line(dir_count: int, file_count: int, total: int) -> str:
    """Build GNU tree-like summary line with the total usage."""
    dir_word = "directory" if dir_count == 1 else "directories"
    file_word = "file" if file_count == 1 else "files"
    return f"{dir_count} {dir_word}, {file_count} {file_word}, {format_size(total)} total"


def format_tree(
    entries: list[Entry],
    options: TreeOptions | None = None,
    total: int | None = None,
) -> str:
    """Render entries as box-drawing text with a size column.

    Directory entries are expected to carry their recursive size, as
    produced by the scanner.

    Args:
        entries: Scanner entries to render.
        options: Rendering options.
        total: Size shown in the report line. Defaults to the sum of the
            top-level entries.

    Returns:
        str: Full output including root line and optional summary report.
    """
    opts = options or TreeOptions()
    glyphs = ASCII_GLYPHS if opts.charset == "ascii" else UNICODE_GLYPHS

    root_display = "." if opts.root_path is None else str(opts.root_path)
    lines: list[str] = [root_display]

    if not entries:
        if not opts.no_report:
            lines.append("")
            lines.append(_report_line(0, 0, total or 0))
        return "\n".join(lines)

    groups = _group_by_parent(entries)

    root_parent = entries[0].parent_path
    dir_count = 0
    file_count = 0

    # Stack items: (entry, prefix, is_last_sibling)
    root_children = _sort_children(
        groups.get(root_parent, []), opts.dirs_first, opts.sort_by
    )
    if total is None:
        total = sum(e.size for e in root_children)
    stack: list[tuple[Entry, str, bool]] = []
    for i in range(len(root_children) - 1, -1, -1):
        stack.append((root_children[i], "", i == len(root_children) - 1))

    while stack:
        child, prefix, is_last = stack.pop()
        connector = glyphs.last_branch if is_last else glyphs.branch
        display_name = child.name
        if child.is_dir:
            display_name += "/"
            dir_count += 1
        else:
            file_count += 1

        lines.append(
            f"{prefix}{connector}[{format_size(child.size):>6}]  {display_name}"
        )

        if child.is_dir:
            next_prefix = prefix + (glyphs.space if is_last else glyphs.vertical)
            grandchildren = _sort_children(
                groups.get(child.path, []), opts.dirs_first, opts.sort_by
            )
            for j in range(len(grandchildren) - 1, -1, -1):
                stack.append(
                    (grandchildren[j], next_prefix, j == len(grandchildren) - 1)
                )

    if not opts.no_report:
        lines.append("")
        lines.append(_report_line(dir_count, file_count, total))

    return "\n".join(lines)
