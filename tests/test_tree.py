"""Tests for neodu.formatter.tree: box-drawing output with sizes."""

from __future__ import annotations

from pathlib import Path

import pytest

from neodu.formatter.tree import TreeOptions, format_size, format_tree
from neodu.scanner import ScanOptions, scan


@pytest.mark.parametrize(
    ("size", "expected"),
    [
        (0, "0B"),
        (512, "512B"),
        (1023, "1023B"),
        (1024, "1.0K"),
        (1536, "1.5K"),
        (1024**2, "1.0M"),
        (5 * 1024**3, "5.0G"),
        (3 * 1024**4, "3.0T"),
    ],
)
def test_format_size(size: int, expected: str) -> None:
    assert format_size(size) == expected


class TestFormatTree:
    def test_default_output(self, sample_tree: Path) -> None:
        output = format_tree(scan(sample_tree))
        assert output == "\n".join(
            [
                ".",
                "├── [    6B]  README.md",
                "├── [    5B]  docs/",
                "│   └── [    5B]  guide.md",
                "├── [   12B]  src/",
                "│   ├── [    8B]  api/",
                "│   │   ├── [    4B]  auth.py",
                "│   │   └── [    4B]  user.py",
                "│   └── [    4B]  models/",
                "│       └── [    4B]  user.py",
                "└── [    4B]  tests/",
                "    └── [    4B]  test_user.py",
                "",
                "5 directories, 6 files, 27B total",
            ]
        )

    def test_sort_by_size_with_depth_limit(self, sample_tree: Path) -> None:
        output = format_tree(
            scan(sample_tree, ScanOptions(max_depth=0)),
            TreeOptions(sort_by="size", no_report=True),
        )
        names = [line.split("]  ")[1] for line in output.splitlines()[1:]]
        assert names == ["src/", "README.md", "docs/", "tests/"]

    def test_depth_limit_keeps_subtree_sizes(self, sample_tree: Path) -> None:
        output = format_tree(scan(sample_tree, ScanOptions(max_depth=0)))
        assert "├── [   12B]  src/" in output
        assert "guide.md" not in output
        assert output.splitlines()[-1] == "3 directories, 1 file, 27B total"

    def test_explicit_total(self, sample_tree: Path) -> None:
        entries = scan(sample_tree, ScanOptions(dirs_only=True))
        output = format_tree(entries, total=27)
        assert "├── [   12B]  src/" in output
        assert output.splitlines()[-1] == "5 directories, 0 files, 27B total"

    def test_explicit_total_without_entries(self) -> None:
        assert format_tree([], total=3) == ".\n\n0 directories, 0 files, 3B total"

    def test_sort_by_size_uses_directory_sizes(self, sample_tree: Path) -> None:
        output = format_tree(scan(sample_tree), TreeOptions(sort_by="size"))
        top_level = [
            line.split("]  ")[1]
            for line in output.splitlines()[1:]
            if line[:4] in ("├── ", "└── ")
        ]
        assert top_level == ["src/", "README.md", "docs/", "tests/"]

    def test_dirs_first(self, sample_tree: Path) -> None:
        output = format_tree(
            scan(sample_tree, ScanOptions(max_depth=0)),
            TreeOptions(dirs_first=True, no_report=True),
        )
        assert output.splitlines()[-1] == "└── [    6B]  README.md"

    def test_ascii_charset(self, sample_tree: Path) -> None:
        output = format_tree(scan(sample_tree), TreeOptions(charset="ascii"))
        assert "|-- [    6B]  README.md" in output
        assert "\\-- [    4B]  tests/" in output
        assert "├" not in output

    def test_root_path_display(self, sample_tree: Path) -> None:
        output = format_tree(scan(sample_tree), TreeOptions(root_path=sample_tree))
        assert output.splitlines()[0] == str(sample_tree)

    def test_no_report(self, sample_tree: Path) -> None:
        output = format_tree(scan(sample_tree), TreeOptions(no_report=True))
        assert "total" not in output

    def test_empty_entries(self) -> None:
        assert format_tree([]) == ".\n\n0 directories, 0 files, 0B total"

    def test_skipped_entries_not_counted(self, sample_tree: Path) -> None:
        entries = scan(sample_tree, should_skip=lambda name, path: name == "src")
        output = format_tree(entries)
        assert output.splitlines()[-1] == "2 directories, 3 files, 15B total"
