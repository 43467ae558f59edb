"""Shared fixtures for neodu tests."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a standard test directory tree.

    Structure (file sizes in bytes)::

        root/
        ├── docs/
        │   └── guide.md          (5)
        ├── src/
        │   ├── api/
        │   │   ├── auth.py       (4)
        │   │   └── user.py       (4)
        │   └── models/
        │       └── user.py       (4)
        ├── tests/
        │   └── test_user.py      (4)
        └── README.md             (6)
    """
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "guide.md").write_text("guide")
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "api").mkdir()
    (tmp_path / "src" / "api" / "auth.py").write_text("auth")
    (tmp_path / "src" / "api" / "user.py").write_text("user")
    (tmp_path / "src" / "models").mkdir()
    (tmp_path / "src" / "models" / "user.py").write_text("user")
    (tmp_path / "tests").mkdir()
    (tmp_path / "tests" / "test_user.py").write_text("test")
    (tmp_path / "README.md").write_text("readme")
    return tmp_path


@pytest.fixture
def noisy_tree(tmp_path: Path) -> Path:
    """Tree with noise directories (node_modules, __pycache__, etc.).

    Structure::

        root/
        ├── node_modules/
        │   └── pkg/
        │       └── index.js
        ├── src/
        │   ├── app.py
        │   └── __pycache__/
        │       └── app.cpython-313.pyc
        ├── .venv/
        │   └── bin/
        │       └── activate
        └── README.md
    """
    (tmp_path / "node_modules" / "pkg").mkdir(parents=True)
    (tmp_path / "node_modules" / "pkg" / "index.js").write_text("js")
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "app.py").write_text("app")
    (tmp_path / "src" / "__pycache__").mkdir()
    (tmp_path / "src" / "__pycache__" / "app.cpython-313.pyc").write_bytes(b"\x00")
    (tmp_path / ".venv" / "bin").mkdir(parents=True)
    (tmp_path / ".venv" / "bin" / "activate").write_text("activate")
    (tmp_path / "README.md").write_text("readme")
    return tmp_path


@pytest.fixture
def rule_file(tmp_path: Path) -> Path:
    """Write an ignore rule file and return its path."""
    path = tmp_path / "ignore"
    path.write_text("/aaa\n/aaabc\n/[abd]+\n", encoding="utf-8")
    return path
