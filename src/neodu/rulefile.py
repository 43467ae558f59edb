"""Ignore rule file loading, one raw regex pattern per line."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from neodu import FileAccessError

logger = logging.getLogger(__name__)


def load_rule_file(path: str | os.PathLike[str]) -> list[str]:
    """Read newline-delimited patterns from *path*.

    Lines are split on ``\\n`` only and returned in order, with one trailing
    ``\\r`` removed from each. Any other control or separator character
    stays part of its pattern. There is no comment syntax, and an empty
    line yields an empty pattern.

    Args:
        path: Rule file location.

    Returns:
        list[str]: Raw patterns, one per line.

    Raises:
        FileAccessError: If the file cannot be opened, read, or decoded.
    """
    try:
        text = Path(path).read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Cannot read ignore file: %s", path)
        reason = exc.strerror if isinstance(exc, OSError) and exc.strerror else str(exc)
        raise FileAccessError(os.fspath(path), reason) from exc

    lines = text.split("\n")
    # A final newline terminates the last line rather than starting a new one
    if lines[-1] == "":
        lines.pop()
    lines = [line.removesuffix("\r") for line in lines]
    logger.debug("Loaded %d patterns from %s", len(lines), path)
    return lines
