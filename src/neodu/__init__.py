"""neodu: tree-compatible disk usage viewer with regex/path ignore rules."""

from __future__ import annotations

__version__ = "0.1.0"


class NeoduError(Exception):
    """User-facing CLI error.

    Raised for invalid arguments, missing directories, and bad ignore
    rules. The message is printed to stderr and the process exits
    with code 1.
    """


class PatternSyntaxError(NeoduError):
    """An ignore pattern is not a valid regular expression.

    Attributes:
        pattern: The offending raw pattern string.
    """

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"invalid ignore pattern {pattern!r}: {reason}")
        self.pattern = pattern


class FileAccessError(NeoduError):
    """An ignore rule file cannot be opened or read.

    Attributes:
        path: Path of the rule file as given by the caller.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"cannot read ignore file '{path}': {reason}")
        self.path = path
