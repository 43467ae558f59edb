"""Ignore rule configuration and the per-entry skip predicate.

Rules are collected on an :class:`IgnoreConfig` during start-up, then
turned into a plain ``(name, path) -> bool`` function by
:meth:`IgnoreConfig.create_ignore_func` right before scanning begins.
All fallible work (file reading, regex compilation) happens in the
setters, so the predicate itself never raises.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from neodu.pattern import CompiledMatcher, compile_patterns
from neodu.rulefile import load_rule_file

logger = logging.getLogger(__name__)

IgnoreFunc = Callable[[str, str], bool]
"""Skip predicate called by the scanner as ``should_skip(name, path)``."""


def _never_ignore(name: str, path: str) -> bool:
    return False


def _abs_path(path: str) -> str | None:
    """Return the absolute form of *path*, or ``None`` if it cannot be resolved."""
    try:
        return os.path.abspath(path)
    except (OSError, ValueError):
        return None


@dataclass(slots=True)
class IgnoreConfig:
    """Mutable holder of all ignore rules.

    Every rule set is disabled by default. Each setter replaces the
    previous value of its field (last write wins).

    Attributes:
        ignore_paths: Exact paths to skip, stored verbatim (relative or
            absolute).
        dir_matcher: Matcher built from directly supplied patterns.
        file_matcher: Matcher built from patterns read from a rule file.
        ignore_hidden: Whether entries whose name starts with ``.`` are
            skipped.
    """

    ignore_paths: frozenset[str] = field(default_factory=frozenset)
    dir_matcher: CompiledMatcher | None = None
    file_matcher: CompiledMatcher | None = None
    ignore_hidden: bool = False

    @property
    def is_empty(self) -> bool:
        """``True`` when no rule would ever skip an entry."""
        return not (
            self.ignore_hidden
            or self.ignore_paths
            or self.dir_matcher
            or self.file_matcher
        )

    def set_ignore_dir_paths(self, paths: Iterable[str]) -> None:
        """Replace the exact-path rules.

        Args:
            paths: Paths to skip, compared as plain strings.
        """
        self.ignore_paths = frozenset(paths)

    def set_ignore_dir_patterns(self, patterns: Iterable[str]) -> None:
        """Compile and store directly supplied regex patterns.

        Args:
            patterns: Raw regular expressions.

        Raises:
            PatternSyntaxError: If any pattern is invalid. The previously
                stored matcher is kept.
        """
        matcher = compile_patterns(patterns)
        self.dir_matcher = matcher or None

    def set_ignore_from_file(self, path: str | os.PathLike[str]) -> None:
        """Load regex patterns from a rule file, compile and store them.

        Args:
            path: Rule file with one pattern per line.

        Raises:
            FileAccessError: If the file cannot be read.
            PatternSyntaxError: If any line is not a valid pattern.
        """
        matcher = compile_patterns(load_rule_file(path))
        self.file_matcher = matcher or None

    def set_ignore_hidden(self, enabled: bool) -> None:
        """Enable or disable skipping of dot-prefixed entries."""
        self.ignore_hidden = enabled

    def create_ignore_func(self) -> IgnoreFunc:
        """Build the skip predicate from the rules configured so far.

        The predicate captures a snapshot of the current rules; later
        setter calls do not affect it. Path rules are matched in their
        stored form and in their absolute form, resolved against the
        working directory at build time, so a relative rule also skips
        the absolute spelling of the same entry. Changing the working
        directory after the build does not re-resolve relative rules;
        build a new predicate for that.

        Returns:
            IgnoreFunc: ``should_skip(name, path)`` returning ``True``
            when the entry must not be reported or descended into.
        """
        if self.is_empty:
            return _never_ignore

        ignore_hidden = self.ignore_hidden
        ignore_paths = self.ignore_paths | {
            p for p in map(_abs_path, self.ignore_paths) if p is not None
        }
        matchers = tuple(m for m in (self.dir_matcher, self.file_matcher) if m)

        logger.debug(
            "Ignore rules: hidden=%s, paths=%d, matchers=%d",
            ignore_hidden,
            len(ignore_paths),
            len(matchers),
        )

        def should_skip(name: str, path: str) -> bool:
            if ignore_hidden and name.startswith("."):
                return True
            if not ignore_paths and not matchers:
                return False

            abs_path = _abs_path(path)
            if path in ignore_paths or (
                abs_path is not None and abs_path in ignore_paths
            ):
                return True
            for matcher in matchers:
                if matcher.matches(path):
                    return True
                if abs_path is not None and matcher.matches(abs_path):
                    return True
            return False

        return should_skip


def create_ignore_func(config: IgnoreConfig) -> IgnoreFunc:
    """Module-level shorthand for :meth:`IgnoreConfig.create_ignore_func`."""
    return config.create_ignore_func()
