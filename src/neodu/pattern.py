"""Regex pattern compilation into a single any-of matcher."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from neodu import PatternSyntaxError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CompiledMatcher:
    """Matcher over the union of one or more regex patterns.

    An empty matcher (no source patterns) never matches and is falsy,
    which callers use as the "no matcher configured" state.

    Attributes:
        patterns: Source patterns in the order they were given.
        regexes: Compiled expressions, OR-ed at match time. Normally a
            single union expression.
    """

    patterns: tuple[str, ...] = ()
    regexes: tuple[re.Pattern[str], ...] = ()

    def __bool__(self) -> bool:
        return bool(self.regexes)

    def matches(self, subject: str) -> bool:
        """Return whether any source pattern is found in *subject*.

        Args:
            subject: Path string to test.

        Returns:
            bool: ``True`` when at least one pattern matches.
        """
        return any(regex.search(subject) for regex in self.regexes)


def _compile_one(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise PatternSyntaxError(pattern, str(exc)) from exc


def compile_patterns(patterns: Iterable[str]) -> CompiledMatcher:
    """Compile raw regex strings into one matcher.

    Every pattern is validated before anything is built, so a single bad
    pattern rejects the whole set. Valid patterns are then joined into one
    alternation. Patterns with capture groups (whose backreferences would
    be renumbered by the join) and unions that ``re`` refuses (e.g. a
    global inline flag that is only legal at the start) keep the
    individual expressions instead.

    Args:
        patterns: Raw regular expressions.

    Returns:
        CompiledMatcher: Matcher for the union; empty when no patterns.

    Raises:
        PatternSyntaxError: If any pattern fails to compile.
    """
    sources = tuple(patterns)
    if not sources:
        return CompiledMatcher()

    compiled = tuple(_compile_one(pattern) for pattern in sources)
    logger.debug("Compiled %d ignore patterns", len(sources))
    if len(compiled) == 1 or any(regex.groups for regex in compiled):
        return CompiledMatcher(patterns=sources, regexes=compiled)

    union = "|".join(f"(?:{pattern})" for pattern in sources)
    try:
        regexes: tuple[re.Pattern[str], ...] = (re.compile(union),)
    except re.error:
        logger.debug("Union of %d patterns rejected, matching separately", len(sources))
        regexes = compiled

    return CompiledMatcher(patterns=sources, regexes=regexes)
