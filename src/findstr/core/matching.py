"""Pattern-matching capability used by the Line Matcher.

The pipeline only depends on the ``PatternMatcher`` protocol: "find the
first match in this text, or nothing". Matchers are built once before the
pipeline starts and are read-only afterwards, so worker threads share them
without locking.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol

from findstr.shared.errors import create_pattern_error


@dataclass(frozen=True, slots=True)
class MatchSpan:
    """Location of a match inside a line."""

    offset: int
    length: int


class PatternMatcher(Protocol):
    """Protocol for the pattern-matching capability."""

    @property
    def pattern(self) -> str: ...

    def find(self, text: str) -> MatchSpan | None:
        """Return the leftmost match in ``text`` or None."""
        ...


class RegexMatcher:
    """Regular expression matcher backed by :mod:`re`.

    Args:
        pattern: Regular expression source.
        ignore_case: Compile with ``re.IGNORECASE``.

    Raises:
        PatternError: If the expression does not compile.
    """

    def __init__(self, pattern: str, *, ignore_case: bool = False) -> None:
        flags = re.IGNORECASE if ignore_case else 0
        try:
            self._regex = re.compile(pattern, flags)
        except re.error as e:
            raise create_pattern_error(pattern, str(e), original_error=e) from e
        self._pattern = pattern
        self.ignore_case = ignore_case

    @property
    def pattern(self) -> str:
        return self._pattern

    def find(self, text: str) -> MatchSpan | None:
        match = self._regex.search(text)
        if match is None:
            return None
        return MatchSpan(offset=match.start(), length=match.end() - match.start())

    def __repr__(self) -> str:
        return f"RegexMatcher({self._pattern!r}, ignore_case={self.ignore_case})"


class LiteralMatcher:
    """Fixed-string matcher using :meth:`str.find`.

    Case-insensitive literal search goes through an escaped ``RegexMatcher``
    so offsets always index the original text (case folding can change the
    length of a string).
    """

    def __init__(self, pattern: str, *, ignore_case: bool = False) -> None:
        self._pattern = pattern
        self.ignore_case = ignore_case
        self._folded = (
            RegexMatcher(re.escape(pattern), ignore_case=True) if ignore_case else None
        )

    @property
    def pattern(self) -> str:
        return self._pattern

    def find(self, text: str) -> MatchSpan | None:
        if self._folded is not None:
            return self._folded.find(text)
        index = text.find(self._pattern)
        if index < 0:
            return None
        return MatchSpan(offset=index, length=len(self._pattern))

    def __repr__(self) -> str:
        return f"LiteralMatcher({self._pattern!r}, ignore_case={self.ignore_case})"


def create_matcher(
    pattern: str,
    *,
    ignore_case: bool = False,
    literal: bool = False,
) -> PatternMatcher:
    """Build the matcher for the given options.

    Raises:
        PatternError: If the pattern is invalid.
    """
    if literal:
        return LiteralMatcher(pattern, ignore_case=ignore_case)
    return RegexMatcher(pattern, ignore_case=ignore_case)


__all__ = [
    "LiteralMatcher",
    "MatchSpan",
    "PatternMatcher",
    "RegexMatcher",
    "create_matcher",
]
