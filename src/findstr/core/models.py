"""Result records flowing through the search pipeline.

Two tagged unions travel between the stages, both keyed by the file path:

- ``ReadResult`` (File Reader -> Line Matcher): ``LineRead`` or ``ErrorRead``
- ``MatchResult`` (Line Matcher -> Result Sink): ``LineMatch`` or ``ErrorMatch``

A file contributes either exactly one error record or zero or more line
records, never both.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class LineRead:
    """One line read from a file.

    Attributes:
        file_path: Absolute path of the file.
        line_number: 1-based line number, strictly increasing per file.
        line_text: Line content without its terminator.
    """

    file_path: str
    line_number: int
    line_text: str

    def __post_init__(self) -> None:
        if self.line_number < 1:
            msg = f"line_number must be >= 1, got {self.line_number}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class ErrorRead:
    """A file that could not be opened or read."""

    file_path: str
    message: str


@dataclass(frozen=True, slots=True)
class LineMatch:
    """A line containing the pattern, with the leftmost match span.

    Attributes:
        file_path: Absolute path of the file.
        line_number: 1-based line number.
        match_offset: Start of the match within ``line_text``.
        match_length: Length of the match.
        line_text: The full line.
    """

    file_path: str
    line_number: int
    match_offset: int
    match_length: int
    line_text: str

    def __post_init__(self) -> None:
        if self.match_offset < 0 or self.match_length < 0:
            msg = f"match span must be non-negative, got ({self.match_offset}, {self.match_length})"
            raise ValueError(msg)
        if self.match_offset + self.match_length > len(self.line_text):
            msg = (
                f"match span ({self.match_offset}, {self.match_length}) "
                f"exceeds line length {len(self.line_text)}"
            )
            raise ValueError(msg)

    @property
    def matched_text(self) -> str:
        """The matched slice of the line."""
        return self.line_text[self.match_offset : self.match_offset + self.match_length]


@dataclass(frozen=True, slots=True)
class ErrorMatch:
    """A file error forwarded unchanged from ``ErrorRead``."""

    file_path: str
    message: str

    @classmethod
    def from_read(cls, error: ErrorRead) -> ErrorMatch:
        return cls(file_path=error.file_path, message=error.message)


ReadResult = Union[LineRead, ErrorRead]
MatchResult = Union[LineMatch, ErrorMatch]


__all__ = [
    "ErrorMatch",
    "ErrorRead",
    "LineMatch",
    "LineRead",
    "MatchResult",
    "ReadResult",
]
