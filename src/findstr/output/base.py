"""Output collaborator protocol shared by the result writers."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Protocol

from findstr.core.models import ErrorMatch, LineMatch

# Lone surrogates: undecodable bytes in POSIX file names (os.fsdecode) or
# in lines decoded with the surrogateescape handler
_SURROGATES = re.compile("[\ud800-\udfff]")
REPLACEMENT_CHARACTER = "\ufffd"


class OutputWriter(Protocol):
    """Receives the results of a search, one call per result.

    Implementations must tolerate being called from the sink thread and
    raise ``OutputError`` (or ``OSError``) when the channel is broken.
    """

    def write_match(self, result: LineMatch) -> None: ...

    def write_error(self, result: ErrorMatch) -> None: ...

    def flush(self) -> None: ...


def printable(text: str) -> str:
    """Replace lone surrogates in ``text`` with U+FFFD.

    Every character maps to exactly one character, so match offsets into
    the original text stay valid.
    """
    return _SURROGATES.sub(REPLACEMENT_CHARACTER, text)


def display_path(file_path: str, root: Path | None) -> str:
    """Return ``file_path`` relative to ``root`` when possible, made printable."""
    if root is None:
        return printable(file_path)
    try:
        return printable(os.path.relpath(file_path, root))
    except ValueError:
        # Different drive on Windows
        return printable(file_path)
