"""
Pytest configuration and shared fixtures for findstr tests.

This module provides common fixtures used across the test modules:
temporary search trees, a recording output writer and fast search options.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Generator
from pathlib import Path

import pytest

from findstr.cli.common.context import clear_cli_context
from findstr.config import SearchOptions
from findstr.core.models import ErrorMatch, LineMatch


class RecordingWriter:
    """Output writer that records every call in arrival order."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.results: list[LineMatch | ErrorMatch] = []
        self.flushed = 0

    def write_match(self, result: LineMatch) -> None:
        with self._lock:
            self.results.append(result)

    def write_error(self, result: ErrorMatch) -> None:
        with self._lock:
            self.results.append(result)

    def flush(self) -> None:
        self.flushed += 1

    @property
    def matches(self) -> list[LineMatch]:
        return [r for r in self.results if isinstance(r, LineMatch)]

    @property
    def errors(self) -> list[ErrorMatch]:
        return [r for r in self.results if isinstance(r, ErrorMatch)]


@pytest.fixture
def recording_writer() -> RecordingWriter:
    """Fresh recording writer."""
    return RecordingWriter()


@pytest.fixture
def search_tree(tmp_path: Path) -> Path:
    """Create a small directory tree to search.

    Layout::

        a.txt          foo / bar / foobar
        b.txt          baz
        notes.md       foo in markdown
        sub/c.txt      nested foo
        sub/deeper/d.txt
    """
    (tmp_path / "a.txt").write_text("foo\nbar\nfoobar\n", encoding="utf-8")
    (tmp_path / "b.txt").write_text("baz\n", encoding="utf-8")
    (tmp_path / "notes.md").write_text("foo in markdown\n", encoding="utf-8")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "c.txt").write_text("nothing\nnested foo\n", encoding="utf-8")
    deeper = sub / "deeper"
    deeper.mkdir()
    (deeper / "d.txt").write_text("foo at depth\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def fast_options(search_tree: Path) -> SearchOptions:
    """Search options over ``search_tree`` with a short poll interval."""
    return SearchOptions(
        pattern="foo",
        root=search_tree,
        file_glob="*.txt",
        poll_interval=0.01,
    )


@pytest.fixture(autouse=True)
def _reset_findstr_logging() -> Generator[None, None, None]:
    """Undo logger setup done by CLI tests so caplog keeps working."""
    yield
    package_logger = logging.getLogger("findstr")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
    clear_cli_context()
