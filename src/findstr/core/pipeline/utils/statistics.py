"""Statistics collectors for pipeline operations.

This module provides thread-safe statistics collectors for tracking
metrics across the pipeline stages:
- ScanStatistics: Directory walk metrics
- ReaderStatistics: File reading metrics
- MatcherStatistics: Line matching metrics
- SinkStatistics: Output metrics
"""

from __future__ import annotations

import threading


class _Counters:
    """Lock-guarded named counters shared by the statistics classes."""

    _fields: tuple[str, ...] = ()

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counts = dict.fromkeys(self._fields, 0)

    def _increment(self, name: str, count: int = 1) -> None:
        with self._lock:
            self._counts[name] += count

    def _get(self, name: str) -> int:
        with self._lock:
            return self._counts[name]

    def snapshot(self) -> dict[str, int]:
        """Return a consistent copy of all counters."""
        with self._lock:
            return dict(self._counts)


class ScanStatistics(_Counters):
    """Statistics collector for the directory walk."""

    _fields = ("files_queued", "directories_scanned", "entries_skipped")

    def increment_files_queued(self) -> None:
        self._increment("files_queued")

    def increment_directories_scanned(self) -> None:
        self._increment("directories_scanned")

    def increment_entries_skipped(self) -> None:
        self._increment("entries_skipped")

    @property
    def files_queued(self) -> int:
        return self._get("files_queued")

    @property
    def directories_scanned(self) -> int:
        return self._get("directories_scanned")

    @property
    def entries_skipped(self) -> int:
        return self._get("entries_skipped")


class ReaderStatistics(_Counters):
    """Statistics collector for the File Reader stage."""

    _fields = ("files_read", "lines_read", "read_errors", "truncated_files")

    def increment_files_read(self) -> None:
        self._increment("files_read")

    def increment_lines_read(self, count: int = 1) -> None:
        self._increment("lines_read", count)

    def increment_read_errors(self) -> None:
        self._increment("read_errors")

    def increment_truncated_files(self) -> None:
        self._increment("truncated_files")

    @property
    def files_read(self) -> int:
        return self._get("files_read")

    @property
    def lines_read(self) -> int:
        return self._get("lines_read")

    @property
    def read_errors(self) -> int:
        return self._get("read_errors")

    @property
    def truncated_files(self) -> int:
        return self._get("truncated_files")


class MatcherStatistics(_Counters):
    """Statistics collector for the Line Matcher stage."""

    _fields = ("lines_examined", "lines_matched", "errors_forwarded")

    def increment_lines_examined(self) -> None:
        self._increment("lines_examined")

    def increment_lines_matched(self) -> None:
        self._increment("lines_matched")

    def increment_errors_forwarded(self) -> None:
        self._increment("errors_forwarded")

    @property
    def lines_examined(self) -> int:
        return self._get("lines_examined")

    @property
    def lines_matched(self) -> int:
        return self._get("lines_matched")

    @property
    def errors_forwarded(self) -> int:
        return self._get("errors_forwarded")


class SinkStatistics(_Counters):
    """Statistics collector for the Result Sink stage."""

    _fields = ("matches_written", "errors_written", "items_skipped")

    def increment_matches_written(self) -> None:
        self._increment("matches_written")

    def increment_errors_written(self) -> None:
        self._increment("errors_written")

    def increment_items_skipped(self) -> None:
        self._increment("items_skipped")

    @property
    def matches_written(self) -> int:
        return self._get("matches_written")

    @property
    def errors_written(self) -> int:
        return self._get("errors_written")

    @property
    def items_skipped(self) -> int:
        return self._get("items_skipped")
