"""Directory scanner for the findstr pipeline.

This module provides the DirectoryScanner class that acts as the producer
of the pipeline: it walks the search root, keeps the regular files whose
name matches the file glob, and feeds their absolute paths into a bounded
queue for the File Reader stage.
"""

from __future__ import annotations

import fnmatch
import logging
import os
import threading
from collections.abc import Generator
from pathlib import Path
from typing import Any

from findstr.core.pipeline.utils import BoundedQueue, PipelineFault, ScanStatistics
from findstr.shared.constants import Timeout
from findstr.shared.errors import ErrorCode, ErrorContext, InfrastructureError
from findstr.shared.logging import log_operation_error, log_operation_success

logger = logging.getLogger(__name__)


class DirectoryScanner(threading.Thread):
    """Directory scanner that acts as a producer in the pipeline.

    Inaccessible directories and entries are logged and skipped; they never
    fail the walk. Files whose name does not match ``file_glob`` are never
    queued, so the reader stage never opens them.

    Args:
        root_path: Root directory path to scan.
        file_glob: fnmatch-style pattern applied to file names.
        output_queue: BoundedQueue instance to put scanned file paths into.
        stats: ScanStatistics instance for tracking scan metrics.
        fault: Shared fault record; its cancel event stops the walk.
        recurse: Descend into subdirectories.
        follow_symlinks: Descend into symlinked directories, walking each
            directory at most once.
        poll_interval: How often a blocked put re-checks cancellation.
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        root_path: str | Path,
        file_glob: str,
        output_queue: BoundedQueue,
        stats: ScanStatistics,
        fault: PipelineFault,
        *,
        recurse: bool = True,
        follow_symlinks: bool = False,
        poll_interval: float = Timeout.QUEUE_POLL,
    ) -> None:
        super().__init__(name="findstr-scanner", daemon=True)
        self.root_path = Path(root_path).absolute()
        self.file_glob = file_glob
        self.output_queue = output_queue
        self.stats = stats
        self.fault = fault
        self.recurse = recurse
        self.follow_symlinks = follow_symlinks
        self.poll_interval = poll_interval

    def scan_files(self) -> Generator[str, None, None]:
        """Walk the root directory and yield matching file paths.

        Directories are visited depth-first; entries of one directory are
        visited in name order.

        Yields:
            str: Absolute path of each regular file matching the glob.
        """
        pending = [str(self.root_path)]
        visited: set[tuple[int, int]] = set()
        while pending:
            if self.fault.is_cancelled:
                return
            directory = pending.pop()
            if self.follow_symlinks and not self._first_visit(directory, visited):
                continue
            entries = self._list_directory(directory)
            if entries is None:
                continue
            self.stats.increment_directories_scanned()

            subdirectories: list[str] = []
            for entry in entries:
                try:
                    if entry.is_dir(follow_symlinks=self.follow_symlinks):
                        if self.recurse:
                            subdirectories.append(entry.path)
                    elif entry.is_file() and self._matches_glob(entry.name):
                        yield entry.path
                except OSError as e:
                    # Skip inaccessible entries
                    self.stats.increment_entries_skipped()
                    logger.warning(
                        "Skipping inaccessible entry: %s",
                        entry.path,
                        extra={"error": str(e), "operation": "scan_files"},
                    )

            # Reversed so the stack pops subdirectories in name order
            pending.extend(reversed(subdirectories))

    def _first_visit(self, directory: str, visited: set[tuple[int, int]]) -> bool:
        """Record ``directory`` by device and inode; False if already walked.

        A directory reachable through several symlinks, or through a link
        back up the tree, is walked once.
        """
        try:
            st = os.stat(directory)
        except OSError as e:
            self.stats.increment_entries_skipped()
            logger.warning(
                "Cannot scan directory: %s",
                directory,
                extra={"error": str(e), "operation": "list_directory"},
            )
            return False
        key = (st.st_dev, st.st_ino)
        if key in visited:
            logger.debug("Skipping directory already scanned: %s", directory)
            return False
        visited.add(key)
        return True

    def _list_directory(self, directory: str) -> list[os.DirEntry[str]] | None:
        """Return the sorted entries of ``directory`` or None if unreadable."""
        try:
            with os.scandir(directory) as it:
                return sorted(it, key=lambda entry: entry.name)
        except OSError as e:
            self.stats.increment_entries_skipped()
            logger.warning(
                "Cannot scan directory: %s",
                directory,
                extra={"error": str(e), "operation": "list_directory"},
            )
            return None

    def _matches_glob(self, file_name: str) -> bool:
        return fnmatch.fnmatch(file_name, self.file_glob)

    def stop(self) -> None:
        """Signal the scanner thread to stop."""
        self.fault.cancel()

    def run(self) -> None:
        """Walk the tree and queue every matching file.

        Completion is signalled by the orchestrator, not by the scanner:
        the reader stage only sees end-of-input once this thread has joined.
        """
        try:
            for file_path in self.scan_files():
                if not self.output_queue.put_unless_cancelled(
                    file_path,
                    self.fault.cancel_event,
                    self.poll_interval,
                ):
                    break
                self.stats.increment_files_queued()

            log_operation_success(
                logger,
                "scan_directory",
                0.0,
                {
                    "files_queued": self.stats.files_queued,
                    "directories_scanned": self.stats.directories_scanned,
                },
            )
        # pylint: disable-next=broad-exception-caught
        except Exception as e:  # noqa: BLE001
            error = InfrastructureError(
                ErrorCode.SCANNER_ERROR,
                f"Directory scan failed: {e}",
                ErrorContext(file_path=str(self.root_path), operation="scan_directory"),
                original_error=e,
            )
            log_operation_error(logger, error)
            self.fault.report("scanner", error)

    def get_scan_summary(self) -> dict[str, Any]:
        """Get a summary of the scanning results."""
        return {
            "root_path": str(self.root_path),
            "file_glob": self.file_glob,
            "recurse": self.recurse,
            "files_queued": self.stats.files_queued,
            "directories_scanned": self.stats.directories_scanned,
            "entries_skipped": self.stats.entries_skipped,
            "queue_size": self.output_queue.qsize(),
            "queue_maxsize": self.output_queue.maxsize,
        }
