"""File Reader stage for the findstr pipeline.

This module provides FileReader, which turns one file path into a lazy
sequence of read results, and FileReaderWorker / FileReaderPool, the
threads that consume file paths from the path queue and feed the lines
into the matcher partitions.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import closing

from findstr.core.models import ErrorRead, LineRead, ReadResult
from findstr.core.pipeline.utils import (
    BoundedQueue,
    PartitionedQueue,
    PipelineFault,
    ReaderStatistics,
)
from findstr.shared.constants import Pipeline, Timeout
from findstr.shared.errors import ErrorCode, ErrorContext, InfrastructureError
from findstr.shared.logging import log_operation_error

logger = logging.getLogger(__name__)


def describe_read_error(error: OSError | UnicodeDecodeError) -> str:
    """Return a human-readable message for a failed open or read."""
    if isinstance(error, OSError) and error.strerror:
        return error.strerror
    return str(error)


class FileReader:
    """Reads a file as a lazy, ordered sequence of ReadResult.

    A file either yields one ``LineRead`` per line (numbered from 1) or a
    single ``ErrorRead``, never both. The file handle is held only while
    the sequence is being iterated and is released exactly once, whether
    the sequence is exhausted, closed early or fails.

    Args:
        encoding: Text encoding used to decode the file.
        encoding_errors: Codec error handler (``replace`` never fails).
        stats: Optional ReaderStatistics to update.
    """

    def __init__(
        self,
        encoding: str = "utf-8",
        encoding_errors: str = "replace",
        stats: ReaderStatistics | None = None,
    ) -> None:
        self.encoding = encoding
        self.encoding_errors = encoding_errors
        self.stats = stats or ReaderStatistics()

    def read(self, file_path: str) -> Iterator[ReadResult]:
        """Yield the read results of ``file_path``.

        Args:
            file_path: Path of the file to read.

        Yields:
            LineRead for every line, or one ErrorRead if the file cannot be
            opened or fails before its first line.
        """
        try:
            handle = open(  # noqa: SIM115, PTH123
                file_path,
                encoding=self.encoding,
                errors=self.encoding_errors,
            )
        except (OSError, UnicodeDecodeError) as e:
            self.stats.increment_read_errors()
            yield ErrorRead(file_path=file_path, message=describe_read_error(e))
            return

        with handle:
            self.stats.increment_files_read()
            line_number = 0
            lines = iter(handle)
            while True:
                try:
                    raw_line = next(lines)
                except StopIteration:
                    return
                except (OSError, UnicodeDecodeError) as e:
                    if line_number == 0:
                        self.stats.increment_read_errors()
                        yield ErrorRead(file_path=file_path, message=describe_read_error(e))
                    else:
                        # Lines were already emitted, an error record would contradict them
                        self.stats.increment_truncated_files()
                        logger.warning(
                            "Read failed after line %d of %s, remaining lines skipped: %s",
                            line_number,
                            file_path,
                            describe_read_error(e),
                        )
                    return

                line_number += 1
                self.stats.increment_lines_read()
                yield LineRead(
                    file_path=file_path,
                    line_number=line_number,
                    line_text=raw_line[:-1] if raw_line.endswith("\n") else raw_line,
                )


class FileReaderWorker(threading.Thread):
    """Worker thread that reads files from the path queue.

    Every result of one file goes to the same matcher partition, in order.

    Args:
        input_queue: BoundedQueue of file paths.
        output_queue: PartitionedQueue feeding the matcher workers.
        reader: FileReader shared by all reader workers.
        fault: Shared fault record.
        worker_id: Optional identifier for this worker thread.
        poll_interval: How often blocked queue operations re-check cancellation.
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        input_queue: BoundedQueue,
        output_queue: PartitionedQueue,
        reader: FileReader,
        fault: PipelineFault,
        worker_id: str | None = None,
        poll_interval: float = Timeout.QUEUE_POLL,
    ) -> None:
        self.worker_id = worker_id or f"reader_{id(self) & 0xFFFF}"
        super().__init__(name=f"findstr-{self.worker_id}", daemon=True)
        self.input_queue = input_queue
        self.output_queue = output_queue
        self.reader = reader
        self.fault = fault
        self.poll_interval = poll_interval

    def run(self) -> None:
        """Main worker loop that reads files until the sentinel arrives."""
        cancel_event = self.fault.cancel_event
        try:
            while True:
                received, file_path = self.input_queue.get_unless_cancelled(
                    cancel_event,
                    self.poll_interval,
                )
                if not received or file_path is Pipeline.SENTINEL:
                    break
                self._process_file(file_path)
        # pylint: disable-next=broad-exception-caught
        except Exception as e:  # noqa: BLE001
            error = InfrastructureError(
                ErrorCode.READER_ERROR,
                f"Reader worker {self.worker_id} failed: {e}",
                ErrorContext(
                    operation="read_files",
                    additional_data={"worker_id": self.worker_id},
                ),
                original_error=e,
            )
            log_operation_error(logger, error)
            self.fault.report("reader", error)

    def _process_file(self, file_path: str) -> None:
        """Stream the results of one file downstream.

        Stops early (and releases the file) if the run is cancelled.
        """
        partition = self.output_queue.partition_for(file_path)
        with closing(self.reader.read(file_path)) as results:
            for result in results:
                if not partition.put_unless_cancelled(
                    result,
                    self.fault.cancel_event,
                    self.poll_interval,
                ):
                    return

    def stop(self) -> None:
        """Signal the worker to stop processing."""
        self.fault.cancel()


class FileReaderPool:
    """Pool of FileReaderWorker threads.

    Args:
        num_workers: Number of reader threads (the I/O concurrency limit).
        input_queue: BoundedQueue of file paths.
        output_queue: PartitionedQueue feeding the matcher workers.
        reader: FileReader shared by all workers.
        fault: Shared fault record.
        poll_interval: How often blocked queue operations re-check cancellation.
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        num_workers: int,
        input_queue: BoundedQueue,
        output_queue: PartitionedQueue,
        reader: FileReader,
        fault: PipelineFault,
        poll_interval: float = Timeout.QUEUE_POLL,
    ) -> None:
        if num_workers < 1:
            msg = f"num_workers must be >= 1, got {num_workers}"
            raise ValueError(msg)
        self.num_workers = num_workers
        self.input_queue = input_queue
        self.output_queue = output_queue
        self.reader = reader
        self.fault = fault
        self.poll_interval = poll_interval
        self.workers: list[FileReaderWorker] = []
        self._started = False

    @property
    def stats(self) -> ReaderStatistics:
        return self.reader.stats

    def start(self) -> None:
        """Start all worker threads."""
        if self._started:
            raise RuntimeError("Reader pool has already been started")

        for i in range(self.num_workers):
            worker = FileReaderWorker(
                input_queue=self.input_queue,
                output_queue=self.output_queue,
                reader=self.reader,
                fault=self.fault,
                worker_id=f"reader_{i}",
                poll_interval=self.poll_interval,
            )
            self.workers.append(worker)
            worker.start()

        self._started = True

    def join(self, timeout: float | None = None) -> None:
        """Wait for all worker threads to complete."""
        if not self._started:
            raise RuntimeError("Reader pool has not been started")

        for worker in self.workers:
            worker.join(timeout=timeout)

    def stop(self) -> None:
        """Stop all worker threads."""
        self.fault.cancel()

    def is_alive(self) -> bool:
        """Check if any worker threads are still alive."""
        return any(worker.is_alive() for worker in self.workers)
