"""Line Matcher stage for the findstr pipeline.

This module provides match_line, the pure per-item transformation, and
LineMatcherWorker / LineMatcherPool, the threads applying it. Each worker
owns one partition of the read queue, so all lines of a file are matched
by the same worker in file order.
"""

from __future__ import annotations

import logging
import threading
from typing import assert_never

from findstr.core.matching import PatternMatcher
from findstr.core.models import ErrorMatch, ErrorRead, LineMatch, LineRead, MatchResult, ReadResult
from findstr.core.pipeline.utils import (
    BoundedQueue,
    MatcherStatistics,
    PartitionedQueue,
    PipelineFault,
)
from findstr.shared.constants import Pipeline, Timeout
from findstr.shared.errors import ErrorCode, ErrorContext, InfrastructureError
from findstr.shared.logging import log_operation_error

logger = logging.getLogger(__name__)


def match_line(result: ReadResult, matcher: PatternMatcher) -> MatchResult | None:
    """Apply ``matcher`` to one read result.

    Errors are forwarded as ``ErrorMatch``. A line yields a ``LineMatch``
    carrying the leftmost match, or None when the pattern does not occur.
    """
    match result:
        case ErrorRead():
            return ErrorMatch.from_read(result)
        case LineRead(file_path=file_path, line_number=line_number, line_text=line_text):
            span = matcher.find(line_text)
            if span is None:
                return None
            return LineMatch(
                file_path=file_path,
                line_number=line_number,
                match_offset=span.offset,
                match_length=span.length,
                line_text=line_text,
            )
        case _:
            assert_never(result)


class LineMatcherWorker(threading.Thread):
    """Worker thread that matches the read results of one partition.

    Args:
        input_queue: The read-queue partition owned by this worker.
        output_queue: BoundedQueue feeding the result sink.
        matcher: Shared, read-only pattern matcher.
        stats: MatcherStatistics instance.
        fault: Shared fault record.
        worker_id: Optional identifier for this worker thread.
        poll_interval: How often blocked queue operations re-check cancellation.
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        input_queue: BoundedQueue,
        output_queue: BoundedQueue,
        matcher: PatternMatcher,
        stats: MatcherStatistics,
        fault: PipelineFault,
        worker_id: str | None = None,
        poll_interval: float = Timeout.QUEUE_POLL,
    ) -> None:
        self.worker_id = worker_id or f"matcher_{id(self) & 0xFFFF}"
        super().__init__(name=f"findstr-{self.worker_id}", daemon=True)
        self.input_queue = input_queue
        self.output_queue = output_queue
        self.matcher = matcher
        self.stats = stats
        self.fault = fault
        self.poll_interval = poll_interval

    def run(self) -> None:
        """Main worker loop that matches items until the sentinel arrives."""
        cancel_event = self.fault.cancel_event
        try:
            while True:
                received, item = self.input_queue.get_unless_cancelled(
                    cancel_event,
                    self.poll_interval,
                )
                if not received or item is Pipeline.SENTINEL:
                    break

                match_result = self._process_item(item)
                if match_result is None:
                    continue
                if not self.output_queue.put_unless_cancelled(
                    match_result,
                    cancel_event,
                    self.poll_interval,
                ):
                    break
        # pylint: disable-next=broad-exception-caught
        except Exception as e:  # noqa: BLE001
            error = InfrastructureError(
                ErrorCode.MATCHER_ERROR,
                f"Matcher worker {self.worker_id} failed: {e}",
                ErrorContext(
                    operation="match_lines",
                    additional_data={"worker_id": self.worker_id},
                ),
                original_error=e,
            )
            log_operation_error(logger, error)
            self.fault.report("matcher", error)

    def _process_item(self, item: ReadResult) -> MatchResult | None:
        match_result = match_line(item, self.matcher)
        if isinstance(item, ErrorRead):
            self.stats.increment_errors_forwarded()
        else:
            self.stats.increment_lines_examined()
            if match_result is not None:
                self.stats.increment_lines_matched()
        return match_result

    def stop(self) -> None:
        """Signal the worker to stop processing."""
        self.fault.cancel()


class LineMatcherPool:
    """Pool of LineMatcherWorker threads, one per read-queue partition.

    Args:
        input_queue: PartitionedQueue filled by the reader stage.
        output_queue: BoundedQueue feeding the result sink.
        matcher: Shared, read-only pattern matcher.
        stats: MatcherStatistics instance.
        fault: Shared fault record.
        poll_interval: How often blocked queue operations re-check cancellation.
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        input_queue: PartitionedQueue,
        output_queue: BoundedQueue,
        matcher: PatternMatcher,
        stats: MatcherStatistics,
        fault: PipelineFault,
        poll_interval: float = Timeout.QUEUE_POLL,
    ) -> None:
        self.input_queue = input_queue
        self.output_queue = output_queue
        self.matcher = matcher
        self.stats = stats
        self.fault = fault
        self.poll_interval = poll_interval
        self.workers: list[LineMatcherWorker] = []
        self._started = False

    @property
    def num_workers(self) -> int:
        return len(self.input_queue)

    def start(self) -> None:
        """Start one worker per partition."""
        if self._started:
            raise RuntimeError("Matcher pool has already been started")

        for i, partition in enumerate(self.input_queue):
            worker = LineMatcherWorker(
                input_queue=partition,
                output_queue=self.output_queue,
                matcher=self.matcher,
                stats=self.stats,
                fault=self.fault,
                worker_id=f"matcher_{i}",
                poll_interval=self.poll_interval,
            )
            self.workers.append(worker)
            worker.start()

        self._started = True

    def join(self, timeout: float | None = None) -> None:
        """Wait for all worker threads to complete."""
        if not self._started:
            raise RuntimeError("Matcher pool has not been started")

        for worker in self.workers:
            worker.join(timeout=timeout)

    def stop(self) -> None:
        """Stop all worker threads."""
        self.fault.cancel()

    def is_alive(self) -> bool:
        """Check if any worker threads are still alive."""
        return any(worker.is_alive() for worker in self.workers)
