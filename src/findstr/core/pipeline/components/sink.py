"""Result Sink stage for the findstr pipeline.

This module provides the ResultSink class, the single consumer of the
match queue. It hands every result to the output writer in arrival order.
A failing writer is fatal: the sink records the fault, which cancels every
upstream stage.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from findstr.core.models import ErrorMatch, LineMatch
from findstr.core.pipeline.utils import BoundedQueue, PipelineFault, SinkStatistics
from findstr.output.base import OutputWriter
from findstr.shared.constants import Pipeline, Timeout
from findstr.shared.errors import ErrorCode, ErrorContext, OutputError, create_output_error
from findstr.shared.logging import log_operation_error, log_operation_success

logger = logging.getLogger(__name__)


class ResultSink(threading.Thread):
    """Consumer that writes match results to the output collaborator.

    Args:
        input_queue: BoundedQueue of MatchResult items.
        writer: Output collaborator receiving rendered results.
        stats: SinkStatistics instance.
        fault: Shared fault record.
        poll_interval: How often a blocked get re-checks cancellation.
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        input_queue: BoundedQueue,
        writer: OutputWriter,
        stats: SinkStatistics,
        fault: PipelineFault,
        poll_interval: float = Timeout.QUEUE_POLL,
    ) -> None:
        super().__init__(name="findstr-sink", daemon=True)
        self.input_queue = input_queue
        self.writer = writer
        self.stats = stats
        self.fault = fault
        self.poll_interval = poll_interval

    def run(self) -> None:
        """Write results until the sentinel arrives or the run is cancelled."""
        try:
            while True:
                received, item = self.input_queue.get_unless_cancelled(
                    self.fault.cancel_event,
                    self.poll_interval,
                )
                if not received or item is Pipeline.SENTINEL:
                    break
                self.emit(item)

            self.writer.flush()
            log_operation_success(logger, "write_results", 0.0, self.stats.snapshot())
        except OutputError as e:
            log_operation_error(logger, e)
            self.fault.report("sink", e)
        # pylint: disable-next=broad-exception-caught
        except Exception as e:  # noqa: BLE001
            error = create_output_error(f"Writing results failed: {e}", original_error=e)
            log_operation_error(logger, error)
            self.fault.report("sink", error)

    def emit(self, item: Any) -> None:
        """Write one result.

        Unknown items are logged and skipped; writer failures propagate.

        Raises:
            OutputError: If the output channel is broken.
        """
        match item:
            case LineMatch():
                self._write(self.writer.write_match, item)
                self.stats.increment_matches_written()
            case ErrorMatch():
                self._write(self.writer.write_error, item)
                self.stats.increment_errors_written()
            case _:
                self.stats.increment_items_skipped()
                logger.warning(
                    "Skipping unexpected result of type %s",
                    type(item).__name__,
                    extra={"operation": "emit_result"},
                )

    @staticmethod
    def _write(write: Any, item: LineMatch | ErrorMatch) -> None:
        try:
            write(item)
        except OutputError:
            raise
        except (OSError, ValueError) as e:
            raise OutputError(
                ErrorCode.CLI_OUTPUT_ERROR,
                f"Cannot write result for {item.file_path}: {e}",
                ErrorContext(file_path=item.file_path, operation="write_result"),
                original_error=e,
            ) from e

    def stop(self) -> None:
        """Signal the sink to stop."""
        self.fault.cancel()
