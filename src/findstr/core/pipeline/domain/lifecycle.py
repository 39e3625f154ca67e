"""Pipeline component lifecycle management.

This module provides functions for managing the lifecycle of pipeline components:
- Starting components
- Waiting for each stage to drain
- Signalling end-of-input to the next stage
- Cancelling and reaping threads after a fault or interrupt
"""

from __future__ import annotations

import logging

from findstr.core.pipeline.components import (
    DirectoryScanner,
    FileReaderPool,
    LineMatcherPool,
    ResultSink,
)
from findstr.core.pipeline.utils import BoundedQueue, PartitionedQueue, PipelineFault
from findstr.shared.constants import Pipeline, Timeout
from findstr.shared.errors import (
    ErrorCode,
    ErrorContext,
    FindstrError,
    InfrastructureError,
    OutputError,
)
from findstr.shared.logging import log_operation_error, log_operation_success

logger = logging.getLogger(__name__)


def start_pipeline_components(
    scanner: DirectoryScanner,
    reader_pool: FileReaderPool,
    matcher_pool: LineMatcherPool,
    sink: ResultSink,
) -> None:
    """Start all pipeline components, most downstream first.

    Raises:
        InfrastructureError: If component startup fails.
    """
    context = ErrorContext(
        operation="start_pipeline_components",
        additional_data={
            "reader_workers": reader_pool.num_workers,
            "matcher_workers": matcher_pool.num_workers,
        },
    )

    try:
        logger.debug("Starting result sink...")
        sink.start()

        logger.debug("Starting matcher pool with %s workers...", matcher_pool.num_workers)
        matcher_pool.start()

        logger.debug("Starting reader pool with %s workers...", reader_pool.num_workers)
        reader_pool.start()

        logger.debug("Starting scanner...")
        scanner.start()

        log_operation_success(logger, "start_pipeline_components", 0.0, context=context)

    except (RuntimeError, OSError) as e:
        error = InfrastructureError(
            ErrorCode.PIPELINE_INITIALIZATION_ERROR,
            f"Failed to start pipeline components: {e}",
            context,
            original_error=e,
        )
        log_operation_error(logger, error)
        raise error from e


def wait_for_scanner_completion(scanner: DirectoryScanner) -> None:
    """Wait for the directory walk to finish."""
    logger.debug("Waiting for scanner to complete...")
    scanner.join()
    logger.debug("Scanner completed. Queued %s files.", scanner.stats.files_queued)


def _put_sentinels(
    queues: list[BoundedQueue],
    fault: PipelineFault,
    poll_interval: float,
    operation: str,
) -> None:
    """Put one sentinel into each queue; stop quietly once cancelled."""
    try:
        for target in queues:
            if not target.put_unless_cancelled(
                Pipeline.SENTINEL,
                fault.cancel_event,
                poll_interval,
            ):
                logger.debug("Run cancelled, %s skipped", operation)
                return

        log_operation_success(logger, operation, 0.0, {"sentinels": len(queues)})

    except Exception as e:
        error = InfrastructureError(
            ErrorCode.QUEUE_OPERATION_ERROR,
            f"Failed to signal end of input: {e}",
            ErrorContext(operation=operation),
            original_error=e,
        )
        log_operation_error(logger, error)
        raise error from e


def signal_reader_shutdown(
    path_queue: BoundedQueue,
    num_workers: int,
    fault: PipelineFault,
    poll_interval: float = Timeout.QUEUE_POLL,
) -> None:
    """Signal end-of-input to every reader worker.

    Raises:
        InfrastructureError: If sentinel signalling fails.
    """
    logger.debug("Sending %s sentinel values to reader workers...", num_workers)
    _put_sentinels([path_queue] * num_workers, fault, poll_interval, "signal_reader_shutdown")


def wait_for_reader_completion(reader_pool: FileReaderPool) -> None:
    """Wait for every reader worker to finish."""
    logger.debug("Waiting for reader pool to complete...")
    reader_pool.join()
    logger.debug(
        "Reader pool completed. Read %s lines from %s files.",
        reader_pool.stats.lines_read,
        reader_pool.stats.files_read,
    )


def signal_matcher_shutdown(
    read_queue: PartitionedQueue,
    fault: PipelineFault,
    poll_interval: float = Timeout.QUEUE_POLL,
) -> None:
    """Signal end-of-input to every matcher partition.

    Raises:
        InfrastructureError: If sentinel signalling fails.
    """
    logger.debug("Sending %s sentinel values to matcher workers...", len(read_queue))
    _put_sentinels(list(read_queue), fault, poll_interval, "signal_matcher_shutdown")


def wait_for_matcher_completion(matcher_pool: LineMatcherPool) -> None:
    """Wait for every matcher worker to finish."""
    logger.debug("Waiting for matcher pool to complete...")
    matcher_pool.join()
    logger.debug(
        "Matcher pool completed. Matched %s of %s lines.",
        matcher_pool.stats.lines_matched,
        matcher_pool.stats.lines_examined,
    )


def signal_sink_shutdown(
    match_queue: BoundedQueue,
    fault: PipelineFault,
    poll_interval: float = Timeout.QUEUE_POLL,
) -> None:
    """Signal end-of-input to the result sink.

    Raises:
        InfrastructureError: If sentinel signalling fails.
    """
    logger.debug("Sending sentinel value to result sink...")
    _put_sentinels([match_queue], fault, poll_interval, "signal_sink_shutdown")


def wait_for_sink_completion(sink: ResultSink) -> int:
    """Wait for the result sink to finish.

    Returns:
        Number of results written.
    """
    logger.debug("Waiting for result sink to complete...")
    sink.join()
    written = sink.stats.matches_written + sink.stats.errors_written
    logger.debug("Result sink completed. Wrote %s results.", written)
    return written


def graceful_shutdown(  # pylint: disable=too-many-arguments
    fault: PipelineFault,
    scanner: DirectoryScanner,
    reader_pool: FileReaderPool,
    matcher_pool: LineMatcherPool,
    sink: ResultSink,
    timeout: float = Timeout.PIPELINE_SHUTDOWN,
) -> None:
    """Cancel the run and give every thread ``timeout`` seconds to exit.

    Threads still alive afterwards are daemon threads and are abandoned
    with a warning.
    """
    context = ErrorContext(operation="graceful_shutdown")

    try:
        logger.debug("Attempting graceful shutdown...")
        fault.cancel()

        for name, component in (
            ("scanner", scanner),
            ("reader pool", reader_pool),
            ("matcher pool", matcher_pool),
            ("sink", sink),
        ):
            try:
                component.join(timeout=timeout)
            except RuntimeError:
                # Never started
                continue
            if component.is_alive():
                logger.warning("%s did not stop within %.1fs", name.capitalize(), timeout)

        log_operation_success(logger, "graceful_shutdown", 0.0, context=context)

    except Exception as e:  # noqa: BLE001
        error = InfrastructureError(
            ErrorCode.PIPELINE_SHUTDOWN_ERROR,
            f"Graceful shutdown failed: {e}",
            context,
            original_error=e,
        )
        log_operation_error(logger, error)


def raise_if_faulted(fault: PipelineFault) -> None:
    """Raise the first fault recorded during the run, if any.

    Raises:
        OutputError: If the output channel failed.
        InfrastructureError: For any other stage failure.
    """
    error = fault.error
    if error is None:
        return
    if isinstance(error, OutputError):
        raise error
    original = error.original_error if isinstance(error, FindstrError) else error
    raise InfrastructureError(
        ErrorCode.PIPELINE_EXECUTION_ERROR,
        f"Pipeline execution failed in {fault.stage}: {original}",
        ErrorContext(operation="run_pipeline", additional_data={"stage": fault.stage}),
        original_error=error,
    ) from error


__all__ = [
    "graceful_shutdown",
    "raise_if_faulted",
    "signal_matcher_shutdown",
    "signal_reader_shutdown",
    "signal_sink_shutdown",
    "start_pipeline_components",
    "wait_for_matcher_completion",
    "wait_for_reader_completion",
    "wait_for_scanner_completion",
    "wait_for_sink_completion",
]
