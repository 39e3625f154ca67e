"""Pipeline orchestration and component factory.

This module provides factory classes and orchestration functions for the pipeline:
- PipelineFactory: Creates and wires up all pipeline components
- run_pipeline: Main orchestration function for running a complete search
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from findstr.config.models.options import SearchOptions
from findstr.core.matching import PatternMatcher, create_matcher
from findstr.core.pipeline.components import (
    DirectoryScanner,
    FileReader,
    FileReaderPool,
    LineMatcherPool,
    ResultSink,
)
from findstr.core.pipeline.domain.lifecycle import (
    graceful_shutdown,
    raise_if_faulted,
    signal_matcher_shutdown,
    signal_reader_shutdown,
    signal_sink_shutdown,
    start_pipeline_components,
    wait_for_matcher_completion,
    wait_for_reader_completion,
    wait_for_scanner_completion,
    wait_for_sink_completion,
)
from findstr.core.pipeline.domain.statistics import PipelineReport
from findstr.core.pipeline.utils import (
    BoundedQueue,
    MatcherStatistics,
    PartitionedQueue,
    PipelineFault,
    ReaderStatistics,
    ScanStatistics,
    SinkStatistics,
)
from findstr.output.base import OutputWriter
from findstr.shared.errors import (
    ErrorCode,
    ErrorContext,
    InfrastructureError,
    create_directory_not_found_error,
)
from findstr.shared.logging import log_operation_error, log_operation_start, log_operation_success

logger = logging.getLogger(__name__)


@dataclass
class PipelineComponents:
    """All queues, stages and collectors of one pipeline run."""

    fault: PipelineFault
    path_queue: BoundedQueue
    read_queue: PartitionedQueue
    match_queue: BoundedQueue
    scanner: DirectoryScanner
    reader_pool: FileReaderPool
    matcher_pool: LineMatcherPool
    sink: ResultSink
    scan_stats: ScanStatistics
    reader_stats: ReaderStatistics
    matcher_stats: MatcherStatistics
    sink_stats: SinkStatistics

    def queue_peaks(self) -> dict[str, int]:
        return {
            "path_queue": self.path_queue.peak_size,
            "read_queue": self.read_queue.peak_size,
            "match_queue": self.match_queue.peak_size,
        }


class PipelineFactory:
    """Factory for creating and wiring pipeline components."""

    @staticmethod
    def create_components(
        options: SearchOptions,
        matcher: PatternMatcher,
        writer: OutputWriter,
    ) -> PipelineComponents:
        """Create and wire all pipeline components for one run.

        Args:
            options: Immutable search options.
            matcher: Pattern matcher shared by the matcher workers.
            writer: Output collaborator used by the result sink.

        Returns:
            PipelineComponents ready to be started.

        Raises:
            InfrastructureError: If component initialization fails.
        """
        context = ErrorContext(
            operation="create_pipeline_components",
            additional_data={
                "root_path": str(options.root),
                "reader_workers": options.reader_workers,
                "matcher_workers": options.matcher_workers,
                "queue_size": options.queue_size,
            },
        )

        try:
            fault = PipelineFault()
            scan_stats = ScanStatistics()
            reader_stats = ReaderStatistics()
            matcher_stats = MatcherStatistics()
            sink_stats = SinkStatistics()

            path_queue = BoundedQueue(maxsize=options.queue_size)
            read_queue = PartitionedQueue(options.matcher_workers, maxsize=options.queue_size)
            match_queue = BoundedQueue(maxsize=options.queue_size)

            scanner = DirectoryScanner(
                root_path=options.root,
                file_glob=options.file_glob,
                output_queue=path_queue,
                stats=scan_stats,
                fault=fault,
                recurse=options.recurse,
                follow_symlinks=options.follow_symlinks,
                poll_interval=options.poll_interval,
            )
            reader_pool = FileReaderPool(
                num_workers=options.reader_workers,
                input_queue=path_queue,
                output_queue=read_queue,
                reader=FileReader(
                    encoding=options.encoding,
                    encoding_errors=options.encoding_errors,
                    stats=reader_stats,
                ),
                fault=fault,
                poll_interval=options.poll_interval,
            )
            matcher_pool = LineMatcherPool(
                input_queue=read_queue,
                output_queue=match_queue,
                matcher=matcher,
                stats=matcher_stats,
                fault=fault,
                poll_interval=options.poll_interval,
            )
            sink = ResultSink(
                input_queue=match_queue,
                writer=writer,
                stats=sink_stats,
                fault=fault,
                poll_interval=options.poll_interval,
            )

        except (ValueError, TypeError) as e:
            error = InfrastructureError(
                ErrorCode.PIPELINE_INITIALIZATION_ERROR,
                f"Failed to create pipeline components: {e}",
                context,
                original_error=e,
            )
            log_operation_error(logger, error)
            raise error from e

        log_operation_success(logger, "create_pipeline_components", 0.0, context=context)

        return PipelineComponents(
            fault=fault,
            path_queue=path_queue,
            read_queue=read_queue,
            match_queue=match_queue,
            scanner=scanner,
            reader_pool=reader_pool,
            matcher_pool=matcher_pool,
            sink=sink,
            scan_stats=scan_stats,
            reader_stats=reader_stats,
            matcher_stats=matcher_stats,
            sink_stats=sink_stats,
        )


def run_pipeline(
    options: SearchOptions,
    writer: OutputWriter,
    matcher: PatternMatcher | None = None,
) -> PipelineReport:
    """Run a complete search and return its statistics.

    This function orchestrates the entire pipeline:
    1. The scanner walks the root and queues matching file paths
    2. Reader workers turn each file into per-line read results
    3. Matcher workers keep the lines where the pattern occurs
    4. The result sink hands every result to ``writer``

    Each stage only receives end-of-input once the previous stage has
    fully finished, so every result reaches the writer before this
    function returns.

    Args:
        options: Immutable search options.
        writer: Output collaborator receiving the results.
        matcher: Pattern matcher; built from ``options`` when omitted.

    Returns:
        PipelineReport with the counters of the run.

    Raises:
        PatternError: If the pattern is invalid (before any thread starts).
        ApplicationError: If the search root is not a directory.
        OutputError: If the output channel failed during the run.
        InfrastructureError: If any stage failed unexpectedly.
    """
    if matcher is None:
        matcher = create_matcher(
            options.pattern,
            ignore_case=options.ignore_case,
            literal=options.literal,
        )
    if not options.root.is_dir():
        raise create_directory_not_found_error(options.root, operation="run_pipeline")

    log_operation_start(
        logger,
        "run_pipeline",
        {"root": str(options.root), "glob": options.file_glob, "pattern": options.pattern},
    )
    start_time = time.perf_counter()
    components = PipelineFactory.create_components(options, matcher, writer)
    fault = components.fault

    try:
        start_pipeline_components(
            components.scanner,
            components.reader_pool,
            components.matcher_pool,
            components.sink,
        )
        wait_for_scanner_completion(components.scanner)
        signal_reader_shutdown(
            components.path_queue,
            components.reader_pool.num_workers,
            fault,
            options.poll_interval,
        )
        wait_for_reader_completion(components.reader_pool)
        signal_matcher_shutdown(components.read_queue, fault, options.poll_interval)
        wait_for_matcher_completion(components.matcher_pool)
        signal_sink_shutdown(components.match_queue, fault, options.poll_interval)
        wait_for_sink_completion(components.sink)
    except BaseException:
        # Interrupts and lifecycle failures: stop every thread before leaving
        graceful_shutdown(
            fault,
            components.scanner,
            components.reader_pool,
            components.matcher_pool,
            components.sink,
        )
        raise

    raise_if_faulted(fault)

    duration = time.perf_counter() - start_time
    report = PipelineReport.from_statistics(
        components.scan_stats,
        components.reader_stats,
        components.matcher_stats,
        components.sink_stats,
        components.queue_peaks(),
        options.queue_size,
        duration,
    )
    log_operation_success(
        logger,
        "run_pipeline",
        duration * 1000,
        {"matches": report.matches, "errors": report.errors},
    )
    return report


__all__ = ["PipelineComponents", "PipelineFactory", "run_pipeline"]
