"""Pipeline utilities package.

This package provides core utilities for the search pipeline:
- BoundedQueue / PartitionedQueue: Thread-safe queues with size limits for backpressure
- PipelineFault: Shared cancellation and failure record
- Statistics classes: For collecting pipeline metrics
"""

from __future__ import annotations

from findstr.core.pipeline.utils.bounded_queue import BoundedQueue, PartitionedQueue
from findstr.core.pipeline.utils.statistics import (
    MatcherStatistics,
    ReaderStatistics,
    ScanStatistics,
    SinkStatistics,
)
from findstr.core.pipeline.utils.synchronization import PipelineFault

__all__ = [
    "BoundedQueue",
    "MatcherStatistics",
    "PartitionedQueue",
    "PipelineFault",
    "ReaderStatistics",
    "ScanStatistics",
    "SinkStatistics",
]
