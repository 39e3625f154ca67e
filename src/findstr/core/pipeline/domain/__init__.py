"""Pipeline orchestration, lifecycle and statistics reporting."""

from findstr.core.pipeline.domain.orchestrator import (
    PipelineComponents,
    PipelineFactory,
    run_pipeline,
)
from findstr.core.pipeline.domain.statistics import PipelineReport, format_statistics

__all__ = [
    "PipelineComponents",
    "PipelineFactory",
    "PipelineReport",
    "format_statistics",
    "run_pipeline",
]
