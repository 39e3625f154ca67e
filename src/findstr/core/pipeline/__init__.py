"""Three-stage streaming search pipeline.

Scanner -> File Reader -> Line Matcher -> Result Sink, connected by
bounded queues and drained stage by stage.
"""

from findstr.core.pipeline.domain import (
    PipelineFactory,
    PipelineReport,
    format_statistics,
    run_pipeline,
)

__all__ = ["PipelineFactory", "PipelineReport", "format_statistics", "run_pipeline"]
