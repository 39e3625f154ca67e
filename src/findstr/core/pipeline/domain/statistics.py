"""Pipeline statistics report and formatting.

This module provides:
- PipelineReport: immutable snapshot of every stage's counters
- format_statistics(): human-readable report printed by ``--stats``
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from findstr.core.pipeline.utils import (
    MatcherStatistics,
    ReaderStatistics,
    ScanStatistics,
    SinkStatistics,
)


@dataclass(frozen=True)
class PipelineReport:
    """Counters of one finished pipeline run."""

    scan: dict[str, int]
    reader: dict[str, int]
    matcher: dict[str, int]
    sink: dict[str, int]
    queue_peaks: dict[str, int] = field(default_factory=dict)
    queue_size: int = 0
    duration: float = 0.0

    @classmethod
    def from_statistics(  # pylint: disable=too-many-arguments
        cls,
        scan_stats: ScanStatistics,
        reader_stats: ReaderStatistics,
        matcher_stats: MatcherStatistics,
        sink_stats: SinkStatistics,
        queue_peaks: dict[str, int],
        queue_size: int,
        duration: float,
    ) -> PipelineReport:
        return cls(
            scan=scan_stats.snapshot(),
            reader=reader_stats.snapshot(),
            matcher=matcher_stats.snapshot(),
            sink=sink_stats.snapshot(),
            queue_peaks=dict(queue_peaks),
            queue_size=queue_size,
            duration=duration,
        )

    @property
    def matches(self) -> int:
        return self.sink.get("matches_written", 0)

    @property
    def errors(self) -> int:
        return self.sink.get("errors_written", 0)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _rate(part: int, total: int) -> float:
    return (part / total * 100) if total > 0 else 0.0


def format_statistics(report: PipelineReport) -> str:
    """Format a pipeline report into a human-readable block.

    Args:
        report: PipelineReport of a finished run.

    Returns:
        A formatted multi-line string containing all statistics.
    """
    scan, reader, matcher, sink = report.scan, report.reader, report.matcher, report.sink
    examined = matcher.get("lines_examined", 0)
    matched = matcher.get("lines_matched", 0)

    lines = [
        "",
        "=" * 60,
        "                    SEARCH STATISTICS",
        "=" * 60,
        "",
        "Timing:",
        f"  - Total search time:    {report.duration:.2f}s",
        "",
        "Scanner:",
        f"  - Files queued:         {scan.get('files_queued', 0):,}",
        f"  - Directories scanned:  {scan.get('directories_scanned', 0):,}",
        f"  - Entries skipped:      {scan.get('entries_skipped', 0):,}",
        "",
        "Reader:",
        f"  - Files read:           {reader.get('files_read', 0):,}",
        f"  - Lines read:           {reader.get('lines_read', 0):,}",
        f"  - Read errors:          {reader.get('read_errors', 0):,}",
        f"  - Truncated files:      {reader.get('truncated_files', 0):,}",
        "",
        "Matcher:",
        f"  - Lines examined:       {examined:,}",
        f"  - Lines matched:        {matched:,} ({_rate(matched, examined):.2f}%)",
        "",
        "Output:",
        f"  - Matches written:      {sink.get('matches_written', 0):,}",
        f"  - Errors written:       {sink.get('errors_written', 0):,}",
        "",
        f"Queues (capacity {report.queue_size:,}):",
    ]
    lines.extend(
        f"  - Peak {name + ':':<18}{peak:,}" for name, peak in report.queue_peaks.items()
    )
    lines.extend(["", "=" * 60, ""])

    return "\n".join(lines)


__all__ = ["PipelineReport", "format_statistics"]
