"""Tests for the pipeline statistics report."""

from findstr.core.pipeline.domain.statistics import PipelineReport, format_statistics
from findstr.core.pipeline.utils import (
    MatcherStatistics,
    ReaderStatistics,
    ScanStatistics,
    SinkStatistics,
)


def make_report() -> PipelineReport:
    scan, reader, matcher, sink = (
        ScanStatistics(),
        ReaderStatistics(),
        MatcherStatistics(),
        SinkStatistics(),
    )
    for _ in range(3):
        scan.increment_files_queued()
        reader.increment_files_read()
    reader.increment_lines_read(count=1200)
    for _ in range(4):
        matcher.increment_lines_examined()
    matcher.increment_lines_matched()
    sink.increment_matches_written()
    sink.increment_errors_written()
    return PipelineReport.from_statistics(
        scan, reader, matcher, sink, {"path_queue": 2, "match_queue": 1}, 1000, 0.25
    )


class TestPipelineReport:
    """Test cases for PipelineReport."""

    def test_counts(self) -> None:
        report = make_report()

        assert report.matches == 1
        assert report.errors == 1
        assert report.scan["files_queued"] == 3

    def test_to_dict_is_plain_data(self) -> None:
        data = make_report().to_dict()

        assert data["reader"]["lines_read"] == 1200
        assert data["queue_peaks"] == {"path_queue": 2, "match_queue": 1}
        assert data["duration"] == 0.25


class TestFormatStatistics:
    """Test cases for format_statistics."""

    def test_report_lists_every_stage(self) -> None:
        text = format_statistics(make_report())

        assert "SEARCH STATISTICS" in text
        assert "Total search time:    0.25s" in text
        assert "Lines read:           1,200" in text
        assert "Lines matched:        1 (25.00%)" in text
        assert "Peak path_queue:" in text

    def test_empty_run_has_no_division_error(self) -> None:
        empty = PipelineReport(scan={}, reader={}, matcher={}, sink={})

        assert "Lines matched:        0 (0.00%)" in format_statistics(empty)
