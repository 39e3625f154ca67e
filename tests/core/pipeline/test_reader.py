"""Tests for the File Reader stage."""

import threading
from pathlib import Path

from findstr.core.models import ErrorRead, LineRead
from findstr.core.pipeline.components import FileReader, FileReaderPool
from findstr.core.pipeline.utils import BoundedQueue, PartitionedQueue, PipelineFault
from findstr.shared.constants import Pipeline

READER_OPEN = "findstr.core.pipeline.components.reader.open"


class FlakyFile:
    """File stand-in whose iteration fails after ``good_lines`` lines."""

    def __init__(self, good_lines: int) -> None:
        self.good_lines = good_lines
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> bool:
        self.closed = True
        return False

    def __iter__(self):
        return self._lines()

    def _lines(self):
        for i in range(self.good_lines):
            yield f"line {i + 1}\n"
        raise OSError(5, "Input/output error")


class TestFileReader:
    """Test cases for FileReader.read."""

    def test_emits_every_line_in_order(self, tmp_path: Path) -> None:
        # Given
        path = tmp_path / "three.txt"
        path.write_text("one\ntwo\nthree", encoding="utf-8")
        reader = FileReader()

        # When
        results = list(reader.read(str(path)))

        # Then
        assert results == [
            LineRead(str(path), 1, "one"),
            LineRead(str(path), 2, "two"),
            LineRead(str(path), 3, "three"),
        ]
        assert reader.stats.files_read == 1
        assert reader.stats.lines_read == 3

    def test_trailing_newline_adds_no_empty_line(self, tmp_path: Path) -> None:
        path = tmp_path / "a.txt"
        path.write_text("a\n", encoding="utf-8")

        assert [r.line_text for r in FileReader().read(str(path))] == ["a"]

    def test_windows_line_endings_are_stripped(self, tmp_path: Path) -> None:
        path = tmp_path / "crlf.txt"
        path.write_bytes(b"a\r\nb\r\n")

        assert [r.line_text for r in FileReader().read(str(path))] == ["a", "b"]

    def test_empty_file_yields_nothing(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.txt"
        path.write_bytes(b"")
        reader = FileReader()

        assert list(reader.read(str(path))) == []
        assert reader.stats.files_read == 1

    def test_missing_file_yields_single_error(self, tmp_path: Path) -> None:
        path = tmp_path / "missing.txt"
        reader = FileReader()

        results = list(reader.read(str(path)))

        assert results == [ErrorRead(str(path), "No such file or directory")]
        assert reader.stats.read_errors == 1
        assert reader.stats.files_read == 0

    def test_directory_yields_single_error(self, tmp_path: Path) -> None:
        results = list(FileReader().read(str(tmp_path)))

        assert len(results) == 1
        assert isinstance(results[0], ErrorRead)

    def test_undecodable_bytes_are_replaced(self, tmp_path: Path) -> None:
        path = tmp_path / "latin1.txt"
        path.write_bytes(b"caf\xe9 foo\n")

        (result,) = FileReader().read(str(path))

        assert result.line_text == "caf� foo"

    def test_configured_encoding_is_used(self, tmp_path: Path) -> None:
        path = tmp_path / "latin1.txt"
        path.write_bytes(b"caf\xe9\n")

        (result,) = FileReader(encoding="latin-1").read(str(path))

        assert result.line_text == "café"

    def test_handle_released_on_early_close(self, tmp_path: Path, mocker) -> None:
        # Given
        path = tmp_path / "many.txt"
        path.write_text("x\n" * 100, encoding="utf-8")
        handles = []

        def tracking_open(*args, **kwargs):
            handle = open(*args, **kwargs)  # noqa: SIM115
            handles.append(handle)
            return handle

        mocker.patch(READER_OPEN, side_effect=tracking_open, create=True)
        results = FileReader().read(str(path))

        # When
        next(results)
        results.close()

        # Then
        assert len(handles) == 1
        assert handles[0].closed

    def test_failure_before_first_line_is_an_error(self, tmp_path: Path, mocker) -> None:
        flaky = FlakyFile(good_lines=0)
        mocker.patch(READER_OPEN, return_value=flaky, create=True)
        reader = FileReader()

        results = list(reader.read(str(tmp_path / "flaky.txt")))

        assert results == [ErrorRead(str(tmp_path / "flaky.txt"), "Input/output error")]
        assert flaky.closed

    def test_failure_after_lines_truncates_without_error(self, tmp_path: Path, mocker) -> None:
        flaky = FlakyFile(good_lines=2)
        mocker.patch(READER_OPEN, return_value=flaky, create=True)
        reader = FileReader()

        results = list(reader.read(str(tmp_path / "flaky.txt")))

        assert [type(r) for r in results] == [LineRead, LineRead]
        assert reader.stats.truncated_files == 1
        assert reader.stats.read_errors == 0
        assert flaky.closed


class TestFileReaderPool:
    """Test cases for the reader worker pool."""

    def test_lines_of_a_file_share_one_partition_in_order(self, tmp_path: Path) -> None:
        # Given
        paths = []
        for i in range(6):
            path = tmp_path / f"f{i}.txt"
            path.write_text("".join(f"line {n}\n" for n in range(20)), encoding="utf-8")
            paths.append(str(path))

        path_queue = BoundedQueue(maxsize=100)
        read_queue = PartitionedQueue(partitions=3, maxsize=1000)
        fault = PipelineFault()
        pool = FileReaderPool(3, path_queue, read_queue, FileReader(), fault, poll_interval=0.01)
        for p in paths:
            path_queue.put(p)
        for _ in range(3):
            path_queue.put(Pipeline.SENTINEL)

        # When
        pool.start()
        pool.join(timeout=5)

        # Then
        assert not pool.is_alive()
        assert not fault.has_fault
        for partition in read_queue:
            seen: dict[str, list[int]] = {}
            while not partition.empty():
                result = partition.get()
                seen.setdefault(result.file_path, []).append(result.line_number)
            for file_path, numbers in seen.items():
                assert read_queue.partition_for(file_path) is partition
                assert numbers == list(range(1, 21))
        assert pool.stats.files_read == 6

    def test_reader_stops_when_cancelled(self, tmp_path: Path) -> None:
        path_queue = BoundedQueue(maxsize=10)
        fault = PipelineFault()
        pool = FileReaderPool(
            2, path_queue, PartitionedQueue(1, maxsize=10), FileReader(), fault, poll_interval=0.01
        )

        pool.start()
        fault.cancel()
        pool.join(timeout=5)

        assert not pool.is_alive()

    def test_worker_failure_is_reported(self, tmp_path: Path, mocker) -> None:
        reader = FileReader()
        mocker.patch.object(reader, "read", side_effect=RuntimeError("disk on fire"))
        path_queue = BoundedQueue(maxsize=10)
        fault = PipelineFault()
        pool = FileReaderPool(
            1, path_queue, PartitionedQueue(1, maxsize=10), reader, fault, poll_interval=0.01
        )
        path_queue.put(str(tmp_path / "x.txt"))

        pool.start()
        pool.join(timeout=5)

        assert fault.stage == "reader"
        assert "disk on fire" in str(fault.error)
        assert not pool.is_alive()

    def test_cancel_while_blocked_on_full_partition(self, tmp_path: Path) -> None:
        path = tmp_path / "big.txt"
        path.write_text("x\n" * 50, encoding="utf-8")
        path_queue = BoundedQueue(maxsize=10)
        read_queue = PartitionedQueue(1, maxsize=2)
        fault = PipelineFault()
        pool = FileReaderPool(1, path_queue, read_queue, FileReader(), fault, poll_interval=0.01)
        path_queue.put(str(path))

        pool.start()
        timer = threading.Timer(0.1, fault.cancel)
        timer.start()
        pool.join(timeout=5)
        timer.join()

        assert not pool.is_alive()
        assert read_queue.qsize() == 2
