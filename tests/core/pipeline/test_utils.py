"""Tests for pipeline queues, fault record and statistics."""

import threading
import time

import pytest

from findstr.core.pipeline.utils import (
    BoundedQueue,
    PartitionedQueue,
    PipelineFault,
    ReaderStatistics,
    ScanStatistics,
)


class TestBoundedQueue:
    """Test cases for BoundedQueue."""

    def test_fifo_order(self) -> None:
        q = BoundedQueue(maxsize=3)
        for item in (1, 2, 3):
            q.put(item)

        assert [q.get(), q.get(), q.get()] == [1, 2, 3]
        assert q.empty()

    def test_peak_size_never_exceeds_maxsize(self) -> None:
        q = BoundedQueue(maxsize=2)
        cancel = threading.Event()

        def consume() -> None:
            for _ in range(50):
                q.get()

        consumer = threading.Thread(target=consume)
        consumer.start()
        for i in range(50):
            assert q.put_unless_cancelled(i, cancel, poll_interval=0.01)
        consumer.join(timeout=5)

        assert 1 <= q.peak_size <= 2

    def test_put_gives_up_when_cancelled(self) -> None:
        q = BoundedQueue(maxsize=1)
        q.put("occupied")
        cancel = threading.Event()
        timer = threading.Timer(0.05, cancel.set)
        timer.start()

        started = time.monotonic()
        queued = q.put_unless_cancelled("blocked", cancel, poll_interval=0.01)

        assert queued is False
        assert time.monotonic() - started < 2
        assert q.qsize() == 1
        timer.join()

    def test_get_gives_up_when_cancelled(self) -> None:
        q = BoundedQueue(maxsize=1)
        cancel = threading.Event()
        cancel.set()

        assert q.get_unless_cancelled(cancel, poll_interval=0.01) == (False, None)

    def test_get_unless_cancelled_returns_item(self) -> None:
        q = BoundedQueue(maxsize=1)
        q.put("item")

        assert q.get_unless_cancelled(threading.Event(), 0.01) == (True, "item")


class TestPartitionedQueue:
    """Test cases for PartitionedQueue."""

    def test_same_key_same_partition(self) -> None:
        pq = PartitionedQueue(partitions=4, maxsize=10)

        assert pq.partition_for("/tmp/a.txt") is pq.partition_for("/tmp/a.txt")

    def test_keys_are_spread_over_partitions(self) -> None:
        pq = PartitionedQueue(partitions=4, maxsize=10)

        used = {id(pq.partition_for(f"/tmp/file_{i}.txt")) for i in range(100)}

        assert len(used) > 1

    def test_put_routes_by_key(self) -> None:
        pq = PartitionedQueue(partitions=3, maxsize=10)
        cancel = threading.Event()

        for n in range(5):
            assert pq.put_unless_cancelled("/tmp/a.txt", n, cancel, 0.01)

        target = pq.partition_for("/tmp/a.txt")
        assert [target.get() for _ in range(5)] == [0, 1, 2, 3, 4]
        assert pq.qsize() == 0

    def test_iteration_and_length(self) -> None:
        pq = PartitionedQueue(partitions=3, maxsize=7)

        assert len(pq) == 3
        assert [p.maxsize for p in pq] == [7, 7, 7]
        assert pq.maxsize == 7

    def test_requires_at_least_one_partition(self) -> None:
        with pytest.raises(ValueError, match="partitions must be >= 1"):
            PartitionedQueue(partitions=0)


class TestPipelineFault:
    """Test cases for PipelineFault."""

    def test_first_fault_wins(self) -> None:
        fault = PipelineFault()
        first = RuntimeError("first")

        assert fault.report("reader", first) is True
        assert fault.report("sink", RuntimeError("second")) is False
        assert fault.stage == "reader"
        assert fault.error is first
        assert fault.has_fault

    def test_report_cancels_the_run(self) -> None:
        fault = PipelineFault()

        fault.report("matcher", RuntimeError("boom"))

        assert fault.is_cancelled
        assert fault.cancel_event.is_set()

    def test_cancel_records_no_fault(self) -> None:
        fault = PipelineFault()

        fault.cancel()

        assert fault.is_cancelled
        assert not fault.has_fault
        assert fault.error is None


class TestStatistics:
    """Test cases for the statistics collectors."""

    def test_concurrent_increments_are_not_lost(self) -> None:
        stats = ReaderStatistics()

        def work() -> None:
            for _ in range(1000):
                stats.increment_lines_read()

        threads = [threading.Thread(target=work) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert stats.lines_read == 8000

    def test_snapshot_is_a_copy(self) -> None:
        stats = ScanStatistics()
        stats.increment_files_queued()

        snapshot = stats.snapshot()
        stats.increment_files_queued()

        assert snapshot == {"files_queued": 1, "directories_scanned": 0, "entries_skipped": 0}
        assert stats.files_queued == 2
