"""Bounded queues for pipeline backpressure control.

This module provides BoundedQueue, a thread-safe queue wrapper with size
limits, and PartitionedQueue, a set of bounded queues with keyed routing.
Blocking operations can be given a cancel event: they wake up every
``poll_interval`` seconds and give up once the event is set, so a faulted
pipeline never leaves a thread blocked on a queue nobody drains.
"""

from __future__ import annotations

import queue
import threading
import zlib
from typing import Any

from findstr.shared.constants import Timeout


class BoundedQueue:
    """A ``queue.Queue`` whose blocking puts throttle the producing stage.

    Besides the plain put/get it records the largest size seen, which the
    statistics report as the queue peak.

    Args:
        maxsize: Capacity; 0 means unbounded.
    """

    def __init__(self, maxsize: int = 0) -> None:
        self._queue: queue.Queue[Any] = queue.Queue(maxsize=maxsize)
        self._maxsize = maxsize
        self._peak_lock = threading.Lock()
        self._peak_size = 0

    def put(
        self,
        item: Any,
        block: bool = True,
        timeout: float | None = None,
    ) -> None:
        """Queue ``item``, waiting for a free slot like ``queue.Queue.put``.

        Raises:
            queue.Full: When no slot frees up in time (or at once if not blocking).
        """
        self._queue.put(item, block=block, timeout=timeout)
        self._record_size()

    def get(self, block: bool = True, timeout: float | None = None) -> Any:
        """Take the oldest item, waiting like ``queue.Queue.get``.

        Raises:
            queue.Empty: When nothing arrives in time (or at once if not blocking).
        """
        return self._queue.get(block=block, timeout=timeout)

    def put_unless_cancelled(
        self,
        item: Any,
        cancel_event: threading.Event,
        poll_interval: float = Timeout.QUEUE_POLL,
    ) -> bool:
        """Block until the item is queued or the cancel event is set.

        Returns:
            True if the item was queued, False if cancelled first.
        """
        while not cancel_event.is_set():
            try:
                self.put(item, timeout=poll_interval)
            except queue.Full:
                continue
            return True
        return False

    def get_unless_cancelled(
        self,
        cancel_event: threading.Event,
        poll_interval: float = Timeout.QUEUE_POLL,
    ) -> tuple[bool, Any]:
        """Block until an item arrives or the cancel event is set.

        Returns:
            ``(True, item)`` on success, ``(False, None)`` if cancelled first.
        """
        while not cancel_event.is_set():
            try:
                return True, self.get(timeout=poll_interval)
            except queue.Empty:
                continue
        return False, None

    def _record_size(self) -> None:
        size = self._queue.qsize()
        with self._peak_lock:
            self._peak_size = max(size, self._peak_size)

    def qsize(self) -> int:
        """Approximate number of queued items."""
        return self._queue.qsize()

    def empty(self) -> bool:
        return self._queue.empty()

    @property
    def maxsize(self) -> int:
        return self._maxsize

    @property
    def peak_size(self) -> int:
        """Largest size observed right after a put."""
        with self._peak_lock:
            return self._peak_size


class PartitionedQueue:
    """A fixed set of bounded queues with keyed routing.

    Items sharing a key always land in the same partition, so a single
    consumer per partition sees them in the order they were put.

    Args:
        partitions: Number of partitions (one per consumer).
        maxsize: Maximum size of each partition.
    """

    def __init__(self, partitions: int, maxsize: int = 0) -> None:
        if partitions < 1:
            msg = f"partitions must be >= 1, got {partitions}"
            raise ValueError(msg)
        self._partitions = [BoundedQueue(maxsize=maxsize) for _ in range(partitions)]

    def partition_for(self, key: str) -> BoundedQueue:
        """Return the partition that owns ``key``."""
        # crc32 rather than hash(): stable across interpreter runs
        index = zlib.crc32(key.encode("utf-8", "surrogatepass")) % len(self._partitions)
        return self._partitions[index]

    def partition(self, index: int) -> BoundedQueue:
        return self._partitions[index]

    def put_unless_cancelled(
        self,
        key: str,
        item: Any,
        cancel_event: threading.Event,
        poll_interval: float = Timeout.QUEUE_POLL,
    ) -> bool:
        """Route ``item`` by ``key`` and queue it, see BoundedQueue.put_unless_cancelled."""
        return self.partition_for(key).put_unless_cancelled(
            item, cancel_event, poll_interval
        )

    def __len__(self) -> int:
        return len(self._partitions)

    def __iter__(self):
        return iter(self._partitions)

    def qsize(self) -> int:
        """Total approximate size over all partitions."""
        return sum(p.qsize() for p in self._partitions)

    @property
    def maxsize(self) -> int:
        return self._partitions[0].maxsize

    @property
    def peak_size(self) -> int:
        """Largest peak size of any single partition."""
        return max(p.peak_size for p in self._partitions)
