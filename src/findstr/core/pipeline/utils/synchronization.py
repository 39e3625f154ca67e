"""Thread-safe synchronization utilities for pipeline components.

PipelineFault is the shared cancellation and failure record for one
pipeline run. Any stage that hits an unrecoverable error reports it here;
reporting sets the cancel event every blocking queue operation polls, so
upstream stages stop producing and downstream stages stop waiting.
"""

from __future__ import annotations

import threading


class PipelineFault:
    """First-failure-wins fault record shared by all pipeline threads.

    Example:
        >>> fault = PipelineFault()
        >>> fault.report("reader", RuntimeError("boom"))
        True
        >>> fault.cancel_event.is_set()
        True
    """

    def __init__(self, cancel_event: threading.Event | None = None) -> None:
        self.cancel_event = cancel_event if cancel_event is not None else threading.Event()
        self._lock = threading.Lock()
        self._stage: str | None = None
        self._error: BaseException | None = None

    def report(self, stage: str, error: BaseException) -> bool:
        """Record ``error`` raised by ``stage`` and cancel the run.

        Returns:
            True if this was the first fault reported.
        """
        with self._lock:
            first = self._error is None
            if first:
                self._stage = stage
                self._error = error
        self.cancel_event.set()
        return first

    def cancel(self) -> None:
        """Cancel the run without recording a failure."""
        self.cancel_event.set()

    @property
    def is_cancelled(self) -> bool:
        return self.cancel_event.is_set()

    @property
    def has_fault(self) -> bool:
        with self._lock:
            return self._error is not None

    @property
    def stage(self) -> str | None:
        with self._lock:
            return self._stage

    @property
    def error(self) -> BaseException | None:
        with self._lock:
            return self._error
