"""Pipeline-related constants."""


class Pipeline:
    """Pipeline configuration constants."""

    QUEUE_SIZE = 1000
    READER_WORKERS = 4
    MATCHER_WORKERS = 2
    SENTINEL = object()  # Unique sentinel object


class Timeout:
    """Timeout configuration constants (seconds)."""

    QUEUE_POLL = 0.1  # Interval at which blocked queue operations re-check cancellation
    PIPELINE_SHUTDOWN = 5.0  # Grace period for threads after cancellation


__all__ = ["Pipeline", "Timeout"]
