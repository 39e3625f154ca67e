"""
Logging setup and structured log helpers for findstr.

Search results own stdout, so every log handler writes to stderr or to a
file. The ``log_operation_*`` helpers attach ``operation``, ``error_code``
and ``context`` fields that the JSON formatter writes out verbatim.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

from findstr.shared.errors import ErrorContext, FindstrError

# Extra record attributes copied into JSON log lines when present
STRUCTURED_FIELDS = ("operation", "error_code", "context", "duration_ms", "result_info")


class StructuredFormatter(logging.Formatter):
    """Renders each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "thread": record.threadName,
            "message": record.getMessage(),
        }
        for field in STRUCTURED_FIELDS:
            if hasattr(record, field):
                entry[field] = getattr(record, field)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def _console_handler(level: int) -> logging.Handler:
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        log_time_format="[%H:%M:%S]",
    )
    handler.setLevel(level)
    return handler


def setup_structured_logger(
    name: str = "findstr",
    level: str = "WARNING",
    log_file: str | None = None,
    *,
    use_rich_console: bool = True,
) -> logging.Logger:
    """
    Configure the package logger for one CLI invocation.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        name: Logger to configure
        level: Level name, case-insensitive
        log_file: Also write JSON lines to this file
        use_rich_console: Pretty stderr output; False writes JSON to stderr

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    for old_handler in list(logger.handlers):
        logger.removeHandler(old_handler)
        old_handler.close()

    numeric_level = getattr(logging, level.upper())
    logger.setLevel(numeric_level)

    if use_rich_console:
        logger.addHandler(_console_handler(numeric_level))
    else:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(StructuredFormatter())
        stream_handler.setLevel(numeric_level)
        logger.addHandler(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(StructuredFormatter())
        logger.addHandler(file_handler)

    # Handlers above are the only output; keep records away from the root logger
    logger.propagate = False
    return logger


def _as_dict(context: dict[str, Any] | ErrorContext | None) -> dict[str, Any]:
    if context is None:
        return {}
    if isinstance(context, ErrorContext):
        return context.safe_dict()
    return dict(context)


def log_operation_error(
    logger: logging.Logger,
    error: FindstrError,
    operation: str | None = None,
    context: dict[str, Any] | ErrorContext | None = None,
) -> None:
    """
    Record ``error`` at ERROR level.

    ``context`` is merged over the error's own context; the traceback of
    ``error.original_error`` is attached when there is one.
    """
    merged = {**error.context.safe_dict(), **_as_dict(context)}
    logger.error(
        error.message,
        extra={
            "operation": operation or error.context.operation,
            "error_code": error.code.name,
            "context": merged,
        },
        exc_info=error.original_error,
    )


def log_operation_success(
    logger: logging.Logger,
    operation: str,
    duration_ms: float,
    result_info: dict[str, Any] | None = None,
    context: dict[str, Any] | ErrorContext | None = None,
) -> None:
    """Record a finished operation at DEBUG level."""
    logger.debug(
        "Operation '%s' completed successfully",
        operation,
        extra={
            "operation": operation,
            "duration_ms": duration_ms,
            "result_info": result_info or {},
            "context": _as_dict(context),
        },
    )


def log_operation_start(
    logger: logging.Logger,
    operation: str,
    context: dict[str, Any] | None = None,
) -> None:
    """Record the start of an operation at DEBUG level."""
    logger.debug(
        "Starting operation '%s'",
        operation,
        extra={"operation": operation, "context": context or {}},
    )
