"""
Per-invocation CLI state.

The search command parses its presentation flags (verbosity, JSON output,
colour, statistics) into a ``CliContext`` and stores it in a ContextVar;
the handler reads it back instead of taking every flag as a parameter.
"""

from __future__ import annotations

import contextvars
from enum import Enum

from pydantic import BaseModel, Field


class LogLevel(str, Enum):
    """Levels accepted by ``--log-level``."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class CliContext(BaseModel):
    """Presentation options of one ``findstr`` run."""

    verbose: int = Field(default=0, ge=0, description="Number of -v flags given")
    log_level: LogLevel = Field(
        default=LogLevel.WARNING,
        description="Level used when no -v flag is given",
    )
    json_output: bool = Field(default=False, description="Results as JSON lines")
    color: bool = Field(default=True, description="Styled console output")
    show_stats: bool = Field(default=False, description="Print statistics after the search")

    def is_verbose(self) -> bool:
        return self.verbose > 0

    def get_effective_log_level(self) -> str:
        """Level name to configure logging with; any -v means DEBUG."""
        return LogLevel.DEBUG.value if self.is_verbose() else self.log_level.value

    def is_json_output_enabled(self) -> bool:
        return self.json_output


cli_context_var: contextvars.ContextVar[CliContext | None] = contextvars.ContextVar(
    "findstr_cli_context",
    default=None,
)


def get_cli_context() -> CliContext:
    """
    Return the context of the running command.

    Raises:
        RuntimeError: If no command has set one
    """
    context = cli_context_var.get()
    if context is None:
        raise RuntimeError(
            "CLI context has not been initialized; "
            "the search command sets it before calling its handler.",
        )
    return context


def set_cli_context(context: CliContext) -> None:
    cli_context_var.set(context)


def clear_cli_context() -> None:
    cli_context_var.set(None)
