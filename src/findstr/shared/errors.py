"""Exceptions raised by findstr.

Every failure findstr reports carries an ``ErrorCode`` and an
``ErrorContext`` so the CLI can map it to an exit code and the logging
helpers can record it with structured fields. The class tells where the
failure belongs:

- DomainError: the user's search request is wrong (e.g. a bad pattern)
- InfrastructureError: a pipeline thread, queue or stream failed
- ApplicationError: startup and command-line problems
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Union

# Values allowed in ErrorContext.additional_data
ContextValue = Union[str, int, float, bool]


class ErrorCode(str, Enum):
    """Stable identifiers for every failure findstr reports."""

    # Search root
    DIRECTORY_NOT_FOUND = "DIRECTORY_NOT_FOUND"

    # Search pattern
    INVALID_PATTERN = "INVALID_PATTERN"

    # Settings
    CONFIG_ERROR = "CONFIG_ERROR"

    # Command line and output channel
    CLI_INVALID_ARGUMENTS = "CLI_INVALID_ARGUMENTS"
    CLI_UNEXPECTED_ERROR = "CLI_UNEXPECTED_ERROR"
    CLI_COMMAND_INTERRUPTED = "CLI_COMMAND_INTERRUPTED"
    CLI_OUTPUT_ERROR = "CLI_OUTPUT_ERROR"

    # Pipeline threads and queues
    PIPELINE_INITIALIZATION_ERROR = "PIPELINE_INITIALIZATION_ERROR"
    PIPELINE_EXECUTION_ERROR = "PIPELINE_EXECUTION_ERROR"
    PIPELINE_SHUTDOWN_ERROR = "PIPELINE_SHUTDOWN_ERROR"
    QUEUE_OPERATION_ERROR = "QUEUE_OPERATION_ERROR"
    SCANNER_ERROR = "SCANNER_ERROR"
    READER_ERROR = "READER_ERROR"
    MATCHER_ERROR = "MATCHER_ERROR"


def _to_context_value(key: str, value: Any) -> ContextValue:
    if isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    msg = (
        f"Cannot coerce {type(value).__name__} for context key {key!r}; "
        "use str, int, float or bool"
    )
    raise TypeError(msg)


@dataclass(frozen=True)
class ErrorContext:
    """Where and during what an error happened.

    ``additional_data`` is normalized on construction: paths become strings,
    enums their values, and anything not JSON-primitive is rejected so the
    context can always go into a log record.

    Attributes:
        file_path: File or directory the failure concerns
        operation: Name of the operation that failed (e.g. ``read_files``)
        additional_data: Extra primitive fields (worker id, pattern, ...)
    """

    file_path: str | None = None
    operation: str | None = None
    additional_data: dict[str, ContextValue] | None = None

    def __post_init__(self) -> None:
        if self.additional_data is None:
            return
        if not isinstance(self.additional_data, dict):
            msg = f"additional_data must be a dict, got {type(self.additional_data).__name__}"
            raise TypeError(msg)
        normalized = {k: _to_context_value(k, v) for k, v in self.additional_data.items()}
        # frozen dataclass
        object.__setattr__(self, "additional_data", normalized)

    def safe_dict(self) -> dict[str, Any]:
        """Fields that are set, always including ``additional_data``."""
        fields: dict[str, Any] = {
            name: value
            for name, value in (("file_path", self.file_path), ("operation", self.operation))
            if value is not None
        }
        fields["additional_data"] = dict(self.additional_data or {})
        return fields


class FindstrError(Exception):
    """Root of the findstr exception tree.

    Args:
        code: What went wrong
        message: Text shown to the user
        context: Where it went wrong (empty context when omitted)
        original_error: Lower-level exception being translated, if any
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(f"{code.value}: {message}")
        self.code = code
        self.message = message
        self.context = context if context is not None else ErrorContext()
        self.original_error = original_error

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Serializable form used in structured logs."""
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": None if self.original_error is None else str(self.original_error),
        }


class DomainError(FindstrError):
    """The search request itself is invalid."""


class PatternError(DomainError):
    """The search pattern does not compile."""


class InfrastructureError(FindstrError):
    """A pipeline stage, queue or stream failed while searching."""


class ApplicationError(FindstrError):
    """A startup problem: settings, search root or command line."""


class CliError(ApplicationError):
    """An error ready to be reported by the command, with its exit code."""

    def __init__(  # pylint: disable=too-many-arguments
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: BaseException | None = None,
        command: str | None = None,
        exit_code: int = 1,
    ) -> None:
        super().__init__(code, message, context, original_error)
        self.command = command
        self.exit_code = exit_code


class OutputError(CliError):
    """Results can no longer be written to the output channel."""


def create_pattern_error(
    pattern: str,
    reason: str,
    original_error: BaseException | None = None,
) -> PatternError:
    """Build the error for a pattern that cannot be used."""
    return PatternError(
        ErrorCode.INVALID_PATTERN,
        f"Invalid search pattern {pattern!r}: {reason}",
        ErrorContext(operation="compile_pattern", additional_data={"pattern": pattern}),
        original_error,
    )


def create_directory_not_found_error(
    path: str | Path,
    operation: str | None = None,
) -> ApplicationError:
    """Build the error for a search root that is not a directory."""
    return ApplicationError(
        ErrorCode.DIRECTORY_NOT_FOUND,
        f"Directory does not exist: {path}",
        ErrorContext(file_path=str(path), operation=operation),
    )


def create_config_error(
    message: str,
    config_key: str | None = None,
    operation: str | None = None,
    original_error: BaseException | None = None,
) -> ApplicationError:
    """Build the error for settings that cannot be loaded."""
    return ApplicationError(
        ErrorCode.CONFIG_ERROR,
        message,
        ErrorContext(
            operation=operation,
            additional_data={"config_key": config_key} if config_key else None,
        ),
        original_error,
    )


def create_cli_error(
    message: str,
    command: str | None = None,
    operation: str | None = None,
    original_error: BaseException | None = None,
    exit_code: int = 1,
) -> CliError:
    """Build the catch-all error for failures the command did not anticipate."""
    return CliError(
        ErrorCode.CLI_UNEXPECTED_ERROR,
        message,
        ErrorContext(
            operation=operation,
            additional_data={"command": command} if command else None,
        ),
        original_error,
        command=command,
        exit_code=exit_code,
    )


def create_output_error(
    message: str,
    output_type: str | None = None,
    original_error: BaseException | None = None,
) -> OutputError:
    """Build the error for a broken output channel."""
    return OutputError(
        ErrorCode.CLI_OUTPUT_ERROR,
        message,
        ErrorContext(
            operation="write_result",
            additional_data={"output_type": output_type} if output_type else None,
        ),
        original_error,
    )
