"""
Turning exceptions into exit codes.

Whatever escapes the search command ends up in ``handle_cli_error``: the
exception is mapped to a ``CliError``, logged at a level matching how
surprising it is, and reported on stderr (or as a JSON document on stdout
with ``--json``).
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from pydantic import ValidationError

from findstr.cli.json_formatter import format_json_output
from findstr.shared.constants import CLIDefaults, CLIMessages
from findstr.shared.errors import (
    CliError,
    DomainError,
    ErrorCode,
    ErrorContext,
    FindstrError,
    create_cli_error,
)

logger = logging.getLogger(__name__)

# Mistakes in the user's input: reported, but not logged as failures
USER_ERROR_CODES = frozenset(
    {
        ErrorCode.CLI_INVALID_ARGUMENTS,
        ErrorCode.CONFIG_ERROR,
        ErrorCode.DIRECTORY_NOT_FOUND,
        ErrorCode.INVALID_PATTERN,
    }
)


def handle_cli_error(
    error: BaseException,
    command: str,
    *,
    json_output: bool = False,
) -> int:
    """Report ``error`` and return the exit code for it.

    Args:
        error: Exception raised while running ``command``
        command: Name of the failing command
        json_output: Report as a JSON document instead of text

    Returns:
        The process exit code
    """
    cli_error = map_error_to_cli_error(error, command)
    report_context: dict[str, Any] = {
        "command": command,
        "error_type": type(error).__name__,
        "error_code": cli_error.code.value,
        "json_output": json_output,
    }
    _log_error(error, cli_error, report_context)
    _output_error(cli_error, command, report_context, json_output=json_output)
    return cli_error.exit_code


def map_error_to_cli_error(error: BaseException, command: str) -> CliError:
    """Translate any exception into a CliError with an exit code."""
    match error:
        case CliError():
            return error
        case FindstrError():
            return CliError(
                error.code,
                error.message,
                error.context,
                original_error=error,
                command=command,
                exit_code=CLIDefaults.EXIT_ERROR,
            )
        case ValidationError():
            first = error.errors()[0]
            option = ".".join(str(part) for part in first["loc"])
            return CliError(
                ErrorCode.CLI_INVALID_ARGUMENTS,
                f"Invalid value for {option}: {first['msg']}",
                ErrorContext(operation=command, additional_data={"option": option}),
                original_error=error,
                command=command,
                exit_code=CLIDefaults.EXIT_USAGE,
            )
        case KeyboardInterrupt():
            return CliError(
                ErrorCode.CLI_COMMAND_INTERRUPTED,
                "Command interrupted by user",
                ErrorContext(operation=command),
                original_error=error,
                command=command,
                exit_code=CLIDefaults.EXIT_INTERRUPTED,
            )
        case OSError():
            return create_cli_error(
                f"File system error: {error}",
                command=command,
                original_error=error,
            )
        case _:
            return create_cli_error(
                f"Unexpected error: {error}",
                command=command,
                original_error=error,
            )


def _log_error(
    error: BaseException,
    cli_error: CliError,
    report_context: dict[str, Any],
) -> None:
    extra = {"error_code": cli_error.code.name, "context": report_context}
    if cli_error.code == ErrorCode.CLI_COMMAND_INTERRUPTED:
        logger.warning("Search interrupted", extra=extra)
    elif isinstance(error, DomainError) or cli_error.code in USER_ERROR_CODES:
        logger.debug("Search rejected: %s", cli_error.message, extra=extra)
    else:
        logger.error("Search failed: %s", cli_error.message, extra=extra, exc_info=error)


def _output_error(
    cli_error: CliError,
    command: str,
    report_context: dict[str, Any],
    *,
    json_output: bool,
) -> None:
    if json_output:
        document = format_json_output(
            success=False,
            command=command,
            errors=[cli_error.message],
            data={
                "error_code": cli_error.code.value,
                "exit_code": cli_error.exit_code,
                "context": report_context,
            },
        )
        try:
            sys.stdout.buffer.write(document)
            sys.stdout.buffer.flush()
            return
        except OSError as output_error:
            # stdout is the broken channel; fall back to the text report
            logger.warning("JSON error report failed: %s", output_error)

    try:
        sys.stderr.write(CLIMessages.ERROR_PREFIX.format(message=cli_error.message))
        sys.stderr.flush()
    except OSError:
        logger.debug("Could not write error report to stderr")
