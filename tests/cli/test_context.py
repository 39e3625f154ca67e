"""Test CLI context management."""

import pytest
from pydantic import ValidationError

from findstr.cli.common.context import (
    CliContext,
    LogLevel,
    clear_cli_context,
    get_cli_context,
    set_cli_context,
)


def test_cli_context_defaults() -> None:
    context = CliContext()

    assert context.verbose == 0
    assert context.log_level == LogLevel.WARNING
    assert context.json_output is False
    assert context.color is True
    assert context.show_stats is False


def test_cli_context_validation() -> None:
    with pytest.raises(ValidationError):
        CliContext(verbose=-1)

    with pytest.raises(ValidationError):
        CliContext(log_level="LOUD")


def test_verbose_forces_debug_level() -> None:
    assert CliContext(log_level=LogLevel.ERROR).get_effective_log_level() == "ERROR"
    assert CliContext(verbose=2, log_level=LogLevel.ERROR).get_effective_log_level() == "DEBUG"


def test_json_output_flag() -> None:
    assert CliContext(json_output=True).is_json_output_enabled()
    assert not CliContext().is_json_output_enabled()


def test_context_lifecycle() -> None:
    """Set, read and clear the per-invocation context."""
    context = CliContext(show_stats=True)

    set_cli_context(context)
    assert get_cli_context() is context

    clear_cli_context()
    with pytest.raises(RuntimeError, match="has not been initialized"):
        get_cli_context()
