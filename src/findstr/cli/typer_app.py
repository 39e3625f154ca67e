"""
findstr Typer CLI Application

Single-command Typer application: ``findstr PATTERN [GLOB] [options]``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from findstr.cli.common.context import CliContext, LogLevel, clear_cli_context, set_cli_context
from findstr.cli.common.error_handler import handle_cli_error
from findstr.cli.common.options import (
    config_option,
    encoding_option,
    glob_argument,
    ignore_case_option,
    json_output_option,
    literal_option,
    log_level_option,
    no_color_option,
    pattern_argument,
    recurse_option,
    root_option,
    stats_option,
    verbose_option,
    version_option,
    workers_option,
)
from findstr.cli.search_handler import COMMAND_NAME, handle_search_command
from findstr.config import load_settings
from findstr.shared.constants import CLIDefaults, CLIHelp
from findstr.shared.logging import setup_structured_logger

# Version information
__version__ = CLIDefaults.VERSION


app = typer.Typer(
    name=CLIHelp.APP_NAME,
    help=CLIHelp.APP_DESCRIPTION,
    add_completion=False,
    rich_markup_mode=CLIHelp.APP_STYLE,
)


@app.command(name=COMMAND_NAME, no_args_is_help=True)
def search_command(  # pylint: disable=too-many-arguments,too-many-locals
    pattern: Annotated[str, pattern_argument],
    file_glob: Annotated[str, glob_argument] = CLIDefaults.FILE_GLOB,
    root: Annotated[Path | None, root_option] = None,
    recurse: Annotated[bool | None, recurse_option] = None,
    ignore_case: Annotated[bool | None, ignore_case_option] = None,
    literal: Annotated[bool, literal_option] = False,
    json_output: Annotated[bool, json_output_option] = False,
    no_color: Annotated[bool, no_color_option] = False,
    stats: Annotated[bool, stats_option] = False,
    encoding: Annotated[str | None, encoding_option] = None,
    workers: Annotated[int | None, workers_option] = None,
    config_file: Annotated[Path | None, config_option] = None,
    verbose: Annotated[int, verbose_option] = 0,
    log_level: Annotated[LogLevel | None, log_level_option] = None,
    version: Annotated[bool, version_option] = False,  # noqa: ARG001
) -> None:
    """
    Search files under a directory for lines matching PATTERN.

    Every file whose name matches GLOB is read line by line; each line
    containing PATTERN is printed as ``path, line: text``. Files that
    cannot be read are reported inline as ``path: message`` and do not
    stop the search.

    Examples:
        # Every "TODO" in Python files below the current directory
        findstr TODO "*.py"

        # Case-insensitive, top-level text files of another directory only
        findstr -i "error|warning" "*.log" --root /var/log --no-recurse

        # Fixed string, machine-readable output
        findstr -F "a.b(c)" --json
    """
    try:
        settings = load_settings(config_file)
        context = CliContext(
            verbose=verbose,
            log_level=log_level or LogLevel(settings.logging.level),
            json_output=json_output,
            color=not no_color,
            show_stats=stats,
        )
        set_cli_context(context)
        setup_structured_logger(
            level=context.get_effective_log_level(),
            log_file=settings.logging.log_file,
        )
        exit_code = handle_search_command(
            settings,
            pattern,
            file_glob,
            root=root,
            recurse=recurse,
            ignore_case=ignore_case,
            literal=literal,
            encoding=encoding,
            workers=workers,
        )
    except (Exception, KeyboardInterrupt) as e:
        exit_code = handle_cli_error(e, COMMAND_NAME, json_output=json_output)
        raise typer.Exit(exit_code) from e
    finally:
        clear_cli_context()

    raise typer.Exit(exit_code)


def main() -> None:
    """Console script entry point."""
    app()
