"""Search command handler for findstr CLI."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from rich.console import Console

from findstr.cli.common.context import get_cli_context
from findstr.cli.json_formatter import format_json_output
from findstr.config import SearchOptions, Settings
from findstr.core.pipeline import PipelineReport, format_statistics, run_pipeline
from findstr.output import ConsoleOutputWriter, JsonLinesOutputWriter, OutputWriter
from findstr.shared.constants import CLIDefaults, CLIMessages

logger = logging.getLogger(__name__)

COMMAND_NAME = "search"


def handle_search_command(  # pylint: disable=too-many-arguments
    settings: Settings,
    pattern: str,
    file_glob: str = CLIDefaults.FILE_GLOB,
    *,
    root: Path | None = None,
    recurse: bool | None = None,
    ignore_case: bool | None = None,
    literal: bool = False,
    encoding: str | None = None,
    workers: int | None = None,
) -> int:
    """Run one search and write its results.

    Output format, colour and statistics come from the CLI context.
    Flags left as None fall back to ``settings``.

    Returns:
        Exit code (0 whenever the search completed, matches or not)

    Raises:
        PatternError: If the pattern is invalid.
        ApplicationError: If the root directory does not exist.
        OutputError: If results could not be written.
        InfrastructureError: If a pipeline stage failed.
    """
    context = get_cli_context()
    logger.info(CLIMessages.INFO_COMMAND_STARTED.format(command=COMMAND_NAME))

    options = SearchOptions.from_settings(
        settings,
        pattern,
        root=root,
        file_glob=file_glob,
        recurse=recurse,
        ignore_case=ignore_case,
        literal=literal,
        encoding=encoding,
        reader_workers=workers,
    )
    writer = create_writer(options, json_output=context.json_output, color=context.color)
    report = run_pipeline(options, writer)

    if context.show_stats:
        print_statistics(report, json_output=context.json_output, color=context.color)

    logger.info(CLIMessages.INFO_COMMAND_COMPLETED.format(command=COMMAND_NAME))
    return CLIDefaults.EXIT_SUCCESS


def create_writer(options: SearchOptions, *, json_output: bool, color: bool) -> OutputWriter:
    """Pick the output writer for the requested format."""
    if json_output:
        return JsonLinesOutputWriter(root=options.root)
    return ConsoleOutputWriter(root=options.root, color=color)


def print_statistics(report: PipelineReport, *, json_output: bool, color: bool) -> None:
    """Write the run statistics to stderr."""
    if json_output:
        sys.stderr.buffer.write(
            format_json_output(success=True, command=COMMAND_NAME, data=report.to_dict())
        )
        sys.stderr.flush()
        return
    Console(stderr=True, no_color=not color, highlight=False).print(
        format_statistics(report),
        markup=False,
    )
