"""
Reusable Typer Options Module

Typer parameter declarations for the search command, kept in one place so
the command signature stays readable.
"""

from __future__ import annotations

import typer

from findstr.shared.constants import CLIDefaults, CLIHelp


def version_callback(value: bool) -> None:
    """Print version information and exit."""
    if value:
        typer.echo(CLIHelp.VERSION_TEXT.format(version=CLIDefaults.VERSION))
        raise typer.Exit


pattern_argument = typer.Argument(
    help=CLIHelp.PATTERN_HELP,
    show_default=False,
)

glob_argument = typer.Argument(
    metavar="GLOB",
    help=CLIHelp.GLOB_HELP,
)

root_option = typer.Option(
    "--root",
    "-C",
    help=CLIHelp.ROOT_HELP,
    file_okay=False,
    dir_okay=True,
    show_default=False,
)

recurse_option = typer.Option(
    "--recurse/--no-recurse",
    help=CLIHelp.RECURSE_HELP,
    show_default=False,
)

ignore_case_option = typer.Option(
    "--ignore-case/--case-sensitive",
    "-i",
    help=CLIHelp.IGNORE_CASE_HELP,
    show_default=False,
)

literal_option = typer.Option(
    "--literal",
    "-F",
    help=CLIHelp.LITERAL_HELP,
)

json_output_option = typer.Option(
    "--json",
    help=CLIHelp.JSON_HELP,
)

no_color_option = typer.Option(
    "--no-color",
    help=CLIHelp.NO_COLOR_HELP,
)

stats_option = typer.Option(
    "--stats",
    help=CLIHelp.STATS_HELP,
)

encoding_option = typer.Option(
    "--encoding",
    help=CLIHelp.ENCODING_HELP,
    show_default=False,
)

workers_option = typer.Option(
    "--workers",
    min=1,
    help=CLIHelp.WORKERS_HELP,
    show_default=False,
)

config_option = typer.Option(
    "--config",
    help=CLIHelp.CONFIG_HELP,
    dir_okay=False,
    show_default=False,
)

# Count-based so -vv works like -v
verbose_option = typer.Option(
    "--verbose",
    "-v",
    count=True,
    help="Enable verbose output (equivalent to --log-level DEBUG).",
)

log_level_option = typer.Option(
    "--log-level",
    case_sensitive=False,
    help="Set the logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Default: WARNING.",
    show_default=False,
)

version_option = typer.Option(
    "--version",
    "-V",
    help="Show version information and exit.",
    callback=version_callback,
    is_eager=True,
)
