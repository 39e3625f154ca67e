"""CLI-related constants."""


class CLIDefaults:
    """Default values for the command surface."""

    VERSION = "0.1.0"
    FILE_GLOB = "*"
    EXIT_SUCCESS = 0
    EXIT_ERROR = 1
    EXIT_USAGE = 2
    EXIT_INTERRUPTED = 130


class CLIHelp:
    """Help texts for the command surface."""

    APP_NAME = "findstr"
    APP_DESCRIPTION = "Search files under a directory for lines matching a regular expression."
    APP_STYLE = "rich"
    VERSION_TEXT = "findstr v{version}"

    PATTERN_HELP = "Regular expression to search for."
    GLOB_HELP = (
        "File name glob selecting the files to search, in fnmatch syntax: * and ?"
        " wildcards plus character classes in square brackets (default: every file)."
    )
    ROOT_HELP = "Directory to search (default: current directory)."
    RECURSE_HELP = "Descend into subdirectories."
    IGNORE_CASE_HELP = "Match case-insensitively (--case-sensitive to force case-sensitive)."
    LITERAL_HELP = "Treat PATTERN as a fixed string instead of a regular expression."
    JSON_HELP = "Emit one JSON object per result instead of human-readable lines."
    NO_COLOR_HELP = "Disable colored output."
    STATS_HELP = "Print pipeline statistics to stderr when the search finishes."
    ENCODING_HELP = "Text encoding used to decode files."
    WORKERS_HELP = "Number of file reader threads."
    CONFIG_HELP = "TOML configuration file."


class CLIMessages:
    """Message templates used by the command handlers."""

    INFO_COMMAND_STARTED = "Starting {command} command..."
    INFO_COMMAND_COMPLETED = "Completed {command} command"
    ERROR_PREFIX = "Error: {message}\n"


__all__ = ["CLIDefaults", "CLIHelp", "CLIMessages"]
