"""Output collaborators for search results."""

from findstr.output.base import OutputWriter, display_path, printable
from findstr.output.console import ConsoleOutputWriter
from findstr.output.json_lines import JsonLinesOutputWriter

__all__ = [
    "ConsoleOutputWriter",
    "JsonLinesOutputWriter",
    "OutputWriter",
    "display_path",
    "printable",
]
