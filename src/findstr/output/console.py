"""Human-readable result output on a rich Console.

Matches render as ``path, line: text`` with the matched span highlighted,
errors as ``path: message``. Styling is cosmetic only.
"""

from __future__ import annotations

import threading
from pathlib import Path

from rich.console import Console
from rich.text import Text

from findstr.core.models import ErrorMatch, LineMatch
from findstr.output.base import display_path, printable

PREFIX_STYLE = "grey50"
LINE_STYLE = "yellow"
SPAN_STYLE = "bold red"
ERROR_STYLE = "red"


class ConsoleOutputWriter:
    """Writes results to a rich Console, one line per result.

    Args:
        console: Target console (default: a stdout console).
        root: Paths are displayed relative to this directory.
        color: Emit styles; False renders plain text.
    """

    def __init__(
        self,
        console: Console | None = None,
        root: Path | None = None,
        *,
        color: bool = True,
    ) -> None:
        self.console = console or Console(
            no_color=not color,
            highlight=False,
            soft_wrap=True,
        )
        self.root = root
        self.color = color
        self._lock = threading.Lock()

    def render_match(self, result: LineMatch) -> Text:
        path = display_path(result.file_path, self.root)
        text = Text(f"{path}, {result.line_number}: ", style=self._style(PREFIX_STYLE))
        line = Text(printable(result.line_text), style=self._style(LINE_STYLE))
        if result.match_length:
            line.stylize(
                self._style(SPAN_STYLE),
                result.match_offset,
                result.match_offset + result.match_length,
            )
        text.append_text(line)
        return text

    def render_error(self, result: ErrorMatch) -> Text:
        path = display_path(result.file_path, self.root)
        text = Text(f"{path}: ", style=self._style(PREFIX_STYLE))
        text.append(printable(result.message), style=self._style(ERROR_STYLE))
        return text

    def write_match(self, result: LineMatch) -> None:
        self._print(self.render_match(result))

    def write_error(self, result: ErrorMatch) -> None:
        self._print(self.render_error(result))

    def flush(self) -> None:
        with self._lock:
            self.console.file.flush()

    def _style(self, style: str) -> str:
        return style if self.color else ""

    def _print(self, text: Text) -> None:
        with self._lock:
            self.console.print(text, soft_wrap=True, highlight=False, markup=False)
