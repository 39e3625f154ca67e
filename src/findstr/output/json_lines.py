"""Machine-readable result output: one JSON object per line."""

from __future__ import annotations

import sys
import threading
from pathlib import Path
from typing import Any, BinaryIO

import orjson

from findstr.core.models import ErrorMatch, LineMatch
from findstr.output.base import display_path, printable
from findstr.shared.errors import create_output_error


class JsonLinesOutputWriter:
    """Writes each result as a JSON document followed by a newline.

    Args:
        stream: Binary stream to write to (default: stdout).
        root: Paths are reported relative to this directory.
    """

    def __init__(self, stream: BinaryIO | None = None, root: Path | None = None) -> None:
        self.stream = stream if stream is not None else sys.stdout.buffer
        self.root = root
        self._lock = threading.Lock()

    def match_document(self, result: LineMatch) -> dict[str, Any]:
        return {
            "type": "match",
            "path": display_path(result.file_path, self.root),
            "line_number": result.line_number,
            "offset": result.match_offset,
            "length": result.match_length,
            "line": printable(result.line_text),
        }

    def error_document(self, result: ErrorMatch) -> dict[str, Any]:
        return {
            "type": "error",
            "path": display_path(result.file_path, self.root),
            "message": printable(result.message),
        }

    def write_match(self, result: LineMatch) -> None:
        self._write(self.match_document(result))

    def write_error(self, result: ErrorMatch) -> None:
        self._write(self.error_document(result))

    def flush(self) -> None:
        with self._lock:
            self.stream.flush()

    def _write(self, document: dict[str, Any]) -> None:
        try:
            payload = orjson.dumps(document, option=orjson.OPT_APPEND_NEWLINE)
        except TypeError as e:
            raise create_output_error(
                f"Cannot encode result as JSON: {e}",
                output_type="json",
                original_error=e,
            ) from e
        with self._lock:
            self.stream.write(payload)
