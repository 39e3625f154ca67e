"""
JSON documents written by the CLI next to the result stream.

The statistics summary (``--stats --json``) and error reports share one
envelope: ``success``, ``timestamp``, ``command``, ``data`` and ``errors``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import orjson


def format_json_output(
    success: bool,
    command: str,
    data: Any | None = None,
    errors: list[str] | None = None,
) -> bytes:
    """
    Encode one envelope as a newline-terminated, single-line document.

    A non-empty ``errors`` list always yields ``"success": false``.

    Example:
        >>> orjson.loads(format_json_output(True, "search", {"matches": 2}))["data"]
        {'matches': 2}
    """
    errors = list(errors or [])
    envelope = {
        "success": success and not errors,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "command": command,
        "data": data,
        "errors": errors,
    }
    return orjson.dumps(
        envelope,
        option=orjson.OPT_SORT_KEYS | orjson.OPT_APPEND_NEWLINE,
        default=str,
    )
