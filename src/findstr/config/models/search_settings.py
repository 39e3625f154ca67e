"""Search and pipeline configuration models.

This module contains the configuration models for the search behaviour
(case sensitivity, recursion, decoding) and for the pipeline sizing
(worker counts, queue bounds).
"""

from __future__ import annotations

import codecs

from pydantic import BaseModel, Field, field_validator

from findstr.shared.constants import Pipeline, Timeout


def check_encoding(value: str) -> str:
    """Reject unknown encodings and bytes-to-bytes codecs such as base64."""
    try:
        info = codecs.lookup(value)
    except LookupError as e:
        msg = f"Unknown encoding: {value}"
        raise ValueError(msg) from e
    if not getattr(info, "_is_text_encoding", True):
        msg = f"Not a text encoding: {value}"
        raise ValueError(msg)
    return value


def check_encoding_errors(value: str) -> str:
    """Reject unregistered codec error handlers."""
    try:
        codecs.lookup_error(value)
    except LookupError as e:
        msg = f"Unknown codec error handler: {value}"
        raise ValueError(msg) from e
    return value


class SearchSettings(BaseModel):
    """Search behaviour configuration."""

    ignore_case: bool = Field(
        default=False,
        description="Match the pattern case-insensitively",
    )
    recurse: bool = Field(
        default=True,
        description="Descend into subdirectories of the search root",
    )
    encoding: str = Field(
        default="utf-8",
        description="Text encoding used to decode files",
    )
    encoding_errors: str = Field(
        default="replace",
        description="Codec error handler applied while decoding",
    )
    follow_symlinks: bool = Field(
        default=False,
        description="Descend into symlinked directories",
    )

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        return check_encoding(v)

    @field_validator("encoding_errors")
    @classmethod
    def validate_encoding_errors(cls, v: str) -> str:
        return check_encoding_errors(v)


class PipelineSettings(BaseModel):
    """Pipeline sizing configuration."""

    reader_workers: int = Field(
        default=Pipeline.READER_WORKERS,
        ge=1,
        description="Number of file reader threads",
    )
    matcher_workers: int = Field(
        default=Pipeline.MATCHER_WORKERS,
        ge=1,
        description="Number of line matcher threads",
    )
    queue_size: int = Field(
        default=Pipeline.QUEUE_SIZE,
        ge=1,
        description="Capacity of each inter-stage queue",
    )
    poll_interval: float = Field(
        default=Timeout.QUEUE_POLL,
        gt=0,
        description="Seconds between cancellation checks of blocked queue operations",
    )


__all__ = ["PipelineSettings", "SearchSettings", "check_encoding", "check_encoding_errors"]
