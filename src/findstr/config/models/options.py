"""Immutable per-run search options.

SearchOptions is built once from the Settings and the command line, then
handed to every pipeline component at construction.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from findstr.config.models.search_settings import check_encoding, check_encoding_errors
from findstr.config.models.settings import Settings
from findstr.shared.constants import CLIDefaults, Pipeline, Timeout


class SearchOptions(BaseModel):
    """Everything one search run needs to know."""

    model_config = ConfigDict(frozen=True)

    pattern: str = Field(description="Search pattern")
    root: Path = Field(default_factory=Path.cwd, description="Directory to search")
    file_glob: str = Field(default=CLIDefaults.FILE_GLOB, description="File name glob")
    ignore_case: bool = False
    literal: bool = False
    recurse: bool = True
    follow_symlinks: bool = False
    encoding: str = "utf-8"
    encoding_errors: str = "replace"
    reader_workers: int = Field(default=Pipeline.READER_WORKERS, ge=1)
    matcher_workers: int = Field(default=Pipeline.MATCHER_WORKERS, ge=1)
    queue_size: int = Field(default=Pipeline.QUEUE_SIZE, ge=1)
    poll_interval: float = Field(default=Timeout.QUEUE_POLL, gt=0)

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        return check_encoding(v)

    @field_validator("encoding_errors")
    @classmethod
    def validate_encoding_errors(cls, v: str) -> str:
        return check_encoding_errors(v)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        pattern: str,
        root: Path | None = None,
        file_glob: str = CLIDefaults.FILE_GLOB,
        **overrides: Any,
    ) -> SearchOptions:
        """Combine configuration values with command-line overrides.

        Overrides whose value is None are ignored, so unset CLI flags fall
        back to the configuration.
        """
        values: dict[str, Any] = {
            **settings.search.model_dump(),
            **settings.pipeline.model_dump(),
            "pattern": pattern,
            "file_glob": file_glob,
        }
        if root is not None:
            values["root"] = root
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


__all__ = ["SearchOptions"]
