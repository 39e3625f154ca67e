"""Top-level findstr settings: search, pipeline and logging sections."""

from __future__ import annotations

import logging
from pathlib import Path

import toml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from findstr.config.models.app_settings import LoggingSettings
from findstr.config.models.search_settings import PipelineSettings, SearchSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Unified configuration for a findstr run.

    Values come from (highest priority first) explicit arguments, a TOML
    file passed to :meth:`from_toml_file`, ``FINDSTR_*`` environment
    variables and the field defaults. Nested fields use ``__`` in
    environment names, e.g. ``FINDSTR_SEARCH__IGNORE_CASE=true``.
    """

    model_config = SettingsConfigDict(
        env_prefix="FINDSTR_",
        env_nested_delimiter="__",
        env_ignore_empty=True,
        extra="ignore",
    )

    search: SearchSettings = Field(default_factory=SearchSettings)
    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_toml_file(cls, file_path: str | Path) -> Settings:
        """Load settings from a TOML file."""

        file_path = Path(file_path)
        if not file_path.exists():
            msg = f"Configuration file not found: {file_path}"
            raise FileNotFoundError(msg)

        raw_config = toml.load(file_path)
        logger.debug("Loaded configuration from %s", file_path)
        return cls(**raw_config)
