"""Configuration models package."""

from findstr.config.models.app_settings import LoggingSettings
from findstr.config.models.options import SearchOptions
from findstr.config.models.search_settings import PipelineSettings, SearchSettings
from findstr.config.models.settings import Settings

__all__ = [
    "LoggingSettings",
    "PipelineSettings",
    "SearchOptions",
    "SearchSettings",
    "Settings",
]
