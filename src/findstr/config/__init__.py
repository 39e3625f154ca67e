"""Configuration package for findstr."""

from findstr.config.loader import load_settings
from findstr.config.models import (
    LoggingSettings,
    PipelineSettings,
    SearchOptions,
    SearchSettings,
    Settings,
)

__all__ = [
    "LoggingSettings",
    "PipelineSettings",
    "SearchOptions",
    "SearchSettings",
    "Settings",
    "load_settings",
]
