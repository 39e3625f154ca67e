"""
findstr Constants Module

Centralized constants for findstr. Magic values and configuration defaults
are defined here so the CLI, the configuration layer and the pipeline
agree on them.
"""

from .cli import CLIDefaults, CLIHelp, CLIMessages
from .pipeline import Pipeline, Timeout

__all__ = [
    "CLIDefaults",
    "CLIHelp",
    "CLIMessages",
    "Pipeline",
    "Timeout",
]
