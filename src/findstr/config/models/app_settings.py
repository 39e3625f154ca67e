"""Application logging configuration model."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LoggingSettings(BaseModel):
    """Logging configuration.

    Console logs always go to stderr; ``log_file`` adds a JSON log file.
    """

    level: str = Field(default="WARNING", description="Logging level")
    log_file: str | None = Field(
        default=None,
        description="Optional path of a structured JSON log file",
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            msg = f"Unknown logging level: {v} (expected one of {', '.join(LOG_LEVELS)})"
            raise ValueError(msg)
        return level


__all__ = ["LOG_LEVELS", "LoggingSettings"]
