"""Settings loading with error translation.

Configuration problems (missing file, malformed TOML, invalid values)
surface as ``ApplicationError`` with ``CONFIG_ERROR`` so the CLI can report
them like any other fatal startup error.
"""

from __future__ import annotations

import logging
from pathlib import Path

import toml
from pydantic import ValidationError

from findstr.config.models.settings import Settings
from findstr.shared.errors import ApplicationError, create_config_error

logger = logging.getLogger(__name__)


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from the environment and an optional TOML file.

    Args:
        config_path: Optional TOML configuration file.

    Returns:
        Validated Settings instance.

    Raises:
        ApplicationError: If the file is missing, malformed or invalid.
    """
    try:
        if config_path is None:
            return Settings()
        return Settings.from_toml_file(config_path)
    except FileNotFoundError as e:
        raise create_config_error(
            str(e),
            config_key="config_file",
            operation="load_settings",
            original_error=e,
        ) from e
    except toml.TomlDecodeError as e:
        raise create_config_error(
            f"Malformed configuration file {config_path}: {e}",
            config_key="config_file",
            operation="load_settings",
            original_error=e,
        ) from e
    except ValidationError as e:
        raise _validation_error(e) from e


def _validation_error(error: ValidationError) -> ApplicationError:
    first = error.errors()[0]
    key = ".".join(str(part) for part in first["loc"])
    logger.debug("Configuration validation failed: %s", error)
    return create_config_error(
        f"Invalid configuration value for {key}: {first['msg']}",
        config_key=key,
        operation="load_settings",
        original_error=error,
    )


__all__ = ["load_settings"]
