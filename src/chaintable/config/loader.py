"""Settings loader and singleton manager.

This module handles:
- Configuration file loading from TOML
- Thread-safe singleton pattern for the Settings instance
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from pydantic import ValidationError

from chaintable.config.models.settings import Settings
from chaintable.shared.constants import FileSystem, LogMessages
from chaintable.shared.errors import (
    ApplicationError,
    ErrorCode,
    ErrorContext,
)

logger = logging.getLogger(__name__)


def default_config_paths() -> list[Path]:
    """Locations searched, in order, when no explicit path is given."""
    return [
        Path(FileSystem.CONFIG_DIR) / FileSystem.CONFIG_FILE,
        Path(FileSystem.CONFIG_FILE),
    ]


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from a TOML configuration file or the environment.

    Args:
        config_path: Optional path to TOML configuration file. If None, tries
            the default locations and falls back to environment variables.

    Returns:
        Settings instance loaded from the selected source

    Raises:
        ApplicationError: If the file cannot be read or fails validation
    """
    if config_path is not None:
        candidates = [Path(config_path)]
    else:
        candidates = [path for path in default_config_paths() if path.exists()]

    if not candidates:
        logger.debug(LogMessages.CONFIG_DEFAULTS)
        return _build(None)

    path = candidates[0]
    settings = _build(path)
    logger.debug(LogMessages.CONFIG_LOADED, path)
    return settings


def _build(path: Path | None) -> Settings:
    try:
        return Settings() if path is None else Settings.from_toml_file(path)
    except FileNotFoundError as e:
        raise ApplicationError(
            code=ErrorCode.CONFIGURATION_ERROR,
            message=f"Configuration file not found: {path}",
            context=ErrorContext(
                operation="load_settings",
                additional_data={"config_path": str(path)},
            ),
            original_error=e,
        ) from e
    except (ValidationError, ValueError, TypeError) as e:
        # toml.TomlDecodeError is a ValueError subclass
        raise ApplicationError(
            code=ErrorCode.INVALID_CONFIG,
            message=f"Invalid configuration: {e}",
            context=ErrorContext(
                operation="load_settings",
                additional_data={"config_path": str(path) if path else "<environment>"},
            ),
            original_error=e,
        ) from e


class SettingsLoader:
    """Thread-safe singleton manager for Settings.

    Uses double-checked locking pattern to ensure thread-safety
    while minimizing lock overhead.
    """

    _instance: Settings | None = None
    _lock: threading.RLock = threading.RLock()

    def get_config(self) -> Settings:
        """Get the global settings instance, loading it if necessary."""
        if self._instance is None:
            with self._lock:
                if self._instance is None:
                    self._instance = load_settings()

        return self._instance

    def reload_config(self, config_path: str | Path | None = None) -> Settings:
        """Reload the global settings instance from configuration files."""
        with self._lock:
            self._instance = load_settings(config_path)

        return self._instance


_loader = SettingsLoader()


def get_config() -> Settings:
    """Get the global settings instance (thread-safe)."""
    return _loader.get_config()


def reload_config(config_path: str | Path | None = None) -> Settings:
    """Reload the global settings instance.

    Args:
        config_path: Optional explicit TOML file to load instead of the defaults
    """
    return _loader.reload_config(config_path)


__all__ = [
    "SettingsLoader",
    "default_config_paths",
    "get_config",
    "load_settings",
    "reload_config",
]
