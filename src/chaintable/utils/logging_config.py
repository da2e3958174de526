"""
Logging Configuration Module

This module provides centralized logging configuration for chaintable.
Console output goes through rich when available on the settings, or through
a JSON formatter for machine-readable logs.

The table itself only emits DEBUG lifecycle records; applications decide
where they go by calling :func:`setup_logging`.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

from chaintable.config.models.app_settings import LoggingSettings
from chaintable.shared.constants import Application, LogConfig, LogLevels
from chaintable.shared.errors import ChainTableError


class StructuredFormatter(logging.Formatter):
    """Formatter that renders each record as a JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        """Format ``record`` as a JSON string."""
        log_entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created,
                tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in ("error_code", "context", "operation"):
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def _create_rich_console() -> Console:
    custom_theme = Theme(
        {
            "logging.level.debug": "cyan",
            "logging.level.info": "green",
            "logging.level.warning": "yellow",
            "logging.level.error": "red bold",
            "logging.level.critical": "red bold reverse",
        }
    )
    return Console(theme=custom_theme, stderr=True)


def setup_logging(
    settings: LoggingSettings | None = None,
    *,
    level: str | None = None,
    logger_name: str | None = None,
) -> logging.Logger:
    """
    Set up logging for chaintable.

    Args:
        settings: Logging settings; defaults are used when None
        level: Level name overriding ``settings.level``
        logger_name: Logger to configure (root logger by default)

    Returns:
        The configured logger
    """
    settings = settings or LoggingSettings()
    log_level = getattr(logging, (level or settings.level).upper(), LogLevels.DEFAULT)

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_level)

    # Clear any existing handlers
    for existing in logger.handlers[:]:
        existing.close()
        logger.removeHandler(existing)

    if settings.console_output:
        handler: logging.Handler
        if settings.rich_console:
            handler = RichHandler(
                console=_create_rich_console(),
                show_time=True,
                show_level=True,
                show_path=False,
                rich_tracebacks=True,
                log_time_format="[%H:%M:%S]",
            )
        else:
            handler = logging.StreamHandler()
            if settings.structured:
                handler.setFormatter(StructuredFormatter())
            else:
                handler.setFormatter(logging.Formatter(settings.format_string, LogConfig.DEFAULT_DATE_FORMAT))
        handler.setLevel(log_level)
        logger.addHandler(handler)
    else:
        logger.addHandler(logging.NullHandler())

    logger.debug("%s logging configured at %s", Application.NAME, logging.getLevelName(log_level))
    return logger


def log_operation_error(
    logger: logging.Logger,
    error: ChainTableError,
    operation: str | None = None,
) -> None:
    """
    Log a ChainTableError with its code and context as structured extras.

    Args:
        logger: Logger instance
        error: The error to record
        operation: Operation name overriding the one in the error context
    """
    logger.error(
        error.message,
        extra={
            "error_code": error.code.value,
            "context": error.context.safe_dict(),
            "operation": operation or error.context.operation,
        },
        exc_info=error.original_error is not None,
    )


__all__ = [
    "StructuredFormatter",
    "log_operation_error",
    "setup_logging",
]
