"""Application and logging configuration models.

This module contains configuration models for application-level
settings and logging configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from chaintable.shared.constants import Application, LogConfig

_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AppSettings(BaseModel):
    """Application metadata and debug switch."""

    name: str = Field(default=Application.NAME, description="Application name")
    version: str = Field(default=Application.VERSION, description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")


class LoggingSettings(BaseModel):
    """Logging configuration.

    This class manages logging behavior including level, format
    and console output settings.
    """

    level: str = Field(default=LogConfig.DEFAULT_LEVEL_NAME, description="Logging level")
    format_string: str = Field(
        default=LogConfig.DEFAULT_FORMAT,
        description="Log format string",
        alias="format",
    )
    console_output: bool = Field(default=LogConfig.DEFAULT_CONSOLE_OUTPUT, description="Enable console logging")
    rich_console: bool = Field(
        default=LogConfig.DEFAULT_RICH_CONSOLE,
        description="Render console logs with rich",
    )
    structured: bool = Field(
        default=False,
        description="Emit JSON records when rich output is disabled",
    )

    model_config = {"populate_by_name": True}

    @field_validator("level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LEVEL_NAMES:
            msg = f"Unknown log level: {value}"
            raise ValueError(msg)
        return level


__all__ = ["AppSettings", "LoggingSettings"]
