"""Configuration domain models."""

from __future__ import annotations

from .app_settings import AppSettings, LoggingSettings
from .settings import Settings
from .table_settings import TableSettings

__all__ = ["AppSettings", "LoggingSettings", "Settings", "TableSettings"]
