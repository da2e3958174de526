"""chaintable Configuration Module

This module provides unified access to configuration models and settings
management:
- Settings: Main configuration facade
- Loader functions: get_config, load_settings, reload_config
- Domain models: App, Logging and Table settings
"""

from __future__ import annotations

from .loader import get_config, load_settings, reload_config
from .models import AppSettings, LoggingSettings, Settings, TableSettings

__all__ = [
    "AppSettings",
    "LoggingSettings",
    "Settings",
    "TableSettings",
    "get_config",
    "load_settings",
    "reload_config",
]
