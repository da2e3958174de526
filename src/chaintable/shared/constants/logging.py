"""
Logging Configuration Constants

This module contains all constants related to logging configuration,
log levels, and log formatting.
"""

import logging


class LogLevels:
    """Log level constants."""

    DEBUG = logging.DEBUG  # 10
    INFO = logging.INFO  # 20
    WARNING = logging.WARNING  # 30
    ERROR = logging.ERROR  # 40
    CRITICAL = logging.CRITICAL  # 50

    DEFAULT = WARNING


class LogConfig:
    """Log configuration constants."""

    DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
    DEFAULT_LEVEL_NAME = "WARNING"
    DEFAULT_CONSOLE_OUTPUT = True
    DEFAULT_RICH_CONSOLE = True


class LogMessages:
    """Log message templates."""

    TABLE_CREATED = "Created hash table with %d buckets"
    TABLE_RELEASED = "Released hash table: %d entries, %d buckets"
    CONFIG_LOADED = "Loaded configuration from %s"
    CONFIG_DEFAULTS = "No configuration file found, using defaults and environment"
