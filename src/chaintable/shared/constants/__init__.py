"""
chaintable Constants Module

Centralized constants for chaintable. All magic values are defined here.
"""

from .cli import CLICommands, CLIDefaults, CLIHelp, CLIMessages, CLIOptions
from .logging import LogConfig, LogLevels, LogMessages
from .system import Application, FileSystem, HashConstants, TableDefaults

__all__ = [
    "Application",
    "CLICommands",
    "CLIDefaults",
    "CLIHelp",
    "CLIMessages",
    "CLIOptions",
    "FileSystem",
    "HashConstants",
    "LogConfig",
    "LogLevels",
    "LogMessages",
    "TableDefaults",
]
