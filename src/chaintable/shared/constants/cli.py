"""
CLI Configuration Constants

This module contains help text, option names and exit codes for the
command-line interface.
"""

from typing import Literal

from .system import Application


class CLIDefaults:
    """CLI default values."""

    VERSION = Application.VERSION
    EXIT_SUCCESS = 0
    EXIT_ERROR = 1
    EXIT_USAGE = 2
    EXIT_INTERRUPTED = 130


class CLICommands:
    """CLI command names."""

    DEMO = "demo"
    HASH = "hash"
    INSPECT = "inspect"


class CLIOptions:
    """CLI option flags."""

    CAPACITY = "--capacity"
    CAPACITY_SHORT = "-c"
    JSON = "--json"


class CLIHelp:
    """CLI help text and descriptions."""

    VERSION_TEXT = "chaintable CLI v{version}"

    APP_NAME = "chaintable"
    APP_DESCRIPTION = "chaintable - chained hash table toolkit"
    APP_STYLE: Literal["rich"] = "rich"

    CAPACITY_HELP = "Number of buckets (defaults to the configured capacity)"
    JSON_HELP = "Output results in JSON format"

    DEMO_HELP = "Run the example session: insert, print, look up, delete, print"
    HASH_HELP = "Show the djb2 hash and bucket index of a key"
    HASH_KEY_HELP = "Key to hash"
    INSPECT_HELP = "Load KEY=VALUE pairs and show the bucket layout"
    INSPECT_PAIRS_HELP = "Pairs in KEY=VALUE form"


class CLIMessages:
    """CLI message templates."""

    DEMO_LOOKUP = "Value for {key}: {value}"
    DEMO_DELETED = "Deleted {key}"
    HASH_RESULT = "djb2({key!r}) = {hash} -> bucket {index} of {capacity}"
    BAD_PAIR = "Expected KEY=VALUE, got {pair!r}"
