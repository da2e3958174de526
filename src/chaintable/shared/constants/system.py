"""
System Constants

Application metadata and hash table defaults shared across the package.
"""

from typing import Final


class Application:
    """Application metadata constants."""

    NAME = "chaintable"
    VERSION = "0.1.0"
    DESCRIPTION = "Fixed-capacity string-keyed hash table with chained buckets"


class HashConstants:
    """djb2 hash parameters."""

    SEED: Final[int] = 5381
    MULTIPLIER: Final[int] = 33
    WIDTH_BITS: Final[int] = 64
    MASK: Final[int] = (1 << WIDTH_BITS) - 1  # unsigned wraparound
    KEY_ENCODING: Final[str] = "utf-8"


class TableDefaults:
    """Hash table defaults."""

    CAPACITY = 10
    NO_ENTRY = -1  # empty bucket / end of chain


class FileSystem:
    """Configuration file locations."""

    CONFIG_FILE = "chaintable.toml"
    CONFIG_DIR = "config"
    ENV_PREFIX = "CHAINTABLE_"
