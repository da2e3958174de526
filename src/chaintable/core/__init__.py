"""Core table components for chaintable."""

from .data_structures import (
    NOT_FOUND,
    EntryAllocator,
    HashTable,
    LookupMiss,
    SynchronizedHashTable,
    bucket_index,
    djb2,
)
from .factory import create_table

__all__ = [
    "NOT_FOUND",
    "EntryAllocator",
    "HashTable",
    "LookupMiss",
    "SynchronizedHashTable",
    "bucket_index",
    "create_table",
    "djb2",
]
