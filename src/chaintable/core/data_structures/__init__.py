"""Data structures module for chaintable.

This module contains the chained hash table and its supporting pieces.
"""

from .allocator import EntryAllocator
from .entry import Entry
from .hash_table import NOT_FOUND, HashTable, LookupMiss
from .hashing import bucket_index, djb2
from .synchronized import SynchronizedHashTable

__all__ = [
    "NOT_FOUND",
    "Entry",
    "EntryAllocator",
    "HashTable",
    "LookupMiss",
    "SynchronizedHashTable",
    "bucket_index",
    "djb2",
]
