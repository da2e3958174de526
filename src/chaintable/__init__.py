"""
chaintable - chained hash table

A fixed-capacity, string-keyed hash table that resolves collisions by
chaining, with djb2 hashing, explicit teardown and an optional locked
variant for shared use.
"""

__version__ = "0.1.0"

from .core import (
    NOT_FOUND,
    EntryAllocator,
    HashTable,
    LookupMiss,
    SynchronizedHashTable,
    bucket_index,
    create_table,
    djb2,
)
from .shared.errors import (
    AllocationFailedError,
    ChainTableError,
    InvalidCapacityError,
    InvalidKeyError,
    TableClosedError,
)

__all__ = [
    "NOT_FOUND",
    "AllocationFailedError",
    "ChainTableError",
    "EntryAllocator",
    "HashTable",
    "InvalidCapacityError",
    "InvalidKeyError",
    "LookupMiss",
    "SynchronizedHashTable",
    "TableClosedError",
    "bucket_index",
    "create_table",
    "djb2",
]
