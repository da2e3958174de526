"""Build tables from configuration."""

from __future__ import annotations

from typing import TypeVar, Union

from chaintable.config import Settings, get_config
from chaintable.core.data_structures import EntryAllocator, HashTable, SynchronizedHashTable

V = TypeVar("V")

AnyTable = Union[HashTable[V], SynchronizedHashTable[V]]


def create_table(
    settings: Settings | None = None,
    *,
    capacity: int | None = None,
    allocator: EntryAllocator[V] | None = None,
) -> AnyTable[V]:
    """Create a table sized and guarded according to ``settings``.

    Args:
        settings: Configuration to use; the global configuration if None
        capacity: Bucket count overriding ``settings.table.default_capacity``
        allocator: Optional allocator passed through to the table

    Returns:
        A SynchronizedHashTable when ``settings.table.synchronized`` is set,
        otherwise a plain HashTable
    """
    settings = settings or get_config()
    buckets = capacity if capacity is not None else settings.table.default_capacity

    if settings.table.synchronized:
        return SynchronizedHashTable(buckets, allocator)
    return HashTable(buckets, allocator)


__all__ = ["AnyTable", "create_table"]
