"""Allocation seam for hash table storage.

Every bucket array, entry node and key copy owned by a :class:`HashTable`
is obtained from and handed back to an :class:`EntryAllocator`. The default
allocator relies on the interpreter's memory management; subclasses can
count or restrict allocations, which is how teardown accounting and
allocation-failure handling are exercised.

Allocators signal exhaustion by raising :class:`MemoryError`; the table
translates that into :class:`~chaintable.shared.errors.AllocationFailedError`.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from chaintable.core.data_structures.entry import Entry
from chaintable.core.data_structures.hashing import KeyLike, key_to_bytes
from chaintable.shared.constants import TableDefaults

V = TypeVar("V")


class EntryAllocator(Generic[V]):
    """Default allocator backed by ordinary Python objects."""

    def allocate_buckets(self, capacity: int) -> list[int]:
        """Return a bucket array of ``capacity`` empty slots.

        Raises:
            MemoryError: If the array cannot be allocated
            OverflowError: If ``capacity`` exceeds the platform index size
        """
        return [TableDefaults.NO_ENTRY] * capacity

    def copy_key(self, key: KeyLike) -> bytes:
        """Return an owned copy of ``key``.

        Raises:
            MemoryError: If the copy cannot be allocated
        """
        return key_to_bytes(key)

    def allocate_entry(self, key: bytes, value: V, next_index: int, *, is_text: bool) -> Entry[V]:
        """Return a new entry node holding ``key`` and ``value``.

        Raises:
            MemoryError: If the node cannot be allocated
        """
        return Entry(key, value, next_index, is_text=is_text)

    def release_key(self, key: bytes) -> None:
        """Give back a key copy made by :meth:`copy_key`."""

    def release_entry(self, entry: Entry[V]) -> None:
        """Give back an entry node; drops its reference to the caller's value."""
        entry.value = None  # type: ignore[assignment]
        entry.next = TableDefaults.NO_ENTRY

    def release_buckets(self, buckets: list[int]) -> None:
        """Give back a bucket array made by :meth:`allocate_buckets`."""
        buckets.clear()


__all__ = ["EntryAllocator"]
