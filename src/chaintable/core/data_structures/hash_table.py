"""Fixed-capacity hash table with chained collision resolution.

This module provides a string-keyed hash table that resolves collisions by
chaining. Entries live in an arena (a list addressed by integer index); each
bucket holds the arena index of its chain head and each entry holds the
index of the next entry in its chain. New keys are linked at the head of
their bucket, so a chain lists its keys most recent first.

Key Features:
- djb2 hashing over the key bytes, bucket = hash % capacity
- O(1) head insertion, O(chain length) lookup and delete
- Keys are copied on insert; caller values are stored by reference only
- Fixed capacity: the table never rehashes, so chains grow with load
- Explicit teardown through close(); a closed table rejects every operation

Thread safety:
    HashTable performs no locking. Callers that share a table between
    threads must serialize access themselves or use
    :class:`~chaintable.core.data_structures.synchronized.SynchronizedHashTable`.

Example:
    >>> table = HashTable[int](10)
    >>> table.insert("key1", 100)
    True
    >>> table.lookup("key1")
    100
    >>> table.lookup("missing") is NOT_FOUND
    True
    >>> table.delete("key1")
    True
    >>> table.close()
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from enum import Enum
from types import TracebackType
from typing import Generic, TextIO, TypeVar

from chaintable.core.data_structures.allocator import EntryAllocator
from chaintable.core.data_structures.entry import Entry
from chaintable.core.data_structures.hashing import (
    KeyLike,
    djb2,
    key_to_bytes,
    validate_capacity,
)
from chaintable.shared.constants import HashConstants, LogMessages, TableDefaults
from chaintable.shared.errors import (
    ErrorCode,
    ErrorContext,
    TableClosedError,
    create_allocation_error,
)

logger = logging.getLogger(__name__)

V = TypeVar("V")
T = TypeVar("T")

NO_ENTRY = TableDefaults.NO_ENTRY


class LookupMiss(Enum):
    """Marker type for a key that is not in the table."""

    NOT_FOUND = "NOT_FOUND"

    def __repr__(self) -> str:
        return self.value


NOT_FOUND = LookupMiss.NOT_FOUND


class HashTable(Generic[V]):
    """String-keyed hash table with a fixed number of chained buckets.

    Args:
        capacity: Number of buckets; must be a positive int
        allocator: Source of bucket arrays, entries and key copies

    Raises:
        InvalidCapacityError: If capacity is not a positive int
        AllocationFailedError: If the bucket array cannot be allocated
    """

    def __init__(
        self,
        capacity: int = TableDefaults.CAPACITY,
        allocator: EntryAllocator[V] | None = None,
    ):
        """Initialize the table with ``capacity`` empty buckets."""
        self._capacity = validate_capacity(capacity)
        self._allocator: EntryAllocator[V] = allocator if allocator is not None else EntryAllocator()

        try:
            buckets = self._allocator.allocate_buckets(self._capacity)
        except (MemoryError, OverflowError) as e:
            raise create_allocation_error(
                "bucket array",
                "create",
                e,
                capacity=self._capacity,
            ) from e

        self._buckets: list[int] = buckets
        self._arena: list[Entry[V] | None] = []
        self._free_slots: list[int] = []
        self._size = 0
        self._closed = False

        logger.debug(LogMessages.TABLE_CREATED, self._capacity)

    @classmethod
    def create(
        cls,
        capacity: int = TableDefaults.CAPACITY,
        allocator: EntryAllocator[V] | None = None,
    ) -> HashTable[V]:
        """Create a table; same as calling the class."""
        return cls(capacity, allocator)

    # -- internals -----------------------------------------------------

    def _ensure_open(self, operation: str) -> None:
        if self._closed:
            raise TableClosedError(
                ErrorCode.TABLE_CLOSED,
                f"Cannot {operation}: the table has been closed",
                ErrorContext(operation=operation),
            )

    def _index_for(self, key_bytes: bytes) -> int:
        return djb2(key_bytes) % self._capacity

    def _entry(self, slot: int) -> Entry[V]:
        entry = self._arena[slot]
        if entry is None:
            raise RuntimeError(f"Chain references released slot {slot}")
        return entry

    def _find(self, key_bytes: bytes, index: int) -> tuple[int, int]:
        """Locate ``key_bytes`` in bucket ``index``.

        Returns:
            (previous slot, matching slot); either may be NO_ENTRY
        """
        prev = NO_ENTRY
        current = self._buckets[index]

        while current != NO_ENTRY:
            entry = self._entry(current)
            if entry.key == key_bytes:
                return prev, current
            prev = current
            current = entry.next

        return prev, NO_ENTRY

    def _store(self, entry: Entry[V]) -> int:
        """Place ``entry`` in the arena and return its slot."""
        if self._free_slots:
            slot = self._free_slots.pop()
            self._arena[slot] = entry
            return slot

        self._arena.append(entry)
        return len(self._arena) - 1

    def _discard(self, slot: int) -> None:
        entry = self._entry(slot)
        self._arena[slot] = None
        self._free_slots.append(slot)
        self._allocator.release_key(entry.key)
        self._allocator.release_entry(entry)

    # -- operations ----------------------------------------------------

    def insert(self, key: KeyLike, value: V) -> bool:
        """Insert a new key or replace the value of an existing one.

        An existing key keeps its entry and its key copy; only the value
        reference changes. A new key gets an entry linked at the head of
        its bucket chain.

        Args:
            key: Text or bytes key, compared byte for byte
            value: Value reference to store

        Returns:
            True if a new entry was created, False if an existing key was updated

        Raises:
            InvalidKeyError: If key is not text or bytes
            AllocationFailedError: If the entry or key copy cannot be allocated;
                the table is left unchanged
            TableClosedError: If the table has been closed
        """
        self._ensure_open("insert")
        probe = key_to_bytes(key)
        index = self._index_for(probe)

        _, slot = self._find(probe, index)
        if slot != NO_ENTRY:
            self._entry(slot).value = value
            return False

        try:
            owned_key = self._allocator.copy_key(key)
        except MemoryError as e:
            raise create_allocation_error("key copy", "insert", e, bucket=index) from e

        entry: Entry[V] | None = None
        try:
            entry = self._allocator.allocate_entry(
                owned_key,
                value,
                self._buckets[index],
                is_text=isinstance(key, str),
            )
            slot = self._store(entry)
        except MemoryError as e:
            if entry is not None:
                self._allocator.release_entry(entry)
            self._allocator.release_key(owned_key)
            raise create_allocation_error("entry", "insert", e, bucket=index) from e

        self._buckets[index] = slot
        self._size += 1
        return True

    def lookup(self, key: KeyLike) -> V | LookupMiss:
        """Return the value stored for ``key``, or ``NOT_FOUND``.

        Raises:
            InvalidKeyError: If key is not text or bytes
            TableClosedError: If the table has been closed
        """
        self._ensure_open("lookup")
        probe = key_to_bytes(key)
        _, slot = self._find(probe, self._index_for(probe))

        if slot == NO_ENTRY:
            return NOT_FOUND
        return self._entry(slot).value

    def get(self, key: KeyLike, default: T | None = None) -> V | T | None:
        """Return the value for ``key``, or ``default`` if absent."""
        value = self.lookup(key)
        if value is NOT_FOUND:
            return default
        return value

    def delete(self, key: KeyLike) -> bool:
        """Remove ``key`` and release its entry and key copy.

        Returns:
            True if the key was removed, False if it was not present

        Raises:
            InvalidKeyError: If key is not text or bytes
            TableClosedError: If the table has been closed
        """
        self._ensure_open("delete")
        probe = key_to_bytes(key)
        index = self._index_for(probe)

        prev, slot = self._find(probe, index)
        if slot == NO_ENTRY:
            return False

        following = self._entry(slot).next
        if prev == NO_ENTRY:
            self._buckets[index] = following
        else:
            self._entry(prev).next = following

        self._discard(slot)
        self._size -= 1
        return True

    def bucket_of(self, key: KeyLike) -> int:
        """Return the bucket index ``key`` hashes to."""
        self._ensure_open("bucket_of")
        return self._index_for(key_to_bytes(key))

    # -- traversal -----------------------------------------------------

    def _chain(self, index: int) -> Iterator[Entry[V]]:
        current = self._buckets[index]
        while current != NO_ENTRY:
            entry = self._entry(current)
            yield entry
            current = entry.next

    def iter_buckets(self) -> Iterator[tuple[int, list[tuple[str | bytes, V]]]]:
        """Yield ``(index, [(key, value), ...])`` for every bucket.

        Buckets come in index order; each chain runs head to tail, i.e.
        most recently inserted key first. Global insertion order across
        buckets is not preserved.
        """
        self._ensure_open("iterate")
        for index in range(self._capacity):
            yield index, [(entry.display_key, entry.value) for entry in self._chain(index)]

    def items(self) -> list[tuple[str | bytes, V]]:
        """Return all ``(key, value)`` pairs in bucket then chain order."""
        return [pair for _, chain in self.iter_buckets() for pair in chain]

    def keys(self) -> list[str | bytes]:
        """Return all keys in bucket then chain order."""
        return [key for key, _ in self.items()]

    def chain_lengths(self) -> list[int]:
        """Return the number of entries in each bucket."""
        return [len(chain) for _, chain in self.iter_buckets()]

    def render(self) -> str:
        """Return a diagnostic dump listing every non-empty bucket.

        Example:
            Hash Table (size: 2, capacity: 10)
              Bucket 2: [key3]-> [key1]->NULL
        """
        self._ensure_open("render")
        lines = [f"Hash Table (size: {self._size}, capacity: {self._capacity})"]
        for index in range(self._capacity):
            links = "".join(f" [{_format_key(entry)}]->" for entry in self._chain(index))
            if links:
                lines.append(f"  Bucket {index}:{links}NULL")
        return "\n".join(lines) + "\n"

    def print_table(self, stream: TextIO | None = None) -> None:
        """Write :meth:`render` output to ``stream`` (stdout by default)."""
        (stream or sys.stdout).write(self.render())

    # -- teardown ------------------------------------------------------

    def close(self) -> None:
        """Release every entry, key copy and the bucket array.

        The table cannot be used afterwards; any further operation raises
        TableClosedError. Closing an already closed table does nothing.
        """
        if self._closed:
            return

        released = 0
        for index in range(self._capacity):
            current = self._buckets[index]
            while current != NO_ENTRY:
                following = self._entry(current).next
                self._discard(current)
                released += 1
                current = following
            self._buckets[index] = NO_ENTRY

        self._allocator.release_buckets(self._buckets)
        self._arena = []
        self._free_slots = []
        self._size = 0
        self._closed = True

        logger.debug(LogMessages.TABLE_RELEASED, released, self._capacity)

    free = close

    def __enter__(self) -> HashTable[V]:
        self._ensure_open("enter")
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    # -- properties and dunders ----------------------------------------

    @property
    def closed(self) -> bool:
        """Whether :meth:`close` has been called."""
        return self._closed

    @property
    def size(self) -> int:
        """Number of stored keys."""
        self._ensure_open("size")
        return self._size

    @property
    def capacity(self) -> int:
        """Number of buckets, fixed at construction."""
        return self._capacity

    @property
    def load_factor(self) -> float:
        """Current size divided by capacity."""
        return self.size / self._capacity

    def __len__(self) -> int:
        return self.size

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (str, bytes, bytearray, memoryview)):
            return False
        return self.lookup(key) is not NOT_FOUND

    def __getitem__(self, key: KeyLike) -> V:
        value = self.lookup(key)
        if value is NOT_FOUND:
            raise KeyError(key)
        return value

    def __setitem__(self, key: KeyLike, value: V) -> None:
        self.insert(key, value)

    def __delitem__(self, key: KeyLike) -> None:
        if not self.delete(key):
            raise KeyError(key)

    def __iter__(self) -> Iterator[tuple[str | bytes, V]]:
        """Iterate over ``(key, value)`` pairs in bucket then chain order."""
        return iter(self.items())

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        if self._closed:
            return f"HashTable(capacity={self._capacity}, closed=True)"
        return f"HashTable(capacity={self._capacity}, size={self._size})"


def _format_key(entry: Entry[V]) -> str:
    if entry.is_text:
        return entry.key.decode(HashConstants.KEY_ENCODING)
    return entry.key.decode(HashConstants.KEY_ENCODING, errors="backslashreplace")


__all__ = ["NOT_FOUND", "HashTable", "LookupMiss"]
