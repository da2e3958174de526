"""Thread-safe wrapper around :class:`HashTable`.

Every operation runs under one reentrant lock, so callers get the same
semantics as the plain table with whole-operation atomicity. Traversal
methods return snapshots built while the lock is held.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from types import TracebackType
from typing import Generic, TextIO, TypeVar

from chaintable.core.data_structures.allocator import EntryAllocator
from chaintable.core.data_structures.hash_table import HashTable, LookupMiss
from chaintable.core.data_structures.hashing import KeyLike
from chaintable.shared.constants import TableDefaults

V = TypeVar("V")
T = TypeVar("T")


class SynchronizedHashTable(Generic[V]):
    """HashTable guarded by a single coarse-grained lock."""

    def __init__(
        self,
        capacity: int = TableDefaults.CAPACITY,
        allocator: EntryAllocator[V] | None = None,
    ):
        self._table: HashTable[V] = HashTable(capacity, allocator)
        self._lock = threading.RLock()

    def insert(self, key: KeyLike, value: V) -> bool:
        with self._lock:
            return self._table.insert(key, value)

    def lookup(self, key: KeyLike) -> V | LookupMiss:
        with self._lock:
            return self._table.lookup(key)

    def get(self, key: KeyLike, default: T | None = None) -> V | T | None:
        with self._lock:
            return self._table.get(key, default)

    def delete(self, key: KeyLike) -> bool:
        with self._lock:
            return self._table.delete(key)

    def bucket_of(self, key: KeyLike) -> int:
        with self._lock:
            return self._table.bucket_of(key)

    def iter_buckets(self) -> Iterator[tuple[int, list[tuple[str | bytes, V]]]]:
        with self._lock:
            snapshot = list(self._table.iter_buckets())
        return iter(snapshot)

    def items(self) -> list[tuple[str | bytes, V]]:
        with self._lock:
            return self._table.items()

    def keys(self) -> list[str | bytes]:
        with self._lock:
            return self._table.keys()

    def chain_lengths(self) -> list[int]:
        with self._lock:
            return self._table.chain_lengths()

    def render(self) -> str:
        with self._lock:
            return self._table.render()

    def print_table(self, stream: TextIO | None = None) -> None:
        with self._lock:
            self._table.print_table(stream)

    def close(self) -> None:
        with self._lock:
            self._table.close()

    free = close

    def __enter__(self) -> SynchronizedHashTable[V]:
        with self._lock:
            self._table.__enter__()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._table.closed

    @property
    def size(self) -> int:
        with self._lock:
            return self._table.size

    @property
    def capacity(self) -> int:
        return self._table.capacity

    @property
    def load_factor(self) -> float:
        with self._lock:
            return self._table.load_factor

    def __len__(self) -> int:
        return self.size

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._table

    def __getitem__(self, key: KeyLike) -> V:
        with self._lock:
            return self._table[key]

    def __setitem__(self, key: KeyLike, value: V) -> None:
        self.insert(key, value)

    def __delitem__(self, key: KeyLike) -> None:
        with self._lock:
            del self._table[key]

    def __iter__(self) -> Iterator[tuple[str | bytes, V]]:
        return iter(self.items())

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        with self._lock:
            return f"Synchronized{self._table!r}"


__all__ = ["SynchronizedHashTable"]
