"""
Pytest configuration and shared fixtures for chaintable tests.

Provides instrumented allocators for teardown accounting and allocation
failure tests, and isolates every test from configuration files and
environment variables on the host.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest

from chaintable.cli.common.context import cli_context_var
from chaintable.config import loader
from chaintable.core.data_structures import EntryAllocator, HashTable
from chaintable.core.data_structures.entry import Entry
from chaintable.core.data_structures.hashing import KeyLike


class CountingAllocator(EntryAllocator[Any]):
    """Allocator that counts every allocation and release."""

    def __init__(self) -> None:
        self.buckets_allocated = 0
        self.buckets_released = 0
        self.keys_copied = 0
        self.keys_released = 0
        self.entries_allocated = 0
        self.entries_released = 0

    def allocate_buckets(self, capacity: int) -> list[int]:
        self.buckets_allocated += 1
        return super().allocate_buckets(capacity)

    def copy_key(self, key: KeyLike) -> bytes:
        self.keys_copied += 1
        return super().copy_key(key)

    def allocate_entry(self, key: bytes, value: Any, next_index: int, *, is_text: bool) -> Entry[Any]:
        self.entries_allocated += 1
        return super().allocate_entry(key, value, next_index, is_text=is_text)

    def release_key(self, key: bytes) -> None:
        self.keys_released += 1
        super().release_key(key)

    def release_entry(self, entry: Entry[Any]) -> None:
        self.entries_released += 1
        super().release_entry(entry)

    def release_buckets(self, buckets: list[int]) -> None:
        self.buckets_released += 1
        super().release_buckets(buckets)

    @property
    def live_keys(self) -> int:
        return self.keys_copied - self.keys_released

    @property
    def live_entries(self) -> int:
        return self.entries_allocated - self.entries_released


class FailingAllocator(CountingAllocator):
    """Counting allocator that raises MemoryError on demand.

    Args:
        fail_buckets: Fail bucket array allocation
        fail_key_after: Fail key copies once this many have succeeded
        fail_entry_after: Fail entry allocation once this many have succeeded
    """

    def __init__(
        self,
        *,
        fail_buckets: bool = False,
        fail_key_after: int | None = None,
        fail_entry_after: int | None = None,
    ) -> None:
        super().__init__()
        self.fail_buckets = fail_buckets
        self.fail_key_after = fail_key_after
        self.fail_entry_after = fail_entry_after

    def allocate_buckets(self, capacity: int) -> list[int]:
        if self.fail_buckets:
            raise MemoryError("bucket array")
        return super().allocate_buckets(capacity)

    def copy_key(self, key: KeyLike) -> bytes:
        if self.fail_key_after is not None and self.keys_copied >= self.fail_key_after:
            raise MemoryError("key copy")
        return super().copy_key(key)

    def allocate_entry(self, key: bytes, value: Any, next_index: int, *, is_text: bool) -> Entry[Any]:
        if self.fail_entry_after is not None and self.entries_allocated >= self.fail_entry_after:
            raise MemoryError("entry")
        return super().allocate_entry(key, value, next_index, is_text=is_text)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Run each test in an empty directory with no cached settings or CLI context.

    Yields:
        The temporary working directory.
    """
    for name in list(os.environ):
        if name.startswith("CHAINTABLE_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(loader._loader, "_instance", None)
    cli_context_var.set(None)
    yield tmp_path


@pytest.fixture
def counting_allocator() -> CountingAllocator:
    """Fresh counting allocator."""
    return CountingAllocator()


@pytest.fixture
def table() -> Generator[HashTable[Any], None, None]:
    """Ten-bucket table, closed after the test."""
    htbl: HashTable[Any] = HashTable(10)
    yield htbl
    htbl.close()


@pytest.fixture
def single_bucket_table() -> Generator[HashTable[Any], None, None]:
    """Table where every key collides into bucket 0."""
    htbl: HashTable[Any] = HashTable(1)
    yield htbl
    htbl.close()


@pytest.fixture
def failing_allocator() -> type[FailingAllocator]:
    """The FailingAllocator class, for tests to configure per case."""
    return FailingAllocator
