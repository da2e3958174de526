"""Tests for the chained HashTable."""

from __future__ import annotations

import io

import pytest

from chaintable.core.data_structures import NOT_FOUND, HashTable
from chaintable.shared.errors import (
    AllocationFailedError,
    ErrorCode,
    InvalidCapacityError,
    InvalidKeyError,
    TableClosedError,
)


class TestConstruction:
    """Creating tables."""

    @pytest.mark.parametrize("capacity", [1, 2, 7, 64])
    def test_fresh_table_is_empty(self, capacity):
        """A new table has size 0 and every bucket empty."""
        table = HashTable(capacity)

        assert table.size == 0
        assert len(table) == 0
        assert table.capacity == capacity
        assert table.chain_lengths() == [0] * capacity
        assert table.items() == []

    def test_create_classmethod(self):
        """create() builds the same kind of table as the constructor."""
        table = HashTable.create(5)
        assert isinstance(table, HashTable)
        assert table.capacity == 5

    @pytest.mark.parametrize("capacity", [0, -1, -100, True, 2.5, "10", None])
    def test_invalid_capacity_rejected_before_allocation(self, capacity, counting_allocator):
        """Non-positive or non-int capacities fail without allocating buckets."""
        with pytest.raises(InvalidCapacityError) as exc_info:
            HashTable(capacity, counting_allocator)

        assert exc_info.value.code == ErrorCode.INVALID_CAPACITY
        assert counting_allocator.buckets_allocated == 0

    def test_bucket_allocation_failure(self, failing_allocator):
        """Allocator exhaustion at construction surfaces as AllocationFailedError."""
        with pytest.raises(AllocationFailedError) as exc_info:
            HashTable(10, failing_allocator(fail_buckets=True))

        assert exc_info.value.code == ErrorCode.ALLOCATION_FAILED
        assert isinstance(exc_info.value.original_error, MemoryError)
        assert exc_info.value.context.operation == "create"

    def test_oversized_capacity(self):
        """A capacity too large to index is an allocation failure, not a crash."""
        with pytest.raises(AllocationFailedError) as exc_info:
            HashTable(2**70)

        assert exc_info.value.code == ErrorCode.ALLOCATION_FAILED
        assert isinstance(exc_info.value.__cause__, (MemoryError, OverflowError))


class TestInsertLookup:
    """Insert and lookup contract."""

    def test_insert_then_lookup(self, table):
        """Stored values come back by key."""
        assert table.lookup("one") is NOT_FOUND
        assert table.insert("one", 1) is True
        assert table.lookup("one") == 1
        assert table.size == 1

    def test_update_replaces_value_without_growing(self, counting_allocator):
        """Re-inserting a key replaces its value and keeps size and key copy."""
        counted = HashTable(10, counting_allocator)

        assert counted.insert("k", "v1") is True
        assert counted.insert("k", "v2") is False

        assert counted.lookup("k") == "v2"
        assert counted.size == 1
        assert counting_allocator.keys_copied == 1
        assert counting_allocator.keys_released == 0

    def test_distinct_keys_keep_their_values(self, table):
        """Two different keys are stored independently."""
        table.insert("k1", "first")
        table.insert("k2", "second")

        assert table.size == 2
        assert table.lookup("k1") == "first"
        assert table.lookup("k2") == "second"

    def test_values_are_stored_by_reference(self, table):
        """The table hands back the exact object it was given."""
        payload = {"size": 1024}
        table.insert("file", payload)

        assert table.lookup("file") is payload
        payload["size"] = 2048
        assert table.lookup("file")["size"] == 2048

    def test_none_value_is_not_a_miss(self, table):
        """A stored None stays distinguishable from NOT_FOUND."""
        table.insert("empty", None)

        assert table.lookup("empty") is None
        assert "empty" in table
        assert table.get("empty", "default") is None
        assert table.get("absent", "default") == "default"

    def test_key_copy_is_independent_of_caller_buffer(self, table):
        """Mutating a bytearray key after insertion does not disturb the table."""
        key = bytearray(b"abc")
        table.insert(key, 1)
        key[0] = ord("x")

        assert table.lookup(b"abc") == 1
        assert table.lookup(b"xbc") is NOT_FOUND
        assert table.keys() == [b"abc"]

    def test_text_and_bytes_keys_compare_bytewise(self, table):
        """A str key and its UTF-8 bytes address the same entry."""
        table.insert("café", 1)

        assert table.lookup("café".encode()) == 1
        table.insert("café".encode(), 2)
        assert table.size == 1
        assert table.keys() == ["café"]

    def test_empty_and_long_keys(self, table):
        """Edge-case keys are stored like any other."""
        long_key = "a" * 1000
        table.insert("", 0)
        table.insert(long_key, 999)

        assert table.lookup("") == 0
        assert table.lookup(long_key) == 999

    def test_invalid_key_type(self, table):
        """Keys must be text or bytes."""
        with pytest.raises(InvalidKeyError):
            table.insert(42, "value")  # type: ignore[arg-type]
        with pytest.raises(InvalidKeyError):
            table.lookup(("a", 1))  # type: ignore[arg-type]

        assert 42 not in table
        assert table.size == 0

    @pytest.mark.parametrize("key", ["\ud800", "ok\udfffok"])
    def test_unencodable_text_key(self, table, key):
        """Text with lone surrogates is rejected as an invalid key."""
        for operation in (
            lambda: table.insert(key, 1),
            lambda: table.lookup(key),
            lambda: table.delete(key),
        ):
            with pytest.raises(InvalidKeyError) as exc_info:
                operation()
            assert isinstance(exc_info.value.__cause__, UnicodeEncodeError)

        assert table.size == 0

    def test_mapping_protocol(self, table):
        """Item access mirrors insert, lookup and delete."""
        table["a"] = 1

        assert table["a"] == 1
        with pytest.raises(KeyError):
            table["missing"]

        del table["a"]
        assert "a" not in table
        with pytest.raises(KeyError):
            del table["a"]


class TestDelete:
    """Delete contract."""

    def test_delete_present_key(self, table):
        """Deleting a present key removes it and shrinks the table."""
        table.insert("a", 1)
        table.insert("b", 2)

        assert table.delete("a") is True
        assert table.lookup("a") is NOT_FOUND
        assert table.lookup("b") == 2
        assert table.size == 1

    def test_delete_absent_key(self, table):
        """Deleting an absent key is a miss and changes nothing."""
        table.insert("a", 1)

        assert table.delete("zzz") is False
        assert table.size == 1
        assert table.lookup("a") == 1

    def test_delete_twice(self, table):
        """The second delete of the same key reports not found."""
        table.insert("a", 1)

        assert table.delete("a") is True
        assert table.delete("a") is False

    def test_delete_releases_key_copy(self, counting_allocator):
        """Delete gives the entry and its key copy back to the allocator."""
        table = HashTable(4, counting_allocator)
        table.insert("a", 1)
        table.delete("a")

        assert counting_allocator.live_keys == 0
        assert counting_allocator.live_entries == 0

    @pytest.mark.parametrize("victim", ["a", "b", "c"])
    def test_delete_from_any_chain_position(self, single_bucket_table, victim):
        """Unlinking works at the head, middle and tail of a chain."""
        for value, key in enumerate("abc", start=1):
            single_bucket_table.insert(key, value)

        assert single_bucket_table.delete(victim) is True

        remaining = [key for key in "cba" if key != victim]
        assert single_bucket_table.keys() == remaining
        for key in remaining:
            assert single_bucket_table.lookup(key) == "abc".index(key) + 1

    def test_reinsert_after_delete(self, single_bucket_table):
        """A freed slot can hold a new entry without corrupting the chain."""
        single_bucket_table.insert("a", 1)
        single_bucket_table.insert("b", 2)
        single_bucket_table.delete("a")
        single_bucket_table.insert("c", 3)

        assert single_bucket_table.keys() == ["c", "b"]
        assert single_bucket_table.size == 2


class TestChaining:
    """Collision handling and traversal order."""

    def test_all_keys_collide_in_single_bucket(self, single_bucket_table):
        """With one bucket, every key is still retrievable through the chain."""
        table = single_bucket_table
        table.insert("a", 1)
        table.insert("b", 2)
        table.insert("c", 3)

        assert table.lookup("b") == 2
        assert table.delete("a") is True
        assert table.lookup("a") is NOT_FOUND
        assert table.lookup("c") == 3
        assert table.size == 2

    def test_new_keys_go_to_chain_head(self, single_bucket_table):
        """Chains list the most recently inserted key first."""
        for value, key in enumerate(["a", "b", "c"], start=1):
            single_bucket_table.insert(key, value)

        assert single_bucket_table.items() == [("c", 3), ("b", 2), ("a", 1)]

    def test_update_keeps_chain_position(self, single_bucket_table):
        """Updating a key does not move it to the head."""
        single_bucket_table.insert("a", 1)
        single_bucket_table.insert("b", 2)
        single_bucket_table.insert("a", 10)

        assert single_bucket_table.items() == [("b", 2), ("a", 10)]

    def test_entries_live_in_their_hash_bucket(self, table):
        """Every key is enumerated under the bucket it hashes to."""
        keys = [f"key{i}" for i in range(25)]
        for key in keys:
            table.insert(key, key.upper())

        seen = []
        for index, chain in table.iter_buckets():
            for key, value in chain:
                assert table.bucket_of(key) == index
                assert value == key.upper()
                seen.append(key)

        assert sorted(seen) == sorted(keys)
        assert sum(table.chain_lengths()) == table.size == 25

    def test_enumerate_and_drain(self, table):
        """Three keys enumerate as three entries; deleting them empties every bucket."""
        keys = ["key1", "key2", "key3"]
        for value, key in enumerate(keys):
            table.insert(key, value)

        buckets = dict(table.iter_buckets())
        assert sum(len(chain) for chain in buckets.values()) == 3
        for key in keys:
            assert key in [k for k, _ in buckets[table.bucket_of(key)]]

        for key in keys:
            assert table.delete(key) is True

        assert table.size == 0
        assert table.chain_lengths() == [0] * 10

    def test_load_factor(self, table):
        """Load factor is size over capacity and is not bounded."""
        for i in range(25):
            table.insert(str(i), i)

        assert table.load_factor == pytest.approx(2.5)
        assert table.capacity == 10


class TestRender:
    """Diagnostic dump."""

    def test_render_empty(self, table):
        """An empty table prints only the header."""
        assert table.render() == "Hash Table (size: 0, capacity: 10)\n"

    def test_render_chain(self, single_bucket_table):
        """Non-empty buckets are listed head first and end in NULL."""
        for key in ["a", "b", "c"]:
            single_bucket_table.insert(key, key)

        assert single_bucket_table.render() == (
            "Hash Table (size: 3, capacity: 1)\n" "  Bucket 0: [c]-> [b]-> [a]->NULL\n"
        )

    def test_render_skips_empty_buckets(self):
        """Only buckets holding entries appear in the dump."""
        table = HashTable(10)
        table.insert("a", 1)  # djb2("a") % 10 == 0

        assert table.render() == "Hash Table (size: 1, capacity: 10)\n  Bucket 0: [a]->NULL\n"

    def test_print_table_writes_to_stream(self, table):
        """print_table writes the dump to the given stream."""
        table.insert("a", 1)
        stream = io.StringIO()

        table.print_table(stream)

        assert stream.getvalue() == table.render()


class TestTeardown:
    """Closing tables."""

    def test_close_releases_every_key_copy(self, counting_allocator):
        """Teardown of N entries releases exactly N keys and the bucket array."""
        table = HashTable(3, counting_allocator)
        for i in range(7):
            table.insert(f"k{i}", i)
        released_before = counting_allocator.keys_released

        table.close()

        assert counting_allocator.keys_released - released_before == 7
        assert counting_allocator.live_keys == 0
        assert counting_allocator.live_entries == 0
        assert counting_allocator.buckets_released == 1

    def test_close_after_deletes(self, counting_allocator):
        """Entries removed earlier are not released a second time."""
        table = HashTable(3, counting_allocator)
        for i in range(5):
            table.insert(f"k{i}", i)
        table.delete("k0")
        table.delete("k3")

        table.close()

        assert counting_allocator.keys_copied == 5
        assert counting_allocator.keys_released == 5

    def test_closed_table_rejects_operations(self, table):
        """Use after teardown raises instead of being tolerated."""
        table.insert("a", 1)
        table.close()

        assert table.closed is True
        for operation in (
            lambda: table.insert("b", 2),
            lambda: table.lookup("a"),
            lambda: table.delete("a"),
            lambda: len(table),
            lambda: table.items(),
            lambda: table.render(),
        ):
            with pytest.raises(TableClosedError):
                operation()

    def test_close_is_idempotent(self, counting_allocator):
        """Closing twice releases nothing the second time."""
        table = HashTable(3, counting_allocator)
        table.insert("a", 1)
        table.close()
        table.close()

        assert counting_allocator.keys_released == 1
        assert counting_allocator.buckets_released == 1
        assert "closed=True" in repr(table)

    def test_context_manager_closes(self, counting_allocator):
        """Leaving a with-block tears the table down."""
        with HashTable(3, counting_allocator) as table:
            table.insert("a", 1)

        assert table.closed
        assert counting_allocator.live_keys == 0

    def test_free_alias(self):
        """free() is another name for close()."""
        table = HashTable(2)
        table.free()
        assert table.closed


class TestAllocationFailure:
    """Failed insertions leave the table unchanged."""

    def test_key_copy_failure(self, failing_allocator):
        """A failed key copy leaves size and contents as they were."""
        allocator = failing_allocator(fail_key_after=2)
        table = HashTable(2, allocator)
        table.insert("a", 1)
        table.insert("b", 2)
        before = table.items()

        with pytest.raises(AllocationFailedError) as exc_info:
            table.insert("c", 3)

        assert isinstance(exc_info.value.__cause__, MemoryError)
        assert table.size == 2
        assert table.items() == before
        assert table.lookup("c") is NOT_FOUND
        assert allocator.entries_allocated == 2

    def test_entry_failure_releases_key_copy(self, failing_allocator):
        """A failed entry allocation gives the fresh key copy back."""
        allocator = failing_allocator(fail_entry_after=1)
        table = HashTable(1, allocator)
        table.insert("a", 1)

        with pytest.raises(AllocationFailedError):
            table.insert("b", 2)

        assert table.size == 1
        assert table.items() == [("a", 1)]
        assert allocator.live_keys == 1

    def test_update_needs_no_allocation(self, failing_allocator):
        """Updating an existing key works even when allocation would fail."""
        allocator = failing_allocator(fail_key_after=1, fail_entry_after=1)
        table = HashTable(4, allocator)
        table.insert("a", 1)

        assert table.insert("a", 2) is False
        assert table.lookup("a") == 2

    def test_table_usable_after_failure(self, failing_allocator):
        """Once the allocator recovers, inserts succeed again."""
        allocator = failing_allocator(fail_key_after=0)
        table = HashTable(4, allocator)

        with pytest.raises(AllocationFailedError):
            table.insert("a", 1)

        allocator.fail_key_after = None
        assert table.insert("a", 1) is True
        assert table.size == 1


class TestChainIntegrity:
    """Corrupted chains fail loudly."""

    def test_released_slot_in_chain(self, single_bucket_table):
        """A chain that points at a released arena slot raises RuntimeError."""
        single_bucket_table.insert("a", 1)
        single_bucket_table._arena[0] = None

        with pytest.raises(RuntimeError, match="released slot 0"):
            single_bucket_table.lookup("a")

        single_bucket_table._arena = []
        single_bucket_table._buckets[0] = -1


class TestLargeDataset:
    """Behaviour with many keys in few buckets."""

    def test_many_keys_fixed_capacity(self):
        """Chains grow without rehashing and every key stays reachable."""
        table = HashTable(16)
        for i in range(1000):
            table.insert(f"file_{i}", i)

        assert table.size == 1000
        assert table.capacity == 16
        for i in range(1000):
            assert table.lookup(f"file_{i}") == i

        for i in range(0, 1000, 2):
            assert table.delete(f"file_{i}")

        assert table.size == 500
        assert sum(table.chain_lengths()) == 500
        assert table.lookup("file_2") is NOT_FOUND
        assert table.lookup("file_3") == 3
