"""Entry node stored in the hash table arena."""

from __future__ import annotations

from typing import Generic, TypeVar

from chaintable.shared.constants import HashConstants, TableDefaults

V = TypeVar("V")


class Entry(Generic[V]):
    """A single key/value association in a bucket chain.

    ``next`` is the arena index of the following entry in the same bucket,
    or ``TableDefaults.NO_ENTRY`` at the end of the chain. The value is a
    caller reference and is never copied or inspected.

    Optimized for memory efficiency using __slots__.
    """

    __slots__ = ("is_text", "key", "next", "value")

    def __init__(
        self,
        key: bytes,
        value: V,
        next: int = TableDefaults.NO_ENTRY,  # noqa: A002
        *,
        is_text: bool = True,
    ):
        """Initialize Entry.

        Args:
            key: Owned byte copy of the key
            value: Caller-supplied value reference
            next: Arena index of the next entry in the chain
            is_text: Whether the key was supplied as ``str``
        """
        self.key = key
        self.value = value
        self.next = next
        self.is_text = is_text

    @property
    def display_key(self) -> str | bytes:
        """The key in the form it was first inserted."""
        if self.is_text:
            return self.key.decode(HashConstants.KEY_ENCODING)
        return self.key

    def __repr__(self) -> str:
        """String representation of the entry."""
        return f"Entry(key={self.display_key!r}, next={self.next})"
