"""djb2 string hashing and bucket index computation.

Keys are hashed over their byte representation: text keys are encoded as
UTF-8 first, ``bytes``-like keys are used as-is. Arithmetic wraps modulo
2**64 so results match an unsigned 64-bit accumulator.

Example:
    >>> djb2("")
    5381
    >>> djb2("a")
    177670
    >>> bucket_index("a", 10)
    0
"""

from __future__ import annotations

from typing import Union

from chaintable.shared.constants import HashConstants
from chaintable.shared.errors import (
    ErrorCode,
    ErrorContext,
    InvalidKeyError,
    create_invalid_capacity_error,
)

KeyLike = Union[str, bytes, bytearray, memoryview]


def key_to_bytes(key: KeyLike) -> bytes:
    """Return an independent ``bytes`` copy of ``key``.

    Args:
        key: Text or bytes-like key

    Returns:
        Immutable byte string; never aliases a mutable caller buffer

    Raises:
        InvalidKeyError: If key is not text or bytes-like, or is text that
            cannot be encoded as UTF-8 (e.g. a lone surrogate)
    """
    if isinstance(key, str):
        try:
            return key.encode(HashConstants.KEY_ENCODING)
        except UnicodeEncodeError as e:
            raise InvalidKeyError(
                ErrorCode.INVALID_KEY,
                f"Key is not encodable as {HashConstants.KEY_ENCODING}: {e.reason}",
                ErrorContext(additional_data={"key_type": "str", "position": e.start}),
                e,
            ) from e
    if isinstance(key, (bytes, bytearray, memoryview)):
        return bytes(key)

    raise InvalidKeyError(
        ErrorCode.INVALID_KEY,
        f"Keys must be str or bytes, got {type(key).__name__}",
        ErrorContext(additional_data={"key_type": type(key).__name__}),
    )


def djb2(key: KeyLike) -> int:
    """Compute the djb2 hash: ``h = h * 33 + c`` from seed 5381.

    Args:
        key: Text or bytes-like key

    Returns:
        Unsigned 64-bit hash value
    """
    data = key if isinstance(key, bytes) else key_to_bytes(key)

    hash_value = HashConstants.SEED
    for byte in data:
        hash_value = (hash_value * HashConstants.MULTIPLIER + byte) & HashConstants.MASK
    return hash_value


def validate_capacity(capacity: object) -> int:
    """Check that ``capacity`` is a usable bucket count.

    ``bool`` is rejected even though it subclasses ``int``.

    Raises:
        InvalidCapacityError: If capacity is not a positive int
    """
    if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
        raise create_invalid_capacity_error(capacity)
    return capacity


def bucket_index(key: KeyLike, capacity: int) -> int:
    """Map ``key`` to its bucket: ``djb2(key) % capacity``."""
    return djb2(key) % validate_capacity(capacity)


__all__ = ["KeyLike", "bucket_index", "djb2", "key_to_bytes", "validate_capacity"]
