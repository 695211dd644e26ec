"""Byte view of caller-supplied blocks.

The tree hashes the raw bytes of each block:
- bytes, bytearray and memoryview are used as-is
- str is encoded as UTF-8
- any other object must implement ``__bytes__``
"""
from __future__ import annotations

from typing import Any, Iterable, List


def as_bytes(value: Any) -> bytes:
    """Convert a block to the bytes that get hashed.

    Args:
        value: Block value (bytes-like, str, or object with ``__bytes__``)

    Returns:
        Raw block bytes

    Raises:
        TypeError: If value has no byte view. int has no ``__bytes__`` and
            is rejected rather than passed to ``bytes(n)``, which would
            produce n zero bytes
    """
    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    if hasattr(value, "__bytes__"):
        return bytes(value)
    raise TypeError(f"Cannot convert {type(value).__name__} to bytes")


def as_byte_blocks(values: Iterable[Any]) -> List[bytes]:
    """Convert an ordered collection of blocks, preserving order."""
    return [as_bytes(v) for v in values]


__all__ = [
    "as_bytes",
    "as_byte_blocks",
]
