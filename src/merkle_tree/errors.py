"""Usage errors raised by tree construction and verification.

Both conditions are caller contract violations. They are raised immediately
and never retried, clamped or downgraded to a boolean result.
"""
from __future__ import annotations


class MerkleTreeError(Exception):
    """Base class for merkle_tree errors."""


class InsufficientInputError(MerkleTreeError, ValueError):
    """Raised when a tree is built from fewer than two blocks."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(
            f"Merkle tree requires at least 2 blocks, got {count}"
        )


class PositionOutOfRangeError(MerkleTreeError, IndexError):
    """Raised when a leaf position is outside ``[0, leaf_count)``."""

    def __init__(self, position: int, leaf_count: int):
        self.position = position
        self.leaf_count = leaf_count
        super().__init__(
            f"Leaf position {position} out of range for tree with {leaf_count} leaves"
        )


__all__ = [
    "MerkleTreeError",
    "InsufficientInputError",
    "PositionOutOfRangeError",
]
