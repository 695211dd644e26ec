"""Merkle hash trees for block integrity verification.

Build a tree over an ordered sequence of blocks, publish its root hash, and
later check individual blocks against the retained tree.
"""

from merkle_tree.core import (
    Digest,
    DoubleDigest,
    Keccak256Digest,
    Sha256Digest,
    keccak256,
    new_digest,
    sha256,
)
from merkle_tree.engine import INTERNAL_TAG, LEAF_TAG, HashEngine
from merkle_tree.errors import (
    InsufficientInputError,
    MerkleTreeError,
    PositionOutOfRangeError,
)
from merkle_tree.merkle import MerkleTree, hash_leaf, hash_node, merkle_root

__version__ = "0.1.0"

__all__ = [
    "Digest",
    "DoubleDigest",
    "HashEngine",
    "INTERNAL_TAG",
    "InsufficientInputError",
    "Keccak256Digest",
    "LEAF_TAG",
    "MerkleTree",
    "MerkleTreeError",
    "PositionOutOfRangeError",
    "Sha256Digest",
    "hash_leaf",
    "hash_node",
    "keccak256",
    "merkle_root",
    "new_digest",
    "sha256",
]
