"""Merkle tree over an ordered sequence of blocks.

This module implements domain-separated Merkle trees:
- LeafHash(data) = H(0x00 || data)
- NodeHash(left, right) = H(0x01 || left || right)

Odd levels are padded by duplicating their last node, at every level, so an
unpaired node's parent is NodeHash(node, node). Nodes are stored in a flat
breadth-first array: slot 0 is the root, the children of slot i are
2i + 1 and 2i + 2, and leaves start at next_power_of_two(leaf_count) - 1.
"""
from __future__ import annotations

import hmac
import logging
import operator
from contextlib import nullcontext
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Any, Callable, Iterable, List

from .blocks import as_byte_blocks, as_bytes
from .core import sha256
from .engine import INTERNAL_TAG, LEAF_TAG, HashEngine
from .errors import InsufficientInputError, PositionOutOfRangeError

logger = logging.getLogger(__name__)

_EMPTY = b""


def hash_leaf(data: bytes) -> bytes:
    """Hash a leaf with the default primitive: SHA256(0x00 || data).

    Args:
        data: Raw leaf data bytes

    Returns:
        32-byte leaf hash
    """
    return sha256(LEAF_TAG + data)


def hash_node(left: bytes, right: bytes) -> bytes:
    """Hash an internal node with the default primitive: SHA256(0x01 || left || right).

    Args:
        left: Left child hash
        right: Right child hash

    Returns:
        32-byte node hash
    """
    return sha256(INTERNAL_TAG + left + right)


def next_power_of_two(n: int) -> int:
    """Smallest power of two >= n (n >= 1)."""
    return 1 << (n - 1).bit_length()


def _leaf_digests(engine: HashEngine, blocks: List[bytes]) -> List[bytes]:
    return [engine.hash_leaf(b) for b in blocks]


def _parent_digests(engine: HashEngine, level: List[bytes]) -> List[bytes]:
    parents = []
    for i in range(0, len(level) - 1, 2):
        parents.append(engine.hash_internal(level[i], level[i + 1]))
    if len(level) % 2:
        parents.append(engine.hash_internal_one_child(level[-1]))
    return parents


def _split(items: List[bytes], parts: int, align: int) -> List[List[bytes]]:
    size = -(-len(items) // parts)
    size += size % align
    return [items[i:i + size] for i in range(0, len(items), size)]


def _run_level(
    fn: Callable[[HashEngine, List[bytes]], List[bytes]],
    engine: HashEngine,
    items: List[bytes],
    executor: Executor | None,
    workers: int,
    align: int,
) -> List[bytes]:
    """Apply fn to one level, fanning out across executor when given.

    Each chunk gets its own forked engine. Chunks are pair-aligned for
    parent levels so no pair straddles two chunks.
    """
    if executor is None:
        return fn(engine, items)
    chunks = _split(items, workers, align)
    if len(chunks) == 1:
        return fn(engine, items)
    engines = [engine.fork() for _ in chunks]
    digests: List[bytes] = []
    for part in executor.map(fn, engines, chunks):
        digests.extend(part)
    return digests


class MerkleTree:
    """Complete Merkle tree held as a flat breadth-first digest array.

    Build with :meth:`MerkleTree.build`. The digest array is never modified
    after construction; :meth:`verify` only reuses the bound engine.
    """

    def __init__(self, nodes: List[bytes], leaf_count: int, engine: HashEngine):
        self._nodes = nodes
        self._leaf_count = leaf_count
        self._leaf_offset = next_power_of_two(leaf_count) - 1
        self._engine = engine

    @classmethod
    def build(
        cls,
        values: Iterable[Any],
        engine: HashEngine | None = None,
        *,
        algorithm: str | None = None,
        workers: int | None = None,
    ) -> "MerkleTree":
        """Build a tree over an ordered collection of blocks.

        Args:
            values: Blocks in leaf order (bytes-like, str, or ``__bytes__``)
            engine: Hash engine to bind to the tree (default SHA-256)
            algorithm: Algorithm name, alternative to ``engine``
            workers: Hash each level on this many threads when > 1

        Returns:
            The built tree

        Raises:
            InsufficientInputError: If fewer than 2 blocks are given
            ValueError: If both engine and algorithm are given, or workers < 1
        """
        if engine is not None and algorithm is not None:
            raise ValueError("Pass either engine or algorithm, not both")
        if workers is not None and workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        if engine is None:
            engine = HashEngine.from_algorithm(algorithm or "sha256")

        blocks = as_byte_blocks(values)
        leaf_count = len(blocks)
        if leaf_count < 2:
            raise InsufficientInputError(leaf_count)

        width = next_power_of_two(leaf_count)
        nodes = [_EMPTY] * (2 * width - 1)

        parallel = workers is not None and workers > 1
        pool = ThreadPoolExecutor(max_workers=workers) if parallel else nullcontext()
        with pool as executor:
            level = _run_level(_leaf_digests, engine, blocks, executor, workers or 1, 1)
            offset = width - 1
            while True:
                nodes[offset:offset + len(level)] = level
                if len(level) == 1:
                    break
                if len(level) % 2:
                    nodes[offset + len(level)] = level[-1]
                level = _run_level(_parent_digests, engine, level, executor, workers or 1, 2)
                offset = (offset - 1) // 2

        tree = cls(nodes, leaf_count, engine)
        logger.debug(
            "Built merkle tree: leaves=%d height=%d root=%s",
            leaf_count, tree.height, tree.root_hash_hex(),
        )
        return tree

    @property
    def leaf_count(self) -> int:
        return self._leaf_count

    @property
    def height(self) -> int:
        """Number of levels above the leaves."""
        return (self._leaf_offset + 1).bit_length() - 1

    @property
    def engine(self) -> HashEngine:
        return self._engine

    def root_hash(self) -> bytes:
        """Return the root digest."""
        return self._nodes[0]

    def root_hash_hex(self) -> str:
        """Return the root digest as lower-case hex."""
        return self._nodes[0].hex()

    def leaf_hash(self, position: int) -> bytes:
        """Return the stored digest of leaf ``position``.

        Raises:
            TypeError: If position is not an integer
            PositionOutOfRangeError: If position is not in [0, leaf_count)
        """
        position = operator.index(position)
        if not 0 <= position < self._leaf_count:
            raise PositionOutOfRangeError(position, self._leaf_count)
        return self._nodes[self._leaf_offset + position]

    def verify(self, position: int, value: Any) -> bool:
        """Check that ``value`` is the block committed at leaf ``position``.

        Recomputes the leaf hash with the bound engine and compares it to the
        stored digest. This is a direct lookup, not an inclusion proof.

        Args:
            position: Leaf index in [0, leaf_count)
            value: Claimed block (bytes-like, str, or ``__bytes__``)

        Returns:
            True if the block matches the stored leaf

        Raises:
            PositionOutOfRangeError: If position is not in [0, leaf_count)
        """
        stored = self.leaf_hash(position)
        candidate = self._engine.hash_leaf(as_bytes(value))
        if hmac.compare_digest(stored, candidate):
            return True
        logger.debug("Leaf %d failed verification", position)
        return False

    def __len__(self) -> int:
        return self._leaf_count

    def __repr__(self) -> str:
        return f"MerkleTree(leaves={self._leaf_count}, root={self.root_hash_hex()})"


def merkle_root(values: Iterable[Any], algorithm: str = "sha256") -> bytes:
    """Compute the root digest of a one-off tree.

    Raises:
        InsufficientInputError: If fewer than 2 blocks are given
    """
    return MerkleTree.build(values, algorithm=algorithm).root_hash()


__all__ = [
    "MerkleTree",
    "hash_leaf",
    "hash_node",
    "merkle_root",
    "next_power_of_two",
]
