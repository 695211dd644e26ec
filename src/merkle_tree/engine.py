"""Domain-separated hashing for Merkle leaves and internal nodes.

- LeafHash(data) = H(0x00 || data)
- NodeHash(left, right) = H(0x01 || left || right)

The distinct prefixes keep leaf digests and internal digests in disjoint
spaces, so the concatenated children of an internal node can never be
replayed as a leaf value (second-preimage forgery).
"""
from __future__ import annotations

from .core import Digest, Sha256Digest, new_digest

LEAF_TAG = b"\x00"
INTERNAL_TAG = b"\x01"


class HashEngine:
    """Stateful wrapper around a digest primitive.

    The primitive is reset before every computation. An engine is not safe
    for concurrent use; call :meth:`fork` to get an independent one.
    """

    def __init__(self, digest: Digest | None = None):
        self._digest = digest if digest is not None else Sha256Digest()

    @classmethod
    def from_algorithm(cls, algorithm: str = "sha256") -> "HashEngine":
        """Create an engine for a named algorithm (see ``core.new_digest``)."""
        return cls(new_digest(algorithm))

    @property
    def digest(self) -> Digest:
        return self._digest

    @property
    def digest_size(self) -> int:
        return self._digest.digest_size

    @property
    def output_bits(self) -> int:
        return self._digest.output_bits

    @property
    def block_size(self) -> int:
        return self._digest.block_size

    def reset(self) -> None:
        self._digest.reset()

    def hash_leaf(self, data: bytes) -> bytes:
        """Hash a leaf: H(0x00 || data).

        Args:
            data: Raw block bytes

        Returns:
            Leaf digest of ``digest_size`` bytes
        """
        self.reset()
        self._digest.update(LEAF_TAG)
        self._digest.update(data)
        return self._digest.finalize()

    def hash_internal(self, left: bytes, right: bytes) -> bytes:
        """Hash an internal node: H(0x01 || left || right).

        Args:
            left: Left child digest
            right: Right child digest

        Returns:
            Parent digest
        """
        self.reset()
        self._digest.update(INTERNAL_TAG)
        self._digest.update(left)
        self._digest.update(right)
        return self._digest.finalize()

    def hash_internal_one_child(self, left: bytes) -> bytes:
        """Hash a node whose only child is ``left``: H(0x01 || left || left)."""
        return self.hash_internal(left, left)

    def fork(self) -> "HashEngine":
        """Return an engine over an independent copy of the primitive."""
        clone = self._digest.copy()
        clone.reset()
        return HashEngine(clone)

    def __repr__(self) -> str:
        return f"HashEngine({type(self._digest).__name__}, output_bits={self.output_bits})"


__all__ = [
    "HashEngine",
    "INTERNAL_TAG",
    "LEAF_TAG",
]
