"""Digest primitives used by the hash engine.

A digest primitive is anything satisfying the ``Digest`` protocol:

- ``reset()`` discards accumulated input
- ``update(data)`` feeds bytes
- ``finalize()`` returns the fixed-length digest of everything fed so far
- ``digest_size`` / ``output_bits`` / ``block_size`` describe the output
- ``copy()`` returns an independent primitive with the same state

Concrete primitives: SHA-256 (default), Keccak-256 and a double-application
wrapper for any other primitive.
"""
from __future__ import annotations

import hashlib
from typing import Callable, Dict, Protocol, runtime_checkable

from Crypto.Hash import keccak


@runtime_checkable
class Digest(Protocol):
    """Capability required of a pluggable hash primitive."""

    digest_size: int
    block_size: int

    @property
    def output_bits(self) -> int: ...

    def reset(self) -> None: ...

    def update(self, data: bytes) -> None: ...

    def finalize(self) -> bytes: ...

    def copy(self) -> "Digest": ...


def sha256(data: bytes) -> bytes:
    """One-shot SHA-256.

    Args:
        data: Bytes to hash

    Returns:
        32-byte digest
    """
    return hashlib.sha256(data).digest()


def keccak256(data: bytes) -> bytes:
    """One-shot Keccak-256 (the pre-standard SHA-3 padding used by Ethereum).

    Args:
        data: Bytes to hash

    Returns:
        32-byte digest
    """
    h = keccak.new(digest_bits=256)
    h.update(data)
    return h.digest()


class Sha256Digest:
    """SHA-256 primitive backed by :mod:`hashlib`."""

    digest_size = 32
    block_size = 64

    def __init__(self) -> None:
        self._state = hashlib.sha256()

    @property
    def output_bits(self) -> int:
        return self.digest_size * 8

    def reset(self) -> None:
        self._state = hashlib.sha256()

    def update(self, data: bytes) -> None:
        self._state.update(data)

    def finalize(self) -> bytes:
        return self._state.digest()

    def copy(self) -> "Sha256Digest":
        clone = Sha256Digest()
        clone._state = self._state.copy()
        return clone


class Keccak256Digest:
    """Keccak-256 primitive backed by pycryptodome."""

    digest_size = 32
    # sponge rate for a 256-bit capacity of 512 bits
    block_size = 136

    def __init__(self) -> None:
        self._data = bytearray()

    @property
    def output_bits(self) -> int:
        return self.digest_size * 8

    def reset(self) -> None:
        self._data = bytearray()

    def update(self, data: bytes) -> None:
        # pycryptodome keccak objects have no copy(), so input is buffered
        # to support Digest.copy and hashed in one pass on finalize().
        self._data += data

    def finalize(self) -> bytes:
        return keccak.new(digest_bits=256, data=self._data).digest()

    def copy(self) -> "Keccak256Digest":
        clone = Keccak256Digest()
        clone._data = bytearray(self._data)
        return clone


class DoubleDigest:
    """Applies an inner primitive twice: ``H(H(data))``.

    Slower than a single application, with extra resistance to
    length-extension and preimage attacks on the inner hash.
    """

    def __init__(self, inner: Digest | None = None) -> None:
        self._inner = inner if inner is not None else Sha256Digest()
        self._outer = self._inner.copy()
        self._outer.reset()

    @property
    def digest_size(self) -> int:
        return self._inner.digest_size

    @property
    def block_size(self) -> int:
        return self._inner.block_size

    @property
    def output_bits(self) -> int:
        return self._inner.output_bits

    def reset(self) -> None:
        self._inner.reset()

    def update(self, data: bytes) -> None:
        self._inner.update(data)

    def finalize(self) -> bytes:
        self._outer.reset()
        self._outer.update(self._inner.finalize())
        return self._outer.finalize()

    def copy(self) -> "DoubleDigest":
        return DoubleDigest(self._inner.copy())


_ALGORITHMS: Dict[str, Callable[[], Digest]] = {
    "sha256": Sha256Digest,
    "keccak256": Keccak256Digest,
    "sha256d": lambda: DoubleDigest(Sha256Digest()),
}


def new_digest(algorithm: str = "sha256") -> Digest:
    """Create a fresh digest primitive by name.

    Args:
        algorithm: "sha256", "keccak256" or "sha256d"

    Returns:
        New primitive in its reset state

    Raises:
        ValueError: If algorithm is not supported
    """
    try:
        factory = _ALGORITHMS[algorithm]
    except KeyError:
        raise ValueError(f"Unknown algorithm: {algorithm}") from None
    return factory()


__all__ = [
    "Digest",
    "DoubleDigest",
    "Keccak256Digest",
    "Sha256Digest",
    "keccak256",
    "new_digest",
    "sha256",
]
