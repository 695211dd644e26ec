"""Tests for digest primitives."""
import hashlib

import pytest

KECCAK256_EMPTY = "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"


def test_sha256_helper():
    """One-shot SHA-256 matches hashlib."""
    from merkle_tree.core import sha256

    assert sha256(b"hello") == hashlib.sha256(b"hello").digest()


def test_keccak256_empty_vector():
    """Keccak-256 of empty input matches the Ethereum test vector."""
    from merkle_tree.core import keccak256

    assert keccak256(b"").hex() == KECCAK256_EMPTY


def test_keccak256_differs_from_sha3():
    """Keccak-256 uses the original padding, not FIPS 202 SHA3-256."""
    from merkle_tree.core import keccak256

    assert keccak256(b"abc") != hashlib.sha3_256(b"abc").digest()


@pytest.mark.parametrize("name", ["sha256", "keccak256", "sha256d"])
def test_primitives_satisfy_protocol(name):
    """Registered primitives implement the Digest capability."""
    from merkle_tree.core import Digest, new_digest

    digest = new_digest(name)
    assert isinstance(digest, Digest)
    assert digest.output_bits == digest.digest_size * 8


@pytest.mark.parametrize("name", ["sha256", "keccak256", "sha256d"])
def test_reset_discards_input(name):
    """reset returns a primitive to its empty state."""
    from merkle_tree.core import new_digest

    fresh = new_digest(name).finalize()
    digest = new_digest(name)
    digest.update(b"noise")
    digest.reset()
    assert digest.finalize() == fresh


@pytest.mark.parametrize("name", ["sha256", "keccak256", "sha256d"])
def test_incremental_update_equals_single_update(name):
    """Feeding bytes in pieces equals feeding them at once."""
    from merkle_tree.core import new_digest

    a = new_digest(name)
    a.update(b"hello ")
    a.update(b"world")
    b = new_digest(name)
    b.update(b"hello world")
    assert a.finalize() == b.finalize()


@pytest.mark.parametrize("name", ["sha256", "keccak256", "sha256d"])
def test_copy_carries_state(name):
    """copy duplicates accumulated input without sharing it."""
    from merkle_tree.core import new_digest

    original = new_digest(name)
    original.update(b"prefix")
    clone = original.copy()
    clone.update(b"-more")
    original.update(b"-more")
    assert clone.finalize() == original.finalize()


def test_keccak_primitive_matches_helper():
    """Keccak256Digest agrees with the one-shot helper."""
    from merkle_tree.core import Keccak256Digest, keccak256

    digest = Keccak256Digest()
    digest.update(b"abc")
    assert digest.finalize() == keccak256(b"abc")
    assert digest.block_size == 136


def test_double_digest_wraps_any_primitive():
    """DoubleDigest applies its inner primitive twice."""
    from merkle_tree.core import DoubleDigest, Keccak256Digest, keccak256

    digest = DoubleDigest(Keccak256Digest())
    digest.update(b"abc")
    assert digest.finalize() == keccak256(keccak256(b"abc"))


def test_new_digest_unknown():
    """Unknown algorithm names raise ValueError."""
    from merkle_tree.core import new_digest

    with pytest.raises(ValueError, match="Unknown algorithm: blake2"):
        new_digest("blake2")


def test_keccak_large_input_incremental():
    """A multi-megabyte block hashes the same fed whole or in pieces."""
    from merkle_tree.core import Keccak256Digest, keccak256

    block = bytes(range(256)) * 16384
    digest = Keccak256Digest()
    for i in range(0, len(block), 65536):
        digest.update(block[i:i + 65536])
    assert digest.finalize() == keccak256(block)


def test_keccak_finalize_is_repeatable():
    """finalize does not consume the buffered input."""
    from merkle_tree.core import Keccak256Digest, keccak256

    digest = Keccak256Digest()
    digest.update(b"abc")
    assert digest.finalize() == digest.finalize() == keccak256(b"abc")
