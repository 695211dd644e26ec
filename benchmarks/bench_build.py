"""Benchmark: Merkle tree build and verify throughput.

Run with: pytest benchmarks/bench_build.py
"""
import time

from merkle_tree import MerkleTree

BLOCK = "Hello World"


class TestMerkleBuildPerformance:
    """Benchmark tree construction over repeated blocks."""

    def test_build_100_blocks(self, benchmark):
        """Build over 100 identical blocks - baseline measure."""
        blocks = [BLOCK] * 100

        tree = benchmark(MerkleTree.build, blocks)
        assert tree.leaf_count == 100

    def test_build_10000_blocks(self, benchmark):
        """Build over 10000 blocks - stress test."""
        blocks = [f"{BLOCK} {i}" for i in range(10000)]

        tree = benchmark(MerkleTree.build, blocks)
        assert len(tree.root_hash()) == 32

    def test_build_10000_blocks_threaded(self, benchmark):
        """Build over 10000 blocks on 4 threads."""
        blocks = [f"{BLOCK} {i}" for i in range(10000)]

        def build():
            return MerkleTree.build(blocks, workers=4)

        tree = benchmark(build)
        assert tree.root_hash() == MerkleTree.build(blocks).root_hash()

    def test_verify_all_leaves(self, benchmark):
        """Verify every leaf of a 1000-block tree."""
        blocks = [f"{BLOCK} {i}" for i in range(1000)]
        tree = MerkleTree.build(blocks)

        def verify_all():
            return all(tree.verify(i, b) for i, b in enumerate(blocks))

        assert benchmark(verify_all) is True


def manual_benchmark():
    """Manual benchmark without pytest-benchmark."""
    sizes = [100, 1000, 10000, 100000]

    print("\nMerkle Build Benchmark")
    print("-" * 50)

    for size in sizes:
        blocks = [BLOCK] * size
        start = time.perf_counter()
        MerkleTree.build(blocks)
        elapsed_ms = (time.perf_counter() - start) * 1000
        print(f"{size:>7} blocks: {elapsed_ms:9.2f} ms")


if __name__ == "__main__":
    manual_benchmark()
