"""Benchmark stabilizing a growing buffer, with and without a block cache.

Every tick re-submits the whole buffer, as a chat UI does while a response
streams. With a shared cache only the tail block is re-healed.

Run with:
    pytest benchmarks/benchmark_streaming.py -v --benchmark-only
"""

import pytest

from remiendo import LRUBlockCache, heal, parse_blocks, stabilize


@pytest.mark.benchmark(group="stream")
def test_benchmark_stream_uncached(benchmark, stream_ticks):
    """Stabilize every tick from scratch."""
    ticks = stream_ticks[::20]

    def run():
        for buffer in ticks:
            stabilize(buffer)

    benchmark(run)


@pytest.mark.benchmark(group="stream")
def test_benchmark_stream_cached(benchmark, stream_ticks):
    """Stabilize every tick with a cache shared across ticks."""
    ticks = stream_ticks[::20]

    def run():
        cache = LRUBlockCache(maxsize=1024)
        for buffer in ticks:
            stabilize(buffer, cache=cache)

    benchmark(run)


@pytest.mark.benchmark(group="segment")
def test_benchmark_parse_blocks(benchmark, large_document):
    """Segment the full document once."""
    benchmark(parse_blocks, large_document)


@pytest.mark.benchmark(group="heal")
def test_benchmark_heal_incomplete(benchmark, incomplete_blocks):
    """Heal a batch of typical stream tails."""

    def run():
        for block in incomplete_blocks:
            heal(block)

    benchmark(run)


@pytest.mark.benchmark(group="heal")
def test_benchmark_heal_pathological_markers(benchmark):
    """Long marker runs stay linear."""
    text = "*" * 5000 + "x" + "_" * 5000 + "`" * 5000

    benchmark(heal, text)


@pytest.mark.benchmark(group="heal")
def test_benchmark_heal_spaced_markers(benchmark):
    """A long line of spaced asterisks stays linear."""
    text = "* " * 20000 + "x"

    benchmark(heal, text)
