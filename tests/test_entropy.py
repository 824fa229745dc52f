"""
Tests for Entropy and Random Engines
====================================
Tests seed sources, bounded integers, shuffling and engine lifecycles.
"""

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from nickcollide.generators.entropy import (
    EntropySource,
    Lifecycle,
    MT32Engine,
    PCG64Engine,
    RecreateEngineProvider,
    ReuseEngineProvider,
    SeededEntropy,
    SystemEntropy,
    create_engine,
    derive_seed,
    make_engine_provider,
)


class CountingEntropy(EntropySource):
    """Hands out 1, 2, 3, ... and records requested widths."""

    def __init__(self):
        self.requests = []

    def next_seed(self, bits):
        self.requests.append(bits)
        return len(self.requests)


class TestEntropySources:
    """Tests for seed providers."""

    def test_system_entropy_in_range(self):
        entropy = SystemEntropy()
        for bits in (32, 64):
            for _ in range(50):
                assert 0 <= entropy.next_seed(bits) < 2 ** bits

    def test_seeded_entropy_reproducible(self):
        a = SeededEntropy(42)
        b = SeededEntropy(42)
        assert [a.next_seed(32) for _ in range(10)] == [b.next_seed(32) for _ in range(10)]

    def test_seeded_entropy_streams_differ(self):
        a = SeededEntropy(1)
        b = SeededEntropy(2)
        assert [a.next_seed(64) for _ in range(5)] != [b.next_seed(64) for _ in range(5)]

    def test_derive_seed(self):
        assert derive_seed(7, 0) == derive_seed(7, 0)
        assert len({derive_seed(7, i) for i in range(4)}) == 4
        assert derive_seed(7, 1) != derive_seed(8, 1)


class TestRandomEngine:
    """Tests for bounded integers on both engine widths."""

    @pytest.fixture(params=[MT32Engine, PCG64Engine])
    def engine_cls(self, request):
        return request.param

    def test_bit_widths(self):
        assert MT32Engine.bit_width == 32
        assert PCG64Engine.bit_width == 64

    def test_raw_outputs_fit_width(self, engine_cls):
        engine = engine_cls(123)
        for _ in range(500):
            assert 0 <= engine.next_raw() < 2 ** engine_cls.bit_width

    def test_same_seed_same_stream(self, engine_cls):
        a = engine_cls(99)
        b = engine_cls(99)
        assert [a.randint(0, 1000) for _ in range(100)] == [b.randint(0, 1000) for _ in range(100)]

    def test_block_size_does_not_change_stream(self, engine_cls):
        a = engine_cls(5, block_size=1)
        b = engine_cls(5, block_size=64)
        assert [a.next_raw() for _ in range(150)] == [b.next_raw() for _ in range(150)]

    def test_randint_inclusive_bounds(self, engine_cls):
        engine = engine_cls(2024)
        seen = {engine.randint(3, 7) for _ in range(2000)}
        assert seen == {3, 4, 5, 6, 7}

    def test_randint_single_value(self, engine_cls):
        engine = engine_cls(1)
        assert engine.randint(8, 8) == 8

    def test_randint_empty_range(self, engine_cls):
        with pytest.raises(ValueError):
            engine_cls(1).randint(5, 4)

    def test_randint_roughly_uniform(self, engine_cls):
        engine = engine_cls(31337)
        counts = [0] * 6
        for _ in range(12000):
            counts[engine.randint(0, 5)] += 1
        for c in counts:
            assert 1700 < c < 2300

    def test_shuffle_is_permutation(self, engine_cls):
        engine = engine_cls(11)
        items = list(range(20))
        engine.shuffle(items)
        assert sorted(items) == list(range(20))

    def test_shuffle_reorders(self, engine_cls):
        engine = engine_cls(11)
        orders = set()
        for _ in range(200):
            items = ['a', 'b', 'c']
            engine.shuffle(items)
            orders.add(tuple(items))
        assert len(orders) == 6

    def test_choice(self, engine_cls):
        engine = engine_cls(3)
        assert engine.choice(['x']) == 'x'
        with pytest.raises(IndexError):
            engine.choice([])


class TestCreateEngine:
    """Tests for the engine factory."""

    def test_widths(self):
        assert isinstance(create_engine(32, SeededEntropy(1)), MT32Engine)
        assert isinstance(create_engine(64, SeededEntropy(1)), PCG64Engine)

    def test_seed_width_matches_engine(self):
        entropy = CountingEntropy()
        create_engine(32, entropy)
        create_engine(64, entropy)
        assert entropy.requests == [32, 64]

    def test_unsupported_width(self):
        with pytest.raises(ValueError):
            create_engine(16, SeededEntropy(1))


class TestEngineProviders:
    """Tests for REUSE and RECREATE lifecycles."""

    def test_reuse_returns_one_engine(self):
        entropy = CountingEntropy()
        provider = make_engine_provider(32, Lifecycle.REUSE, entropy)
        assert isinstance(provider, ReuseEngineProvider)
        first = provider.next_engine()
        assert all(provider.next_engine() is first for _ in range(10))
        assert provider.engines_created == 1
        assert len(entropy.requests) == 1

    def test_recreate_returns_fresh_engines(self):
        entropy = CountingEntropy()
        provider = make_engine_provider(64, Lifecycle.RECREATE, entropy)
        assert isinstance(provider, RecreateEngineProvider)
        engines = [provider.next_engine() for _ in range(10)]
        assert len({id(e) for e in engines}) == 10
        assert provider.engines_created == 10
        assert entropy.requests == [64] * 10

    def test_recreate_seeds_each_engine_from_entropy(self):
        entropy = CountingEntropy()
        provider = RecreateEngineProvider(32, entropy)
        assert [provider.next_engine().seed for _ in range(3)] == [1, 2, 3]
