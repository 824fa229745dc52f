#!/usr/bin/env python3
"""
Entropy and Random Engines
==========================
Seed sources, fixed-width pseudo-random engines, and the two engine
lifecycles compared by the collision experiment.

Features:
- System entropy (os.urandom) and a seeded stand-in for reproducible runs
- 32-bit (MT19937) and 64-bit (PCG64) engines over numpy bit generators
- Unbiased bounded integers by rejection on raw engine output
- REUSE (one engine per run) and RECREATE (one engine per nickname)

Sampling code depends only on ``RandomEngine.randint``/``shuffle``; it
never sees which bit generator sits underneath.
"""

import os
import random
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, List, Optional, Type

import numpy as np

from nickcollide.settings import require_setting


# =============================================================================
# Entropy Sources
# =============================================================================

class EntropySource(ABC):
    """Provider of fresh seed material for engines."""

    @abstractmethod
    def next_seed(self, bits: int) -> int:
        """Return a seed drawn uniformly from [0, 2**bits)."""


class SystemEntropy(EntropySource):
    """Seeds read from the operating system entropy pool."""

    def next_seed(self, bits: int) -> int:
        n_bytes = (bits + 7) // 8
        value = int.from_bytes(os.urandom(n_bytes), 'big')
        return value & ((1 << bits) - 1)


class SeededEntropy(EntropySource):
    """
    Deterministic seed stream.

    Stands in for SystemEntropy wherever a run has to be repeatable
    (tests, ``--seed``). Each instance owns its own stream.
    """

    def __init__(self, seed: int):
        self.seed = seed
        self._rng = random.Random(seed)

    def next_seed(self, bits: int) -> int:
        return self._rng.getrandbits(bits)


def derive_seed(parent_seed: int, index: int) -> int:
    """
    Derive a child seed deterministically from a parent seed + index.

    Gives each experiment task its own seed stream while keeping the
    whole run reproducible from one root seed.
    """
    ss = np.random.SeedSequence(parent_seed).spawn(index + 1)
    return int(ss[-1].generate_state(1, dtype=np.uint64)[0])


# =============================================================================
# Random Engines
# =============================================================================

class RandomEngine(ABC):
    """
    Uniform integer source backed by a fixed-width bit generator.

    Raw outputs are pulled from the bit generator in blocks and mapped
    to ``[lo, hi]`` by rejecting draws at or above the largest multiple
    of the span below ``2**bit_width``.
    """

    bit_width: int = 0

    def __init__(self, seed: int, block_size: Optional[int] = None):
        if block_size is None:
            block_size = require_setting("engine.block_size")
        if block_size < 1:
            raise ValueError("block_size must be positive")

        self.seed = seed
        self._mask = (1 << self.bit_width) - 1
        self._bit_generator = self._make_bit_generator(seed & self._mask)
        self._block_size = block_size
        self._buffer: List[int] = []

    @abstractmethod
    def _make_bit_generator(self, seed: int) -> np.random.BitGenerator:
        ...

    def next_raw(self) -> int:
        """Next raw engine output in [0, 2**bit_width)."""
        if not self._buffer:
            block = self._bit_generator.random_raw(self._block_size).tolist()
            # pop() from the end yields outputs in generation order
            block.reverse()
            self._buffer = block
        return self._buffer.pop() & self._mask

    def randint(self, lo: int, hi: int) -> int:
        """Return random integer N such that lo <= N <= hi."""
        span = hi - lo + 1
        if span < 1:
            raise ValueError(f"empty range [{lo}, {hi}]")
        if span == 1:
            return lo
        if span > self._mask + 1:
            raise ValueError(f"range [{lo}, {hi}] wider than {self.bit_width}-bit output")

        limit = (self._mask + 1) - (self._mask + 1) % span
        while True:
            r = self.next_raw()
            if r < limit:
                return lo + r % span

    def shuffle(self, seq: list) -> None:
        """Shuffle list in place (Fisher-Yates over randint)."""
        for i in range(len(seq) - 1, 0, -1):
            j = self.randint(0, i)
            seq[i], seq[j] = seq[j], seq[i]

    def choice(self, seq):
        """Return a random element from non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from empty sequence")
        return seq[self.randint(0, len(seq) - 1)]


class MT32Engine(RandomEngine):
    """Mersenne Twister with 32-bit state words and 32-bit outputs."""

    bit_width = 32

    def _make_bit_generator(self, seed: int) -> np.random.BitGenerator:
        return np.random.MT19937(seed)


class PCG64Engine(RandomEngine):
    """Permuted congruential generator with 64-bit outputs."""

    bit_width = 64

    def _make_bit_generator(self, seed: int) -> np.random.BitGenerator:
        return np.random.PCG64(seed)


ENGINES: Dict[int, Type[RandomEngine]] = {
    32: MT32Engine,
    64: PCG64Engine,
}


def create_engine(bit_width: int,
                  entropy: EntropySource,
                  block_size: Optional[int] = None) -> RandomEngine:
    """Build an engine of the given width, seeded from the entropy source."""
    engine_cls = ENGINES.get(bit_width)
    if engine_cls is None:
        raise ValueError(f"Unsupported bit width: {bit_width}. "
                         f"Available: {sorted(ENGINES)}")
    return engine_cls(entropy.next_seed(engine_cls.bit_width), block_size)


# =============================================================================
# Engine Lifecycles
# =============================================================================

class Lifecycle(Enum):
    """How long one engine instance lives."""
    REUSE = "REUSE"
    RECREATE = "RECREATE"


class EngineProvider(ABC):
    """Hands out the engine to use for the next nickname."""

    def __init__(self,
                 bit_width: int,
                 entropy: EntropySource,
                 block_size: Optional[int] = None):
        self.bit_width = bit_width
        self.entropy = entropy
        self.block_size = block_size
        self.engines_created = 0

    def _create(self) -> RandomEngine:
        engine = create_engine(self.bit_width, self.entropy, self.block_size)
        self.engines_created += 1
        return engine

    @abstractmethod
    def next_engine(self) -> RandomEngine:
        ...


class ReuseEngineProvider(EngineProvider):
    """One engine, seeded once, shared by every draw of the run."""

    def __init__(self, bit_width, entropy, block_size=None):
        super().__init__(bit_width, entropy, block_size)
        self._engine = self._create()

    def next_engine(self) -> RandomEngine:
        return self._engine


class RecreateEngineProvider(EngineProvider):
    """A freshly seeded engine for every nickname (one entropy read each)."""

    def next_engine(self) -> RandomEngine:
        return self._create()


def make_engine_provider(bit_width: int,
                         lifecycle: Lifecycle,
                         entropy: EntropySource,
                         block_size: Optional[int] = None) -> EngineProvider:
    if lifecycle is Lifecycle.REUSE:
        return ReuseEngineProvider(bit_width, entropy, block_size)
    if lifecycle is Lifecycle.RECREATE:
        return RecreateEngineProvider(bit_width, entropy, block_size)
    raise ValueError(f"Unknown lifecycle: {lifecycle}")


__all__ = [
    'EntropySource',
    'SystemEntropy',
    'SeededEntropy',
    'derive_seed',
    'RandomEngine',
    'MT32Engine',
    'PCG64Engine',
    'ENGINES',
    'create_engine',
    'Lifecycle',
    'EngineProvider',
    'ReuseEngineProvider',
    'RecreateEngineProvider',
    'make_engine_provider',
]
