#!/usr/bin/env python3
"""
Nickname Generator
==================
Builds fixed-length nicknames from mangled catalog words.

A nickname is a sequence of pieces: capitalised, mangled words while
the remaining length can hold a word, then one random fallback piece
for any leftover shorter than the minimum word length. Pieces are
shuffled before joining, so the position of a piece in the nickname
says nothing about when it was generated.

Usage:
    from nickcollide.generators import NicknameGenerator, SystemEntropy, create_engine

    gen = NicknameGenerator(catalog)
    engine = create_engine(64, SystemEntropy())
    gen.sample(engine)          # e.g. 'Hou5eMk2'
"""

from typing import List, Optional

from nickcollide.catalog import WordCatalog
from nickcollide.config import SampleNicknameOptions, default_mangling_factor
from nickcollide.generators.entropy import RandomEngine
from nickcollide.generators.sampling import (
    sample_ascii,
    sample_ascii_lower,
    sample_and_mangle_word,
)


def sample_nickname(engine: RandomEngine,
                    catalog: WordCatalog,
                    options: SampleNicknameOptions,
                    mangling_factor: float) -> str:
    """
    Generate one nickname.

    Args:
        engine: Source of every random draw
        catalog: Candidate words by length
        options: Nickname and word-piece length bounds
        mangling_factor: Word length divided by this (rounded) gives the
            number of mangled positions per word; 0 disables mangling

    Returns:
        Nickname of length in [options.min_len, options.max_len]

    Raises:
        SamplingExhausted: If a word is required but none fits
    """
    pieces = []
    budget = engine.randint(options.min_len, options.max_len)
    while budget > 0:
        if budget < options.min_word_len:
            piece = sample_ascii_lower(engine)
            piece += ''.join(sample_ascii(engine) for _ in range(budget - 1))
            budget = 0
        else:
            piece = sample_and_mangle_word(
                engine, catalog,
                options.min_word_len,
                min(options.max_word_len, budget),
                mangling_factor,
            )
            budget -= len(piece)
            piece = piece[0].upper() + piece[1:]
        pieces.append(piece)

    engine.shuffle(pieces)
    return ''.join(pieces)


class NicknameGenerator:
    """
    Nickname sampler bound to one catalog and one set of options.

    The generator holds no random state; every call takes the engine
    to draw from, so the caller decides the engine lifecycle.
    """

    def __init__(self,
                 catalog: WordCatalog,
                 options: Optional[SampleNicknameOptions] = None,
                 mangling_factor: Optional[float] = None):
        self.catalog = catalog
        self.options = options or SampleNicknameOptions()
        if mangling_factor is None:
            mangling_factor = default_mangling_factor()
        if mangling_factor < 0:
            raise ValueError("mangling_factor must be non-negative")
        self.mangling_factor = mangling_factor

    def sample(self, engine: RandomEngine) -> str:
        """Generate one nickname from the given engine."""
        return sample_nickname(engine, self.catalog, self.options, self.mangling_factor)

    def generate(self, engine: RandomEngine, count: int = 10) -> List[str]:
        """Generate ``count`` nicknames (duplicates allowed) from one engine."""
        return [self.sample(engine) for _ in range(count)]


__all__ = [
    'sample_nickname',
    'NicknameGenerator',
]
