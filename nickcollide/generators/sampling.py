#!/usr/bin/env python3
"""
Token Sampling
==============
Character samplers, length-weighted word sampling and word mangling.

All functions take the engine as their first argument and draw only
through ``engine.randint``.
"""

import logging
import math
import string

from nickcollide.catalog import WordCatalog
from nickcollide.generators.entropy import RandomEngine

logger = logging.getLogger(__name__)

# Digits, then uppercase, then lowercase: 62 symbols
ALPHANUMERIC = string.digits + string.ascii_uppercase + string.ascii_lowercase


class SamplingExhausted(RuntimeError):
    """A word-length range has no candidate words."""


# =============================================================================
# Characters
# =============================================================================

def sample_ascii(engine: RandomEngine) -> str:
    """Uniform ASCII letter (either case) or digit."""
    return ALPHANUMERIC[engine.randint(0, len(ALPHANUMERIC) - 1)]


def sample_digit(engine: RandomEngine) -> str:
    return chr(engine.randint(ord('0'), ord('9')))


def sample_ascii_lower(engine: RandomEngine) -> str:
    return chr(engine.randint(ord('a'), ord('z')))


# =============================================================================
# Words
# =============================================================================

def sample_word(engine: RandomEngine,
                catalog: WordCatalog,
                min_len: int,
                max_len: int) -> str:
    """
    Draw one word with min_len <= len(word) <= max_len.

    Every candidate in the range is equally likely, so a length bucket
    is chosen in proportion to its size. The draw is an index into the
    buckets laid end to end in increasing length order.

    Raises:
        SamplingExhausted: If no catalog word falls in the range.
    """
    if min_len < 1:
        raise ValueError(f"min_len must be positive (got {min_len})")
    if min_len > max_len:
        raise ValueError(f"empty length range [{min_len}, {max_len}]")

    num_candidates = catalog.count(min_len, max_len)
    if num_candidates == 0:
        msg = f"there are no words to sample (length {min_len}..{max_len})"
        logger.critical(msg)
        raise SamplingExhausted(msg)

    idx = engine.randint(0, num_candidates - 1)
    length = min_len
    while len(catalog.bucket(length)) <= idx:
        idx -= len(catalog.bucket(length))
        length += 1
    return catalog.bucket(length)[idx]


def mangling_magnitude(word_len: int, mangling_factor: float) -> int:
    """Number of positions to overwrite: round(word_len / factor), half away from zero."""
    if mangling_factor <= 0:
        return 0
    return min(word_len, int(math.floor(word_len / mangling_factor + 0.5)))


def mangle_word(engine: RandomEngine, word: str, mangling_factor: float) -> str:
    """
    Overwrite ``mangling_magnitude`` distinct positions of ``word``.

    Position 0 always receives a lowercase letter; any other position
    receives a lower-cased alphanumeric character. The catalog word
    itself is never modified.
    """
    piece = list(word)
    indices = list(range(len(piece)))
    for _ in range(mangling_magnitude(len(piece), mangling_factor)):
        pick = engine.randint(0, len(indices) - 1)
        indices[pick], indices[-1] = indices[-1], indices[pick]
        idx = indices.pop()
        if idx == 0:
            piece[idx] = sample_ascii_lower(engine)
        else:
            piece[idx] = sample_ascii(engine).lower()
    return ''.join(piece)


def sample_and_mangle_word(engine: RandomEngine,
                           catalog: WordCatalog,
                           min_len: int,
                           max_len: int,
                           mangling_factor: float) -> str:
    word = sample_word(engine, catalog, min_len, max_len)
    return mangle_word(engine, word, mangling_factor)


__all__ = [
    'ALPHANUMERIC',
    'SamplingExhausted',
    'sample_ascii',
    'sample_digit',
    'sample_ascii_lower',
    'sample_word',
    'mangling_magnitude',
    'mangle_word',
    'sample_and_mangle_word',
]
