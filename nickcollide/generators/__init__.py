#!/usr/bin/env python3
"""
Nickname Generators
===================
Random engines, token sampling and nickname composition:
- entropy: seed sources, 32/64-bit engines, REUSE/RECREATE lifecycles
- sampling: character samplers, word sampling, mangling
- nickname_generator: nickname composition
"""

from .entropy import (
    EntropySource,
    SystemEntropy,
    SeededEntropy,
    derive_seed,
    RandomEngine,
    MT32Engine,
    PCG64Engine,
    ENGINES,
    create_engine,
    Lifecycle,
    EngineProvider,
    ReuseEngineProvider,
    RecreateEngineProvider,
    make_engine_provider,
)
from .sampling import (
    ALPHANUMERIC,
    SamplingExhausted,
    sample_ascii,
    sample_digit,
    sample_ascii_lower,
    sample_word,
    mangling_magnitude,
    mangle_word,
    sample_and_mangle_word,
)
from .nickname_generator import (
    sample_nickname,
    NicknameGenerator,
)

__all__ = [
    # Entropy and engines
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
    # Sampling
    'ALPHANUMERIC',
    'SamplingExhausted',
    'sample_ascii',
    'sample_digit',
    'sample_ascii_lower',
    'sample_word',
    'mangling_magnitude',
    'mangle_word',
    'sample_and_mangle_word',
    # Nicknames
    'sample_nickname',
    'NicknameGenerator',
]
