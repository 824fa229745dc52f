#!/usr/bin/env python3
"""
nickcollide - Nickname Collision Experiment
===========================================

Estimates how often randomly generated nicknames collide, comparing
four ways of using a pseudo-random engine:

    REUSE/32BIT     one MT19937 engine for the whole run
    REUSE/64BIT     one PCG64 engine for the whole run
    RECREATE/32BIT  a freshly seeded MT19937 engine per nickname
    RECREATE/64BIT  a freshly seeded PCG64 engine per nickname

Quick Start
-----------
    from nickcollide import ExperimentConfig, ExperimentRunner, load_word_catalog

    catalog = load_word_catalog()
    runner = ExperimentRunner(catalog, ExperimentConfig(population_size=100_000,
                                                        num_tries=500_000))
    for result in runner.run():
        print(result.label, result.collision_rate_percent)

Modules
-------
    nickcollide.catalog     - Word catalog and word-list loader
    nickcollide.generators  - Engines, token sampling, nickname generation
    nickcollide.experiment  - Per-strategy collision experiment
    nickcollide.parallel    - Concurrent runner over all strategies
    nickcollide.config      - Configuration dataclasses (app.yaml defaults)

CLI Usage
---------
    python -m nickcollide run --population 100000 --tries 500000 --table
    python -m nickcollide sample -n 10
    python -m nickcollide catalog
"""

__version__ = "0.1.0"

from .config import (
    SampleNicknameOptions,
    ExperimentConfig,
)
from .catalog import (
    ResourceUnavailable,
    WordCatalog,
    load_word_catalog,
)
from .generators import (
    SamplingExhausted,
    NicknameGenerator,
    RandomEngine,
    MT32Engine,
    PCG64Engine,
    SystemEntropy,
    SeededEntropy,
    Lifecycle,
    create_engine,
)
from .experiment import (
    PrngStrategy,
    DEFAULT_STRATEGIES,
    CollisionResult,
    CollisionExperiment,
)
from .parallel import ExperimentRunner

__all__ = [
    '__version__',
    'SampleNicknameOptions',
    'ExperimentConfig',
    'ResourceUnavailable',
    'WordCatalog',
    'load_word_catalog',
    'SamplingExhausted',
    'NicknameGenerator',
    'RandomEngine',
    'MT32Engine',
    'PCG64Engine',
    'SystemEntropy',
    'SeededEntropy',
    'Lifecycle',
    'create_engine',
    'PrngStrategy',
    'DEFAULT_STRATEGIES',
    'CollisionResult',
    'CollisionExperiment',
    'ExperimentRunner',
]
