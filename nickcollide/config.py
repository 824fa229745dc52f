#!/usr/bin/env python3
"""
Experiment Configuration
========================
Dataclasses for nickname shape and collision-experiment sizing.

Every field is optional; fields left as ``None`` are filled from
``configs/app.yaml``. Values that end up missing in both places raise
``ValueError`` so a broken settings file fails loudly at startup.
"""

from dataclasses import dataclass
from typing import List, Optional

from nickcollide.settings import get_setting, require_setting


# =============================================================================
# Nickname Shape
# =============================================================================

@dataclass(frozen=True)
class SampleNicknameOptions:
    """Bounds on total nickname length and on each word-piece length."""
    min_len: Optional[int] = None
    max_len: Optional[int] = None
    min_word_len: Optional[int] = None
    max_word_len: Optional[int] = None

    def __post_init__(self):
        cfg = get_setting("nickname", {}) or {}
        for name in ("min_len", "max_len", "min_word_len", "max_word_len"):
            if getattr(self, name) is None:
                # frozen dataclass: assign through object.__setattr__
                object.__setattr__(self, name, cfg.get(name))

        missing = [
            name for name in ("min_len", "max_len", "min_word_len", "max_word_len")
            if getattr(self, name) is None
        ]
        if missing:
            raise ValueError(f"nickname settings missing in app.yaml: {', '.join(missing)}")

        if not 1 <= self.min_len <= self.max_len:
            raise ValueError(
                f"nickname length bounds must satisfy 1 <= min_len <= max_len "
                f"(got {self.min_len}..{self.max_len})"
            )
        if not 1 <= self.min_word_len <= self.max_word_len:
            raise ValueError(
                f"word length bounds must satisfy 1 <= min_word_len <= max_word_len "
                f"(got {self.min_word_len}..{self.max_word_len})"
            )


def default_mangling_factor() -> float:
    return float(require_setting("nickname.mangling_factor"))


# =============================================================================
# Experiment Sizing
# =============================================================================

@dataclass
class ExperimentConfig:
    """Configuration for one collision-experiment run over all strategies."""
    population_size: Optional[int] = None     # Unique nicknames to collect first
    num_tries: Optional[int] = None           # Measurement trials per strategy
    mangling_factor: Optional[float] = None
    max_nickname_len: Optional[int] = None    # Largest word-length bucket kept
    options: Optional[SampleNicknameOptions] = None
    strategies: Optional[List[str]] = None    # Labels, in report order

    # Scheduling
    executor: Optional[str] = None            # "process" or "thread"
    max_workers: Optional[int] = None
    block_size: Optional[int] = None          # Raw engine outputs per refill

    seed: Optional[int] = None                # None: seed from system entropy

    def __post_init__(self):
        experiment = get_setting("experiment", {}) or {}
        parallel = get_setting("parallel", {}) or {}

        if self.population_size is None:
            self.population_size = experiment.get("population_size")
        if self.num_tries is None:
            self.num_tries = experiment.get("num_tries")
        if self.strategies is None:
            self.strategies = experiment.get("strategies")
        if self.mangling_factor is None:
            self.mangling_factor = get_setting("nickname.mangling_factor")
        if self.max_nickname_len is None:
            self.max_nickname_len = get_setting("catalog.max_nickname_len")
        if self.options is None:
            self.options = SampleNicknameOptions()
        if self.executor is None:
            self.executor = parallel.get("executor")
        if self.max_workers is None:
            self.max_workers = parallel.get("max_workers")
        if self.block_size is None:
            self.block_size = get_setting("engine.block_size")

        missing = [
            name for name, value in (
                ("experiment.population_size", self.population_size),
                ("experiment.num_tries", self.num_tries),
                ("experiment.strategies", self.strategies),
                ("nickname.mangling_factor", self.mangling_factor),
                ("catalog.max_nickname_len", self.max_nickname_len),
                ("parallel.executor", self.executor),
                ("parallel.max_workers", self.max_workers),
                ("engine.block_size", self.block_size),
            )
            if value is None
        ]
        if missing:
            raise ValueError(f"settings missing in app.yaml: {', '.join(missing)}")

        self.strategies = list(self.strategies)
        self.mangling_factor = float(self.mangling_factor)

        if self.population_size < 0:
            raise ValueError("population_size must be non-negative")
        if self.num_tries < 0:
            raise ValueError("num_tries must be non-negative")
        if self.mangling_factor < 0:
            raise ValueError("mangling_factor must be non-negative")
        if self.max_nickname_len < 1:
            raise ValueError("max_nickname_len must be positive")
        if self.executor not in ("process", "thread"):
            raise ValueError(f"Unknown executor: {self.executor}")
        if self.max_workers < 1:
            raise ValueError("max_workers must be positive")
        if self.block_size < 1:
            raise ValueError("block_size must be positive")
        if not self.strategies:
            raise ValueError("at least one strategy is required")


__all__ = [
    'SampleNicknameOptions',
    'ExperimentConfig',
    'default_mangling_factor',
]
