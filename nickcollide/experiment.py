#!/usr/bin/env python3
"""
Collision Experiment
====================
Measures how often a freshly generated nickname collides with a large
population of previously generated ones, for one PRNG strategy.

A strategy is a (lifecycle, bit width) pair:
- REUSE: one engine, seeded once, for the whole run
- RECREATE: a new engine, seeded from the entropy source, per nickname
- 32BIT / 64BIT: MT19937 or PCG64 underneath

Phases (no way back):
    BUILDING_POPULATION -> MEASURING -> DONE

Usage:
    experiment = CollisionExperiment(
        PrngStrategy.parse("REUSE/64BIT"), catalog,
        population_size=100_000, num_tries=500_000,
    )
    result = experiment.run()
    print(f"{result.label}: {result.collision_rate_percent:.4f}%")
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Set, Tuple

from nickcollide.catalog import WordCatalog
from nickcollide.config import SampleNicknameOptions
from nickcollide.generators.entropy import (
    ENGINES,
    EntropySource,
    Lifecycle,
    SystemEntropy,
    make_engine_provider,
)
from nickcollide.generators.nickname_generator import NicknameGenerator
from nickcollide.profiler import ExperimentProfiler

logger = logging.getLogger(__name__)


# =============================================================================
# Strategies and Results
# =============================================================================

@dataclass(frozen=True)
class PrngStrategy:
    """Engine lifecycle and engine width for one experiment variant."""
    lifecycle: Lifecycle
    bit_width: int

    def __post_init__(self):
        if self.bit_width not in ENGINES:
            raise ValueError(f"Unsupported bit width: {self.bit_width}. "
                             f"Available: {sorted(ENGINES)}")

    @property
    def label(self) -> str:
        return f"{self.lifecycle.value}/{self.bit_width}BIT"

    @classmethod
    def parse(cls, label: str) -> "PrngStrategy":
        """Parse a label such as ``RECREATE/32BIT``."""
        try:
            lifecycle, width = label.strip().upper().split('/')
            if not width.endswith('BIT'):
                raise ValueError(label)
            return cls(Lifecycle(lifecycle), int(width[:-3]))
        except ValueError:
            raise ValueError(f"Unknown strategy: {label}. "
                             f"Available: {', '.join(s.label for s in DEFAULT_STRATEGIES)}") from None


DEFAULT_STRATEGIES: Tuple[PrngStrategy, ...] = (
    PrngStrategy(Lifecycle.REUSE, 32),
    PrngStrategy(Lifecycle.REUSE, 64),
    PrngStrategy(Lifecycle.RECREATE, 32),
    PrngStrategy(Lifecycle.RECREATE, 64),
)


def collision_rate(num_collisions: int, num_tries: int) -> float:
    """Collision rate in percent; 0.0 when nothing was tried."""
    if num_tries == 0:
        return 0.0
    return 100 * num_collisions / num_tries


@dataclass(frozen=True)
class CollisionResult:
    """Outcome of one strategy's experiment."""
    label: str
    num_tries: int
    num_collisions: int
    collision_rate_percent: float
    population_size: int = 0
    # Timing varies run to run; keep it out of equality
    phase_seconds: Dict[str, float] = field(default_factory=dict, compare=False)
    profile: Dict = field(default_factory=dict, compare=False)

    @classmethod
    def from_counts(cls, label: str, num_tries: int, num_collisions: int,
                    population_size: int = 0, **kwargs) -> "CollisionResult":
        return cls(
            label=label,
            num_tries=num_tries,
            num_collisions=num_collisions,
            collision_rate_percent=collision_rate(num_collisions, num_tries),
            population_size=population_size,
            **kwargs,
        )


# =============================================================================
# Experiment
# =============================================================================

class ExperimentPhase(Enum):
    BUILDING_POPULATION = "building_population"
    MEASURING = "measuring"
    DONE = "done"


class CollisionExperiment:
    """
    Population-then-measurement collision experiment for one strategy.

    The experiment owns its population set and its engine provider;
    the catalog is only read.
    """

    def __init__(self,
                 strategy: PrngStrategy,
                 catalog: WordCatalog,
                 population_size: int,
                 num_tries: int,
                 options: Optional[SampleNicknameOptions] = None,
                 mangling_factor: Optional[float] = None,
                 entropy: Optional[EntropySource] = None,
                 block_size: Optional[int] = None):
        """
        Initialize the experiment.

        Args:
            strategy: Engine lifecycle and width
            catalog: Shared read-only word catalog
            population_size: Unique nicknames collected before measuring
            num_tries: Nicknames generated while measuring
            options: Nickname length bounds (defaults from app.yaml)
            mangling_factor: Mangling intensity (defaults from app.yaml)
            entropy: Seed source; system entropy unless given
            block_size: Raw engine outputs buffered per refill
        """
        if population_size < 0:
            raise ValueError("population_size must be non-negative")
        if num_tries < 0:
            raise ValueError("num_tries must be non-negative")

        self.strategy = strategy
        self.population_size = population_size
        self.num_tries = num_tries
        self.generator = NicknameGenerator(catalog, options, mangling_factor)
        self.entropy = entropy or SystemEntropy()
        self.provider = make_engine_provider(
            strategy.bit_width, strategy.lifecycle, self.entropy, block_size
        )
        self.profiler = ExperimentProfiler()

        self.phase = ExperimentPhase.BUILDING_POPULATION
        self.population: Set[str] = set()
        self.population_attempts = 0
        self.num_collisions = 0

    @property
    def label(self) -> str:
        return self.strategy.label

    def _require_phase(self, phase: ExperimentPhase):
        if self.phase is not phase:
            raise RuntimeError(
                f"[{self.label}] cannot enter {phase.value} from {self.phase.value}"
            )

    def _sample(self) -> str:
        return self.generator.sample(self.provider.next_engine())

    def build_population(self) -> Set[str]:
        """Generate nicknames until the population holds population_size unique ones."""
        self._require_phase(ExperimentPhase.BUILDING_POPULATION)

        population = self.population
        with self.profiler.stage("population") as stage:
            while len(population) < self.population_size:
                population.add(self._sample())
                self.population_attempts += 1
            stage.items = self.population_attempts

        logger.debug(f"[{self.label}] {self.population_attempts} attempts for "
                     f"{len(population)} unique nicknames")
        logger.info(f"[{self.label}] population built: {len(population)} nicknames "
                    f"({self.profiler.stages['population'].total:.1f}s)")
        self.phase = ExperimentPhase.MEASURING
        return population

    def measure(self) -> int:
        """Generate num_tries nicknames and count those already in the population."""
        self._require_phase(ExperimentPhase.MEASURING)

        population = self.population
        num_collisions = 0
        with self.profiler.stage("measurement", items=self.num_tries):
            for _ in range(self.num_tries):
                if self._sample() in population:
                    num_collisions += 1

        self.num_collisions = num_collisions
        logger.info(f"[{self.label}] measurement done: {num_collisions}/{self.num_tries} "
                    f"({self.profiler.stages['measurement'].total:.1f}s)")
        self.phase = ExperimentPhase.DONE
        return num_collisions

    def result(self) -> CollisionResult:
        self._require_phase(ExperimentPhase.DONE)
        return CollisionResult.from_counts(
            self.label,
            num_tries=self.num_tries,
            num_collisions=self.num_collisions,
            population_size=len(self.population),
            phase_seconds=self.profiler.seconds(),
            profile=self.profiler.to_dict(),
        )

    def run(self) -> CollisionResult:
        """Run both phases and return the result."""
        self.profiler.start()
        self.build_population()
        self.measure()
        self.profiler.stop()
        return self.result()


__all__ = [
    'PrngStrategy',
    'DEFAULT_STRATEGIES',
    'collision_rate',
    'CollisionResult',
    'ExperimentPhase',
    'CollisionExperiment',
]
