#!/usr/bin/env python3
"""
Experiment Runner
=================
Runs one collision experiment per PRNG strategy, all at once, and
collects the results in a fixed order.

Features:
- One task per strategy, launched together and joined before reporting
- Process pool by default (experiments are CPU-bound), thread pool optional
- Results ordered by strategy list, not by completion
- Optional root seed: each strategy gets its own derived seed stream
- Task failures are fatal: the first failed task re-raises in the caller

Usage:
    from nickcollide.parallel import ExperimentRunner

    runner = ExperimentRunner(catalog, ExperimentConfig(population_size=10_000,
                                                        num_tries=50_000))
    for result in runner.run():
        print(result.label, result.collision_rate_percent)
"""

import logging
from concurrent.futures import (
    Executor,
    ProcessPoolExecutor,
    ThreadPoolExecutor,
    as_completed,
)
from typing import List, Optional, Sequence

from nickcollide.catalog import WordCatalog
from nickcollide.config import ExperimentConfig
from nickcollide.experiment import CollisionExperiment, CollisionResult, PrngStrategy
from nickcollide.generators.entropy import SeededEntropy, SystemEntropy, derive_seed

logger = logging.getLogger(__name__)


def run_strategy(strategy: PrngStrategy,
                 catalog: WordCatalog,
                 config: ExperimentConfig,
                 seed: Optional[int] = None) -> CollisionResult:
    """
    Run one strategy's experiment to completion.

    Module-level so process pools can pickle it.

    Args:
        strategy: Engine lifecycle and width
        catalog: Read-only word catalog
        config: Experiment sizing and nickname options
        seed: Seed for a deterministic entropy stream; system entropy if None
    """
    entropy = SeededEntropy(seed) if seed is not None else SystemEntropy()
    experiment = CollisionExperiment(
        strategy,
        catalog,
        population_size=config.population_size,
        num_tries=config.num_tries,
        options=config.options,
        mangling_factor=config.mangling_factor,
        entropy=entropy,
        block_size=config.block_size,
    )
    return experiment.run()


class ExperimentRunner:
    """
    Fixed fan-out of collision experiments, one per strategy.

    Every task receives the same catalog and its own entropy; tasks
    share no mutable state.
    """

    def __init__(self,
                 catalog: WordCatalog,
                 config: Optional[ExperimentConfig] = None,
                 strategies: Optional[Sequence[PrngStrategy]] = None):
        """
        Initialize runner.

        Args:
            catalog: Shared read-only word catalog
            config: Experiment configuration (defaults from app.yaml)
            strategies: Strategies in report order; parsed from
                config.strategies when omitted
        """
        self.catalog = catalog
        self.config = config or ExperimentConfig()
        if strategies is None:
            strategies = [PrngStrategy.parse(label) for label in self.config.strategies]
        self.strategies: List[PrngStrategy] = list(strategies)
        if not self.strategies:
            raise ValueError("at least one strategy is required")

    def task_seeds(self) -> List[Optional[int]]:
        """Per-strategy seeds derived from the root seed (all None without one)."""
        if self.config.seed is None:
            return [None] * len(self.strategies)
        return [derive_seed(self.config.seed, i) for i in range(len(self.strategies))]

    def _make_executor(self) -> Executor:
        workers = min(self.config.max_workers, len(self.strategies))
        if self.config.executor == "thread":
            return ThreadPoolExecutor(max_workers=workers)
        return ProcessPoolExecutor(max_workers=workers)

    def run(self) -> List[CollisionResult]:
        """
        Run all strategies concurrently and wait for every one of them.

        Returns:
            One CollisionResult per strategy, in strategy order
        """
        results: List[Optional[CollisionResult]] = [None] * len(self.strategies)
        seeds = self.task_seeds()

        logger.info(f"Running {len(self.strategies)} strategies "
                    f"({self.config.executor} pool): "
                    f"population={self.config.population_size}, tries={self.config.num_tries}")

        with self._make_executor() as executor:
            future_to_index = {
                executor.submit(run_strategy, strategy, self.catalog, self.config, seed): i
                for i, (strategy, seed) in enumerate(zip(self.strategies, seeds))
            }

            for future in as_completed(future_to_index):
                i = future_to_index[future]
                # A failed task is fatal to the run: result() re-raises
                results[i] = future.result()
                logger.debug(f"[{self.strategies[i].label}] finished")

        return results

    def run_sequential(self) -> List[CollisionResult]:
        """Run the same strategies one after another in this thread."""
        return [
            run_strategy(strategy, self.catalog, self.config, seed)
            for strategy, seed in zip(self.strategies, self.task_seeds())
        ]


__all__ = [
    'run_strategy',
    'ExperimentRunner',
]
