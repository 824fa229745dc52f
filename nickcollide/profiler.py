#!/usr/bin/env python3
"""
Experiment Profiler
===================
Lightweight phase timing for collision experiments.

Usage:
    nickcollide run --profile-output profile.json
"""

import json
import statistics
import time
from collections import defaultdict
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class StageStats:
    """Statistics for a single profiled stage."""
    times: list = field(default_factory=list)
    items: int = 0

    @property
    def total(self) -> float:
        return sum(self.times)

    @property
    def count(self) -> int:
        return len(self.times)

    @property
    def mean(self) -> float:
        return statistics.mean(self.times) if self.times else 0

    @property
    def per_item(self) -> float:
        return self.total / self.items if self.items else 0

    def to_dict(self) -> dict:
        return {
            'total_seconds': self.total,
            'count': self.count,
            'items': self.items,
            'mean_seconds': self.mean,
            'per_item_us': self.per_item * 1_000_000,
        }


class ExperimentProfiler:
    """
    Per-phase timer owned by one experiment.

    Example:
        profiler = ExperimentProfiler()
        profiler.start()

        with profiler.stage("population") as stage:
            ...
            stage.items = attempts

        print(profiler.report())
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.stages: dict[str, StageStats] = defaultdict(StageStats)
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None

    def start(self):
        """Start the profiling session."""
        if self.enabled:
            self.start_time = time.perf_counter()

    def stop(self):
        """Stop the profiling session."""
        if self.enabled:
            self.end_time = time.perf_counter()

    @property
    def total_time(self) -> float:
        """Total elapsed time."""
        if not self.start_time:
            return 0
        end = self.end_time or time.perf_counter()
        return end - self.start_time

    @contextmanager
    def stage(self, name: str, items: int = 0):
        """
        Context manager to time a stage.

        Yields the stage's StageStats so the caller can add to ``items``
        once it knows how much work the stage did.
        """
        stats = self.stages[name]
        stats.items += items
        if not self.enabled:
            yield stats
            return

        start = time.perf_counter()
        try:
            yield stats
        finally:
            stats.times.append(time.perf_counter() - start)

    def record(self, name: str, elapsed: float, items: int = 1):
        """Manually record a timing."""
        if not self.enabled:
            return
        self.stages[name].times.append(elapsed)
        self.stages[name].items += items

    def seconds(self) -> dict:
        """Total seconds per stage, in the order stages were first entered."""
        return {name: stats.total for name, stats in self.stages.items()}

    def report(self) -> str:
        """Generate a plain-text profiling report."""
        if not self.enabled or not self.stages:
            return ""

        total = self.total_time
        lines = [f"Total time: {total:.2f}s"]
        header = f"{'Stage':<14} {'Total':>9} {'%':>6} {'Items':>11} {'Per-item':>10}"
        lines.append(header)
        lines.append("-" * len(header))
        for name, stats in self.stages.items():
            pct = (stats.total / total) * 100 if total > 0 else 0
            per_item_str = f"{stats.per_item * 1_000_000:.1f}us" if stats.items > 0 else "-"
            lines.append(
                f"{name:<14} {stats.total:>8.2f}s {pct:>5.1f}% "
                f"{stats.items:>11} {per_item_str:>10}"
            )
        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Export profiling data as a dictionary (for JSON export)."""
        return {
            'total_seconds': self.total_time,
            'stages': {name: stats.to_dict() for name, stats in self.stages.items()},
        }


def save_profiles_json(profiles: dict, path: str):
    """Save ``{label: profiler.to_dict()}`` to a JSON file."""
    with open(path, 'w') as f:
        json.dump(profiles, f, indent=2)


__all__ = [
    'StageStats',
    'ExperimentProfiler',
    'save_profiles_json',
]
