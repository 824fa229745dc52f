"""
Tests for Collision Experiment
==============================
Tests strategy labels, result records and the per-strategy state machine.
"""

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from nickcollide.catalog import WordCatalog, load_word_catalog
from nickcollide.config import SampleNicknameOptions
from nickcollide.experiment import (
    DEFAULT_STRATEGIES,
    CollisionExperiment,
    CollisionResult,
    ExperimentPhase,
    PrngStrategy,
    collision_rate,
)
from nickcollide.generators import Lifecycle, SamplingExhausted, SeededEntropy


@pytest.fixture(scope="module")
def bundled_catalog():
    return load_word_catalog()


@pytest.fixture
def cat_catalog():
    return WordCatalog.from_words(['cat'], max_len=12)


CAT_OPTIONS = SampleNicknameOptions(min_len=3, max_len=3, min_word_len=3, max_word_len=3)


class TestPrngStrategy:
    """Tests for strategy identity and labels."""

    def test_default_order(self):
        assert [s.label for s in DEFAULT_STRATEGIES] == [
            'REUSE/32BIT', 'REUSE/64BIT', 'RECREATE/32BIT', 'RECREATE/64BIT',
        ]

    @pytest.mark.parametrize("strategy", DEFAULT_STRATEGIES)
    def test_parse_label(self, strategy):
        assert PrngStrategy.parse(strategy.label) == strategy

    def test_parse_is_case_insensitive(self):
        assert PrngStrategy.parse("recreate/64bit") == PrngStrategy(Lifecycle.RECREATE, 64)

    @pytest.mark.parametrize("label", ["REUSE", "REUSE/32", "KEEP/32BIT", "REUSE/16BIT", ""])
    def test_parse_invalid(self, label):
        with pytest.raises(ValueError):
            PrngStrategy.parse(label)

    def test_unsupported_width(self):
        with pytest.raises(ValueError):
            PrngStrategy(Lifecycle.REUSE, 128)


class TestCollisionResult:
    """Tests for result records."""

    def test_rate(self):
        assert collision_rate(3, 12) == 25.0
        assert collision_rate(0, 10) == 0.0
        assert collision_rate(0, 0) == 0.0

    def test_from_counts(self):
        result = CollisionResult.from_counts("REUSE/32BIT", num_tries=8, num_collisions=2,
                                             population_size=4)
        assert result.collision_rate_percent == 100 * 2 / 8
        assert result.population_size == 4

    def test_equality_ignores_timing(self):
        a = CollisionResult.from_counts("X", 10, 1, phase_seconds={'population': 1.0})
        b = CollisionResult.from_counts("X", 10, 1, phase_seconds={'population': 9.0})
        assert a == b

    def test_immutable(self):
        result = CollisionResult.from_counts("X", 10, 1)
        with pytest.raises(AttributeError):
            result.num_collisions = 2


class TestCollisionExperiment:
    """Tests for the population/measurement experiment."""

    @pytest.mark.parametrize("strategy", DEFAULT_STRATEGIES)
    def test_run(self, bundled_catalog, strategy):
        experiment = CollisionExperiment(strategy, bundled_catalog,
                                         population_size=300, num_tries=200,
                                         entropy=SeededEntropy(1))
        result = experiment.run()

        assert experiment.phase is ExperimentPhase.DONE
        assert len(experiment.population) == 300
        assert experiment.population_attempts >= 300
        assert result.label == strategy.label
        assert result.num_tries == 200
        assert result.population_size == 300
        assert 0 <= result.num_collisions <= 200
        assert result.collision_rate_percent == 100 * result.num_collisions / 200

    def test_population_is_unique_nicknames(self, bundled_catalog):
        experiment = CollisionExperiment(DEFAULT_STRATEGIES[0], bundled_catalog,
                                         population_size=500, num_tries=0,
                                         entropy=SeededEntropy(2))
        population = experiment.build_population()
        assert len(population) == 500
        assert all(len(n) == 8 and n.isalnum() for n in population)

    @pytest.mark.parametrize("strategy", DEFAULT_STRATEGIES)
    def test_every_try_collides_with_single_nickname(self, cat_catalog, strategy):
        experiment = CollisionExperiment(strategy, cat_catalog,
                                         population_size=1, num_tries=25,
                                         options=CAT_OPTIONS, mangling_factor=0,
                                         entropy=SeededEntropy(3))
        result = experiment.run()

        assert experiment.population == {'Cat'}
        assert experiment.population_attempts == 1
        assert result.num_collisions == 25
        assert result.collision_rate_percent == 100.0

    def test_empty_population_never_collides(self, bundled_catalog):
        experiment = CollisionExperiment(DEFAULT_STRATEGIES[1], bundled_catalog,
                                         population_size=0, num_tries=50,
                                         entropy=SeededEntropy(4))
        result = experiment.run()
        assert result.num_collisions == 0
        assert result.population_size == 0

    def test_measurement_does_not_grow_population(self, bundled_catalog):
        experiment = CollisionExperiment(DEFAULT_STRATEGIES[0], bundled_catalog,
                                         population_size=100, num_tries=300,
                                         entropy=SeededEntropy(5))
        experiment.build_population()
        before = set(experiment.population)
        experiment.measure()
        assert experiment.population == before

    def test_recreate_builds_engine_per_nickname(self, bundled_catalog):
        strategy = PrngStrategy(Lifecycle.RECREATE, 32)
        experiment = CollisionExperiment(strategy, bundled_catalog,
                                         population_size=50, num_tries=70,
                                         entropy=SeededEntropy(6))
        experiment.run()
        assert experiment.provider.engines_created == experiment.population_attempts + 70

    def test_reuse_builds_one_engine(self, bundled_catalog):
        strategy = PrngStrategy(Lifecycle.REUSE, 64)
        experiment = CollisionExperiment(strategy, bundled_catalog,
                                         population_size=50, num_tries=70,
                                         entropy=SeededEntropy(6))
        experiment.run()
        assert experiment.provider.engines_created == 1

    @pytest.mark.parametrize("strategy", DEFAULT_STRATEGIES)
    def test_same_seed_same_result(self, bundled_catalog, strategy):
        def run():
            return CollisionExperiment(strategy, bundled_catalog,
                                       population_size=200, num_tries=200,
                                       entropy=SeededEntropy(99)).run()
        a, b = run(), run()
        assert a == b

    def test_phase_timings_recorded(self, bundled_catalog):
        result = CollisionExperiment(DEFAULT_STRATEGIES[0], bundled_catalog,
                                     population_size=20, num_tries=20,
                                     entropy=SeededEntropy(7)).run()
        assert list(result.phase_seconds) == ['population', 'measurement']
        assert result.profile['stages']['measurement']['items'] == 20

    def test_phases_cannot_run_out_of_order(self, bundled_catalog):
        experiment = CollisionExperiment(DEFAULT_STRATEGIES[0], bundled_catalog,
                                         population_size=5, num_tries=5,
                                         entropy=SeededEntropy(8))
        with pytest.raises(RuntimeError):
            experiment.measure()
        with pytest.raises(RuntimeError):
            experiment.result()

        experiment.build_population()
        assert experiment.phase is ExperimentPhase.MEASURING
        with pytest.raises(RuntimeError):
            experiment.build_population()

        experiment.measure()
        with pytest.raises(RuntimeError):
            experiment.measure()
        with pytest.raises(RuntimeError):
            experiment.run()

    def test_sampling_exhausted_is_fatal(self):
        empty = WordCatalog.from_words([], max_len=12)
        experiment = CollisionExperiment(DEFAULT_STRATEGIES[0], empty,
                                         population_size=1, num_tries=1,
                                         options=CAT_OPTIONS,
                                         entropy=SeededEntropy(9))
        with pytest.raises(SamplingExhausted):
            experiment.run()

    def test_negative_sizes(self, bundled_catalog):
        with pytest.raises(ValueError):
            CollisionExperiment(DEFAULT_STRATEGIES[0], bundled_catalog, -1, 1)
        with pytest.raises(ValueError):
            CollisionExperiment(DEFAULT_STRATEGIES[0], bundled_catalog, 1, -1)
