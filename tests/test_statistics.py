"""Tests for cumulative trial statistics."""
import math
from types import SimpleNamespace

import numpy as np
import pytest

from squarefind.sampling.statistics import TrialStatistics


def _result(points, side):
    return SimpleNamespace(point_count=points, side_length=side)


@pytest.fixture
def two_trials():
    stats = TrialStatistics()
    stats.record(_result(4, 1.0))
    stats.record(_result(6, 2.0))
    return stats


class TestEmpty:

    def test_means_are_nan(self):
        stats = TrialStatistics()
        assert stats.n_trials == 0
        assert math.isnan(stats.mean_point_count)
        assert math.isnan(stats.mean_side_length)
        assert math.isnan(stats.point_count_per_size(10))
        assert math.isnan(stats.point_count_std)

    def test_interval_needs_two_trials(self):
        stats = TrialStatistics()
        stats.record(_result(5, 1.0))
        low, high = stats.confidence_interval()
        assert math.isnan(low) and math.isnan(high)


class TestAggregates:

    def test_totals(self, two_trials):
        assert two_trials.n_trials == 2
        assert two_trials.total_points == 10
        assert two_trials.total_side_length == pytest.approx(3.0)

    def test_means(self, two_trials):
        assert two_trials.mean_point_count == pytest.approx(5.0)
        assert two_trials.mean_side_length == pytest.approx(1.5)

    def test_point_count_per_size(self, two_trials):
        # 10 / (2 * 4)
        assert two_trials.point_count_per_size(4) == pytest.approx(1.25)

    def test_sample_std(self, two_trials):
        assert two_trials.point_count_std == pytest.approx(math.sqrt(2.0))
        assert two_trials.side_length_std == pytest.approx(math.sqrt(0.5))

    def test_std_matches_numpy(self):
        rng = np.random.default_rng(42)
        points = rng.integers(4, 40, size=200)
        sides = rng.uniform(1.0, 9.0, size=200)
        stats = TrialStatistics()
        for n, s in zip(points, sides):
            stats.record(_result(int(n), float(s)))
        assert stats.point_count_std == pytest.approx(np.std(points, ddof=1))
        assert stats.side_length_std == pytest.approx(np.std(sides, ddof=1))
        assert stats.mean_side_length == pytest.approx(np.mean(sides))


class TestConfidenceInterval:

    def test_symmetric_around_mean(self, two_trials):
        low, high = two_trials.confidence_interval("point_count")
        assert low < two_trials.mean_point_count < high
        assert (low + high) / 2 == pytest.approx(two_trials.mean_point_count)

    def test_higher_level_is_wider(self, two_trials):
        lo90, hi90 = two_trials.confidence_interval("side_length", level=0.90)
        lo99, hi99 = two_trials.confidence_interval("side_length", level=0.99)
        assert hi99 - lo99 > hi90 - lo90

    def test_unknown_quantity(self, two_trials):
        with pytest.raises(ValueError):
            two_trials.confidence_interval("area")

    @pytest.mark.parametrize("level", [0.0, 1.0, 1.5])
    def test_bad_level(self, two_trials, level):
        with pytest.raises(ValueError):
            two_trials.confidence_interval(level=level)


class TestMonotonicity:

    def test_sums_never_decrease(self):
        stats = TrialStatistics()
        prev_points, prev_sides = 0, 0.0
        for n, s in [(4, 1.0), (9, 2.2), (5, 1.4), (12, 3.0)]:
            stats.record(_result(n, s))
            assert stats.total_points >= prev_points
            assert stats.total_side_length >= prev_sides
            prev_points, prev_sides = stats.total_points, stats.total_side_length
