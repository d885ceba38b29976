"""Running statistics accumulated across completed trials.

Only sums are stored, so recording a trial is O(1) and every aggregate can be
recomputed at any point of the run:

  - mean point count       = sum(points) / n_trials
  - mean side length       = sum(sides) / n_trials
  - point count per size   = sum(points) / (n_trials * N)

Sums of squares give the sample standard deviation and Student-t confidence
intervals for both quantities.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from scipy import stats

_QUANTITIES = ("point_count", "side_length")


@dataclass
class TrialStatistics:
    """Cumulative totals over all trials recorded so far."""

    n_trials: int = 0
    total_points: int = 0
    total_side_length: float = 0.0
    total_points_sq: int = 0
    total_side_length_sq: float = 0.0

    def record(self, result) -> None:
        """Add one completed trial (anything with point_count and side_length)."""
        n = int(result.point_count)
        side = float(result.side_length)
        self.n_trials += 1
        self.total_points += n
        self.total_side_length += side
        self.total_points_sq += n * n
        self.total_side_length_sq += side * side

    @property
    def mean_point_count(self) -> float:
        if self.n_trials == 0:
            return float("nan")
        return self.total_points / self.n_trials

    @property
    def mean_side_length(self) -> float:
        if self.n_trials == 0:
            return float("nan")
        return self.total_side_length / self.n_trials

    def point_count_per_size(self, size: int) -> float:
        """Mean point count divided by the lattice side length N."""
        if self.n_trials == 0:
            return float("nan")
        return self.total_points / (self.n_trials * size)

    @property
    def point_count_std(self) -> float:
        return self._std(self.total_points, self.total_points_sq)

    @property
    def side_length_std(self) -> float:
        return self._std(self.total_side_length, self.total_side_length_sq)

    def _std(self, total: float, total_sq: float) -> float:
        n = self.n_trials
        if n < 2:
            return float("nan")
        var = (total_sq - total * total / n) / (n - 1)
        return math.sqrt(max(var, 0.0))  # clamp rounding noise

    def confidence_interval(
        self,
        quantity: str = "point_count",
        level: float = 0.95,
    ) -> Tuple[float, float]:
        """Student-t confidence interval for the mean of ``quantity``.

        Parameters
        ----------
        quantity : 'point_count' or 'side_length'
        level : float in (0, 1)

        Returns
        -------
        (low, high) : tuple of float
            (nan, nan) with fewer than two trials.
        """
        if quantity not in _QUANTITIES:
            raise ValueError(
                f"Unknown quantity '{quantity}'. Available: {', '.join(_QUANTITIES)}"
            )
        if not 0.0 < level < 1.0:
            raise ValueError(f"Confidence level must be in (0, 1), got {level}")

        if quantity == "point_count":
            mean, std = self.mean_point_count, self.point_count_std
        else:
            mean, std = self.mean_side_length, self.side_length_std

        if self.n_trials < 2:
            return (float("nan"), float("nan"))
        half = stats.t.ppf(0.5 + level / 2.0, df=self.n_trials - 1) * std / math.sqrt(self.n_trials)
        return (mean - float(half), mean + float(half))
