"""Monte Carlo trials: place random points until four of them form a square.

A trial starts from an empty lattice and repeats place-then-detect until the
detector reports a square. An experiment runs a fixed number of trials on one
lattice with one seeded generator and accumulates TrialStatistics; a sweep
runs one experiment per lattice size.
"""
from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, List, Optional

import numpy as np

from squarefind.geometry.squares import Square, find_square
from squarefind.lattices.state import GridSnapshot, LatticeState
from squarefind.sampling.placement import place_random_point
from squarefind.sampling.statistics import TrialStatistics

logger = logging.getLogger(__name__)


# Named lattice sizes
SIZE_CONFIGS = {
    "XS": 4,
    "S": 10,
    "M": 20,
    "L": 50,
}


@dataclass
class ExperimentConfig:
    """Runtime configuration for one experiment.

    Attributes:
        size: Lattice side length N.
        n_trials: Number of trials to run.
        report_every: Report after every k-th completed trial.
        viz_threshold: Grid snapshots are produced only when size < viz_threshold.
        seed: Seed for the random generator (None draws fresh entropy).
    """
    size: int = 10
    n_trials: int = 10000
    report_every: int = 100
    viz_threshold: int = 10
    seed: Optional[int] = None

    def __post_init__(self):
        if self.size < 2:
            # a 1x1 lattice saturates before any square can form
            raise ValueError(f"size must be >= 2, got {self.size}")
        if self.n_trials < 1:
            raise ValueError(f"n_trials must be >= 1, got {self.n_trials}")
        if self.report_every < 1:
            raise ValueError(f"report_every must be >= 1, got {self.report_every}")
        if self.viz_threshold < 0:
            raise ValueError(f"viz_threshold must be >= 0, got {self.viz_threshold}")

    @property
    def visualize(self) -> bool:
        return self.size < self.viz_threshold


class TrialState(enum.Enum):
    ACCUMULATING = "accumulating"
    SUCCESS = "success"


@dataclass(frozen=True)
class TrialResult:
    """Outcome of one completed trial."""
    point_count: int
    side_length: float
    square: Square


class Trial:
    """Single trial on a shared lattice.

    Creating a Trial resets the lattice. ``step`` places one point and checks
    it; once a square is found the trial is finished and the lattice is left
    as it was at that moment, so it can still be inspected.
    """

    def __init__(self, lattice: LatticeState, rng: np.random.Generator):
        self.lattice = lattice
        self.rng = rng
        self.lattice.reset()
        self.state = TrialState.ACCUMULATING
        self.result: Optional[TrialResult] = None

    def step(self) -> Optional[Square]:
        if self.state is TrialState.SUCCESS:
            raise RuntimeError("Trial already finished; start a new Trial")

        point = place_random_point(self.lattice, self.rng)
        square = find_square(point, self.lattice.points, self.lattice)
        if square is None:
            return None

        self.state = TrialState.SUCCESS
        self.result = TrialResult(
            point_count=self.lattice.n_points,
            side_length=square.side_length,
            square=square,
        )
        return square

    def run(self) -> TrialResult:
        while self.state is TrialState.ACCUMULATING:
            self.step()
        return self.result


@dataclass
class ProgressReport:
    """What a reporter sees after a reporting trial."""
    trial: int  # completed trials so far
    size: int
    statistics: TrialStatistics
    elapsed_seconds: float
    last_result: TrialResult
    snapshot: Optional[GridSnapshot] = None

    @property
    def trials_per_second(self) -> float:
        if self.elapsed_seconds <= 0:
            return float("inf")
        return self.trial / self.elapsed_seconds


@dataclass
class ExperimentResult:
    """Aggregate outcome of a full experiment."""
    config: ExperimentConfig
    statistics: TrialStatistics
    wall_time_seconds: float
    final_snapshot: Optional[GridSnapshot] = None
    results: List[TrialResult] = field(default_factory=list)

    @property
    def trials_per_second(self) -> float:
        if self.wall_time_seconds <= 0:
            return float("inf")
        return self.statistics.n_trials / self.wall_time_seconds


Reporter = Callable[[ProgressReport], None]


def run_experiment(
    config: ExperimentConfig,
    reporter: Optional[Reporter] = None,
    keep_results: bool = False,
) -> ExperimentResult:
    """Run ``config.n_trials`` trials and accumulate their statistics.

    Parameters
    ----------
    config : ExperimentConfig
    reporter : callable, optional
        Called with a ProgressReport after every ``config.report_every``-th
        completed trial.
    keep_results : bool
        Also return every TrialResult (memory grows with n_trials).

    Returns
    -------
    ExperimentResult
    """
    rng = np.random.default_rng(config.seed)
    lattice = LatticeState(config.size)
    statistics = TrialStatistics()
    results: List[TrialResult] = []
    snapshot = None

    logger.info(
        f"Running {config.n_trials} trials on a {config.size}x{config.size} lattice "
        f"(seed={config.seed}, report_every={config.report_every})"
    )

    t0 = time.perf_counter()
    for trial_index in range(config.n_trials):
        result = Trial(lattice, rng).run()
        statistics.record(result)
        if keep_results:
            results.append(result)

        logger.debug(
            f"Trial {trial_index}: {result.point_count} points, "
            f"side {result.side_length:.4f}"
        )

        completed = trial_index + 1
        is_last = completed == config.n_trials
        is_report = completed % config.report_every == 0
        if config.visualize and (is_report or is_last):
            snapshot = lattice.snapshot(result.square)

        if reporter is not None and is_report:
            reporter(ProgressReport(
                trial=completed,
                size=config.size,
                statistics=replace(statistics),
                elapsed_seconds=time.perf_counter() - t0,
                last_result=result,
                snapshot=snapshot,
            ))

    wall_time = time.perf_counter() - t0

    logger.info(
        f"Finished {statistics.n_trials} trials in {wall_time:.2f}s: "
        f"mean points={statistics.mean_point_count:.4f}, "
        f"mean side={statistics.mean_side_length:.4f}"
    )

    return ExperimentResult(
        config=config,
        statistics=statistics,
        wall_time_seconds=wall_time,
        final_snapshot=snapshot,
        results=results,
    )


def run_size_sweep(
    sizes: Optional[List[int]] = None,
    n_trials: int = 1000,
    seed: Optional[int] = 42,
    report_every: Optional[int] = None,
    viz_threshold: int = 0,
    reporter: Optional[Reporter] = None,
) -> Dict[int, ExperimentResult]:
    """Run one experiment per lattice size.

    Parameters
    ----------
    sizes : list of int (default: every SIZE_CONFIGS entry)
    n_trials : trials per size
    seed : random seed, reused for every size
    report_every : reporting cadence (default: only at the end of each size)
    viz_threshold : grids smaller than this get snapshots
    reporter : forwarded to run_experiment

    Returns
    -------
    results : dict mapping size -> ExperimentResult
    """
    if sizes is None:
        sizes = sorted(SIZE_CONFIGS.values())
    if report_every is None:
        report_every = n_trials

    all_results = {}
    for size in sizes:
        config = ExperimentConfig(
            size=size,
            n_trials=n_trials,
            report_every=report_every,
            viz_threshold=viz_threshold,
            seed=seed,
        )
        result = run_experiment(config, reporter=reporter)
        all_results[size] = result
        stats = result.statistics
        logger.info(
            f"  N={size:<4d} -> {result.wall_time_seconds:.2f}s, "
            f"points={stats.mean_point_count:.3f}, "
            f"side={stats.mean_side_length:.3f}, "
            f"points/N={stats.point_count_per_size(size):.4f}"
        )

    return all_results
