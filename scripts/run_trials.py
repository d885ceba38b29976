#!/usr/bin/env python3
"""Run random square-formation trials on a bounded lattice.

Usage:
    python -m scripts.run_trials --size 10 --trials 100000 --report-every 1000
    python -m scripts.run_trials --size-label XS --trials 1000 --seed 42 --figure results/last.png
    python -m scripts.run_trials --sizes 4 10 20 --trials 2000
"""
from __future__ import annotations

import argparse
import logging
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from squarefind.sampling.trials import (
    SIZE_CONFIGS,
    ExperimentConfig,
    run_experiment,
    run_size_sweep,
)
from squarefind.viz.console import format_summary, format_sweep_table, log_progress

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Monte Carlo estimate of how many random lattice points it takes to form a square"
    )
    parser.add_argument("--size", type=int, default=10,
                        help="Lattice side length N (default: 10)")
    parser.add_argument("--size-label", default=None, choices=list(SIZE_CONFIGS.keys()),
                        help="Named lattice size; overrides --size")
    parser.add_argument("--sizes", nargs="+", type=int, default=None,
                        help="Run a sweep over several lattice sizes instead")
    parser.add_argument("--trials", type=int, default=10000,
                        help="Number of trials (per size when sweeping)")
    parser.add_argument("--report-every", type=int, default=100,
                        help="Report after every k-th trial (default: 100)")
    parser.add_argument("--viz-threshold", type=int, default=10,
                        help="Render the grid when N is below this (default: 10)")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--figure", default=None,
                        help="Save the last rendered grid as an image")
    parser.add_argument("--verbose", action="store_true",
                        help="Log every trial")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.sizes and args.figure:
        parser.error("--figure is not supported together with --sizes")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if args.sizes:
        logger.info(f"Size sweep: {args.sizes} x {args.trials} trials")
        results = run_size_sweep(
            sizes=args.sizes,
            n_trials=args.trials,
            seed=args.seed,
            report_every=args.report_every,
            viz_threshold=args.viz_threshold,
            reporter=log_progress,
        )
        logger.info("\n=== Size Sweep Summary ===\n" + format_sweep_table(results))
        return 0

    size = SIZE_CONFIGS[args.size_label] if args.size_label else args.size
    config = ExperimentConfig(
        size=size,
        n_trials=args.trials,
        report_every=args.report_every,
        viz_threshold=args.viz_threshold,
        seed=args.seed,
    )

    result = run_experiment(config, reporter=log_progress)
    logger.info("\n" + format_summary(result))

    if args.figure:
        if result.final_snapshot is None:
            logger.warning(
                f"No grid snapshot for N={size} (viz threshold {config.viz_threshold}); "
                f"skipping {args.figure}"
            )
        else:
            from squarefind.viz.matplotlib_figures import figure_grid_snapshot
            figure_grid_snapshot(result.final_snapshot, output_path=args.figure)
            logger.info(f"Figure saved to {args.figure}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
