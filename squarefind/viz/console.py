"""Plain-text progress reports, final summaries and ASCII grid rendering."""
from __future__ import annotations

import logging
from typing import List

from squarefind.lattices.state import GridSnapshot

logger = logging.getLogger(__name__)

VERTEX_CHAR = "#"
POINT_CHAR = "."
EMPTY_CHAR = " "


def render_grid(snapshot: GridSnapshot) -> str:
    """Draw the lattice with y pointing up.

    Square vertices are drawn as ``#``, other occupied cells as ``.``; every
    cell takes two characters so the grid keeps its aspect ratio.
    """
    vertices = set(snapshot.square.vertices) if snapshot.square is not None else set()
    rows = []
    for y in range(snapshot.size - 1, -1, -1):
        cells = []
        for x in range(snapshot.size):
            if (x, y) in vertices:
                cells.append(VERTEX_CHAR)
            elif snapshot.occupancy[x, y]:
                cells.append(POINT_CHAR)
            else:
                cells.append(EMPTY_CHAR)
        rows.append(" ".join(cells) + " ")
    return "\n".join(rows)


def format_progress(report) -> str:
    """Format a ProgressReport as a block of console text."""
    stats = report.statistics
    lines = [
        f"Found square #{report.trial}!",
        f"Seconds elapsed: {report.elapsed_seconds:.4f}",
        f"Square Calculations / Second: {report.trials_per_second:.4f}",
        f"Current PointN Average: {stats.mean_point_count:.10g}",
        f"Current Square Average: {stats.mean_side_length:.10g}",
        f"Current PointN/Size Average: {stats.point_count_per_size(report.size):.10g}",
    ]
    if report.snapshot is not None:
        lines.append("Grid:")
        lines.append(render_grid(report.snapshot))
    return "\n".join(lines)


def format_summary(result) -> str:
    """Format an ExperimentResult as the end-of-run summary."""
    stats = result.statistics
    size = result.config.size
    pts_lo, pts_hi = stats.confidence_interval("point_count")
    side_lo, side_hi = stats.confidence_interval("side_length")

    lines: List[str] = [
        "=" * 36,
        f"Total Computational Time: {result.wall_time_seconds:.4f}",
        f"Square Calculations / Second: {result.trials_per_second:.4f}",
        f"PointN Average: {stats.mean_point_count:.10g} "
        f"(std {stats.point_count_std:.4g}, 95% CI [{pts_lo:.6g}, {pts_hi:.6g}])",
        f"Square Average: {stats.mean_side_length:.10g} "
        f"(std {stats.side_length_std:.4g}, 95% CI [{side_lo:.6g}, {side_hi:.6g}])",
        f"PointN/Size Average: {stats.point_count_per_size(size):.10g}",
        "",
        f"Completed {stats.n_trials} trials on grids of size {size}; Process complete!",
    ]
    return "\n".join(lines)


def format_sweep_table(results) -> str:
    """One row per lattice size from a run_size_sweep result dict."""
    header = (f"{'N':>5} {'Trials':>8} {'Time(s)':>9} {'PointN':>10} "
              f"{'Side':>9} {'PointN/N':>9}")
    lines = [header, "-" * len(header)]
    for size, r in sorted(results.items()):
        s = r.statistics
        lines.append(
            f"{size:>5d} {s.n_trials:>8d} {r.wall_time_seconds:>9.2f} "
            f"{s.mean_point_count:>10.4f} {s.mean_side_length:>9.4f} "
            f"{s.point_count_per_size(size):>9.4f}"
        )
    return "\n".join(lines)


def log_progress(report) -> None:
    """Default reporter: send the formatted progress block to the logger."""
    logger.info("\n" + format_progress(report) + "\n")
