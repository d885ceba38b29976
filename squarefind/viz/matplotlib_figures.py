"""Static matplotlib figure of a lattice at the moment a square formed."""
from __future__ import annotations

import os
from typing import Optional

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.patches import Polygon
import numpy as np

from squarefind.lattices.state import GridSnapshot

POINT_COLOR = "#7f8c8d"
VERTEX_COLOR = "#e74c3c"
SQUARE_FACE_COLOR = "#e74c3c"
SQUARE_FACE_ALPHA = 0.15


def draw_snapshot_on_ax(ax, snapshot: GridSnapshot, title: Optional[str] = None):
    """Draw occupied cells and the completing square on a matplotlib axes."""
    xs, ys = np.nonzero(snapshot.occupancy)
    ax.scatter(xs, ys, c=POINT_COLOR, s=20, zorder=2, label="occupied")

    if snapshot.square is not None:
        ring = np.array(snapshot.square.perimeter(), dtype=float)
        ax.add_patch(Polygon(ring, closed=True, facecolor=SQUARE_FACE_COLOR,
                             edgecolor=VERTEX_COLOR, alpha=SQUARE_FACE_ALPHA,
                             zorder=1))
        ax.plot(np.append(ring[:, 0], ring[0, 0]), np.append(ring[:, 1], ring[0, 1]),
                color=VERTEX_COLOR, linewidth=1.2, zorder=3)
        ax.scatter(ring[:, 0], ring[:, 1], c=VERTEX_COLOR, s=45, zorder=4,
                   label="square")

    n = snapshot.size
    ax.set_xlim(-0.5, n - 0.5)
    ax.set_ylim(-0.5, n - 0.5)
    ax.set_xticks(range(n))
    ax.set_yticks(range(n))
    ax.grid(True, linewidth=0.3, alpha=0.5)
    ax.set_aspect("equal")
    if title:
        ax.set_title(title, fontweight="bold")


def figure_grid_snapshot(
    snapshot: GridSnapshot,
    output_path: Optional[str] = None,
    title: Optional[str] = None,
):
    """Build a single-panel figure of ``snapshot``; save it if a path is given.

    Returns the matplotlib Figure.
    """
    fig, ax = plt.subplots(figsize=(5, 5))
    if title is None and snapshot.square is not None:
        title = (f"{snapshot.n_occupied} points, "
                 f"side {snapshot.square.side_length:.3f}")
    draw_snapshot_on_ax(ax, snapshot, title=title)

    if output_path is not None:
        directory = os.path.dirname(output_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        fig.savefig(output_path, dpi=150, bbox_inches="tight")
    return fig
