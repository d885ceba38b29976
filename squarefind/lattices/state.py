"""Occupancy state for a bounded square lattice.

LatticeState pairs an N x N boolean grid with the ordered log of occupied
coordinates. Both are only ever changed together, so ``grid[x, y]`` is True
exactly when ``(x, y)`` appears in the log.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Tuple

import numpy as np

if TYPE_CHECKING:
    from squarefind.geometry.squares import Square

Coordinate = Tuple[int, int]


@dataclass(frozen=True)
class GridSnapshot:
    """Read-only copy of a lattice at the moment a square was found."""
    size: int
    occupancy: np.ndarray  # (size, size) bool, indexed [x, y], not writeable
    square: Optional["Square"] = None

    @property
    def n_occupied(self) -> int:
        return int(np.count_nonzero(self.occupancy))


class LatticeState:
    """N x N occupancy grid plus the insertion-ordered log of occupied points.

    Args:
        size: Side length N of the lattice. Valid coordinates lie in [0, N).

    Raises:
        ValueError: If size is smaller than 1.
    """

    def __init__(self, size: int):
        if size < 1:
            raise ValueError(f"Lattice size must be positive, got {size}")
        self.size = int(size)
        self._grid = np.zeros((self.size, self.size), dtype=bool)
        self._log: List[Coordinate] = []

    def __len__(self) -> int:
        return len(self._log)

    def __repr__(self) -> str:
        return f"LatticeState(size={self.size}, n_points={len(self._log)})"

    @property
    def n_points(self) -> int:
        return len(self._log)

    @property
    def points(self) -> Tuple[Coordinate, ...]:
        """Occupied coordinates in placement order."""
        return tuple(self._log)

    @property
    def is_full(self) -> bool:
        return len(self._log) == self.size * self.size

    def in_bounds(self, coord: Coordinate) -> bool:
        x, y = coord
        return 0 <= x < self.size and 0 <= y < self.size

    def is_occupied(self, coord: Coordinate) -> bool:
        x, y = coord
        return bool(self._grid[x, y])

    def occupy(self, coord: Coordinate) -> None:
        """Mark ``coord`` occupied and append it to the log.

        A coordinate that is already occupied is left alone, so repeated
        calls never duplicate log entries.

        Raises:
            ValueError: If coord lies outside the lattice.
        """
        if not self.in_bounds(coord):
            raise ValueError(
                f"Coordinate {tuple(coord)} is outside the {self.size}x{self.size} lattice"
            )
        x, y = int(coord[0]), int(coord[1])
        if self._grid[x, y]:
            return
        self._grid[x, y] = True
        self._log.append((x, y))

    def reset(self) -> None:
        """Clear every cell and empty the log."""
        self._grid[:] = False
        self._log.clear()

    def occupancy(self) -> np.ndarray:
        """Return a read-only view of the occupancy grid."""
        view = self._grid.view()
        view.flags.writeable = False
        return view

    def snapshot(self, square: Optional["Square"] = None) -> GridSnapshot:
        """Copy the current grid, together with the square that closed it."""
        grid = self._grid.copy()
        grid.flags.writeable = False
        return GridSnapshot(size=self.size, occupancy=grid, square=square)
