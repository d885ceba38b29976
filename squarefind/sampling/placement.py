"""Uniform random placement of points on empty lattice cells."""
from __future__ import annotations

import numpy as np

from squarefind.lattices.state import Coordinate, LatticeState


def sample_empty_point(
    lattice: LatticeState,
    rng: np.random.Generator,
) -> Coordinate:
    """Draw a uniformly random unoccupied cell by rejection sampling.

    Each attempt draws x and y independently from [0, N). Trials stop long
    before the lattice fills up, so the expected number of redraws is small.

    Parameters
    ----------
    lattice : LatticeState
    rng : numpy Generator
        Caller-owned random source; a fixed seed reproduces the draws.

    Returns
    -------
    coord : (int, int)
        A cell that is currently unoccupied.

    Raises
    ------
    ValueError
        If every cell is already occupied.
    """
    if lattice.is_full:
        raise ValueError(
            f"Cannot sample an empty cell: all {lattice.size ** 2} cells are occupied"
        )
    while True:
        x, y = rng.integers(0, lattice.size, size=2)
        coord = (int(x), int(y))
        if not lattice.is_occupied(coord):
            return coord


def place_random_point(
    lattice: LatticeState,
    rng: np.random.Generator,
) -> Coordinate:
    """Sample an empty cell, occupy it and return it."""
    coord = sample_empty_point(lattice, rng)
    lattice.occupy(coord)
    return coord
