"""Incremental square detection on an occupied lattice.

A new point t and any earlier point p define exactly two squares that have
the segment t--p as an edge: one on each side of the segment. Rotating the
edge vector by +90 or -90 degrees gives the two remaining vertices, so each
earlier point costs two O(1) grid lookups:

    Case A:  c1 = (xt + yt - y, yt - xt + x),  c2 = (x + yt - y, y - xt + x)
    Case B:  c1 = (xt - yt + y, yt + xt - x),  c2 = (x - yt + y, y + xt - x)

with t = (x, y) and p = (xt, yt). Axis-aligned and tilted squares of every
size are covered.

The scan runs over earlier points in placement order and tries Case A before
Case B; the first hit is returned. When one point closes several squares at
once this order decides which one is reported.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from itertools import combinations
from typing import Iterable, Optional, Sequence, Tuple

from squarefind.lattices.state import Coordinate, LatticeState


@dataclass(frozen=True)
class Square:
    """One concrete square found by the detector.

    Attributes:
        v1: The newly placed vertex.
        v2: Derived vertex adjacent to v3.
        v3: The earlier point paired with v1; v1--v3 is an edge.
        v4: Derived vertex adjacent to v1.
    """
    v1: Coordinate
    v2: Coordinate
    v3: Coordinate
    v4: Coordinate

    @property
    def vertices(self) -> Tuple[Coordinate, Coordinate, Coordinate, Coordinate]:
        return (self.v1, self.v2, self.v3, self.v4)

    @property
    def side_length(self) -> float:
        return math.sqrt(squared_distance(self.v2, self.v3))

    def perimeter(self) -> Tuple[Coordinate, Coordinate, Coordinate, Coordinate]:
        """Vertices in cyclic order around the square."""
        return (self.v1, self.v3, self.v2, self.v4)

    def __contains__(self, coord) -> bool:
        return tuple(coord) in self.vertices


def squared_distance(p: Coordinate, q: Coordinate) -> int:
    dx = p[0] - q[0]
    dy = p[1] - q[1]
    return dx * dx + dy * dy


def is_square(vertices: Iterable[Coordinate]) -> bool:
    """Check whether four points are the corners of a square, in any order.

    Of the six pairwise squared distances, the four smallest must be equal
    (sides) and the two largest must be equal to twice a side (diagonals).
    """
    pts = [tuple(v) for v in vertices]
    if len(pts) != 4 or len(set(pts)) != 4:
        return False
    d = sorted(squared_distance(p, q) for p, q in combinations(pts, 2))
    side = d[0]
    return side > 0 and d[0] == d[1] == d[2] == d[3] and d[4] == d[5] == 2 * side


def _candidates(
    t: Coordinate, p: Coordinate
) -> Tuple[Tuple[Coordinate, Coordinate], Tuple[Coordinate, Coordinate]]:
    x, y = t
    xt, yt = p
    case_a = ((xt + yt - y, yt - xt + x), (x + yt - y, y - xt + x))
    case_b = ((xt - yt + y, yt + xt - x), (x - yt + y, y + xt - x))
    return case_a, case_b


def find_square(
    new_point: Coordinate,
    points: Sequence[Coordinate],
    lattice: LatticeState,
) -> Optional[Square]:
    """Find a square that ``new_point`` completes with earlier points.

    Args:
        new_point: The point just placed (already occupied in ``lattice``).
        points: Occupied points in placement order.
        lattice: Occupancy used for the candidate lookups.

    Returns:
        ``Square(new_point, c1, p, c2)`` for the first pairing that closes a
        square, or None if the new point completes nothing.
    """
    t = (int(new_point[0]), int(new_point[1]))
    for p in points:
        if p == t:
            continue
        for c1, c2 in _candidates(t, p):
            # Out-of-bounds candidates simply cannot be occupied
            if not (lattice.in_bounds(c1) and lattice.in_bounds(c2)):
                continue
            if lattice.is_occupied(c1) and lattice.is_occupied(c2):
                return Square(v1=t, v2=c1, v3=p, v4=c2)
    return None


def find_square_at(lattice: LatticeState, new_point: Coordinate) -> Optional[Square]:
    """Run :func:`find_square` against the lattice's own log."""
    return find_square(new_point, lattice.points, lattice)
