"""Tests for the lattice occupancy grid and its point log."""
import numpy as np
import pytest

from squarefind.lattices.state import GridSnapshot, LatticeState


@pytest.fixture
def lattice_4():
    return LatticeState(4)


class TestConstruction:

    def test_starts_empty(self, lattice_4):
        assert lattice_4.n_points == 0
        assert len(lattice_4) == 0
        assert lattice_4.points == ()
        assert not np.any(lattice_4.occupancy())

    @pytest.mark.parametrize("size", [0, -3])
    def test_invalid_size(self, size):
        with pytest.raises(ValueError):
            LatticeState(size)


class TestOccupy:

    def test_marks_grid_and_log(self, lattice_4):
        lattice_4.occupy((1, 2))
        assert lattice_4.is_occupied((1, 2))
        assert not lattice_4.is_occupied((2, 1))
        assert lattice_4.points == ((1, 2),)

    def test_idempotent(self, lattice_4):
        lattice_4.occupy((3, 0))
        grid_before = lattice_4.occupancy().copy()
        lattice_4.occupy((3, 0))
        assert lattice_4.n_points == 1
        np.testing.assert_array_equal(lattice_4.occupancy(), grid_before)

    def test_log_keeps_insertion_order(self, lattice_4):
        order = [(2, 2), (0, 1), (3, 3), (1, 0)]
        for p in order:
            lattice_4.occupy(p)
        assert list(lattice_4.points) == order

    def test_grid_matches_log(self, lattice_4):
        for p in [(0, 0), (1, 3), (2, 2), (1, 3)]:
            lattice_4.occupy(p)
        xs, ys = np.nonzero(lattice_4.occupancy())
        assert set(zip(xs.tolist(), ys.tolist())) == set(lattice_4.points)

    @pytest.mark.parametrize("coord", [(-1, 0), (4, 0), (0, -1), (2, 7)])
    def test_out_of_bounds_rejected(self, lattice_4, coord):
        with pytest.raises(ValueError):
            lattice_4.occupy(coord)
        assert lattice_4.n_points == 0
        assert not np.any(lattice_4.occupancy())

    def test_accepts_numpy_integers(self, lattice_4):
        lattice_4.occupy((np.int64(1), np.int64(1)))
        assert lattice_4.points == ((1, 1),)
        assert type(lattice_4.points[0][0]) is int

    def test_log_grows_past_quarter_of_grid(self):
        lat = LatticeState(4)
        for x in range(4):
            for y in range(4):
                lat.occupy((x, y))
        assert lat.n_points == 16
        assert lat.is_full


class TestReset:

    def test_clears_everything(self, lattice_4):
        lattice_4.occupy((0, 0))
        lattice_4.occupy((3, 3))
        lattice_4.reset()
        assert lattice_4.n_points == 0
        assert not lattice_4.is_occupied((0, 0))
        assert not np.any(lattice_4.occupancy())


class TestBounds:

    @pytest.mark.parametrize("coord", [(0, 0), (3, 3), (0, 3), (2, 1)])
    def test_inside(self, lattice_4, coord):
        assert lattice_4.in_bounds(coord)

    @pytest.mark.parametrize("coord", [(-1, 0), (4, 0), (0, 4), (-1, -1), (5, -2)])
    def test_outside(self, lattice_4, coord):
        assert not lattice_4.in_bounds(coord)


class TestViews:

    def test_occupancy_is_read_only(self, lattice_4):
        view = lattice_4.occupancy()
        with pytest.raises(ValueError):
            view[0, 0] = True

    def test_snapshot_is_independent_copy(self, lattice_4):
        lattice_4.occupy((1, 1))
        snap = lattice_4.snapshot()
        lattice_4.reset()
        assert isinstance(snap, GridSnapshot)
        assert snap.size == 4
        assert snap.occupancy[1, 1]
        assert snap.n_occupied == 1
        assert snap.square is None
        with pytest.raises(ValueError):
            snap.occupancy[0, 0] = True
