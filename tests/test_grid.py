"""Tests for the toroidal Life grid.

Covers:
- Birth / survival / death rule
- Neighbor counting across wrapped edges
- Blinker oscillation
- Deterministic stepping and seeded initialization
- RNG draws staying inside their documented ranges
"""

import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from umbra.config import ConfigurationError
from umbra.core.enums import Domain
from umbra.core.grid import LifeGrid
from umbra.systems.rng import DeterministicRNG


def _alive(grid: LifeGrid) -> set[tuple[int, int]]:
    return set(grid.alive_cells())


class TestRule:
    """Standard B3/S23 rule applied against the current buffer only."""

    def test_dead_cell_with_three_neighbors_is_born(self):
        grid = LifeGrid.from_cells(5, 5, [(1, 1), (1, 2), (1, 3)])
        assert grid.count_neighbors(2, 2) == 3
        grid.step()
        assert grid.is_alive(2, 2)

    def test_live_cell_with_three_neighbors_survives(self):
        # block still life: every cell has 3 neighbors
        grid = LifeGrid.from_cells(6, 6, [(2, 2), (2, 3), (3, 2), (3, 3)])
        assert grid.count_neighbors(2, 2) == 3
        grid.step()
        assert _alive(grid) == {(2, 2), (2, 3), (3, 2), (3, 3)}

    def test_live_cell_with_two_neighbors_survives(self):
        grid = LifeGrid.from_cells(5, 5, [(2, 1), (2, 2), (2, 3)])
        assert grid.count_neighbors(2, 2) == 2
        grid.step()
        assert grid.is_alive(2, 2)

    def test_lonely_cell_dies(self):
        grid = LifeGrid.from_cells(5, 5, [(2, 2), (2, 3)])
        grid.step()
        assert grid.alive_count == 0

    def test_overcrowded_cell_dies(self):
        grid = LifeGrid.from_cells(5, 5, [(2, 2), (1, 2), (3, 2), (2, 1), (2, 3)])
        assert grid.count_neighbors(2, 2) == 4
        grid.step()
        assert not grid.is_alive(2, 2)

    def test_dead_cell_with_two_neighbors_stays_dead(self):
        grid = LifeGrid.from_cells(5, 5, [(1, 1), (1, 3)])
        assert grid.count_neighbors(2, 2) == 2
        grid.step()
        assert not grid.is_alive(2, 2)


class TestToroidalWrap:
    """Edges wrap: there are no boundary cells."""

    def test_corner_sees_opposite_corner(self):
        grid = LifeGrid.from_cells(4, 5, [(3, 4)])
        assert grid.count_neighbors(0, 0) == 1

    def test_corner_sees_wrapped_orthogonals(self):
        grid = LifeGrid.from_cells(4, 5, [(0, 4), (3, 0)])
        assert grid.count_neighbors(0, 0) == 2

    def test_birth_across_the_seam(self):
        grid = LifeGrid.from_cells(4, 5, [(3, 4), (0, 4), (3, 0)])
        assert grid.count_neighbors(0, 0) == 3
        grid.step()
        assert grid.is_alive(0, 0)

    def test_blinker_across_the_seam(self):
        """A vertical blinker straddling the top/bottom edge still oscillates."""
        grid = LifeGrid.from_cells(6, 6, [(5, 2), (0, 2), (1, 2)])
        grid.step()
        assert _alive(grid) == {(0, 1), (0, 2), (0, 3)}


class TestBlinker:

    def test_horizontal_becomes_vertical(self):
        grid = LifeGrid.from_cells(5, 5, [(2, 1), (2, 2), (2, 3)])
        grid.step()
        assert _alive(grid) == {(1, 2), (2, 2), (3, 2)}

    def test_period_two(self):
        start = {(2, 1), (2, 2), (2, 3)}
        grid = LifeGrid.from_cells(5, 5, start)
        grid.step()
        grid.step()
        assert _alive(grid) == start

    def test_three_by_three_torus_fills(self):
        """On a 3x3 torus every cell neighbors every other cell exactly once,
        so a three-cell row gives every dead cell 3 neighbors."""
        grid = LifeGrid.from_cells(3, 3, [(1, 0), (1, 1), (1, 2)])
        for row in range(3):
            for col in range(3):
                assert grid.count_neighbors(row, col) == (2 if row == 1 else 3)
        grid.step()
        assert grid.alive_count == 9
        grid.step()
        assert grid.alive_count == 0


class TestDeterminism:

    def test_repeated_runs_match(self):
        rng = DeterministicRNG(1234)
        a = LifeGrid.random(30, 40, rng, 0.3)
        b = a.copy()
        for _ in range(25):
            a.step()
            b.step()
            assert a == b

    def test_same_seed_same_initial_grid(self):
        a = LifeGrid.random(20, 20, DeterministicRNG(7), 0.15)
        b = LifeGrid.random(20, 20, DeterministicRNG(7), 0.15)
        assert a == b

    def test_different_seed_differs(self):
        a = LifeGrid.random(20, 20, DeterministicRNG(7), 0.15)
        b = LifeGrid.random(20, 20, DeterministicRNG(8), 0.15)
        assert a != b

    def test_probability_extremes(self):
        rng = DeterministicRNG(3)
        assert LifeGrid.random(10, 10, rng, 0.0).alive_count == 0
        assert LifeGrid.random(10, 10, rng, 1.0).alive_count == 100

    def test_density_near_probability(self):
        grid = LifeGrid.random(100, 100, DeterministicRNG(99), 0.15)
        assert 1200 < grid.alive_count < 1800


class _TopDigestRNG(DeterministicRNG):
    """Every draw hashes to the largest 64-bit digest."""

    def _hash(self, domain, key, index):
        return (1 << 64) - 1


class TestRngBounds:

    def test_float_stays_below_one(self):
        assert _TopDigestRNG(0).next_float(Domain.CELL_INIT, 0, 0) < 1.0

    def test_int_stays_in_range(self):
        assert _TopDigestRNG(0).next_int(Domain.PLANT_X, 0, 0, 0, 64) == 64

    def test_uniform_excludes_high(self):
        value = _TopDigestRNG(0).next_uniform(Domain.PLANT_ENERGY, 0, 0, 50.0, 100.0)
        assert 50.0 <= value < 100.0

    def test_bool_at_certainty(self):
        assert _TopDigestRNG(0).next_bool(Domain.CELL_INIT, 0, 0, 1.0)


class TestAccessors:

    def test_kill_reports_previous_state(self):
        grid = LifeGrid.from_cells(4, 4, [(1, 1)])
        assert grid.kill(1, 1) is True
        assert grid.kill(1, 1) is False
        assert grid.alive_count == 0

    def test_alive_cells_row_major(self):
        grid = LifeGrid.from_cells(4, 4, [(3, 0), (0, 3), (1, 1)])
        assert list(grid.alive_cells()) == [(0, 3), (1, 1), (3, 0)]

    def test_copy_is_independent(self):
        grid = LifeGrid.from_cells(4, 4, [(1, 1)])
        clone = grid.copy()
        grid.kill(1, 1)
        assert clone.is_alive(1, 1)

    def test_as_rows_shape(self):
        rows = LifeGrid.from_cells(3, 4, [(2, 3)]).as_rows()
        assert len(rows) == 3
        assert all(len(r) == 4 for r in rows)
        assert rows[2][3] is True

    @pytest.mark.parametrize("rows,cols", [(0, 5), (5, 0), (-1, 3)])
    def test_bad_dimensions_fail_fast(self, rows, cols):
        with pytest.raises(ConfigurationError):
            LifeGrid(rows, cols)
