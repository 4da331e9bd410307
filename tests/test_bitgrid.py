"""Tests for the dense boolean grid."""

import numpy as np
import pytest

from hilbert_halftone.bitgrid import BitGrid


class TestConstruction:
    def test_new_grid_is_empty(self):
        grid = BitGrid(3, 5)
        assert grid.rows == 3
        assert grid.columns == 5
        assert len(grid) == 15
        assert grid.count() == 0
        assert not any(grid)

    def test_square(self):
        grid = BitGrid.square(7)
        assert grid.rows == grid.columns == 7

    def test_negative_dimensions_raise(self):
        with pytest.raises(ValueError, match="non-negative"):
            BitGrid(-1, 3)

    def test_from_array(self):
        grid = BitGrid.from_array(np.array([[1, 0, 0], [0, 0, 1]]))
        assert grid.rows == 2
        assert grid.columns == 3
        assert grid.get(0, 0)
        assert grid.get(2, 1)
        assert grid.count() == 2

    def test_from_array_rejects_1d(self):
        with pytest.raises(ValueError, match="2D"):
            BitGrid.from_array(np.zeros(4))


class TestAccess:
    def test_set_and_get(self):
        grid = BitGrid(3, 5)
        grid.set(4, 2)
        assert grid.get(4, 2)
        assert not grid.get(2, 1)

    def test_set_false_clears(self):
        grid = BitGrid(2, 2)
        grid.set(1, 1)
        grid.set(1, 1, False)
        assert not grid.get(1, 1)

    def test_index_is_x_plus_columns_times_y(self):
        grid = BitGrid(3, 5)
        assert grid.index(4, 2) == 14
        grid.set(4, 2)
        assert list(grid)[14] is True
        assert grid.array[2, 4]

    @pytest.mark.parametrize("x, y", [(5, 0), (0, 3), (-1, 0), (0, -1)])
    def test_out_of_range_raises(self, x, y):
        grid = BitGrid(3, 5)
        with pytest.raises(IndexError):
            grid.get(x, y)
        with pytest.raises(IndexError):
            grid.set(x, y)

    def test_reset(self):
        grid = BitGrid(4, 4)
        for i in range(4):
            grid.set(i, i)
        grid.reset()
        assert grid.count() == 0

    def test_iteration_is_row_major(self):
        grid = BitGrid(2, 2)
        grid.set(1, 0)
        assert list(grid) == [False, True, False, False]

    def test_array_view_is_writable(self):
        grid = BitGrid(2, 3)
        grid.array[1, 2] = True
        assert grid.get(2, 1)


class TestComparison:
    def test_equal_grids(self):
        a = BitGrid(2, 2)
        b = BitGrid(2, 2)
        a.set(0, 1)
        b.set(0, 1)
        assert a == b

    def test_different_cells(self):
        a = BitGrid(2, 2)
        b = BitGrid(2, 2)
        a.set(0, 1)
        assert a != b

    def test_different_shapes(self):
        assert BitGrid(2, 3) != BitGrid(3, 2)

    def test_to_text(self):
        grid = BitGrid(2, 3)
        grid.set(0, 0)
        grid.set(2, 1)
        assert grid.to_text() == "#..\n..#"
