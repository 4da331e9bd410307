"""Dense two-dimensional boolean grid.

Cells are stored in a flat numpy bool array of length rows * columns,
addressed as index(x, y) = x + columns * y. ``x`` is the column and
``y`` the row, with (0, 0) in the top-left corner.
"""

from __future__ import annotations

from collections.abc import Iterator

import numpy as np


class BitGrid:
    """Fixed-size grid of booleans, all False on construction.

    Attributes:
        rows: Number of rows (grid height).
        columns: Number of columns (grid width).
    """

    __slots__ = ("rows", "columns", "_bits")

    def __init__(self, rows: int, columns: int) -> None:
        if rows < 0 or columns < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got {rows}x{columns}")
        self.rows = rows
        self.columns = columns
        self._bits = np.zeros(rows * columns, dtype=bool)

    @classmethod
    def square(cls, side: int) -> BitGrid:
        """Create an empty side x side grid."""
        return cls(side, side)

    @classmethod
    def from_array(cls, array: np.ndarray) -> BitGrid:
        """Build a grid from a 2D array indexed [row, column]."""
        if array.ndim != 2:
            raise ValueError(f"Expected a 2D array, got {array.ndim} dimensions")
        rows, columns = array.shape
        grid = cls(rows, columns)
        grid._bits[:] = np.asarray(array, dtype=bool).ravel()
        return grid

    def index(self, x: int, y: int) -> int:
        """Flat storage index of cell (x, y).

        Raises:
            IndexError: If (x, y) lies outside the grid.
        """
        if not (0 <= x < self.columns and 0 <= y < self.rows):
            raise IndexError(f"Cell ({x}, {y}) outside {self.columns}x{self.rows} grid")
        return x + self.columns * y

    def get(self, x: int, y: int) -> bool:
        return bool(self._bits[self.index(x, y)])

    def set(self, x: int, y: int, value: bool = True) -> None:
        self._bits[self.index(x, y)] = value

    def reset(self) -> None:
        """Clear every cell."""
        self._bits[:] = False

    @property
    def array(self) -> np.ndarray:
        """Writable [row, column] view onto the flat storage."""
        return self._bits.reshape(self.rows, self.columns)

    def count(self) -> int:
        """Number of set cells."""
        return int(np.count_nonzero(self._bits))

    def __iter__(self) -> Iterator[bool]:
        """Iterate cell values in row-major order."""
        return (bool(bit) for bit in self._bits)

    def __len__(self) -> int:
        return self.rows * self.columns

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitGrid):
            return NotImplemented
        return (
            self.rows == other.rows
            and self.columns == other.columns
            and bool(np.array_equal(self._bits, other._bits))
        )

    def __repr__(self) -> str:
        return f"BitGrid(rows={self.rows}, columns={self.columns}, set={self.count()})"

    def to_text(self, ink: str = "#", paper: str = ".") -> str:
        """Render the grid as lines of text, one line per row."""
        return "\n".join(
            "".join(ink if bit else paper for bit in row) for row in self.array
        )
