from __future__ import annotations

from enum import IntEnum
from typing import Iterable, NamedTuple

import numpy as np


class Cell(IntEnum):
    EMPTY = 0
    WALL = 1
    SKY_BLUE = 2
    BLUE = 3
    ORANGE = 4
    YELLOW = 5
    GREEN = 6
    PURPLE = 7
    RED = 8


class Point(NamedTuple):
    row: int
    col: int


class OutOfBoundsError(IndexError):
    """A row/column fell outside the grid (or onto a wall when stamping)."""


class OccupiedCellError(ValueError):
    """Stamp target already holds a locked block."""


class GameGrid:
    """Walled 2D grid for the falling-block board.

    Rows grow downward (row 0 is the top). The leftmost and rightmost column
    and the whole bottom row are permanently ``Cell.WALL``; everything else
    is the playable interior and starts ``Cell.EMPTY``.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.full((self.height, self.width), Cell.EMPTY, dtype=np.int8)
        self.reset()

    def reset(self) -> None:
        self.grid.fill(Cell.EMPTY)
        self.grid[:, 0] = Cell.WALL
        self.grid[:, -1] = Cell.WALL
        self.grid[-1, :] = Cell.WALL

    @property
    def interior(self) -> np.ndarray:
        # Writable slice: every row but the floor, every column but the walls
        return self.grid[:-1, 1:-1]

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def check_bounds(self, row: int, col: int) -> None:
        if not self.is_inside(row, col):
            raise OutOfBoundsError(
                f"({row}, {col}) outside {self.height}x{self.width} grid"
            )

    def cell(self, row: int, col: int) -> Cell:
        self.check_bounds(row, col)
        return Cell(int(self.grid[row, col]))

    def can_place(self, cells: Iterable[Point]) -> bool:
        for row, col in cells:
            if not self.is_inside(row, col):
                return False
            if self.grid[row, col] != Cell.EMPTY:
                return False
        return True

    def stamp(self, cells: Iterable[Point], color: Cell) -> None:
        """Write ``color`` into every cell. Validates all cells before writing."""
        cells = list(cells)
        for row, col in cells:
            self.check_bounds(row, col)
            if self.grid[row, col] == Cell.WALL:
                raise OutOfBoundsError(f"({row}, {col}) is a wall cell")
            if self.grid[row, col] != Cell.EMPTY:
                raise OccupiedCellError(f"({row}, {col}) is already occupied")
        for row, col in cells:
            self.grid[row, col] = color

    def clear_filled_rows(self) -> int:
        """Remove filled interior rows and compact the rest downward.

        Returns the number of rows removed. Surviving rows keep their order
        and settle at the bottom of the interior; the freed rows at the top
        come back empty. Walls are never touched.
        """
        interior = self.interior
        filled = np.all(interior != Cell.EMPTY, axis=1)
        num = int(filled.sum())
        if num == 0:
            return 0
        kept = interior[~filled]
        interior[:num] = Cell.EMPTY
        interior[num:] = kept
        return num

    def filled_count(self) -> int:
        return int(np.count_nonzero(self.interior))

    def get_max_height(self) -> int:
        # row 0 is top; find first non-empty interior row from the top
        non_empty_rows = np.where(np.any(self.interior != Cell.EMPTY, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        return (self.height - 1) - int(non_empty_rows[0])

    def count_holes(self) -> int:
        holes = 0
        for column in self.interior.T:
            seen_block = False
            for cell in column:
                if cell != Cell.EMPTY:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes

    def cells(self) -> np.ndarray:
        """Read-only row-major view over every cell, walls included."""
        view = self.grid.reshape(-1).view()
        view.flags.writeable = False
        return view

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
