from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Tuple

import numpy as np

from .grid import Cell, Point


class TetrominoType(IntEnum):
    I = 0
    J = 1
    L = 2
    O = 3
    S = 4
    T = 5
    Z = 6


class InvalidKindError(ValueError):
    """Piece kind outside the catalogue."""


PIECE_SIZE = 4

Shape = Tuple[Point, ...]


def _shape(*cells: Tuple[int, int]) -> Shape:
    return tuple(Point(row, col) for row, col in cells)


# Offsets inside the PIECE_SIZE x PIECE_SIZE box, listed in authoring order
CATALOGUE = {
    TetrominoType.I: (Cell.SKY_BLUE, _shape((0, 1), (1, 1), (2, 1), (3, 1))),
    TetrominoType.J: (Cell.BLUE, _shape((1, 0), (1, 1), (1, 2), (2, 2))),
    TetrominoType.L: (Cell.ORANGE, _shape((2, 1), (1, 1), (1, 2), (1, 3))),
    TetrominoType.O: (Cell.YELLOW, _shape((1, 1), (1, 2), (2, 1), (2, 2))),
    TetrominoType.S: (Cell.GREEN, _shape((2, 0), (2, 1), (1, 1), (1, 2))),
    TetrominoType.T: (Cell.PURPLE, _shape((1, 1), (1, 2), (1, 3), (2, 2))),
    TetrominoType.Z: (Cell.RED, _shape((1, 1), (1, 2), (2, 2), (2, 3))),
}


@dataclass(frozen=True)
class Piece:
    kind: TetrominoType
    color: Cell
    shape: Shape
    size: int = PIECE_SIZE

    def rotated(self) -> "Piece":
        return rotate(self)

    def cells_at(self, origin_row: int, origin_col: int) -> List[Point]:
        return [Point(origin_row + p.row, origin_col + p.col) for p in self.shape]

    def mask(self) -> np.ndarray:
        m = np.zeros((self.size, self.size), dtype=np.int8)
        for row, col in self.shape:
            m[row, col] = 1
        return m


def kind_count() -> int:
    return len(TetrominoType)


def create_piece(kind: int) -> Piece:
    if not 0 <= int(kind) < kind_count():
        raise InvalidKindError(f"piece kind {kind} not in [0, {kind_count()})")
    kind = TetrominoType(int(kind))
    color, shape = CATALOGUE[kind]
    return Piece(kind=kind, color=color, shape=shape)


def create_random_piece(rng) -> Piece:
    """Draw a uniformly distributed kind from ``rng.randrange``."""
    return create_piece(rng.randrange(kind_count()))


def rotate(piece: Piece) -> Piece:
    """Quarter turn about the fixed bounding box: (r, c) -> (c, size-1-r).

    The result is not re-centred, so it may land on a wall; callers check
    placement before committing it.
    """
    last = piece.size - 1
    shape = tuple(Point(p.col, last - p.row) for p in piece.shape)
    return Piece(kind=piece.kind, color=piece.color, shape=shape, size=piece.size)
