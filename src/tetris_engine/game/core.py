from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple

import numpy as np

from .grid import Cell, GameGrid, Point
from .pieces import PIECE_SIZE, Piece, create_random_piece

logger = logging.getLogger(__name__)


class Direction(IntEnum):
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3


_DELTAS = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}


@dataclass
class BoardConfig:
    width: int = 12
    height: int = 30
    random_seed: Optional[int] = None


@dataclass
class LockResult:
    rows_cleared: int
    topped_out: bool


class Board:
    """Falling-block rules engine: walled grid plus active/next/held piece.

    The host drives it with commands (``move``, ``rotate``, ``hold``,
    ``tick``, ``hard_drop``) and reads it back through the queries. Blocked
    moves are reported as ``False``, never raised. ``rng`` is any object with
    a ``randrange(n)`` method; ``reset(seed)`` replaces it with a seeded
    ``random.Random``.
    """

    def __init__(self, config: Optional[BoardConfig] = None, rng=None) -> None:
        self.config = config or BoardConfig()
        if self.config.width < PIECE_SIZE + 2 or self.config.height < PIECE_SIZE + 1:
            raise ValueError(
                f"board {self.config.width}x{self.config.height} cannot hold a "
                f"{PIECE_SIZE}x{PIECE_SIZE} piece inside its walls"
            )
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self._active_position = self.spawn_position()
        self._active_piece: Piece = create_random_piece(self.rng)
        self._next_piece: Piece = create_random_piece(self.rng)
        self._held_piece: Optional[Piece] = None
        self.game_over = False
        self.pieces_locked = 0
        self.rows_cleared_total = 0

    @classmethod
    def create(cls, rng=None) -> "Board":
        return cls(BoardConfig(), rng=rng)

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng = random.Random(seed)
        self.grid.reset()
        self.reset_active_position()
        self._active_piece = create_random_piece(self.rng)
        self._next_piece = create_random_piece(self.rng)
        self._held_piece = None
        self.game_over = False
        self.pieces_locked = 0
        self.rows_cleared_total = 0

    # ---------- Queries ----------
    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def dimensions(self) -> Tuple[int, int]:
        return self.width, self.height

    def cell(self, row: int, col: int) -> Cell:
        return self.grid.cell(row, col)

    def cells(self) -> np.ndarray:
        return self.grid.cells()

    # Pieces and points are immutable; returned as-is
    def active_piece(self) -> Piece:
        return self._active_piece

    def active_position(self) -> Point:
        return self._active_position

    def next_piece(self) -> Piece:
        return self._next_piece

    def held_piece(self) -> Optional[Piece]:
        return self._held_piece

    def spawn_position(self) -> Point:
        return Point(0, self.width // 2 - 2)

    def get_state(self) -> np.ndarray:
        # Overlay the active piece on a copy of the grid; negative marks falling cells
        state = self.grid.clone_state()
        if not self.game_over:
            for row, col in self._active_piece.cells_at(*self._active_position):
                if self.grid.is_inside(row, col):
                    state[row, col] = -int(self._active_piece.color)
        return state

    def _fits(self, piece: Piece, row: int, col: int) -> bool:
        if row < 0 or col < 0:
            return False
        return self.grid.can_place(piece.cells_at(row, col))

    def can_move(self, direction: Direction) -> bool:
        if self.game_over:
            return False
        d_row, d_col = _DELTAS[Direction(direction)]
        row, col = self._active_position
        return self._fits(self._active_piece, row + d_row, col + d_col)

    def can_rotate(self) -> bool:
        if self.game_over:
            return False
        return self._fits(self._active_piece.rotated(), *self._active_position)

    def can_hold(self) -> bool:
        if self.game_over:
            return False
        incoming = self._held_piece if self._held_piece is not None else self._next_piece
        return self._fits(incoming, *self._active_position)

    # ---------- Commands ----------
    def move(self, direction: Direction) -> bool:
        if not self.can_move(direction):
            return False
        d_row, d_col = _DELTAS[Direction(direction)]
        row, col = self._active_position
        self._active_position = Point(row + d_row, col + d_col)
        return True

    def rotate(self) -> bool:
        if self.game_over:
            return False
        rotated = self._active_piece.rotated()
        if not self._fits(rotated, *self._active_position):
            return False
        self._active_piece = rotated
        return True

    def hold(self) -> bool:
        if not self.can_hold():
            return False
        if self._held_piece is None:
            incoming = self._next_piece
            self._next_piece = create_random_piece(self.rng)
        else:
            incoming = self._held_piece
        self._held_piece = self._active_piece
        self._active_piece = incoming
        logger.debug("Held %s, active is now %s", self._held_piece.kind.name, incoming.kind.name)
        return True

    def tick(self) -> Optional[LockResult]:
        if self.game_over:
            return None
        if self.move(Direction.DOWN):
            return None
        return self.lock_and_advance()

    def hard_drop(self) -> Optional[LockResult]:
        if self.game_over:
            return None
        # Bounded by the board height: every successful move lowers the piece a row
        while self.move(Direction.DOWN):
            pass
        return self.lock_and_advance()

    def reset_active_position(self) -> None:
        self._active_position = self.spawn_position()

    def lock_and_advance(self) -> Optional[LockResult]:
        """Stamp the active piece, clear filled rows, then bring in the next piece.

        Returns None without touching the grid once the game is over.
        """
        if self.game_over:
            return None
        piece = self._active_piece
        self.grid.stamp(piece.cells_at(*self._active_position), piece.color)
        rows = self.grid.clear_filled_rows()
        self.pieces_locked += 1
        self.rows_cleared_total += rows
        logger.debug(
            "Locked %s at %s, cleared %d row(s)", piece.kind.name, tuple(self._active_position), rows
        )

        self.reset_active_position()
        self._active_piece = self._next_piece
        self._next_piece = create_random_piece(self.rng)

        topped_out = not self._fits(self._active_piece, *self._active_position)
        if topped_out:
            self.game_over = True
            logger.info(
                "Stack reached the top after %d pieces (%d rows cleared)",
                self.pieces_locked,
                self.rows_cleared_total,
            )
        return LockResult(rows_cleared=rows, topped_out=topped_out)
