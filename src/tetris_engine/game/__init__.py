"""Game module for the falling-block engine.

Exports the board state machine and supporting classes:
- GameGrid: Walled grid, collision test and row clearing
- Piece: Immutable tetromino catalogue entry with rotation
- TetrominoType: Enum of the seven piece kinds
- Board: Active/next/held piece state and the host-facing commands
"""

from .grid import Cell, GameGrid, OccupiedCellError, OutOfBoundsError, Point
from .pieces import (
    InvalidKindError,
    Piece,
    TetrominoType,
    create_piece,
    create_random_piece,
    kind_count,
    rotate,
)
from .core import Board, BoardConfig, Direction, LockResult

__all__ = [
    "Cell",
    "GameGrid",
    "OccupiedCellError",
    "OutOfBoundsError",
    "Point",
    "InvalidKindError",
    "Piece",
    "TetrominoType",
    "create_piece",
    "create_random_piece",
    "kind_count",
    "rotate",
    "Board",
    "BoardConfig",
    "Direction",
    "LockResult",
]
