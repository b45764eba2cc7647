from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from tetris_engine.game import Board, Cell, Piece


def _color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        Cell.EMPTY: (20, 20, 26),
        Cell.WALL: (90, 90, 100),
        Cell.SKY_BLUE: (0, 240, 240),  # I
        Cell.BLUE: (0, 0, 240),        # J
        Cell.ORANGE: (240, 160, 0),    # L
        Cell.YELLOW: (240, 240, 0),    # O
        Cell.GREEN: (0, 240, 0),       # S
        Cell.PURPLE: (160, 0, 240),    # T
        Cell.RED: (240, 0, 0),         # Z
    }
    return palette.get(abs(v), (200, 200, 200))


class Renderer:
    def __init__(self, cell_size: int = 20, margin: int = 20, panel_width: int = 140) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_width
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, board: Board) -> Tuple[int, int]:
        width, height = board.dimensions()
        return (
            width * self.cell_size + self.margin * 3 + self.panel_width,
            height * self.cell_size + self.margin * 2,
        )

    def _grid_surface(self, state: np.ndarray) -> pygame.Surface:
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, _color_for_value(int(state[y, x])), rect)
        return surf

    def _draw_preview(self, screen: pygame.Surface, label: str, piece: Optional[Piece], top: int) -> None:
        left = screen.get_width() - self.panel_width - self.margin
        if self._font is None:
            self._font = pygame.font.SysFont(None, 24)
        screen.blit(self._font.render(label, True, (230, 230, 230)), (left, top))
        if piece is None:
            return
        mask = piece.mask()
        for row, col in zip(*np.nonzero(mask)):
            rect = pygame.Rect(
                left + int(col) * self.cell_size,
                top + 24 + int(row) * self.cell_size,
                self.cell_size - 1,
                self.cell_size - 1,
            )
            pygame.draw.rect(screen, _color_for_value(int(piece.color)), rect)

    def draw(self, screen: pygame.Surface, board: Board) -> None:
        screen.fill((10, 10, 14))
        screen.blit(self._grid_surface(board.get_state()), (self.margin, self.margin))
        preview_height = 24 + self.cell_size * 4 + self.margin
        self._draw_preview(screen, "Next", board.next_piece(), self.margin)
        self._draw_preview(screen, "Hold", board.held_piece(), self.margin + preview_height)
        pygame.display.flip()
