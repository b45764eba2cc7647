from __future__ import annotations

from typing import Callable, Dict

import pygame

from tetris_engine.game import Board, Direction
from .renderer import Renderer


KEY_TO_COMMAND: Dict[int, Callable[[Board], object]] = {
    pygame.K_LEFT: lambda board: board.move(Direction.LEFT),
    pygame.K_RIGHT: lambda board: board.move(Direction.RIGHT),
    pygame.K_UP: lambda board: board.rotate(),
    pygame.K_DOWN: lambda board: board.tick(),
    pygame.K_SPACE: lambda board: board.hard_drop(),
    pygame.K_c: lambda board: board.hold(),
}


def run(gravity_ms: int = 600) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        board = Board.create()
        renderer = Renderer()

        screen = pygame.display.set_mode(renderer.window_size(board))
        pygame.display.set_caption("Tetris - Human Play")

        # The engine has no clock; gravity cadence belongs to the host
        last_fall = pygame.time.get_ticks()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r and board.game_over:
                        board.reset()
                    else:
                        command = KEY_TO_COMMAND.get(event.key)
                        if command is not None:
                            command(board)

            now = pygame.time.get_ticks()
            if now - last_fall >= gravity_ms:
                board.tick()
                last_fall = now

            renderer.draw(screen, board)

            if board.game_over:
                font = pygame.font.SysFont(None, 30)
                text = font.render("Game Over - R to restart, ESC to quit", True, (255, 255, 255))
                rect = text.get_rect(center=(screen.get_width() // 2, 30))
                screen.blit(text, rect)
                pygame.display.flip()

            clock.tick(60)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
