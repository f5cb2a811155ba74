from __future__ import annotations

from typing import Tuple

import numpy as np
import pygame

from tetris_core.game import Board


def _color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        0: (20, 20, 26),
        1: (0, 240, 240),  # I
        2: (240, 240, 0),  # O
        3: (160, 0, 240),  # T
        4: (0, 240, 0),    # S
        5: (240, 0, 0),    # Z
        6: (0, 0, 240),    # J
        7: (240, 160, 0),  # L
    }
    return palette.get(abs(v), (200, 200, 200))


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, panel_width: int = 160) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_width
        self._font: pygame.font.Font | None = None

    def window_size(self, board: Board) -> Tuple[int, int]:
        width = board.width * self.cell_size + self.margin * 3 + self.panel_width
        height = board.height * self.cell_size + self.margin * 2
        return width, height

    def _grid_surface(self, state: np.ndarray) -> pygame.Surface:
        h, w = state.shape
        width = w * self.cell_size
        height = h * self.cell_size
        surf = pygame.Surface((width, height))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                v = int(state[y, x])
                color = _color_for_value(v)
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, color, rect)
        return surf

    def _draw_stats(self, screen: pygame.Surface, board: Board) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 24)
        x_text = self.margin * 2 + board.width * self.cell_size
        lines = [
            f"Score: {board.score}",
            f"Lines: {board.cleared_lines}",
            f"Level: {board.level}",
            f"Speed: {board.ms_per_tick} ms",
            f"Gravity: {'on' if board.gravity else 'off'}",
        ]
        for i, txt in enumerate(lines):
            img = self._font.render(txt, True, (230, 230, 230))
            screen.blit(img, (x_text, self.margin + i * 22))
        if board.is_game_over():
            over = self._font.render("Game Over - R to restart", True, (255, 100, 100))
            screen.blit(over, (x_text, self.margin + len(lines) * 22 + 10))

    def draw(self, screen: pygame.Surface, board: Board) -> None:
        grid_surf = self._grid_surface(board.as_array())
        screen.fill((10, 10, 14))
        screen.blit(grid_surf, (self.margin, self.margin))
        self._draw_stats(screen, board)
        pygame.display.flip()
