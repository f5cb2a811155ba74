from __future__ import annotations

import argparse
from typing import Dict, Optional

import pygame

from tetris_core.game import Action, Board, GameConfig
from .renderer import Renderer


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_UP: Action.ROTATE,
    pygame.K_DOWN: Action.TICK,
}


def handle_key(board: Board, key: int) -> Optional[Board]:
    """Apply a key press to ``board``.

    Returns the board to keep playing with: a fresh one after ``R`` on a
    finished game, ``None`` when the player quits.
    """
    if key == pygame.K_ESCAPE:
        return None
    if key == pygame.K_g:
        board.gravity = not board.gravity
        return board
    if key == pygame.K_r and board.is_game_over():
        return Board(GameConfig(gravity=board.gravity))
    action = KEY_TO_ACTION.get(key)
    if action is not None:
        board.step(action)
    return board


def run(config: Optional[GameConfig] = None) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        board = Board(config)
        renderer = Renderer(cell_size=28)
        screen = pygame.display.set_mode(renderer.window_size(board))
        pygame.display.set_caption("tetris-core - Human Play")

        last_fall = pygame.time.get_ticks()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    next_board = handle_key(board, event.key)
                    if next_board is None:
                        running = False
                    elif next_board is not board:
                        board = next_board
                        last_fall = pygame.time.get_ticks()

            # Timer-driven down-step at the board's current speed
            now = pygame.time.get_ticks()
            if now - last_fall >= board.ms_per_tick:
                board.tick()
                last_fall = now

            renderer.draw(screen, board)
            clock.tick(60)
        print(f"Final score: {board.score} ({board.cleared_lines} lines, level {board.level})")
    finally:
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play tetris-core with the keyboard.")
    p.add_argument("--no-gravity", action="store_true", help="Disable post-clear gravity compaction")
    p.add_argument("--seed", type=int, default=None, help="Seed for the piece sequence")
    return p


def main() -> None:
    args = build_parser().parse_args()
    run(GameConfig(gravity=not args.no_gravity, random_seed=args.seed))


if __name__ == "__main__":  # pragma: no cover
    main()
