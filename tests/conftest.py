from __future__ import annotations

from typing import Iterable, List, Set, Tuple

import pytest

from tetris_core.game import Board, Cell, GameConfig, Piece, TetrominoType


class ScriptedRandom:
    """Stands in for ``random.Random``; hands out pre-recorded draws."""

    def __init__(self, values: Iterable[int]) -> None:
        self.values: List[int] = list(values)
        self.calls: List[Tuple[int, int]] = []

    def randrange(self, stop: int) -> int:
        value = self.values.pop(0)
        assert 0 <= value < stop, f"scripted draw {value} outside range({stop})"
        self.calls.append((stop, value))
        return value


def draw_for(kind: TetrominoType) -> int:
    return int(kind) - 1


def make_board(draws: Iterable[int] = (0, 1, 2, 3, 4, 5, 6), gravity: bool = True) -> Board:
    return Board(GameConfig(gravity=gravity), rng=ScriptedRandom(draws))


def settle(board: Board, positions: Iterable[Tuple[int, int]], kind: int = 7) -> None:
    board.grid.add(Cell(x, y, kind) for x, y in positions)


def place(board: Board, kind: TetrominoType, x: int, y: int, rotation: int = 0) -> Piece:
    board.current_piece = Piece(kind, rotation=rotation, x=x, y=y)
    return board.current_piece


def triples(cells: Iterable[Cell]) -> Set[Tuple[int, int, int]]:
    return {(c.x, c.y, c.kind) for c in cells}


def positions(cells: Iterable[Cell]) -> Set[Tuple[int, int]]:
    return {(c.x, c.y) for c in cells}


def lock(board: Board, limit: int = 50) -> int:
    """Tick until the active piece is replaced or the game ends."""
    piece = board.current_piece
    ticks = 0
    while board.current_piece is piece and not board.is_game_over():
        board.tick()
        ticks += 1
        assert ticks <= limit, "piece never locked"
    return ticks


@pytest.fixture
def board() -> Board:
    return make_board()
