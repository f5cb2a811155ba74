from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional

import numpy as np

from .cells import Cell
from .grid import WIDTH


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Shape = np.ndarray


def _rot90(shape: Shape, k: int) -> Shape:
    k = k % 4
    if k == 0:
        return shape
    return np.rot90(shape, k, axes=(1, 0))  # rotate clockwise when k>0


BASE_SHAPES = {
    TetrominoType.I: np.array([[1, 1, 1, 1]], dtype=np.int8),
    TetrominoType.O: np.array([[1, 1], [1, 1]], dtype=np.int8),
    TetrominoType.T: np.array([[1, 1, 1], [0, 1, 0]], dtype=np.int8),
    TetrominoType.S: np.array([[0, 1, 1], [1, 1, 0]], dtype=np.int8),
    TetrominoType.Z: np.array([[1, 1, 0], [0, 1, 1]], dtype=np.int8),
    TetrominoType.J: np.array([[1, 0, 0], [1, 1, 1]], dtype=np.int8),
    TetrominoType.L: np.array([[0, 0, 1], [1, 1, 1]], dtype=np.int8),
}


def spawn_x(kind: TetrominoType) -> int:
    """Column of the anchor that centres ``kind`` horizontally on the board."""
    return (WIDTH - BASE_SHAPES[kind].shape[1]) // 2


@dataclass
class Piece:
    """The falling tetromino.

    ``x``/``y`` anchor the top-left corner of the rotated shape's bounding
    box. When omitted, the piece spawns on the top row, horizontally centred.
    Rotation turns the shape clockwise in place around that anchor; there
    are no wall kicks.
    """

    kind: TetrominoType
    rotation: int = 0  # 0..3
    x: Optional[int] = None
    y: int = 0

    def __post_init__(self) -> None:
        self.kind = TetrominoType(self.kind)
        self.rotation %= 4
        if self.x is None:
            self.x = spawn_x(self.kind)

    def shape(self, rotation: Optional[int] = None) -> Shape:
        if rotation is None:
            rotation = self.rotation
        return _rot90(BASE_SHAPES[self.kind], rotation)

    def cells_at(self, origin_x: int, origin_y: int, rotation: Optional[int] = None) -> List[Cell]:
        s = self.shape(rotation)
        h, w = s.shape
        kind = int(self.kind)
        cells: List[Cell] = []
        for dy in range(h):
            for dx in range(w):
                if s[dy, dx]:
                    cells.append(Cell(origin_x + dx, origin_y + dy, kind))
        return cells

    def cells(self) -> List[Cell]:
        return self.cells_at(self.x, self.y)

    def rotated_cells(self) -> List[Cell]:
        """Cells after one clockwise step, without changing the piece."""
        return self.cells_at(self.x, self.y, self.rotation + 1)

    def translated_cells(self, dx: int, dy: int) -> List[Cell]:
        return self.cells_at(self.x + dx, self.y + dy)

    def rotate(self) -> None:
        self.rotation = (self.rotation + 1) % 4

    def translate(self, dx: int, dy: int) -> None:
        self.x += dx
        self.y += dy
