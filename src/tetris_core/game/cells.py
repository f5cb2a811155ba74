from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple


Coordinate = Tuple[int, int]


@dataclass(frozen=True)
class Cell:
    """A grid position tagged with the piece type that placed it.

    Two cells are equal when they share ``(x, y)``; ``kind`` is carried along
    for coloring only.
    """

    x: int
    y: int
    kind: int = field(default=0, compare=False)

    @property
    def position(self) -> Coordinate:
        return self.x, self.y

    def moved(self, dx: int, dy: int) -> "Cell":
        return Cell(self.x + dx, self.y + dy, self.kind)
