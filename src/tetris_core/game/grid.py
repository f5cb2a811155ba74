from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List

import numpy as np

from .cells import Cell, Coordinate


WIDTH = 10
HEIGHT = 22

logger = logging.getLogger(__name__)


class SettledCells:
    """Locked blocks on a ``width`` x ``height`` grid, row 0 at the top.

    Cells are keyed by position, so two settled cells can never share
    ``(x, y)``. Every transformation rebuilds the cells it moves instead of
    editing them in place.
    """

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        self.width = int(width)
        self.height = int(height)
        self._cells: Dict[Coordinate, Cell] = {}

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(list(self._cells.values()))

    def __contains__(self, position: object) -> bool:
        if isinstance(position, Cell):
            position = position.position
        return position in self._cells

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_occupied(self, x: int, y: int) -> bool:
        return (x, y) in self._cells

    def get(self, x: int, y: int) -> Cell | None:
        return self._cells.get((x, y))

    def can_place(self, cells: Iterable[Cell]) -> bool:
        for cell in cells:
            if not self.is_inside(cell.x, cell.y):
                return False
            if cell.position in self._cells:
                return False
        return True

    def overlaps(self, cells: Iterable[Cell]) -> bool:
        return any(cell.position in self._cells for cell in cells)

    def add(self, cells: Iterable[Cell]) -> None:
        for cell in cells:
            self._cells[cell.position] = cell

    def row(self, y: int) -> List[Cell]:
        return sorted((c for c in self._cells.values() if c.y == y), key=lambda c: c.x)

    def full_rows(self) -> List[int]:
        return [
            y for y in range(self.height)
            if all((x, y) in self._cells for x in range(self.width))
        ]

    def clear_rows(self, rows: Iterable[int]) -> None:
        """Remove the rows; every other cell drops by the number of cleared rows below it.

        The drop keeps each column's order, so no two cells can meet.
        """
        cleared = set(rows)
        if not cleared:
            return
        self._rebuild(
            cell.moved(0, sum(1 for r in cleared if r > cell.y))
            for cell in self._cells.values()
            if cell.y not in cleared
        )

    def compact_below(self, row: int) -> bool:
        """Drop each column's blocks at or above ``row`` into the gap under it.

        Only the contiguous run of empty cells directly below ``row`` is
        filled. Returns True when any cell moved.
        """
        drops: Dict[int, int] = {}
        for x in range(self.width):
            empty = 0
            for y in range(row + 1, self.height):
                if (x, y) in self._cells:
                    break
                empty += 1
            if empty:
                drops[x] = empty

        moved = False
        shifted: List[Cell] = []
        for cell in self._cells.values():
            drop = drops.get(cell.x, 0)
            if drop and cell.y <= row:
                shifted.append(cell.moved(0, drop))
                moved = True
            else:
                shifted.append(cell)
        if moved:
            logger.debug("Gravity compaction below row %d: %s", row, drops)
            self._rebuild(shifted)
        return moved

    def _rebuild(self, cells: Iterable[Cell]) -> None:
        self._cells = {cell.position: cell for cell in cells}

    def clone_state(self) -> np.ndarray:
        state = np.zeros((self.height, self.width), dtype=np.int8)
        for cell in self._cells.values():
            state[cell.y, cell.x] = cell.kind
        return state
