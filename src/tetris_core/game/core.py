from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, List, Optional, Set

import numpy as np

from .cells import Cell
from .grid import HEIGHT, WIDTH, SettledCells
from .pieces import Piece, TetrominoType
from .rules import ScoringRules


logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    TICK = 3
    NONE = 4


@dataclass
class GameConfig:
    gravity: bool = True
    random_seed: Optional[int] = None


class Board:
    """One game of falling blocks on a 10x22 grid.

    The board owns the settled cells and the active piece. Drivers feed it
    ``move_left``, ``move_right``, ``rotate`` and ``tick`` and read back
    ``cells()`` and the stats. Illegal commands are ignored; once the game
    is over every command is ignored.

    ``rng`` overrides the seeded ``random.Random``; anything with a
    ``randrange`` method will do.
    """

    width = WIDTH
    height = HEIGHT

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)
        self.gravity = self.config.gravity
        self.grid = SettledCells(self.width, self.height)
        self._score = 0
        self._cleared_lines = 0
        self._level = 0
        self._ms_per_tick = self.rules.ms_per_tick(0)
        self._game_over = False
        self.current_piece: Optional[Piece] = None
        self.spawn_next_piece()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def score(self) -> int:
        return self._score

    @property
    def level(self) -> int:
        return self._level

    @property
    def cleared_lines(self) -> int:
        return self._cleared_lines

    @property
    def ms_per_tick(self) -> int:
        return self._ms_per_tick

    def is_game_over(self) -> bool:
        return self._game_over

    def settled_cells(self) -> Set[Cell]:
        return set(self.grid)

    def cells(self) -> Set[Cell]:
        """Settled cells plus the active piece, one cell per position."""
        merged = {cell.position: cell for cell in self.grid}
        if self.current_piece is not None:
            for cell in self.current_piece.cells():
                merged.setdefault(cell.position, cell)
        return set(merged.values())

    def as_array(self) -> np.ndarray:
        state = self.grid.clone_state()
        if self.current_piece is not None:
            for cell in self.current_piece.cells():
                if self.grid.is_inside(cell.x, cell.y):
                    state[cell.y, cell.x] = cell.kind
        return state

    # ------------------------------------------------------------------
    # Piece lifecycle
    # ------------------------------------------------------------------

    def _draw_kind(self) -> TetrominoType:
        previous = int(self.current_piece.kind) if self.current_piece is not None else None
        num = self.rng.randrange(8)
        # The 8th value and immediate repeats are redrawn from the 7 real kinds
        while num == 7 or num + 1 == previous:
            num = self.rng.randrange(7)
        return TetrominoType(num + 1)

    def spawn_next_piece(self) -> Optional[Piece]:
        if self._game_over:
            return self.current_piece
        if self.current_piece is not None:
            self.grid.add(self.current_piece.cells())
        kind = self._draw_kind()
        self.current_piece = Piece(kind)
        logger.debug("Spawned %s at (%d, %d)", kind.name, self.current_piece.x, self.current_piece.y)
        return self.current_piece

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def _move(self, dx: int, dy: int) -> bool:
        if self._game_over or self.current_piece is None:
            return False
        if self.grid.can_place(self.current_piece.translated_cells(dx, dy)):
            self.current_piece.translate(dx, dy)
            return True
        return False

    def move_left(self) -> None:
        self._move(-1, 0)

    def move_right(self) -> None:
        self._move(1, 0)

    def rotate(self) -> None:
        if self._game_over or self.current_piece is None:
            return
        if self.grid.can_place(self.current_piece.rotated_cells()):
            self.current_piece.rotate()

    def tick(self) -> None:
        """Move the piece down one row, or lock it if it has landed."""
        if self._game_over or self.current_piece is None:
            return
        if self._move(0, 1):
            return

        landed = self.current_piece.cells()
        if any(cell.y == 0 for cell in landed):
            self._end_game("piece locked on the top row")
            return

        logger.debug("Locked %s at %s", self.current_piece.kind.name, sorted(c.position for c in landed))
        self.spawn_next_piece()
        self._remove_lines()

    def step(self, action: Action) -> None:
        if action == Action.LEFT:
            self.move_left()
        elif action == Action.RIGHT:
            self.move_right()
        elif action == Action.ROTATE:
            self.rotate()
        elif action == Action.TICK:
            self.tick()
        elif action == Action.NONE:
            pass

    def _end_game(self, reason: str) -> None:
        self._game_over = True
        logger.info(
            "Game over (%s): score=%d lines=%d level=%d",
            reason, self._score, self._cleared_lines, self._level,
        )

    # ------------------------------------------------------------------
    # Line clearing
    # ------------------------------------------------------------------

    def _remove_lines(self) -> None:
        while True:
            full_rows = self.grid.full_rows()
            if not full_rows:
                break

            lines = len(full_rows)
            gained = self.rules.score_for_lines(lines, self._level)
            self.grid.clear_rows(full_rows)
            self._cleared_lines += lines
            self._score += gained
            logger.debug("Cleared rows %s for %d points", full_rows, gained)

            lowest = max(full_rows)
            compacted = False
            if self.gravity and lowest != self.height - 1:
                compacted = self.grid.compact_below(lowest)

            self._update_level()
            if not compacted:
                break
        self._update_level()

    def _update_level(self) -> None:
        level = self.rules.level_for_lines(self._cleared_lines)
        if level != self._level:
            logger.debug("Level %d -> %d", self._level, level)
        self._level = level
        self._ms_per_tick = self.rules.ms_per_tick(level)

    # ------------------------------------------------------------------
    # Debugging
    # ------------------------------------------------------------------

    def status(self) -> Dict[str, Any]:
        """Border and neighbour checks for the active piece."""
        piece = self.current_piece
        cells: List[Cell] = piece.cells() if piece is not None else []
        grid = self.grid
        status = {
            "left_border": any(c.x == 0 for c in cells),
            "right_border": any(c.x == self.width - 1 for c in cells),
            "bottom_border": any(c.y == self.height - 1 for c in cells),
            "points_left": any(grid.is_occupied(c.x - 1, c.y) for c in cells),
            "points_right": any(grid.is_occupied(c.x + 1, c.y) for c in cells),
            "points_down": any(grid.is_occupied(c.x, c.y + 1) for c in cells),
            "can_rotate": piece is not None and grid.can_place(piece.rotated_cells()),
        }
        logger.debug("Board status:\n%s%s", self, status)
        return status

    def __str__(self) -> str:
        return "".join(
            "[" + ", ".join(str(int(v)) for v in row) + "]\n" for row in self.as_array()
        )
