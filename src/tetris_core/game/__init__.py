"""Game module for tetris-core.

Exports the core game engine and supporting classes:
- Cell: Grid position tagged with the piece type that placed it
- SettledCells: Locked blocks, line clearing and gravity compaction
- Piece: Tetromino piece with rotation and translation
- TetrominoType: Enum of available piece types
- ScoringRules: Line-clear scores and level speed table
- Board: Piece lifecycle, commands and game state
"""

from .cells import Cell
from .grid import HEIGHT, WIDTH, SettledCells
from .pieces import Piece, TetrominoType
from .rules import ScoringRules
from .core import Action, Board, GameConfig

__all__ = [
    "Cell",
    "SettledCells",
    "WIDTH",
    "HEIGHT",
    "Piece",
    "TetrominoType",
    "ScoringRules",
    "Board",
    "GameConfig",
    "Action",
]
