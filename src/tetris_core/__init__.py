"""Falling-block puzzle core: grid, pieces, line clearing, scoring."""

from .game import Action, Board, Cell, GameConfig, Piece, ScoringRules, TetrominoType

__all__ = [
    "Action",
    "Board",
    "Cell",
    "GameConfig",
    "Piece",
    "ScoringRules",
    "TetrominoType",
]
