"""
Minesweeper game module.

Provides the board engine (cells, board, game session, snapshots) and a
Gymnasium environment that drives it.
"""
from .cell import Cell, CellState
from .board import (
    Board,
    BoardConfig,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    DIFFICULTIES,
)
from .session import GameSession, Phase, new_game
from .snapshot import CellView, SessionSnapshot
from .environment import MinesweeperEnv, render_board

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "DIFFICULTIES",
    "GameSession",
    "Phase",
    "new_game",
    "CellView",
    "SessionSnapshot",
    "MinesweeperEnv",
    "render_board",
]
