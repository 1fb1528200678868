"""Two-player Bingo with shared calls and independent boards."""

from .game import CallResult, GameController, GameListener, GameState
from .grid import Cell, Grid, PlayerId, count_completed_lines, create_grid, mark_number
from .version import __version__

__all__ = [
    "CallResult",
    "Cell",
    "GameController",
    "GameListener",
    "GameState",
    "Grid",
    "PlayerId",
    "count_completed_lines",
    "create_grid",
    "mark_number",
    "__version__",
]
