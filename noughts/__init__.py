"""Noughts and Crosses engine: board, alpha-beta search, game loop and configuration.

Modules:
- core.board: Symbol enum and the square Board
- core.search: exhaustive minimax with alpha-beta pruning
- main: Engine session wrapper
- game: key-driven turn loop against a Display
"""

from .core import Board, Symbol, SearchEngine, get_best_move
from .main import Engine

__all__ = ["Board", "Symbol", "SearchEngine", "get_best_move", "Engine"]
