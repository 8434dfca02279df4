"""Core engine components: board and search."""

from .board import Board, IllegalMoveError, Symbol
from .search import (
    MAX_SEARCH_SIZE,
    SCORE_DRAW,
    SCORE_LOSE,
    SCORE_WIN,
    NoLegalMoveError,
    SearchEngine,
    get_best_move,
)
