import logging
from typing import List, Optional, Tuple

from noughts.config import CONFIG
from noughts.core.board import Board, Symbol
from noughts.core.search import MAX_SEARCH_SIZE, SearchEngine

logger = logging.getLogger(__name__)


class Engine:
    """One game session: a board, the search that plays on it and the moves made so far."""

    def __init__(self, size: Optional[int] = None):
        self.board = Board(CONFIG.board.size if size is None else size)
        self.search = SearchEngine()
        self.move_history: List[Tuple[int, Symbol]] = []
        self._check_size()

    def _check_size(self):
        if self.board.size > MAX_SEARCH_SIZE:
            logger.warning(
                "Exhaustive search on a %dx%d board may not finish",
                self.board.size,
                self.board.size,
            )

    def get_best_move(self, symbol) -> Tuple[int, int]:
        """Return (cell, score) of the best move for `symbol`."""
        result = self.search.search_best_move(self.board, symbol)
        return result.best_move, result.score

    def make_move(self, cell: int, symbol) -> bool:
        """Place `symbol` on `cell`. Returns True if the move was valid and made."""
        if symbol not in (Symbol.NOUGHT, Symbol.CROSS):
            return False
        if not self.board.is_valid_move(cell, symbol):
            return False
        self.board.set_cell(cell, symbol)
        self.move_history.append((cell, Symbol(symbol)))
        logger.debug("%s -> cell %d", Symbol(symbol).value, cell)
        return True

    def undo_move(self):
        """Unmake the last move."""
        if self.move_history:
            cell, _symbol = self.move_history.pop()
            self.board.set_cell(cell, Symbol.EMPTY)

    def reset(self, size: Optional[int] = None):
        if size is not None and size != self.board.size:
            self.board = Board(size)
            self._check_size()
        else:
            self.board.reset()
        self.move_history.clear()

    def winner(self) -> Optional[Symbol]:
        return self.board.winner()

    def is_game_over(self) -> bool:
        return self.board.winner() is not None or self.board.is_draw()

    def print_board(self):
        print(self.board)
