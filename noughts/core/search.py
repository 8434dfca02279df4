import logging
import time
from dataclasses import dataclass

from noughts.core.board import Board, IllegalMoveError, Symbol
from noughts.core.utils import format_info

logger = logging.getLogger(__name__)

# signed 8-bit bounds; depth is added to or subtracted from these
SCORE_WIN = 127
SCORE_LOSE = -128
SCORE_DRAW = 0

# largest side length the exhaustive search finishes on in reasonable time
MAX_SEARCH_SIZE = 3


class NoLegalMoveError(RuntimeError):
    """Search was asked for a move on a board with no free cell."""


@dataclass
class SearchResult:
    best_move: int
    score: int
    nodes: int
    elapsed: float = 0.0


class SearchEngine:
    """Exhaustive minimax with alpha-beta pruning.

    The board passed in is borrowed: every trial move is unmade before the
    call returns, so the caller sees the same cells before and after.
    """

    def __init__(self):
        self.nodes = 0

    def get_best_move(self, board: Board, symbol_self) -> int:
        return self.search_best_move(board, symbol_self).best_move

    def search_best_move(self, board: Board, symbol_self) -> SearchResult:
        if symbol_self not in (Symbol.NOUGHT, Symbol.CROSS):
            raise IllegalMoveError(f"Search needs a mark to play, got {symbol_self!r}")
        symbol_self = Symbol(symbol_self)
        symbol_other = symbol_self.opponent

        moves = [cell for cell in range(len(board.cells)) if board.is_valid_move(cell, symbol_self)]
        if not moves:
            raise NoLegalMoveError("Board is full, there is no move to search")

        self.nodes = 0
        start_time = time.time()
        alpha = SCORE_LOSE
        beta = SCORE_WIN
        best_move = moves[0]

        for cell in moves:
            board.set_cell(cell, symbol_self)
            try:
                score = self._minimise(board, symbol_self, symbol_other, 1, alpha, beta)
            finally:
                board.set_cell(cell, Symbol.EMPTY)

            # strict comparison keeps the lowest index on equal scores
            if score > alpha:
                alpha = score
                best_move = cell

        elapsed = time.time() - start_time
        logger.debug(format_info(best_move, alpha, self.nodes, elapsed, SCORE_WIN, SCORE_LOSE))
        return SearchResult(best_move, alpha, self.nodes, elapsed)

    def _minimise(self, board: Board, symbol_self, symbol_other, depth: int, alpha: int, beta: int) -> int:
        self.nodes += 1
        # a win for self is not possible here, self just moved into this node
        if board.is_win(symbol_other):
            return SCORE_LOSE + depth
        if board.is_draw():
            return SCORE_DRAW

        for cell in range(len(board.cells)):
            if not board.is_valid_move(cell, symbol_other):
                continue
            board.set_cell(cell, symbol_other)
            try:
                score = self._maximise(board, symbol_self, symbol_other, depth + 1, alpha, beta)
            finally:
                board.set_cell(cell, Symbol.EMPTY)

            beta = min(beta, score)
            if beta <= alpha:
                return alpha

        return beta

    def _maximise(self, board: Board, symbol_self, symbol_other, depth: int, alpha: int, beta: int) -> int:
        self.nodes += 1
        if board.is_win(symbol_self):
            return SCORE_WIN - depth
        if board.is_draw():
            return SCORE_DRAW

        for cell in range(len(board.cells)):
            if not board.is_valid_move(cell, symbol_self):
                continue
            board.set_cell(cell, symbol_self)
            try:
                score = self._minimise(board, symbol_self, symbol_other, depth + 1, alpha, beta)
            finally:
                board.set_cell(cell, Symbol.EMPTY)

            alpha = max(alpha, score)
            if alpha >= beta:
                return beta

        return alpha


def get_best_move(board: Board, symbol_self) -> int:
    """Best cell for `symbol_self` on `board`, lowest index on ties."""
    return SearchEngine().get_best_move(board, symbol_self)
