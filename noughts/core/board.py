"""Square Noughts and Crosses board with move validation and end-state checks."""

from enum import Enum
from typing import List, Optional

from .utils import render_board


class IllegalMoveError(ValueError):
    """A cell or symbol violated the board's move contract."""


class Symbol(str, Enum):
    EMPTY = " "
    NOUGHT = "O"
    CROSS = "X"

    @property
    def opponent(self) -> "Symbol":
        """Return the other mark."""
        if self is Symbol.EMPTY:
            raise IllegalMoveError("EMPTY has no opponent")
        return Symbol.CROSS if self is Symbol.NOUGHT else Symbol.NOUGHT


class Board:
    """Grid of size x size cells addressed by linear index (row * size + column).

    A line is won by filling a whole row, column or one of the two diagonals,
    so the win length always equals the board size.
    """

    def __init__(self, size: int = 3):
        if not isinstance(size, int) or isinstance(size, bool) or size < 1:
            raise ValueError(f"Board size must be a positive integer, got {size!r}")
        self._size = size
        self.cells: List[Symbol] = [Symbol.EMPTY] * (size * size)

    @property
    def size(self) -> int:
        return self._size

    def get_size(self) -> int:
        return self._size

    def reset(self):
        """Set every cell back to EMPTY."""
        for cell in range(len(self.cells)):
            self.cells[cell] = Symbol.EMPTY

    def is_valid_move(self, cell: int, symbol) -> bool:
        """True if `cell` is on the board and `symbol` may be written there.

        Writing EMPTY is always valid in range, which lets callers probe a
        cell or unmake a move with the same check.
        """
        if not 0 <= cell < len(self.cells):
            return False
        return symbol == Symbol.EMPTY or self.cells[cell] == Symbol.EMPTY

    def set_cell(self, cell: int, symbol):
        try:
            symbol = Symbol(symbol)
        except ValueError:
            raise IllegalMoveError(f"Unknown symbol {symbol!r}") from None
        if not self.is_valid_move(cell, symbol):
            raise IllegalMoveError(f"Cannot place {symbol.value!r} on cell {cell}")
        self.cells[cell] = symbol

    def get_cell(self, cell: int) -> Symbol:
        if not 0 <= cell < len(self.cells):
            raise IllegalMoveError(f"Cell {cell} is off the board")
        return self.cells[cell]

    def free_cells(self) -> List[int]:
        """Empty cells in ascending index order."""
        return [cell for cell, value in enumerate(self.cells) if value == Symbol.EMPTY]

    def is_full(self) -> bool:
        return Symbol.EMPTY not in self.cells

    def is_win(self, symbol) -> bool:
        if symbol == Symbol.EMPTY:
            return False
        for line in range(self._size):
            if self._is_win_row(line, symbol) or self._is_win_col(line, symbol):
                return True
        return self._is_win_forward_diag(symbol) or self._is_win_backward_diag(symbol)

    def is_draw(self) -> bool:
        """Full board with no winner. A winning full board is not a draw."""
        if self.is_win(Symbol.NOUGHT) or self.is_win(Symbol.CROSS):
            return False
        return self.is_full()

    def winner(self) -> Optional[Symbol]:
        for symbol in (Symbol.NOUGHT, Symbol.CROSS):
            if self.is_win(symbol):
                return symbol
        return None

    def copy(self) -> "Board":
        clone = Board(self._size)
        clone.cells = list(self.cells)
        return clone

    def _is_win_row(self, row: int, symbol) -> bool:
        start = row * self._size
        return all(self.cells[start + i] == symbol for i in range(self._size))

    def _is_win_col(self, column: int, symbol) -> bool:
        return all(self.cells[column + self._size * i] == symbol for i in range(self._size))

    def _is_win_forward_diag(self, symbol) -> bool:
        return all(self.cells[i * self._size + i] == symbol for i in range(self._size))

    def _is_win_backward_diag(self, symbol) -> bool:
        return all(
            self.cells[(self._size - 1 - i) * self._size + i] == symbol
            for i in range(self._size)
        )

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self._size == other._size and self.cells == other.cells

    def __repr__(self):
        return f"Board(size={self._size}, cells={''.join(c.value for c in self.cells)!r})"

    def __str__(self):
        return render_board(self)
