"""Turn loop for a human playing the engine through a key-driven display.

The display is anything with the four methods of `Display`; the loop never
draws or reads keys itself. The player who moves first plays NOUGHT.
"""

import logging
from typing import Optional, Protocol

from noughts.core.board import Symbol
from noughts.main import Engine

logger = logging.getLogger(__name__)

KEY_QUIT = "q"
KEY_YES = "y"
KEY_NO = "n"

# cells are chosen with a single digit key
MAX_CELLS = 10

MSG_ORDER = "Do you want to go first (Y or N)?"
MSG_MOVE = "What is your move (0 to {last})?"
MSG_WIN = "You WON! Play again (Y or N)?"
MSG_LOSE = "You LOSE! Play again (Y or N)?"
MSG_DRAW = "You DREW! Play again (Y or N)?"
MSG_REPLAY = "Play another game (Y or N)?"


class Display(Protocol):
    def get_input(self) -> str:
        """Block for one key press and return it lowercased."""

    def update_board(self, cell: int, symbol: Symbol) -> None:
        ...

    def update_message(self, message: str) -> None:
        ...

    def is_valid_size(self) -> bool:
        ...


class Game:
    def __init__(self, display: Display, engine: Optional[Engine] = None):
        self.display = display
        self.engine = engine or Engine()
        cells = self.engine.board.size ** 2
        if cells > MAX_CELLS:
            raise ValueError(
                f"Key input addresses at most {MAX_CELLS} cells, board has {cells}"
            )
        self.msg_move = MSG_MOVE.format(last=cells - 1)

    @property
    def board(self):
        return self.engine.board

    def play(self):
        """Play games until the user quits or declines a replay."""
        symbol_user = self.get_symbol()
        if symbol_user is None:
            return

        while True:
            self.engine.reset()
            for cell in range(self.board.size ** 2):
                self.display.update_board(cell, Symbol.EMPTY)
            symbol_ai = symbol_user.opponent

            self.display.update_message(self.msg_move)
            while self.turn(symbol_user, symbol_ai):
                pass

            if not self.is_replay():
                return
            symbol_user = self.get_symbol()
            if symbol_user is None:
                return

    def turn(self, symbol_user: Symbol, symbol_ai: Symbol) -> bool:
        """One move from each side in order. False once the game has ended or the user quit."""
        if symbol_user is Symbol.NOUGHT:
            return self.move_user(symbol_user, symbol_ai) and self.move_ai(symbol_user, symbol_ai)
        return self.move_ai(symbol_user, symbol_ai) and self.move_user(symbol_user, symbol_ai)

    def move_user(self, symbol_user: Symbol, symbol_ai: Symbol) -> bool:
        key = self.get_input_loop(symbol_user, is_yes_no=False, is_number=True)
        if key == KEY_QUIT:
            logger.info("Game abandoned by user")
            self.display.update_message(MSG_REPLAY)
            return False

        # validated by the input loop
        cell = int(key)
        self.engine.make_move(cell, symbol_user)
        self.display.update_board(cell, symbol_user)
        return not self.is_end_state(symbol_user, symbol_ai)

    def move_ai(self, symbol_user: Symbol, symbol_ai: Symbol) -> bool:
        cell, score = self.engine.get_best_move(symbol_ai)
        logger.debug("AI plays %d (score %d)", cell, score)
        self.engine.make_move(cell, symbol_ai)
        self.display.update_board(cell, symbol_ai)
        return not self.is_end_state(symbol_user, symbol_ai)

    def is_end_state(self, symbol_user: Symbol, symbol_ai: Symbol) -> bool:
        if self.board.is_win(symbol_user):
            logger.info("Game over: user won")
            self.display.update_message(MSG_WIN)
            return True
        if self.board.is_win(symbol_ai):
            logger.info("Game over: AI won")
            self.display.update_message(MSG_LOSE)
            return True
        if self.board.is_draw():
            logger.info("Game over: draw")
            self.display.update_message(MSG_DRAW)
            return True
        return False

    def get_symbol(self) -> Optional[Symbol]:
        """Ask for the move order. None means quit."""
        self.display.update_message(MSG_ORDER)
        key = self.get_input_loop(Symbol.EMPTY, is_yes_no=True, is_number=False)
        if key == KEY_QUIT:
            return None
        if key == KEY_YES:
            return Symbol.NOUGHT
        return Symbol.CROSS

    def is_replay(self) -> bool:
        # no and quit both end the session
        return self.get_input_loop(Symbol.EMPTY, is_yes_no=True, is_number=False) == KEY_YES

    def get_input_loop(self, symbol: Symbol, is_yes_no: bool, is_number: bool) -> str:
        """Poll keys until one is acceptable for the current prompt."""
        while True:
            # leave the interface if the terminal becomes too small
            if not self.display.is_valid_size():
                return KEY_QUIT
            key = self.display.get_input()
            if key == KEY_QUIT:
                return key
            if is_yes_no and key in (KEY_YES, KEY_NO):
                return key
            if is_number and len(key) == 1 and "0" <= key <= "9" and self.board.is_valid_move(int(key), symbol):
                return key
