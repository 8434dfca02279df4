"""Curses terminal front end: play the engine from the keyboard."""

import curses
import logging

from noughts.config import CONFIG, configure_logging
from noughts.core.board import Symbol
from noughts.game import MAX_CELLS, Game
from noughts.main import Engine

logger = logging.getLogger(__name__)

INNER_WIDTH = 65
HEADER = [
    "Minimax Algorithm with Alpha-Beta Pruning (Noughts and Crosses)",
    "",
    "Place your symbols on the left board using the corresponding",
    "cell numbers on the right board",
    "",
    "Press Q in a game to end it early and outside of a game to quit",
    "Keep the terminal size larger than {width}x{height}",
]
# gap between the play board and the key board
BOARD_GAP = 9
# distance between neighbouring cells on screen
SPACE_ROW = 2
SPACE_COLUMN = 4
MSG_ERROR_SIZE = "Terminal size must be at least {width}x{height}"


class Layout:
    """Text of the whole interface plus where the cells and message line sit."""

    def __init__(self, size: int):
        self.size = size
        self.width = INNER_WIDTH + 3  # two borders and a spare column
        self.height = len(HEADER) + 2 + (2 * size + 1) + 3

        board_width = SPACE_COLUMN * size + 1
        left_pad = (INNER_WIDTH - (2 * board_width + BOARD_GAP)) // 2
        self.x_board = 1 + left_pad + 2
        self.y_board = len(HEADER) + 3
        self.x_msg = 2
        self.y_msg = self.height - 2

        rule = "-" * board_width
        lines = [self._border()]
        for text in HEADER:
            lines.append(self._framed(" " + text.format(width=self.width, height=self.height)))
        lines.append(self._border())
        for row in range(2 * size + 1):
            if row % 2 == 0:
                left, right = rule, rule
            else:
                r = row // 2
                left = "|" + "|".join("   " for _ in range(size)) + "|"
                right = "|" + "|".join(f"{r * size + c:^3}" for c in range(size)) + "|"
            lines.append(self._framed(" " * left_pad + left + " " * BOARD_GAP + right))
        lines.append(self._border())
        lines.append(self._framed(""))
        lines.append(self._border())
        self.text = "\n".join(lines)

    def cell_position(self, cell: int):
        """Screen (y, x) of a cell on the play board."""
        return (
            self.y_board + SPACE_ROW * (cell // self.size),
            self.x_board + SPACE_COLUMN * (cell % self.size),
        )

    @staticmethod
    def _border():
        return "#" * (INNER_WIDTH + 2)

    @staticmethod
    def _framed(content: str):
        return "#" + content.ljust(INNER_WIDTH) + "#"


class CursesDisplay:
    def __init__(self, stdscr, layout: Layout):
        self.stdscr = stdscr
        self.layout = layout

    def start(self) -> bool:
        """Draw the blank interface. False if the terminal is too small for it."""
        if not self.is_valid_size():
            return False
        try:
            curses.curs_set(0)
        except curses.error:
            logger.debug("Terminal cannot hide the cursor")
        curses.noecho()
        self.stdscr.clear()
        self.stdscr.addstr(0, 0, self.layout.text)
        self.stdscr.refresh()
        return True

    def get_input(self) -> str:
        key = self.stdscr.getch()
        if key < 0 or key > 255:
            # resize events and special keys are not commands
            return ""
        return chr(key).lower()

    def update_board(self, cell: int, symbol):
        y, x = self.layout.cell_position(cell)
        self.stdscr.addch(y, x, Symbol(symbol).value)
        self.stdscr.refresh()

    def update_message(self, message: str):
        blank = " " * (INNER_WIDTH - 2)
        self.stdscr.addstr(self.layout.y_msg, self.layout.x_msg, blank)
        self.stdscr.addstr(self.layout.y_msg, self.layout.x_msg, message)
        self.stdscr.refresh()

    def is_valid_size(self) -> bool:
        lines, cols = self.stdscr.getmaxyx()
        return cols >= self.layout.width and lines >= self.layout.height


def run(stdscr, engine: Engine, layout: Layout) -> bool:
    """Play inside curses. Returns False if the terminal was or became too small."""
    display = CursesDisplay(stdscr, layout)
    if not display.start():
        return False
    Game(display, engine).play()
    return display.is_valid_size()


def main():
    configure_logging(CONFIG)
    if not CONFIG.ui.log_file:
        # stderr output would scribble over the curses screen
        logging.disable(logging.CRITICAL)

    engine = Engine(CONFIG.board.size)
    if engine.board.size ** 2 > MAX_CELLS:
        raise SystemExit(f"The terminal interface supports boards of at most {MAX_CELLS} cells")
    layout = Layout(engine.board.size)
    ok = curses.wrapper(run, engine, layout)
    if not ok:
        print(MSG_ERROR_SIZE.format(width=layout.width, height=layout.height))


if __name__ == "__main__":
    main()
