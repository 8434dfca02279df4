"""
Integration test suite for the Noughts engine.

Tests components working together end-to-end:
- Full game simulations (engine vs engine, engine vs every human line)
- Game loop driven by a scripted display
- Curses layout and display adapter
- FastAPI REST API integration
"""

import pytest
from unittest.mock import MagicMock

from noughts.core.board import Board, Symbol
from noughts.core.search import SCORE_DRAW, get_best_move
from noughts.game import (
    KEY_QUIT,
    MSG_DRAW,
    MSG_LOSE,
    MSG_ORDER,
    MSG_REPLAY,
    MSG_WIN,
    Game,
)
from noughts.main import Engine

X = Symbol.CROSS
O = Symbol.NOUGHT
E = Symbol.EMPTY


# ════════════════════════════════════════════════════════════════════════════
#  ENGINE VS ENGINE — FULL GAME SIMULATIONS
# ════════════════════════════════════════════════════════════════════════════


class TestFullGame:
    """Perfect play on both sides must always end in a draw."""

    @pytest.mark.parametrize("first", [O, X])
    def test_engine_vs_engine_draws(self, first):
        engine = Engine(3)
        to_move = first
        moves = 0
        while not engine.is_game_over():
            cell, _score = engine.get_best_move(to_move)
            assert engine.make_move(cell, to_move), f"Illegal move {cell} at move {moves}"
            to_move = to_move.opponent
            moves += 1
        assert engine.winner() is None
        assert engine.board.is_draw()
        assert moves == 9

    def test_engine_vs_engine_from_midgame(self):
        """Engine picks up a position where X already holds the centre."""
        engine = Engine(3)
        engine.make_move(4, X)
        engine.make_move(1, O)  # edge reply loses for O
        to_move = X
        while not engine.is_game_over():
            cell, _ = engine.get_best_move(to_move)
            engine.make_move(cell, to_move)
            to_move = to_move.opponent
        assert engine.winner() is X


def _assert_ai_never_loses(board: Board, ai: Symbol, to_move: Symbol):
    human = ai.opponent
    assert not board.is_win(human), f"AI lost on {board!r}"
    if board.is_win(ai) or board.is_draw():
        return

    if to_move is ai:
        cell = get_best_move(board, ai)
        board.set_cell(cell, ai)
        _assert_ai_never_loses(board, ai, human)
        board.set_cell(cell, E)
    else:
        for cell in board.free_cells():
            board.set_cell(cell, human)
            _assert_ai_never_loses(board, ai, ai)
            board.set_cell(cell, E)


class TestPerfectPlay:
    """Walk every line a human can play and check the AI never loses one."""

    def test_ai_moving_first_never_loses(self):
        board = Board(3)
        _assert_ai_never_loses(board, O, O)
        assert board == Board(3)

    def test_ai_moving_second_never_loses(self):
        board = Board(3)
        _assert_ai_never_loses(board, X, O)
        assert board == Board(3)

    def test_2x2_ai_moving_first_always_wins(self):
        board = Board(2)
        cell = get_best_move(board, O)
        board.set_cell(cell, O)
        for reply in board.free_cells():
            board.set_cell(reply, X)
            board.set_cell(get_best_move(board, O), O)
            assert board.is_win(O)
            board.reset()
            board.set_cell(cell, O)


# ════════════════════════════════════════════════════════════════════════════
#  GAME LOOP
# ════════════════════════════════════════════════════════════════════════════


class ScriptedDisplay:
    """Display that replays a fixed list of key presses and records output."""

    def __init__(self, keys, valid_size=True):
        self.keys = list(keys)
        self.valid_size = valid_size
        self.messages = []
        self.cells = {}

    def get_input(self):
        return self.keys.pop(0)

    def update_board(self, cell, symbol):
        self.cells[cell] = Symbol(symbol)

    def update_message(self, message):
        self.messages.append(message)

    def is_valid_size(self):
        return self.valid_size


class TestGameLoop:
    def test_quit_at_order_prompt(self):
        display = ScriptedDisplay(["q"])
        Game(display, Engine(3)).play()
        assert display.messages == [MSG_ORDER]
        assert display.cells == {}

    def test_terminal_too_small_quits(self):
        display = ScriptedDisplay([], valid_size=False)
        Game(display, Engine(3)).play()
        assert display.messages == [MSG_ORDER]

    def test_user_second_ai_opens(self):
        engine = Engine(3)
        display = ScriptedDisplay(["n", "q", "n"])
        game = Game(display, engine)
        game.play()
        assert display.messages == [MSG_ORDER, "What is your move (0 to 8)?", MSG_REPLAY]
        # user went second so the AI played NOUGHT on the empty board
        assert engine.board.get_cell(0) is O
        assert display.cells[0] is O
        assert engine.board.free_cells() == list(range(1, 9))
        assert display.keys == []

    def test_invalid_keys_are_ignored(self):
        engine = Engine(3)
        display = ScriptedDisplay(["y", "z", "9", "", "y", "4", "4", "q", "n"])
        Game(display, engine).play()
        assert engine.board.get_cell(4) is O
        # the AI answers the centre with the first drawing corner
        assert engine.board.get_cell(0) is X
        assert len(engine.move_history) == 2
        assert display.messages[-1] == MSG_REPLAY
        assert display.keys == []

    def test_replay_asks_order_again(self):
        display = ScriptedDisplay(["y", "q", "y", "q"])
        Game(display, Engine(3)).play()
        assert display.messages == [MSG_ORDER, "What is your move (0 to 8)?", MSG_REPLAY, MSG_ORDER]

    def test_replay_resets_board(self):
        engine = Engine(3)
        display = ScriptedDisplay(["n", "q", "y", "y", "q", "n"])
        Game(display, engine).play()
        # second game: user first, quit before any move
        assert engine.board == Board(3)
        assert all(display.cells[cell] is E for cell in range(9))

    @pytest.mark.parametrize("order", ["y", "n"])
    def test_full_game_user_never_wins(self, order):
        # cycling digits makes the user take the next free cell in key order
        keys = [order] + list("012345678") * 9 + ["n"]
        engine = Engine(3)
        display = ScriptedDisplay(keys)
        Game(display, engine).play()
        assert MSG_WIN not in display.messages
        assert display.messages[-1] in (MSG_LOSE, MSG_DRAW)
        assert engine.is_game_over()
        assert display.keys == []

    def test_quit_returns_key_quit(self):
        game = Game(ScriptedDisplay(["x", "q"]), Engine(3))
        assert game.get_input_loop(X, is_yes_no=True, is_number=True) == KEY_QUIT

    def test_move_prompt_tracks_board_size(self):
        game = Game(ScriptedDisplay([]), Engine(2))
        assert game.msg_move == "What is your move (0 to 3)?"

    def test_board_too_large_for_key_input(self):
        with pytest.raises(ValueError):
            Game(ScriptedDisplay([]), Engine(4))


# ════════════════════════════════════════════════════════════════════════════
#  CURSES INTERFACE
# ════════════════════════════════════════════════════════════════════════════


class TestCursesInterface:
    def test_layout_for_3x3(self):
        from interface.cli import Layout

        layout = Layout(3)
        lines = layout.text.split("\n")
        assert (layout.width, layout.height) == (68, 19)
        assert len(lines) == 19
        assert all(len(line) == 67 for line in lines)
        assert "68x19" in layout.text
        assert layout.cell_position(0) == (10, 18)
        assert layout.cell_position(8) == (14, 26)
        assert layout.y_msg == 17
        # key board cell numbers sit on the same rows as the play cells
        assert lines[14].find(" 8 ") > layout.x_board

    def test_play_cells_are_blank_in_layout(self):
        from interface.cli import Layout

        layout = Layout(3)
        lines = layout.text.split("\n")
        for cell in range(9):
            y, x = layout.cell_position(cell)
            assert lines[y][x] == " "
            assert lines[y][x - 2] == "|"

    def test_display_adapter(self):
        from interface.cli import CursesDisplay, Layout

        stdscr = MagicMock()
        stdscr.getmaxyx.return_value = (24, 80)
        stdscr.getch.side_effect = [ord("Q"), -1, 410]
        display = CursesDisplay(stdscr, Layout(3))

        assert display.is_valid_size()
        assert display.get_input() == "q"
        assert display.get_input() == ""
        assert display.get_input() == ""

        display.update_board(4, X)
        stdscr.addch.assert_called_with(12, 22, "X")
        display.update_message("hello")
        stdscr.addstr.assert_called_with(17, 2, "hello")

    def test_display_too_small(self):
        from interface.cli import CursesDisplay, Layout

        stdscr = MagicMock()
        stdscr.getmaxyx.return_value = (18, 80)
        display = CursesDisplay(stdscr, Layout(3))
        assert not display.is_valid_size()
        assert display.start() is False
        stdscr.addstr.assert_not_called()


# ════════════════════════════════════════════════════════════════════════════
#  FASTAPI REST API
# ════════════════════════════════════════════════════════════════════════════


class TestAPI:
    """FastAPI REST endpoint tests using TestClient."""

    @pytest.fixture(autouse=True)
    def setup_client(self):
        from fastapi.testclient import TestClient
        from interface.api import app

        self.client = TestClient(app)
        self.client.post("/reset", json={"size": 3})

    def test_get_board(self):
        resp = self.client.get("/board")
        assert resp.status_code == 200
        data = resp.json()
        assert data["size"] == 3
        assert data["cells"] == [" "] * 9
        assert data["free_cells"] == list(range(9))
        assert data["winner"] is None
        assert data["is_game_over"] is False

    def test_make_move(self):
        resp = self.client.post("/move", json={"cell": 4, "symbol": "X"})
        assert resp.status_code == 200
        assert resp.json()["cells"][4] == "X"

    def test_occupied_cell_rejected(self):
        self.client.post("/move", json={"cell": 4, "symbol": "X"})
        resp = self.client.post("/move", json={"cell": 4, "symbol": "O"})
        assert resp.status_code == 400

    def test_off_board_cell_rejected(self):
        resp = self.client.post("/move", json={"cell": 9, "symbol": "X"})
        assert resp.status_code == 400

    def test_bad_symbol_rejected(self):
        resp = self.client.post("/move", json={"cell": 0, "symbol": "Z"})
        assert resp.status_code == 422

    def test_search_does_not_touch_board(self):
        for cell, symbol in [(0, "X"), (1, "O"), (4, "X")]:
            self.client.post("/move", json={"cell": cell, "symbol": symbol})
        resp = self.client.post("/search", json={"symbol": "X"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["best_move"] == 8
        assert data["outcome"] == "win in 2"
        assert data["nodes"] > 0
        assert data["board"]["cells"][8] == " "

    def test_search_and_apply(self):
        for cell, symbol in [(0, "X"), (1, "O"), (4, "X")]:
            self.client.post("/move", json={"cell": cell, "symbol": symbol})
        resp = self.client.post("/search", json={"symbol": "X", "apply": True})
        board = resp.json()["board"]
        assert board["cells"][8] == "X"
        assert board["winner"] == "X"
        assert board["is_game_over"] is True

    def test_game_over_rejects_moves(self):
        for cell in (0, 1, 2):
            self.client.post("/move", json={"cell": cell, "symbol": "X"})
        assert self.client.post("/move", json={"cell": 5, "symbol": "O"}).status_code == 400
        assert self.client.post("/search", json={"symbol": "O"}).status_code == 400

    def test_undo(self):
        self.client.post("/move", json={"cell": 4, "symbol": "X"})
        resp = self.client.post("/undo")
        assert resp.json()["cells"][4] == " "

    def test_reset_resizes(self):
        resp = self.client.post("/reset", json={"size": 2})
        assert resp.json()["size"] == 2
        assert len(resp.json()["cells"]) == 4
        resp = self.client.post("/search", json={"symbol": "O"})
        assert resp.json()["score"] > SCORE_DRAW

    def test_oversized_reset_rejected(self):
        resp = self.client.post("/reset", json={"size": 4})
        assert resp.status_code == 400
        assert self.client.get("/board").json()["size"] == 3

    def test_search_refuses_oversized_board(self):
        import interface.api as api

        with api._board_lock:
            api.engine.reset(4)
        resp = self.client.post("/search", json={"symbol": "X"})
        assert resp.status_code == 400
        self.client.post("/reset", json={"size": 3})

    def test_search_runs_outside_board_lock(self, monkeypatch):
        import interface.api as api

        seen = []

        class RecordingSearch(api.SearchEngine):
            def search_best_move(self, board, symbol_self):
                seen.append(api._board_lock.locked())
                return super().search_best_move(board, symbol_self)

        monkeypatch.setattr(api, "SearchEngine", RecordingSearch)
        self.client.post("/move", json={"cell": 4, "symbol": "O"})
        resp = self.client.post("/search", json={"symbol": "X", "apply": True})
        assert resp.status_code == 200
        assert seen == [False]
        assert resp.json()["board"]["cells"][0] == "X"
