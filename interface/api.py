"""FastAPI REST interface for the engine."""

import threading
from typing import Literal, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from noughts.config import CONFIG
from noughts.core.search import MAX_SEARCH_SIZE, SCORE_LOSE, SCORE_WIN, SearchEngine
from noughts.core.utils import describe_score
from noughts.main import Engine

app = FastAPI(title=CONFIG.ui.engine_name, version="1.0.0")

# Shared session; every request touching it holds the lock. Searches run on a
# copy of the board after the lock is released.
engine = Engine(CONFIG.board.size)
_board_lock = threading.Lock()

Mark = Literal["X", "O"]


class MoveRequest(BaseModel):
    cell: int = Field(..., ge=0, description="Linear cell index, row * size + column.")
    symbol: Mark


class SearchRequest(BaseModel):
    symbol: Mark
    apply: bool = False  # play the found move on the shared board


class ResetRequest(BaseModel):
    size: Optional[int] = Field(None, ge=1)


def _board_state():
    board = engine.board
    winner = board.winner()
    return {
        "size": board.size,
        "cells": [cell.value for cell in board.cells],
        "free_cells": board.free_cells(),
        "winner": winner.value if winner else None,
        "is_draw": board.is_draw(),
        "is_game_over": engine.is_game_over(),
    }


@app.get("/board")
def get_board():
    with _board_lock:
        return _board_state()


@app.post("/move")
def make_move(req: MoveRequest):
    with _board_lock:
        if engine.is_game_over():
            raise HTTPException(status_code=400, detail="Game is already over")
        if not engine.make_move(req.cell, req.symbol):
            raise HTTPException(status_code=400, detail=f"Illegal move: {req.symbol} on cell {req.cell}")
        return _board_state()


@app.post("/search")
def search_move(req: SearchRequest):
    with _board_lock:
        if engine.is_game_over():
            raise HTTPException(status_code=400, detail="Game is already over")
        if engine.board.size > MAX_SEARCH_SIZE:
            raise HTTPException(
                status_code=400,
                detail=f"Search is limited to boards of size {MAX_SEARCH_SIZE} or less",
            )
        search_board = engine.board.copy()

    result = SearchEngine().search_best_move(search_board, req.symbol)

    with _board_lock:
        if req.apply:
            if engine.board != search_board:
                raise HTTPException(status_code=409, detail="Board changed during search")
            engine.make_move(result.best_move, req.symbol)
        return {
            "best_move": result.best_move,
            "score": result.score,
            "outcome": describe_score(result.score, SCORE_WIN, SCORE_LOSE),
            "nodes": result.nodes,
            "board": _board_state(),
        }


@app.post("/undo")
def undo_move():
    with _board_lock:
        engine.undo_move()
        return _board_state()


@app.post("/reset")
def reset_board(req: ResetRequest = ResetRequest()):
    if req.size is not None and req.size > MAX_SEARCH_SIZE:
        raise HTTPException(
            status_code=400,
            detail=f"Board size must be between 1 and {MAX_SEARCH_SIZE}",
        )
    with _board_lock:
        engine.reset(req.size)
        return _board_state()
