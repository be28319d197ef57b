"""FastAPI REST interface for the engine.

Handlers are plain ``def`` so FastAPI runs them in its thread pool; a search
never blocks the event loop.
"""

import logging
import threading
from typing import Optional

import chess
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, field_validator

from gambit.config import CONFIG
from gambit.core.board import ChessBoard
from gambit.core.utils import setup_logging
from gambit.difficulty import TIER_DEPTHS, DifficultyTier
from gambit.worker import MoveRequest, compute_move

setup_logging(CONFIG.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title=CONFIG.ui.engine_name, version="1.0.0")

# Shared game for the stateful endpoints.
board = ChessBoard()
_board_lock = threading.Lock()
_search_pending = threading.Event()


class BestMoveRequest(BaseModel):
    fen: str
    depth: int = 0

    @field_validator("depth")
    @classmethod
    def depth_is_a_tier(cls, v: int) -> int:
        if v not in TIER_DEPTHS:
            raise ValueError(f"depth must be one of {sorted(TIER_DEPTHS)}")
        return v


class FenRequest(BaseModel):
    fen: str


class MoveRequestModel(BaseModel):
    move: str  # UCI format e.g. "e2e4"


class SearchRequest(BaseModel):
    difficulty: Optional[str] = None

    @field_validator("difficulty")
    @classmethod
    def known_difficulty(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            DifficultyTier.parse(v)
        return v


def _validate_fen(fen: str) -> str:
    try:
        parsed = chess.Board(fen)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid FEN: {e}")
    if not parsed.is_valid():
        raise HTTPException(status_code=400, detail=f"Illegal position: {fen}")
    return parsed.fen()


def _run_search(fen: str, depth: int) -> dict:
    logger.info("Searching %s at depth %d", fen, depth)
    response = compute_move(MoveRequest(fen, depth), CONFIG.search.random_seed)
    return {
        "best_move": response.to_dict() if response else None,
        "uci": response.uci(chess.Board(fen)) if response else None,
        "depth": depth,
        "fen": fen,
    }


@app.get("/difficulties")
def list_difficulties():
    return [
        {"name": tier.name.lower(), "label": tier.label, "depth": tier.depth}
        for tier in DifficultyTier
    ]


@app.post("/bestmove")
def best_move(req: BestMoveRequest):
    """Stateless: compute a move for ``fen`` at ``depth``."""
    fen = _validate_fen(req.fen)
    return _run_search(fen, req.depth)


@app.get("/board")
def get_board():
    with _board_lock:
        return {
            "fen": board.get_fen(),
            "turn": "white" if board.turn == chess.WHITE else "black",
            "legal_moves": board.get_legal_moves(),
            "in_check": board.in_check(),
            "status": board.status().value,
            "is_game_over": board.is_game_over(),
            "result": board.result() if board.is_game_over() else None,
            "search_pending": _search_pending.is_set(),
        }


@app.post("/position")
def set_position(req: FenRequest):
    with _board_lock:
        if _search_pending.is_set():
            raise HTTPException(status_code=409, detail="Search in progress")
        board.set_fen(_validate_fen(req.fen))
        return {"fen": board.get_fen()}


@app.post("/move")
def make_move(req: MoveRequestModel):
    with _board_lock:
        if _search_pending.is_set():
            raise HTTPException(status_code=409, detail="Search in progress")
        try:
            chess.Move.from_uci(req.move)
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Invalid UCI move: {req.move}")
        if not board.make_move(req.move):
            raise HTTPException(status_code=400, detail=f"Illegal move: {req.move}")
        return {"fen": board.get_fen(), "move": req.move, "status": board.status().value}


@app.post("/search")
def search_move(req: SearchRequest = SearchRequest()):
    """Search the shared board. Only one search may be outstanding."""
    difficulty = DifficultyTier.parse(req.difficulty or CONFIG.search.default_difficulty)
    with _board_lock:
        if _search_pending.is_set():
            raise HTTPException(status_code=409, detail="Search in progress")
        _search_pending.set()
        fen = board.get_fen()

    try:
        result = _run_search(fen, difficulty.depth)
    finally:
        _search_pending.clear()
    result["difficulty"] = difficulty.name.lower()
    return result


@app.post("/reset")
def reset_board():
    with _board_lock:
        if _search_pending.is_set():
            raise HTTPException(status_code=409, detail="Search in progress")
        board.reset()
        return {"fen": board.get_fen()}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=CONFIG.ui.api_port)
