"""Off-thread move computation.

The host hands a value-only ``MoveRequest`` (FEN + depth) to ``EnginePool``
and gets a ``MoveResponse`` or None back. The worker rebuilds its own board
from the FEN, so nothing of the live game is shared while a search runs.
"""

import logging
import random
import threading
from concurrent.futures import Executor, Future, ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

import chess

from gambit.config import CONFIG
from gambit.core.search import SearchEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveRequest:
    fen: str
    depth: int


@dataclass(frozen=True)
class MoveResponse:
    from_square: str
    to_square: str
    promotion: str = "q"

    @classmethod
    def from_move(cls, move: chess.Move) -> "MoveResponse":
        promotion = chess.piece_symbol(move.promotion) if move.promotion else "q"
        return cls(chess.square_name(move.from_square), chess.square_name(move.to_square), promotion)

    def uci(self, board: Optional[chess.Board] = None) -> str:
        """UCI string; the promotion suffix is only added for promotion moves
        when ``board`` is given to tell them apart."""
        base = f"{self.from_square}{self.to_square}"
        if board is None:
            return base
        piece = board.piece_at(chess.parse_square(self.from_square))
        last_rank = "8" if board.turn == chess.WHITE else "1"
        if piece and piece.piece_type == chess.PAWN and self.to_square.endswith(last_rank):
            return base + self.promotion
        return base

    def to_dict(self) -> dict:
        return {"from": self.from_square, "to": self.to_square, "promotion": self.promotion}


def compute_move(request: MoveRequest, seed: Optional[int] = None) -> Optional[MoveResponse]:
    """Blocking search for one request. Never raises for bad input."""
    try:
        board = chess.Board(request.fen)
    except ValueError as e:
        logger.warning("Rejected request with invalid FEN %r: %s", request.fen, e)
        return None
    if not board.is_valid():
        logger.warning("Rejected request with illegal position %s: %r",
                       request.fen, board.status())
        return None

    engine = SearchEngine(rng=random.Random(seed))
    move = engine.search_best_move(board, request.depth)
    if move is None:
        return None
    return MoveResponse.from_move(move)


class EnginePool:
    """Single-worker executor; at most one request in flight."""

    def __init__(self, use_processes: Optional[bool] = None, seed: Optional[int] = None):
        self.use_processes = CONFIG.worker.use_processes if use_processes is None else use_processes
        self.seed = CONFIG.search.random_seed if seed is None else seed
        self.pool: Optional[Executor] = None
        self._pending: Optional[Future] = None
        self._lock = threading.Lock()

    def start(self):
        if self.pool is None:
            if self.use_processes:
                self.pool = ProcessPoolExecutor(max_workers=1)
            else:
                self.pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="gambit-search")

    @property
    def busy(self) -> bool:
        with self._lock:
            return self._pending is not None and not self._pending.done()

    def submit(self, request: MoveRequest) -> Optional[Future]:
        """Dispatch ``request``. Returns None if stopped or a search is pending."""
        with self._lock:
            if self.pool is None:
                return None
            if self._pending is not None and not self._pending.done():
                logger.warning("Search already in progress; ignoring request for %s", request.fen)
                return None
            try:
                future = self.pool.submit(compute_move, request, self.seed)
            except RuntimeError:
                logger.exception("Engine pool refused the request")
                return None
            self._pending = future
            return future

    def collect(self, future: Future) -> Optional[MoveResponse]:
        """Wait for ``future``; a failed dispatch yields None."""
        try:
            return future.result()
        except Exception:
            logger.exception("Background search failed")
            return None
        finally:
            with self._lock:
                if self._pending is future:
                    self._pending = None

    def shutdown(self):
        with self._lock:
            if self.pool:
                self.pool.shutdown(wait=False, cancel_futures=True)
                self.pool = None
            self._pending = None

    def __enter__(self) -> "EnginePool":
        self.start()
        return self

    def __exit__(self, *exc):
        self.shutdown()
