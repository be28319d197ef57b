import logging
from concurrent.futures import Future
from typing import Optional

import chess

from gambit.config import CONFIG
from gambit.core.board import ChessBoard, GameStatus
from gambit.difficulty import DifficultyTier
from gambit.worker import EnginePool, MoveRequest, MoveResponse

logger = logging.getLogger(__name__)


class GameSession:
    """One game between a human and the computer (or two humans).

    The computer's move is computed on ``EnginePool`` from a FEN snapshot;
    the live board is only touched again when the result is applied.
    """

    def __init__(self, difficulty=None, vs_computer: bool = True,
                 computer_color: chess.Color = chess.BLACK, pool: Optional[EnginePool] = None):
        self.board = ChessBoard()
        self.vs_computer = vs_computer
        self.difficulty = DifficultyTier.parse(
            difficulty if difficulty is not None else CONFIG.search.default_difficulty)
        self.computer_color = computer_color
        self.pool = pool or EnginePool()
        self.pool.start()
        self._pending_fen: Optional[str] = None
        self._pending_future: Optional[Future] = None

    @property
    def computer_thinking(self) -> bool:
        return self._pending_fen is not None

    @property
    def computer_to_move(self) -> bool:
        return self.vs_computer and self.board.turn == self.computer_color

    def reset(self, vs_computer: bool = True, difficulty=DifficultyTier.RANDOM, fen: Optional[str] = None):
        self.board.reset()
        if fen:
            self.board.set_fen(fen)
        self.vs_computer = vs_computer
        self.difficulty = DifficultyTier.parse(difficulty)
        # A result still in flight belongs to the old game and is dropped on arrival.
        self._pending_fen = None
        self._pending_future = None

    def play_move(self, from_square: str, to_square: str, promotion: Optional[str] = None) -> bool:
        """Human move. Refused while the computer is thinking or to move."""
        if self.computer_thinking or self.computer_to_move or self.board.is_game_over():
            return False
        return self.board.attempt_move(from_square, to_square, promotion)

    def request_computer_move(self) -> Optional[Future]:
        if not self.computer_to_move or self.board.is_game_over() or self.computer_thinking:
            return None
        fen = self.board.get_fen()
        future = self.pool.submit(MoveRequest(fen, self.difficulty.depth))
        if future is None:
            return None
        self._pending_fen = fen
        self._pending_future = future
        logger.debug("Dispatched %s search for %s", self.difficulty.name.lower(), fen)
        return future

    def complete_computer_move(self, future: Future) -> Optional[MoveResponse]:
        """Apply the finished search. "No move" and stale results are no-ops."""
        response = self.pool.collect(future)
        if future is not self._pending_future:
            logger.info("Discarding search result from an abandoned request")
            return None
        requested_fen = self._pending_fen
        self._pending_fen = None
        self._pending_future = None
        if self.board.get_fen() != requested_fen:
            logger.info("Discarding search result for a position no longer on the board")
            return None
        if response is None:
            logger.info("Engine produced no move for %s", requested_fen)
            return None
        if not self.board.attempt_move(response.from_square, response.to_square, response.promotion):
            logger.error("Engine returned illegal move %s for %s", response.uci(), requested_fen)
            return None
        return response

    def computer_move(self) -> Optional[MoveResponse]:
        """Request and wait for the computer's move in one call."""
        future = self.request_computer_move()
        if future is None:
            return None
        return self.complete_computer_move(future)

    def status(self) -> GameStatus:
        return self.board.status()

    def close(self):
        self.pool.shutdown()
