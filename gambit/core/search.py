import chess
import logging
import random
import time
from typing import NamedTuple, Optional

from gambit.core.evaluator import Evaluator
from gambit.core.utils import format_search_info

logger = logging.getLogger(__name__)

# Unbounded alpha/beta. Largest reachable |eval| is two kings plus a full set
# of promoted material, far below this.
INF = 999999


class ScoredMove(NamedTuple):
    score: int
    move: Optional[chess.Move]


class SearchEngine:
    """Minimax with alpha-beta pruning over a python-chess board.

    Nothing survives between calls: no transposition table, no history or
    killer tables. ``nodes`` is a per-call statistic.
    """

    def __init__(self, evaluator: Optional[Evaluator] = None, rng: Optional[random.Random] = None):
        self.evaluator = evaluator or Evaluator()
        self.rng = rng or random.Random()
        self.nodes = 0

    def search_best_move(self, board: chess.Board, depth: int) -> Optional[chess.Move]:
        """Return the move to play, or None when the side to move has none.

        ``depth`` 0 picks a uniformly random legal move. The board is mutated
        during the search and restored before returning. Positions that break
        the rules (kings missing or capturable, pawns on the back rank) get no
        move.
        """
        if not board.is_valid():
            logger.warning("Refusing to search illegal position %s", board.fen())
            return None
        if board.is_game_over(claim_draw=True):
            return None

        if depth <= 0:
            return self.random_move(board)

        start = time.perf_counter()
        result = self.best_scored_move(board, depth)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug(format_search_info(depth, result.score, self.nodes, elapsed_ms, result.move))

        if result.move is None:
            # Only reachable when the root has no legal moves.
            logger.error("Search at depth %d ranked no move for %s; picking at random",
                         depth, board.fen())
            return self.random_move(board)
        return result.move

    def random_move(self, board: chess.Board) -> Optional[chess.Move]:
        moves = list(board.legal_moves)
        if not moves:
            return None
        return self.rng.choice(moves)

    def best_scored_move(self, board: chess.Board, depth: int) -> ScoredMove:
        """Root of the search: maximize for the side to move."""
        self.nodes = 0
        return self._minimax(board, depth, -INF, INF, True, board.turn)

    def _minimax(self, board: chess.Board, depth: int, alpha: int, beta: int,
                 maximizing: bool, color: chess.Color) -> ScoredMove:
        self.nodes += 1
        if depth <= 0:
            return ScoredMove(self.evaluator.evaluate(board, color), None)

        # Mate, stalemate and the automatic draws all end the line here.
        moves = list(board.legal_moves)
        if (not moves or board.is_insufficient_material()
                or board.is_seventyfive_moves() or board.is_fivefold_repetition()):
            return ScoredMove(self.evaluator.evaluate(board, color), None)

        best_move = None
        if maximizing:
            best_score = -INF
            for move in moves:
                board.push(move)
                try:
                    score = self._minimax(board, depth - 1, alpha, beta, False, color).score
                finally:
                    board.pop()
                if score > best_score:
                    best_score = score
                    best_move = move
                alpha = max(alpha, score)
                if beta <= alpha:
                    break
        else:
            best_score = INF
            for move in moves:
                board.push(move)
                try:
                    score = self._minimax(board, depth - 1, alpha, beta, True, color).score
                finally:
                    board.pop()
                if score < best_score:
                    best_score = score
                    best_move = move
                beta = min(beta, score)
                if beta <= alpha:
                    break

        return ScoredMove(best_score, best_move)
