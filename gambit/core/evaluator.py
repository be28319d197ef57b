"""
Evaluator Module
================

Static evaluation used at every leaf of the search tree: material plus a
small bonus for occupying the centre of the board.

The score is signed from the point of view of ``color``. White pieces count
positively and black pieces negatively; the total is negated when scoring
for Black, so ``evaluate(board, BLACK) == -evaluate(board, WHITE)``.
"""

import chess
from typing import List

from gambit.config import PIECE_VALUES, CENTER_BONUS, BONUS_SCALE


class Evaluator:
    """Material + centre-control evaluator.

    Stateless with respect to the board; the lookup tables are built once in
    the constructor so that ``evaluate`` only walks piece bitboards.
    """

    def __init__(self) -> None:
        # Indexed by chess.PAWN..chess.KING (1..6); slot 0 unused.
        self.piece_values: List[int] = [0] * 7
        for pt in chess.PIECE_TYPES:
            self.piece_values[pt] = PIECE_VALUES[chess.piece_name(pt).upper()]

        self.square_bonus: List[int] = [int(b * BONUS_SCALE) for b in CENTER_BONUS]

    def evaluate(self, board: chess.Board, color: chess.Color = chess.WHITE) -> int:
        """Return the static score of ``board`` for ``color`` in centipawns."""
        bonus = self.square_bonus
        score = 0
        for pt in chess.PIECE_TYPES:
            value = self.piece_values[pt]
            for sq in chess.scan_forward(board.pieces_mask(pt, chess.WHITE)):
                score += value + bonus[sq]
            for sq in chess.scan_forward(board.pieces_mask(pt, chess.BLACK)):
                score -= value + bonus[sq]

        return score if color == chess.WHITE else -score
