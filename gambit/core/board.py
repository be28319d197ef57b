"""Board wrapper over python-chess for the host side of a game."""

from enum import Enum
from typing import List, Optional

import chess


class GameStatus(str, Enum):
    ONGOING = "ongoing"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    DRAW = "draw"


class ChessBoard:
    def __init__(self, fen: str = None):
        """Initialize from FEN or the standard starting position."""
        self.board = chess.Board(fen) if fen else chess.Board()
        self.move_history = []

    def reset(self):
        """Reset to the initial position."""
        self.board.reset()
        self.move_history.clear()

    def set_fen(self, fen: str):
        """Set board state from a FEN string. Raises ValueError if invalid."""
        self.board.set_fen(fen)
        self.move_history.clear()

    def get_fen(self) -> str:
        """Return the current FEN."""
        return self.board.fen()

    @property
    def turn(self) -> chess.Color:
        return self.board.turn

    def make_move(self, move_str: str) -> bool:
        """Push a UCI move (e.g. 'e2e4'). Returns True if legal."""
        try:
            move = chess.Move.from_uci(move_str)
        except ValueError:
            return False
        if move in self.board.legal_moves:
            self.board.push(move)
            self.move_history.append(move.uci())
            return True
        return False

    def attempt_move(self, from_square: str, to_square: str, promotion: Optional[str] = None) -> bool:
        """Play ``from_square`` -> ``to_square``; pawns reaching the last rank
        promote to ``promotion`` (queen when not given)."""
        if self.is_promotion_move(from_square, to_square):
            promotion = (promotion or "q").lower()
        else:
            promotion = ""
        return self.make_move(f"{from_square}{to_square}{promotion}")

    def undo_move(self):
        """Pop the last move."""
        if self.move_history:
            self.board.pop()
            self.move_history.pop()

    def legal_moves(self, square: Optional[str] = None) -> List[chess.Move]:
        """Legal moves, optionally only those starting on ``square``."""
        if square is None:
            return list(self.board.legal_moves)
        try:
            from_mask = chess.BB_SQUARES[chess.parse_square(square)]
        except ValueError:
            return []
        return list(self.board.generate_legal_moves(from_mask=from_mask))

    def get_legal_moves(self) -> List[str]:
        """Return legal moves as UCI strings."""
        return [m.uci() for m in self.board.legal_moves]

    def valid_targets(self, square: str) -> List[str]:
        """Destination squares reachable from ``square``, without duplicates."""
        targets = []
        for move in self.legal_moves(square):
            name = chess.square_name(move.to_square)
            if name not in targets:
                targets.append(name)
        return targets

    def is_promotion_move(self, from_square: str, to_square: str) -> bool:
        piece = self.piece_at(from_square)
        if piece is None or piece.piece_type != chess.PAWN:
            return False
        return to_square.endswith("8") if piece.color == chess.WHITE else to_square.endswith("1")

    def piece_at(self, square: str) -> Optional[chess.Piece]:
        try:
            return self.board.piece_at(chess.parse_square(square))
        except ValueError:
            return None

    def in_check(self) -> bool:
        return self.board.is_check()

    def is_checkmate(self) -> bool:
        return self.board.is_checkmate()

    def is_draw(self) -> bool:
        """Stalemate, insufficient material, or a claimable/automatic draw."""
        if self.board.is_checkmate():
            return False
        return self.board.is_game_over(claim_draw=True)

    def is_game_over(self):
        """Check if the game has ended."""
        return self.board.is_game_over(claim_draw=True)

    def status(self) -> GameStatus:
        if self.board.is_checkmate():
            return GameStatus.CHECKMATE
        if self.board.is_stalemate():
            return GameStatus.STALEMATE
        if self.is_draw():
            return GameStatus.DRAW
        return GameStatus.ONGOING

    def result(self) -> str:
        return self.board.result(claim_draw=True)
