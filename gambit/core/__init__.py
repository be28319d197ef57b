"""Core engine components: board wrapper, evaluator and search."""

from .board import ChessBoard, GameStatus
from .evaluator import Evaluator
from .search import SearchEngine, ScoredMove, INF
