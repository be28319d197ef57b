import logging
from typing import Optional

import chess

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO"):
    """Configure the root logger once; later calls only adjust the level."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT)
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))


def format_search_info(depth: int, score: Optional[int], nodes: int, elapsed_ms: float,
                       move: Optional[chess.Move]) -> str:
    nps = int(nodes * 1000 / elapsed_ms) if elapsed_ms > 0 else 0
    move_str = move.uci() if move else "-"
    score_str = f"cp {score}" if score is not None else "cp -"
    return (f"info depth {depth} score {score_str} nodes {nodes} nps {nps} "
            f"time {int(elapsed_ms)} move {move_str}")
