import argparse
import sys

import chess

from gambit.config import CONFIG
from gambit.core.utils import setup_logging
from gambit.difficulty import DifficultyTier
from gambit.main import GameSession


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play chess against the computer.")
    parser.add_argument("--difficulty", default=CONFIG.search.default_difficulty,
                        help="random/easy, shallow/medium or deep/hard")
    parser.add_argument("--color", choices=("white", "black"), default=CONFIG.ui.human_color,
                        help="the side you play")
    parser.add_argument("--fen", help="start from this position instead of the initial one")
    return parser


def main(argv=None, input_fn=input, out=sys.stdout):
    args = build_parser().parse_args(argv)
    setup_logging(CONFIG.log_level)

    try:
        difficulty = DifficultyTier.parse(args.difficulty)
    except ValueError as e:
        print(e, file=out)
        return 2

    human = chess.WHITE if args.color == "white" else chess.BLACK
    session = GameSession(difficulty, computer_color=not human)
    try:
        if args.fen:
            try:
                session.reset(True, difficulty, fen=args.fen)
            except ValueError as e:
                print(f"Invalid FEN: {e}", file=out)
                return 2

        print(f"Playing {difficulty.label}. Enter moves in UCI format (e.g. e2e4). "
              "Type 'quit' to exit.", file=out)
        print(session.board.board, file=out)
        while not session.board.is_game_over():
            if session.computer_to_move:
                print("Engine thinking...", file=out)
                response = session.computer_move()
                if response is None:
                    print("No move found", file=out)
                    break
                print(f"Engine plays: {response.from_square}{response.to_square}", file=out)
            else:
                try:
                    user = input_fn("Your move: ").strip()
                except EOFError:
                    return 0
                if user.lower() in ("quit", "exit"):
                    print("Goodbye", file=out)
                    return 0
                if len(user) not in (4, 5) or not session.play_move(user[:2], user[2:4], user[4:] or None):
                    print("Illegal move. Try again.", file=out)
                    continue
            print(session.board.board, file=out)
        print(f"Game over: {session.board.result()} ({session.status().value})", file=out)
        return 0
    finally:
        session.close()


if __name__ == "__main__":
    sys.exit(main())
