"""Entry points: FastAPI app and terminal game."""
