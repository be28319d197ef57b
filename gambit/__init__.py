"""Gambit: a tunable-difficulty chess opponent built on python-chess."""

__version__ = "1.0.0"
