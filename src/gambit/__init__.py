"""Gambit — chess rules engine with a background minimax search."""

__version__ = "0.1.0"
