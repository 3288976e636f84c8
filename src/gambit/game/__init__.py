"""Game layer: the control-thread owner of a live game."""

from gambit.game.controller import GameController, GameEvents, HistoryEntry

__all__ = [
    "GameController",
    "GameEvents",
    "HistoryEntry",
]
