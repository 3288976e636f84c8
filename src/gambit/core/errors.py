"""Exceptions raised by the rules engine."""

from __future__ import annotations

from gambit.core.types import Square, square_name


class GambitError(Exception):
    """Base class for all rules-engine errors."""


class InvalidMove(GambitError, ValueError):
    """A requested move failed the legality gate.

    Raised before anything is mutated; the caller may simply try another move.
    """

    def __init__(self, from_sq: Square, to_sq: Square, reason: str = "") -> None:
        self.from_sq = from_sq
        self.to_sq = to_sq
        self.reason = reason
        text = f"Illegal move {_name(from_sq)}{_name(to_sq)}"
        if reason:
            text += f": {reason}"
        super().__init__(text)


class InternalInvariantViolation(GambitError, RuntimeError):
    """A rules-engine contract was broken (a bug, not a user error)."""


def _name(sq: Square) -> str:
    if 0 <= sq < 64:
        return square_name(sq)
    return f"<{sq}>"
