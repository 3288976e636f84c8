"""Legal move enumeration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gambit.core.errors import InternalInvariantViolation
from gambit.core.legality import LegalityChecker
from gambit.core.move import Move

if TYPE_CHECKING:
    from gambit.core.position import Position

# No reachable chess position has more than 218 legal moves.
MAX_MOVES = 256


class MoveGenerator:
    """Generates legal moves for a given :class:`Position`.

    Order is row-major by source square, then row-major by destination,
    so the same position always yields the same list.
    """

    __slots__ = ("_pos", "_checker")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._checker = LegalityChecker(position)

    def generate_moves(self) -> list[Move]:
        """All strictly legal moves for the side to move."""
        moves: list[Move] = []
        build = self._checker.build_move
        for from_sq in self._pos.board.pieces(self._pos.side_to_move):
            for to_sq in range(64):
                move = build(from_sq, to_sq)
                if move is None:
                    continue
                if len(moves) >= MAX_MOVES:
                    raise InternalInvariantViolation(
                        f"More than {MAX_MOVES} legal moves generated"
                    )
                moves.append(move)
        return moves

    def has_legal_move(self) -> bool:
        """Whether the side to move has at least one legal move."""
        build = self._checker.build_move
        for from_sq in self._pos.board.pieces(self._pos.side_to_move):
            for to_sq in range(64):
                if build(from_sq, to_sq) is not None:
                    return True
        return False

    def is_in_check(self) -> bool:
        """Is the side to move in check?"""
        return self._checker.king_in_check(self._pos.side_to_move)
