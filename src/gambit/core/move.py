"""Move value object and move classification."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from gambit.core.enums import PieceKind
from gambit.core.piece import Piece
from gambit.core.types import Square, col_of, make_square, row_of, square_name

if TYPE_CHECKING:
    from gambit.core.board import Board

_KING_HOME_COL = 4


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    For en passant, ``captured`` is the pawn removed from its own square,
    which is not ``to_sq``.
    """

    from_sq: Square
    to_sq: Square
    captured: Piece | None = None
    is_promotion: bool = False
    is_en_passant: bool = False
    is_castling: bool = False

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.is_promotion:
            base += "q"
        return base

    @property
    def en_passant_capture_square(self) -> Square:
        """Square of the pawn taken en passant (same column, mover's row)."""
        return make_square(row_of(self.from_sq), col_of(self.to_sq))


def classify_move(board: Board, from_sq: Square, to_sq: Square) -> Move:
    """Build a :class:`Move` for an already-validated ``from_sq → to_sq``.

    The board must still show the position *before* the move.
    """
    piece = board[from_sq]
    if piece is None:
        raise ValueError(f"No piece on {square_name(from_sq)}")

    captured = board[to_sq]
    is_promotion = False
    is_en_passant = False
    is_castling = False

    if piece.kind == PieceKind.PAWN:
        if row_of(to_sq) == piece.color.opposite.home_row:
            is_promotion = True
        if captured is None and col_of(from_sq) != col_of(to_sq):
            is_en_passant = True
            # One row behind the destination, seen from the mover.
            captured = board[to_sq - 8 * piece.color.forward]
    elif piece.kind == PieceKind.KING:
        is_castling = (
            from_sq == make_square(piece.color.home_row, _KING_HOME_COL)
            and abs(col_of(to_sq) - col_of(from_sq)) == 2
        )

    return Move(
        from_sq,
        to_sq,
        captured=captured,
        is_promotion=is_promotion,
        is_en_passant=is_en_passant,
        is_castling=is_castling,
    )
