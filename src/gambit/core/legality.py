"""Attack detection and the per-move legality gate."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gambit.core.enums import CastleFlag, Color, PieceKind
from gambit.core.move import Move, classify_move
from gambit.core.types import Square, col_of, is_valid_square, make_square, row_of

if TYPE_CHECKING:
    from gambit.core.position import Position

_KING_HOME_COL = 4


def _step(delta: int) -> int:
    return (delta > 0) - (delta < 0)


class LegalityChecker:
    """Answers movement, attack and legality questions about a :class:`Position`.

    Pawn movement and pawn attacks are separate predicates: a pawn threatens
    its two forward diagonals and never its push square.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Geometry -----------------------------------------------------------

    def path_clear(self, from_sq: Square, to_sq: Square) -> bool:
        """Every square strictly between *from_sq* and *to_sq* is empty.

        The squares must share a row, column or diagonal.
        """
        d_row = row_of(to_sq) - row_of(from_sq)
        d_col = col_of(to_sq) - col_of(from_sq)
        if not (d_row == 0 or d_col == 0 or abs(d_row) == abs(d_col)):
            raise ValueError(f"Squares {from_sq} and {to_sq} are not aligned")

        step = _step(d_row) * 8 + _step(d_col)
        sq = from_sq + step
        board = self._board
        while sq != to_sq:
            if board[sq] is not None:
                return False
            sq += step
        return True

    def piece_attacks(self, from_sq: Square, to_sq: Square) -> bool:
        """Whether the piece on *from_sq* threatens *to_sq* (turn is ignored)."""
        piece = self._board[from_sq]
        if piece is None or from_sq == to_sq:
            return False

        d_row = row_of(to_sq) - row_of(from_sq)
        d_col = col_of(to_sq) - col_of(from_sq)
        a_row = abs(d_row)
        a_col = abs(d_col)
        kind = piece.kind

        if kind == PieceKind.PAWN:
            return d_row == piece.color.forward and a_col == 1
        if kind == PieceKind.KNIGHT:
            return (a_row, a_col) in ((1, 2), (2, 1))
        if kind == PieceKind.KING:
            return max(a_row, a_col) == 1
        if kind == PieceKind.BISHOP:
            return a_row == a_col and self.path_clear(from_sq, to_sq)
        if kind == PieceKind.ROOK:
            return (d_row == 0 or d_col == 0) and self.path_clear(from_sq, to_sq)
        # Queen
        return (
            d_row == 0 or d_col == 0 or a_row == a_col
        ) and self.path_clear(from_sq, to_sq)

    def pawn_can_move(self, from_sq: Square, to_sq: Square) -> bool:
        """Push, double push, diagonal capture or en-passant capture."""
        board = self._board
        pawn = board[from_sq]
        if pawn is None or pawn.kind != PieceKind.PAWN:
            return False

        forward = pawn.color.forward
        d_row = row_of(to_sq) - row_of(from_sq)
        d_col = col_of(to_sq) - col_of(from_sq)
        target = board[to_sq]

        if d_col == 0:
            if target is not None:
                return False
            if d_row == forward:
                return True
            start_row = 1 if pawn.color == Color.WHITE else 6
            return (
                d_row == 2 * forward
                and row_of(from_sq) == start_row
                and board[from_sq + 8 * forward] is None
            )

        if d_row != forward or abs(d_col) != 1:
            return False
        if target is not None:
            return target.color != pawn.color
        return self._is_en_passant_target(from_sq, to_sq)

    def _is_en_passant_target(self, from_sq: Square, to_sq: Square) -> bool:
        pos = self._pos
        pawn = self._board[from_sq]
        if pawn is None or pos.en_passant_file is None:
            return False
        if col_of(to_sq) != pos.en_passant_file:
            return False
        # Only the pawn's fifth row sees the double-pushed pawn beside it.
        fifth_row = 4 if pawn.color == Color.WHITE else 3
        if row_of(from_sq) != fifth_row:
            return False
        victim = self._board[make_square(fifth_row, col_of(to_sq))]
        return (
            victim is not None
            and victim.kind == PieceKind.PAWN
            and victim.color != pawn.color
        )

    # -- Attack detection ---------------------------------------------------

    def square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        return any(
            self.piece_attacks(from_sq, sq) for from_sq in self._board.pieces(by_color)
        )

    def king_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        king_sq = self._board.king_square(color)
        return self.square_attacked(king_sq, color.opposite)

    def can_castle(self, color: Color, kingside: bool) -> bool:
        """All castling conditions for *color* on the given wing."""
        if self._pos.castle_used & CastleFlag.for_side(color, kingside):
            return False

        board = self._board
        row = color.home_row
        king_sq = make_square(row, _KING_HOME_COL)
        rook_sq = make_square(row, 7 if kingside else 0)
        king = board[king_sq]
        rook = board[rook_sq]
        if king is None or king.color != color or king.kind != PieceKind.KING:
            return False
        if rook is None or rook.color != color or rook.kind != PieceKind.ROOK:
            return False

        if not self.path_clear(king_sq, rook_sq):
            return False

        opponent = color.opposite
        step = 1 if kingside else -1
        # Start, pass-through and landing squares.
        for sq in (king_sq, king_sq + step, king_sq + 2 * step):
            if self.square_attacked(sq, opponent):
                return False
        return True

    # -- Legality gate ------------------------------------------------------

    def is_legal_move(self, from_sq: Square, to_sq: Square) -> bool:
        return self.build_move(from_sq, to_sq) is not None

    def build_move(self, from_sq: Square, to_sq: Square) -> Move | None:
        """Return the classified move if ``from_sq → to_sq`` is legal, else None.

        Cheap filters run first; the check-safety test on a scratch copy
        runs last.
        """
        if not (is_valid_square(from_sq) and is_valid_square(to_sq)):
            return None
        board = self._board
        piece = board[from_sq]
        if piece is None or piece.color != self._pos.side_to_move:
            return None
        target = board[to_sq]
        if target is not None and target.color == piece.color:
            return None

        if not self._shape_ok(from_sq, to_sq):
            return None

        move = classify_move(board, from_sq, to_sq)
        scratch = self._pos.copy()
        scratch.make_move(move)
        if LegalityChecker(scratch).king_in_check(piece.color):
            return None
        return move

    def _shape_ok(self, from_sq: Square, to_sq: Square) -> bool:
        piece = self._board[from_sq]
        assert piece is not None
        if piece.kind == PieceKind.PAWN:
            return self.pawn_can_move(from_sq, to_sq)
        if piece.kind == PieceKind.KING:
            d_col = col_of(to_sq) - col_of(from_sq)
            if row_of(from_sq) == row_of(to_sq) and abs(d_col) == 2:
                if from_sq != make_square(piece.color.home_row, _KING_HOME_COL):
                    return False
                return self.can_castle(piece.color, kingside=d_col > 0)
        return self.piece_attacks(from_sq, to_sq)
