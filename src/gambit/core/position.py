"""Position — complete game state (board + metadata) with make/unmake."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.board import Board
from gambit.core.enums import CastleFlag, Color, PieceKind
from gambit.core.errors import InternalInvariantViolation
from gambit.core.move import Move
from gambit.core.piece import Piece
from gambit.core.types import Square, col_of, make_square, row_of, square_name


@dataclass(frozen=True, slots=True)
class UndoRecord:
    """State captured right before :meth:`Position.make_move`.

    ``en_passant_square`` is set only for en passant, where the removed
    pawn does not stand on the destination square.
    """

    castle_used: CastleFlag
    en_passant_file: int | None
    captured: Piece | None
    en_passant_square: Square | None = None


# Rook home square -> the castle it forfeits when it moves or is captured.
_ROOK_HOMES: dict[Square, CastleFlag] = {
    make_square(0, 0): CastleFlag.WHITE_QUEENSIDE,
    make_square(0, 7): CastleFlag.WHITE_KINGSIDE,
    make_square(7, 0): CastleFlag.BLACK_QUEENSIDE,
    make_square(7, 7): CastleFlag.BLACK_KINGSIDE,
}


def castle_rook_squares(king_from: Square, king_to: Square) -> tuple[Square, Square]:
    """Rook ``(from, to)`` for a castle moving the king ``king_from → king_to``."""
    row = row_of(king_from)
    if col_of(king_to) > col_of(king_from):
        return make_square(row, 7), make_square(row, 5)
    return make_square(row, 0), make_square(row, 3)


class Position:
    """Full chess position: board + side to move + castle flags + en passant.

    :meth:`make_move` returns an :class:`UndoRecord` which must be handed
    back to :meth:`unmake_move` in strict LIFO order.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "castle_used",
        "en_passant_file",
        "_pending",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castle_used: CastleFlag = CastleFlag.NONE,
        en_passant_file: int | None = None,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castle_used = castle_used
        self.en_passant_file = en_passant_file
        # Records handed out by make_move and not yet consumed.
        self._pending: list[UndoRecord] = []

    # ── Core move operations ─────────────────────────────────────────────

    def make_move(self, move: Move) -> UndoRecord:
        """Apply *move* and return the record that undoes it.

        The move must already have passed the legality gate.
        """
        board = self.board
        piece = board[move.from_sq]
        if piece is None:
            raise InternalInvariantViolation(
                f"make_move: no piece on {square_name(move.from_sq)}"
            )

        capture_sq = move.to_sq
        if move.is_en_passant:
            capture_sq = move.en_passant_capture_square
        captured = board[capture_sq]

        record = UndoRecord(
            castle_used=self.castle_used,
            en_passant_file=self.en_passant_file,
            captured=captured,
            en_passant_square=capture_sq if move.is_en_passant else None,
        )

        board[move.from_sq] = None
        if move.is_en_passant:
            board[capture_sq] = None
        board[move.to_sq] = piece.promoted() if move.is_promotion else piece

        if move.is_castling:
            rook_from, rook_to = castle_rook_squares(move.from_sq, move.to_sq)
            board[rook_to] = board[rook_from]
            board[rook_from] = None

        self._update_castle_flags(move, piece)

        next_file: int | None = None
        if piece.kind == PieceKind.PAWN and abs(move.to_sq - move.from_sq) == 16:
            next_file = col_of(move.from_sq)
        self.en_passant_file = next_file

        self.side_to_move = self.side_to_move.opposite
        self._pending.append(record)
        return record

    def unmake_move(self, move: Move, record: UndoRecord) -> None:
        """Undo *move*; *record* must be the latest one from :meth:`make_move`."""
        if not self._pending or self._pending[-1] is not record:
            raise InternalInvariantViolation(
                f"unmake_move({move}) without a matching make_move"
            )
        self._pending.pop()

        board = self.board
        piece = board[move.to_sq]
        if piece is None:
            raise InternalInvariantViolation(
                f"unmake_move: no piece on {square_name(move.to_sq)}"
            )
        if move.is_promotion:
            piece = piece.demoted()

        board[move.from_sq] = piece
        if record.en_passant_square is not None:
            board[move.to_sq] = None
            board[record.en_passant_square] = record.captured
        else:
            board[move.to_sq] = record.captured

        if move.is_castling:
            rook_from, rook_to = castle_rook_squares(move.from_sq, move.to_sq)
            board[rook_from] = board[rook_to]
            board[rook_to] = None

        self.castle_used = record.castle_used
        self.en_passant_file = record.en_passant_file
        self.side_to_move = self.side_to_move.opposite

    # ── Castle bookkeeping ───────────────────────────────────────────────

    def _update_castle_flags(self, move: Move, piece: Piece) -> None:
        used = self.castle_used
        if piece.kind == PieceKind.KING:
            used |= CastleFlag.both(piece.color)

        for sq in (move.from_sq, move.to_sq):
            flag = _ROOK_HOMES.get(sq)
            if flag is not None:
                used |= flag

        self.castle_used = used

    # ── Utilities ────────────────────────────────────────────────────────

    @property
    def en_passant_square(self) -> Square | None:
        """Landing square of an en-passant capture, if one is available."""
        if self.en_passant_file is None:
            return None
        row = 5 if self.side_to_move == Color.WHITE else 2
        return make_square(row, self.en_passant_file)

    @property
    def ply_depth(self) -> int:
        """Number of moves made on this object and not yet unmade."""
        return len(self._pending)

    def copy(self) -> Position:
        """Snapshot: independent board, no outstanding undo records."""
        return Position(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            castle_used=self.castle_used,
            en_passant_file=self.en_passant_file,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self.board == other.board
            and self.side_to_move == other.side_to_move
            and self.castle_used == other.castle_used
            and self.en_passant_file == other.en_passant_file
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"{self.board!r}\n"
            f"{self.side_to_move} to move, castle_used={self.castle_used!r}, "
            f"en_passant_file={self.en_passant_file}"
        )
