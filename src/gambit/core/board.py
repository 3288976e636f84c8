"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from gambit.core.enums import Color, PieceKind
from gambit.core.piece import Piece
from gambit.core.types import Square, make_square

_BACK_RANK: tuple[PieceKind, ...] = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)


class Board:
    """Mutable 64-square board with a king-square cache.

    Holds placement only; it knows nothing about whose turn it is or which
    moves are legal.
    """

    __slots__ = ("_squares", "_king_squares")

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64
        # [color] -> king square cache (None if king missing).
        self._king_squares: list[Square | None] = [None, None]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        old_piece = self._squares[sq]
        if (
            old_piece is not None
            and old_piece.kind == PieceKind.KING
            and self._king_squares[old_piece.color] == sq
        ):
            self._king_squares[old_piece.color] = None

        self._squares[sq] = piece
        if piece is not None and piece.kind == PieceKind.KING:
            self._king_squares[piece.color] = sq

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color) -> list[Square]:
        """Squares occupied by *color*, in row-major order."""
        return [
            sq
            for sq, piece in enumerate(self._squares)
            if piece is not None and piece.color == color
        ]

    def king_square(self, color: Color) -> Square:
        """Return the single king square for *color*."""
        sq = self._king_squares[color]
        if sq is None:
            raise ValueError(f"No {color.name} king on board")
        return sq

    def has_king(self, color: Color) -> bool:
        return self._king_squares[color] is not None

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._squares = self._squares.copy()
        b._king_squares = self._king_squares.copy()
        return b

    def clear(self) -> None:
        self._squares = [None] * 64
        self._king_squares = [None, None]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for col, kind in enumerate(_BACK_RANK):
            b[make_square(0, col)] = Piece(Color.WHITE, kind)
            b[make_square(1, col)] = Piece(Color.WHITE, PieceKind.PAWN)
            b[make_square(6, col)] = Piece(Color.BLACK, PieceKind.PAWN)
            b[make_square(7, col)] = Piece(Color.BLACK, kind)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(7, -1, -1):
            cells = []
            for col in range(8):
                p = self[make_square(row, col)]
                cells.append(str(p) if p else ".")
            rows.append(f"{row + 1} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
