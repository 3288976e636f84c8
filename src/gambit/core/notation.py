"""FEN and coordinate-move notation.

These are presentation helpers for logs, fixtures and front ends; nothing in
the rules engine depends on them.
"""

from __future__ import annotations

from gambit.core.board import Board
from gambit.core.enums import CastleFlag, Color
from gambit.core.errors import InvalidMove
from gambit.core.legality import LegalityChecker
from gambit.core.move import Move
from gambit.core.piece import Piece
from gambit.core.position import Position
from gambit.core.types import make_square, parse_square, row_of, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLE_CHARS: tuple[tuple[str, CastleFlag], ...] = (
    ("K", CastleFlag.WHITE_KINGSIDE),
    ("Q", CastleFlag.WHITE_QUEENSIDE),
    ("k", CastleFlag.BLACK_KINGSIDE),
    ("q", CastleFlag.BLACK_QUEENSIDE),
)


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`.

    Move clocks (fields 5–6) are accepted but not kept.
    """
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castle_part, ep_part = parts[:4]

    # 1. Piece placement
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        row = 7 - rank_idx
        col = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                col += step
            else:
                if col >= 8:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                board[make_square(row, col)] = Piece.from_char(ch)
                col += 1
            if col > 8:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if col != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling: FEN lists what is still available; we store what is gone.
    used = CastleFlag.ALL
    if castle_part != "-":
        rights = dict(_CASTLE_CHARS)
        seen: set[str] = set()
        for ch in castle_part:
            flag = rights.get(ch)
            if flag is None or ch in seen:
                raise ValueError(f"Invalid FEN castling field: {castle_part!r}")
            seen.add(ch)
            used &= ~flag

    # 4. En passant
    ep_file: int | None = None
    if ep_part != "-":
        ep = parse_square(ep_part)
        expected_row = 5 if side == Color.WHITE else 2
        if row_of(ep) != expected_row:
            raise ValueError(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )
        ep_file = ep & 7

    for clock in parts[4:]:
        if not clock.isdigit():
            raise ValueError(f"Invalid FEN move clock: {clock!r}")

    return Position(board, side, used, ep_file)


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN (clocks written as ``0 1``)."""
    rows: list[str] = []
    for row in range(7, -1, -1):
        empty = 0
        text = ""
        for col in range(8):
            piece = pos.board[make_square(row, col)]
            if piece is None:
                empty += 1
                continue
            if empty:
                text += str(empty)
                empty = 0
            text += str(piece)
        if empty:
            text += str(empty)
        rows.append(text)

    side_str = "w" if pos.side_to_move == Color.WHITE else "b"
    castle_str = "".join(ch for ch, flag in _CASTLE_CHARS if not pos.castle_used & flag)
    ep_sq = pos.en_passant_square
    ep_str = square_name(ep_sq) if ep_sq is not None else "-"

    return f"{'/'.join(rows)} {side_str} {castle_str or '-'} {ep_str} 0 1"


def move_to_text(move: Move) -> str:
    """Coordinate notation, e.g. ``e2e4`` or ``e7e8q``."""
    return str(move)


def parse_move(position: Position, text: str) -> Move:
    """Parse coordinate notation into a legal :class:`Move` for *position*.

    A trailing promotion letter is optional and must be ``q`` if given,
    since pawns always promote to a queen.
    """
    text = text.strip().lower()
    if len(text) not in (4, 5):
        raise ValueError(f"Invalid move text: {text!r}")
    from_sq = parse_square(text[:2])
    to_sq = parse_square(text[2:4])

    move = LegalityChecker(position).build_move(from_sq, to_sq)
    if move is None:
        raise InvalidMove(from_sq, to_sq)
    if len(text) == 5 and (not move.is_promotion or text[4] != "q"):
        raise InvalidMove(from_sq, to_sq, f"unsupported promotion suffix {text[4]!r}")
    return move
