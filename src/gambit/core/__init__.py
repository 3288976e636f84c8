"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from gambit.core import MoveGenerator, position_from_fen, STARTING_FEN

    pos = position_from_fen(STARTING_FEN)
    for move in MoveGenerator(pos).generate_moves():
        print(move)
"""

from gambit.core.board import Board
from gambit.core.enums import CastleFlag, Color, Outcome, PieceKind
from gambit.core.errors import GambitError, InternalInvariantViolation, InvalidMove
from gambit.core.legality import LegalityChecker
from gambit.core.move import Move, classify_move
from gambit.core.move_generator import MAX_MOVES, MoveGenerator
from gambit.core.notation import (
    STARTING_FEN,
    move_to_text,
    parse_move,
    position_from_fen,
    position_to_fen,
)
from gambit.core.piece import Piece
from gambit.core.position import Position, UndoRecord
from gambit.core.rules import GameStatus, Rules
from gambit.core.types import (
    Square,
    col_of,
    make_square,
    parse_square,
    row_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastleFlag",
    "Color",
    "Outcome",
    "PieceKind",
    # Types / helpers
    "Square",
    "col_of",
    "make_square",
    "parse_square",
    "row_of",
    "square_name",
    # Errors
    "GambitError",
    "InternalInvariantViolation",
    "InvalidMove",
    # Domain objects
    "Board",
    "GameStatus",
    "LegalityChecker",
    "MAX_MOVES",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    "UndoRecord",
    "classify_move",
    # Notation
    "STARTING_FEN",
    "move_to_text",
    "parse_move",
    "position_from_fen",
    "position_to_fen",
]
