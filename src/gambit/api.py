"""Function-level interface for rendering / input layers.

Everything here works on plain :class:`Position` and :class:`Move` values.
The search functions share one process-wide :class:`SearchCoordinator`.
"""

from __future__ import annotations

from gambit.core.errors import InvalidMove
from gambit.core.legality import LegalityChecker
from gambit.core.move import Move
from gambit.core.move_generator import MoveGenerator
from gambit.core.position import Position, UndoRecord
from gambit.core.rules import GameStatus, Rules
from gambit.core.types import Square
from gambit.engine.coordinator import SearchCoordinator
from gambit.engine.search import ProgressSnapshot

_coordinator = SearchCoordinator()


def initial_position() -> Position:
    """Standard starting setup, White to move."""
    return Position()


def legal_moves(position: Position) -> list[Move]:
    return MoveGenerator(position).generate_moves()


def is_legal(position: Position, from_sq: Square, to_sq: Square) -> bool:
    """Whether the side to move may play ``from_sq → to_sq`` (for highlighting)."""
    return LegalityChecker(position).is_legal_move(from_sq, to_sq)


def apply_move(position: Position, move: Move) -> tuple[Position, UndoRecord]:
    """Validate and play *move* on *position* in place.

    Raises :class:`InvalidMove` without touching *position* if the move is
    not one of its legal moves.
    """
    legal = LegalityChecker(position).build_move(move.from_sq, move.to_sq)
    if legal is None:
        raise InvalidMove(move.from_sq, move.to_sq)
    if legal != move:
        raise InvalidMove(move.from_sq, move.to_sq, "move metadata does not match")
    record = position.make_move(legal)
    return position, record


def undo_move(position: Position, move: Move, record: UndoRecord) -> Position:
    """Inverse of :func:`apply_move`."""
    position.unmake_move(move, record)
    return position


def game_status(position: Position) -> GameStatus:
    return Rules.game_status(position)


def default_coordinator() -> SearchCoordinator:
    return _coordinator


def request_search(position: Position, max_depth: int) -> bool:
    """Start a background search; False if one is already outstanding."""
    return _coordinator.request_search(position, max_depth)


def poll_result() -> Move | None:
    return _coordinator.poll_result()


def poll_progress() -> ProgressSnapshot:
    return _coordinator.poll_progress()
