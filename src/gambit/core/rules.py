"""High-level chess rules: check, checkmate, stalemate."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from gambit.core.enums import Color, Outcome
from gambit.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from gambit.core.position import Position


@dataclass(frozen=True, slots=True)
class GameStatus:
    """Outcome for the side to move; ``winner`` is set only on checkmate."""

    outcome: Outcome
    winner: Color | None = None

    @property
    def is_over(self) -> bool:
        return self.outcome != Outcome.ONGOING


ONGOING = GameStatus(Outcome.ONGOING)


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    @staticmethod
    def is_in_check(position: Position) -> bool:
        return MoveGenerator(position).is_in_check()

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        gen = MoveGenerator(position)
        return gen.is_in_check() and not gen.has_legal_move()

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        gen = MoveGenerator(position)
        return not gen.is_in_check() and not gen.has_legal_move()

    @staticmethod
    def game_status(position: Position) -> GameStatus:
        """Determine the current game status.

        Running out of moves is a normal terminal condition, never an error.
        """
        gen = MoveGenerator(position)
        if gen.has_legal_move():
            return ONGOING
        if gen.is_in_check():
            return GameStatus(Outcome.CHECKMATE, position.side_to_move.opposite)
        return GameStatus(Outcome.STALEMATE)
