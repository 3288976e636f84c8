"""GameController — owns the live position of an interactive game.

Coordinates: legality checks, the background search, turn gating.
Emits events via simple callbacks so a UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from gambit.core.enums import Color
from gambit.core.legality import LegalityChecker
from gambit.core.move import Move
from gambit.core.notation import position_from_fen
from gambit.core.position import Position, UndoRecord
from gambit.core.rules import GameStatus, Rules
from gambit.core.types import Square
from gambit.engine.coordinator import CoordinatorState, SearchCoordinator

_LOGGER = logging.getLogger(__name__)

MoveCallback = Callable[[Move, Position], None]
GameOverCallback = Callable[[GameStatus], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    move: Move
    record: UndoRecord


class GameController:
    """Runs a game between a human and (optionally) the engine.

    Thread-safety: every method is meant for the single control thread.
    The engine works on a snapshot inside :class:`SearchCoordinator`, and its
    answer is picked up by :meth:`update`, so the live position is only ever
    touched here.
    """

    __slots__ = (
        "_position",
        "_history",
        "_status",
        "_engine_color",
        "_max_depth",
        "_coordinator",
        "_awaiting_engine",
        "events",
    )

    def __init__(
        self,
        *,
        engine_color: Color | None = None,
        max_depth: int = 3,
        coordinator: SearchCoordinator | None = None,
    ) -> None:
        self._position = Position()
        self._history: list[HistoryEntry] = []
        self._status = Rules.game_status(self._position)
        self._engine_color = engine_color
        self._max_depth = max_depth
        self._coordinator = coordinator or SearchCoordinator()
        self._awaiting_engine = False
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def position(self) -> Position:
        return self._position

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def history(self) -> list[Move]:
        return [entry.move for entry in self._history]

    @property
    def engine_color(self) -> Color | None:
        return self._engine_color

    @property
    def is_engine_turn(self) -> bool:
        return self._position.side_to_move == self._engine_color

    @property
    def is_thinking(self) -> bool:
        return self._awaiting_engine

    # ── Game flow ────────────────────────────────────────────────────────

    def new_game(self, fen: str | None = None) -> None:
        """Reset to the starting position (or *fen*)."""
        if self._awaiting_engine:
            # No cancellation: let the running search finish and drop its answer.
            self._awaiting_engine = False
            self._coordinator.wait()
            try:
                self._coordinator.take_result()
            except Exception:
                # Already logged with its traceback by the worker.
                _LOGGER.warning("Discarded search had failed", exc_info=True)

        self._position = position_from_fen(fen) if fen else Position()
        self._history.clear()
        self._status = Rules.game_status(self._position)
        _LOGGER.info(
            "New game: engine plays %s",
            self._engine_color if self._engine_color is not None else "nobody",
        )

    def can_move(self, from_sq: Square, to_sq: Square) -> bool:
        """Whether the human may play ``from_sq → to_sq`` right now."""
        if not self._accepting_human_input():
            return False
        return LegalityChecker(self._position).is_legal_move(from_sq, to_sq)

    def submit_move(self, from_sq: Square, to_sq: Square) -> bool:
        """Apply a human move. Returns False if it was rejected."""
        if not self._accepting_human_input():
            _LOGGER.debug("Move rejected: not accepting input")
            return False

        move = LegalityChecker(self._position).build_move(from_sq, to_sq)
        if move is None:
            _LOGGER.debug("Move rejected: illegal %d -> %d", from_sq, to_sq)
            return False

        self._apply(move)
        return True

    def update(self) -> None:
        """Poll the engine: dispatch a search or apply a finished one.

        Call this periodically from the control thread (e.g. a UI timer).
        """
        if self._status.is_over:
            return

        if self._awaiting_engine:
            if self._coordinator.state != CoordinatorState.RESULT_READY:
                return
            self._awaiting_engine = False
            move = self._coordinator.poll_result()
            if move is not None:
                self._apply(move)
            return

        if self.is_engine_turn:
            if self._coordinator.request_search(self._position, self._max_depth):
                self._awaiting_engine = True

    def undo_move(self) -> bool:
        """Take back the last move (the last two against the engine)."""
        if self._awaiting_engine or not self._history:
            return False

        self._undo_last()
        if self._engine_color is not None and self.is_engine_turn and self._history:
            self._undo_last()
        self._status = Rules.game_status(self._position)
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _accepting_human_input(self) -> bool:
        return (
            not self._status.is_over
            and not self._awaiting_engine
            and not self.is_engine_turn
        )

    def _apply(self, move: Move) -> None:
        mover = self._position.side_to_move
        record = self._position.make_move(move)
        self._history.append(HistoryEntry(move, record))
        _LOGGER.debug("%s played %s", mover, move)

        for cb in self.events.on_move:
            cb(move, self._position)

        self._status = Rules.game_status(self._position)
        if self._status.is_over:
            _LOGGER.info("Game over: %s", self._status)
            for cb in self.events.on_game_over:
                cb(self._status)

    def _undo_last(self) -> None:
        entry = self._history.pop()
        self._position.unmake_move(entry.move, entry.record)
