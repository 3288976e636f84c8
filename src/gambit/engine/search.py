"""Shared engine search models and protocol."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from gambit.core.move import Move
    from gambit.core.position import Position


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation."""

    max_depth: int = 3


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Best move of one search plus the depth it was taken at.

    ``score`` is from White's point of view.
    """

    best_move: Move | None
    score: int
    depth: int
    nodes: int


@dataclass(slots=True, frozen=True)
class ProgressSnapshot:
    """Point-in-time copy of :class:`SearchProgress`."""

    nodes: int
    depth_completed: int
    is_searching: bool


class SearchProgress:
    """Advisory counters shared between a search worker and its readers.

    Only the worker writes. Readers take no lock: a stale value only
    shows up on a progress display and never drives control flow.
    """

    __slots__ = ("nodes", "depth_completed", "searching")

    def __init__(self) -> None:
        self.nodes = 0
        self.depth_completed = 0
        self.searching = False

    def reset(self) -> None:
        self.nodes = 0
        self.depth_completed = 0
        self.searching = False

    def snapshot(self) -> ProgressSnapshot:
        return ProgressSnapshot(self.nodes, self.depth_completed, self.searching)


class IEngine(Protocol):
    """Protocol for engines driven by the search coordinator."""

    def search(
        self,
        position: Position,
        limits: SearchLimits,
        progress: SearchProgress | None = None,
    ) -> SearchResult: ...
