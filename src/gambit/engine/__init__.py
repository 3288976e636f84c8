"""Chess engine package: minimax search, background coordinator, Qt bridge."""

from gambit.engine.coordinator import CoordinatorState, SearchCoordinator
from gambit.engine.minimax import MATE_SCORE, PIECE_VALUES, MinimaxEngine, evaluate
from gambit.engine.search import (
    IEngine,
    ProgressSnapshot,
    SearchLimits,
    SearchProgress,
    SearchResult,
)

__all__ = [
    "CoordinatorState",
    "IEngine",
    "MATE_SCORE",
    "MinimaxEngine",
    "PIECE_VALUES",
    "ProgressSnapshot",
    "SearchCoordinator",
    "SearchLimits",
    "SearchProgress",
    "SearchResult",
    "evaluate",
]
