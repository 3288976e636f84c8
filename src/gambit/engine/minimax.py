"""Pure-Python fixed-depth minimax over material."""

from __future__ import annotations

import logging

from gambit.core.enums import Color, PieceKind
from gambit.core.move import Move
from gambit.core.move_generator import MoveGenerator
from gambit.core.position import Position
from gambit.engine.search import IEngine, SearchLimits, SearchProgress, SearchResult

_LOGGER = logging.getLogger(__name__)

MATE_SCORE = 10_000

# Bishop is worth 4 here, not the textbook 3.
PIECE_VALUES: dict[PieceKind, int] = {
    PieceKind.PAWN: 1,
    PieceKind.KNIGHT: 3,
    PieceKind.BISHOP: 4,
    PieceKind.ROOK: 5,
    PieceKind.QUEEN: 9,
    PieceKind.KING: 0,
}


def evaluate(position: Position) -> int:
    """Material balance from White's point of view."""
    score = 0
    board = position.board
    for sq in range(64):
        piece = board[sq]
        if piece is None:
            continue
        value = PIECE_VALUES[piece.kind]
        score += value if piece.color == Color.WHITE else -value
    return score


class MinimaxEngine(IEngine):
    """Full-width minimax without pruning or move ordering.

    Scores are White-relative: White maximizes, Black minimizes. The same
    position and depth always produce the same move.
    """

    __slots__ = ("_nodes", "_progress")

    def __init__(self) -> None:
        self._nodes = 0
        self._progress: SearchProgress | None = None

    @property
    def nodes(self) -> int:
        return self._nodes

    def search(
        self,
        position: Position,
        limits: SearchLimits,
        progress: SearchProgress | None = None,
    ) -> SearchResult:
        """Iterative deepening from depth 1 to ``limits.max_depth``.

        Shallower iterations only feed the progress counters; the answer is
        the last iteration's.
        """
        if limits.max_depth <= 0:
            raise ValueError("Search depth must be >= 1")

        self._nodes = 0
        self._progress = progress
        if progress is not None:
            progress.nodes = 0
            progress.depth_completed = 0

        result = SearchResult(None, 0, 0, 0)
        for depth in range(1, limits.max_depth + 1):
            result = self._find_best_move(position, depth)
            if progress is not None:
                progress.depth_completed = depth
            _LOGGER.debug(
                "depth %d: best=%s score=%d nodes=%d",
                depth,
                result.best_move,
                result.score,
                result.nodes,
            )
            if result.best_move is None:
                break
        return result

    def find_best_move(self, position: Position, depth: int) -> SearchResult:
        """Single fixed-depth search of *position*."""
        if depth <= 0:
            raise ValueError("Search depth must be >= 1")
        self._nodes = 0
        return self._find_best_move(position, depth)

    def _find_best_move(self, position: Position, depth: int) -> SearchResult:
        moves = MoveGenerator(position).generate_moves()
        self._count_node()
        if not moves:
            return SearchResult(None, self._terminal_score(position), depth, self._nodes)

        maximizing = position.side_to_move == Color.WHITE
        best_move: Move | None = None
        best_score = 0

        for move in moves:
            record = position.make_move(move)
            score = self.minimax(position, depth - 1)
            position.unmake_move(move, record)

            # Strict comparison keeps the first move among equals.
            if (
                best_move is None
                or (maximizing and score > best_score)
                or (not maximizing and score < best_score)
            ):
                best_move = move
                best_score = score

        return SearchResult(best_move, best_score, depth, self._nodes)

    def minimax(self, position: Position, depth: int) -> int:
        """White-relative score of *position* searched *depth* plies deep."""
        self._count_node()
        gen = MoveGenerator(position)

        if depth <= 0:
            if gen.has_legal_move():
                return evaluate(position)
            return self._terminal_score(position)

        moves = gen.generate_moves()
        if not moves:
            return self._terminal_score(position)

        maximizing = position.side_to_move == Color.WHITE
        best = -MATE_SCORE - 1 if maximizing else MATE_SCORE + 1
        for move in moves:
            record = position.make_move(move)
            score = self.minimax(position, depth - 1)
            position.unmake_move(move, record)
            if maximizing:
                best = max(best, score)
            else:
                best = min(best, score)
        return best

    def _terminal_score(self, position: Position) -> int:
        """Score of a position whose side to move has no legal move."""
        if not MoveGenerator(position).is_in_check():
            return 0
        # Mated: worst possible outcome for the side to move.
        return -MATE_SCORE if position.side_to_move == Color.WHITE else MATE_SCORE

    def _count_node(self) -> None:
        self._nodes += 1
        if self._progress is not None:
            self._progress.nodes = self._nodes
