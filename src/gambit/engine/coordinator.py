"""Background search coordinator.

Runs one search at a time on a private snapshot of the caller's position and
hands the answer back through a lock-guarded slot that the caller polls.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import TYPE_CHECKING

from gambit.engine.minimax import MinimaxEngine
from gambit.engine.search import (
    IEngine,
    ProgressSnapshot,
    SearchLimits,
    SearchProgress,
    SearchResult,
)

if TYPE_CHECKING:
    from gambit.core.move import Move
    from gambit.core.position import Position

_LOGGER = logging.getLogger(__name__)


class CoordinatorState(Enum):
    IDLE = "idle"
    SEARCHING = "searching"
    RESULT_READY = "result_ready"


class SearchCoordinator:
    """Owns the search worker thread and the result hand-off.

    ``IDLE → SEARCHING`` on :meth:`request_search`, ``SEARCHING →
    RESULT_READY`` when the worker finishes, ``RESULT_READY → IDLE`` when the
    consumer takes the result. A request outside ``IDLE`` is ignored.
    """

    __slots__ = (
        "_engine",
        "_lock",
        "_state",
        "_result",
        "_error",
        "_worker",
        "_progress",
        "_request_count",
    )

    def __init__(self, engine: IEngine | None = None) -> None:
        self._engine: IEngine = engine or MinimaxEngine()
        self._lock = threading.Lock()
        self._state = CoordinatorState.IDLE
        self._result: SearchResult | None = None
        self._error: BaseException | None = None
        self._worker: threading.Thread | None = None
        self._progress = SearchProgress()
        self._request_count = 0

    # ── Control-thread API ───────────────────────────────────────────────

    @property
    def state(self) -> CoordinatorState:
        with self._lock:
            return self._state

    @property
    def is_busy(self) -> bool:
        """A search is running or its result has not been taken yet."""
        return self.state != CoordinatorState.IDLE

    def request_search(self, position: Position, max_depth: int) -> bool:
        """Start searching a snapshot of *position*.

        Returns False (and does nothing) if a search is already outstanding.
        Raises ValueError on the calling thread if *max_depth* is below 1.
        """
        if max_depth < 1:
            raise ValueError(f"Search depth must be >= 1, got {max_depth}")
        limits = SearchLimits(max_depth=max_depth)
        with self._lock:
            if self._state != CoordinatorState.IDLE:
                _LOGGER.debug("Search request ignored: coordinator is %s", self._state.value)
                return False

            snapshot = position.copy()
            self._state = CoordinatorState.SEARCHING
            self._result = None
            self._error = None
            self._request_count += 1
            self._progress.reset()
            self._progress.searching = True
            worker = threading.Thread(
                target=self._run,
                args=(snapshot, limits),
                name=f"gambit-search-{self._request_count}",
                daemon=True,
            )
            self._worker = worker
            worker.start()

        _LOGGER.debug("Search #%d dispatched (max_depth=%d)", self._request_count, max_depth)
        return True

    def poll_result(self) -> Move | None:
        """Take the best move if the search has finished, else None.

        If the worker raised, the exception is re-raised here.
        """
        result = self.take_result()
        return result.best_move if result is not None else None

    def take_result(self) -> SearchResult | None:
        """Like :meth:`poll_result` but returns the whole :class:`SearchResult`."""
        with self._lock:
            if self._state != CoordinatorState.RESULT_READY:
                return None
            result, error = self._result, self._error
            self._result = None
            self._error = None
            self._state = CoordinatorState.IDLE

        if error is not None:
            raise error
        return result

    def poll_progress(self) -> ProgressSnapshot:
        return self._progress.snapshot()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the current worker finishes; True if none is running."""
        worker = self._worker
        if worker is None:
            return True
        worker.join(timeout)
        return not worker.is_alive()

    # ── Worker thread ────────────────────────────────────────────────────

    def _run(self, snapshot: Position, limits: SearchLimits) -> None:
        result: SearchResult | None = None
        error: BaseException | None = None
        try:
            result = self._engine.search(snapshot, limits, self._progress)
        except Exception as exc:
            _LOGGER.exception("Search worker failed")
            error = exc
        finally:
            self._progress.searching = False
            # Publish even when a BaseException unwinds the worker.
            with self._lock:
                self._result = result
                self._error = error
                self._state = CoordinatorState.RESULT_READY

        if result is not None:
            _LOGGER.debug(
                "Search finished: best=%s score=%d depth=%d nodes=%d",
                result.best_move,
                result.score,
                result.depth,
                result.nodes,
            )
