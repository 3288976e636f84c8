"""Qt bridge that polls the search coordinator from the GUI thread."""

from __future__ import annotations

from PyQt6.QtCore import QObject, QTimer, pyqtSignal, pyqtSlot

from gambit.core.position import Position
from gambit.engine.coordinator import CoordinatorState, SearchCoordinator


class SearchPoller(QObject):
    """Turns coordinator polling into Qt signals.

    The search itself runs on the coordinator's worker thread; this object
    lives on the GUI thread and never blocks it.
    """

    best_move_ready = pyqtSignal(object, int, int, int)
    search_no_move = pyqtSignal(int, int, int)
    search_error = pyqtSignal(str)
    progress_changed = pyqtSignal(int, int, bool)

    def __init__(
        self,
        coordinator: SearchCoordinator | None = None,
        *,
        poll_interval_ms: int = 50,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._coordinator = coordinator or SearchCoordinator()
        self._timer = QTimer(self)
        self._timer.setInterval(poll_interval_ms)
        self._timer.timeout.connect(self.poll)

    @property
    def coordinator(self) -> SearchCoordinator:
        return self._coordinator

    @property
    def is_polling(self) -> bool:
        return self._timer.isActive()

    @pyqtSlot(object, int)
    def request_move(self, position_obj: object, max_depth: int) -> bool:
        """Dispatch a search for *position_obj* and start polling."""
        if not isinstance(position_obj, Position):
            self.search_error.emit("Engine received invalid position")
            return False
        if not self._coordinator.request_search(position_obj, max_depth):
            return False
        self._timer.start()
        return True

    @pyqtSlot()
    def poll(self) -> None:
        """Publish progress and, once available, the search result."""
        progress = self._coordinator.poll_progress()
        self.progress_changed.emit(
            progress.nodes, progress.depth_completed, progress.is_searching
        )
        if self._coordinator.state != CoordinatorState.RESULT_READY:
            return

        self._timer.stop()
        try:
            result = self._coordinator.take_result()
        except Exception as exc:
            self.search_error.emit(str(exc))
            return

        if result is None:
            return
        if result.best_move is None:
            self.search_no_move.emit(result.score, result.depth, result.nodes)
            return
        self.best_move_ready.emit(
            result.best_move, result.score, result.depth, result.nodes
        )
