"""Qt bridge to run engine search in a worker thread."""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from minichess.core.state import GameState
from minichess.engine.minimax import MinimaxEngine
from minichess.engine.search import IEngine

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes computer moves on demand.

    The search itself cannot be interrupted: :meth:`cancel` marks the
    running request so that its result is dropped instead of emitted.
    """

    best_move_ready = pyqtSignal(int, object)  # request id, SearchResult
    search_cancelled = pyqtSignal(int)
    search_no_move = pyqtSignal(int, object)  # request id, SearchResult
    search_error = pyqtSignal(int, str)

    __slots__ = ("_cancel_event", "_depth", "_engine")

    def __init__(self, *, depth: int | None = None) -> None:
        super().__init__()
        self._engine: IEngine = MinimaxEngine()
        self._depth = depth
        self._cancel_event = threading.Event()

    @pyqtSlot(object, int)
    def request_move(self, state_obj: object, request_id: int) -> None:
        """Search for the best move in *state_obj* and emit the result."""
        if not isinstance(state_obj, GameState):
            self.search_error.emit(request_id, "Engine received invalid game state")
            return

        self._cancel_event.clear()
        try:
            result = self._engine.search(state_obj, self._depth)
        except Exception as exc:
            _LOGGER.exception("Search %d failed", request_id)
            self.search_error.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.search_cancelled.emit(request_id)
            return

        if result.best_move is None:
            self.search_no_move.emit(request_id, result)
            return

        self.best_move_ready.emit(request_id, result)

    @pyqtSlot()
    def cancel(self) -> None:
        """Discard the result of the current search."""
        self._cancel_event.set()

    @pyqtSlot(int)
    def set_depth(self, depth: int) -> None:
        """Fix the search depth; ``0`` derives it from the computer level."""
        self._depth = depth if depth > 0 else None
