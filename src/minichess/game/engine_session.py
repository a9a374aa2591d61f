"""Runs the computer's searches on a worker thread for a GameController."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, QThread, pyqtSignal

from minichess.core.state import GameState
from minichess.engine.qt_bridge import EngineWorker
from minichess.engine.search import SearchResult
from minichess.game.controller import GameController

_LOGGER = logging.getLogger(__name__)


class EngineSession(QObject):
    """Owns the worker-thread search lifecycle and hands moves to the controller.

    Each request carries an increasing id; a result whose id no longer
    matches the pending request (after a cancel, a new game or an undo) is
    ignored.
    """

    search_requested = pyqtSignal(object, int)

    _THREAD_STOP_TIMEOUT_MS = 2000

    def __init__(
        self,
        controller: GameController,
        parent: QObject | None = None,
        *,
        depth: int | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._engine_thread = QThread(self)
        self._engine_worker = EngineWorker(depth=depth)
        self._request_id = 0
        self._pending_request: int | None = None
        self._pending_state: GameState | None = None
        self._is_started = False

    @property
    def worker(self) -> EngineWorker:
        return self._engine_worker

    @property
    def pending_request(self) -> int | None:
        return self._pending_request

    def setup(self) -> None:
        """Start the worker thread and follow the controller's state."""
        if self._is_started:
            return
        self._engine_worker.moveToThread(self._engine_thread)
        self.search_requested.connect(self._engine_worker.request_move)
        self._engine_worker.best_move_ready.connect(self._on_result)
        self._engine_worker.search_no_move.connect(self._on_result)
        self._engine_worker.search_cancelled.connect(self._on_cancelled)
        self._engine_worker.search_error.connect(self._on_error)
        self._controller.events.on_state_changed.append(self._on_state_changed)
        self._engine_thread.start()
        self._is_started = True

    def shutdown(self) -> None:
        """Drop any pending search and stop the worker thread."""
        if not self._is_started:
            return
        self.cancel()
        callbacks = self._controller.events.on_state_changed
        if self._on_state_changed in callbacks:
            callbacks.remove(self._on_state_changed)
        self._engine_thread.quit()
        self._engine_thread.wait(self._THREAD_STOP_TIMEOUT_MS)
        self._is_started = False

    def request_computer_move(self) -> bool:
        """Queue a search when it is the computer's turn."""
        controller = self._controller
        if not controller.needs_computer_move or self._pending_request is not None:
            return False
        self._request_id += 1
        self._pending_request = self._request_id
        self._pending_state = controller.state
        controller.set_thinking(True)
        self.search_requested.emit(self._pending_state, self._request_id)
        return True

    def cancel(self) -> None:
        """Forget the pending request; its result will be discarded."""
        if self._pending_request is None:
            return
        self._engine_worker.cancel()
        self._clear_pending()
        self._controller.set_thinking(False)

    # ── Worker callbacks ─────────────────────────────────────────────────

    def _on_state_changed(self, state: GameState) -> None:
        if self._pending_state is not None and self._pending_state is not state:
            self.cancel()
        if self._controller.needs_computer_move:
            self.request_computer_move()

    def _on_result(self, request_id: int, result_obj: object) -> None:
        if request_id != self._pending_request:
            return
        if not isinstance(result_obj, SearchResult):
            self._on_error(request_id, "Engine returned an invalid result")
            return
        searched = self._pending_state
        self._clear_pending()
        self._controller.apply_search_result(result_obj, searched_state=searched)

    def _on_cancelled(self, request_id: int) -> None:
        if request_id != self._pending_request:
            return
        self._clear_pending()
        self._controller.set_thinking(False)

    def _on_error(self, request_id: int, message: str) -> None:
        if request_id != self._pending_request:
            return
        _LOGGER.error("Engine search %d failed: %s", request_id, message)
        self._clear_pending()
        self._controller.set_thinking(False)

    def _clear_pending(self) -> None:
        self._pending_request = None
        self._pending_state = None
