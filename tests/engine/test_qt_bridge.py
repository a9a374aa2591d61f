"""Tests for Qt engine bridge worker."""

from __future__ import annotations

from PyQt6.QtTest import QSignalSpy

from minichess.core.move_generator import all_legal_moves
from minichess.core.state import GameState
from minichess.engine.qt_bridge import EngineWorker
from minichess.engine.search import SearchOutcome, SearchResult


class _CancellingEngine:
    def __init__(self, worker: EngineWorker) -> None:
        self._worker = worker

    def search(self, state: GameState, depth: int | None = None) -> SearchResult:
        del depth
        self._worker.cancel()
        return SearchResult(
            best_move=all_legal_moves(state)[0],
            outcome=SearchOutcome.MOVE,
            score=0.0,
            depth=1,
            nodes=1,
        )


class _NoMoveEngine:
    def search(self, _state: GameState, depth: int | None = None) -> SearchResult:
        del depth
        return SearchResult(
            best_move=None,
            outcome=SearchOutcome.STALEMATE,
            score=0.0,
            depth=0,
            nodes=0,
        )


class _FailingEngine:
    def search(self, _state: GameState, depth: int | None = None) -> SearchResult:
        raise RuntimeError(f"search exploded at depth {depth}")


class _DepthRecordingEngine:
    def __init__(self) -> None:
        self.depths: list[int | None] = []

    def search(self, state: GameState, depth: int | None = None) -> SearchResult:
        self.depths.append(depth)
        return SearchResult(
            best_move=all_legal_moves(state)[0],
            outcome=SearchOutcome.MOVE,
            score=0.0,
            depth=depth or 0,
            nodes=1,
        )


class TestEngineWorker:
    def test_emits_best_move(self) -> None:
        worker = EngineWorker(depth=1)
        state = GameState.initial()

        best_moves = QSignalSpy(worker.best_move_ready)
        errors = QSignalSpy(worker.search_error)

        worker.request_move(state, 3)

        assert len(best_moves) == 1
        assert best_moves[0][0] == 3
        result = best_moves[0][1]
        assert isinstance(result, SearchResult)
        assert result.best_move in all_legal_moves(state)
        assert len(errors) == 0

    def test_emits_cancelled_when_search_is_cancelled(self) -> None:
        worker = EngineWorker()
        worker._engine = _CancellingEngine(worker)

        cancelled = QSignalSpy(worker.search_cancelled)
        best_moves = QSignalSpy(worker.best_move_ready)

        worker.request_move(GameState.initial(), 7)

        assert len(cancelled) == 1
        assert cancelled[0][0] == 7
        assert len(best_moves) == 0

    def test_cancel_does_not_leak_into_next_request(self) -> None:
        worker = EngineWorker()
        worker._engine = _DepthRecordingEngine()
        worker.cancel()

        best_moves = QSignalSpy(worker.best_move_ready)
        worker.request_move(GameState.initial(), 8)

        assert len(best_moves) == 1

    def test_emits_no_move_when_search_returns_none(self) -> None:
        worker = EngineWorker()
        worker._engine = _NoMoveEngine()

        no_move = QSignalSpy(worker.search_no_move)
        best_moves = QSignalSpy(worker.best_move_ready)
        errors = QSignalSpy(worker.search_error)

        worker.request_move(GameState.initial(), 11)

        assert len(no_move) == 1
        assert no_move[0][0] == 11
        assert no_move[0][1].outcome == SearchOutcome.STALEMATE
        assert len(best_moves) == 0
        assert len(errors) == 0

    def test_engine_exception_becomes_error_signal(self) -> None:
        worker = EngineWorker(depth=2)
        worker._engine = _FailingEngine()

        errors = QSignalSpy(worker.search_error)
        worker.request_move(GameState.initial(), 5)

        assert len(errors) == 1
        assert errors[0][0] == 5
        assert "exploded at depth 2" in errors[0][1]

    def test_rejects_non_state_payload(self) -> None:
        worker = EngineWorker()
        errors = QSignalSpy(worker.search_error)

        worker.request_move("not a state", 2)

        assert len(errors) == 1
        assert errors[0][0] == 2

    def test_set_depth_zero_restores_level_depth(self) -> None:
        engine = _DepthRecordingEngine()
        worker = EngineWorker()
        worker._engine = engine

        worker.set_depth(3)
        worker.request_move(GameState.initial(), 1)
        worker.set_depth(0)
        worker.request_move(GameState.initial(), 2)

        assert engine.depths == [3, None]
