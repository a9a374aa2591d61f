"""Pure-Python opponent search (minimax + alpha-beta)."""

from __future__ import annotations

import logging
from dataclasses import replace

from minichess.core.attacks import is_in_check, is_king_in_check
from minichess.core.enums import Color
from minichess.core.move import Move
from minichess.core.move_generator import all_legal_moves
from minichess.core.state import GameState, apply_move
from minichess.engine.evaluation import evaluate_position
from minichess.engine.search import (
    IEngine,
    SearchOutcome,
    SearchResult,
    depth_for_level,
)

_LOGGER = logging.getLogger(__name__)

_INF = float("inf")


class MinimaxEngine(IEngine):
    """Fixed-depth minimax over immutable :class:`GameState` snapshots.

    White maximises and black minimises the white-centric evaluation.
    Root moves are tried in board order and ties keep the first move found,
    so the result is a deterministic function of the input state.
    """

    __slots__ = ("_nodes",)

    def __init__(self) -> None:
        self._nodes = 0

    def search(self, state: GameState, depth: int | None = None) -> SearchResult:
        """Pick a move for the side to move in *state*.

        *depth* defaults to the one derived from ``state.computer_level``.
        A side without legal moves gets ``best_move=None`` and an outcome
        telling checkmate from stalemate.
        """
        if depth is None:
            depth = depth_for_level(state.computer_level)
        if depth <= 0:
            raise ValueError("Search depth must be >= 1")

        self._nodes = 0
        mover = state.current_turn
        in_check = is_king_in_check(state)

        candidates: list[tuple[Move, GameState]] = []
        for move in all_legal_moves(state):
            child = apply_move(state, move.from_sq, move.to_sq)
            # Generation already filters king safety; re-check on the result.
            if not is_in_check(child.board, mover):
                candidates.append((move, child))

        if not candidates:
            outcome = SearchOutcome.CHECKMATE if in_check else SearchOutcome.STALEMATE
            _LOGGER.debug("No move for %s: %s", mover, outcome.name.lower())
            return SearchResult(
                None, outcome, evaluate_position(state), 0, self._nodes
            )

        maximizing = mover == Color.WHITE
        best_move: Move | None = None
        best_score = -_INF if maximizing else _INF

        for move, child in candidates:
            score = self._minimax(child, depth - 1, -_INF, _INF, not maximizing)
            improved = score > best_score if maximizing else score < best_score
            if improved:
                best_score = score
                best_move = move

        assert best_move is not None
        _LOGGER.debug(
            "%s searched %d candidates to depth %d (%d nodes): %s scores %.2f",
            mover,
            len(candidates),
            depth,
            self._nodes,
            best_move,
            best_score,
        )
        return SearchResult(
            replace(best_move, score=best_score),
            SearchOutcome.MOVE,
            best_score,
            depth,
            self._nodes,
        )

    def _minimax(
        self,
        state: GameState,
        depth: int,
        alpha: float,
        beta: float,
        maximizing: bool,
    ) -> float:
        self._nodes += 1
        if depth <= 0:
            return evaluate_position(state)

        moves = all_legal_moves(state)
        if not moves:  # checkmate or stalemate
            return evaluate_position(state)

        if maximizing:
            best = -_INF
            for move in moves:
                child = apply_move(state, move.from_sq, move.to_sq)
                score = self._minimax(child, depth - 1, alpha, beta, False)
                best = max(best, score)
                alpha = max(alpha, score)
                if beta <= alpha:
                    break
            return best

        best = _INF
        for move in moves:
            child = apply_move(state, move.from_sq, move.to_sq)
            score = self._minimax(child, depth - 1, alpha, beta, True)
            best = min(best, score)
            beta = min(beta, score)
            if beta <= alpha:
                break
        return best


def minimax(
    state: GameState,
    depth: int,
    alpha: float = -_INF,
    beta: float = _INF,
    maximizing: bool = True,
) -> float:
    """Alpha-beta minimax value of *state* searched *depth* plies deep."""
    return MinimaxEngine()._minimax(state, depth, alpha, beta, maximizing)


def calculate_computer_move(state: GameState) -> SearchResult:
    """Search *state* at the depth of its computer level."""
    return MinimaxEngine().search(state)
