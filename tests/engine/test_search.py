"""Tests for the minimax engine and the static evaluation."""

import sys

import pytest

from minichess.core import state as state_module
from minichess.core.enums import Color, GameVariant
from minichess.core.move import Move
from minichess.core.move_generator import all_legal_moves
from minichess.core.state import GameState, make_move
from minichess.engine.evaluation import (
    CENTER_WEIGHT,
    CHECK_PENALTY,
    MOBILITY_WEIGHT,
    center_balance,
    center_squares,
    evaluate_position,
    material_balance,
    mobility_balance,
)
from minichess.engine.minimax import MinimaxEngine, calculate_computer_move, minimax
from minichess.engine.search import SearchOutcome, depth_for_level

MATE_ROWS = ["k....R", ".....R", "......", "......", "......", ".....K"]
STALEMATE_ROWS = ["k.....", "......", ".Q....", "......", "......", ".....K"]

SMALL_ROWS = ["....k.", "..p...", "......", "......", ".P....", "R...K."]


def _plain_minimax(state: GameState, depth: int, maximizing: bool) -> float:
    """Full-width minimax without pruning."""
    moves = all_legal_moves(state)
    if depth <= 0 or not moves:
        return evaluate_position(state)
    scores = [
        _plain_minimax(make_move(state, m.from_sq, m.to_sq), depth - 1, not maximizing)
        for m in moves
    ]
    return max(scores) if maximizing else min(scores)


class TestDepthForLevel:
    @pytest.mark.parametrize(
        ("level", "depth"), [(1, 2), (2, 3), (3, 4), (4, 5), (9, 5), (0, 1), (-3, 1)]
    )
    def test_clamped_level_plus_one(self, level: int, depth: int) -> None:
        assert depth_for_level(level) == depth


class TestEvaluation:
    def test_symmetric_start_is_level(self) -> None:
        for variant in (GameVariant.PAWNS, GameVariant.DIANA, GameVariant.LOS_ALAMOS):
            state = GameState.initial("6x6", variant)
            assert evaluate_position(state) == pytest.approx(0.0)

    def test_mallett_black_bishops_start_blocked(self) -> None:
        state = GameState.initial("6x6", GameVariant.MALLETT)
        assert mobility_balance(state) == pytest.approx(16 - 12)
        assert evaluate_position(state) == pytest.approx(MOBILITY_WEIGHT * 4)

    def test_material_counts_piece_values(self, make_state) -> None:
        state = make_state(["k.....", "......", "...Q..", "......", "pp....", ".....K"])
        assert material_balance(state) == pytest.approx(9 - 2)

    def test_center_squares(self) -> None:
        assert center_squares(6, 6) == ((2, 2), (2, 3), (3, 2), (3, 3))
        assert center_squares(8, 6) == ((3, 2), (3, 3), (4, 2), (4, 3))

    def test_center_balance(self, make_state) -> None:
        state = make_state(["k.....", "......", "..P...", "...pp.", "......", ".....K"])
        assert center_balance(state) == pytest.approx(1 - 1)

    def test_check_penalises_side_to_move(self, make_state) -> None:
        state = make_state(MATE_ROWS, Color.BLACK)
        expected = (
            material_balance(state)
            + MOBILITY_WEIGHT * mobility_balance(state)
            + CENTER_WEIGHT * center_balance(state)
            + CHECK_PENALTY
        )
        assert evaluate_position(state) == pytest.approx(expected)

    def test_mobility_counts_both_sides(self, make_state) -> None:
        state = make_state(STALEMATE_ROWS, Color.BLACK)
        white_moves = len(all_legal_moves(state, Color.WHITE))
        assert mobility_balance(state) == pytest.approx(white_moves)


class TestMinimaxEngine:
    def test_level_one_returns_legal_move(self) -> None:
        state = GameState.initial("6x6", GameVariant.PAWNS, computer_level=1)
        result = calculate_computer_move(state)
        assert result.outcome == SearchOutcome.MOVE
        assert result.depth == 2
        assert result.best_move in all_legal_moves(state)
        assert result.best_move.score == pytest.approx(result.score)
        assert result.nodes > 0

    def test_search_is_deterministic(self) -> None:
        state = GameState.initial("6x6", GameVariant.DIANA)
        engine = MinimaxEngine()
        first = engine.search(state, depth=2)
        second = engine.search(state, depth=2)
        assert first.best_move == second.best_move
        assert first.score == second.score

    def test_white_takes_hanging_queen(self, make_state) -> None:
        state = make_state(["q....k", "......", "......", "......", "......", "R...K."])
        result = MinimaxEngine().search(state, depth=1)
        assert result.best_move == Move((5, 0), (0, 0))

    def test_black_takes_hanging_queen(self, make_state) -> None:
        state = make_state(
            ["r...k.", "......", "......", "......", "......", "Q...K."], Color.BLACK
        )
        result = MinimaxEngine().search(state, depth=1)
        assert result.best_move == Move((0, 0), (5, 0))
        assert result.score < 0

    def test_checkmated_side_gets_no_move(self, make_state) -> None:
        state = make_state(MATE_ROWS, Color.BLACK)
        result = MinimaxEngine().search(state)
        assert result.best_move is None
        assert result.outcome == SearchOutcome.CHECKMATE
        assert result.is_game_over

    def test_stalemated_side_gets_no_move(self, make_state) -> None:
        state = make_state(STALEMATE_ROWS, Color.BLACK)
        result = MinimaxEngine().search(state)
        assert result.best_move is None
        assert result.outcome == SearchOutcome.STALEMATE

    def test_input_state_not_modified(self, make_state) -> None:
        state = make_state(MATE_ROWS, Color.BLACK)
        board_copy = state.board.copy()
        MinimaxEngine().search(state)
        assert state.board == board_copy
        assert state.is_checkmate
        assert state.current_turn == Color.BLACK

    def test_rejects_nonpositive_depth(self) -> None:
        with pytest.raises(ValueError):
            MinimaxEngine().search(GameState.initial(), depth=0)

    def test_minimax_of_terminal_state_is_evaluation(self, make_state) -> None:
        state = make_state(STALEMATE_ROWS, Color.BLACK)
        assert minimax(state, 3, maximizing=False) == pytest.approx(
            evaluate_position(state)
        )

    @pytest.mark.slow
    def test_level_one_on_six_by_eight(self) -> None:
        state = GameState.initial("6x8", GameVariant.LOS_ALAMOS, computer_level=1)
        result = calculate_computer_move(state)
        assert result.depth == 2
        assert result.best_move in all_legal_moves(state)


class TestSearchOrderAndPruning:
    @pytest.mark.parametrize("turn", [Color.WHITE, Color.BLACK])
    def test_ties_keep_first_move(self, make_state, monkeypatch, turn: Color) -> None:
        monkeypatch.setattr(
            sys.modules["minichess.engine.minimax"],
            "evaluate_position",
            lambda state: 0.0,
        )
        state = make_state(SMALL_ROWS, turn)
        result = MinimaxEngine().search(state, depth=2)
        assert result.best_move == all_legal_moves(state)[0]
        assert result.score == 0.0

    @pytest.mark.parametrize("depth", [1, 2, 3])
    @pytest.mark.parametrize("turn", [Color.WHITE, Color.BLACK])
    def test_pruning_matches_full_width(
        self, make_state, depth: int, turn: Color
    ) -> None:
        state = make_state(SMALL_ROWS, turn)
        maximizing = turn == Color.WHITE
        assert minimax(state, depth, maximizing=maximizing) == pytest.approx(
            _plain_minimax(state, depth, maximizing)
        )

    def test_depth_three_search(self, make_state) -> None:
        state = make_state(SMALL_ROWS)
        result = MinimaxEngine().search(state, depth=3)

        scored = []
        for move in all_legal_moves(state):
            child = make_move(state, move.from_sq, move.to_sq)
            scored.append((move, _plain_minimax(child, 2, False)))
        best = max(score for _, score in scored)
        expected = next(move for move, score in scored if score == best)

        assert result.outcome == SearchOutcome.MOVE
        assert result.depth == 3
        assert result.best_move == expected
        assert result.score == pytest.approx(best)

    def test_search_skips_status_scan(self, monkeypatch) -> None:
        calls: list[GameState] = []
        real = state_module.has_legal_move

        def counting(state: GameState) -> bool:
            calls.append(state)
            return real(state)

        monkeypatch.setattr(state_module, "has_legal_move", counting)
        state = GameState.initial("6x6", GameVariant.LOS_ALAMOS)
        result = MinimaxEngine().search(state, depth=2)
        assert result.best_move in all_legal_moves(state)
        assert calls == []
