"""GameController: drives one game between a human and the computer.

Threads immutable :class:`GameState` snapshots through selection, moves,
promotion hand-off, the computer's reply and undo. Emits events via simple
callbacks so a UI (or tests) can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace

from minichess.core.board import PROMOTION_TYPES
from minichess.core.enums import Color, PieceType
from minichess.core.move import Move
from minichess.core.piece import Piece
from minichess.core.state import GameState, make_move
from minichess.core.types import Square, promotion_row
from minichess.engine.minimax import MinimaxEngine
from minichess.engine.search import IEngine, SearchOutcome, SearchResult
from minichess.game.settings import GameSettings

_LOGGER = logging.getLogger(__name__)

# Keep the initial snapshot plus one human/computer pair before undo is offered.
_MIN_UNDO_HISTORY = 3


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    piece: Piece
    captured: Piece | None = None
    was_check: bool = False
    was_castling: bool = False
    was_promotion: bool = False


@dataclass(frozen=True, slots=True)
class PendingPromotion:
    """A pawn move waiting for the player to pick a piece."""

    from_sq: Square
    to_sq: Square
    color: Color


# ── Event definitions ────────────────────────────────────────────────────────

StateCallback = Callable[[GameState], None]
MoveCallback = Callable[[MoveRecord, GameState], None]
PromotionCallback = Callable[[PendingPromotion], None]
ThinkingCallback = Callable[[bool], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_state_changed: list[StateCallback] = field(default_factory=list)
    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[StateCallback] = field(default_factory=list)
    on_promotion_required: list[PromotionCallback] = field(default_factory=list)
    on_thinking_changed: list[ThinkingCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Orchestrates a game: selection, move application, computer replies.

    Thread-safety: call from a single thread. A search running elsewhere
    hands its result back through :meth:`apply_search_result`.
    """

    __slots__ = (
        "_engine",
        "_settings",
        "_history",
        "_records",
        "_pending_promotion",
        "_thinking",
        "events",
    )

    def __init__(self, engine: IEngine | None = None) -> None:
        self._engine: IEngine = engine if engine is not None else MinimaxEngine()
        self._settings = GameSettings()
        self._history: list[GameState] = []
        self._records: list[MoveRecord] = []
        self._pending_promotion: PendingPromotion | None = None
        self._thinking = False
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        if not self._history:
            raise RuntimeError("No game in progress; call new_game() first")
        return self._history[-1]

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def history(self) -> tuple[GameState, ...]:
        return tuple(self._history)

    @property
    def move_records(self) -> tuple[MoveRecord, ...]:
        return tuple(self._records)

    @property
    def pending_promotion(self) -> PendingPromotion | None:
        return self._pending_promotion

    @property
    def is_thinking(self) -> bool:
        return self._thinking

    @property
    def is_human_turn(self) -> bool:
        state = self.state
        if state.is_game_over:
            return False
        return state.current_turn == self._settings.player_color

    @property
    def needs_computer_move(self) -> bool:
        state = self.state
        if state.is_game_over:
            return False
        return state.current_turn != self._settings.player_color

    @property
    def can_undo(self) -> bool:
        return (
            bool(self._history)
            and not self._thinking
            and self.state.current_turn == self._settings.player_color
            and len(self._history) >= _MIN_UNDO_HISTORY
        )

    # ── Game lifecycle ───────────────────────────────────────────────────

    def new_game(
        self,
        settings: GameSettings | None = None,
        *,
        state: GameState | None = None,
    ) -> GameState:
        """Start a fresh game; the computer moves first when the human is black.

        *state* replaces the variant's starting position, e.g. to resume a
        game or set up a study position. With *settings* as well, the side,
        level and theme of *settings* are applied to *state*; otherwise the
        settings are taken from *state*.
        """
        if state is None:
            if settings is not None:
                self._settings = settings
            state = self._settings.create_state()
        else:
            if settings is not None:
                state = settings.apply_to(state)
            # Turn handling and search depth both read from one source.
            self._settings = GameSettings.from_state(state)
            state = state.with_status()
        self._history = [state]
        self._records = []
        self._pending_promotion = None
        self._set_thinking(False)
        _LOGGER.debug(
            "New %s game on %s, human plays %s",
            state.game_variant,
            state.board_size,
            state.player_color,
        )
        self._emit_state()
        return state

    # ── Human input ──────────────────────────────────────────────────────

    def select(self, square: Square) -> bool:
        """Select the human's piece on *square* and list its targets."""
        if not self._accepts_human_input():
            return False
        state = self.state
        piece = state.board[Square(*square)]
        if piece is None or piece.color != state.current_turn:
            return False
        self._replace_current(state.select(square))
        return True

    def click(self, square: Square) -> bool:
        """Handle a click on *square*.

        With a piece selected, a highlighted target plays the move (or asks
        for a promotion piece); another own piece changes the selection.
        Returns whether anything changed.
        """
        if not self._accepts_human_input():
            return False
        square = Square(*square)
        state = self.state
        origin = state.selected_piece
        if origin is None or square not in state.valid_moves:
            return self.select(square)

        piece = state.board[origin]
        assert piece is not None
        if piece.piece_type == PieceType.PAWN and square.row == promotion_row(
            piece.color, state.board.rows
        ):
            pending = PendingPromotion(origin, square, piece.color)
            self._pending_promotion = pending
            for cb in self.events.on_promotion_required:
                cb(pending)
            return True

        self._apply(Move(origin, square))
        return True

    def complete_promotion(self, piece_type: PieceType) -> bool:
        """Finish a pending promotion with *piece_type*."""
        pending = self._pending_promotion
        if pending is None:
            return False
        if piece_type not in PROMOTION_TYPES:
            raise ValueError(f"Cannot promote to {piece_type.name.lower()}")
        self._pending_promotion = None
        self._apply(Move(pending.from_sq, pending.to_sq, piece_type))
        return True

    def cancel_promotion(self) -> None:
        self._pending_promotion = None

    def undo(self) -> bool:
        """Take back the last computer reply and the human move before it."""
        if not self.can_undo:
            return False
        self._pending_promotion = None
        del self._history[-2:]
        del self._records[-2:]
        self._emit_state()
        return True

    # ── Computer moves ───────────────────────────────────────────────────

    def set_thinking(self, thinking: bool) -> None:
        """Mark an asynchronous search as running (or finished)."""
        self._set_thinking(thinking)

    def play_computer_move(self) -> SearchResult | None:
        """Run the search synchronously and apply its result."""
        if not self._history or not self.needs_computer_move:
            _LOGGER.warning("Computer move requested while it is not its turn")
            return None
        state = self.state
        self._set_thinking(True)
        try:
            result = self._engine.search(state)
        finally:
            self._set_thinking(False)
        self.apply_search_result(result, searched_state=state)
        return result

    def apply_search_result(
        self,
        result: SearchResult,
        searched_state: GameState | None = None,
    ) -> bool:
        """Apply a finished search.

        A result computed for a snapshot that is no longer current (the game
        was restarted or undone meanwhile) is dropped.
        """
        self._set_thinking(False)
        if searched_state is not None and searched_state is not self.state:
            _LOGGER.debug("Dropping stale search result")
            return False
        if not self.needs_computer_move:
            return False

        if result.best_move is not None:
            self._apply(result.best_move)
            return True

        state = self.state
        if result.outcome == SearchOutcome.CHECKMATE:
            final = replace(state, is_check=True, is_checkmate=True)
        else:
            final = replace(state, is_stalemate=True)
        self._replace_current(final)
        self._emit_game_over()
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _accepts_human_input(self) -> bool:
        if not self._history or self._thinking or self._pending_promotion:
            return False
        return self.is_human_turn

    def _apply(self, move: Move) -> None:
        before = self.state
        piece = before.board[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {move.from_sq}")
        captured = before.board[move.to_sq]
        after = make_move(before, move.from_sq, move.to_sq, move.promotion)

        is_castling = (
            piece.piece_type == PieceType.KING
            and abs(move.to_sq.col - move.from_sq.col) == 2
        )
        is_promotion = piece.piece_type == PieceType.PAWN and move.to_sq.row == (
            promotion_row(piece.color, before.board.rows)
        )
        record = MoveRecord(
            move=move,
            piece=piece,
            # The castling rook may stand on the king's target square.
            captured=None if is_castling else captured,
            was_check=after.is_check,
            was_castling=is_castling,
            was_promotion=is_promotion,
        )
        self._history[-1] = replace(before, selected_piece=None, valid_moves=())
        self._history.append(after)
        self._records.append(record)

        for cb in self.events.on_move:
            cb(record, after)
        self._emit_state()
        if after.is_game_over:
            self._emit_game_over()

    def _replace_current(self, state: GameState) -> None:
        self._history[-1] = state
        self._emit_state()

    def _set_thinking(self, thinking: bool) -> None:
        if thinking == self._thinking:
            return
        self._thinking = thinking
        for cb in self.events.on_thinking_changed:
            cb(thinking)

    def _emit_state(self) -> None:
        state = self.state
        for cb in self.events.on_state_changed:
            cb(state)

    def _emit_game_over(self) -> None:
        state = self.state
        _LOGGER.debug(
            "Game over: %s", "checkmate" if state.is_checkmate else "stalemate"
        )
        for cb in self.events.on_game_over:
            cb(state)
