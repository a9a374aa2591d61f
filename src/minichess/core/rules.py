"""High-level rules: check, checkmate and stalemate detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from minichess.core.attacks import is_king_in_check
from minichess.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from minichess.core.state import GameState


def has_legal_move(state: GameState) -> bool:
    """Does the side to move have any move that leaves its king safe?"""
    return MoveGenerator(state.board).has_legal_move(state.current_turn)


def is_checkmate(state: GameState) -> bool:
    if not is_king_in_check(state):
        return False
    return not has_legal_move(state)


def is_stalemate(state: GameState) -> bool:
    if is_king_in_check(state):
        return False
    return not has_legal_move(state)

