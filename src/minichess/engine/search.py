"""Shared engine search models and protocol."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from minichess.core.move import Move
    from minichess.core.state import GameState

MAX_SEARCH_DEPTH = 5


class SearchOutcome(IntEnum):
    """Why a search did or did not produce a move."""

    MOVE = 0
    CHECKMATE = 1
    STALEMATE = 2


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search.

    ``score`` is white-centric: positive favours white.
    """

    best_move: Move | None
    outcome: SearchOutcome
    score: float
    depth: int
    nodes: int

    @property
    def is_game_over(self) -> bool:
        return self.outcome != SearchOutcome.MOVE


def depth_for_level(level: int) -> int:
    """Search depth in plies for a computer level: 1 → 2, 2 → 3, 3 → 4."""
    return max(1, min(level + 1, MAX_SEARCH_DEPTH))


class IEngine(Protocol):
    """Protocol for engines used by the game layer."""

    def search(self, state: GameState, depth: int | None = None) -> SearchResult: ...
