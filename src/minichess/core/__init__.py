"""Core domain layer: pure rules for small-board chess variants.

Quick start::

    from minichess.core import GameState, calculate_valid_moves, make_move

    state = GameState.initial("6x6", "Los Alamos Chess")
    targets = calculate_valid_moves(Square(4, 0), state)
    state = make_move(state, Square(4, 0), targets[0])
"""

from minichess.core.attacks import (
    find_king,
    is_in_check,
    is_king_in_check,
    is_square_under_attack,
)
from minichess.core.board import (
    PROMOTION_TYPES,
    Board,
    MissingKingError,
    initialize_board,
)
from minichess.core.enums import BoardSize, BoardTheme, Color, GameVariant, PieceType
from minichess.core.move import Move
from minichess.core.move_generator import (
    MoveGenerator,
    all_legal_moves,
    calculate_valid_moves,
)
from minichess.core.piece import Piece
from minichess.core.rules import has_legal_move, is_checkmate, is_stalemate
from minichess.core.state import GameState, apply_move, make_move
from minichess.core.types import Square, dimensions

__all__ = [
    # Enums
    "BoardSize",
    "BoardTheme",
    "Color",
    "GameVariant",
    "PieceType",
    # Types / helpers
    "PROMOTION_TYPES",
    "Square",
    "dimensions",
    # Domain objects
    "Board",
    "GameState",
    "MissingKingError",
    "Move",
    "MoveGenerator",
    "Piece",
    # Operations
    "all_legal_moves",
    "apply_move",
    "calculate_valid_moves",
    "find_king",
    "has_legal_move",
    "initialize_board",
    "is_checkmate",
    "is_in_check",
    "is_king_in_check",
    "is_square_under_attack",
    "is_stalemate",
    "make_move",
]
