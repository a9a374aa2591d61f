"""Static evaluation used at the leaves of the search."""

from __future__ import annotations

from typing import TYPE_CHECKING

from minichess.core.attacks import is_king_in_check
from minichess.core.enums import Color, PieceType
from minichess.core.move_generator import MoveGenerator
from minichess.core.types import Square

if TYPE_CHECKING:
    from minichess.core.state import GameState

PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 3,
    PieceType.BISHOP: 3,
    PieceType.ROOK: 5,
    PieceType.QUEEN: 9,
    PieceType.KING: 0,
}

MOBILITY_WEIGHT = 0.1
CENTER_WEIGHT = 0.1
CHECK_PENALTY = 0.5


def center_squares(rows: int, cols: int) -> tuple[Square, ...]:
    """The four squares around the middle of a *rows* × *cols* board."""
    mid_row = rows // 2
    mid_col = cols // 2
    return (
        Square(mid_row - 1, mid_col - 1),
        Square(mid_row - 1, mid_col),
        Square(mid_row, mid_col - 1),
        Square(mid_row, mid_col),
    )


def _signed(color: Color, value: float) -> float:
    return value if color == Color.WHITE else -value


def material_balance(state: GameState) -> float:
    score = 0.0
    for _sq, piece in state.board.occupied():
        score += _signed(piece.color, PIECE_VALUES[piece.piece_type])
    return score


def mobility_balance(state: GameState) -> float:
    """White's legal move count minus black's, whoever is to move."""
    gen = MoveGenerator(state.board)
    white = len(gen.legal_moves(Color.WHITE))
    black = len(gen.legal_moves(Color.BLACK))
    return float(white - black)


def center_balance(state: GameState) -> float:
    board = state.board
    score = 0.0
    for sq in center_squares(board.rows, board.cols):
        if not board.in_bounds(sq):
            continue
        piece = board[sq]
        if piece is not None:
            score += _signed(piece.color, 1.0)
    return score


def evaluate_position(state: GameState) -> float:
    """White-centric heuristic score of *state*.

    Material, plus 0.1 per legal move of mobility advantage, plus 0.1 per
    occupied centre square, minus 0.5 for the side to move when in check.
    """
    score = material_balance(state)
    score += MOBILITY_WEIGHT * mobility_balance(state)
    score += CENTER_WEIGHT * center_balance(state)
    if is_king_in_check(state):
        score -= _signed(state.current_turn, CHECK_PENALTY)
    return score
