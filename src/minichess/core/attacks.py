"""Attack detection by direct geometric projection.

Nothing here calls move generation: the move generator uses these checks to
filter king-unsafe moves, so the dependency only runs one way.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from minichess.core.board import Board, MissingKingError
from minichess.core.enums import Color, PieceType
from minichess.core.piece import Piece
from minichess.core.types import Square, pawn_direction

if TYPE_CHECKING:
    from minichess.core.state import GameState

_LOGGER = logging.getLogger(__name__)

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _path_is_clear(board: Board, origin: Square, target: Square) -> bool:
    """Whether every square strictly between *origin* and *target* is empty.

    The two squares must share a row, a column or a diagonal.
    """
    d_row = _sign(target.row - origin.row)
    d_col = _sign(target.col - origin.col)
    row = origin.row + d_row
    col = origin.col + d_col
    while (row, col) != (target.row, target.col):
        if board[Square(row, col)] is not None:
            return False
        row += d_row
        col += d_col
    return True


def attacks_square(board: Board, origin: Square, piece: Piece, target: Square) -> bool:
    """Does *piece* standing on *origin* threaten *target*?"""
    d_row = target.row - origin.row
    d_col = target.col - origin.col
    if d_row == 0 and d_col == 0:
        return False
    abs_row = abs(d_row)
    abs_col = abs(d_col)
    ptype = piece.piece_type

    if ptype == PieceType.KING:
        return abs_row <= 1 and abs_col <= 1

    if ptype == PieceType.PAWN:
        return d_row == pawn_direction(piece.color) and abs_col == 1

    if ptype == PieceType.KNIGHT:
        return (d_row, d_col) in KNIGHT_OFFSETS

    if ptype in (PieceType.BISHOP, PieceType.QUEEN) and abs_row == abs_col:
        return abs_row == 1 or _path_is_clear(board, origin, target)

    if ptype in (PieceType.ROOK, PieceType.QUEEN) and (d_row == 0 or d_col == 0):
        return abs_row + abs_col == 1 or _path_is_clear(board, origin, target)

    return False


def is_square_under_attack(
    square: Square, board: Board, defending_color: Color
) -> bool:
    """Is *square* threatened by any piece not of *defending_color*?"""
    for origin, piece in board.occupied():
        if piece.color == defending_color:
            continue
        if attacks_square(board, origin, piece, square):
            return True
    return False


def find_king(board: Board, color: Color) -> Square:
    """Locate *color*'s king; a missing king is logged and re-raised."""
    try:
        return board.king_square(color)
    except MissingKingError:
        _LOGGER.error("King not found for %s\n%r", color, board)
        raise


def is_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked on *board*?"""
    return is_square_under_attack(find_king(board, color), board, color)


def is_king_in_check(state: GameState) -> bool:
    """Is the king of the side to move in *state* under attack?"""
    return is_in_check(state.board, state.current_turn)
