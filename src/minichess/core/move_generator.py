"""Legal move generation for every piece type, castling included."""

from __future__ import annotations

from typing import TYPE_CHECKING

from minichess.core.attacks import (
    KING_OFFSETS,
    KNIGHT_OFFSETS,
    find_king,
    is_in_check,
    is_square_under_attack,
)
from minichess.core.enums import Color, PieceType
from minichess.core.move import Move
from minichess.core.types import Square, pawn_direction, pawn_home_row

if TYPE_CHECKING:
    from minichess.core.board import Board
    from minichess.core.piece import Piece
    from minichess.core.state import GameState


BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS


class MoveGenerator:
    """Generates legal destinations for pieces on a :class:`Board`.

    Every candidate is played on a private scratch copy of the board, taken
    back afterwards, and kept only if the mover's own king is not attacked.
    The board passed in is never modified.
    """

    __slots__ = ("_board", "_scratch", "_kings")

    def __init__(self, board: Board) -> None:
        self._board = board
        self._scratch: Board | None = None
        self._kings: dict[Color, Square] = {}

    # -- Public API ---------------------------------------------------------

    def destinations(self, sq: Square) -> list[Square]:
        """Legal target squares for the piece on *sq* (empty if none)."""
        sq = Square(*sq)
        piece = self._board[sq]
        if piece is None:
            return []

        candidates: list[Square] = []
        ptype = piece.piece_type
        if ptype == PieceType.PAWN:
            self._gen_pawn(sq, piece, candidates)
        elif ptype == PieceType.KNIGHT:
            self._gen_knight(sq, piece, candidates)
        elif ptype == PieceType.BISHOP:
            self._gen_sliding(sq, piece, BISHOP_DIRS, candidates)
        elif ptype == PieceType.ROOK:
            self._gen_sliding(sq, piece, ROOK_DIRS, candidates)
        elif ptype == PieceType.QUEEN:
            self._gen_sliding(sq, piece, QUEEN_DIRS, candidates)
        else:
            self._gen_king(sq, piece, candidates)

        return [to_sq for to_sq in candidates if self.leaves_king_safe(sq, to_sq)]

    def legal_moves(self, color: Color) -> list[Move]:
        """All legal moves for *color*, squares in row-major order."""
        moves: list[Move] = []
        for sq in self._board.pieces(color):
            moves.extend(Move(sq, to_sq) for to_sq in self.destinations(sq))
        return moves

    def has_legal_move(self, color: Color) -> bool:
        """Whether *color* has at least one legal move (stops early)."""
        return any(self.destinations(sq) for sq in self._board.pieces(color))

    def leaves_king_safe(self, from_sq: Square, to_sq: Square) -> bool:
        """Is the mover's king unattacked after playing *from_sq* → *to_sq*?"""
        piece = self._board[from_sq]
        if piece is None:
            return False
        is_king = piece.piece_type == PieceType.KING
        if is_king and abs(to_sq[1] - from_sq[1]) == 2:
            # Castling also moves the rook.
            return not is_in_check(self._board.with_move(from_sq, to_sq), piece.color)

        if self._scratch is None:
            self._scratch = self._board.copy()
        scratch = self._scratch
        king_sq = Square(*to_sq) if is_king else self._king_square(piece.color)
        captured = scratch[to_sq]
        scratch[to_sq] = piece
        scratch[from_sq] = None
        try:
            return not is_square_under_attack(king_sq, scratch, piece.color)
        finally:
            scratch[from_sq] = piece
            scratch[to_sq] = captured

    def can_castle(self, sq: Square, kingside: bool) -> bool:
        """Can the unmoved king on *sq* castle toward the chosen corner?"""
        board = self._board
        sq = Square(*sq)
        king = board[sq]
        if king is None or king.piece_type != PieceType.KING or king.has_moved:
            return False

        rook_col = board.cols - 1 if kingside else 0
        rook = board[Square(sq.row, rook_col)]
        if (
            rook is None
            or rook.piece_type != PieceType.ROOK
            or rook.has_moved
            or rook.color != king.color
        ):
            return False

        if is_in_check(board, king.color):
            return False

        step = 1 if kingside else -1
        end_col = sq.col + 2 * step
        # The king may land on the rook's corner, never beyond it.
        if (end_col - rook_col) * step > 0:
            return False

        for col in range(sq.col + step, rook_col, step):
            if not board.is_empty(Square(sq.row, col)):
                return False

        for col in range(sq.col, end_col + step, step):
            if is_square_under_attack(Square(sq.row, col), board, king.color):
                return False
        return True

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, piece: Piece, moves: list[Square]) -> None:
        board = self._board
        direction = pawn_direction(piece.color)

        one_step = sq.offset(direction, 0)
        if board.in_bounds(one_step) and board.is_empty(one_step):
            moves.append(one_step)
            two_step = sq.offset(2 * direction, 0)
            if (
                sq.row == pawn_home_row(piece.color, board.rows)
                and board.in_bounds(two_step)
                and board.is_empty(two_step)
            ):
                moves.append(two_step)

        for d_col in (-1, 1):
            cap_sq = sq.offset(direction, d_col)
            if not board.in_bounds(cap_sq):
                continue
            target = board[cap_sq]
            if target is not None and target.color != piece.color:
                moves.append(cap_sq)

    def _gen_knight(self, sq: Square, piece: Piece, moves: list[Square]) -> None:
        self._gen_steps(sq, piece, KNIGHT_OFFSETS, moves)

    def _gen_steps(
        self,
        sq: Square,
        piece: Piece,
        offsets: tuple[tuple[int, int], ...],
        moves: list[Square],
    ) -> None:
        board = self._board
        for d_row, d_col in offsets:
            to_sq = sq.offset(d_row, d_col)
            if not board.in_bounds(to_sq):
                continue
            target = board[to_sq]
            if target is None or target.color != piece.color:
                moves.append(to_sq)

    def _gen_sliding(
        self,
        sq: Square,
        piece: Piece,
        directions: tuple[tuple[int, int], ...],
        moves: list[Square],
    ) -> None:
        board = self._board
        for d_row, d_col in directions:
            to_sq = sq.offset(d_row, d_col)
            while board.in_bounds(to_sq):
                target = board[to_sq]
                if target is None:
                    moves.append(to_sq)
                    to_sq = to_sq.offset(d_row, d_col)
                    continue
                if target.color != piece.color:
                    moves.append(to_sq)
                break

    def _gen_king(self, sq: Square, piece: Piece, moves: list[Square]) -> None:
        # Steps into attacked squares are dropped by leaves_king_safe.
        self._gen_steps(sq, piece, KING_OFFSETS, moves)

        if piece.has_moved:
            return
        if self.can_castle(sq, kingside=True):
            moves.append(sq.offset(0, 2))
        if self.can_castle(sq, kingside=False):
            moves.append(sq.offset(0, -2))

    def _king_square(self, color: Color) -> Square:
        king_sq = self._kings.get(color)
        if king_sq is None:
            king_sq = self._kings[color] = find_king(self._board, color)
        return king_sq


def calculate_valid_moves(position: Square, state: GameState) -> list[Square]:
    """Legal destinations for the piece on *position* in *state*.

    Empty squares and pieces of the side not to move yield no moves.
    """
    position = Square(*position)
    piece = state.board[position]
    if piece is None or piece.color != state.current_turn:
        return []
    return MoveGenerator(state.board).destinations(position)


def all_legal_moves(state: GameState, color: Color | None = None) -> list[Move]:
    """Every legal move for *color* (default: the side to move)."""
    side = state.current_turn if color is None else color
    return MoveGenerator(state.board).legal_moves(side)
