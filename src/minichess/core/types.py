"""Square type and coordinate helpers.

Board layout (row-major, row 0 at the top)::

    row 0        black back rank
    row 1        black pawns
    ...
    row rows-2   white pawns
    row rows-1   white back rank

White pawns advance toward row 0, black pawns toward the last row.
"""

from __future__ import annotations

from typing import NamedTuple

from minichess.core.enums import BoardSize, Color


class Square(NamedTuple):
    """Zero-indexed board coordinate."""

    row: int
    col: int

    def offset(self, d_row: int, d_col: int) -> Square:
        return Square(self.row + d_row, self.col + d_col)

    def __str__(self) -> str:
        return f"({self.row},{self.col})"


def dimensions(board_size: BoardSize | str) -> tuple[int, int]:
    """``(rows, cols)`` for *board_size*: ``6x6`` → 6×6, ``6x8`` → 8×6."""
    return BoardSize(board_size).dimensions


def pawn_direction(color: Color) -> int:
    """Row delta of a single pawn step for *color*."""
    return -1 if color == Color.WHITE else 1


def pawn_home_row(color: Color, rows: int) -> int:
    return rows - 2 if color == Color.WHITE else 1


def promotion_row(color: Color, rows: int) -> int:
    """The rank farthest from *color*'s starting side."""
    return 0 if color == Color.WHITE else rows - 1
