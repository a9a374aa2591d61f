"""Board - piece placement on a small rectangular grid."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from minichess.core.enums import BoardSize, Color, GameVariant, PieceType
from minichess.core.piece import Piece
from minichess.core.types import Square, promotion_row

_P = PieceType

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)

_BACK_RANKS: dict[GameVariant, tuple[tuple[PieceType, ...], tuple[PieceType, ...]]] = {
    # variant -> (white back rank, black back rank)
    GameVariant.DIANA: (
        (_P.ROOK, _P.BISHOP, _P.KNIGHT, _P.KING, _P.BISHOP, _P.ROOK),
        (_P.ROOK, _P.BISHOP, _P.KNIGHT, _P.KING, _P.BISHOP, _P.ROOK),
    ),
    GameVariant.LOS_ALAMOS: (
        (_P.ROOK, _P.KNIGHT, _P.QUEEN, _P.KING, _P.KNIGHT, _P.ROOK),
        (_P.ROOK, _P.KNIGHT, _P.QUEEN, _P.KING, _P.KNIGHT, _P.ROOK),
    ),
    GameVariant.MALLETT: (
        (_P.ROOK, _P.KNIGHT, _P.QUEEN, _P.KING, _P.KNIGHT, _P.ROOK),
        (_P.ROOK, _P.BISHOP, _P.QUEEN, _P.KING, _P.BISHOP, _P.ROOK),
    ),
}


class MissingKingError(LookupError):
    """Raised when a side has no king on the board."""

    def __init__(self, color: Color) -> None:
        super().__init__(f"No {color} king on board")
        self.color = color


class Board:
    """Grid of optional pieces addressed by :class:`Square`.

    A board held by a game state is treated as frozen: transitions work on
    :meth:`copy` and never write to the original.
    """

    __slots__ = ("_grid", "rows", "cols")

    def __init__(self, rows: int, cols: int) -> None:
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Invalid board dimensions: {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self._grid: list[list[Piece | None]] = [[None] * cols for _ in range(rows)]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._grid[sq[0]][sq[1]]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        self._grid[sq[0]][sq[1]] = piece

    def in_bounds(self, sq: Square) -> bool:
        return 0 <= sq[0] < self.rows and 0 <= sq[1] < self.cols

    def is_empty(self, sq: Square) -> bool:
        return self._grid[sq[0]][sq[1]] is None

    # -- Query helpers ------------------------------------------------------

    def squares(self) -> Iterator[Square]:
        """All squares, row by row, left to right."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield Square(row, col)

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        for row, cells in enumerate(self._grid):
            for col, piece in enumerate(cells):
                if piece is not None:
                    yield Square(row, col), piece

    def pieces(self, color: Color) -> list[Square]:
        """Squares occupied by *color*, in row-major order."""
        return [sq for sq, piece in self.occupied() if piece.color == color]

    def king_square(self, color: Color) -> Square:
        """Return the king square for *color*."""
        for sq, piece in self.occupied():
            if piece.piece_type == PieceType.KING and piece.color == color:
                return sq
        raise MissingKingError(color)

    # -- Copying ------------------------------------------------------------

    def copy(self) -> Board:
        b = Board.__new__(Board)
        b.rows = self.rows
        b.cols = self.cols
        b._grid = [row.copy() for row in self._grid]
        return b

    def with_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> Board:
        """Copy of this board with the piece on *from_sq* moved to *to_sq*.

        A king travelling two columns castles: the corner rook on that side
        lands next to the king's destination, on the inner side. A pawn that
        reaches the far rank becomes *promotion* (a queen when omitted).
        """
        from_sq = Square(*from_sq)
        to_sq = Square(*to_sq)
        piece = self[from_sq]
        if piece is None:
            raise ValueError(f"No piece on {from_sq}")
        if promotion is not None and promotion not in PROMOTION_TYPES:
            raise ValueError(f"Cannot promote to {promotion.name.lower()}")

        b = self.copy()

        if piece.piece_type == PieceType.KING and abs(to_sq.col - from_sq.col) == 2:
            kingside = to_sq.col > from_sq.col
            rook_from = Square(from_sq.row, b.cols - 1 if kingside else 0)
            rook_to = Square(to_sq.row, to_sq.col - 1 if kingside else to_sq.col + 1)
            rook = b[rook_from]
            # Lift the rook first: on 6-wide boards it stands on the king's target.
            b[rook_from] = None
            if rook is not None:
                b[rook_to] = rook.moved()

        if piece.piece_type == PieceType.PAWN and to_sq.row == promotion_row(
            piece.color, b.rows
        ):
            b[to_sq] = Piece(promotion or PieceType.QUEEN, piece.color, True)
        else:
            b[to_sq] = piece.moved()
        b[from_sq] = None
        return b

    # -- Factories ----------------------------------------------------------

    @classmethod
    def empty(cls, board_size: BoardSize | str = BoardSize.SIX_BY_SIX) -> Board:
        rows, cols = BoardSize(board_size).dimensions
        return cls(rows, cols)

    @classmethod
    def initial(
        cls,
        board_size: BoardSize | str = BoardSize.SIX_BY_SIX,
        variant: GameVariant | str = GameVariant.PAWNS,
    ) -> Board:
        """Starting position for *variant* on a board of *board_size*."""
        if not isinstance(variant, GameVariant):
            variant = GameVariant.parse(variant)

        b = cls.empty(board_size)
        last = b.rows - 1

        for col in range(b.cols):
            b[Square(1, col)] = Piece(PieceType.PAWN, Color.BLACK)
            b[Square(last - 1, col)] = Piece(PieceType.PAWN, Color.WHITE)

        back_ranks = _BACK_RANKS.get(variant)
        if back_ranks is None:
            king_col = b.cols // 2
            b[Square(0, king_col)] = Piece(PieceType.KING, Color.BLACK)
            b[Square(last, king_col)] = Piece(PieceType.KING, Color.WHITE)
            return b

        white_rank, black_rank = back_ranks
        for col in range(b.cols):
            b[Square(0, col)] = Piece(black_rank[col], Color.BLACK)
            b[Square(last, col)] = Piece(white_rank[col], Color.WHITE)
        return b

    @classmethod
    def from_rows(cls, rows: Iterable[str]) -> Board:
        """Build a board from text rows, top row first.

        Letters follow :meth:`Piece.from_char`; ``.`` marks an empty square::

            Board.from_rows(["...k..", "......", ..., "...K.."])
        """
        lines = [line.replace(" ", "") for line in rows]
        if not lines or any(len(line) != len(lines[0]) for line in lines):
            raise ValueError("Board rows must be non-empty and of equal width")
        b = cls(len(lines), len(lines[0]))
        for row, line in enumerate(lines):
            for col, char in enumerate(line):
                if char != ".":
                    b[Square(row, col)] = Piece.from_char(char)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        lines: list[str] = []
        for row in self._grid:
            lines.append(" ".join(str(p) if p else "." for p in row))
        return "\n".join(lines)


def initialize_board(
    board_size: BoardSize | str = BoardSize.SIX_BY_SIX,
    variant: GameVariant | str = GameVariant.PAWNS,
) -> Board:
    """Create the starting board for *variant* on *board_size*."""
    return Board.initial(board_size, variant)
