"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass, replace

from minichess.core.enums import Color, PieceType

_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "P",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}

_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    **{letter: (Color.WHITE, pt) for pt, letter in _LETTERS.items()},
    **{letter.lower(): (Color.BLACK, pt) for pt, letter in _LETTERS.items()},
}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a piece on the board."""

    piece_type: PieceType
    color: Color
    has_moved: bool = False

    def moved(self) -> Piece:
        """Copy of this piece flagged as having moved."""
        if self.has_moved:
            return self
        return replace(self, has_moved=True)

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """Letter (uppercase = white, lowercase = black)."""
        letter = _LETTERS[self.piece_type]
        return letter if self.color == Color.WHITE else letter.lower()

    @classmethod
    def from_char(cls, char: str, has_moved: bool = False) -> Piece:
        """Create piece from a letter, e.g. 'N' → white knight."""
        try:
            color, ptype = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(ptype, color, has_moved)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.piece_type)]
