"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass, field

from minichess.core.enums import PieceType
from minichess.core.types import Square

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """A move from one square to another.

    Castling and promotion are not stored as flags: they follow from the
    board geometry when the move is applied. ``score`` is filled in by the
    search and is ignored by equality.
    """

    from_sq: Square
    to_sq: Square
    promotion: PieceType | None = None
    score: float | None = field(default=None, compare=False)

    def __str__(self) -> str:
        base = f"{self.from_sq}->{self.to_sq}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base
