"""Core enumerations for the minichess domain."""

from __future__ import annotations

import logging
from enum import Enum, IntEnum

_LOGGER = logging.getLogger(__name__)


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @classmethod
    def parse(cls, name: str) -> Color:
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Invalid color: {name!r}") from None

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class BoardSize(str, Enum):
    """Supported board sizes, named ``<cols>x<rows>``."""

    SIX_BY_SIX = "6x6"
    SIX_BY_EIGHT = "6x8"

    @property
    def dimensions(self) -> tuple[int, int]:
        """``(rows, cols)`` of the board."""
        if self is BoardSize.SIX_BY_EIGHT:
            return 8, 6
        return 6, 6

    def __str__(self) -> str:
        return self.value


class GameVariant(str, Enum):
    """Starting-position rulesets."""

    PAWNS = "Pawns Chess"
    DIANA = "Diana Chess"
    LOS_ALAMOS = "Los Alamos Chess"
    MALLETT = "Mallett Chess"

    @classmethod
    def parse(cls, name: str) -> GameVariant:
        """Variant by display name; unknown names fall back to Pawns Chess."""
        try:
            return cls(name)
        except ValueError:
            _LOGGER.warning("Unknown game variant %r, using %s", name, cls.PAWNS.value)
            return cls.PAWNS

    def __str__(self) -> str:
        return self.value


class BoardTheme(str, Enum):
    """Board color schemes offered to the UI."""

    CLASSIC = "classic"
    BROWN = "brown"
    GREEN = "green"
    NAVY = "navy"

    def __str__(self) -> str:
        return self.value
