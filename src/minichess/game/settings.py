"""User-configurable game settings."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from minichess.core.enums import BoardSize, BoardTheme, Color, GameVariant
from minichess.core.state import GameState

MIN_COMPUTER_LEVEL = 1
MAX_COMPUTER_LEVEL = 3

# Accepted spellings -> field name. Form submissions use camelCase keys.
_KEY_ALIASES: dict[str, str] = {
    "player_color": "player_color",
    "playerColor": "player_color",
    "computer_level": "computer_level",
    "computerLevel": "computer_level",
    "board_theme": "board_theme",
    "boardTheme": "board_theme",
    "board_size": "board_size",
    "boardSize": "board_size",
    "game_variant": "game_variant",
    "gameVariant": "game_variant",
}


@dataclass
class GameSettings:
    """All options chosen before a game starts."""

    player_color: Color = Color.WHITE
    computer_level: int = 2  # 1–3
    board_theme: BoardTheme = BoardTheme.GREEN
    board_size: BoardSize = BoardSize.SIX_BY_SIX
    game_variant: GameVariant = GameVariant.PAWNS

    def __post_init__(self) -> None:
        if not MIN_COMPUTER_LEVEL <= self.computer_level <= MAX_COMPUTER_LEVEL:
            raise ValueError(
                f"Computer level must be between {MIN_COMPUTER_LEVEL} and "
                f"{MAX_COMPUTER_LEVEL}, got {self.computer_level}"
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> GameSettings:
        """Parse settings from plain values, e.g. a submitted form.

        Unknown variants fall back to Pawns Chess; any other invalid value
        raises :class:`ValueError`.
        """
        values: dict[str, object] = {}
        for key, raw in data.items():
            name = _KEY_ALIASES.get(key)
            if name is None:
                raise ValueError(f"Unknown setting: {key!r}")
            values[name] = raw

        kwargs: dict[str, Any] = {}
        if "player_color" in values:
            color = values["player_color"]
            kwargs["player_color"] = (
                color if isinstance(color, Color) else Color.parse(str(color))
            )
        if "board_theme" in values:
            kwargs["board_theme"] = BoardTheme(str(values["board_theme"]).lower())
        if "board_size" in values:
            kwargs["board_size"] = BoardSize(str(values["board_size"]))
        if "game_variant" in values:
            kwargs["game_variant"] = GameVariant.parse(str(values["game_variant"]))
        if "computer_level" in values:
            try:
                kwargs["computer_level"] = int(str(values["computer_level"]))
            except ValueError:
                raise ValueError(
                    f"Invalid computer level: {values['computer_level']!r}"
                ) from None
        return cls(**kwargs)

    @classmethod
    def from_state(cls, state: GameState) -> GameSettings:
        """Settings matching the options carried by *state*."""
        return cls(
            player_color=state.player_color,
            computer_level=state.computer_level,
            board_theme=state.board_theme,
            board_size=state.board_size,
            game_variant=state.game_variant,
        )

    def apply_to(self, state: GameState) -> GameState:
        """Copy of *state* using these settings' side, level and theme.

        Board size and variant stay with *state*; they describe its board.
        """
        return replace(
            state,
            player_color=self.player_color,
            computer_level=self.computer_level,
            board_theme=self.board_theme,
        )

    def create_state(self) -> GameState:
        """Starting :class:`GameState` for these settings."""
        return GameState.initial(
            self.board_size,
            self.game_variant,
            player_color=self.player_color,
            computer_level=self.computer_level,
            board_theme=self.board_theme,
        )
