"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator

import pytest

from minichess.core.board import Board
from minichess.core.enums import Color
from minichess.core.state import GameState

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton Qt application for thread and signal tests."""
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


def _state_from_rows(
    rows: list[str],
    turn: Color = Color.WHITE,
    *,
    computer_level: int = 2,
    player_color: Color = Color.WHITE,
) -> GameState:
    state = GameState(
        board=Board.from_rows(rows),
        current_turn=turn,
        computer_level=computer_level,
        player_color=player_color,
    )
    return state.with_status()


@pytest.fixture
def make_state() -> Callable[..., GameState]:
    """Factory for a hand-drawn position with status flags computed.

    Rows are listed top first; uppercase letters are white pieces.
    """
    return _state_from_rows
