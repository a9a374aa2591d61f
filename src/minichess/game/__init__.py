"""Game management layer: settings, controller and worker-thread session.

Quick start::

    from minichess.game import GameController, GameSettings

    ctrl = GameController()
    ctrl.new_game(GameSettings(game_variant=GameVariant.DIANA))
    ctrl.click(Square(4, 0))
    ctrl.click(Square(3, 0))
    ctrl.play_computer_move()
"""

from minichess.game.controller import (
    GameController,
    GameEvents,
    MoveRecord,
    PendingPromotion,
)
from minichess.game.engine_session import EngineSession
from minichess.game.settings import GameSettings

__all__ = [
    "EngineSession",
    "GameController",
    "GameEvents",
    "GameSettings",
    "MoveRecord",
    "PendingPromotion",
]
