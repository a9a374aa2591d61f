"""Computer opponent: minimax search and Qt worker bridge."""

from minichess.engine.evaluation import PIECE_VALUES, evaluate_position
from minichess.engine.minimax import MinimaxEngine, calculate_computer_move, minimax
from minichess.engine.qt_bridge import EngineWorker
from minichess.engine.search import (
    IEngine,
    SearchOutcome,
    SearchResult,
    depth_for_level,
)

__all__ = [
    "EngineWorker",
    "IEngine",
    "MinimaxEngine",
    "PIECE_VALUES",
    "SearchOutcome",
    "SearchResult",
    "calculate_computer_move",
    "depth_for_level",
    "evaluate_position",
    "minimax",
]
