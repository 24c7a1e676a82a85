"""Engine package: alpha-beta search, evaluation and Qt worker bridge."""

from grandchess.engine.alphabeta import MATE_SCORE, AlphaBetaEngine
from grandchess.engine.evaluation import PIECE_VALUES, evaluate, evaluate_for
from grandchess.engine.qt_bridge import EngineWorker
from grandchess.engine.search import Difficulty, IEngine, SearchLimits, SearchResult

__all__ = [
    "MATE_SCORE",
    "PIECE_VALUES",
    "AlphaBetaEngine",
    "Difficulty",
    "EngineWorker",
    "IEngine",
    "SearchLimits",
    "SearchResult",
    "evaluate",
    "evaluate_for",
]
