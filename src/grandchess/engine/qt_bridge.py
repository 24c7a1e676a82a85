"""Qt bridge to run engine search in a worker thread."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from grandchess.core.position import Position
from grandchess.engine.alphabeta import AlphaBetaEngine
from grandchess.engine.search import Difficulty, IEngine, SearchLimits

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes engine moves on demand.

    Callers hand over a snapshot (``position.copy()``) with the side to move
    set to the engine's color; the live game never crosses the thread.
    """

    best_move_ready = pyqtSignal(int, object, int, int, int)
    search_no_move = pyqtSignal(int, int, int, int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_engine", "_limits")

    def __init__(
        self,
        *,
        difficulty: Difficulty = Difficulty.MEDIUM,
        engine: IEngine | None = None,
    ) -> None:
        super().__init__()
        self._engine: IEngine = engine or AlphaBetaEngine()
        self._limits = SearchLimits.for_difficulty(difficulty)

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    @pyqtSlot(object, int)
    def request_move(self, position_obj: object, request_id: int) -> None:
        """Search for the best move in *position_obj* and emit result."""
        if not isinstance(position_obj, Position):
            self.search_error.emit(request_id, "Engine received invalid position")
            return

        try:
            result = self._engine.search(position_obj, self._limits)
        except Exception as exc:
            _LOGGER.exception("Engine search %d failed", request_id)
            self.search_error.emit(request_id, str(exc))
            return

        if result.best_move is None:
            self.search_no_move.emit(
                request_id,
                result.score_cp,
                result.depth,
                result.nodes,
            )
            return

        self.best_move_ready.emit(
            request_id,
            result.best_move,
            result.score_cp,
            result.depth,
            result.nodes,
        )

    @pyqtSlot(int)
    def set_difficulty(self, difficulty: int) -> None:
        """Update search limits (takes effect on the next search)."""
        self._limits = SearchLimits.for_difficulty(Difficulty(difficulty))
