"""GameController: the central orchestrator of a game.

Coordinates players and the :class:`GameState`, and turns move outcomes into
callbacks so the UI, a network session or tests can subscribe.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field

from grandchess.core.board import Board
from grandchess.core.enums import Color, GameResult, PieceType
from grandchess.core.notation import FenImportResult
from grandchess.core.types import Square
from grandchess.game.interfaces import GameConfig, GamePhase, IGameController, IPlayer
from grandchess.game.state import GameState, MoveOutcome

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

ColorCallback = Callable[[Color], None]
MoveCallback = Callable[[str], None]  # notation
PromotionCallback = Callable[[Square, Color], None]
GameOverCallback = Callable[[GameResult], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_turn_changed: list[ColorCallback] = field(default_factory=list)
    on_check: list[ColorCallback] = field(default_factory=list)
    on_move: list[MoveCallback] = field(default_factory=list)
    on_promotion_requested: list[PromotionCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Orchestrates a full game: validates moves, switches turns, notifies
    listeners.

    Thread-safety: methods are meant to be called from a single thread (the
    main/UI thread). AI results arrive via ``submit_move``, which an
    ``EngineWorker`` reaches through a queued signal/slot connection.
    """

    __slots__ = ("_state", "_players", "_phase", "events")

    def __init__(self, rng: random.Random | None = None) -> None:
        self._state = GameState(rng=rng or random.Random())
        self._players: dict[Color, IPlayer] = {}
        self._phase = GamePhase.NOT_STARTED
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self._state.side_to_move)

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(
        self,
        white: IPlayer,
        black: IPlayer,
        config: GameConfig | None = None,
        board: Board | None = None,
    ) -> None:
        """Start a game; a ``CUSTOM`` config plays the arrangement in *board*.

        Raises :class:`ValueError` when the setup cannot be played.
        """
        config = config or GameConfig()
        self._state.setup(config.setup_mode, config.board_size, board)
        self._players = {Color.WHITE: white, Color.BLACK: black}
        self._begin()

    def reset(self) -> None:
        self._state.reset()
        self._begin()

    def submit_move(self, from_sq: Square, to_sq: Square) -> MoveOutcome:
        if self._phase not in (GamePhase.AWAITING_MOVE, GamePhase.THINKING):
            _LOGGER.debug("Move refused in phase %s", self._phase.name)
            return self._state.refused()

        outcome = self._state.try_make_move(from_sq, to_sq)
        if not outcome:
            return outcome

        if outcome.promotion_pending:
            mover = self.current_player
            if mover is not None and not mover.is_human:
                return self.complete_promotion(PieceType.QUEEN)
            assert outcome.promotion_square is not None
            self._set_phase(GamePhase.AWAITING_PROMOTION)
            for cb in self.events.on_promotion_requested:
                cb(outcome.promotion_square, outcome.side_to_move)
            return outcome

        self._after_move(outcome)
        return outcome

    def complete_promotion(self, piece_type: PieceType | None) -> MoveOutcome:
        outcome = self._state.complete_promotion(piece_type)
        if outcome:
            self._after_move(outcome)
        return outcome

    # ── Import / export ──────────────────────────────────────────────────

    def import_fen(self, fen: str) -> FenImportResult:
        """Load a position; on failure the running game is left as it was."""
        result = self._state.import_fen(fen)
        if result.success:
            self._begin()
        return result

    def export_fen(self) -> str:
        return self._state.export_fen()

    def load_transcript(self, data: str, size: int | None = None) -> None:
        """Rehydrate the board a remote peer defined. Raises ``ValueError``."""
        self._state.load_transcript(data, size)
        self._begin()

    # ── Internal helpers ─────────────────────────────────────────────────

    def _begin(self) -> None:
        if self._state.is_game_over:
            self._emit_game_over(self._state.result)
            return
        self._emit_turn_changed(self._state.side_to_move)
        self._prompt_current_player()

    def _after_move(self, outcome: MoveOutcome) -> None:
        for cb in self.events.on_move:
            cb(outcome.notation)
        if outcome.is_check:
            for cb in self.events.on_check:
                cb(outcome.side_to_move)

        if outcome.result.is_terminal:
            self._emit_game_over(outcome.result)
            return

        self._emit_turn_changed(outcome.side_to_move)
        self._prompt_current_player()

    def _prompt_current_player(self) -> None:
        """Ask the current player to move."""
        cp = self.current_player
        if cp is None or cp.is_human:
            self._set_phase(GamePhase.AWAITING_MOVE)
            return

        self._set_phase(GamePhase.THINKING)
        snapshot = self._state.position.copy()
        cp.request_move(snapshot)

    def _emit_turn_changed(self, color: Color) -> None:
        for cb in self.events.on_turn_changed:
            cb(color)

    def _emit_game_over(self, result: GameResult) -> None:
        self._set_phase(GamePhase.GAME_OVER)
        _LOGGER.info("Game over: %s", result.name)
        for cb in self.events.on_game_over:
            cb(result)

    def _set_phase(self, phase: GamePhase) -> None:
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)
