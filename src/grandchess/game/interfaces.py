"""Abstract interfaces for the game layer.

High-level :class:`GameController` depends on these ABCs, not on concrete
player implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from grandchess.core.enums import Color, SetupMode
from grandchess.core.types import (
    DEFAULT_BOARD_SIZE,
    MAX_BOARD_SIZE,
    MIN_BOARD_SIZE,
    is_valid_size,
)

if TYPE_CHECKING:
    from grandchess.core.enums import PieceType
    from grandchess.core.position import Position
    from grandchess.core.types import Square
    from grandchess.game.state import MoveOutcome


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a game."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    AWAITING_PROMOTION = auto()  # pawn reached the far rank, piece not chosen
    THINKING = auto()  # AI is computing
    GAME_OVER = auto()


# ── Configuration ────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Board size and starting array for a new game."""

    board_size: int = DEFAULT_BOARD_SIZE
    setup_mode: SetupMode = SetupMode.TWO_LINES

    def __post_init__(self) -> None:
        if not is_valid_size(self.board_size):
            raise ValueError(
                f"Board size must be between {MIN_BOARD_SIZE} and {MAX_BOARD_SIZE}"
            )


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPlayer(ABC):
    """Interface for a game participant (human or AI)."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def request_move(self, position: Position) -> None:
        """Begin the move-selection process.

        For humans this is a no-op (they interact via UI).
        For AI this kicks off a search on the given snapshot.
        """


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def new_game(
        self,
        white: IPlayer,
        black: IPlayer,
        config: GameConfig | None = None,
    ) -> None:
        """Set up a new game."""

    @abstractmethod
    def submit_move(self, from_sq: Square, to_sq: Square) -> MoveOutcome:
        """Submit a move. The outcome is falsy if it was refused."""

    @abstractmethod
    def complete_promotion(self, piece_type: PieceType) -> MoveOutcome:
        """Choose the piece for a pending promotion."""

    @abstractmethod
    def reset(self) -> None:
        """Restart the current game from its starting array."""
