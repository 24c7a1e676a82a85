"""Shared engine search models and protocol."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from grandchess.core.enums import Color
    from grandchess.core.move import Move
    from grandchess.core.position import Position

EASY_RANDOM_MOVE_CHANCE = 0.3


class Difficulty(IntEnum):
    """Opponent strength; the value is the search depth in plies."""

    EASY = 1
    MEDIUM = 2
    HARD = 3

    @property
    def depth(self) -> int:
        return int(self.value)


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation."""

    max_depth: int = Difficulty.MEDIUM.depth
    random_move_chance: float = 0.0

    @classmethod
    def for_difficulty(cls, difficulty: Difficulty) -> SearchLimits:
        chance = EASY_RANDOM_MOVE_CHANCE if difficulty == Difficulty.EASY else 0.0
        return cls(max_depth=difficulty.depth, random_move_chance=chance)


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search."""

    best_move: Move | None
    score_cp: int
    depth: int
    nodes: int


class IEngine(Protocol):
    """Protocol for engines used by the game layer."""

    def search(
        self,
        position: Position,
        limits: SearchLimits,
        color: Color | None = None,
    ) -> SearchResult: ...
