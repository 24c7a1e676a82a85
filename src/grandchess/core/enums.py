"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import IntEnum, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def forward(self) -> int:
        """Rank step of this side's pawns."""
        return 1 if self == Color.WHITE else -1

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


class GameResult(IntEnum):
    """Outcome of a game. Anything but ``PLAYING`` is final."""

    PLAYING = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    STALEMATE = 3
    DRAW_BY_CLOCK = 4

    @property
    def is_terminal(self) -> bool:
        return self != GameResult.PLAYING

    @classmethod
    def win_for(cls, color: Color) -> GameResult:
        return cls.WHITE_WINS if color == Color.WHITE else cls.BLACK_WINS


class SetupMode(IntEnum):
    """Starting arrays a game can be created from."""

    TWO_LINES = auto()
    ONE_LINE = auto()
    THREE_LINES = auto()
    CUSTOM = auto()

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()
