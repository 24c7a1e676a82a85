"""Position — board plus side to move, en-passant target and clocks."""

from __future__ import annotations

from grandchess.core.board import Board
from grandchess.core.enums import Color, SetupMode
from grandchess.core.move_generator import DEFAULT_PAWN_FIRST_MOVE, MoveGenerator
from grandchess.core.types import Square


class Position:
    """Full game position.

    ``move_count`` counts completed plies; ``fullmove_number`` is derived from
    it. ``pawn_first_move`` is the number of squares an unmoved pawn may
    advance, set by the setup mode. ``setup_mode`` is only bookkeeping for
    restarting a game.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "en_passant",
        "halfmove_clock",
        "move_count",
        "setup_mode",
        "pawn_first_move",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        en_passant: Square | None = None,
        halfmove_clock: int = 0,
        move_count: int = 0,
        setup_mode: SetupMode = SetupMode.CUSTOM,
        pawn_first_move: int = DEFAULT_PAWN_FIRST_MOVE,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.en_passant = en_passant
        self.halfmove_clock = halfmove_clock
        self.move_count = move_count
        self.setup_mode = setup_mode
        self.pawn_first_move = pawn_first_move

    @property
    def size(self) -> int:
        return self.board.size

    @property
    def fullmove_number(self) -> int:
        return self.move_count // 2 + 1

    def move_generator(self) -> MoveGenerator:
        return MoveGenerator(self.board, self.pawn_first_move)

    def reset_turn_state(self, side_to_move: Color = Color.WHITE) -> None:
        """Start counting afresh without touching the pieces."""
        self.side_to_move = side_to_move
        self.en_passant = None
        self.halfmove_clock = 0
        self.move_count = 0

    def copy(self) -> Position:
        """Independent snapshot; pieces are immutable so the grid copy suffices."""
        return Position(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            en_passant=self.en_passant,
            halfmove_clock=self.halfmove_clock,
            move_count=self.move_count,
            setup_mode=self.setup_mode,
            pawn_first_move=self.pawn_first_move,
        )

    def __repr__(self) -> str:
        return (
            f"Position(size={self.size}, side_to_move={self.side_to_move}, "
            f"en_passant={self.en_passant}, halfmove_clock={self.halfmove_clock}, "
            f"move_count={self.move_count})"
        )
