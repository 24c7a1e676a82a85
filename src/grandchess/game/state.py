"""Game state: the stateful rule engine behind a single game.

Every mutating call returns a :class:`MoveOutcome`; nothing is broadcast
from here. The controller turns outcomes into events.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from grandchess.core.board import Board
from grandchess.core.enums import Color, GameResult, PieceType, SetupMode
from grandchess.core.move import Move
from grandchess.core.move_generator import (
    castling_rook_square,
    is_castling_move,
    promotion_rank,
)
from grandchess.core.notation import (
    FenImportResult,
    board_from_transcript,
    check_suffix,
    import_fen,
    move_to_notation,
    position_to_fen,
)
from grandchess.core.piece import Piece
from grandchess.core.position import Position
from grandchess.core.rules import Rules
from grandchess.core.setup import setup_board
from grandchess.core.types import DEFAULT_BOARD_SIZE, Square, square_name

_LOGGER = logging.getLogger(__name__)

PROMOTION_CHOICES = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


@dataclass(frozen=True, slots=True)
class PendingPromotion:
    """A pawn that reached the far rank and awaits its new kind."""

    from_sq: Square
    to_sq: Square
    pawn: Piece
    captured: Piece | None = None


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    """What happened on a move or promotion attempt.

    Falsy when the attempt was refused; the game is then unchanged.
    """

    success: bool
    notation: str = ""
    side_to_move: Color = Color.WHITE
    is_check: bool = False
    result: GameResult = GameResult.PLAYING
    promotion_square: Square | None = None

    def __bool__(self) -> bool:
        return self.success

    @property
    def promotion_pending(self) -> bool:
        return self.promotion_square is not None


@dataclass
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    notation: str
    fen_after: str
    was_check: bool = False
    was_capture: bool = False


@dataclass
class GameState:
    """Position, result, pending promotion and move history of one game.

    This is a pure data/logic class: no threading, no UI.
    """

    position: Position = field(init=False)
    result: GameResult = field(default=GameResult.PLAYING, init=False)
    pending_promotion: PendingPromotion | None = field(default=None, init=False)
    move_history: list[MoveRecord] = field(default_factory=list, init=False)
    start_board: Board = field(init=False)
    rng: random.Random = field(default_factory=random.Random)

    def __post_init__(self) -> None:
        self.setup()

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(
        self,
        mode: SetupMode = SetupMode.TWO_LINES,
        size: int = DEFAULT_BOARD_SIZE,
        board: Board | None = None,
    ) -> None:
        """Start a new game on a fresh board arranged for *mode*.

        ``CUSTOM`` takes the arrangement from *board* (its size wins) and
        raises :class:`ValueError` when it is not playable; nothing changes
        then.
        """
        if mode == SetupMode.CUSTOM:
            if board is None:
                raise ValueError("Custom setup needs a board")
            new_board = board.copy()
        else:
            new_board = Board(size)

        pawn_first_move = setup_board(new_board, mode, self.rng)
        self._start(
            Position(
                board=new_board,
                setup_mode=mode,
                pawn_first_move=pawn_first_move,
            )
        )

    def reset(self) -> None:
        """Restart with the current setup mode and board size.

        Random arrays are re-rolled; custom and imported games restart from
        the board they began with.
        """
        mode = self.position.setup_mode
        if mode == SetupMode.CUSTOM:
            position = Position(
                board=self.start_board.copy(),
                setup_mode=mode,
                pawn_first_move=self.position.pawn_first_move,
            )
            self._start(position)
        else:
            self.setup(mode, self.position.size)

    def _start(self, position: Position) -> None:
        self.position = position
        self.start_board = position.board.copy()
        self.pending_promotion = None
        self.move_history.clear()
        self.result = Rules.game_result(position)
        _LOGGER.info(
            "New %dx%d game (%s)",
            position.size,
            position.size,
            position.setup_mode.label,
        )

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self.position.board

    @property
    def size(self) -> int:
        return self.position.size

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def is_game_over(self) -> bool:
        return self.result.is_terminal

    @property
    def ply_count(self) -> int:
        return self.position.move_count

    @property
    def fullmove_number(self) -> int:
        return self.position.fullmove_number

    @property
    def last_notation(self) -> str:
        return self.move_history[-1].notation if self.move_history else ""

    def is_in_check(self, color: Color | None = None) -> bool:
        return Rules.is_in_check(self.position, color)

    def legal_moves(self, sq: Square) -> list[Square]:
        """Legal destinations from *sq*; none once the game is over or frozen."""
        if self.is_game_over or self.pending_promotion is not None:
            return []
        return Rules.legal_moves(self.position, sq)

    # ── Move execution ───────────────────────────────────────────────────

    def try_make_move(self, from_sq: Square, to_sq: Square) -> MoveOutcome:
        """Play *from_sq* -> *to_sq* for the side to move if it is legal."""
        if self.is_game_over or self.pending_promotion is not None:
            return self.refused()
        if to_sq not in self.legal_moves(from_sq):
            return self.refused()

        position = self.position
        board = position.board
        piece = board[from_sq]
        assert piece is not None

        victim_sq: Square | None = None
        if to_sq == position.en_passant:
            victim_sq = Rules.en_passant_victim(position, from_sq)
        captured = board[victim_sq] if victim_sq is not None else board[to_sq]
        is_pawn = piece.piece_type == PieceType.PAWN

        notation = move_to_notation(piece, from_sq, to_sq, captured is not None)

        if is_castling_move(piece, from_sq, to_sq):
            direction = 1 if to_sq[0] > from_sq[0] else -1
            rook_sq = castling_rook_square(board, from_sq, direction)
            assert rook_sq is not None
            board.move(rook_sq, (from_sq[0] + direction, from_sq[1]))
        if victim_sq is not None:
            board[victim_sq] = None
        board.move(from_sq, to_sq)

        if is_pawn and abs(to_sq[1] - from_sq[1]) >= 2:
            position.en_passant = (to_sq[0], to_sq[1] - piece.color.forward)
        else:
            position.en_passant = None

        if is_pawn and to_sq[1] == promotion_rank(piece.color, board.size):
            self.pending_promotion = PendingPromotion(from_sq, to_sq, piece, captured)
            _LOGGER.debug("Promotion pending on %s", square_name(to_sq))
            return MoveOutcome(
                True,
                side_to_move=position.side_to_move,
                is_check=self.is_in_check(),
                result=self.result,
                promotion_square=to_sq,
            )

        return self._finish_move(
            Move(from_sq, to_sq),
            notation,
            reset_clock=is_pawn or captured is not None,
            was_capture=captured is not None,
        )

    def complete_promotion(self, piece_type: PieceType | None) -> MoveOutcome:
        """Turn the pending pawn into *piece_type*.

        Pawns, kings and ``None`` are not valid choices and become a queen.
        """
        pending = self.pending_promotion
        if pending is None:
            return self.refused()

        if piece_type not in PROMOTION_CHOICES:
            piece_type = PieceType.QUEEN
        self.board[pending.to_sq] = pending.pawn.promoted(piece_type)
        self.pending_promotion = None

        notation = move_to_notation(
            pending.pawn,
            pending.from_sq,
            pending.to_sq,
            pending.captured is not None,
            promotion=piece_type,
        )
        return self._finish_move(
            Move(pending.from_sq, pending.to_sq),
            notation,
            reset_clock=True,
            was_capture=pending.captured is not None,
        )

    def _finish_move(
        self, move: Move, notation: str, reset_clock: bool, was_capture: bool
    ) -> MoveOutcome:
        position = self.position
        position.move_count += 1
        position.halfmove_clock = 0 if reset_clock else position.halfmove_clock + 1
        position.side_to_move = position.side_to_move.opposite

        notation += check_suffix(position)
        is_check = self.is_in_check()
        self.result = Rules.game_result(position)

        self.move_history.append(
            MoveRecord(
                move=move,
                notation=notation,
                fen_after=position_to_fen(position),
                was_check=is_check,
                was_capture=was_capture,
            )
        )
        _LOGGER.debug("Move %d: %s", position.move_count, notation)
        if self.result.is_terminal:
            _LOGGER.info("Game over after %s: %s", notation, self.result.name)

        return MoveOutcome(
            True,
            notation=notation,
            side_to_move=position.side_to_move,
            is_check=is_check,
            result=self.result,
        )

    def refused(self) -> MoveOutcome:
        """Outcome of an attempt that changed nothing."""
        return MoveOutcome(
            False,
            side_to_move=self.side_to_move,
            is_check=self.is_in_check(),
            result=self.result,
            promotion_square=(
                self.pending_promotion.to_sq if self.pending_promotion else None
            ),
        )

    # ── Import / export ──────────────────────────────────────────────────

    def import_fen(self, fen: str) -> FenImportResult:
        """Replace the game with the position in *fen*.

        The live game is only touched when decoding succeeds.
        """
        result = import_fen(fen)
        if not result.success or result.position is None:
            return result

        position = result.position
        position.setup_mode = SetupMode.CUSTOM
        self._start(position)
        return result

    def export_fen(self) -> str:
        return position_to_fen(self.position)

    def load_transcript(self, data: str, size: int | None = None) -> None:
        """Replace the pieces with a peer's board transcript.

        The game becomes a custom one that restarts from this board and
        keeps the current pawn first-move distance. Turn state starts afresh
        with White to move. Raises :class:`ValueError` for a malformed
        transcript; nothing changes then.
        """
        board = board_from_transcript(data, size or self.size)
        self._start(
            Position(
                board=board,
                setup_mode=SetupMode.CUSTOM,
                pawn_first_move=self.position.pawn_first_move,
            )
        )
