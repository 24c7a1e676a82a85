"""Tests for Position bookkeeping."""

from grandchess.core.board import Board
from grandchess.core.enums import Color, SetupMode
from grandchess.core.position import Position


class TestPositionDefaults:
    def test_default_is_standard_start(self) -> None:
        pos = Position()
        assert pos.size == 8
        assert pos.board == Board.initial()
        assert pos.side_to_move == Color.WHITE
        assert pos.en_passant is None
        assert pos.halfmove_clock == 0
        assert pos.pawn_first_move == 2
        assert pos.setup_mode == SetupMode.CUSTOM

    def test_fullmove_number_from_plies(self) -> None:
        pos = Position()
        assert pos.fullmove_number == 1
        pos.move_count = 1
        assert pos.fullmove_number == 1
        pos.move_count = 2
        assert pos.fullmove_number == 2
        pos.move_count = 7
        assert pos.fullmove_number == 4


class TestPositionCopy:
    def test_copy_is_independent(self) -> None:
        pos = Position(en_passant=(4, 2), halfmove_clock=5, pawn_first_move=3)
        clone = pos.copy()
        clone.board.move((4, 1), (4, 3))
        clone.side_to_move = Color.BLACK
        assert pos.board[(4, 1)] is not None
        assert pos.side_to_move == Color.WHITE
        assert clone.en_passant == (4, 2)
        assert clone.halfmove_clock == 5
        assert clone.pawn_first_move == 3

    def test_reset_turn_state(self) -> None:
        pos = Position(
            side_to_move=Color.BLACK,
            en_passant=(4, 2),
            halfmove_clock=17,
            move_count=40,
        )
        pos.reset_turn_state()
        assert pos.side_to_move == Color.WHITE
        assert pos.en_passant is None
        assert pos.halfmove_clock == 0
        assert pos.move_count == 0
        assert pos.board == Board.initial()

    def test_move_generator_uses_pawn_distance(self) -> None:
        board = Board(12)
        pos = Position(board=board, pawn_first_move=3)
        assert pos.move_generator() is not None
        assert pos.size == 12
