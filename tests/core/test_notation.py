"""Tests for extended FEN, move notation and board transcripts."""

import pytest

from grandchess.core.board import Board
from grandchess.core.enums import Color, PieceType
from grandchess.core.notation import (
    STARTING_FEN,
    board_from_transcript,
    board_to_transcript,
    castling_field,
    check_suffix,
    import_fen,
    move_to_notation,
    position_from_fen,
    position_to_fen,
)
from grandchess.core.piece import Piece
from grandchess.core.position import Position
from grandchess.core.types import parse_square as sq

WIDE_FEN = "12:k11/" + "12/" * 10 + "K11 w - - 0 1"


class TestFenParsing:
    def test_starting_position(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert pos.size == 8
        assert pos.board == Board.initial()
        assert pos.side_to_move == Color.WHITE

    def test_size_prefix_defaults_to_eight(self) -> None:
        pos = position_from_fen(STARTING_FEN.removeprefix("8:"))
        assert pos.size == 8
        assert pos.board == Board.initial()

    def test_multi_digit_runs(self) -> None:
        pos = position_from_fen(WIDE_FEN)
        assert pos.size == 12
        assert pos.board[sq("a12")] == Piece(Color.BLACK, PieceType.KING, has_moved=True)
        assert pos.board[sq("a1")] is not None

    def test_runs_mixed_with_pieces(self) -> None:
        pos = position_from_fen("26:" + "/".join(["12k13"] + ["26"] * 24 + ["12K13"]))
        assert pos.size == 26
        assert pos.board.king_square(Color.BLACK) == (12, 25)
        assert pos.board.king_square(Color.WHITE) == (12, 0)

    def test_side_token(self) -> None:
        black = position_from_fen("8:4k3/8/8/8/8/8/8/4K3 b")
        assert black.side_to_move == Color.BLACK
        upper = position_from_fen("8:4k3/8/8/8/8/8/8/4K3 B")
        assert upper.side_to_move == Color.BLACK

    def test_side_token_optional(self) -> None:
        pos = position_from_fen("8:4k3/8/8/8/8/8/8/4K3")
        assert pos.side_to_move == Color.WHITE

    def test_turn_state_is_reset(self) -> None:
        pos = position_from_fen("8:4k3/8/8/8/8/8/8/4K3 b - e3 40 60")
        assert pos.en_passant is None
        assert pos.halfmove_clock == 0
        assert pos.move_count == 0

    def test_castling_field_marks_moved_pieces(self) -> None:
        pos = position_from_fen("8:r3k2r/8/8/8/8/8/8/R3K2R w Kq - 0 1")
        board = pos.board
        assert not board[sq("h1")].has_moved  # type: ignore[union-attr]
        assert board[sq("a1")].has_moved  # type: ignore[union-attr]
        assert board[sq("h8")].has_moved  # type: ignore[union-attr]
        assert not board[sq("a8")].has_moved  # type: ignore[union-attr]
        assert not board[sq("e1")].has_moved  # type: ignore[union-attr]

    def test_no_castling_marks_king_moved(self) -> None:
        pos = position_from_fen("8:r3k2r/8/8/8/8/8/8/R3K2R w - - 0 1")
        assert pos.board[sq("e1")].has_moved  # type: ignore[union-attr]
        assert pos.board[sq("e8")].has_moved  # type: ignore[union-attr]


class TestFenErrors:
    @pytest.mark.parametrize(
        ("fen", "fragment"),
        [
            ("", "empty"),
            ("   ", "empty"),
            ("x:8/8/8/8/8/8/8/8 w", "Invalid board size"),
            ("2:k1/K1 w", "outside"),
            ("100:k w", "outside"),
            ("8:4k3/8/8/4K3 w", "Expected 8 ranks"),
            ("8:4k3/8/8/8/8/8/8/4K4 w", "files"),
            ("8:4k3/8/8/8/8/8/8/4K2 w", "files"),
            ("8:4k3/8/8/8/8/8/8/4Kx2 w", "Invalid piece"),
            ("8:4k3/8/8/8/8/8/8/4K3 x", "side to move"),
            ("8:4k3/8/8/8/8/8/8/4K3 w KZ", "castling"),
            ("8:8/8/8/8/8/8/8/4K3 w", "black king"),
            ("8:4k3/8/8/8/8/8/8/3KK3 w", "white king"),
        ],
    )
    def test_rejected(self, fen: str, fragment: str) -> None:
        with pytest.raises(ValueError, match=fragment):
            position_from_fen(fen)
        result = import_fen(fen)
        assert not result.success
        assert not result
        assert fragment in result.message
        assert result.position is None

    def test_import_success(self) -> None:
        result = import_fen(STARTING_FEN)
        assert result.success
        assert result.position is not None
        assert result.position.size == 8


class TestFenSerialization:
    def test_starting_round_trip(self) -> None:
        assert position_to_fen(position_from_fen(STARTING_FEN)) == STARTING_FEN

    def test_default_position(self) -> None:
        assert position_to_fen(Position()) == STARTING_FEN

    def test_wide_round_trip(self) -> None:
        assert position_to_fen(position_from_fen(WIDE_FEN)) == WIDE_FEN

    def test_placeholder_fields(self) -> None:
        pos = Position(en_passant=(4, 2), halfmove_clock=9, move_count=31)
        pos.side_to_move = Color.BLACK
        assert position_to_fen(pos).endswith(" b KQkq - 0 1")

    def test_round_trip_keeps_placement_and_side(self) -> None:
        fen = "10:r3k4r/pppppppppp/10/10/4P5/10/10/10/PPPP1PPPPP/R3K4R b KQkq - 0 1"
        pos = position_from_fen(fen)
        again = position_from_fen(position_to_fen(pos))
        assert again.size == 10
        assert again.side_to_move == Color.BLACK
        assert position_to_fen(again) == fen

    def test_castling_field_from_moved_flags(self) -> None:
        board = Board.initial()
        board.move((7, 0), (7, 2))
        board.move((7, 2), (7, 0))
        assert castling_field(board) == "Qkq"
        board.move((4, 7), (4, 6))
        assert castling_field(board) == "Q"

    def test_castling_rook_anywhere_on_side(self) -> None:
        board = Board(12)
        board[(5, 0)] = Piece(Color.WHITE, PieceType.KING)
        board[(11, 0)] = Piece(Color.WHITE, PieceType.ROOK)
        board[(8, 0)] = Piece(Color.WHITE, PieceType.KNIGHT)
        assert castling_field(board) == "K"


class TestMoveNotation:
    def test_piece_move(self) -> None:
        knight = Piece(Color.WHITE, PieceType.KNIGHT)
        assert move_to_notation(knight, sq("g1"), sq("f3"), False) == "Nf3"

    def test_piece_capture(self) -> None:
        bishop = Piece(Color.BLACK, PieceType.BISHOP)
        assert move_to_notation(bishop, sq("c8"), sq("g4"), True) == "Bxg4"

    def test_pawn_push(self) -> None:
        pawn = Piece(Color.WHITE, PieceType.PAWN)
        assert move_to_notation(pawn, sq("e2"), sq("e4"), False) == "e4"

    def test_pawn_capture_uses_origin_file(self) -> None:
        pawn = Piece(Color.WHITE, PieceType.PAWN)
        assert move_to_notation(pawn, sq("e5"), sq("d6"), True) == "exd6"

    def test_wide_board_files(self) -> None:
        pawn = Piece(Color.WHITE, PieceType.PAWN)
        assert move_to_notation(pawn, sq("ab4"), sq("aa5"), True) == "abxaa5"

    def test_castling(self) -> None:
        king = Piece(Color.WHITE, PieceType.KING)
        assert move_to_notation(king, sq("e1"), sq("g1"), False) == "O-O"
        assert move_to_notation(king, sq("e1"), sq("c1"), False) == "O-O-O"

    def test_promotion(self) -> None:
        pawn = Piece(Color.WHITE, PieceType.PAWN)
        text = move_to_notation(pawn, sq("a7"), sq("a8"), False, PieceType.QUEEN)
        assert text == "a8=Q"
        text = move_to_notation(pawn, sq("a7"), sq("b8"), True, PieceType.KNIGHT)
        assert text == "axb8=N"

    def test_check_suffix(self) -> None:
        assert check_suffix(position_from_fen(STARTING_FEN)) == ""
        assert check_suffix(position_from_fen("4k3/8/8/8/8/8/8/r3K3 w - - 0 1")) == "+"
        mate = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
        assert check_suffix(position_from_fen(mate)) == "#"


class TestTranscript:
    def test_encode(self) -> None:
        board = Board(8)
        board[(4, 0)] = Piece(Color.WHITE, PieceType.KING)
        board[(4, 7)] = Piece(Color.BLACK, PieceType.KING, has_moved=True)
        board[(0, 1)] = Piece(Color.WHITE, PieceType.PAWN)
        assert board_to_transcript(board) == "0,1,wP,0;4,0,wK,0;4,7,bK,1"

    def test_round_trip_keeps_moved_flags(self) -> None:
        board = Board.initial()
        board.move((4, 1), (4, 3))
        board.move((6, 7), (5, 5))
        decoded = board_from_transcript(board_to_transcript(board), 8)
        assert decoded == board
        assert decoded[(4, 3)].has_moved  # type: ignore[union-attr]
        assert not decoded[(3, 1)].has_moved  # type: ignore[union-attr]

    def test_empty_records_skipped(self) -> None:
        decoded = board_from_transcript(";4,0,wK,0;;4,7,bK,0;", 8)
        assert decoded.king_square(Color.WHITE) == (4, 0)
        assert decoded.king_square(Color.BLACK) == (4, 7)

    def test_empty_transcript(self) -> None:
        assert list(board_from_transcript("", 8).occupied()) == []

    @pytest.mark.parametrize(
        "data",
        [
            "4,0,wK",
            "a,0,wK,0",
            "4,0,xK,0",
            "4,0,wZ,0",
            "4,0,wK,2",
            "9,0,wK,0",
        ],
    )
    def test_malformed(self, data: str) -> None:
        with pytest.raises(ValueError):
            board_from_transcript(data, 8)
