"""Tests for static evaluation."""

from grandchess.core.board import Board
from grandchess.core.enums import Color, PieceType
from grandchess.core.piece import Piece
from grandchess.engine.evaluation import evaluate, evaluate_for, positional_bonus


def _kings_only() -> Board:
    board = Board(8)
    board[(4, 0)] = Piece(Color.WHITE, PieceType.KING)
    board[(4, 7)] = Piece(Color.BLACK, PieceType.KING)
    return board


class TestEvaluate:
    def test_bare_kings_are_level(self) -> None:
        assert evaluate(_kings_only()) == 0

    def test_material_and_perspective(self) -> None:
        board = _kings_only()
        board[(0, 3)] = Piece(Color.WHITE, PieceType.ROOK)
        assert evaluate(board) == 500
        assert evaluate_for(board, Color.WHITE) == 500
        assert evaluate_for(board, Color.BLACK) == -500


class TestPositionalBonus:
    def test_rook_on_seventh(self) -> None:
        board = _kings_only()
        board[(0, 6)] = Piece(Color.WHITE, PieceType.ROOK)
        assert evaluate(board) == 520

    def test_black_rook_on_its_seventh(self) -> None:
        rook = Piece(Color.BLACK, PieceType.ROOK)
        assert positional_bonus(rook, 3, 1, 8) == 20
        assert positional_bonus(rook, 3, 6, 8) == 0

    def test_unmoved_queen_penalty(self) -> None:
        queen = Piece(Color.WHITE, PieceType.QUEEN)
        unmoved = positional_bonus(queen, 3, 0, 8)
        moved = positional_bonus(queen.moved(), 3, 0, 8)
        assert moved - unmoved == 10

    def test_knight_on_rim(self) -> None:
        knight = Piece(Color.WHITE, PieceType.KNIGHT)
        assert positional_bonus(knight, 0, 3, 8) == -11
        assert positional_bonus(knight, 4, 4, 8) > positional_bonus(knight, 0, 3, 8)

    def test_pawn_advancement_by_color(self) -> None:
        white = Piece(Color.WHITE, PieceType.PAWN)
        black = Piece(Color.BLACK, PieceType.PAWN)
        assert positional_bonus(white, 4, 5, 8) == positional_bonus(black, 4, 2, 8)
        assert positional_bonus(white, 4, 5, 8) > positional_bonus(white, 4, 1, 8)

    def test_king_leaving_home(self) -> None:
        king = Piece(Color.WHITE, PieceType.KING)
        assert positional_bonus(king, 4, 0, 8) == 0
        assert positional_bonus(king, 4, 2, 8) == -6
