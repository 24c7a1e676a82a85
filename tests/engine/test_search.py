"""Tests for the alpha-beta engine."""

import random

import pytest

from grandchess.core.board import Board
from grandchess.core.enums import Color, PieceType
from grandchess.core.move import Move
from grandchess.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from grandchess.core.piece import Piece
from grandchess.core.rules import Rules
from grandchess.engine import MATE_SCORE, AlphaBetaEngine, Difficulty, SearchLimits
from grandchess.engine.search import EASY_RANDOM_MOVE_CHANCE

MATE_IN_ONE_FEN = "8:7k/8/6K1/8/8/8/8/1Q6 w - - 0 1"
FOOLS_MATE_FEN = "8:rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 0 1"
STALEMATE_FEN = "8:k7/8/1Q6/8/8/8/8/K7 b - - 0 1"


def _engine() -> AlphaBetaEngine:
    return AlphaBetaEngine(random.Random(0))


class TestAlphaBetaEngine:
    @pytest.mark.parametrize("depth", [1, 2])
    def test_finds_mate_in_one(self, depth: int) -> None:
        pos = position_from_fen(MATE_IN_ONE_FEN)
        result = _engine().search(pos, SearchLimits(max_depth=depth))

        assert result.best_move == Move((1, 0), (1, 7))
        assert result.score_cp >= MATE_SCORE
        assert result.depth == depth
        assert result.nodes > 0

    def test_checkmated_side_has_no_move(self) -> None:
        pos = position_from_fen(FOOLS_MATE_FEN)
        result = _engine().search(pos, SearchLimits(max_depth=2))
        assert result.best_move is None
        assert result.score_cp == -MATE_SCORE

    def test_stalemated_side_has_no_move(self) -> None:
        pos = position_from_fen(STALEMATE_FEN)
        result = _engine().search(pos, SearchLimits(max_depth=2))
        assert result.best_move is None
        assert result.score_cp == 0

    def test_takes_hanging_queen(self) -> None:
        pos = position_from_fen("8:4k3/8/8/3q4/8/8/8/3RK3 w - - 0 1")
        result = _engine().search(pos, SearchLimits(max_depth=2))
        assert result.best_move == Move((3, 0), (3, 4))

    def test_promotes_pawn(self) -> None:
        pos = position_from_fen("8:k7/4P3/8/8/8/8/8/K7 w - - 0 1")
        result = _engine().search(pos, SearchLimits(max_depth=1))
        assert result.best_move == Move((4, 6), (4, 7))

    def test_search_leaves_position_untouched(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        before_fen = position_to_fen(pos)
        before_board = pos.board.copy()

        _engine().search(pos, SearchLimits(max_depth=2))

        assert position_to_fen(pos) == before_fen
        assert pos.board == before_board
        assert pos.side_to_move == Color.WHITE

    def test_returns_legal_move_from_start(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        result = _engine().search(pos, SearchLimits(max_depth=2))
        assert result.best_move in Rules.all_legal_moves(pos, Color.WHITE)

    def test_color_override(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        result = _engine().search(pos, SearchLimits(max_depth=1), color=Color.BLACK)

        assert result.best_move is not None
        piece = pos.board[result.best_move.from_sq]
        assert piece is not None
        assert piece.color == Color.BLACK

    def test_random_move_skips_search(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        result = _engine().search(
            pos, SearchLimits(max_depth=3, random_move_chance=1.0)
        )
        assert result.depth == 0
        assert result.best_move in Rules.all_legal_moves(pos, Color.WHITE)

    def test_rejects_zero_depth(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        with pytest.raises(ValueError):
            _engine().search(pos, SearchLimits(max_depth=0))

    def test_same_seed_same_choice(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        first = AlphaBetaEngine(random.Random(5)).search(pos, SearchLimits(max_depth=1))
        second = AlphaBetaEngine(random.Random(5)).search(pos, SearchLimits(max_depth=1))
        assert first.best_move == second.best_move


class TestPawnDistance:
    def test_distance_is_passed_per_search(self) -> None:
        board = Board(8)
        board[(0, 0)] = Piece(Color.WHITE, PieceType.KING)
        board[(7, 7)] = Piece(Color.BLACK, PieceType.KING)
        board[(4, 1)] = Piece(Color.WHITE, PieceType.PAWN)
        engine = _engine()

        def pawn_targets(distance: int) -> set[tuple[int, int]]:
            children = engine._children(board, Color.WHITE, distance)
            return {
                move.to_sq for move, _child in children if move.from_sq == (4, 1)
            }

        assert pawn_targets(3) == {(4, 2), (4, 3), (4, 4)}
        assert pawn_targets(2) == {(4, 2), (4, 3)}

    def test_three_line_position_searches(self) -> None:
        pos = position_from_fen("8:4k3/8/8/8/8/8/4P3/4K3 w - - 0 1")
        pos.pawn_first_move = 3
        result = _engine().search(pos, SearchLimits(max_depth=2))
        assert result.best_move in Rules.all_legal_moves(pos, Color.WHITE)
        assert pos.pawn_first_move == 3


class TestApplyMove:
    def test_castling_brings_rook_across(self) -> None:
        pos = position_from_fen("8:4k3/8/8/8/8/8/8/4K2R w K - 0 1")
        child = AlphaBetaEngine._apply_move(pos.board, Move((4, 0), (6, 0)))

        assert child[(6, 0)] is not None and child[(6, 0)].piece_type == PieceType.KING
        assert child[(5, 0)] is not None and child[(5, 0)].piece_type == PieceType.ROOK
        assert child[(7, 0)] is None
        assert pos.board[(4, 0)] is not None

    def test_en_passant_victim_removed(self) -> None:
        pos = position_from_fen("8:4k3/8/8/3pP3/8/8/8/4K3 w - - 0 1")
        board = pos.board
        child = AlphaBetaEngine._apply_move(board, Move((4, 4), (3, 5)), victim=(3, 4))
        assert child[(3, 4)] is None
        assert child[(3, 5)] is not None

    def test_pawn_auto_queens(self) -> None:
        pos = position_from_fen("8:k7/4P3/8/8/8/8/8/K7 w - - 0 1")
        child = AlphaBetaEngine._apply_move(pos.board, Move((4, 6), (4, 7)))
        promoted = child[(4, 7)]
        assert promoted is not None
        assert promoted.piece_type == PieceType.QUEEN
        assert promoted.color == Color.WHITE


class TestSearchLimits:
    def test_defaults(self) -> None:
        limits = SearchLimits()
        assert limits.max_depth == 2
        assert limits.random_move_chance == 0.0

    @pytest.mark.parametrize(
        ("difficulty", "depth", "chance"),
        [
            (Difficulty.EASY, 1, EASY_RANDOM_MOVE_CHANCE),
            (Difficulty.MEDIUM, 2, 0.0),
            (Difficulty.HARD, 3, 0.0),
        ],
    )
    def test_for_difficulty(
        self, difficulty: Difficulty, depth: int, chance: float
    ) -> None:
        limits = SearchLimits.for_difficulty(difficulty)
        assert limits.max_depth == depth
        assert limits.random_move_chance == chance
