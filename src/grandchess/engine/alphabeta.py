"""Depth-limited negamax with alpha-beta pruning.

Every explored move works on a fresh copy of the board, so the search never
has to undo anything and never touches the position it was handed.
"""

from __future__ import annotations

import logging
import random

from grandchess.core.board import Board
from grandchess.core.enums import Color, PieceType
from grandchess.core.move import Move
from grandchess.core.move_generator import (
    MoveGenerator,
    castling_rook_square,
    is_castling_move,
    promotion_rank,
)
from grandchess.core.position import Position
from grandchess.core.rules import Rules
from grandchess.core.types import Square, center_distance
from grandchess.engine.evaluation import PIECE_VALUES, evaluate_for
from grandchess.engine.search import IEngine, SearchLimits, SearchResult

_LOGGER = logging.getLogger(__name__)

_INF_SCORE = 1_000_000_000
MATE_SCORE = 10_000_000


class AlphaBetaEngine(IEngine):
    """Fixed-depth searcher.

    The root uses full rule-engine legality (castling safety, en passant);
    deeper plies use pseudo-legal moves that do not leave the mover's king
    attacked, with castling but without en passant.
    """

    __slots__ = ("_nodes", "_rng")

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()
        self._nodes = 0

    def search(
        self,
        position: Position,
        limits: SearchLimits,
        color: Color | None = None,
    ) -> SearchResult:
        if limits.max_depth <= 0:
            raise ValueError("Search depth must be >= 1")

        side = position.side_to_move if color is None else color
        self._nodes = 0

        root = position.copy()
        root.side_to_move = side
        root_moves = Rules.all_legal_moves(root, side)
        if not root_moves:
            score = -MATE_SCORE if Rules.is_in_check(root, side) else 0
            return SearchResult(None, score, 0, self._nodes)

        if limits.random_move_chance > 0 and self._rng.random() < limits.random_move_chance:
            move = self._rng.choice(root_moves)
            _LOGGER.debug("Playing random move %s for %s", move, side)
            return SearchResult(move, evaluate_for(root.board, side), 0, self._nodes)

        board = root.board
        ordered = self._order_moves(board, root_moves)
        best_score = -_INF_SCORE
        best_moves: list[Move] = []
        for move in ordered:
            victim = self._en_passant_victim(root, move)
            child = self._apply_move(board, move, victim)
            score = -self._negamax(
                child,
                limits.max_depth - 1,
                -_INF_SCORE,
                _INF_SCORE,
                side.opposite,
                root.pawn_first_move,
            )
            if score > best_score:
                best_score = score
                best_moves = [move]
            elif score == best_score:
                best_moves.append(move)

        best_move = self._rng.choice(best_moves)
        _LOGGER.debug(
            "Search for %s: %s score=%d depth=%d nodes=%d",
            side,
            best_move,
            best_score,
            limits.max_depth,
            self._nodes,
        )
        return SearchResult(best_move, best_score, limits.max_depth, self._nodes)

    # ── Tree search ──────────────────────────────────────────────────────

    def _negamax(
        self,
        board: Board,
        depth: int,
        alpha: int,
        beta: int,
        side: Color,
        pawn_first_move: int,
    ) -> int:
        self._nodes += 1

        if depth == 0:
            # A leaf still has to notice that it is checkmated.
            gen = MoveGenerator(board, pawn_first_move)
            if gen.is_in_check(side) and not self._children(
                board, side, pawn_first_move
            ):
                return -MATE_SCORE
            return evaluate_for(board, side)

        children = self._children(board, side, pawn_first_move)
        if not children:
            gen = MoveGenerator(board, pawn_first_move)
            return -(MATE_SCORE + depth) if gen.is_in_check(side) else 0

        children.sort(key=lambda item: self._order_score(board, item[0]), reverse=True)
        best = -_INF_SCORE
        for _move, child in children:
            score = -self._negamax(
                child, depth - 1, -beta, -alpha, side.opposite, pawn_first_move
            )
            if score > best:
                best = score
            if score > alpha:
                alpha = score
            if alpha >= beta:
                break
        return best

    def _children(
        self, board: Board, side: Color, pawn_first_move: int
    ) -> list[tuple[Move, Board]]:
        """Moves for *side* that keep its king safe, with the boards they give."""
        gen = MoveGenerator(board, pawn_first_move)
        children: list[tuple[Move, Board]] = []
        for sq, _piece in board.occupied(side):
            for to_sq in gen.pseudo_legal_moves(sq):
                move = Move(sq, to_sq)
                child = self._apply_move(board, move)
                if not MoveGenerator(child, pawn_first_move).is_in_check(side):
                    children.append((move, child))
        return children

    # ── Move application ─────────────────────────────────────────────────

    @staticmethod
    def _en_passant_victim(position: Position, move: Move) -> Square | None:
        if move.to_sq != position.en_passant:
            return None
        return Rules.en_passant_victim(position, move.from_sq)

    @staticmethod
    def _apply_move(board: Board, move: Move, victim: Square | None = None) -> Board:
        """Board after *move*; the castling rook follows and pawns auto-queen."""
        child = board.copy()
        from_sq, to_sq = move.from_sq, move.to_sq
        piece = child[from_sq]
        if piece is None:
            return child

        if is_castling_move(piece, from_sq, to_sq):
            direction = 1 if to_sq[0] > from_sq[0] else -1
            rook_sq = castling_rook_square(child, from_sq, direction)
            if rook_sq is not None:
                child.move(rook_sq, (from_sq[0] + direction, from_sq[1]))

        if victim is not None:
            child[victim] = None

        child.move(from_sq, to_sq)
        if piece.piece_type == PieceType.PAWN and to_sq[1] == promotion_rank(
            piece.color, child.size
        ):
            child[to_sq] = piece.promoted(PieceType.QUEEN)
        return child

    # ── Ordering ─────────────────────────────────────────────────────────

    def _order_moves(self, board: Board, moves: list[Move]) -> list[Move]:
        return sorted(moves, key=lambda m: self._order_score(board, m), reverse=True)

    @staticmethod
    def _order_score(board: Board, move: Move) -> int:
        """MVV-LVA for captures, then closeness to the centre."""
        score = -center_distance(move.to_sq, board.size)
        victim = board[move.to_sq]
        attacker = board[move.from_sq]
        if victim is not None and attacker is not None:
            score += PIECE_VALUES[victim.piece_type] * 10 - PIECE_VALUES[attacker.piece_type]
        return score
