"""Static evaluation: material plus simple piece-square bonuses."""

from __future__ import annotations

from grandchess.core.board import Board
from grandchess.core.enums import Color, PieceType
from grandchess.core.piece import Piece

PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 100,
    PieceType.KNIGHT: 320,
    PieceType.BISHOP: 330,
    PieceType.ROOK: 500,
    PieceType.QUEEN: 900,
    PieceType.KING: 20_000,
}

_PAWN_ADVANCE_BONUS = 5
_PAWN_CENTER_BONUS = 2
_KNIGHT_CENTER_BONUS = 3
_KNIGHT_EDGE_PENALTY = 20
_BISHOP_CENTER_BONUS = 2
_ROOK_SEVENTH_BONUS = 20
_QUEEN_UNMOVED_PENALTY = 10
_KING_HOME_PENALTY = 3


def evaluate(board: Board) -> int:
    """Score in centipawns from White's point of view."""
    size = board.size
    score = 0
    for (file, rank), piece in board.occupied():
        value = PIECE_VALUES[piece.piece_type] + positional_bonus(piece, file, rank, size)
        score += value if piece.color == Color.WHITE else -value
    return score


def evaluate_for(board: Board, color: Color) -> int:
    """Score from *color*'s point of view."""
    score = evaluate(board)
    return score if color == Color.WHITE else -score


def positional_bonus(piece: Piece, file: int, rank: int, size: int) -> int:
    center = size // 2
    file_dist = abs(file - center)
    center_dist = file_dist + abs(rank - center)
    last = size - 1

    match piece.piece_type:
        case PieceType.PAWN:
            advancement = rank if piece.color == Color.WHITE else last - rank
            return (
                advancement * _PAWN_ADVANCE_BONUS
                + (center - file_dist) * _PAWN_CENTER_BONUS
            )
        case PieceType.KNIGHT:
            bonus = (size - center_dist) * _KNIGHT_CENTER_BONUS
            if file in (0, last) or rank in (0, last):
                bonus -= _KNIGHT_EDGE_PENALTY
            return bonus
        case PieceType.BISHOP:
            return (size - center_dist) * _BISHOP_CENTER_BONUS
        case PieceType.ROOK:
            seventh = last - 1 if piece.color == Color.WHITE else 1
            return _ROOK_SEVENTH_BONUS if rank == seventh else 0
        case PieceType.QUEEN:
            bonus = size - center_dist
            if not piece.has_moved:
                bonus -= _QUEEN_UNMOVED_PENALTY
            return bonus
        case PieceType.KING:
            home = 0 if piece.color == Color.WHITE else last
            return -abs(rank - home) * _KING_HOME_PENALTY
    return 0
