"""Move notation: ``Nxc3``, ``exd6``, ``O-O``, ``a8=Q#`` and friends.

Files are written with the board's file letters, so on wide boards a pawn
capture reads like ``abxac5``.
"""

from __future__ import annotations

from grandchess.core.enums import PieceType
from grandchess.core.move_generator import is_castling_move
from grandchess.core.piece import Piece
from grandchess.core.position import Position
from grandchess.core.rules import Rules
from grandchess.core.types import Square, file_label, square_name

_PIECE_LETTER: dict[PieceType, str] = {
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}


def move_to_notation(
    piece: Piece,
    from_sq: Square,
    to_sq: Square,
    is_capture: bool,
    promotion: PieceType | None = None,
) -> str:
    """Notation of a move without its check suffix."""
    if is_castling_move(piece, from_sq, to_sq):
        return "O-O" if to_sq[0] > from_sq[0] else "O-O-O"

    text = ""
    if piece.piece_type == PieceType.PAWN:
        if is_capture:
            text += file_label(from_sq[0])
    else:
        text += _PIECE_LETTER[piece.piece_type]

    if is_capture:
        text += "x"
    text += square_name(to_sq)

    if promotion is not None:
        text += promotion_to_notation(promotion)
    return text


def promotion_to_notation(piece_type: PieceType) -> str:
    return "=" + _PIECE_LETTER[piece_type]


def check_suffix(position: Position) -> str:
    """``#`` if the side to move is mated, ``+`` if in check, else nothing."""
    if not Rules.is_in_check(position):
        return ""
    return "+" if Rules.has_legal_move(position) else "#"
