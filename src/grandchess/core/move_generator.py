"""Pseudo-legal move geometry per piece kind + attack detection."""

from __future__ import annotations

from grandchess.core.board import Board
from grandchess.core.enums import Color, PieceType
from grandchess.core.move import Move
from grandchess.core.piece import Piece
from grandchess.core.types import Square

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

DEFAULT_PAWN_FIRST_MOVE = 2

# King lands two files over and the rook on the file the king crossed.
_CASTLE_KING_STEP = 2
_MIN_CASTLE_ROOK_DISTANCE = 3

_DIAGONAL_ATTACKERS = (PieceType.BISHOP, PieceType.QUEEN)
_STRAIGHT_ATTACKERS = (PieceType.ROOK, PieceType.QUEEN)


def castling_rook_square(board: Board, king_sq: Square, direction: int) -> Square | None:
    """Rook the king on *king_sq* may castle with toward *direction* (+1 / -1).

    Scans outward along the king's rank for the first occupied square. It
    qualifies only if it holds an unmoved rook of the king's color far enough
    away for the king to land two files over.
    """
    king = board[king_sq]
    if king is None or king.piece_type != PieceType.KING or king.has_moved:
        return None

    file, rank = king_sq
    f = file + direction
    while board.in_bounds(f, rank):
        piece = board[(f, rank)]
        if piece is not None:
            if (
                piece.piece_type == PieceType.ROOK
                and piece.color == king.color
                and not piece.has_moved
                and abs(f - file) >= _MIN_CASTLE_ROOK_DISTANCE
            ):
                return (f, rank)
            return None
        f += direction
    return None


def is_castling_move(piece: Piece, from_sq: Square, to_sq: Square) -> bool:
    return (
        piece.piece_type == PieceType.KING
        and from_sq[1] == to_sq[1]
        and abs(to_sq[0] - from_sq[0]) == _CASTLE_KING_STEP
    )


def promotion_rank(color: Color, size: int) -> int:
    return size - 1 if color == Color.WHITE else 0


class MoveGenerator:
    """Pseudo-legal move generation over a :class:`Board`.

    Moves are legal by geometry and occupancy only; whether they expose the
    mover's king is decided by :class:`grandchess.core.rules.Rules`.
    """

    __slots__ = ("_board", "_pawn_first_move")

    def __init__(
        self, board: Board, pawn_first_move: int = DEFAULT_PAWN_FIRST_MOVE
    ) -> None:
        self._board = board
        self._pawn_first_move = pawn_first_move

    # -- Public API ---------------------------------------------------------

    def pseudo_legal_moves(
        self, sq: Square, include_castling: bool = True
    ) -> list[Square]:
        """Destination squares of the piece on *sq* (empty if no piece)."""
        piece = self._board[sq]
        if piece is None:
            return []

        match piece.piece_type:
            case PieceType.PAWN:
                return self._gen_pawn(sq, piece)
            case PieceType.KNIGHT:
                return self._gen_stepping(sq, piece.color, KNIGHT_OFFSETS)
            case PieceType.BISHOP:
                return self._gen_sliding(sq, piece.color, BISHOP_DIRS)
            case PieceType.ROOK:
                return self._gen_sliding(sq, piece.color, ROOK_DIRS)
            case PieceType.QUEEN:
                return self._gen_sliding(sq, piece.color, QUEEN_DIRS)
            case PieceType.KING:
                moves = self._gen_stepping(sq, piece.color, KING_OFFSETS)
                if include_castling:
                    moves.extend(self._gen_castling(sq))
                return moves
        raise AssertionError(f"Unhandled piece type: {piece.piece_type!r}")

    def generate_pseudo_legal_moves(self, color: Color) -> list[Move]:
        """All pseudo-legal moves for *color* (may leave own king in check)."""
        moves: list[Move] = []
        for sq, _piece in self._board.occupied(color):
            moves.extend(Move(sq, to_sq) for to_sq in self.pseudo_legal_moves(sq))
        return moves

    # -- Attack detection ---------------------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked? A missing king is never in check."""
        king_sq = self._board.king_square(color)
        if king_sq is None:
            return False
        return self.is_square_attacked(king_sq, color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Could some piece of *by_color* capture onto *sq*?

        Equivalent to asking whether *sq* is in any of their pseudo-legal
        capture sets, looked up in reverse from *sq*. Pawn pushes and castling
        never capture, so they do not count.
        """
        board = self._board
        file, rank = sq

        pawn_rank = rank - by_color.forward
        for df in (-1, 1):
            piece = board[(file + df, pawn_rank)]
            if (
                piece is not None
                and piece.color == by_color
                and piece.piece_type == PieceType.PAWN
            ):
                return True

        if self._stepper_attacks(sq, by_color, KNIGHT_OFFSETS, PieceType.KNIGHT):
            return True
        if self._stepper_attacks(sq, by_color, KING_OFFSETS, PieceType.KING):
            return True
        if self._slider_attacks(sq, by_color, BISHOP_DIRS, _DIAGONAL_ATTACKERS):
            return True
        return self._slider_attacks(sq, by_color, ROOK_DIRS, _STRAIGHT_ATTACKERS)

    def _stepper_attacks(
        self,
        sq: Square,
        by_color: Color,
        offsets: tuple[tuple[int, int], ...],
        piece_type: PieceType,
    ) -> bool:
        board = self._board
        file, rank = sq
        for df, dr in offsets:
            piece = board[(file + df, rank + dr)]
            if (
                piece is not None
                and piece.color == by_color
                and piece.piece_type == piece_type
            ):
                return True
        return False

    def _slider_attacks(
        self,
        sq: Square,
        by_color: Color,
        directions: tuple[tuple[int, int], ...],
        attackers: tuple[PieceType, ...],
    ) -> bool:
        board = self._board
        file, rank = sq
        for df, dr in directions:
            f = file + df
            r = rank + dr
            while board.in_bounds(f, r):
                piece = board[(f, r)]
                if piece is not None:
                    if piece.color == by_color and piece.piece_type in attackers:
                        return True
                    break
                f += df
                r += dr
        return False

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, piece: Piece) -> list[Square]:
        board = self._board
        file, rank = sq
        step = piece.color.forward
        moves: list[Square] = []

        one_step = (file, rank + step)
        if board.in_bounds(*one_step) and board[one_step] is None:
            moves.append(one_step)
            if not piece.has_moved:
                for distance in range(2, self._pawn_first_move + 1):
                    target = (file, rank + step * distance)
                    if not board.in_bounds(*target) or board[target] is not None:
                        break
                    moves.append(target)

        for df in (-1, 1):
            target = (file + df, rank + step)
            victim = board[target]
            if victim is not None and victim.color != piece.color:
                moves.append(target)
        return moves

    def _gen_stepping(
        self,
        sq: Square,
        color: Color,
        offsets: tuple[tuple[int, int], ...],
    ) -> list[Square]:
        board = self._board
        file, rank = sq
        moves: list[Square] = []
        for df, dr in offsets:
            f = file + df
            r = rank + dr
            if not board.in_bounds(f, r):
                continue
            target = board[(f, r)]
            if target is None or target.color != color:
                moves.append((f, r))
        return moves

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        directions: tuple[tuple[int, int], ...],
    ) -> list[Square]:
        board = self._board
        file, rank = sq
        moves: list[Square] = []
        for df, dr in directions:
            f = file + df
            r = rank + dr
            while board.in_bounds(f, r):
                target = board[(f, r)]
                if target is None:
                    moves.append((f, r))
                elif target.color != color:
                    moves.append((f, r))
                    break
                else:
                    break
                f += df
                r += dr
        return moves

    def _gen_castling(self, king_sq: Square) -> list[Square]:
        file, rank = king_sq
        moves: list[Square] = []
        for direction in (1, -1):
            if castling_rook_square(self._board, king_sq, direction) is not None:
                moves.append((file + _CASTLE_KING_STEP * direction, rank))
        return moves
