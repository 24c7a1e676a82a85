"""High-level chess rules: legality filtering, check, mate, stalemate, draw."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from grandchess.core.enums import Color, GameResult, PieceType
from grandchess.core.move import Move
from grandchess.core.move_generator import castling_rook_square, is_castling_move
from grandchess.core.types import Square

if TYPE_CHECKING:
    from grandchess.core.position import Position

HALFMOVE_DRAW_LIMIT = 100  # 50-move rule doubled for large boards


class Rules:
    """Static rule-checker that operates on a :class:`Position`.

    Legality is decided by simulating each candidate on the live grid and
    asking whether the mover's king is attacked; the grid is always restored
    before returning.
    """

    # ── Check ────────────────────────────────────────────────────────────

    @staticmethod
    def is_in_check(position: Position, color: Color | None = None) -> bool:
        side = position.side_to_move if color is None else color
        return position.move_generator().is_in_check(side)

    # ── Legal moves ──────────────────────────────────────────────────────

    @staticmethod
    def legal_moves(position: Position, sq: Square) -> list[Square]:
        """Legal destinations of the piece on *sq* if it is the side to move's."""
        return list(Rules._iter_legal(position, sq, position.side_to_move))

    @staticmethod
    def legal_moves_for(position: Position, sq: Square, color: Color) -> list[Square]:
        """Like :meth:`legal_moves` but for *color* regardless of whose turn it is."""
        return list(Rules._iter_legal(position, sq, color))

    @staticmethod
    def all_legal_moves(position: Position, color: Color | None = None) -> list[Move]:
        side = position.side_to_move if color is None else color
        moves: list[Move] = []
        for sq, _piece in list(position.board.occupied(side)):
            moves.extend(Move(sq, to_sq) for to_sq in Rules._iter_legal(position, sq, side))
        return moves

    @staticmethod
    def has_legal_move(position: Position, color: Color | None = None) -> bool:
        side = position.side_to_move if color is None else color
        for sq, _piece in list(position.board.occupied(side)):
            for _to_sq in Rules._iter_legal(position, sq, side):
                return True
        return False

    @staticmethod
    def en_passant_victim(position: Position, from_sq: Square) -> Square | None:
        """Square of the pawn the piece on *from_sq* could take en passant."""
        target = position.en_passant
        board = position.board
        piece = board[from_sq]
        if target is None or piece is None or piece.piece_type != PieceType.PAWN:
            return None

        step = piece.color.forward
        if abs(target[0] - from_sq[0]) != 1 or target[1] != from_sq[1] + step:
            return None
        if board[target] is not None:
            return None

        victim_sq = (target[0], target[1] - step)
        victim = board[victim_sq]
        if (
            victim is None
            or victim.color == piece.color
            or victim.piece_type != PieceType.PAWN
        ):
            return None
        return victim_sq

    @staticmethod
    def is_move_safe(position: Position, from_sq: Square, to_sq: Square) -> bool:
        """Would moving *from_sq* → *to_sq* keep the mover's king out of check?

        A castling move additionally needs the king out of check now and the
        square it crosses unattacked.
        """
        piece = position.board[from_sq]
        if piece is None:
            return False

        if not is_castling_move(piece, from_sq, to_sq):
            return Rules._king_safe_after(position, from_sq, to_sq)

        if position.move_generator().is_in_check(piece.color):
            return False
        direction = 1 if to_sq[0] > from_sq[0] else -1
        crossed = (from_sq[0] + direction, from_sq[1])
        if not Rules._king_safe_after(position, from_sq, crossed):
            return False
        rook_sq = castling_rook_square(position.board, from_sq, direction)
        if rook_sq is None:
            return False
        return Rules._king_safe_after(position, from_sq, to_sq, (rook_sq, crossed))

    @staticmethod
    def _iter_legal(position: Position, sq: Square, color: Color) -> Iterator[Square]:
        piece = position.board[sq]
        if piece is None or piece.color != color:
            return

        candidates = position.move_generator().pseudo_legal_moves(sq)
        target = position.en_passant
        if target is not None and Rules.en_passant_victim(position, sq) is not None:
            candidates.append(target)

        for to_sq in candidates:
            if Rules.is_move_safe(position, sq, to_sq):
                yield to_sq

    @staticmethod
    def _king_safe_after(
        position: Position,
        from_sq: Square,
        to_sq: Square,
        rook_hop: tuple[Square, Square] | None = None,
    ) -> bool:
        """Simulate the move on the live grid, test for check, then undo it."""
        board = position.board
        piece = board[from_sq]
        assert piece is not None

        victim_sq: Square | None = None
        if to_sq == position.en_passant:
            victim_sq = Rules.en_passant_victim(position, from_sq)
        victim = board[victim_sq] if victim_sq is not None else None
        captured = board[to_sq]

        board[from_sq] = None
        board[to_sq] = piece
        if victim_sq is not None:
            board[victim_sq] = None
        if rook_hop is not None:
            rook_from, rook_to = rook_hop
            rook = board[rook_from]
            board[rook_from] = None
            board[rook_to] = rook
        try:
            return not position.move_generator().is_in_check(piece.color)
        finally:
            if rook_hop is not None:
                rook_from, rook_to = rook_hop
                board[rook_from] = board[rook_to]
                board[rook_to] = None
            board[to_sq] = captured
            board[from_sq] = piece
            if victim_sq is not None:
                board[victim_sq] = victim

    # ── Terminal states ──────────────────────────────────────────────────

    @staticmethod
    def is_checkmate(position: Position, color: Color | None = None) -> bool:
        if not Rules.is_in_check(position, color):
            return False
        return not Rules.has_legal_move(position, color)

    @staticmethod
    def is_stalemate(position: Position, color: Color | None = None) -> bool:
        if Rules.is_in_check(position, color):
            return False
        return not Rules.has_legal_move(position, color)

    @staticmethod
    def is_draw_by_clock(position: Position) -> bool:
        return position.halfmove_clock >= HALFMOVE_DRAW_LIMIT

    @staticmethod
    def game_result(position: Position) -> GameResult:
        """Result for the side to move: checkmate, then stalemate, then clock."""
        side = position.side_to_move
        if not Rules.has_legal_move(position, side):
            if Rules.is_in_check(position, side):
                return GameResult.win_for(side.opposite)
            return GameResult.STALEMATE

        if Rules.is_draw_by_clock(position):
            return GameResult.DRAW_BY_CLOCK

        return GameResult.PLAYING
