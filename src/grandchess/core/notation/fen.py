"""Extended FEN parsing and serialization.

The board size is carried as a prefix so that any supported board fits::

    26:<rank 26>/<rank 25>/.../<rank 1> w KQkq - 0 1

Without a prefix a string is read as a standard 8x8 position. Empty runs may
take several digits (``26`` is one run of twenty-six squares).
"""

from __future__ import annotations

import logging

from grandchess.core.board import Board
from grandchess.core.enums import Color, PieceType
from grandchess.core.notation.models import FenImportResult
from grandchess.core.piece import Piece
from grandchess.core.position import Position
from grandchess.core.types import (
    MAX_BOARD_SIZE,
    MIN_BOARD_SIZE,
    STANDARD_BOARD_SIZE,
    Square,
    is_valid_size,
)

_LOGGER = logging.getLogger(__name__)

STARTING_FEN = "8:rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

# En passant, half-move clock and full-move number are not carried.
_PLACEHOLDER_FIELDS = "- 0 1"

_SIDE_TOKENS: dict[str, Color] = {"w": Color.WHITE, "b": Color.BLACK}

# Castling letter -> (color, direction the rook lies from the king)
_CASTLING_LETTERS: dict[str, tuple[Color, int]] = {
    "K": (Color.WHITE, 1),
    "Q": (Color.WHITE, -1),
    "k": (Color.BLACK, 1),
    "q": (Color.BLACK, -1),
}


def import_fen(fen: str) -> FenImportResult:
    """Decode *fen* without raising; failures come back as a message."""
    try:
        position = position_from_fen(fen)
    except ValueError as exc:
        _LOGGER.info("Rejected FEN %r: %s", fen, exc)
        return FenImportResult(False, str(exc))
    return FenImportResult(True, "Position loaded", position)


def position_from_fen(fen: str) -> Position:
    """Parse an extended FEN string into a fresh :class:`Position`.

    Turn and clock state always start afresh: no en-passant target, a zero
    half-move clock and ply counter. Each side needs exactly one king.
    """
    text = fen.strip()
    if not text:
        raise ValueError("FEN string is empty")

    size = STANDARD_BOARD_SIZE
    if ":" in text:
        size_text, text = text.split(":", 1)
        size_text = size_text.strip()
        if not size_text.isdigit():
            raise ValueError(f"Invalid board size: {size_text!r}")
        size = int(size_text)
        if not is_valid_size(size):
            raise ValueError(
                f"Board size {size} is outside {MIN_BOARD_SIZE}..{MAX_BOARD_SIZE}"
            )

    parts = text.split()
    if not parts:
        raise ValueError("FEN has no piece placement")

    board = _parse_placement(parts[0], size)
    for color in Color:
        kings = board.count(color, PieceType.KING)
        if kings != 1:
            raise ValueError(f"Expected exactly one {color} king, found {kings}")

    side = Color.WHITE
    if len(parts) > 1:
        token = parts[1].lower()
        if token not in _SIDE_TOKENS:
            raise ValueError(f"Invalid side to move: {parts[1]!r}")
        side = _SIDE_TOKENS[token]

    if len(parts) > 2:
        _apply_castling_field(board, parts[2])

    return Position(board=board, side_to_move=side)


def position_to_fen(position: Position) -> str:
    """Serialise *position* as ``size:placement side castling - 0 1``."""
    board = position.board
    size = board.size

    rows: list[str] = []
    for rank in range(size - 1, -1, -1):
        empty = 0
        row = ""
        for file in range(size):
            piece = board[(file, rank)]
            if piece is None:
                empty += 1
                continue
            if empty:
                row += str(empty)
                empty = 0
            row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)

    side_str = "w" if position.side_to_move == Color.WHITE else "b"
    return (
        f"{size}:{'/'.join(rows)} {side_str} {castling_field(board)} "
        f"{_PLACEHOLDER_FIELDS}"
    )


def castling_field(board: Board) -> str:
    """Castling letters derived from what has moved on each back rank.

    A side may castle toward a direction when an unmoved king on its back rank
    has an unmoved rook of its color somewhere on that side.
    """
    letters = ""
    for letter, (color, direction) in _CASTLING_LETTERS.items():
        if _outer_rooks(board, color, direction):
            letters += letter
    return letters or "-"


# ── Helpers ──────────────────────────────────────────────────────────────


def _parse_placement(placement: str, size: int) -> Board:
    ranks = placement.split("/")
    if len(ranks) != size:
        raise ValueError(f"Expected {size} ranks for size {size}, found {len(ranks)}")

    board = Board(size)
    for rank_idx, rank_text in enumerate(ranks):
        rank = size - 1 - rank_idx
        file = 0
        run = ""
        for ch in rank_text:
            if ch.isdigit():
                run += ch
                continue
            file += _run_length(run, rank)
            run = ""
            if file >= size:
                raise ValueError(f"Rank {rank + 1} is wider than {size} files")
            board[(file, rank)] = Piece.from_char(ch)
            file += 1
        file += _run_length(run, rank)
        if file != size:
            raise ValueError(f"Rank {rank + 1} has {file} files, expected {size}")
    return board


def _run_length(run: str, rank: int) -> int:
    if not run:
        return 0
    length = int(run)
    if length == 0:
        raise ValueError(f"Empty run of zero squares on rank {rank + 1}")
    return length


def _apply_castling_field(board: Board, field: str) -> None:
    """Mark kings and rooks that the castling field says have moved."""
    if field != "-":
        unknown = set(field) - set(_CASTLING_LETTERS)
        if unknown:
            raise ValueError(f"Invalid castling field: {field!r}")

    for color in Color:
        king_sq = _back_rank_king(board, color)
        if king_sq is None:
            continue
        allowed = [
            direction
            for letter, (c, direction) in _CASTLING_LETTERS.items()
            if c == color and letter in field
        ]
        if not allowed:
            board[king_sq] = board[king_sq].moved()  # type: ignore[union-attr]
            continue
        for direction in (1, -1):
            if direction in allowed:
                continue
            for rook_sq in _outer_rooks(board, color, direction):
                board[rook_sq] = board[rook_sq].moved()  # type: ignore[union-attr]


def _back_rank(color: Color, size: int) -> int:
    return 0 if color == Color.WHITE else size - 1


def _back_rank_king(board: Board, color: Color) -> Square | None:
    """Unmoved king of *color* standing on its back rank."""
    king_sq = board.king_square(color)
    if king_sq is None or king_sq[1] != _back_rank(color, board.size):
        return None
    king = board[king_sq]
    if king is None or king.has_moved:
        return None
    return king_sq


def _outer_rooks(board: Board, color: Color, direction: int) -> list[Square]:
    """Unmoved rooks of *color* beside its unmoved king, toward *direction*."""
    king_sq = _back_rank_king(board, color)
    if king_sq is None:
        return []
    rank = king_sq[1]
    rooks: list[Square] = []
    file = king_sq[0] + direction
    while board.in_bounds(file, rank):
        piece = board[(file, rank)]
        if (
            piece is not None
            and piece.color == color
            and piece.piece_type == PieceType.ROOK
            and not piece.has_moved
        ):
            rooks.append((file, rank))
        file += direction
    return rooks
