"""Board transcript exchanged between networked peers.

One ``file,rank,<color><letter>,<moved>`` record per piece, file-major,
records joined by ``;``::

    4,0,wK,0;4,7,bK,1
"""

from __future__ import annotations

from grandchess.core.board import Board
from grandchess.core.enums import Color, PieceType
from grandchess.core.piece import Piece

_COLOR_CODES: dict[str, Color] = {"w": Color.WHITE, "b": Color.BLACK}
_COLOR_LETTERS: dict[Color, str] = {v: k for k, v in _COLOR_CODES.items()}

_KIND_CODES: dict[str, PieceType] = {
    "K": PieceType.KING,
    "Q": PieceType.QUEEN,
    "R": PieceType.ROOK,
    "B": PieceType.BISHOP,
    "N": PieceType.KNIGHT,
    "P": PieceType.PAWN,
}


def board_to_transcript(board: Board) -> str:
    records = [
        f"{file},{rank},{_COLOR_LETTERS[piece.color]}{piece.letter},"
        f"{int(piece.has_moved)}"
        for (file, rank), piece in board.occupied()
    ]
    return ";".join(records)


def board_from_transcript(data: str, size: int) -> Board:
    """Decode *data* onto a fresh ``size x size`` board.

    Empty records are skipped; anything else that does not parse raises
    :class:`ValueError`.
    """
    board = Board(size)
    for record in data.split(";"):
        record = record.strip()
        if not record:
            continue

        tokens = record.split(",")
        if len(tokens) != 4:
            raise ValueError(f"Malformed transcript record: {record!r}")
        file_text, rank_text, code, moved_text = tokens

        try:
            sq = (int(file_text), int(rank_text))
        except ValueError:
            raise ValueError(f"Malformed square in record: {record!r}") from None
        if not board.in_bounds(*sq):
            raise ValueError(f"Square off the {size}x{size} board: {record!r}")

        if len(code) != 2 or code[0] not in _COLOR_CODES or code[1] not in _KIND_CODES:
            raise ValueError(f"Unknown piece code {code!r} in record: {record!r}")
        if moved_text not in ("0", "1"):
            raise ValueError(f"Malformed moved flag in record: {record!r}")

        board[sq] = Piece(
            _COLOR_CODES[code[0]], _KIND_CODES[code[1]], has_moved=moved_text == "1"
        )
    return board
