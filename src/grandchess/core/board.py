"""Board - piece placement on a square board of any supported size."""

from __future__ import annotations

from collections.abc import Iterator

from grandchess.core.enums import Color, PieceType
from grandchess.core.piece import Piece
from grandchess.core.types import (
    DEFAULT_BOARD_SIZE,
    MAX_BOARD_SIZE,
    MIN_BOARD_SIZE,
    Square,
    file_label,
    is_valid_size,
)

_COLOR_COUNT = 2


class Board:
    """Mutable ``size x size`` grid of optional pieces.

    The grid is the only record of where a piece stands. Squares are
    ``(file, rank)`` tuples; reading an off-board square yields ``None``,
    writing one raises :class:`IndexError`.
    """

    __slots__ = ("_size", "_squares", "_king_squares")

    def __init__(self, size: int = DEFAULT_BOARD_SIZE) -> None:
        if not is_valid_size(size):
            raise ValueError(
                f"Board size must be between {MIN_BOARD_SIZE} and {MAX_BOARD_SIZE}"
            )
        self._size = size
        self._squares: list[Piece | None] = [None] * (size * size)
        # [color] -> king square cache (None if king missing).
        self._king_squares: list[Square | None] = [None] * _COLOR_COUNT

    @property
    def size(self) -> int:
        return self._size

    def _index(self, sq: Square) -> int:
        file, rank = sq
        size = self._size
        if not (0 <= file < size and 0 <= rank < size):
            raise IndexError(f"Square {sq} is off a {size}x{size} board")
        return rank * size + file

    def in_bounds(self, file: int, rank: int) -> bool:
        return 0 <= file < self._size and 0 <= rank < self._size

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        file, rank = sq
        size = self._size
        if 0 <= file < size and 0 <= rank < size:
            return self._squares[rank * size + file]
        return None

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        idx = self._index(sq)
        old_piece = self._squares[idx]
        if (
            old_piece is not None
            and old_piece.piece_type == PieceType.KING
            and self._king_squares[int(old_piece.color)] == sq
        ):
            self._king_squares[int(old_piece.color)] = None

        self._squares[idx] = piece
        if piece is not None and piece.piece_type == PieceType.KING:
            self._king_squares[int(piece.color)] = sq

    def is_empty(self, sq: Square) -> bool:
        return self[sq] is None

    def move(self, from_sq: Square, to_sq: Square) -> Piece | None:
        """Transfer the piece on *from_sq* to *to_sq*, marking it moved.

        Returns whatever stood on *to_sq* before.
        """
        piece = self[from_sq]
        captured = self[to_sq]
        if piece is None:
            return captured
        self[from_sq] = None
        self[to_sq] = piece.moved()
        return captured

    # -- Query helpers ------------------------------------------------------

    def occupied(self, color: Color | None = None) -> Iterator[tuple[Square, Piece]]:
        """``(square, piece)`` pairs, file-major, optionally for one color."""
        size = self._size
        squares = self._squares
        for file in range(size):
            for rank in range(size):
                piece = squares[rank * size + file]
                if piece is None:
                    continue
                if color is None or piece.color == color:
                    yield (file, rank), piece

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*."""
        return [
            sq for sq, piece in self.occupied(color) if piece.piece_type == piece_type
        ]

    def count(self, color: Color, piece_type: PieceType) -> int:
        return len(self.pieces(color, piece_type))

    def king_square(self, color: Color) -> Square | None:
        """Square of *color*'s king, ``None`` when there is none."""
        return self._king_squares[int(color)]

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board.__new__(Board)
        b._size = self._size
        b._squares = self._squares.copy()
        b._king_squares = self._king_squares.copy()
        return b

    def clear(self) -> None:
        self._squares = [None] * (self._size * self._size)
        self._king_squares = [None] * _COLOR_COUNT

    def resize(self, size: int) -> None:
        """Change the board size. The board is left empty."""
        if not is_valid_size(size):
            raise ValueError(
                f"Board size must be between {MIN_BOARD_SIZE} and {MAX_BOARD_SIZE}"
            )
        self._size = size
        self.clear()

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard 8x8 starting position."""
        b = cls(8)
        for f in range(8):
            b[(f, 1)] = Piece(Color.WHITE, PieceType.PAWN)
            b[(f, 6)] = Piece(Color.BLACK, PieceType.PAWN)

        back_rank = [
            PieceType.ROOK,
            PieceType.KNIGHT,
            PieceType.BISHOP,
            PieceType.QUEEN,
            PieceType.KING,
            PieceType.BISHOP,
            PieceType.KNIGHT,
            PieceType.ROOK,
        ]
        for f, pt in enumerate(back_rank):
            b[(f, 0)] = Piece(Color.WHITE, pt)
            b[(f, 7)] = Piece(Color.BLACK, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._size == other._size and self._squares == other._squares

    def __repr__(self) -> str:
        size = self._size
        width = len(str(size))
        rows: list[str] = []
        for rank in range(size - 1, -1, -1):
            row = []
            for file in range(size):
                p = self[(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1:>{width}} {' '.join(row)}")
        rows.append(" " * width + " " + " ".join(file_label(f)[-1] for f in range(size)))
        return "\n".join(rows)
