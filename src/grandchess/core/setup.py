"""Starting arrays for every :class:`SetupMode`."""

from __future__ import annotations

import logging
import random

from grandchess.core.board import Board
from grandchess.core.enums import Color, PieceType, SetupMode
from grandchess.core.move_generator import DEFAULT_PAWN_FIRST_MOVE
from grandchess.core.piece import Piece

_LOGGER = logging.getLogger(__name__)

MIN_SIZE_FOR_MODE: dict[SetupMode, int] = {
    SetupMode.TWO_LINES: 6,
    SetupMode.ONE_LINE: 5,
    SetupMode.THREE_LINES: 8,
    SetupMode.CUSTOM: 3,
}

_PAWN_FIRST_MOVE: dict[SetupMode, int] = {
    SetupMode.TWO_LINES: DEFAULT_PAWN_FIRST_MOVE,
    SetupMode.ONE_LINE: DEFAULT_PAWN_FIRST_MOVE,
    SetupMode.THREE_LINES: 3,
    SetupMode.CUSTOM: DEFAULT_PAWN_FIRST_MOVE,
}

# Piece counts of the one-line array on a 26-file board; scaled to the size.
_ONE_LINE_REFERENCE_FILES = 26
_ONE_LINE_BISHOP_PAIRS = 4
_ONE_LINE_ROOKS = 4
_ONE_LINE_QUEENS = 3

_OUTWARD_PATTERN = (PieceType.QUEEN, PieceType.BISHOP, PieceType.KNIGHT, PieceType.ROOK)

_TWO_LINES_SECOND_RANK = (
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
    PieceType.QUEEN,
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
)

_THREE_LINES_SECOND_RANK = (
    PieceType.QUEEN,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.QUEEN,
    PieceType.ROOK,
)


def pawn_first_move_for(mode: SetupMode) -> int:
    """How far an unmoved pawn may advance in *mode*."""
    return _PAWN_FIRST_MOVE[mode]


def setup_board(
    board: Board, mode: SetupMode, rng: random.Random | None = None
) -> int:
    """Arrange *board* for *mode* and return the pawn first-move distance.

    Every mode but ``CUSTOM`` clears the board first. ``CUSTOM`` keeps the
    pieces already placed and raises :class:`ValueError` when they do not
    form a playable position.
    """
    size = board.size
    if size < MIN_SIZE_FOR_MODE[mode]:
        raise ValueError(
            f"{mode.label} setup needs a board of at least "
            f"{MIN_SIZE_FOR_MODE[mode]} files, got {size}"
        )

    match mode:
        case SetupMode.TWO_LINES:
            board.clear()
            _setup_two_lines(board)
        case SetupMode.ONE_LINE:
            board.clear()
            _setup_one_line(board, rng or random.Random())
        case SetupMode.THREE_LINES:
            board.clear()
            _setup_three_lines(board)
        case SetupMode.CUSTOM:
            problems = validate_setup(board)
            if problems:
                raise ValueError("; ".join(problems))

    _LOGGER.debug("Board %dx%d set up for %s", size, size, mode.label)
    return pawn_first_move_for(mode)


def validate_setup(board: Board) -> list[str]:
    """Problems preventing a custom arrangement from being played."""
    problems: list[str] = []
    last_rank = board.size - 1

    for color in Color:
        kings = board.count(color, PieceType.KING)
        if kings == 0:
            problems.append(f"No {color} king")
        elif kings > 1:
            problems.append(f"More than one {color} king ({kings})")
        if not any(True for _ in board.occupied(color)):
            problems.append(f"No {color} pieces")

    for sq, piece in board.occupied():
        if piece.piece_type == PieceType.PAWN and sq[1] in (0, last_rank):
            problems.append("Pawns cannot stand on the first or last rank")
            break

    return problems


# ── Helpers ──────────────────────────────────────────────────────────────


def _home_ranks(color: Color, size: int, count: int) -> list[int]:
    """Ranks nearest *color*'s edge, back rank first."""
    if color == Color.WHITE:
        return list(range(count))
    return [size - 1 - i for i in range(count)]


def _fill_rank(board: Board, rank: int, color: Color, kinds: list[PieceType]) -> None:
    for file, kind in enumerate(kinds):
        board[(file, rank)] = Piece(color, kind)


def _repeat(pattern: tuple[PieceType, ...], size: int) -> list[PieceType]:
    return [pattern[file % len(pattern)] for file in range(size)]


def _setup_two_lines(board: Board) -> None:
    size = board.size
    center = size // 2

    back = [PieceType.ROOK] * size
    back[center] = PieceType.KING
    for offset in range(1, center + 1):
        kind = _OUTWARD_PATTERN[(offset - 1) % len(_OUTWARD_PATTERN)]
        back[center - offset] = kind
        if center + offset < size:
            back[center + offset] = kind

    second = _repeat(_TWO_LINES_SECOND_RANK, size)
    pawns = [PieceType.PAWN] * size

    for color in Color:
        back_rank, second_rank, pawn_rank = _home_ranks(color, size, 3)
        _fill_rank(board, back_rank, color, back)
        _fill_rank(board, second_rank, color, second)
        _fill_rank(board, pawn_rank, color, pawns)


def _setup_three_lines(board: Board) -> None:
    size = board.size
    center = size // 2

    back = [
        PieceType.QUEEN if file % 3 == 1 else PieceType.ROOK for file in range(size)
    ]
    back[center] = PieceType.KING
    second = _repeat(_THREE_LINES_SECOND_RANK, size)
    third = [
        PieceType.KNIGHT if file % 2 == 0 else PieceType.BISHOP for file in range(size)
    ]
    pawns = [PieceType.PAWN] * size

    for color in Color:
        ranks = _home_ranks(color, size, 4)
        for rank, kinds in zip(ranks, (back, second, third, pawns)):
            _fill_rank(board, rank, color, kinds)


def _setup_one_line(board: Board, rng: random.Random) -> None:
    size = board.size
    back = one_line_back_rank(size, rng)
    pawns = [PieceType.PAWN] * size

    for color in Color:
        back_rank, pawn_rank = _home_ranks(color, size, 2)
        _fill_rank(board, back_rank, color, back)
        _fill_rank(board, pawn_rank, color, pawns)


def one_line_back_rank(size: int, rng: random.Random) -> list[PieceType]:
    """Randomised back rank shared by both colors.

    Bishops come in pairs on opposite square colors, the king stands between
    two rooks, then queens, and knights fill whatever is left.
    """
    if size < MIN_SIZE_FOR_MODE[SetupMode.ONE_LINE]:
        raise ValueError(f"One-line back rank needs at least 5 files, got {size}")

    def scaled(count: int, minimum: int) -> int:
        return max(minimum, count * size // _ONE_LINE_REFERENCE_FILES)

    pattern: list[PieceType | None] = [None] * size
    light = [f for f in range(size) if f % 2 == 0]
    dark = [f for f in range(size) if f % 2 == 1]

    # Leave room for the king and two rooks.
    max_pairs = min(len(dark), (size - 3) // 2)
    for _ in range(min(scaled(_ONE_LINE_BISHOP_PAIRS, 1), max_pairs)):
        for shade in (light, dark):
            file = shade.pop(rng.randrange(len(shade)))
            pattern[file] = PieceType.BISHOP

    available = [f for f in range(size) if pattern[f] is None]
    rook_count = min(scaled(_ONE_LINE_ROOKS, 2), len(available) - 1)
    chosen = sorted(rng.sample(available, rook_count + 1))
    king_idx = rng.randrange(1, len(chosen) - 1)
    for idx, file in enumerate(chosen):
        pattern[file] = PieceType.KING if idx == king_idx else PieceType.ROOK

    available = [f for f in range(size) if pattern[f] is None]
    queen_count = min(scaled(_ONE_LINE_QUEENS, 1), len(available))
    for file in rng.sample(available, queen_count):
        pattern[file] = PieceType.QUEEN

    return [kind if kind is not None else PieceType.KNIGHT for kind in pattern]
