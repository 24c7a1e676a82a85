"""Core domain layer: pure rules of big-board chess, no external dependencies.

Quick start::

    from grandchess.core import Rules, position_from_fen, STARTING_FEN

    pos = position_from_fen(STARTING_FEN)
    for move in Rules.all_legal_moves(pos):
        print(move)
"""

from grandchess.core.board import Board
from grandchess.core.enums import Color, GameResult, PieceType, SetupMode
from grandchess.core.move import Move
from grandchess.core.move_generator import MoveGenerator
from grandchess.core.notation import (
    STARTING_FEN,
    FenImportResult,
    import_fen,
    move_to_notation,
    position_from_fen,
    position_to_fen,
)
from grandchess.core.piece import Piece
from grandchess.core.position import Position
from grandchess.core.rules import Rules
from grandchess.core.setup import pawn_first_move_for, setup_board, validate_setup
from grandchess.core.types import (
    DEFAULT_BOARD_SIZE,
    MAX_BOARD_SIZE,
    MIN_BOARD_SIZE,
    STANDARD_BOARD_SIZE,
    Square,
    file_label,
    parse_square,
    square_name,
)

__all__ = [
    # Enums
    "Color",
    "GameResult",
    "PieceType",
    "SetupMode",
    # Types / helpers
    "DEFAULT_BOARD_SIZE",
    "MAX_BOARD_SIZE",
    "MIN_BOARD_SIZE",
    "STANDARD_BOARD_SIZE",
    "Square",
    "file_label",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    # Setup
    "pawn_first_move_for",
    "setup_board",
    "validate_setup",
    # Notation
    "STARTING_FEN",
    "FenImportResult",
    "import_fen",
    "move_to_notation",
    "position_from_fen",
    "position_to_fen",
]
