"""Notation package: extended FEN, move notation and board transcripts."""

from grandchess.core.notation.fen import (
    STARTING_FEN,
    castling_field,
    import_fen,
    position_from_fen,
    position_to_fen,
)
from grandchess.core.notation.models import FenImportResult
from grandchess.core.notation.san import (
    check_suffix,
    move_to_notation,
    promotion_to_notation,
)
from grandchess.core.notation.transcript import (
    board_from_transcript,
    board_to_transcript,
)

__all__ = [
    "STARTING_FEN",
    "FenImportResult",
    "castling_field",
    "import_fen",
    "position_from_fen",
    "position_to_fen",
    "check_suffix",
    "move_to_notation",
    "promotion_to_notation",
    "board_from_transcript",
    "board_to_transcript",
]
