"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from grandchess.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable ``from -> to`` pair.

    Castling is a two-file king move, en passant a diagonal pawn move onto the
    en-passant target, promotion a pawn move onto the far rank; none of them
    needs a separate move type.
    """

    from_sq: Square
    to_sq: Square

    def __str__(self) -> str:
        return f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
