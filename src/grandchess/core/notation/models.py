"""Shared notation-layer data models."""

from __future__ import annotations

from dataclasses import dataclass

from grandchess.core.position import Position


@dataclass(slots=True)
class FenImportResult:
    """Outcome of decoding a position string.

    ``position`` is only set when ``success`` is true; ``message`` says what
    was wrong otherwise.
    """

    success: bool
    message: str = ""
    position: Position | None = None

    def __bool__(self) -> bool:
        return self.success
