"""Concrete player implementations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from grandchess.core.enums import Color
from grandchess.game.interfaces import IPlayer

if TYPE_CHECKING:
    from grandchess.core.position import Position


class HumanPlayer(IPlayer):
    """A human participant; moves come from the UI or a remote peer.

    ``request_move`` is a no-op because humans select moves interactively.
    """

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str = "") -> None:
        self._color = color
        self._name = name or f"Player ({color})"

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, position: Position) -> None:
        pass  # Human moves arrive via controller.submit_move()


class AIPlayer(IPlayer):
    """An AI participant that delegates computation to a callback.

    ``AIPlayer`` only stores a *bridge* callable invoked on
    ``request_move``. In production the callable queues the snapshot to an
    ``EngineWorker`` living on a ``QThread`` and the worker's result is
    submitted back to the controller on the main thread.

    Args:
        color: Side the AI plays.
        name: Display name.
        on_request_move: ``(Position) -> None``, called with a snapshot
            when the controller asks the AI to start thinking.
    """

    __slots__ = ("_color", "_name", "_on_request_move")

    def __init__(
        self,
        color: Color,
        name: str = "Engine",
        on_request_move: Callable[[Position], None] | None = None,
    ) -> None:
        self._color = color
        self._name = name
        self._on_request_move = on_request_move

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return False

    def request_move(self, position: Position) -> None:
        if self._on_request_move is not None:
            self._on_request_move(position)
