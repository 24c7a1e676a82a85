"""Game management layer: controller, players, state machine.

Quick start::

    from grandchess.game import GameConfig, GameController, HumanPlayer

    ctrl = GameController()
    ctrl.new_game(
        white=HumanPlayer(Color.WHITE, "Alice"),
        black=HumanPlayer(Color.BLACK, "Bob"),
        config=GameConfig(board_size=12, setup_mode=SetupMode.TWO_LINES),
    )
"""

from grandchess.game.controller import GameController, GameEvents
from grandchess.game.interfaces import GameConfig, GamePhase, IGameController, IPlayer
from grandchess.game.player import AIPlayer, HumanPlayer
from grandchess.game.state import GameState, MoveOutcome, MoveRecord, PendingPromotion

__all__ = [
    # Interfaces
    "GameConfig",
    "GamePhase",
    "IGameController",
    "IPlayer",
    # Concrete
    "AIPlayer",
    "GameController",
    "GameEvents",
    "GameState",
    "HumanPlayer",
    "MoveOutcome",
    "MoveRecord",
    "PendingPromotion",
]
