"""Game management layer: sessions, controller, players and game state.

Quick start::

    from hnefatafl.core import Role
    from hnefatafl.game import GameController, HumanPlayer

    ctrl = GameController()
    ctrl.new_game(
        attacker=HumanPlayer(Role.ATTACKER, "Alice"),
        defender=HumanPlayer(Role.DEFENDER, "Bob"),
    )
"""

from hnefatafl.game.controller import GameController, GameEvents
from hnefatafl.game.interfaces import (
    GameEndReason,
    GamePhase,
    GameResult,
    IGameController,
    IPlayer,
)
from hnefatafl.game.player import AIPlayer, HumanPlayer
from hnefatafl.game.session import GameSession, request_ai_move, request_legal_move
from hnefatafl.game.state import GameState, MoveRecord

__all__ = [
    # Interfaces
    "GameEndReason",
    "GamePhase",
    "GameResult",
    "IGameController",
    "IPlayer",
    # Concrete
    "AIPlayer",
    "GameController",
    "GameEvents",
    "GameSession",
    "GameState",
    "HumanPlayer",
    "MoveRecord",
    # Entry points
    "request_ai_move",
    "request_legal_move",
]
