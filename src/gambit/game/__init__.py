"""Game management layer: turn state machine, commands, controller.

Quick start::

    from gambit.core.types import E2, E4
    from gambit.game import Game

    game = Game()
    move = next(m for m in game.get_moves(E2) if m.new == E4)
    game.execute_move(move)
    game.undo()
"""

from gambit.game.commands import MoveCommand, PromotionCommand
from gambit.game.controller import GameController
from gambit.game.events import GameEvents, PropertyChange
from gambit.game.game import Game
from gambit.game.interfaces import QUIET_MOVE_THRESHOLD, GameCommand, GameOptions
from gambit.game.view import GameView, PieceSnapshot

__all__ = [
    # Interfaces / configuration
    "GameCommand",
    "GameOptions",
    "QUIET_MOVE_THRESHOLD",
    # Concrete
    "Game",
    "GameController",
    "GameEvents",
    "GameView",
    "MoveCommand",
    "PieceSnapshot",
    "PromotionCommand",
    "PropertyChange",
]
