"""Core rules engine: pure chess logic with zero external dependencies.

Quick start::

    from gambit.core import Board
    from gambit.core.types import E2

    board = Board.initial()
    pawn = board[E2]
    for move in pawn.moves(E2):
        print(move, board.checks_safety(move))
"""

from gambit.core.board import Board, BoardChanged, BoardListener
from gambit.core.enums import GameResult, PieceKind, Player
from gambit.core.errors import EmptySquareError, GameStateError, OffBoardError
from gambit.core.move import CompoundMove, Move
from gambit.core.piece import Piece
from gambit.core.types import (
    BOARD_SIZE,
    Coordinate,
    Direction,
    on_board,
    parse_coordinate,
)

__all__ = [
    # Enums
    "GameResult",
    "PieceKind",
    "Player",
    # Types / helpers
    "BOARD_SIZE",
    "Coordinate",
    "Direction",
    "on_board",
    "parse_coordinate",
    # Errors
    "EmptySquareError",
    "GameStateError",
    "OffBoardError",
    # Domain objects
    "Board",
    "BoardChanged",
    "BoardListener",
    "CompoundMove",
    "Move",
    "Piece",
]
