"""Exceptions raised for programming-contract violations.

None of these signal an "illegal move": illegal moves never leave
``Game.get_moves``.  Each one means a collaborator misused the API.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gambit.core.types import Coordinate


class OffBoardError(IndexError):
    """A coordinate outside the 8x8 board was used where a square is required."""

    def __init__(self, coord: Coordinate) -> None:
        super().__init__(f"Coordinate is off the board: {coord.row},{coord.column}")
        self.coordinate = coord


class EmptySquareError(LookupError):
    """A move was requested from a square holding no piece."""

    def __init__(self, coord: Coordinate) -> None:
        super().__init__(f"No piece on {coord}")
        self.coordinate = coord


class GameStateError(RuntimeError):
    """An operation was invoked in a state that does not allow it."""
