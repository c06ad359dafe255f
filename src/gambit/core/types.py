"""Board coordinates and compass directions.

Board layout (row 0 is Black's back rank)::

    row 0:  a8 b8 c8 d8 e8 f8 g8 h8
    row 1:  a7 ...
    ...
    row 7:  a1 b1 c1 d1 e1 f1 g1 h1
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

BOARD_SIZE = 8
_FILES = "abcdefgh"


@dataclass(frozen=True, slots=True, order=True)
class Coordinate:
    """Immutable (row, column) board address; may lie off the board."""

    row: int
    column: int

    @property
    def on_board(self) -> bool:
        return on_board(self)

    @property
    def is_light(self) -> bool:
        """Square colour; a knight always changes it."""
        return self.row % 2 == self.column % 2

    @property
    def name(self) -> str:
        """Square name, e.g. ``Coordinate(6, 4)`` → ``'e2'``."""
        if not self.on_board:
            return f"({self.row},{self.column})"
        return f"{_FILES[self.column]}{BOARD_SIZE - self.row}"

    def move(self, *directions: Direction) -> Coordinate:
        """Translate once per direction. No bounds check."""
        coord = self
        for direction in directions:
            coord = direction.translate(coord)
        return coord

    def __str__(self) -> str:
        return self.name


def on_board(coord: Coordinate | None) -> bool:
    """Whether *coord* addresses a square of the 8x8 board."""
    if coord is None:
        return False
    return 0 <= coord.row < BOARD_SIZE and 0 <= coord.column < BOARD_SIZE


def parse_coordinate(name: str) -> Coordinate:
    """Parse a square name, e.g. ``'e4'`` → ``Coordinate(4, 4)``."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Coordinate(BOARD_SIZE - int(name[1]), _FILES.index(name[0]))


class Direction(Enum):
    """The eight compass vectors as (row delta, column delta)."""

    NORTH = (-1, 0)
    SOUTH = (1, 0)
    WEST = (0, -1)
    EAST = (0, 1)
    NORTHWEST = (-1, -1)
    NORTHEAST = (-1, 1)
    SOUTHWEST = (1, -1)
    SOUTHEAST = (1, 1)

    def translate(self, coord: Coordinate) -> Coordinate:
        """Adjacent coordinate in this direction (possibly off-board)."""
        d_row, d_column = self.value
        return Coordinate(coord.row + d_row, coord.column + d_column)


# ── Named coordinate constants ──────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = (Coordinate(0, c) for c in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Coordinate(1, c) for c in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Coordinate(2, c) for c in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Coordinate(3, c) for c in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Coordinate(4, c) for c in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Coordinate(5, c) for c in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Coordinate(6, c) for c in range(8))
A1, B1, C1, D1, E1, F1, G1, H1 = (Coordinate(7, c) for c in range(8))
