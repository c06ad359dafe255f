"""GameView: the read-only snapshot a mover decides on."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gambit.core.enums import PieceKind, Player
    from gambit.core.move import Move
    from gambit.core.piece import Piece
    from gambit.core.types import Coordinate


@dataclass(frozen=True, slots=True)
class PieceSnapshot:
    """A piece as it stood when the view was taken."""

    kind: PieceKind
    owner: Player
    move_count: int

    @classmethod
    def of(cls, piece: Piece) -> PieceSnapshot:
        return cls(piece.kind, piece.owner, piece.move_count)


@dataclass(frozen=True, slots=True)
class GameView:
    """Everything a mover may look at, captured on the game's own thread.

    Nothing here follows the live board after the view is built, so a mover
    on another thread reads a consistent position.  Movers must not execute
    the contained moves themselves; they return one to the controller, which
    applies it.
    """

    turn: Player
    moves: tuple[Move, ...]
    pieces: Mapping[Coordinate, PieceSnapshot]
    can_declare_stalemate: bool
    quiet_moves: int
    # subset of ``moves`` that take a piece, en passant included
    captures: tuple[Move, ...] = ()

    def piece_at(self, coord: Coordinate) -> PieceSnapshot | None:
        return self.pieces.get(coord)
