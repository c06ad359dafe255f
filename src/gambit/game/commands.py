"""Undoable game commands: moving a piece and promoting a pawn."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gambit.core.enums import PieceKind
from gambit.core.errors import GameStateError
from gambit.game.interfaces import GameCommand

if TYPE_CHECKING:
    from gambit.core.move import Move
    from gambit.core.piece import Piece
    from gambit.game.game import Game

_LOGGER = logging.getLogger(__name__)


class MoveCommand(GameCommand):
    """Moves a piece; leaves the game awaiting promotion when a pawn arrives."""

    __slots__ = ("_game", "_move", "_executed")

    def __init__(self, game: Game, move: Move) -> None:
        self._game = game
        self._move = move
        self._executed = False

    @property
    def move(self) -> Move:
        return self._move

    def execute(self) -> None:
        if self._executed:
            raise GameStateError("Cannot execute move again")
        if self._game.is_promoting:
            raise GameStateError("No moves allowed during a promotion")
        self._move.execute()
        self._executed = True
        _LOGGER.debug("Executed %s", self._move)
        if self._move.is_promotion:
            self._game._promoting = self._move.moving
        else:
            self._game._next_turn()

    def undo(self) -> None:
        if not self._executed:
            raise GameStateError("Move not executed yet")
        moving = self._move.moving
        assert moving is not None
        game = self._game
        game._promoting = None
        game._stalemate_claim = None
        self._executed = False
        self._move.undo()
        _LOGGER.debug("Undid %s", self._move)
        game._set_turn(moving.owner)

    def __str__(self) -> str:
        return str(self._move)


class PromotionCommand(GameCommand):
    """Turns the pending pawn into *kind*; undoing it also undoes the move."""

    __slots__ = ("_game", "_previous", "_kind", "_promoted")

    def __init__(self, game: Game, previous: GameCommand, kind: PieceKind) -> None:
        self._game = game
        self._previous = previous
        self._kind = kind
        self._promoted: Piece | None = None

    @property
    def kind(self) -> PieceKind:
        return self._kind

    @property
    def previous(self) -> GameCommand:
        return self._previous

    def execute(self) -> None:
        if self._promoted is not None:
            raise GameStateError("Cannot promote again")
        game = self._game
        pawn = game.promoting
        if pawn is None:
            raise GameStateError("No piece to promote")
        if self._kind not in PieceKind.promotion_kinds():
            raise ValueError(f"Cannot promote to {self._kind.name}")
        pawn.set_kind(self._kind)
        self._promoted = pawn
        game._promoting = None
        _LOGGER.debug("Promoted to %s", self._kind.name)
        game._next_turn()

    def undo(self) -> None:
        if self._promoted is None:
            raise GameStateError("Promotion not executed yet")
        game = self._game
        game._promoting = self._promoted
        self._promoted.set_kind(PieceKind.PAWN)
        self._promoted = None
        self._previous.undo()

    def __str__(self) -> str:
        return f"{self._previous} ={self._kind.label}"
