"""Mover protocol shared by automatic players."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from gambit.core.enums import PieceKind

if TYPE_CHECKING:
    from gambit.core.move import Move
    from gambit.game.view import GameView


class Mover(ABC):
    """An automatic player: a function from a :class:`GameView` to a move.

    Implementations must not mutate the game.  They may run on a worker
    thread; the controller applies the returned move.
    """

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def allow_undo(self) -> bool:
        """Whether a human undo may step back over this mover's moves."""
        return True

    @abstractmethod
    def choose_move(self, view: GameView) -> Move | None:
        """Pick one of ``view.moves``, or None when there is nothing to play."""

    def promotion_kind(self, view: GameView) -> PieceKind:
        """Kind to promote a pawn to once it reaches the last row."""
        del view
        return PieceKind.QUEEN

    def claims_stalemate(self, view: GameView) -> bool:
        """Whether to claim a quiet-move draw when one is available."""
        del view
        return False

    def __str__(self) -> str:
        return self.name
