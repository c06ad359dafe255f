"""Movers that play uniformly random legal moves."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from gambit.movers.base import Mover

if TYPE_CHECKING:
    from gambit.core.move import Move
    from gambit.game.view import GameView


class RandomMover(Mover):
    """Plays a random legal move.

    Args:
        prefer_capture: Restrict the choice to captures whenever one exists.
        claim_draws: Claim the quiet-move draw as soon as it is available.
        rng: Random source; pass a seeded ``random.Random`` for repeatability.
    """

    __slots__ = ("_prefer_capture", "_claim_draws", "_rng")

    def __init__(
        self,
        prefer_capture: bool = False,
        claim_draws: bool = False,
        rng: random.Random | None = None,
    ) -> None:
        self._prefer_capture = prefer_capture
        self._claim_draws = claim_draws
        self._rng = rng if rng is not None else random.Random()

    @property
    def name(self) -> str:
        return "Random (Capturing)" if self._prefer_capture else "Random"

    def choose_move(self, view: GameView) -> Move | None:
        moves = view.moves
        if self._prefer_capture:
            moves = view.captures or moves
        if not moves:
            return None
        return self._rng.choice(moves)

    def claims_stalemate(self, view: GameView) -> bool:
        return self._claim_draws and view.can_declare_stalemate


class RandomCapture(RandomMover):
    """Captures when it can, otherwise plays any legal move."""

    __slots__ = ()

    def __init__(self, claim_draws: bool = False, rng: random.Random | None = None) -> None:
        super().__init__(prefer_capture=True, claim_draws=claim_draws, rng=rng)

    @property
    def name(self) -> str:
        return "Random Capturing"
