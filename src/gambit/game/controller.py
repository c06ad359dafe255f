"""GameController: serializes human and mover commands into one :class:`Game`.

Coordinates: Game, per-player Movers, the mover result inbox.
Movers decide on a :class:`GameView`; their answers come back through
:meth:`GameController.deliver` and are applied one at a time.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING

from gambit.core.enums import PieceKind, Player
from gambit.game.game import Game

if TYPE_CHECKING:
    from collections.abc import Callable

    from gambit.core.move import Move
    from gambit.game.view import GameView
    from gambit.movers.base import Mover

    # mover, snapshot, request id
    Dispatch = Callable[[Mover, GameView, int], None]

_LOGGER = logging.getLogger(__name__)


class GameController:
    """Owns a game and the movers playing it.

    Thread-safety: every public method must be called from the thread that
    owns the game.  A mover running elsewhere hands its result back via
    :meth:`deliver` (for Qt, through a queued signal connection).

    Args:
        game: Game to drive; a new standard game by default.
        dispatch: ``(mover, view, request_id) -> None`` starting a mover
            computation.  The default runs the mover inline and queues its
            answer.
    """

    __slots__ = (
        "_game",
        "_movers",
        "_dispatch",
        "_request_id",
        "_inbox",
        "_draining",
        "__weakref__",
    )

    def __init__(self, game: Game | None = None, dispatch: Dispatch | None = None) -> None:
        self._game = game if game is not None else Game()
        self._movers: dict[Player, Mover] = {}
        self._dispatch: Dispatch = dispatch if dispatch is not None else self._run_inline
        self._request_id = 0
        self._inbox: deque[tuple[int, Mover, Move | None]] = deque()
        self._draining = False

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def game(self) -> Game:
        return self._game

    @property
    def request_id(self) -> int:
        """Id of the most recent mover request."""
        return self._request_id

    def mover(self, player: Player) -> Mover | None:
        return self._movers.get(player)

    def turn_has_mover(self) -> bool:
        return self._game.turn in self._movers

    def set_mover(self, player: Player, mover: Mover | None) -> None:
        """Let *mover* play *player* (None hands the side back to a human)."""
        if player not in Player.players():
            raise ValueError(f"May not assign mover to {player.name}")
        if mover is None:
            self._movers.pop(player, None)
        else:
            self._movers[player] = mover
        self._prompt()
        self._drain()

    # ── Human entry points ───────────────────────────────────────────────

    def submit_move(self, move: Move) -> None:
        """Execute a human move, then let the next mover answer."""
        self._game.execute_move(move)
        self._prompt()
        self._drain()

    def promote(self, kind: PieceKind) -> None:
        self._game.promote(kind)
        self._prompt()
        self._drain()

    def undo(self) -> bool:
        """Undo until a side without an undo-allowing mover is to move."""
        undone = False
        self._request_id += 1  # answers to earlier requests are now stale
        while self._game.undo():
            undone = True
            mover = self._movers.get(self._game.turn)
            if mover is None or not mover.allow_undo:
                break
        self._prompt()
        self._drain()
        return undone

    # ── Mover channel ────────────────────────────────────────────────────

    def deliver(self, request_id: int, move: Move | None) -> None:
        """Hand in a mover's answer to request *request_id*."""
        mover = self._movers.get(self._game.turn)
        if mover is None:
            _LOGGER.warning("Dropping mover result %d: no mover to move", request_id)
            return
        self._inbox.append((request_id, mover, move))
        self._drain()

    def _run_inline(self, mover: Mover, view: GameView, request_id: int) -> None:
        self._inbox.append((request_id, mover, mover.choose_move(view)))

    def _prompt(self) -> None:
        game = self._game
        if game.is_game_over or game.is_promoting:
            return
        mover = self._movers.get(game.turn)
        if mover is None:
            return
        self._request_id += 1
        _LOGGER.debug("Requesting move %d from %s", self._request_id, mover.name)
        self._dispatch(mover, game.view(), self._request_id)

    def _drain(self) -> None:
        if self._draining:
            return
        self._draining = True
        try:
            while self._inbox:
                request_id, mover, move = self._inbox.popleft()
                if request_id != self._request_id:
                    _LOGGER.warning("Dropping stale mover result %d", request_id)
                    continue
                if self._apply(mover, move):
                    self._prompt()
        finally:
            self._draining = False

    def _apply(self, mover: Mover, move: Move | None) -> bool:
        game = self._game
        if move is None:
            _LOGGER.warning("%s found no move", mover.name)
            return False
        promotion = move.promotes_piece
        if (
            not promotion
            and game.can_declare_stalemate()
            and mover.claims_stalemate(game.view())
        ):
            game.declare_stalemate()
        try:
            game.execute_move(move)
        except Exception:
            game.withdraw_stalemate()
            raise
        if promotion:
            game.promote(mover.promotion_kind(game.view()))
        return True
