"""Qt bridge to run movers in a worker thread."""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from gambit.game.view import GameView
from gambit.movers.base import Mover

_LOGGER = logging.getLogger(__name__)


class MoverWorker(QObject):
    """Thread-affine worker that asks movers for a move on demand.

    Connect ``move_ready`` to ``GameController.deliver`` with a queued
    connection so results are applied on the game's thread.
    """

    move_ready = pyqtSignal(int, object)
    no_move = pyqtSignal(int)
    request_cancelled = pyqtSignal(int)
    mover_error = pyqtSignal(int, str)

    __slots__ = ("_cancel_event",)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._cancel_event = threading.Event()

    @pyqtSlot(object, object, int)
    def request_move(self, mover_obj: object, view_obj: object, request_id: int) -> None:
        """Ask *mover_obj* for a move on *view_obj* and emit the result."""
        if not isinstance(mover_obj, Mover) or not isinstance(view_obj, GameView):
            self.mover_error.emit(request_id, "Worker received an invalid request")
            return

        self._cancel_event.clear()
        try:
            move = mover_obj.choose_move(view_obj)
        except Exception as exc:
            _LOGGER.exception("Mover %s failed on request %d", mover_obj.name, request_id)
            self.mover_error.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.request_cancelled.emit(request_id)
            return

        if move is None:
            self.no_move.emit(request_id)
            return

        self.move_ready.emit(request_id, move)

    @pyqtSlot()
    def cancel(self) -> None:
        """Drop the result of the computation in progress."""
        self._cancel_event.set()
