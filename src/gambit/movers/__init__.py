"""Automatic players and the Qt worker bridge that runs them."""

from gambit.movers.base import Mover
from gambit.movers.qt_bridge import MoverWorker
from gambit.movers.random_mover import RandomCapture, RandomMover

__all__ = [
    "Mover",
    "MoverWorker",
    "RandomCapture",
    "RandomMover",
]
