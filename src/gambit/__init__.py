"""gambit: a two-player chess rules engine.

Subpackages:

* :mod:`gambit.core`: board, pieces, moves and the rule table.
* :mod:`gambit.game`: turn state machine, undo history, mover orchestration.
* :mod:`gambit.movers`: automatic players and their Qt worker bridge.
"""

__version__ = "0.1.0"
