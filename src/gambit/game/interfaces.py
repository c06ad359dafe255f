"""Abstract interfaces and configuration for the game layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

QUIET_MOVE_THRESHOLD = 49


# ── Configuration ────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class GameOptions:
    """Rule settings fixed for the lifetime of a :class:`Game`.

    Args:
        quiet_move_threshold: Half-moves without a capture after which the
            side to move may claim a draw.  Only captures reset the count.
    """

    quiet_move_threshold: int = QUIET_MOVE_THRESHOLD

    def __post_init__(self) -> None:
        if self.quiet_move_threshold < 1:
            raise ValueError("quiet_move_threshold must be positive")


# ── Abstract interfaces ─────────────────────────────────────────────────────


class GameCommand(ABC):
    """An undoable action recorded in the game history."""

    @abstractmethod
    def execute(self) -> None:
        """Perform the action."""

    @abstractmethod
    def undo(self) -> None:
        """Revert a previous :meth:`execute` exactly."""

    @abstractmethod
    def __str__(self) -> str:
        """Human-readable history entry."""
