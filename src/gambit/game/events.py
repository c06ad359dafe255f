"""Named property-change notifications emitted by :class:`Game`."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

TURN = "turn"
WHITE_CHECK = "white_check"
BLACK_CHECK = "black_check"
HISTORY = "history"

PROPERTY_NAMES: tuple[str, ...] = (TURN, WHITE_CHECK, BLACK_CHECK, HISTORY)


@dataclass(frozen=True, slots=True)
class PropertyChange:
    """A bound property moved from *old* to *new*."""

    name: str
    old: object
    new: object


PropertyCallback = Callable[[PropertyChange], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per property.

    A change is only delivered when the value actually changed, unless the
    old value is None (``history`` is always fired that way).
    """

    on_turn: list[PropertyCallback] = field(default_factory=list)
    on_white_check: list[PropertyCallback] = field(default_factory=list)
    on_black_check: list[PropertyCallback] = field(default_factory=list)
    on_history: list[PropertyCallback] = field(default_factory=list)
    on_any: list[PropertyCallback] = field(default_factory=list)

    def handlers(self, name: str) -> list[PropertyCallback]:
        if name not in PROPERTY_NAMES:
            raise ValueError(f"Unknown game property: {name!r}")
        return getattr(self, f"on_{name}")

    def subscribe(self, name: str | None, callback: PropertyCallback) -> None:
        """Register *callback* for property *name*, or for all when None."""
        target = self.on_any if name is None else self.handlers(name)
        target.append(callback)

    def unsubscribe(self, name: str | None, callback: PropertyCallback) -> None:
        target = self.on_any if name is None else self.handlers(name)
        if callback in target:
            target.remove(callback)

    def fire(self, name: str, old: object, new: object) -> None:
        if old is not None and old == new:
            return
        change = PropertyChange(name, old, new)
        for callback in [*self.handlers(name), *self.on_any]:
            callback(change)
