"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import IntEnum

from gambit.core.types import Direction


class Player(IntEnum):
    """Side to move, plus the terminal ``GAME_OVER`` state of the turn machine."""

    WHITE = 0
    BLACK = 1
    GAME_OVER = 2

    @property
    def next(self) -> Player:
        """The player who moves after this one; ``GAME_OVER`` is absorbing."""
        if self is Player.GAME_OVER:
            return self
        return Player(1 - self.value)

    @property
    def forward(self) -> Direction:
        """Direction this side's pawns advance."""
        if self is Player.GAME_OVER:
            raise ValueError("GAME_OVER has no forward direction")
        return Direction.NORTH if self is Player.WHITE else Direction.SOUTH

    @classmethod
    def players(cls) -> tuple[Player, Player]:
        """The two real players, White first."""
        return (cls.WHITE, cls.BLACK)

    def __str__(self) -> str:
        return self.name.lower()


_LABELS: dict[int, str] = {1: "K", 2: "Q", 3: "B", 4: "N", 5: "R", 6: "P"}


class PieceKind(IntEnum):
    """Closed set of piece kinds."""

    KING = 1
    QUEEN = 2
    BISHOP = 3
    KNIGHT = 4
    ROOK = 5
    PAWN = 6

    @property
    def label(self) -> str:
        """One-letter label, e.g. ``N`` for the knight."""
        return _LABELS[self.value]

    @classmethod
    def from_label(cls, label: str) -> PieceKind:
        for kind in cls:
            if kind.label == label.upper():
                return kind
        raise ValueError(f"No piece kind labelled {label!r}")

    @classmethod
    def promotion_kinds(cls) -> tuple[PieceKind, ...]:
        """Kinds a pawn may be promoted to."""
        return (cls.QUEEN, cls.BISHOP, cls.KNIGHT, cls.ROOK)


class GameResult(IntEnum):
    """How the game ended (or that it has not)."""

    IN_PROGRESS = 0
    CHECKMATE = 1
    STALEMATE = 2
    DRAW_CLAIMED = 3
