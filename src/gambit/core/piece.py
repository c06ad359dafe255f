"""Piece: a chess man living on exactly one board."""

from __future__ import annotations

import weakref
from typing import TYPE_CHECKING

from gambit.core import move_generator
from gambit.core.enums import PieceKind, Player

if TYPE_CHECKING:
    from gambit.core.board import Board
    from gambit.core.move import Move
    from gambit.core.types import Coordinate, Direction

_UNICODE: dict[tuple[Player, PieceKind], str] = {
    (Player.WHITE, PieceKind.PAWN): "♙",
    (Player.WHITE, PieceKind.KNIGHT): "♘",
    (Player.WHITE, PieceKind.BISHOP): "♗",
    (Player.WHITE, PieceKind.ROOK): "♖",
    (Player.WHITE, PieceKind.QUEEN): "♕",
    (Player.WHITE, PieceKind.KING): "♔",
    (Player.BLACK, PieceKind.PAWN): "♟",
    (Player.BLACK, PieceKind.KNIGHT): "♞",
    (Player.BLACK, PieceKind.BISHOP): "♝",
    (Player.BLACK, PieceKind.ROOK): "♜",
    (Player.BLACK, PieceKind.QUEEN): "♛",
    (Player.BLACK, PieceKind.KING): "♚",
}


class Piece:
    """A piece with an owner, a kind and a move counter.

    Only ``kind`` (once, on promotion) and the move counter ever change.
    Two pieces compare equal when kind and owner match; that is meant for
    display lookups only, the board tracks pieces by identity.
    """

    __slots__ = ("_kind", "_owner", "_board_ref", "_move_count")

    def __init__(self, kind: PieceKind, owner: Player, board: Board) -> None:
        if owner not in Player.players():
            raise ValueError(f"Pieces cannot belong to {owner.name}")
        self._kind = kind
        self._owner = owner
        self._board_ref = weakref.ref(board)
        self._move_count = 0

    # ── Identity ─────────────────────────────────────────────────────────

    @property
    def kind(self) -> PieceKind:
        return self._kind

    @property
    def owner(self) -> Player:
        return self._owner

    @property
    def opponent(self) -> Player:
        return self._owner.next

    @property
    def forward(self) -> Direction:
        return self._owner.forward

    @property
    def board(self) -> Board:
        board = self._board_ref()
        if board is None:
            raise RuntimeError("Piece outlived its board")
        return board

    @property
    def location(self) -> Coordinate | None:
        return self.board.find_piece(self)

    def set_kind(self, kind: PieceKind) -> None:
        """Change kind (promotion or its undo) and repaint the square."""
        self._kind = kind
        location = self.location
        if location is not None:
            self.board.update(location)

    # ── Move bookkeeping ─────────────────────────────────────────────────

    @property
    def move_count(self) -> int:
        return self._move_count

    @property
    def is_moved(self) -> bool:
        return self._move_count > 0

    def increment_moves(self) -> None:
        self._move_count += 1

    def decrement_moves(self) -> None:
        if self._move_count > 0:
            self._move_count -= 1

    # ── Board queries ────────────────────────────────────────────────────

    def can_attack(self, target: Coordinate) -> bool:
        """*target* is on the board and holds an opposing piece."""
        if not target.on_board:
            return False
        other = self.board.piece_at(target)
        return other is not None and other.owner != self._owner

    def is_available(self, target: Coordinate) -> bool:
        """*target* is on the board and empty."""
        return target.on_board and self.board.piece_at(target) is None

    def is_player_check(self) -> bool:
        return self.board.is_check(self._owner)

    def moves(self, at: Coordinate) -> list[Move]:
        """Pseudo-legal moves of this piece standing on *at*."""
        return move_generator.candidate_moves(self, at)

    def destinations(self, at: Coordinate) -> list[Coordinate]:
        return move_generator.destinations(self, at)

    def has_move(self, frm: Coordinate, to: Coordinate) -> bool:
        return move_generator.has_move(self, frm, to)

    # ── Dunder helpers ───────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Piece):
            return NotImplemented
        return self._kind == other._kind and self._owner == other._owner

    def __hash__(self) -> int:
        # kind changes on promotion, owner never does
        return hash(self._owner)

    def __str__(self) -> str:
        """Uppercase letter for White, lowercase for Black."""
        label = self._kind.label
        return label if self._owner == Player.WHITE else label.lower()

    def __repr__(self) -> str:
        return f"Piece({self._kind.name}, {self._owner.name}, moves={self._move_count})"

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self._owner, self._kind)]
