"""Board: authoritative square → piece mapping with reversible moves."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from gambit.core.enums import PieceKind, Player
from gambit.core.errors import EmptySquareError, OffBoardError
from gambit.core.move import CompoundMove, Move
from gambit.core.piece import Piece
from gambit.core.types import BOARD_SIZE, Coordinate, on_board

_BACK_RANK: tuple[PieceKind, ...] = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)


@dataclass(frozen=True, slots=True)
class BoardChanged:
    """Notification that the occupants of *coordinates* changed."""

    board: Board
    coordinates: tuple[Coordinate, ...]


BoardListener = Callable[[BoardChanged], None]


class Board:
    """Mutable 8x8 board owning its pieces and the undo chain of executed moves."""

    __slots__ = (
        "__weakref__",
        "_pieces",
        "_kings",
        "_last",
        "_quiet_moves",
        "_listeners",
        "_quiet_depth",
    )

    def __init__(self) -> None:
        self._pieces: dict[Coordinate, Piece] = {}
        self._kings: dict[Player, Piece] = {}
        self._last: Move | None = None
        # consecutive executed moves without a capture
        self._quiet_moves = 0
        self._listeners: list[BoardListener] = []
        self._quiet_depth = 0

    # -- Element access -----------------------------------------------------

    def __getitem__(self, coord: Coordinate) -> Piece | None:
        return self._pieces.get(coord)

    def piece_at(self, coord: Coordinate) -> Piece | None:
        """The piece on *coord*, or None when empty (or off-board)."""
        return self._pieces.get(coord)

    def __len__(self) -> int:
        return len(self._pieces)

    def items(self) -> list[tuple[Coordinate, Piece]]:
        """All (coordinate, piece) pairs in row-major order."""
        return sorted(self._pieces.items(), key=lambda item: item[0])

    def find_piece(self, piece: Piece) -> Coordinate | None:
        """Where *piece* stands, compared by identity; None if off the board."""
        if piece.board is not self:
            raise ValueError("Piece does not belong to this board")
        for coord, occupant in self._pieces.items():
            if occupant is piece:
                return coord
        return None

    def player_coordinates(self, player: Player) -> list[Coordinate]:
        """Squares occupied by *player*, in row-major order."""
        return sorted(c for c, p in self._pieces.items() if p.owner == player)

    def king(self, player: Player) -> Piece:
        """The tracked king of *player*."""
        try:
            return self._kings[player]
        except KeyError:
            raise ValueError(f"No {player.name} king on board") from None

    @property
    def last(self) -> Move | None:
        """Most recently executed, not yet undone move."""
        return self._last

    @property
    def quiet_moves(self) -> int:
        return self._quiet_moves

    # -- Setup --------------------------------------------------------------

    def place_piece(self, coord: Coordinate, kind: PieceKind, owner: Player) -> Piece | None:
        """Put a new piece on *coord*; returns the piece previously there."""
        if not on_board(coord):
            raise OffBoardError(coord)
        piece = Piece(kind, owner, self)
        if kind == PieceKind.KING:
            self._kings[owner] = piece
        removed = self._put(coord, piece)
        self._fire_changed((coord,))
        return removed

    @classmethod
    def initial(cls) -> Board:
        """Standard 32-piece starting position."""
        b = cls()
        for column, kind in enumerate(_BACK_RANK):
            b.place_piece(Coordinate(BOARD_SIZE - 1, column), kind, Player.WHITE)
            b.place_piece(Coordinate(0, column), kind, Player.BLACK)
        for column in range(BOARD_SIZE):
            b.place_piece(Coordinate(BOARD_SIZE - 2, column), PieceKind.PAWN, Player.WHITE)
            b.place_piece(Coordinate(1, column), PieceKind.PAWN, Player.BLACK)
        return b

    # -- Moves --------------------------------------------------------------

    def make_move(
        self,
        old: Coordinate,
        new: Coordinate,
        second_old: Coordinate | None = None,
        second_new: Coordinate | None = None,
    ) -> Move:
        """Build an unexecuted move; the board is not touched.

        Passing *second_old* yields a :class:`CompoundMove`; *second_new* may
        then be None to remove the second piece instead of relocating it.
        """
        for coord in (old, new, second_old, second_new):
            if coord is not None and not on_board(coord):
                raise OffBoardError(coord)
        if old not in self._pieces:
            raise EmptySquareError(old)
        if second_old is None:
            return Move(self, old, new)
        return CompoundMove(self, old, new, second_old, second_new)

    def checks_safety(self, move: Move) -> bool:
        """True if executing *move* would leave the mover's own king attacked.

        The move is executed and undone with notifications suspended, so the
        board is left exactly as it was.
        """
        with self.quiet():
            move.execute()
            try:
                mover = move.moving
                assert mover is not None
                return self.is_check(mover.owner)
            finally:
                move.undo()

    # -- Attack queries -----------------------------------------------------

    def is_check(self, player: Player) -> bool:
        """Whether *player*'s king is attacked by the opponent."""
        king_coord = self.find_piece(self.king(player))
        if king_coord is None:
            raise ValueError(f"{player.name} king is not on the board")
        return self.player_has_move(king_coord, player.next)

    def player_has_move(self, coord: Coordinate, player: Player) -> bool:
        """Whether any piece of *player* has a pseudo-legal move to *coord*."""
        for frm, piece in list(self._pieces.items()):
            if piece.owner == player and piece.has_move(frm, coord):
                return True
        return False

    # -- Notification -------------------------------------------------------

    def add_listener(self, listener: BoardListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: BoardListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def update(self, coord: Coordinate) -> None:
        """Notify listeners that *coord* changed (e.g. a piece changed kind)."""
        self._fire_changed((coord,))

    @property
    def is_quiet(self) -> bool:
        return self._quiet_depth > 0

    @contextmanager
    def quiet(self) -> Iterator[None]:
        """Suspend change notifications for the duration of the block."""
        self._quiet_depth += 1
        try:
            yield
        finally:
            self._quiet_depth -= 1

    def _fire_changed(self, coordinates: tuple[Coordinate, ...]) -> None:
        if self._quiet_depth or not self._listeners:
            return
        event = BoardChanged(self, coordinates)
        for listener in list(self._listeners):
            listener(event)

    # -- Raw mutation (used by Move) ----------------------------------------

    def _put(self, coord: Coordinate, piece: Piece) -> Piece | None:
        previous = self._pieces.get(coord)
        self._pieces[coord] = piece
        return previous

    def _remove(self, coord: Coordinate) -> Piece | None:
        return self._pieces.pop(coord, None)

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._pieces == other._pieces

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(BOARD_SIZE):
            cells = []
            for column in range(BOARD_SIZE):
                p = self._pieces.get(Coordinate(row, column))
                cells.append(str(p) if p else ".")
            rows.append(f"{BOARD_SIZE - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
