"""Move and CompoundMove: reversible board transitions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gambit.core.enums import PieceKind
from gambit.core.errors import EmptySquareError, GameStateError
from gambit.core.types import BOARD_SIZE

if TYPE_CHECKING:
    from gambit.core.board import Board
    from gambit.core.piece import Piece
    from gambit.core.types import Coordinate

_LAST_ROWS = (0, BOARD_SIZE - 1)


class Move:
    """One piece travelling from *old* to *new*, capturing whatever is there.

    Built by :meth:`Board.make_move`.  Each :meth:`execute` must be matched by
    exactly one :meth:`undo`; the pair restores the board exactly, including
    move counters, the quiet-move counter and the ``last`` pointer.
    """

    __slots__ = (
        "_board",
        "_old",
        "_new",
        "_moving",
        "_captured",
        "_previous",
        "_promotion",
        "_quiet_before",
    )

    def __init__(self, board: Board, old: Coordinate, new: Coordinate) -> None:
        self._board = board
        self._old = old
        self._new = new
        self._moving: Piece | None = None
        self._captured: Piece | None = None
        self._previous: Move | None = None
        self._promotion = False
        self._quiet_before = 0

    # ── Accessors ────────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @property
    def old(self) -> Coordinate:
        return self._old

    @property
    def new(self) -> Coordinate:
        return self._new

    @property
    def moving(self) -> Piece | None:
        """The moved piece, or None while not executed."""
        return self._moving

    @property
    def captured(self) -> Piece | None:
        return self._captured

    @property
    def executed(self) -> bool:
        return self._moving is not None

    @property
    def is_promotion(self) -> bool:
        """Set by :meth:`execute` when a pawn reached the last row."""
        return self._promotion

    @property
    def promotes_piece(self) -> bool:
        """Whether executing this move puts a pawn on its last row."""
        if self.executed:
            return self._promotion
        piece = self._board.piece_at(self._old)
        return (
            piece is not None
            and piece.kind == PieceKind.PAWN
            and self._new.row in _LAST_ROWS
        )

    @property
    def is_capture(self) -> bool:
        if self.executed:
            return self._captured is not None
        return self._board.piece_at(self._new) is not None

    # ── Execution ────────────────────────────────────────────────────────

    def execute(self) -> None:
        if self._moving is not None:
            raise GameStateError("Move already executed")
        board = self._board
        moving = board._remove(self._old)
        if moving is None:
            raise EmptySquareError(self._old)
        self._moving = moving
        self._captured = board._put(self._new, moving)
        self._promotion = (
            moving.kind == PieceKind.PAWN and self._new.row in _LAST_ROWS
        )
        moving.increment_moves()
        self._quiet_before = board.quiet_moves
        board._quiet_moves = 0 if self._captured is not None else board.quiet_moves + 1
        self._previous = board.last
        board._last = self
        board._fire_changed((self._old, self._new))

    def undo(self) -> None:
        if self._moving is None:
            raise GameStateError("Move not executed")
        board = self._board
        self._moving.decrement_moves()
        self._promotion = False
        if self._captured is None:
            board._remove(self._new)
        else:
            board._put(self._new, self._captured)
        board._put(self._old, self._moving)
        self._moving = None
        self._captured = None
        board._quiet_moves = self._quiet_before
        board._last = self._previous
        self._previous = None
        board._fire_changed((self._old, self._new))

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        sep = "x" if self.executed and self._captured is not None else "-"
        return f"{self._old}{sep}{self._new}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self})"


class CompoundMove(Move):
    """A move that also relocates (castling) or removes (en passant) a second piece.

    ``second_new is None`` means the piece on ``second_old`` is taken off the
    board, which counts as a capture for the quiet-move counter.
    """

    __slots__ = ("_second_old", "_second_new", "_second_moving", "_second_captured")

    def __init__(
        self,
        board: Board,
        old: Coordinate,
        new: Coordinate,
        second_old: Coordinate,
        second_new: Coordinate | None,
    ) -> None:
        super().__init__(board, old, new)
        self._second_old = second_old
        self._second_new = second_new
        self._second_moving: Piece | None = None
        self._second_captured: Piece | None = None

    @property
    def second_old(self) -> Coordinate:
        return self._second_old

    @property
    def second_new(self) -> Coordinate | None:
        return self._second_new

    @property
    def is_capture(self) -> bool:
        return self._second_new is None or super().is_capture

    def execute(self) -> None:
        super().execute()
        board = self._board
        second = board._remove(self._second_old)
        if second is None:
            super().undo()
            raise EmptySquareError(self._second_old)
        self._second_moving = second
        if self._second_new is not None:
            self._second_captured = board._put(self._second_new, second)
            second.increment_moves()
            board._fire_changed((self._second_old, self._second_new))
        else:
            board._quiet_moves = 0
            board._fire_changed((self._second_old,))

    def undo(self) -> None:
        if self._second_moving is None:
            raise GameStateError("Move not executed")
        board = self._board
        if self._second_new is not None:
            self._second_moving.decrement_moves()
            if self._second_captured is None:
                board._remove(self._second_new)
            else:
                board._put(self._second_new, self._second_captured)
            changed: tuple[Coordinate, ...] = (self._second_old, self._second_new)
        else:
            changed = (self._second_old,)
        board._put(self._second_old, self._second_moving)
        self._second_moving = None
        self._second_captured = None
        board._fire_changed(changed)
        super().undo()

    def __str__(self) -> str:
        if self._second_new is None:
            return f"{self._old}x{self._new} e.p."
        return super().__str__()
