"""Piece-kind rule table: pseudo-legal move generation and attack tests.

Every kind has one generator in :data:`_GENERATORS`.  Attack queries
(:func:`has_move`) run the very same generators, so "can move there" and
"attacks that square" cannot disagree.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gambit.core.enums import PieceKind
from gambit.core.types import Coordinate, Direction

if TYPE_CHECKING:
    from collections.abc import Callable

    from gambit.core.move import Move
    from gambit.core.piece import Piece

    _Generator = Callable[[Piece, Coordinate], list[Move]]

ALL_DIRECTIONS: tuple[Direction, ...] = tuple(Direction)
BISHOP_DIRECTIONS: tuple[Direction, ...] = (
    Direction.NORTHWEST,
    Direction.NORTHEAST,
    Direction.SOUTHWEST,
    Direction.SOUTHEAST,
)
ROOK_DIRECTIONS: tuple[Direction, ...] = (
    Direction.NORTH,
    Direction.SOUTH,
    Direction.WEST,
    Direction.EAST,
)
CASTLING_DIRECTIONS: tuple[Direction, ...] = (Direction.EAST, Direction.WEST)


# -- Public API -------------------------------------------------------------


def candidate_moves(piece: Piece, at: Coordinate) -> list[Move]:
    """Pseudo-legal moves for *piece* standing on *at*."""
    return _GENERATORS[piece.kind](piece, at)


def destinations(piece: Piece, at: Coordinate) -> list[Coordinate]:
    return [move.new for move in candidate_moves(piece, at)]


def has_move(piece: Piece, frm: Coordinate, to: Coordinate) -> bool:
    """Whether *to* is among the pseudo-legal destinations of *piece* on *frm*."""
    if piece.kind == PieceKind.KING:
        # Castling never lands on an occupied square, so the adjacent squares
        # decide every attack question.
        if max(abs(frm.row - to.row), abs(frm.column - to.column)) > 1:
            return False
        return to in _king_steps(piece, frm)
    return any(move.new == to for move in candidate_moves(piece, frm))


# -- Shared helpers ---------------------------------------------------------


def _to_moves(piece: Piece, at: Coordinate, targets: list[Coordinate]) -> list[Move]:
    board = piece.board
    return [board.make_move(at, target) for target in targets]


def _slide(
    piece: Piece, at: Coordinate, directions: tuple[Direction, ...]
) -> list[Coordinate]:
    targets: list[Coordinate] = []
    for direction in directions:
        nxt = direction.translate(at)
        while piece.is_available(nxt):
            targets.append(nxt)
            nxt = direction.translate(nxt)
        if piece.can_attack(nxt):
            targets.append(nxt)
    return targets


# -- Per-kind generators ----------------------------------------------------


def _gen_queen(piece: Piece, at: Coordinate) -> list[Move]:
    return _to_moves(piece, at, _slide(piece, at, ALL_DIRECTIONS))


def _gen_bishop(piece: Piece, at: Coordinate) -> list[Move]:
    return _to_moves(piece, at, _slide(piece, at, BISHOP_DIRECTIONS))


def _gen_rook(piece: Piece, at: Coordinate) -> list[Move]:
    return _to_moves(piece, at, _slide(piece, at, ROOK_DIRECTIONS))


def _gen_knight(piece: Piece, at: Coordinate) -> list[Move]:
    targets: list[Coordinate] = []
    for row in range(at.row - 2, at.row + 3):
        if row == at.row:
            continue
        for column in range(at.column - 2, at.column + 3):
            if column == at.column:
                continue
            target = Coordinate(row, column)
            # Only the L-shaped jumps change square colour inside the 5x5 box.
            if target.is_light == at.is_light:
                continue
            if piece.is_available(target) or piece.can_attack(target):
                targets.append(target)
    return _to_moves(piece, at, targets)


def _king_steps(king: Piece, at: Coordinate) -> list[Coordinate]:
    steps: list[Coordinate] = []
    for direction in ALL_DIRECTIONS:
        nxt = direction.translate(at)
        if king.is_available(nxt) or king.can_attack(nxt):
            steps.append(nxt)
    return steps


def _castle(king: Piece, at: Coordinate, direction: Direction) -> Move | None:
    if king.is_moved or king.is_player_check():
        return None
    board = king.board
    passing = direction.translate(at)
    landing = direction.translate(passing)
    nxt = passing
    while nxt.on_board and board.piece_at(nxt) is None:
        nxt = direction.translate(nxt)
    if not nxt.on_board or nxt in (passing, landing):
        return None
    rook = board.piece_at(nxt)
    if (
        rook is None
        or rook.kind != PieceKind.ROOK
        or rook.owner != king.owner
        or rook.is_moved
    ):
        return None
    # Only the square the king crosses is trial-tested here; the landing
    # square is covered by the legality filter like any other move.
    if board.checks_safety(board.make_move(at, passing)):
        return None
    return board.make_move(at, landing, nxt, passing)


def _gen_king(piece: Piece, at: Coordinate) -> list[Move]:
    moves = _to_moves(piece, at, _king_steps(piece, at))
    for direction in CASTLING_DIRECTIONS:
        castle = _castle(piece, at, direction)
        if castle is not None:
            moves.append(castle)
    return moves


def _pawn_steps(pawn: Piece, at: Coordinate) -> list[Coordinate]:
    targets: list[Coordinate] = []
    forward = pawn.forward.translate(at)
    if pawn.is_available(forward):
        targets.append(forward)
        if not pawn.is_moved:
            again = pawn.forward.translate(forward)
            if pawn.is_available(again):
                targets.append(again)
    take_left = Direction.WEST.translate(forward)
    if pawn.can_attack(take_left):
        targets.append(take_left)
    take_right = Direction.EAST.translate(forward)
    if pawn.can_attack(take_right):
        targets.append(take_right)
    return targets


def _en_passant(pawn: Piece, at: Coordinate) -> Move | None:
    board = pawn.board
    last = board.last
    if last is None or last.moving is None:
        return None
    advanced = last.moving
    if advanced.kind != PieceKind.PAWN or advanced.owner == pawn.owner:
        return None
    landed = last.new
    if (
        at.row == landed.row
        and abs(at.column - landed.column) == 1
        and abs(last.old.row - landed.row) == 2
    ):
        return board.make_move(at, pawn.forward.translate(landed), landed, None)
    return None


def _gen_pawn(piece: Piece, at: Coordinate) -> list[Move]:
    moves = _to_moves(piece, at, _pawn_steps(piece, at))
    passant = _en_passant(piece, at)
    if passant is not None:
        moves.append(passant)
    return moves


_GENERATORS: dict[PieceKind, _Generator] = {
    PieceKind.KING: _gen_king,
    PieceKind.QUEEN: _gen_queen,
    PieceKind.BISHOP: _gen_bishop,
    PieceKind.KNIGHT: _gen_knight,
    PieceKind.ROOK: _gen_rook,
    PieceKind.PAWN: _gen_pawn,
}
