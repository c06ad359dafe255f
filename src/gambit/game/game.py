"""Game: turn state machine and command surface over a :class:`Board`.

Collaborators (UI, movers) only ever:

* query legal moves (:meth:`Game.get_moves`, :meth:`Game.get_all_current_moves`),
* execute one of them (:meth:`Game.execute_move`),
* resolve a pending promotion (:meth:`Game.promote`),
* undo the last action (:meth:`Game.undo`),
* and listen to board / property notifications.

The class is single-writer and does no locking; see ``GameController`` for
the serialized entry point used with background movers.
"""

from __future__ import annotations

import logging
from types import MappingProxyType

from gambit.core.board import Board, BoardListener
from gambit.core.enums import GameResult, PieceKind, Player
from gambit.core.errors import GameStateError
from gambit.core.move import Move
from gambit.core.piece import Piece
from gambit.core.types import Coordinate
from gambit.game.commands import MoveCommand, PromotionCommand
from gambit.game.events import BLACK_CHECK, HISTORY, TURN, WHITE_CHECK, GameEvents
from gambit.game.interfaces import GameCommand, GameOptions
from gambit.game.view import GameView, PieceSnapshot

_LOGGER = logging.getLogger(__name__)

_CHECK_PROPERTY: dict[Player, str] = {
    Player.WHITE: WHITE_CHECK,
    Player.BLACK: BLACK_CHECK,
}


class Game:
    """A chess game: board, side to move, check flags, promotion and history.

    Args:
        standard: Start from the 32-piece initial position; otherwise the
            board is empty and must be filled with :meth:`place_piece`.
        options: Rule settings, see :class:`GameOptions`.
    """

    __slots__ = (
        "_board",
        "_options",
        "_turn",
        "_result",
        "_winner",
        "_check",
        "_promoting",
        "_history",
        "_stalemate_claim",
        "events",
    )

    def __init__(self, standard: bool = True, *, options: GameOptions | None = None) -> None:
        self._board = Board.initial() if standard else Board()
        self._options = options if options is not None else GameOptions()
        self._turn = Player.WHITE
        self._result = GameResult.IN_PROGRESS
        self._winner: Player | None = None
        self._check: dict[Player, bool] = {p: False for p in Player.players()}
        self._promoting: Piece | None = None
        self._history: list[GameCommand] = []
        self._stalemate_claim: Player | None = None
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @property
    def options(self) -> GameOptions:
        return self._options

    @property
    def turn(self) -> Player:
        """Side to move, or ``GAME_OVER``."""
        return self._turn

    def get_turn(self) -> Player:
        return self._turn

    @property
    def result(self) -> GameResult:
        return self._result

    @property
    def winner(self) -> Player | None:
        """The side that delivered checkmate, if any."""
        return self._winner

    @property
    def is_game_over(self) -> bool:
        return self._turn is Player.GAME_OVER

    @property
    def white_check(self) -> bool:
        return self._check[Player.WHITE]

    @property
    def black_check(self) -> bool:
        return self._check[Player.BLACK]

    def is_check(self, player: Player) -> bool:
        """Check flag of *player* as of the last turn change."""
        if player not in self._check:
            raise ValueError(f"No check flag for {player.name}")
        return self._check[player]

    @property
    def is_promoting(self) -> bool:
        return self._promoting is not None

    @property
    def promoting(self) -> Piece | None:
        """The pawn awaiting promotion, if any."""
        return self._promoting

    @property
    def stalemate_declared(self) -> bool:
        return self._stalemate_claim is not None

    # ── Queries ──────────────────────────────────────────────────────────

    def get_piece(self, coord: Coordinate) -> Piece | None:
        return self._board.piece_at(coord)

    def get_moves(self, start: Coordinate) -> list[Move]:
        """Legal moves of the piece on *start* for the side to move.

        Empty when the square is empty, holds an opponent's piece, the game
        is over, or a promotion is pending.
        """
        if self.is_promoting or self.is_game_over:
            return []
        moving = self._board.piece_at(start)
        if moving is None or moving.owner != self._turn:
            return []
        board = self._board
        return [move for move in moving.moves(start) if not board.checks_safety(move)]

    def get_all_current_moves(self) -> list[Move]:
        if self._turn not in Player.players():
            return []
        moves: list[Move] = []
        for coord in self._board.player_coordinates(self._turn):
            moves.extend(self.get_moves(coord))
        return moves

    def can_declare_stalemate(self) -> bool:
        return self._board.quiet_moves >= self._options.quiet_move_threshold

    def get_history(self) -> list[str]:
        """Human-readable log of executed commands, oldest first."""
        return [str(command) for command in self._history]

    @property
    def history_size(self) -> int:
        return len(self._history)

    def view(self) -> GameView:
        """Snapshot for a mover to decide on."""
        moves = tuple(self.get_all_current_moves())
        return GameView(
            turn=self._turn,
            moves=moves,
            pieces=MappingProxyType(
                {coord: PieceSnapshot.of(piece) for coord, piece in self._board.items()}
            ),
            can_declare_stalemate=self.can_declare_stalemate(),
            quiet_moves=self._board.quiet_moves,
            captures=tuple(m for m in moves if m.is_capture),
        )

    # ── Commands ─────────────────────────────────────────────────────────

    def execute_move(self, move: Move) -> None:
        """Execute a move obtained from :meth:`get_moves`.

        Raises:
            GameStateError: a promotion is pending, the game is over, the move
                belongs to another board or player, or was already executed.
        """
        if self.is_promoting:
            raise GameStateError("No moves allowed during a promotion")
        if self.is_game_over:
            raise GameStateError("Game is over")
        if move.board is not self._board:
            raise GameStateError("Move belongs to another board")
        if move.executed:
            raise GameStateError("Move already executed")
        moving = self._board.piece_at(move.old)
        if moving is None or moving.owner != self._turn:
            raise GameStateError(f"It is not the turn of the piece on {move.old}")
        command = MoveCommand(self, move)
        # recorded first so turn listeners already see it in the history
        self._history.append(command)
        try:
            command.execute()
        except Exception:
            self._history.pop()
            raise
        self.events.fire(HISTORY, None, self.get_history())

    def promote(self, kind: PieceKind) -> None:
        """Resolve the pending promotion to *kind*.

        Raises:
            GameStateError: no promotion is pending.
            ValueError: *kind* is KING or PAWN.
        """
        if not self.is_promoting or not self._history:
            raise GameStateError("No piece to promote")
        if kind not in PieceKind.promotion_kinds():
            raise ValueError(f"Cannot promote to {kind.name}")
        previous = self._history[-1]
        command = PromotionCommand(self, previous, kind)
        self._history[-1] = command
        try:
            command.execute()
        except Exception:
            self._history[-1] = previous
            raise
        self.events.fire(HISTORY, None, self.get_history())

    def undo(self) -> bool:
        """Revert the most recent command. Returns False if there is none."""
        if not self._history:
            return False
        command = self._history.pop()
        command.undo()
        self.events.fire(HISTORY, None, self.get_history())
        return True

    def declare_stalemate(self) -> None:
        """Claim a quiet-move draw, honoured at the next turn boundary."""
        if self.is_game_over or not self.can_declare_stalemate():
            raise GameStateError("Stalemate not available now")
        self._stalemate_claim = self._turn

    def withdraw_stalemate(self) -> None:
        """Drop a pending draw claim, if any."""
        self._stalemate_claim = None

    # ── Setup / subscriptions ────────────────────────────────────────────

    def place_piece(self, coord: Coordinate, kind: PieceKind, owner: Player) -> Piece | None:
        """Set up a square (for games created with ``standard=False``)."""
        removed = self._board.place_piece(coord, kind, owner)
        self._refresh_checks()
        return removed

    def add_board_listener(self, listener: BoardListener) -> None:
        self._board.add_listener(listener)

    def remove_board_listener(self, listener: BoardListener) -> None:
        self._board.remove_listener(listener)

    # ── Turn state machine (used by commands) ────────────────────────────

    def _next_turn(self) -> None:
        if self._stalemate_claim is not None and self.can_declare_stalemate():
            self._set_turn(Player.GAME_OVER)
        else:
            self._stalemate_claim = None
            self._set_turn(self._turn.next)

    def _set_turn(self, next_turn: Player) -> None:
        current = self._turn
        for player in Player.players():
            self._set_check(player, self._board.is_check(player))
        self._turn = next_turn
        self._result = GameResult.IN_PROGRESS
        self._winner = None
        next_check = next_turn in self._check and self._check[next_turn]
        if not self.get_all_current_moves() and not self.is_promoting:
            self._turn = Player.GAME_OVER
            if self._stalemate_claim is not None:
                self._result = GameResult.DRAW_CLAIMED
            elif next_check:
                self._result = GameResult.CHECKMATE
                self._winner = current
            else:
                self._result = GameResult.STALEMATE
            _LOGGER.info("Game over: %s", self._result.name.lower())
        self.events.fire(TURN, current, self._turn)

    def _set_check(self, player: Player, check: bool) -> None:
        old = self._check[player]
        self._check[player] = check
        self.events.fire(_CHECK_PROPERTY[player], old, check)

    def _refresh_checks(self) -> None:
        if all(self._has_king(p) for p in Player.players()):
            for player in Player.players():
                self._set_check(player, self._board.is_check(player))

    def _has_king(self, player: Player) -> bool:
        try:
            king = self._board.king(player)
        except ValueError:
            return False
        return self._board.find_piece(king) is not None

    def __repr__(self) -> str:
        return f"Game(turn={self._turn.name}, result={self._result.name})\n{self._board!r}"
