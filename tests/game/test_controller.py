"""Tests for GameController: serialized mover orchestration."""

import random

import pytest

from gambit.core.enums import GameResult, PieceKind, Player
from gambit.core.errors import GameStateError
from gambit.core.move import Move
from gambit.core.types import B1, B2, D5, D7, E2, E4, H1, H2, H8, Coordinate
from gambit.game.controller import GameController
from gambit.game.game import Game
from gambit.game.interfaces import GameOptions
from gambit.game.view import GameView, PieceSnapshot
from gambit.movers.base import Mover
from gambit.movers.random_mover import RandomCapture, RandomMover


class _FirstMover(Mover):
    """Deterministic mover: always plays the first legal move."""

    def __init__(self, allow_undo: bool = True) -> None:
        self._allow_undo = allow_undo

    @property
    def allow_undo(self) -> bool:
        return self._allow_undo

    def choose_move(self, view: GameView) -> Move | None:
        return view.moves[0] if view.moves else None


class _Underpromoter(Mover):
    """Pushes a promoting pawn when it can and takes a knight."""

    def choose_move(self, view: GameView) -> Move | None:
        for move in view.moves:
            if move.promotes_piece:
                return move
        return view.moves[0] if view.moves else None

    def promotion_kind(self, view: GameView) -> PieceKind:
        return PieceKind.KNIGHT


class _ForeignMover(Mover):
    """Claims the draw, then answers with a move from another game."""

    def choose_move(self, view: GameView) -> Move | None:
        return Game().get_all_current_moves()[0]

    def claims_stalemate(self, view: GameView) -> bool:
        return True


class _Recorder:
    """Dispatch callable that only records requests."""

    def __init__(self) -> None:
        self.requests: list[tuple[Mover, GameView, int]] = []

    def __call__(self, mover: Mover, view: GameView, request_id: int) -> None:
        self.requests.append((mover, view, request_id))


def _move(game: Game, frm: Coordinate, to: Coordinate) -> Move:
    return next(m for m in game.get_moves(frm) if m.new == to)


class TestMovers:
    def test_set_mover_rejects_game_over(self) -> None:
        ctrl = GameController()
        with pytest.raises(ValueError):
            ctrl.set_mover(Player.GAME_OVER, _FirstMover())

    def test_mover_replies_to_human(self) -> None:
        ctrl = GameController()
        ctrl.set_mover(Player.BLACK, RandomMover(rng=random.Random(1)))
        assert not ctrl.turn_has_mover()
        ctrl.submit_move(_move(ctrl.game, E2, E4))
        assert ctrl.game.turn is Player.WHITE
        assert ctrl.game.history_size == 2

    def test_mover_moves_when_assigned_to_side_to_move(self) -> None:
        ctrl = GameController()
        ctrl.set_mover(Player.WHITE, _FirstMover())
        assert ctrl.game.turn is Player.BLACK
        assert ctrl.game.history_size == 1

    def test_clearing_mover(self) -> None:
        ctrl = GameController()
        ctrl.set_mover(Player.BLACK, _FirstMover())
        ctrl.set_mover(Player.BLACK, None)
        assert ctrl.mover(Player.BLACK) is None
        ctrl.submit_move(_move(ctrl.game, E2, E4))
        assert ctrl.game.turn is Player.BLACK

    def test_mover_promotion_kind(self) -> None:
        game = Game(standard=False)
        game.place_piece(H1, PieceKind.KING, Player.WHITE)
        game.place_piece(H8, PieceKind.KING, Player.BLACK)
        game.place_piece(B2, PieceKind.PAWN, Player.BLACK)
        ctrl = GameController(game)
        ctrl.set_mover(Player.BLACK, _Underpromoter())
        ctrl.submit_move(_move(game, H1, H2))
        promoted = game.get_piece(B1)
        assert promoted is not None
        assert promoted.kind == PieceKind.KNIGHT
        assert promoted.owner == Player.BLACK
        assert game.turn is Player.WHITE
        assert game.get_history()[-1] == "b2-b1 =N"

    def test_mover_claims_draw(self) -> None:
        game = Game(standard=False, options=GameOptions(quiet_move_threshold=2))
        game.place_piece(Coordinate(7, 4), PieceKind.KING, Player.WHITE)
        game.place_piece(Coordinate(0, 4), PieceKind.KING, Player.BLACK)
        ctrl = GameController(game)
        ctrl.set_mover(Player.WHITE, RandomMover(claim_draws=True, rng=random.Random(2)))
        assert game.history_size == 1
        ctrl.set_mover(Player.BLACK, RandomMover(claim_draws=True, rng=random.Random(3)))
        assert game.is_game_over
        assert game.result is GameResult.DRAW_CLAIMED
        assert game.history_size == 3

    def test_rejected_move_withdraws_draw_claim(self) -> None:
        ctrl = GameController(Game(options=GameOptions(quiet_move_threshold=1)))
        ctrl.set_mover(Player.BLACK, _ForeignMover())
        with pytest.raises(GameStateError):
            ctrl.submit_move(_move(ctrl.game, E2, E4))
        assert not ctrl.game.stalemate_declared
        assert ctrl.game.history_size == 1
        assert ctrl.game.turn is Player.BLACK

    @pytest.mark.slow
    def test_random_movers_finish_a_game(self) -> None:
        ctrl = GameController()
        ctrl.set_mover(Player.WHITE, RandomMover(claim_draws=True, rng=random.Random(5)))
        ctrl.set_mover(Player.BLACK, RandomCapture(claim_draws=True, rng=random.Random(6)))
        assert ctrl.game.is_game_over
        assert ctrl.game.result is not GameResult.IN_PROGRESS


class TestInbox:
    def test_request_carries_snapshot(self) -> None:
        recorder = _Recorder()
        ctrl = GameController(dispatch=recorder)
        mover = _FirstMover()
        ctrl.set_mover(Player.BLACK, mover)
        ctrl.submit_move(_move(ctrl.game, E2, E4))
        assert len(recorder.requests) == 1
        requested_by, view, request_id = recorder.requests[0]
        assert requested_by is mover
        assert view.turn is Player.BLACK
        assert len(view.moves) == 20
        assert request_id == ctrl.request_id
        assert ctrl.game.history_size == 1

    def test_view_is_detached_from_live_board(self) -> None:
        recorder = _Recorder()
        ctrl = GameController(dispatch=recorder)
        ctrl.set_mover(Player.BLACK, _FirstMover())
        ctrl.submit_move(_move(ctrl.game, E2, E4))
        _, view, request_id = recorder.requests[0]
        assert view.piece_at(E4) == PieceSnapshot(PieceKind.PAWN, Player.WHITE, 1)
        assert view.piece_at(E2) is None
        assert view.captures == ()
        reply = next(m for m in view.moves if (m.old, m.new) == (D7, D5))
        ctrl.deliver(request_id, reply)
        ctrl.submit_move(_move(ctrl.game, E4, D5))
        assert view.piece_at(E4) == PieceSnapshot(PieceKind.PAWN, Player.WHITE, 1)
        assert view.piece_at(D7) == PieceSnapshot(PieceKind.PAWN, Player.BLACK, 0)
        assert view.piece_at(D5) is None
        assert view.captures == ()
        with pytest.raises(TypeError):
            view.pieces[E2] = view.piece_at(E4)  # type: ignore[index]

    def test_deliver_applies_current_request(self) -> None:
        recorder = _Recorder()
        ctrl = GameController(dispatch=recorder)
        ctrl.set_mover(Player.BLACK, _FirstMover())
        ctrl.submit_move(_move(ctrl.game, E2, E4))
        _, view, request_id = recorder.requests[0]
        ctrl.deliver(request_id, view.moves[0])
        assert ctrl.game.history_size == 2
        assert ctrl.game.turn is Player.WHITE

    def test_stale_result_dropped(self) -> None:
        recorder = _Recorder()
        ctrl = GameController(dispatch=recorder)
        ctrl.set_mover(Player.BLACK, _FirstMover())
        ctrl.submit_move(_move(ctrl.game, E2, E4))
        _, view, request_id = recorder.requests[0]
        ctrl.deliver(request_id - 1, view.moves[0])
        assert ctrl.game.history_size == 1
        assert ctrl.game.turn is Player.BLACK

    def test_result_after_undo_is_stale(self) -> None:
        recorder = _Recorder()
        ctrl = GameController(dispatch=recorder)
        ctrl.set_mover(Player.BLACK, _FirstMover())
        ctrl.submit_move(_move(ctrl.game, E2, E4))
        _, view, request_id = recorder.requests[0]
        ctrl.undo()
        ctrl.deliver(request_id, view.moves[0])
        assert ctrl.game.history_size == 0

    def test_no_move_is_ignored(self) -> None:
        recorder = _Recorder()
        ctrl = GameController(dispatch=recorder)
        ctrl.set_mover(Player.BLACK, _FirstMover())
        ctrl.submit_move(_move(ctrl.game, E2, E4))
        ctrl.deliver(ctrl.request_id, None)
        assert ctrl.game.history_size == 1

    def test_deliver_without_mover(self) -> None:
        ctrl = GameController()
        ctrl.deliver(0, None)
        assert ctrl.game.history_size == 0


class TestUndo:
    def test_undo_skips_back_over_mover_reply(self) -> None:
        ctrl = GameController()
        ctrl.set_mover(Player.BLACK, _FirstMover())
        ctrl.submit_move(_move(ctrl.game, E2, E4))
        assert ctrl.game.history_size == 2
        assert ctrl.undo()
        assert ctrl.game.history_size == 0
        assert ctrl.game.turn is Player.WHITE

    def test_undo_stops_at_mover_refusing_undo(self) -> None:
        recorder = _Recorder()
        ctrl = GameController(dispatch=recorder)
        ctrl.set_mover(Player.BLACK, _FirstMover(allow_undo=False))
        ctrl.submit_move(_move(ctrl.game, E2, E4))
        _, view, request_id = recorder.requests[0]
        ctrl.deliver(request_id, view.moves[0])
        assert ctrl.undo()
        assert ctrl.game.history_size == 1
        assert ctrl.game.turn is Player.BLACK
        assert recorder.requests[-1][2] == ctrl.request_id

    def test_undo_empty(self) -> None:
        assert not GameController().undo()

    def test_human_promotion(self) -> None:
        game = Game(standard=False)
        game.place_piece(H1, PieceKind.KING, Player.WHITE)
        game.place_piece(H8, PieceKind.KING, Player.BLACK)
        game.place_piece(Coordinate(1, 0), PieceKind.PAWN, Player.WHITE)
        ctrl = GameController(game)
        ctrl.set_mover(Player.BLACK, _FirstMover())
        ctrl.submit_move(_move(game, Coordinate(1, 0), Coordinate(0, 0)))
        assert game.is_promoting
        assert game.history_size == 1
        ctrl.promote(PieceKind.ROOK)
        assert game.history_size == 2
        assert game.turn is Player.WHITE
