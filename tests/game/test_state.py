"""Tests for GameState."""

import pytest

from hnefatafl.core.board import create_initial_board
from hnefatafl.core.enums import PieceType, Role
from hnefatafl.core.errors import InvalidBoard, InvalidMove
from hnefatafl.core.move import Move
from hnefatafl.core.notation import board_to_text
from hnefatafl.core.types import parse_position as sq
from hnefatafl.game.interfaces import GameEndReason, GamePhase, GameResult
from hnefatafl.game.state import GameState


def _move(src: str, dst: str, piece: PieceType = PieceType.ATTACKER) -> Move:
    return Move(sq(src), sq(dst), piece)


class TestGameStateSetup:
    def test_defaults(self) -> None:
        gs = GameState()
        assert gs.phase == GamePhase.NOT_STARTED
        assert gs.side_to_move == Role.ATTACKER
        assert gs.board == create_initial_board()
        assert gs.result is None
        assert gs.move_history == []

    def test_setup_copies_board(self, board_factory) -> None:
        board = board_factory(e1="K", i9="A")
        gs = GameState(board)
        board[sq("c3")] = PieceType.ATTACKER
        assert gs.board[sq("c3")] is None

    def test_setup_rejects_invalid_board(self, board_factory) -> None:
        with pytest.raises(InvalidBoard):
            GameState(board_factory(a1="A", f6="K"))

    def test_setup_with_side(self, board_factory) -> None:
        gs = GameState()
        gs.setup(board_factory(e1="K", i9="A"), Role.DEFENDER)
        assert gs.side_to_move == Role.DEFENDER
        assert gs.phase == GamePhase.AWAITING_MOVE

    def test_repetition_limit_validated(self) -> None:
        with pytest.raises(ValueError):
            GameState(repetition_limit=1)


class TestGameStateMoves:
    def test_apply_move_records(self) -> None:
        gs = GameState()
        record = gs.apply_move(_move("d1", "d3"))
        assert record.role == Role.ATTACKER
        assert record.board_text_after == board_to_text(gs.board)
        assert not record.was_capture
        assert gs.side_to_move == Role.DEFENDER
        assert len(gs.move_history) == 1

    def test_capture_recorded(self, board_factory) -> None:
        gs = GameState(board_factory(d4="D", c4="A", e7="A", i9="K"))
        record = gs.apply_move(_move("e7", "e4"))
        assert record.captured == (sq("d4"),)
        assert record.was_capture
        assert gs.board[sq("d4")] is None

    def test_timestamp_kept(self) -> None:
        gs = GameState()
        record = gs.apply_move(Move(sq("d1"), sq("d3"), PieceType.ATTACKER, timestamp=99.0))
        assert record.move.timestamp == 99.0

    def test_wrong_side_rejected(self) -> None:
        gs = GameState()
        with pytest.raises(InvalidMove):
            gs.apply_move(_move("f4", "i4", PieceType.DEFENDER))
        assert gs.side_to_move == Role.ATTACKER

    def test_illegal_move_rejected(self) -> None:
        gs = GameState()
        with pytest.raises(InvalidMove):
            gs.apply_move(_move("d1", "d6"))

    def test_undo_restores(self) -> None:
        gs = GameState()
        before = gs.board.copy()
        gs.apply_move(_move("d1", "d3"))
        undone = gs.undo_last_move()
        assert undone is not None and undone.move == _move("d1", "d3")
        assert gs.board == before
        assert gs.side_to_move == Role.ATTACKER
        assert gs.move_history == []

    def test_undo_empty(self) -> None:
        assert GameState().undo_last_move() is None

    def test_legal_moves(self) -> None:
        gs = GameState()
        assert gs.legal_moves()
        assert all(m.piece == PieceType.ATTACKER for m in gs.legal_moves())


class TestGameEnd:
    def test_king_escape(self, board_factory) -> None:
        gs = GameState()
        gs.setup(board_factory(e1="K", i9="A"), Role.DEFENDER)
        gs.apply_move(_move("e1", "a1", PieceType.KING))
        assert gs.result == GameResult(Role.DEFENDER, GameEndReason.KING_ESCAPED)
        assert gs.phase == GamePhase.GAME_OVER
        assert gs.legal_moves() == []

    def test_king_capture(self, board_factory) -> None:
        gs = GameState(board_factory(d4="K", d3="A", d5="A", c4="A", h4="A"))
        gs.apply_move(_move("h4", "e4"))
        assert gs.result == GameResult(Role.ATTACKER, GameEndReason.KING_CAPTURED)

    def test_no_moves_loses(self, board_factory) -> None:
        gs = GameState()
        gs.setup(board_factory(i9="K", f1="A", f4="D"), Role.DEFENDER)
        gs.apply_move(_move("f4", "f2", PieceType.DEFENDER))
        assert gs.result == GameResult(Role.DEFENDER, GameEndReason.NO_LEGAL_MOVES)

    def test_no_moves_at_setup(self, board_factory) -> None:
        gs = GameState(board_factory(f6="K", c3="D"))
        assert gs.is_game_over
        assert gs.result is not None and gs.result.winner == Role.DEFENDER

    def test_repetition_draw(self, board_factory) -> None:
        gs = GameState(board_factory(i9="K", c3="A"), repetition_limit=2)
        gs.apply_move(_move("c3", "d3"))
        gs.apply_move(_move("i9", "h9", PieceType.KING))
        gs.apply_move(_move("d3", "c3"))
        assert not gs.is_game_over
        gs.apply_move(_move("h9", "i9", PieceType.KING))
        assert gs.result == GameResult(None, GameEndReason.REPETITION)
        assert gs.result.is_draw

    def test_repetition_disabled(self, board_factory) -> None:
        gs = GameState(board_factory(i9="K", c3="A"), repetition_limit=None)
        for _ in range(3):
            gs.apply_move(_move("c3", "d3"))
            gs.apply_move(_move("i9", "h9", PieceType.KING))
            gs.apply_move(_move("d3", "c3"))
            gs.apply_move(_move("h9", "i9", PieceType.KING))
        assert not gs.is_game_over
        assert gs.occurrences() == 4

    def test_resign(self) -> None:
        gs = GameState()
        gs.resign(Role.ATTACKER)
        assert gs.result == GameResult(Role.DEFENDER, GameEndReason.RESIGNATION)

    def test_no_moves_after_game_over(self, board_factory) -> None:
        gs = GameState()
        gs.resign(Role.DEFENDER)
        with pytest.raises(RuntimeError):
            gs.apply_move(_move("d1", "d3"))

    def test_undo_reopens_finished_game(self, board_factory) -> None:
        gs = GameState()
        gs.setup(board_factory(e1="K", i9="A"), Role.DEFENDER)
        gs.apply_move(_move("e1", "a1", PieceType.KING))
        gs.undo_last_move()
        assert gs.result is None
        assert gs.phase == GamePhase.AWAITING_MOVE
        assert gs.board[sq("e1")] == PieceType.KING

    def test_result_text(self) -> None:
        assert str(GameResult(Role.DEFENDER, GameEndReason.KING_ESCAPED)) == (
            "defender wins (king_escape)"
        )
        assert str(GameResult(None, GameEndReason.REPETITION)) == "draw (repetition)"
