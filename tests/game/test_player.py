"""Tests for Player implementations."""

from hnefatafl.ai.config import AIConfig
from hnefatafl.ai.controller import AIController
from hnefatafl.core.board import create_initial_board
from hnefatafl.core.enums import Role
from hnefatafl.core.rules import is_legal_move
from hnefatafl.game.player import AIPlayer, HumanPlayer


class TestHumanPlayer:
    def test_properties(self) -> None:
        p = HumanPlayer(Role.ATTACKER, "Alice")
        assert p.role == Role.ATTACKER
        assert p.name == "Alice"
        assert p.is_human is True

    def test_default_name(self) -> None:
        p = HumanPlayer(Role.DEFENDER)
        assert "defender" in p.name.lower()

    def test_request_move_noop(self) -> None:
        p = HumanPlayer(Role.ATTACKER)
        p.request_move(create_initial_board())  # should not raise

    def test_cancel_noop(self) -> None:
        p = HumanPlayer(Role.ATTACKER)
        p.cancel()  # should not raise


class TestAIPlayer:
    def test_properties(self) -> None:
        p = AIPlayer(Role.DEFENDER, "Jarl")
        assert p.role == Role.DEFENDER
        assert p.name == "Jarl"
        assert p.is_human is False

    def test_request_move_calls_callback(self) -> None:
        called_with = []
        p = AIPlayer(
            Role.DEFENDER,
            on_request_move=lambda board, role: called_with.append((board, role)),
        )
        board = create_initial_board()
        p.request_move(board)
        assert len(called_with) == 1
        assert called_with[0][0] is board
        assert called_with[0][1] == Role.DEFENDER

    def test_cancel_calls_callback(self) -> None:
        cancelled = []
        p = AIPlayer(Role.DEFENDER, on_cancel=lambda: cancelled.append(True))
        p.cancel()
        assert cancelled == [True]

    def test_no_callback_no_error(self) -> None:
        p = AIPlayer(Role.DEFENDER)
        p.request_move(create_initial_board())
        p.cancel()

    def test_synchronous_submits_search_result(self) -> None:
        submitted = []
        controller = AIController(AIConfig(difficulty=10, max_depth=1, thinking_time_ms=500))
        p = AIPlayer.synchronous(Role.ATTACKER, controller, submitted.append)
        board = create_initial_board()
        p.request_move(board)
        assert len(submitted) == 1
        move = submitted[0]
        assert move.piece.role == Role.ATTACKER
        assert is_legal_move(board, move.from_pos, move.to_pos)

    def test_synchronous_without_moves_submits_nothing(self, board_factory) -> None:
        submitted = []
        controller = AIController(AIConfig(max_depth=1))
        p = AIPlayer.synchronous(Role.ATTACKER, controller, submitted.append)
        p.request_move(board_factory(f6="K"))
        assert submitted == []
