"""Tests for the alpha-beta search engine."""

import pytest

from hnefatafl.core.board import create_initial_board
from hnefatafl.core.enums import PieceType, Role, WinCondition
from hnefatafl.core.move import Move
from hnefatafl.core.move_generator import MoveGenerator
from hnefatafl.core.rules import Rules
from hnefatafl.core.types import parse_position as sq
from hnefatafl.engine import AlphaBetaEngine, SearchLimits, SearchState, StopReason
from hnefatafl.engine.evaluation import KING_SAFETY_WEIGHT, Evaluator


class _CountingEngine(AlphaBetaEngine):
    def __init__(self) -> None:
        super().__init__()
        self.evaluations = 0

    def _negamax(self, board, role, depth, alpha, beta, ply):
        if depth <= 0:
            self.evaluations += 1
        return super()._negamax(board, role, depth, alpha, beta, ply)


class TestAlphaBetaEngine:
    def test_returns_legal_move_from_start(self) -> None:
        board = create_initial_board()
        engine = AlphaBetaEngine()

        result = engine.search(board, Role.ATTACKER, SearchLimits(max_depth=2, time_limit_ms=500))
        legal = MoveGenerator(board).generate_legal_moves(Role.ATTACKER)

        assert result.best_move in legal
        assert result.nodes > 0
        assert engine.state == SearchState.DONE

    def test_search_does_not_mutate_board(self) -> None:
        board = create_initial_board()
        snapshot = board.copy()
        AlphaBetaEngine().search(board, Role.DEFENDER, SearchLimits(max_depth=2, time_limit_ms=300))
        assert board == snapshot

    def test_finds_escape_in_one(self, board_factory) -> None:
        board = board_factory(e1="K", g7="A", i9="A")
        engine = AlphaBetaEngine()

        result = engine.search(board, Role.DEFENDER, SearchLimits(max_depth=3, time_limit_ms=None))
        assert result.best_move is not None
        outcome = Rules.detect_terminal(Rules.play(board, result.best_move))

        assert outcome is not None and outcome.winner == Role.DEFENDER
        assert outcome.condition == WinCondition.KING_ESCAPED
        assert result.score > KING_SAFETY_WEIGHT / 2
        assert result.stop_reason == StopReason.DECIDED
        assert result.depth == 1

    def test_finds_king_capture(self, board_factory) -> None:
        board = board_factory(d4="K", d3="A", d5="A", c4="A", h4="A")
        engine = AlphaBetaEngine()

        result = engine.search(board, Role.ATTACKER, SearchLimits(max_depth=2, time_limit_ms=None))
        assert result.best_move == Move(sq("h4"), sq("e4"), PieceType.ATTACKER)
        assert result.score > KING_SAFETY_WEIGHT / 2

    def test_deeper_search_keeps_forced_win(self, board_factory) -> None:
        board = board_factory(d4="K", d3="A", d5="A", c4="A", h4="A")
        shallow = AlphaBetaEngine().search(
            board, Role.ATTACKER, SearchLimits(max_depth=1, time_limit_ms=None)
        )
        deep = AlphaBetaEngine().search(
            board, Role.ATTACKER, SearchLimits(max_depth=4, time_limit_ms=None)
        )
        assert shallow.best_move is not None and deep.best_move is not None
        for result in (shallow, deep):
            after = Rules.play(board, result.best_move)
            outcome = Rules.detect_terminal(after)
            assert outcome is not None and outcome.winner == Role.ATTACKER
        assert deep.score >= shallow.score

    def test_longer_budget_keeps_quality(self, board_factory) -> None:
        board = board_factory(d4="K", d3="A", d5="A", c4="A", h4="A")
        rushed = AlphaBetaEngine(Evaluator(difficulty=10)).search(
            board, Role.ATTACKER, SearchLimits(max_depth=3, time_limit_ms=1)
        )
        relaxed = AlphaBetaEngine(Evaluator(difficulty=10)).search(
            board, Role.ATTACKER, SearchLimits(max_depth=3, time_limit_ms=5000)
        )
        assert relaxed.depth >= rushed.depth
        assert relaxed.score >= rushed.score
        assert relaxed.best_move is not None
        outcome = Rules.detect_terminal(Rules.play(board, relaxed.best_move))
        assert outcome is not None and outcome.winner == Role.ATTACKER

    def test_defender_blocks_sure_loss(self, board_factory) -> None:
        # Attacker threatens h4-e4; the defender must occupy e4 first.
        board = board_factory(d4="K", d3="A", d5="A", c4="A", h4="A", e8="D")
        result = AlphaBetaEngine().search(
            board, Role.DEFENDER, SearchLimits(max_depth=2, time_limit_ms=None)
        )
        assert result.best_move is not None
        after = Rules.play(board, result.best_move)
        reply = AlphaBetaEngine().search(
            after, Role.ATTACKER, SearchLimits(max_depth=1, time_limit_ms=None)
        )
        assert reply.best_move is not None
        outcome = Rules.detect_terminal(Rules.play(after, reply.best_move))
        assert outcome is None or outcome.winner != Role.ATTACKER

    def test_no_moves(self, board_factory) -> None:
        board = board_factory(f6="K", c3="D")
        result = AlphaBetaEngine().search(
            board, Role.ATTACKER, SearchLimits(max_depth=3, time_limit_ms=None)
        )
        assert result.best_move is None
        assert result.stop_reason == StopReason.NO_MOVES
        assert result.score == -KING_SAFETY_WEIGHT

    def test_honors_cancel_callback(self) -> None:
        board = create_initial_board()
        result = AlphaBetaEngine().search(
            board,
            Role.ATTACKER,
            SearchLimits(max_depth=5, time_limit_ms=None),
            is_cancelled=lambda: True,
        )
        assert result.best_move in MoveGenerator(board).generate_legal_moves(Role.ATTACKER)
        assert result.stop_reason == StopReason.CANCELLED
        assert result.depth == 0

    def test_tiny_budget_still_returns_legal_move(self) -> None:
        board = create_initial_board()
        result = AlphaBetaEngine().search(
            board, Role.ATTACKER, SearchLimits(max_depth=8, time_limit_ms=1)
        )
        assert result.best_move in MoveGenerator(board).generate_legal_moves(Role.ATTACKER)
        assert result.timed_out
        assert result.depth < 8

    def test_respects_time_budget(self) -> None:
        board = create_initial_board()
        result = AlphaBetaEngine().search(
            board, Role.DEFENDER, SearchLimits(max_depth=8, time_limit_ms=200)
        )
        assert result.best_move is not None
        # Generous slack for slow CI machines.
        assert result.elapsed_ms < 200 + 500

    def test_rejects_zero_depth(self) -> None:
        with pytest.raises(ValueError):
            AlphaBetaEngine().search(create_initial_board(), Role.ATTACKER, SearchLimits(0))


class TestTranspositionReuse:
    def test_table_persists_between_searches(self, board_factory) -> None:
        board = board_factory(f6="K", c3="A", i9="A", h2="D")
        engine = AlphaBetaEngine()
        engine.search(board, Role.ATTACKER, SearchLimits(max_depth=2, time_limit_ms=None))
        assert len(engine.transposition_table) > 0

    def test_reset_clears_table(self, board_factory) -> None:
        board = board_factory(f6="K", c3="A", i9="A", h2="D")
        engine = AlphaBetaEngine()
        engine.search(board, Role.ATTACKER, SearchLimits(max_depth=2, time_limit_ms=None))
        engine.reset()
        assert len(engine.transposition_table) == 0
        assert engine.state == SearchState.IDLE

    def test_second_search_uses_fewer_evaluations(self, board_factory) -> None:
        board = board_factory(f6="K", c3="A", i9="A", h2="D")
        engine = _CountingEngine()
        limits = SearchLimits(max_depth=2, time_limit_ms=None)
        engine.search(board, Role.ATTACKER, limits)
        first = engine.evaluations
        engine.evaluations = 0
        engine.search(board, Role.ATTACKER, limits)
        assert engine.evaluations < first

    def test_decided_scores_stored_relative_to_node(self) -> None:
        win_at_ply_five = KING_SAFETY_WEIGHT - 5
        stored = AlphaBetaEngine._score_to_tt(win_at_ply_five, 3)
        assert stored == KING_SAFETY_WEIGHT - 2
        # The same position met one ply from the root wins two plies later.
        assert AlphaBetaEngine._score_from_tt(stored, 1) == KING_SAFETY_WEIGHT - 3

        loss = AlphaBetaEngine._score_to_tt(-win_at_ply_five, 3)
        assert loss == -(KING_SAFETY_WEIGHT - 2)
        assert AlphaBetaEngine._score_from_tt(loss, 1) == -(KING_SAFETY_WEIGHT - 3)

    def test_heuristic_scores_stored_unchanged(self) -> None:
        assert AlphaBetaEngine._score_to_tt(120.0, 4) == 120.0
        assert AlphaBetaEngine._score_from_tt(-120.0, 7) == -120.0


class TestMoveOrdering:
    def _quiet_moves(self, board, role: Role) -> list[Move]:
        return [m for m in MoveGenerator(board).generate_legal_moves(role) if not m.captured]

    def test_capture_first(self, board_factory) -> None:
        board = board_factory(d4="D", c4="A", e7="A", i9="K")
        engine = AlphaBetaEngine()
        moves = MoveGenerator(board).generate_legal_moves(Role.ATTACKER)
        ordered = engine._order_moves(moves, Role.ATTACKER, ply=0)
        assert ordered[0] == Move(sq("e7"), sq("e4"), PieceType.ATTACKER)

    def test_tt_move_outranks_capture(self, board_factory) -> None:
        board = board_factory(d4="D", c4="A", e7="A", i9="K")
        engine = AlphaBetaEngine()
        moves = MoveGenerator(board).generate_legal_moves(Role.ATTACKER)
        quiet = self._quiet_moves(board, Role.ATTACKER)[-1]
        ordered = engine._order_moves(moves, Role.ATTACKER, tt_move=quiet, ply=0)
        assert ordered[0] == quiet

    def test_killer_moves_per_ply(self, board_factory) -> None:
        board = board_factory(d4="D", c4="A", e7="A", i9="K")
        engine = AlphaBetaEngine()
        quiet = self._quiet_moves(board, Role.ATTACKER)
        first, second, third = quiet[-1], quiet[-2], quiet[-3]
        engine._record_killer(first, 2)
        engine._record_killer(second, 2)
        engine._record_killer(third, 2)

        assert engine.killers_at(2) == (third, second)
        assert engine.killers_at(3) == (None, None)

        moves = MoveGenerator(board).generate_legal_moves(Role.ATTACKER)
        ordered = engine._order_moves(moves, Role.ATTACKER, ply=2)
        assert ordered[0].captured  # captures still lead
        assert ordered[1:3] == [third, second]

    def test_history_prefers_cutoff_moves(self, board_factory) -> None:
        board = board_factory(f6="K", c3="A", i9="A")
        engine = AlphaBetaEngine()
        quiet = self._quiet_moves(board, Role.ATTACKER)
        favourite = quiet[-1]
        engine._update_history(Role.ATTACKER, favourite, depth=3)
        ordered = engine._order_moves(quiet, Role.ATTACKER, ply=0)
        assert ordered[0] == favourite

    def test_history_is_per_side(self, board_factory) -> None:
        board = board_factory(f6="K", c3="A", i9="A")
        engine = AlphaBetaEngine()
        move = self._quiet_moves(board, Role.ATTACKER)[0]
        engine._update_history(Role.DEFENDER, move, depth=3)
        assert engine._history_score(Role.ATTACKER, move) == 0
        assert engine._history_score(Role.DEFENDER, move) == 9

    def test_history_ages_between_searches(self, board_factory) -> None:
        board = board_factory(f6="K", c3="A", i9="A")
        engine = AlphaBetaEngine()
        move = self._quiet_moves(board, Role.ATTACKER)[0]
        engine._update_history(Role.DEFENDER, move, depth=4)
        engine._age_history()
        assert engine._history_score(Role.DEFENDER, move) == 8

    def test_killers_reset_each_search(self, board_factory) -> None:
        board = board_factory(f6="K", c3="A", i9="A")
        engine = AlphaBetaEngine()
        move = self._quiet_moves(board, Role.ATTACKER)[0]
        engine._record_killer(move, 1)
        engine.search(board, Role.DEFENDER, SearchLimits(max_depth=1, time_limit_ms=None))
        assert move not in engine.killers_at(1)

    def test_killers_beyond_tracked_plies(self, board_factory) -> None:
        board = board_factory(f6="K", c3="A", i9="A")
        engine = AlphaBetaEngine()
        move = self._quiet_moves(board, Role.ATTACKER)[0]
        engine._record_killer(move, 70)
        assert engine.killers_at(64) == (None, None)
        assert engine.killers_at(70) == (None, None)
        assert engine._killer_score(move, 70) == 0
