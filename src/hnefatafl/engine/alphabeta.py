"""Negamax alpha-beta search with iterative deepening."""

from __future__ import annotations

import logging
from time import perf_counter, sleep
from typing import TYPE_CHECKING

from hnefatafl.core.move_generator import MoveGenerator
from hnefatafl.core.rules import Outcome, Rules
from hnefatafl.engine.evaluation import KING_SAFETY_WEIGHT, Evaluator
from hnefatafl.engine.search import (
    CancelCheck,
    IEngine,
    SearchLimits,
    SearchResult,
    SearchState,
    StopReason,
)
from hnefatafl.engine.transposition import Bound, TranspositionTable

if TYPE_CHECKING:
    from hnefatafl.core.board import Board
    from hnefatafl.core.enums import Role
    from hnefatafl.core.move import Move

_LOGGER = logging.getLogger(__name__)

_INF_SCORE = 1_000_000.0
_DECISIVE_SCORE = KING_SAFETY_WEIGHT / 2
_TIME_BUDGET_FRACTION = 0.8
_YIELD_EVERY_NODES = 4096
_MAX_KILLER_PLY = 64
_TT_MOVE_BONUS = 100_000
_CAPTURE_BONUS = 1_000
_KILLER_PRIMARY_BONUS = 900
_KILLER_SECONDARY_BONUS = 800
_HISTORY_MAX_SCORE = 500


def _never_cancelled() -> bool:
    return False


class AlphaBetaEngine(IEngine):
    """Hnefatafl searcher: negamax, transposition table, killer and history ordering.

    The transposition table and history scores live as long as the engine,
    so one engine should serve one game. Call :meth:`reset` between games.
    """

    __slots__ = (
        "_evaluator",
        "_tt",
        "_killer_moves",
        "_history_scores",
        "_cancel_check",
        "_cancelled",
        "_deadline",
        "_soft_deadline",
        "_nodes",
        "_last_yield_nodes",
        "_state",
    )

    def __init__(
        self,
        evaluator: Evaluator | None = None,
        *,
        tt_max_entries: int = 200_000,
    ) -> None:
        self._evaluator = evaluator or Evaluator()
        self._tt = TranspositionTable(tt_max_entries)
        self._killer_moves: list[list[Move | None]] = [
            [None, None] for _ in range(_MAX_KILLER_PLY)
        ]
        self._history_scores: dict[tuple[int, int, int], int] = {}
        self._cancel_check: CancelCheck = _never_cancelled
        self._cancelled = False
        self._deadline: float | None = None
        self._soft_deadline: float | None = None
        self._nodes = 0
        self._last_yield_nodes = 0
        self._state = SearchState.IDLE

    @property
    def evaluator(self) -> Evaluator:
        return self._evaluator

    @property
    def transposition_table(self) -> TranspositionTable:
        return self._tt

    @property
    def state(self) -> SearchState:
        return self._state

    def reset(self) -> None:
        """Forget everything learned during the current game."""
        self._tt.clear()
        self._history_scores.clear()
        self._reset_killers()
        self._state = SearchState.IDLE

    # ── Search ───────────────────────────────────────────────────────────

    def search(
        self,
        board: Board,
        role: Role,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        if limits.max_depth <= 0:
            raise ValueError("Search depth must be >= 1")

        start = perf_counter()
        self._nodes = 0
        self._last_yield_nodes = 0
        self._cancelled = False
        self._cancel_check = is_cancelled or _never_cancelled
        self._deadline = None
        self._soft_deadline = None
        if limits.time_limit_ms is not None:
            budget = max(limits.time_limit_ms, 1) / 1000.0
            self._deadline = start + budget
            self._soft_deadline = start + budget * _TIME_BUDGET_FRACTION
        self._reset_killers()
        self._age_history()

        root_moves = MoveGenerator(board).generate_legal_moves(role)
        if not root_moves:
            _LOGGER.debug("No legal moves for %s", role)
            self._state = SearchState.DONE
            return SearchResult(
                None,
                -float(KING_SAFETY_WEIGHT),
                0,
                self._nodes,
                StopReason.NO_MOVES,
                (perf_counter() - start) * 1000.0,
            )

        self._state = SearchState.DEEPENING
        tt_entry = self._tt.get(TranspositionTable.key(board, role))
        tt_move = tt_entry.best_move if tt_entry is not None else None
        ordered_root = self._order_moves(root_moves, role, tt_move=tt_move, ply=0)
        best_move = ordered_root[0]
        best_score = self._evaluator.evaluate(board, role)
        completed_depth = 0
        stop_reason = StopReason.DEPTH_EXHAUSTED

        for depth in range(1, limits.max_depth + 1):
            if self._budget_spent():
                stop_reason = self._interrupt_reason()
                break

            outcome = self._search_root(board, role, ordered_root, depth)
            if outcome is None:
                # Unfinished iteration; keep the last completed answer.
                stop_reason = self._interrupt_reason()
                break

            best_score, best_move = outcome
            completed_depth = depth
            _LOGGER.debug(
                "depth %d: %s score=%.1f nodes=%d", depth, best_move, best_score, self._nodes
            )

            ordered_root = [best_move] + [m for m in ordered_root if m != best_move]
            if abs(best_score) > _DECISIVE_SCORE:
                stop_reason = StopReason.DECIDED
                break

        self._state = SearchState.DONE
        elapsed_ms = (perf_counter() - start) * 1000.0
        _LOGGER.info(
            "%s: %s depth=%d score=%.1f nodes=%d %.0fms (%s)",
            role,
            best_move,
            completed_depth,
            best_score,
            self._nodes,
            elapsed_ms,
            stop_reason,
        )
        return SearchResult(
            best_move, best_score, completed_depth, self._nodes, stop_reason, elapsed_ms
        )

    def _search_root(
        self,
        board: Board,
        role: Role,
        root_moves: list[Move],
        depth: int,
    ) -> tuple[float, Move] | None:
        best_score = -_INF_SCORE
        best_move = root_moves[0]
        alpha = -_INF_SCORE
        beta = _INF_SCORE

        for move in root_moves:
            child = Rules.play(board, move)
            child_score = self._negamax(child, role.opposite, depth - 1, -beta, -alpha, ply=1)
            if child_score is None:
                return None
            score = -child_score
            if score > best_score:
                best_score = score
                best_move = move
            if score > alpha:
                alpha = score

        self._tt.store(
            TranspositionTable.key(board, role), depth, best_score, Bound.EXACT, best_move
        )
        return best_score, best_move

    def _negamax(
        self,
        board: Board,
        role: Role,
        depth: int,
        alpha: float,
        beta: float,
        ply: int,
    ) -> float | None:
        """Score of *board* for *role* to move, or ``None`` once interrupted."""
        if self._should_stop():
            return None

        self._nodes += 1

        outcome = Rules.detect_terminal(board)
        if outcome is not None:
            return self._terminal_score(outcome, role, ply)

        if depth <= 0:
            return self._evaluator.evaluate(board, role)

        alpha_orig = alpha
        beta_orig = beta
        tt_key = TranspositionTable.key(board, role)
        tt_entry = self._tt.get(tt_key)
        tt_move = tt_entry.best_move if tt_entry is not None else None

        if tt_entry is not None and tt_entry.depth >= depth:
            tt_score = self._score_from_tt(tt_entry.score, ply)
            if tt_entry.bound == Bound.EXACT:
                return tt_score
            if tt_entry.bound == Bound.LOWER:
                alpha = max(alpha, tt_score)
            else:
                beta = min(beta, tt_score)
            if alpha >= beta:
                return tt_score

        legal = MoveGenerator(board).generate_legal_moves(role)
        if not legal:
            # A side that cannot move has lost.
            return -(KING_SAFETY_WEIGHT - ply)

        best_score = -_INF_SCORE
        best_move: Move | None = None

        for move in self._order_moves(legal, role, tt_move=tt_move, ply=ply):
            child_score = self._negamax(
                Rules.play(board, move), role.opposite, depth - 1, -beta, -alpha, ply + 1
            )
            if child_score is None:
                return None
            score = -child_score

            if score > best_score:
                best_score = score
                best_move = move
            if score > alpha:
                alpha = score
            if alpha >= beta:
                if not move.is_capture:
                    self._record_killer(move, ply)
                    self._update_history(role, move, depth)
                break

        bound = Bound.EXACT
        if best_score <= alpha_orig:
            bound = Bound.UPPER
        elif best_score >= beta_orig:
            bound = Bound.LOWER
        self._tt.store(tt_key, depth, self._score_to_tt(best_score, ply), bound, best_move)
        return best_score

    @staticmethod
    def _terminal_score(outcome: Outcome, role: Role, ply: int) -> float:
        # Faster wins and slower losses score better.
        win = float(KING_SAFETY_WEIGHT - ply)
        return win if outcome.winner == role else -win

    @staticmethod
    def _score_to_tt(score: float, ply: int) -> float:
        """Decided scores are stored as distance from the node, not the root."""
        if score > _DECISIVE_SCORE:
            return score + ply
        if score < -_DECISIVE_SCORE:
            return score - ply
        return score

    @staticmethod
    def _score_from_tt(score: float, ply: int) -> float:
        if score > _DECISIVE_SCORE:
            return score - ply
        if score < -_DECISIVE_SCORE:
            return score + ply
        return score

    # ── Time control ─────────────────────────────────────────────────────

    def _should_stop(self) -> bool:
        if self._nodes - self._last_yield_nodes >= _YIELD_EVERY_NODES:
            self._last_yield_nodes = self._nodes
            sleep(0.001)
        if self._cancel_check():
            self._cancelled = True
            return True
        return self._deadline is not None and perf_counter() >= self._deadline

    def _budget_spent(self) -> bool:
        if self._cancel_check():
            self._cancelled = True
            return True
        return self._soft_deadline is not None and perf_counter() >= self._soft_deadline

    def _interrupt_reason(self) -> StopReason:
        return StopReason.CANCELLED if self._cancelled else StopReason.TIME_EXPIRED

    # ── Move ordering ────────────────────────────────────────────────────

    def _order_moves(
        self,
        moves: list[Move],
        role: Role,
        tt_move: Move | None = None,
        ply: int = 0,
    ) -> list[Move]:
        return sorted(
            moves,
            key=lambda move: self._move_order_score(move, role, tt_move, ply),
            reverse=True,
        )

    def _move_order_score(
        self,
        move: Move,
        role: Role,
        tt_move: Move | None = None,
        ply: int = 0,
    ) -> int:
        score = 0
        if tt_move is not None and move == tt_move:
            score += _TT_MOVE_BONUS
        if move.captured:
            score += _CAPTURE_BONUS * len(move.captured)
        else:
            score += self._killer_score(move, ply)
            score += self._history_score(role, move)
        return score

    def _reset_killers(self) -> None:
        for slots in self._killer_moves:
            slots[0] = None
            slots[1] = None

    def _age_history(self) -> None:
        self._history_scores = {
            key: value // 2 for key, value in self._history_scores.items() if value > 1
        }

    def _record_killer(self, move: Move, ply: int) -> None:
        if ply >= _MAX_KILLER_PLY:
            return
        slots = self._killer_moves[ply]
        if slots[0] == move:
            return
        slots[1] = slots[0]
        slots[0] = move

    def _killer_score(self, move: Move, ply: int) -> int:
        if ply >= _MAX_KILLER_PLY:
            return 0
        slots = self._killer_moves[ply]
        if slots[0] == move:
            return _KILLER_PRIMARY_BONUS
        if slots[1] == move:
            return _KILLER_SECONDARY_BONUS
        return 0

    def killers_at(self, ply: int) -> tuple[Move | None, Move | None]:
        if ply >= _MAX_KILLER_PLY:
            return None, None
        slots = self._killer_moves[ply]
        return slots[0], slots[1]

    @staticmethod
    def _history_key(role: Role, move: Move) -> tuple[int, int, int]:
        return int(role), move.from_pos.index, move.to_pos.index

    def _history_score(self, role: Role, move: Move) -> int:
        return min(
            self._history_scores.get(self._history_key(role, move), 0), _HISTORY_MAX_SCORE
        )

    def _update_history(self, role: Role, move: Move, depth: int) -> None:
        key = self._history_key(role, move)
        self._history_scores[key] = self._history_scores.get(key, 0) + depth * depth
