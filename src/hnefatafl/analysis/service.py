"""Game analyzer service based on the built-in search engine."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from hnefatafl.ai.config import create_ai_config
from hnefatafl.ai.controller import AIController
from hnefatafl.analysis.models import (
    GameAnalysisReport,
    MoveAnalysis,
    MoveJudgment,
    SideAnalysisSummary,
)
from hnefatafl.core.board import Board, create_initial_board
from hnefatafl.core.enums import Role
from hnefatafl.core.errors import HnefataflError
from hnefatafl.core.move import Move
from hnefatafl.core.notation import board_to_text
from hnefatafl.core.rules import Rules
from hnefatafl.engine.evaluation import KING_SAFETY_WEIGHT, Evaluator
from hnefatafl.engine.search import CancelCheck
from hnefatafl.game.state import MoveRecord

_LOGGER = logging.getLogger(__name__)

_BEST_MAX_LOSS = 10.0
_GOOD_MAX_LOSS = 40.0
_INACCURACY_MAX_LOSS = 100.0
_MISTAKE_MAX_LOSS = 200.0
_CRITICAL_MOVE_COUNT = 3
_DEFAULT_TIME_LIMIT_MS = 300

ProgressCallback = Callable[[int, int], None]


class AnalysisCancelled(HnefataflError):
    """Raised when a running game analysis was cancelled."""


@dataclass(slots=True)
class _SideAcc:
    moves: int = 0
    loss_sum: float = 0.0
    best: int = 0
    good: int = 0
    inaccuracies: int = 0
    mistakes: int = 0
    blunders: int = 0


class GameAnalyzer:
    """Replays a move list and grades each move against the AI's choice.

    Args:
        evaluator: Scores decided positions; noise-free by default.
        controller: Searches for the preferred move. By default a
            strongest-level controller with a fixed seed, so repeated
            analyses agree.
    """

    __slots__ = ("_evaluator", "_controller")

    def __init__(
        self,
        evaluator: Evaluator | None = None,
        controller: AIController | None = None,
    ) -> None:
        self._evaluator = evaluator or Evaluator(difficulty=10)
        self._controller = controller or AIController(create_ai_config(10, seed=0))

    def analyze_game(
        self,
        moves: Iterable[Move | MoveRecord],
        *,
        start_board: Board | None = None,
        time_limit_ms: int = _DEFAULT_TIME_LIMIT_MS,
        is_cancelled: CancelCheck | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> GameAnalysisReport:
        """Analyze a game from *start_board* and return a structured report.

        Raises:
            InvalidMove: If a move in the list is illegal when replayed.
            AnalysisCancelled: If *is_cancelled* returned true.
        """
        history = [m.move if isinstance(m, MoveRecord) else m for m in moves]
        board = start_board.copy() if start_board is not None else create_initial_board()
        start_layout = board_to_text(board)
        cancelled = is_cancelled or (lambda: False)
        mover = Role.ATTACKER

        analyses: list[MoveAnalysis] = []
        total = len(history)
        for ply, move in enumerate(history):
            if cancelled():
                raise AnalysisCancelled

            best_score, best_move = self._search(board, mover, time_limit_ms, cancelled)
            after = Rules.apply_move(board, move)
            if cancelled():
                raise AnalysisCancelled
            opponent_score, _ = self._search(after, mover.opposite, time_limit_ms, cancelled)
            played_score = -opponent_score

            # Playing the preferred move costs nothing, whatever the noise
            # between the two searches.
            if best_move is not None and move == best_move:
                loss = 0.0
            else:
                loss = max(0.0, _clamp(best_score) - _clamp(played_score))

            analyses.append(
                MoveAnalysis(
                    ply=ply,
                    role=mover,
                    played_move=move,
                    best_move=best_move,
                    best_score=best_score,
                    played_score=played_score,
                    loss=loss,
                    judgment=classify_loss(loss),
                )
            )
            if on_progress is not None:
                on_progress(ply + 1, total)
            board = after
            mover = mover.opposite

        critical = tuple(
            a.ply
            for a in sorted(analyses, key=lambda m: m.loss, reverse=True)[:_CRITICAL_MOVE_COUNT]
            if a.loss > 0
        )
        _LOGGER.info("Analyzed %d plies, critical: %s", total, critical)

        return GameAnalysisReport(
            start_layout=start_layout,
            total_plies=total,
            moves=tuple(analyses),
            attacker=_build_side_summary(a for a in analyses if a.role == Role.ATTACKER),
            defender=_build_side_summary(a for a in analyses if a.role == Role.DEFENDER),
            critical_plies=critical,
        )

    def _search(
        self,
        board: Board,
        role: Role,
        time_limit_ms: int,
        cancelled: CancelCheck,
    ) -> tuple[float, Move | None]:
        """Score for *role* to move on *board*, with the preferred move."""
        if Rules.detect_terminal(board) is not None:
            return self._evaluator.evaluate(board, role), None
        move = self._controller.get_best_move(board, role, time_limit_ms, is_cancelled=cancelled)
        result = self._controller.last_result
        assert result is not None
        return result.score, move


def _clamp(score: float) -> float:
    return max(-KING_SAFETY_WEIGHT, min(KING_SAFETY_WEIGHT, score))


def classify_loss(loss: float) -> MoveJudgment:
    if loss <= _BEST_MAX_LOSS:
        return MoveJudgment.BEST
    if loss <= _GOOD_MAX_LOSS:
        return MoveJudgment.GOOD
    if loss <= _INACCURACY_MAX_LOSS:
        return MoveJudgment.INACCURACY
    if loss <= _MISTAKE_MAX_LOSS:
        return MoveJudgment.MISTAKE
    return MoveJudgment.BLUNDER


def _build_side_summary(analyses: Iterable[MoveAnalysis]) -> SideAnalysisSummary:
    acc = _SideAcc()
    for move in analyses:
        acc.moves += 1
        acc.loss_sum += move.loss
        if move.judgment == MoveJudgment.BEST:
            acc.best += 1
        elif move.judgment == MoveJudgment.GOOD:
            acc.good += 1
        elif move.judgment == MoveJudgment.INACCURACY:
            acc.inaccuracies += 1
        elif move.judgment == MoveJudgment.MISTAKE:
            acc.mistakes += 1
        elif move.judgment == MoveJudgment.BLUNDER:
            acc.blunders += 1

    avg = (acc.loss_sum / acc.moves) if acc.moves > 0 else 0.0
    return SideAnalysisSummary(
        moves=acc.moves,
        avg_loss=avg,
        inaccuracies=acc.inaccuracies,
        mistakes=acc.mistakes,
        blunders=acc.blunders,
        best=acc.best,
        good=acc.good,
        accuracy=_accuracy_from_avg_loss(avg),
    )


def _accuracy_from_avg_loss(avg_loss: float) -> float:
    """Map average loss to a 0–100 accuracy with exponential decay."""
    if avg_loss <= 0:
        return 100.0
    raw = 103.1668 * math.exp(-0.04354 * avg_loss) - 3.1669
    return max(0.0, min(100.0, raw))
