"""Data models produced by game analysis."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from hnefatafl.core.enums import Role
from hnefatafl.core.move import Move


class MoveJudgment(StrEnum):
    """Human-friendly move quality buckets."""

    BEST = "Best"
    GOOD = "Good"
    INACCURACY = "Inaccuracy"
    MISTAKE = "Mistake"
    BLUNDER = "Blunder"

    @property
    def annotation(self) -> str:
        """Short suffix for move lists."""
        return _JUDGMENT_ANNOTATION[self]


_JUDGMENT_ANNOTATION: dict[MoveJudgment, str] = {
    MoveJudgment.BEST: "",
    MoveJudgment.GOOD: "",
    MoveJudgment.INACCURACY: "?!",
    MoveJudgment.MISTAKE: "?",
    MoveJudgment.BLUNDER: "??",
}


@dataclass(slots=True, frozen=True)
class SideAnalysisSummary:
    """Aggregate quality metrics for one side."""

    moves: int
    avg_loss: float
    inaccuracies: int
    mistakes: int
    blunders: int
    best: int = 0
    good: int = 0
    accuracy: float = 0.0


@dataclass(slots=True, frozen=True)
class MoveAnalysis:
    """Engine-backed analysis for a single played move.

    Scores are from the mover's point of view.
    """

    ply: int
    role: Role
    played_move: Move
    best_move: Move | None
    best_score: float
    played_score: float
    loss: float
    judgment: MoveJudgment


@dataclass(slots=True, frozen=True)
class GameAnalysisReport:
    """Full move-by-move analysis with side summaries."""

    start_layout: str
    total_plies: int
    moves: tuple[MoveAnalysis, ...]
    attacker: SideAnalysisSummary
    defender: SideAnalysisSummary
    critical_plies: tuple[int, ...]

    def summary_for(self, role: Role) -> SideAnalysisSummary:
        return self.attacker if role == Role.ATTACKER else self.defender
