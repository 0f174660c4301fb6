"""Post-game analysis: grade each played move against the AI's preference."""

from hnefatafl.analysis.models import (
    GameAnalysisReport,
    MoveAnalysis,
    MoveJudgment,
    SideAnalysisSummary,
)
from hnefatafl.analysis.service import AnalysisCancelled, GameAnalyzer, classify_loss

__all__ = [
    "AnalysisCancelled",
    "GameAnalysisReport",
    "GameAnalyzer",
    "MoveAnalysis",
    "MoveJudgment",
    "SideAnalysisSummary",
    "classify_loss",
]
