"""Search engine package: evaluation, transposition table and alpha-beta search.

The PyQt6 worker lives in :mod:`hnefatafl.engine.qt_bridge` and is imported
explicitly so that the rules and search layers stay free of Qt.
"""

from hnefatafl.engine.alphabeta import AlphaBetaEngine
from hnefatafl.engine.evaluation import (
    KING_SAFETY_WEIGHT,
    PERSONALITIES,
    EvaluationBreakdown,
    Evaluator,
    Personality,
    evaluate,
)
from hnefatafl.engine.search import (
    CancelCheck,
    IEngine,
    SearchLimits,
    SearchResult,
    SearchState,
    StopReason,
)
from hnefatafl.engine.transposition import Bound, TranspositionTable, TTEntry

DefaultEngine: type[IEngine] = AlphaBetaEngine

__all__ = [
    "AlphaBetaEngine",
    "Bound",
    "CancelCheck",
    "DefaultEngine",
    "EvaluationBreakdown",
    "Evaluator",
    "IEngine",
    "KING_SAFETY_WEIGHT",
    "PERSONALITIES",
    "Personality",
    "SearchLimits",
    "SearchResult",
    "SearchState",
    "StopReason",
    "TTEntry",
    "TranspositionTable",
    "evaluate",
]
