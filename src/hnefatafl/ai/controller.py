"""Per-game AI controller."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from hnefatafl.engine.alphabeta import AlphaBetaEngine
from hnefatafl.engine.evaluation import Evaluator

if TYPE_CHECKING:
    from hnefatafl.ai.config import AIConfig
    from hnefatafl.core.board import Board
    from hnefatafl.core.enums import Role
    from hnefatafl.core.move import Move
    from hnefatafl.engine.search import CancelCheck, IEngine, SearchResult

_LOGGER = logging.getLogger(__name__)


class AIController:
    """Chooses moves for one side of one game.

    Owns the search engine together with its transposition table, killer
    and history tables and the seeded noise source. Create one controller
    per game; nothing is shared between instances.

    Args:
        config: Difficulty, personality and budget.
        engine: Replacement search engine; by default an
            :class:`AlphaBetaEngine` built from *config*.
        rng: Noise source; by default ``random.Random(config.seed)``.
    """

    __slots__ = ("_config", "_engine", "_rng", "_last_result")

    def __init__(
        self,
        config: AIConfig,
        *,
        engine: IEngine | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._config = config
        self._rng = rng or random.Random(config.seed)
        if engine is None:
            evaluator = Evaluator(config.personality, config.difficulty, self._rng)
            engine = AlphaBetaEngine(evaluator, tt_max_entries=config.tt_max_entries)
        self._engine = engine
        self._last_result: SearchResult | None = None

    @property
    def config(self) -> AIConfig:
        return self._config

    @property
    def engine(self) -> IEngine:
        return self._engine

    @property
    def last_result(self) -> SearchResult | None:
        return self._last_result

    def get_best_move(
        self,
        board: Board,
        role: Role,
        time_limit_ms: int | None = None,
        is_cancelled: CancelCheck | None = None,
    ) -> Move | None:
        """Best move for *role* within the budget, or ``None`` if it cannot move."""
        limits = self._config.search_limits(time_limit_ms)
        result = self._engine.search(board, role, limits, is_cancelled=is_cancelled)
        self._last_result = result
        if result.best_move is None:
            _LOGGER.info("%s has no legal moves", role)
        return result.best_move

    def reset(self) -> None:
        """Clear learned search state before a new game."""
        self._engine.reset()
        self._last_result = None
