"""Shared engine search models and protocol."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from hnefatafl.core.board import Board
    from hnefatafl.core.enums import Role
    from hnefatafl.core.move import Move

CancelCheck = Callable[[], bool]


class SearchState(StrEnum):
    """Lifecycle of a single search call."""

    IDLE = "idle"
    DEEPENING = "deepening"
    DONE = "done"


class StopReason(StrEnum):
    """Why iterative deepening stopped."""

    DEPTH_EXHAUSTED = "depth_exhausted"
    TIME_EXPIRED = "time_expired"
    DECIDED = "decided"  # a forced win or loss was found
    CANCELLED = "cancelled"
    NO_MOVES = "no_moves"


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation."""

    max_depth: int = 3
    time_limit_ms: int | None = 700


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search."""

    best_move: Move | None
    score: float
    depth: int
    nodes: int
    stop_reason: StopReason = StopReason.DEPTH_EXHAUSTED
    elapsed_ms: float = 0.0

    @property
    def timed_out(self) -> bool:
        return self.stop_reason == StopReason.TIME_EXPIRED


class IEngine(Protocol):
    """Protocol for search engines used by the AI controller."""

    def search(
        self,
        board: Board,
        role: Role,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult: ...

    def reset(self) -> None: ...
