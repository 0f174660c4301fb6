"""AI configuration: difficulty, personality and search budget."""

from __future__ import annotations

from dataclasses import dataclass, field

from hnefatafl.engine.evaluation import PERSONALITIES, Personality
from hnefatafl.engine.search import SearchLimits

MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 10
MAX_THINKING_TIME_MS = 5000
BASE_THINKING_TIME_MS = 500
THINKING_TIME_PER_LEVEL_MS = 400
MIN_SEARCH_DEPTH = 2
MAX_SEARCH_DEPTH = 8


def clamp_difficulty(difficulty: int) -> int:
    return max(MIN_DIFFICULTY, min(MAX_DIFFICULTY, int(difficulty)))


def resolve_personality(personality: str | Personality) -> Personality:
    """Look up a preset by name, or pass an explicit personality through."""
    if isinstance(personality, Personality):
        return personality
    try:
        return PERSONALITIES[personality.lower()]
    except KeyError:
        known = ", ".join(sorted(PERSONALITIES))
        raise ValueError(f"Unknown personality {personality!r} (expected one of: {known})") from None


@dataclass(frozen=True, slots=True)
class AIConfig:
    """Everything an :class:`~hnefatafl.ai.controller.AIController` needs.

    Args:
        difficulty: 1–10; scales evaluation and enables noise below 8.
        personality: Evaluation style weights.
        thinking_time_ms: Default time budget per move.
        max_depth: Deepest iteration the search may reach.
        seed: Seed for the evaluation noise; ``None`` is non-reproducible.
        tt_max_entries: Transposition table capacity.
    """

    difficulty: int = 5
    personality: Personality = field(default_factory=lambda: PERSONALITIES["balanced"])
    thinking_time_ms: int = 2500
    max_depth: int = 3
    seed: int | None = None
    tt_max_entries: int = 200_000

    def __post_init__(self) -> None:
        if not MIN_DIFFICULTY <= self.difficulty <= MAX_DIFFICULTY:
            raise ValueError(
                f"Difficulty must be in {MIN_DIFFICULTY}..{MAX_DIFFICULTY}, got {self.difficulty}"
            )
        if self.thinking_time_ms <= 0:
            raise ValueError("Thinking time must be positive")
        if self.max_depth <= 0:
            raise ValueError("Search depth must be >= 1")

    def search_limits(self, time_limit_ms: int | None = None) -> SearchLimits:
        budget = self.thinking_time_ms if time_limit_ms is None else time_limit_ms
        return SearchLimits(max_depth=self.max_depth, time_limit_ms=budget)


def thinking_time_for(difficulty: int) -> int:
    return min(MAX_THINKING_TIME_MS, BASE_THINKING_TIME_MS + difficulty * THINKING_TIME_PER_LEVEL_MS)


def depth_for(difficulty: int) -> int:
    return min(MAX_SEARCH_DEPTH, max(MIN_SEARCH_DEPTH, difficulty // 2 + 1))


def create_ai_config(
    difficulty: int,
    personality: str | Personality = "balanced",
    *,
    seed: int | None = None,
    thinking_time_ms: int | None = None,
) -> AIConfig:
    """Standard config for *difficulty* (clamped to 1..10)."""
    level = clamp_difficulty(difficulty)
    return AIConfig(
        difficulty=level,
        personality=resolve_personality(personality),
        thinking_time_ms=thinking_time_ms or thinking_time_for(level),
        max_depth=depth_for(level),
        seed=seed,
    )
