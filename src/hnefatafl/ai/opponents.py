"""Named AI opponents offered to players."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from hnefatafl.ai.config import AIConfig, create_ai_config


@dataclass(frozen=True, slots=True)
class AIOpponent:
    name: str
    difficulty: int
    rating: int
    personality: str
    thinking_time_ms: int

    def to_config(self, seed: int | None = None) -> AIConfig:
        return create_ai_config(
            self.difficulty,
            self.personality,
            seed=seed,
            thinking_time_ms=self.thinking_time_ms,
        )


AI_OPPONENTS: Final[tuple[AIOpponent, ...]] = (
    # Beginner
    AIOpponent("Viking Novice", 2, 800, "balanced", 1000),
    AIOpponent("Shield Bearer", 3, 950, "defensive", 1500),
    # Intermediate
    AIOpponent("Berserker", 5, 1200, "aggressive", 2000),
    AIOpponent("Tactician", 6, 1350, "balanced", 2500),
    AIOpponent("Guardian", 6, 1300, "defensive", 2500),
    # Advanced
    AIOpponent("Warlord", 8, 1600, "aggressive", 3500),
    AIOpponent("Strategist", 8, 1650, "balanced", 3500),
    # Expert
    AIOpponent("Grandmaster", 10, 1900, "balanced", 4500),
    AIOpponent("Iron Fortress", 9, 1750, "defensive", 4000),
    AIOpponent("Blood Eagle", 9, 1800, "aggressive", 4000),
)


def get_opponent(name: str) -> AIOpponent:
    """Look up an opponent by name (case-insensitive)."""
    wanted = name.strip().lower()
    for opponent in AI_OPPONENTS:
        if opponent.name.lower() == wanted:
            return opponent
    raise KeyError(f"Unknown AI opponent: {name!r}")


def opponents_by_difficulty(min_difficulty: int = 1, max_difficulty: int = 10) -> list[AIOpponent]:
    """Opponents within the inclusive difficulty range, easiest first."""
    return sorted(
        (o for o in AI_OPPONENTS if min_difficulty <= o.difficulty <= max_difficulty),
        key=lambda o: (o.difficulty, o.rating),
    )
