"""AI layer: configuration, named opponents and the per-game controller."""

from hnefatafl.ai.config import AIConfig, create_ai_config, resolve_personality
from hnefatafl.ai.controller import AIController
from hnefatafl.ai.opponents import (
    AI_OPPONENTS,
    AIOpponent,
    get_opponent,
    opponents_by_difficulty,
)

__all__ = [
    "AI_OPPONENTS",
    "AIConfig",
    "AIController",
    "AIOpponent",
    "create_ai_config",
    "get_opponent",
    "opponents_by_difficulty",
    "resolve_personality",
]
