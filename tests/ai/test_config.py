"""Tests for AI configuration."""

import pytest

from hnefatafl.ai.config import AIConfig, create_ai_config, resolve_personality
from hnefatafl.engine.evaluation import PERSONALITIES, Personality


class TestCreateAIConfig:
    @pytest.mark.parametrize(
        ("difficulty", "thinking_ms", "depth"),
        [
            (1, 900, 2),
            (2, 1300, 2),
            (5, 2500, 3),
            (8, 3700, 5),
            (10, 4500, 6),
        ],
    )
    def test_budget_from_difficulty(self, difficulty: int, thinking_ms: int, depth: int) -> None:
        config = create_ai_config(difficulty)
        assert config.difficulty == difficulty
        assert config.thinking_time_ms == thinking_ms
        assert config.max_depth == depth

    @pytest.mark.parametrize(("raw", "clamped"), [(0, 1), (-3, 1), (11, 10), (99, 10)])
    def test_difficulty_is_clamped(self, raw: int, clamped: int) -> None:
        assert create_ai_config(raw).difficulty == clamped

    def test_personality_by_name(self) -> None:
        config = create_ai_config(4, "Aggressive")
        assert config.personality == PERSONALITIES["aggressive"]

    def test_explicit_personality(self) -> None:
        custom = Personality("Custom", 0.1, 0.2, 0.3, 0.4)
        assert create_ai_config(4, custom).personality is custom

    def test_thinking_time_override(self) -> None:
        assert create_ai_config(4, thinking_time_ms=1234).thinking_time_ms == 1234

    def test_unknown_personality(self) -> None:
        with pytest.raises(ValueError, match="Unknown personality"):
            resolve_personality("reckless")


class TestAIConfig:
    def test_defaults(self) -> None:
        config = AIConfig()
        assert config.personality == PERSONALITIES["balanced"]
        assert config.seed is None
        assert config.tt_max_entries == 200_000

    @pytest.mark.parametrize(
        "kwargs",
        [{"difficulty": 0}, {"difficulty": 11}, {"thinking_time_ms": 0}, {"max_depth": 0}],
    )
    def test_validation(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            AIConfig(**kwargs)

    def test_search_limits(self) -> None:
        config = AIConfig(max_depth=4, thinking_time_ms=800)
        assert config.search_limits().time_limit_ms == 800
        assert config.search_limits(150).time_limit_ms == 150
        assert config.search_limits().max_depth == 4
