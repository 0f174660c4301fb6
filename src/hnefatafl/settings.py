"""Engine settings loaded from an optional TOML file and the environment.

Example ``hnefatafl.toml``::

    [ai]
    difficulty = 7
    personality = "defensive"
    seed = 42

    [search]
    max_depth = 4
    time_limit_ms = 1500
    tt_max_entries = 100000
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

from hnefatafl.ai.config import AIConfig, create_ai_config, resolve_personality
from hnefatafl.engine.search import SearchLimits

_LOGGER = logging.getLogger(__name__)

CONFIG_PATH_ENV = "HNEFATAFL_CONFIG_TOML"
DIFFICULTY_ENV = "HNEFATAFL_AI_DIFFICULTY"
SEARCH_DEPTH_ENV = "HNEFATAFL_SEARCH_DEPTH"


@dataclass(slots=True)
class AISettings:
    difficulty: int = 5
    personality: str = "balanced"
    seed: int | None = None


@dataclass(slots=True)
class SearchSettings:
    max_depth: int | None = None  # None: derived from difficulty
    time_limit_ms: int | None = None  # None: derived from difficulty
    tt_max_entries: int = 200_000


@dataclass(slots=True)
class EngineSettings:
    ai: AISettings = field(default_factory=AISettings)
    search: SearchSettings = field(default_factory=SearchSettings)

    def ai_config(self) -> AIConfig:
        """Build the AI config these settings describe."""
        config = create_ai_config(
            self.ai.difficulty,
            self.ai.personality,
            seed=self.ai.seed,
            thinking_time_ms=self.search.time_limit_ms,
        )
        if self.search.max_depth is not None:
            config = replace(config, max_depth=self.search.max_depth)
        return replace(config, tt_max_entries=self.search.tt_max_entries)

    def search_limits(self) -> SearchLimits:
        return self.ai_config().search_limits()


def _merge_section(target: Any, raw: Any, section: str) -> None:
    if not isinstance(raw, dict):
        raise ValueError(f"[{section}] must be a table")
    known = {f.name for f in fields(target)}
    for key, value in raw.items():
        if key not in known:
            _LOGGER.debug("Ignoring unknown setting %s.%s", section, key)
            continue
        setattr(target, key, value)


def _int_setting(value: Any, name: str, *, minimum: int = 1) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer, got {value!r}") from None
    if number < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {number}")
    return number


def _validate(settings: EngineSettings) -> None:
    ai, search = settings.ai, settings.search
    ai.difficulty = _int_setting(ai.difficulty, "ai.difficulty")
    if ai.difficulty > 10:
        raise ValueError(f"ai.difficulty must be <= 10, got {ai.difficulty}")
    resolve_personality(ai.personality)
    if ai.seed is not None:
        ai.seed = _int_setting(ai.seed, "ai.seed", minimum=0)
    if search.max_depth is not None:
        search.max_depth = _int_setting(search.max_depth, "search.max_depth")
    if search.time_limit_ms is not None:
        search.time_limit_ms = _int_setting(search.time_limit_ms, "search.time_limit_ms")
    search.tt_max_entries = _int_setting(search.tt_max_entries, "search.tt_max_entries")


def load_settings(
    path: str | os.PathLike[str] | None = None,
    *,
    environ: dict[str, str] | None = None,
) -> EngineSettings:
    """Load settings from *path* (or ``$HNEFATAFL_CONFIG_TOML``), then env overrides.

    A missing file yields the defaults. Unknown keys are ignored.

    Raises:
        ValueError: If a value has the wrong type or is out of range.
    """
    env = os.environ if environ is None else environ
    settings = EngineSettings()

    config_path = path if path is not None else env.get(CONFIG_PATH_ENV)
    if config_path:
        file = Path(config_path)
        if file.is_file():
            with file.open("rb") as fh:
                raw = tomllib.load(fh)
            if "ai" in raw:
                _merge_section(settings.ai, raw["ai"], "ai")
            if "search" in raw:
                _merge_section(settings.search, raw["search"], "search")
            _LOGGER.debug("Loaded settings from %s", file)
        else:
            _LOGGER.debug("Settings file %s not found, using defaults", file)

    difficulty = env.get(DIFFICULTY_ENV)
    if difficulty:
        settings.ai.difficulty = _int_setting(difficulty, DIFFICULTY_ENV)
    depth = env.get(SEARCH_DEPTH_ENV)
    if depth:
        settings.search.max_depth = _int_setting(depth, SEARCH_DEPTH_ENV)

    _validate(settings)
    return settings
