"""
alias_engine.config — Engine configuration
==========================================

The engine consumes configuration; it never parses chat input for it.

Sources, later ones win:
    1. JSON config file (optional)
    2. ``.env`` file, loaded with python-dotenv
    3. ``ALIAS_*`` environment variables

Example config.json:

    {
        "word_list_path": "words.csv",
        "game_length": "fixed_rounds",
        "rounds": 3,
        "max_turn_seconds": 60,
        "idle_teardown_seconds": 1800
    }
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ._engine.enums import GameLength
from ._engine.timer import to_ms
from ._engine.word_bank import DEFAULT_COMPLEXITY_WEIGHTS, WordEntry, WordList
from .errors import ConfigurationError
from .words import load_word_list

logger = logging.getLogger("alias_engine.config")

# Environment variable -> config key
ENV_MAPPINGS = {
    "ALIAS_WORD_LIST_PATH": "word_list_path",
    "ALIAS_GAME_LENGTH": "game_length",
    "ALIAS_ROUNDS": "rounds",
    "ALIAS_MAX_TURN_SECONDS": "max_turn_seconds",
    "ALIAS_SKIP_COOLDOWN_SECONDS": "skip_cooldown_seconds",
    "ALIAS_IDLE_TEARDOWN_SECONDS": "idle_teardown_seconds",
    "ALIAS_MIN_TEAMS": "min_teams",
    "ALIAS_MAX_TEAMS": "max_teams",
    "ALIAS_USE_TABOO_WORDS": "use_taboo_words",
    "ALIAS_TABOO_WORDS_SHOWN": "taboo_words_shown",
    "ALIAS_SHUFFLE_SEED": "shuffle_seed",
    "ALIAS_REGISTRY_STRIPES": "registry_stripes",
    "ALIAS_LOG_FILE": "log_file",
    "ALIAS_LOG_LEVEL": "log_level",
}


class WordSpec(BaseModel):
    """A word given inline in the config file."""

    text: str = Field(min_length=1)
    complexity: int = Field(1, ge=1, le=3)
    taboo_words: List[str] = Field(default_factory=list)

    def to_entry(self) -> WordEntry:
        return WordEntry(
            text=self.text.strip(),
            complexity=self.complexity,
            taboo_words=tuple(t.strip() for t in self.taboo_words if t.strip()),
        )


class EngineConfig(BaseModel):
    """
    Validated engine settings.

    ``idle_teardown_seconds`` of 0 disables idle teardown, and a
    ``max_turn_seconds`` of None means turns never time out.
    """

    model_config = ConfigDict(extra="ignore")

    words: List[Union[str, WordSpec]] = Field(default_factory=list)
    word_list_path: Optional[str] = None
    game_length: GameLength = GameLength.FIXED_ROUNDS
    rounds: int = Field(3, ge=1)
    max_turn_seconds: Optional[float] = Field(None, gt=0)
    skip_cooldown_seconds: float = Field(0.0, ge=0)
    idle_teardown_seconds: float = Field(0.0, ge=0)
    min_teams: int = Field(1, ge=1)
    max_teams: Optional[int] = Field(None, ge=1)
    use_taboo_words: bool = False
    taboo_words_shown: int = Field(4, ge=0)
    complexity_weights: Dict[int, float] = Field(
        default_factory=lambda: dict(DEFAULT_COMPLEXITY_WEIGHTS)
    )
    shuffle_seed: Optional[int] = None
    registry_stripes: int = Field(16, ge=1)
    log_file: Optional[str] = "alias_engine.log"
    log_level: str = "INFO"

    @model_validator(mode="after")
    def _check_team_limits(self) -> "EngineConfig":
        if self.max_teams is not None and self.max_teams < self.min_teams:
            raise ValueError("max_teams must be >= min_teams")
        if any(weight < 0 for weight in self.complexity_weights.values()):
            raise ValueError("complexity_weights must not be negative")
        return self

    @property
    def max_turn_ms(self) -> Optional[int]:
        if self.max_turn_seconds is None:
            return None
        return to_ms(self.max_turn_seconds)

    @property
    def skip_cooldown_ms(self) -> int:
        return to_ms(self.skip_cooldown_seconds)

    @property
    def max_players(self) -> Optional[int]:
        return None if self.max_teams is None else 2 * self.max_teams

    def build_word_list(self) -> WordList:
        """Merge inline words and the word list file into one WordList."""
        entries: List[WordEntry] = []
        for word in self.words:
            entries.append(word.to_entry() if isinstance(word, WordSpec) else WordEntry(text=word.strip()))
        if self.word_list_path:
            entries.extend(load_word_list(self.word_list_path))
        word_list = WordList(entries)
        if not len(word_list):
            logger.warning("Word list is empty; every game will end on its first draw")
        return word_list


def config_from_dict(data: Mapping[str, Any]) -> EngineConfig:
    """
    Validate a config mapping.

    Raises:
        ConfigurationError: If any value is invalid
    """
    try:
        return EngineConfig.model_validate(dict(data))
    except ValidationError as exc:
        errors = [
            f"{'.'.join(str(part) for part in err['loc']) or 'config'}: {err['msg']}"
            for err in exc.errors()
        ]
        raise ConfigurationError(f"Invalid configuration: {errors}", validation_errors=errors) from exc


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    use_dotenv: bool = True,
    environ: Optional[Mapping[str, str]] = None,
) -> EngineConfig:
    """Load config from file, .env and environment variables."""
    data: Dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {path}")
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Config file is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigurationError("Config file must contain a JSON object")

    if use_dotenv:
        dotenv_path = find_dotenv(usecwd=True)
        if dotenv_path:
            load_dotenv(dotenv_path)

    env = os.environ if environ is None else environ
    for env_key, config_key in ENV_MAPPINGS.items():
        value = env.get(env_key)
        if value is not None and value != "":
            data[config_key] = value

    return config_from_dict(data)
