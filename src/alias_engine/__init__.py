"""
alias_engine — Alias party game engine
======================================

Runs many concurrent games of Alias, one per chat. Teams of two take
turns: the describer explains a secret word, the guesser names it, and
the team with the most guessed words in the least total time wins.

Quick Start:
    from alias_engine import SessionEngine, load_config
    engine = SessionEngine(load_config("config.json"), notifier=print)
    engine.handle({"session_id": "chat-1", "player_id": "ada", "action": "join"})

The transport owns delivery. Each Notification tags which fields are
broadcast and which are for the current describer only; use
``Notification.for_recipient(player_id)`` to apply that rule.

Local play over stdin/stdout:
    python -m alias_engine --words words.txt
"""

from ._engine import (
    ActionType,
    FinishReason,
    GameLength,
    GameResult,
    Player,
    Session,
    SessionPhase,
    Team,
    TeamStanding,
    TurnOutcome,
    WordBank,
    WordEntry,
    WordList,
)
from ._registry import IdleSweeper, SessionEngine, SessionRegistry
from ._shared import setup_logging
from .config import EngineConfig, config_from_dict, load_config
from .errors import (
    AliasEngineError,
    CapacityViolationError,
    ConfigurationError,
    InvalidTransitionError,
    MalformedActionError,
    NotFoundError,
    PlayerNotFoundError,
    SessionNotFoundError,
)
from .runner import ConsoleRunner
from .types import ActionResult, InboundAction, Notification, parse_action
from .words import load_word_list

__version__ = "1.0.0"

__all__ = [
    # Engine
    "SessionEngine",
    "SessionRegistry",
    "IdleSweeper",
    "Session",
    "ConsoleRunner",
    # Config
    "EngineConfig",
    "config_from_dict",
    "load_config",
    "load_word_list",
    "setup_logging",
    # Models
    "InboundAction",
    "Notification",
    "ActionResult",
    "parse_action",
    "ActionType",
    "SessionPhase",
    "TurnOutcome",
    "GameLength",
    "FinishReason",
    "Player",
    "Team",
    "TeamStanding",
    "GameResult",
    "WordBank",
    "WordEntry",
    "WordList",
    # Errors
    "AliasEngineError",
    "InvalidTransitionError",
    "MalformedActionError",
    "NotFoundError",
    "SessionNotFoundError",
    "PlayerNotFoundError",
    "CapacityViolationError",
    "ConfigurationError",
]
