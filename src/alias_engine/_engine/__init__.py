# Area: Engine
"""
Single-session game engine.

This package contains:
- WordList / WordBank for the shuffled per-session word pool
- TurnTimer for monotonic turn timing
- Turn, Round and Team state
- Session, the per-chat state machine
- Ranking and notification builders
"""

from .enums import (
    ActionType,
    FinishReason,
    GameLength,
    RoundState,
    SessionPhase,
    TurnOutcome,
)
from .ranking import GameResult, TeamStanding, build_game_result, rank_teams
from .round import Round
from .session import Session
from .team import Player, Team
from .timer import TurnTimer
from .turn import Turn
from .word_bank import WordBank, WordEntry, WordList

__all__ = [
    "ActionType",
    "FinishReason",
    "GameLength",
    "RoundState",
    "SessionPhase",
    "TurnOutcome",
    "GameResult",
    "TeamStanding",
    "build_game_result",
    "rank_teams",
    "Round",
    "Session",
    "Player",
    "Team",
    "TurnTimer",
    "Turn",
    "WordBank",
    "WordEntry",
    "WordList",
]
