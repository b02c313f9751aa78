# Area: Engine
"""
alias_engine._engine.enums — Session, round and turn enums
==========================================================

Defines the phases, outcomes and action types shared by the session
state machine and the dispatcher.
"""

from enum import Enum


class SessionPhase(Enum):
    """
    Phases of one game session.

    Phase transitions:
    LOBBY -> TEAM_FORMATION (on first form_team)
    TEAM_FORMATION -> LOBBY (last team dissolved by a leave)
    TEAM_FORMATION -> IN_PROGRESS (on start)
    any phase -> FINISHED (on end, last round, or word bank exhausted)
    """
    LOBBY = "lobby"
    TEAM_FORMATION = "team_formation"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class TurnOutcome(Enum):
    """State of a single turn. Everything except PENDING is terminal."""
    PENDING = "pending"
    GUESSED = "guessed"
    SKIPPED = "skipped"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"      # Game ended while the turn was running


class RoundState(Enum):
    COLLECTING_TURNS = "collecting_turns"
    COMPLETE = "complete"


class GameLength(Enum):
    """How the game decides it is over after a round completes."""
    FIXED_ROUNDS = "fixed_rounds"
    UNTIL_EXHAUSTED = "until_exhausted"


class FinishReason(Enum):
    ROUNDS_COMPLETED = "rounds_completed"
    WORDS_EXHAUSTED = "words_exhausted"
    ENDED = "ended"


class ActionType(Enum):
    """
    Player actions accepted from the transport.

    STATUS is query-only: it never mutates a session and never creates one.
    """
    JOIN = "join"
    LEAVE = "leave"
    FORM_TEAM = "form_team"
    START = "start"
    NEXT_TURN = "next_turn"
    GUESSED = "guessed"
    SKIP = "skip"
    END = "end"
    STATUS = "status"


# Actions that may create a session for a previously unseen id
CREATING_ACTIONS = frozenset({ActionType.JOIN, ActionType.START})
