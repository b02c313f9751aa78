# Area: Engine
"""
alias_engine._engine.turn — Single describe/guess attempt
=========================================================

A Turn is created pending, with one word and a running timer, and is
closed exactly once:

    PENDING -> GUESSED    guesser got the word; success credit
    PENDING -> SKIPPED    describer gave up; word is not returned to the bank
    PENDING -> TIMED_OUT  configured max duration reached; no success credit
    PENDING -> CANCELLED  game ended mid-turn; nothing is credited

Closing with GUESSED, SKIPPED or TIMED_OUT adds the elapsed time to the
team's total. A second close attempt raises InvalidTransitionError and
changes nothing.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .enums import TurnOutcome
from .team import Team
from .timer import TurnTimer
from .word_bank import WordEntry
from ..errors import InvalidTransitionError

logger = logging.getLogger("alias_engine.turn")

# Valid turn transitions: {current_outcome: {allowed next outcomes}}
TRANSITIONS = {
    TurnOutcome.PENDING: {
        TurnOutcome.GUESSED,
        TurnOutcome.SKIPPED,
        TurnOutcome.TIMED_OUT,
        TurnOutcome.CANCELLED,
    },
    TurnOutcome.GUESSED: set(),
    TurnOutcome.SKIPPED: set(),
    TurnOutcome.TIMED_OUT: set(),
    TurnOutcome.CANCELLED: set(),
}

CREDITED_OUTCOMES = {TurnOutcome.GUESSED, TurnOutcome.SKIPPED, TurnOutcome.TIMED_OUT}


class Turn:
    """
    One team's attempt at one word.

    Attributes:
        team: The team playing this turn
        word: The drawn word entry (describer-only while pending)
        describer_id: Player describing this turn
        guesser_id: Player guessing this turn
        taboo_words: Taboo words shown to the describer (may be empty)
        outcome: Current outcome, PENDING until closed
        elapsed_ms: Duration credited when closed, None while pending
    """

    def __init__(
        self,
        team: Team,
        word: WordEntry,
        round_number: int,
        taboo_words: Optional[List[str]] = None,
    ):
        self.team = team
        self.word = word
        self.round_number = round_number
        self.describer_id = team.describer.player_id
        self.guesser_id = team.guesser.player_id
        self.taboo_words = list(taboo_words or [])
        self.outcome = TurnOutcome.PENDING
        self.elapsed_ms: Optional[int] = None
        self.timer = TurnTimer()
        self.timer.start()

    @property
    def pending(self) -> bool:
        return self.outcome is TurnOutcome.PENDING

    @property
    def succeeded(self) -> bool:
        return self.outcome is TurnOutcome.GUESSED

    def running_ms(self) -> int:
        return self.timer.elapsed_ms()

    def is_overdue(self, max_ms: Optional[int]) -> bool:
        return max_ms is not None and self.pending and self.timer.elapsed_ms() >= max_ms

    def can_close(self, outcome: TurnOutcome) -> bool:
        return outcome in TRANSITIONS[self.outcome]

    def close(self, outcome: TurnOutcome, cap_ms: Optional[int] = None) -> int:
        """
        Close the turn and credit the team.

        Args:
            outcome: GUESSED, SKIPPED or TIMED_OUT
            cap_ms: Upper bound for the credited duration (max turn length)

        Returns:
            The credited duration in milliseconds

        Raises:
            InvalidTransitionError: If the turn is already closed
        """
        if outcome not in CREDITED_OUTCOMES:
            raise ValueError(f"Use cancel() for outcome {outcome.value}")
        if not self.can_close(outcome):
            raise InvalidTransitionError(
                f"Turn already closed as {self.outcome.value}; nothing to do"
            )

        elapsed = self.timer.stop(cap_ms=cap_ms)
        self.elapsed_ms = elapsed
        self.outcome = outcome
        self.team.record_turn(elapsed, guessed=outcome is TurnOutcome.GUESSED)
        logger.info(
            f"[{self.team.team_id}] Turn '{self.word.text}': {outcome.value} in {elapsed}ms"
        )
        return elapsed

    def cancel(self) -> None:
        """Abandon a pending turn without crediting anyone."""
        if not self.can_close(TurnOutcome.CANCELLED):
            raise InvalidTransitionError(
                f"Turn already closed as {self.outcome.value}; nothing to do"
            )
        self.timer.reset()
        self.elapsed_ms = 0
        self.outcome = TurnOutcome.CANCELLED
        logger.info(f"[{self.team.team_id}] Turn '{self.word.text}' cancelled")

    def summary(self, reveal_word: bool = True) -> dict:
        """Serializable view of the turn. The word is hidden unless revealed."""
        data = {
            "team_id": self.team.team_id,
            "round": self.round_number,
            "describer": self.describer_id,
            "guesser": self.guesser_id,
            "outcome": self.outcome.value,
            "elapsed_ms": self.elapsed_ms,
        }
        if reveal_word:
            data["word"] = self.word.text
        return data
