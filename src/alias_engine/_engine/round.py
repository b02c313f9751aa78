# Area: Engine
"""
alias_engine._engine.round — One pass over every team
=====================================================

A Round holds at most one credited Turn per team, taken in the rotation
order fixed when the round starts. It is COMPLETE once the last team's
turn closes.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .enums import RoundState
from .team import Team
from .turn import Turn
from .word_bank import WordEntry
from ..errors import InvalidTransitionError

logger = logging.getLogger("alias_engine.round")


class Round:
    """
    Sequence of turns covering all teams once.

    Attributes:
        number: 1-based round number
        rotation: Team order for this round
        turns: Turns started this round, in order
    """

    def __init__(self, number: int, rotation: Sequence[Team]):
        if not rotation:
            raise ValueError("A round needs at least one team")
        self.number = number
        self.rotation: List[Team] = list(rotation)
        self.turns: List[Turn] = []
        self.state = RoundState.COLLECTING_TURNS

    @property
    def complete(self) -> bool:
        return self.state is RoundState.COMPLETE

    @property
    def current_turn(self) -> Optional[Turn]:
        """The pending turn, if any."""
        if self.turns and self.turns[-1].pending:
            return self.turns[-1]
        return None

    def next_team(self) -> Optional[Team]:
        """The team whose turn starts next, or None once every team has played."""
        if self.current_turn is not None:
            return None
        played = {turn.team.team_id for turn in self.turns if not turn.pending}
        for team in self.rotation:
            if team.team_id not in played:
                return team
        return None

    def begin_turn(self, word: WordEntry, taboo_words: Optional[List[str]] = None) -> Turn:
        """
        Start the next team's turn with an already drawn word.

        Raises:
            InvalidTransitionError: If a turn is pending or the round is complete
        """
        if self.complete:
            raise InvalidTransitionError(f"Round {self.number} is already complete")
        if self.current_turn is not None:
            raise InvalidTransitionError("A turn is already in progress")
        team = self.next_team()
        if team is None:
            raise InvalidTransitionError(f"Every team has played in round {self.number}")

        turn = Turn(team=team, word=word, round_number=self.number, taboo_words=taboo_words)
        self.turns.append(turn)
        return turn

    def on_turn_closed(self) -> bool:
        """
        Re-check completion after the pending turn closed.

        Returns:
            True if this close completed the round
        """
        if self.complete:
            return False
        credited = {turn.team.team_id for turn in self.turns if not turn.pending}
        if all(team.team_id in credited for team in self.rotation):
            self.state = RoundState.COMPLETE
            logger.info(f"Round {self.number} complete")
            return True
        return False

    def discard_pending(self) -> Optional[Turn]:
        """Cancel and drop the pending turn (used when the game ends early)."""
        turn = self.current_turn
        if turn is None:
            return None
        turn.cancel()
        self.turns.remove(turn)
        return turn

    def leaderboard_delta(self) -> List[dict]:
        """What each team gained this round, in rotation order."""
        by_team = {turn.team.team_id: turn for turn in self.turns if not turn.pending}
        delta = []
        for team in self.rotation:
            turn = by_team.get(team.team_id)
            delta.append({
                "team_id": team.team_id,
                "played": turn is not None,
                "word": turn.word.text if turn else None,
                "outcome": turn.outcome.value if turn else None,
                "elapsed_ms": turn.elapsed_ms if turn else 0,
                "success": bool(turn and turn.succeeded),
            })
        return delta

    def summary(self) -> dict:
        return {
            "round": self.number,
            "state": self.state.value,
            "rotation": [team.team_id for team in self.rotation],
            "turns": [turn.summary(reveal_word=not turn.pending) for turn in self.turns],
        }
