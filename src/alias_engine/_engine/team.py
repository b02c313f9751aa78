# Area: Engine
"""
alias_engine._engine.team — Players and two-person teams
========================================================

A Team is an ordered pair of players. The pair order decides who
describes first; after every closed turn the roles swap, so the same
member never describes twice in a row.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class Player:
    """A chat participant. The id is opaque and supplied by the transport."""
    player_id: str
    display_name: str

    def to_dict(self) -> dict:
        return {"player_id": self.player_id, "display_name": self.display_name}


@dataclass
class Team:
    """
    Exactly two players plus the team's accumulated score.

    ``total_elapsed_ms`` only grows, by the duration of each closed turn.
    """
    team_id: str
    members: Tuple[Player, Player]
    total_elapsed_ms: int = 0
    guessed_count: int = 0
    turns_played: int = 0
    describer_index: int = 0
    turn_durations_ms: List[int] = field(default_factory=list)

    @property
    def describer(self) -> Player:
        return self.members[self.describer_index]

    @property
    def guesser(self) -> Player:
        return self.members[1 - self.describer_index]

    def has_member(self, player_id: str) -> bool:
        return any(member.player_id == player_id for member in self.members)

    def partner_of(self, player_id: str) -> Optional[Player]:
        for index, member in enumerate(self.members):
            if member.player_id == player_id:
                return self.members[1 - index]
        return None

    def record_turn(self, elapsed_ms: int, guessed: bool) -> None:
        """Credit a closed turn and hand the describer role to the partner."""
        if elapsed_ms < 0:
            raise ValueError("Turn duration cannot be negative")
        self.total_elapsed_ms += elapsed_ms
        self.turn_durations_ms.append(elapsed_ms)
        self.turns_played += 1
        if guessed:
            self.guessed_count += 1
        self.describer_index = 1 - self.describer_index

    def to_dict(self) -> dict:
        return {
            "team_id": self.team_id,
            "members": [member.to_dict() for member in self.members],
            "describer": self.describer.player_id,
            "guesser": self.guesser.player_id,
            "total_elapsed_ms": self.total_elapsed_ms,
            "guessed_count": self.guessed_count,
            "turns_played": self.turns_played,
        }
