# Area: Engine
"""
alias_engine._engine.ranking — Final standings
==============================================

Ranks teams when a game finishes. More guessed words rank higher;
among teams with the same count, lower total time wins. Teams equal on
both share a rank and are reported as a tie rather than separated by an
arbitrary secondary key.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .team import Team


@dataclass
class TeamStanding:
    """
    One team's final position.

    Attributes:
        rank: 1-based rank; tied teams share the same rank
        team_id: Team identifier
        members: Player ids in pair order
        guessed_count: Turns closed as guessed
        total_elapsed_ms: Sum of all credited turn durations
        turns_played: Credited turns
        tied: True if another team shares this rank
    """

    rank: int
    team_id: str
    members: List[str]
    guessed_count: int
    total_elapsed_ms: int
    turns_played: int
    tied: bool = False


@dataclass
class GameResult:
    """
    Result reported when a session reaches FINISHED.

    Attributes:
        session_id: Session identifier
        reason: FinishReason value
        rounds_completed: Number of complete rounds
        standings: Teams in rank order
        winner_team_id: Sole rank-1 team, or None when rank 1 is tied
        is_tie: True if more than one team holds rank 1
        ties: Groups of team ids that share a rank
    """

    session_id: str
    reason: str
    rounds_completed: int
    standings: List[TeamStanding]
    winner_team_id: Optional[str]
    is_tie: bool
    ties: List[List[str]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "session_id": self.session_id,
            "reason": self.reason,
            "rounds_completed": self.rounds_completed,
            "winner_team_id": self.winner_team_id,
            "is_tie": self.is_tie,
            "ties": [list(group) for group in self.ties],
            "standings": [
                {
                    "rank": s.rank,
                    "team_id": s.team_id,
                    "members": list(s.members),
                    "guessed_count": s.guessed_count,
                    "total_elapsed_ms": s.total_elapsed_ms,
                    "turns_played": s.turns_played,
                    "tied": s.tied,
                }
                for s in self.standings
            ],
        }


def _score_key(team: Team):
    return (-team.guessed_count, team.total_elapsed_ms)


def rank_teams(teams: Sequence[Team]) -> List[TeamStanding]:
    """Order teams best-first, giving equal scores the same rank."""
    ordered = sorted(teams, key=_score_key)
    standings: List[TeamStanding] = []
    previous_key = None
    rank = 0
    for position, team in enumerate(ordered, start=1):
        key = _score_key(team)
        if key != previous_key:
            rank = position
            previous_key = key
        standings.append(TeamStanding(
            rank=rank,
            team_id=team.team_id,
            members=[member.player_id for member in team.members],
            guessed_count=team.guessed_count,
            total_elapsed_ms=team.total_elapsed_ms,
            turns_played=team.turns_played,
        ))

    counts = {}
    for standing in standings:
        counts[standing.rank] = counts.get(standing.rank, 0) + 1
    for standing in standings:
        standing.tied = counts[standing.rank] > 1
    return standings


def build_game_result(
    session_id: str,
    teams: Sequence[Team],
    reason: str,
    rounds_completed: int,
) -> GameResult:
    """Build the GameResult for a finished session."""
    standings = rank_teams(teams)

    groups = {}
    for standing in standings:
        groups.setdefault(standing.rank, []).append(standing.team_id)
    ties = [group for _, group in sorted(groups.items()) if len(group) > 1]

    leaders = groups.get(1, [])
    is_tie = len(leaders) > 1
    winner = leaders[0] if len(leaders) == 1 else None

    return GameResult(
        session_id=session_id,
        reason=reason,
        rounds_completed=rounds_completed,
        standings=standings,
        winner_team_id=winner,
        is_tie=is_tie,
        ties=ties,
    )
