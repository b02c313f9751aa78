# Area: Engine
"""
alias_engine._engine.notification_builder — Outgoing notifications
==================================================================

Builds the Notification payloads a session emits after a mutation
commits. Every method returns one Notification. The current word and
its taboo words only ever go into ``describer_only``.
"""

from __future__ import annotations

from typing import List, Optional

from .ranking import GameResult
from .round import Round
from .team import Player, Team
from .turn import Turn
from ..types import Notification


def _team_brief(team: Team) -> dict:
    return {
        "team_id": team.team_id,
        "describer": team.describer.player_id,
        "guesser": team.guesser.player_id,
    }


class NotificationBuilder:
    """
    Builds all notifications one session sends.

    Usage:
        builder = NotificationBuilder("chat-42")
        note = builder.player_joined(player, players)
    """

    def __init__(self, session_id: str):
        self.session_id = session_id

    def _note(self, event: str, broadcast: dict, describer_only: Optional[dict] = None,
              describer_id: Optional[str] = None) -> Notification:
        return Notification(
            session_id=self.session_id,
            event=event,
            broadcast=broadcast,
            describer_only=describer_only or {},
            describer_id=describer_id,
        )

    # ── Setup ──────────────────────────────────────────────────

    def session_opened(self, opened_by: str) -> Notification:
        return self._note("session_opened", {"opened_by": opened_by, "phase": "lobby"})

    def player_joined(self, player: Player, players: List[Player]) -> Notification:
        return self._note("player_joined", {
            "player": player.to_dict(),
            "players": [p.player_id for p in players],
        })

    def player_left(self, player: Player, dissolved_team_id: Optional[str],
                    phase: str) -> Notification:
        return self._note("player_left", {
            "player": player.to_dict(),
            "dissolved_team_id": dissolved_team_id,
            "phase": phase,
        })

    def team_formed(self, team: Team, teams: List[Team]) -> Notification:
        return self._note("team_formed", {
            "team": team.to_dict(),
            "teams": [t.team_id for t in teams],
        })

    def game_started(self, round_: Round, next_team: Team) -> Notification:
        return self._note("game_started", {
            "round": round_.number,
            "rotation": [t.team_id for t in round_.rotation],
            "next": _team_brief(next_team),
        })

    # ── Turns and rounds ───────────────────────────────────────

    def turn_started(self, turn: Turn) -> Notification:
        return self._note(
            "turn_started",
            {
                "round": turn.round_number,
                "team_id": turn.team.team_id,
                "describer": turn.describer_id,
                "guesser": turn.guesser_id,
            },
            describer_only={
                "word": turn.word.text,
                "taboo_words": list(turn.taboo_words),
            },
            describer_id=turn.describer_id,
        )

    def turn_closed(self, turn: Turn, next_team: Optional[Team]) -> Notification:
        return self._note("turn_closed", {
            "round": turn.round_number,
            "team_id": turn.team.team_id,
            "outcome": turn.outcome.value,
            "success": turn.succeeded,
            "word": turn.word.text,
            "elapsed_ms": turn.elapsed_ms,
            "team_total_ms": turn.team.total_elapsed_ms,
            "next": _team_brief(next_team) if next_team else None,
        })

    def round_complete(self, round_: Round, next_round: Optional[Round]) -> Notification:
        next_team = next_round.next_team() if next_round else None
        return self._note("round_complete", {
            "round": round_.number,
            "leaderboard_delta": round_.leaderboard_delta(),
            "next_round": next_round.number if next_round else None,
            "next": _team_brief(next_team) if next_team else None,
        })

    def game_finished(self, result: GameResult) -> Notification:
        return self._note("game_finished", result.to_dict())

    def status(self, snapshot: dict) -> Notification:
        return self._note("status", snapshot)
