# Area: Engine
"""
alias_engine._engine.snapshot — Session state snapshot builder
==============================================================

Builds serializable snapshots of a session for status queries and
rejection logs. The pending word is only included when explicitly
revealed; status payloads sent to the whole chat never carry it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .session import Session
    from .turn import Turn


def build_session_snapshot(session: "Session", reveal_secret: bool = False) -> dict:
    """Build a serializable snapshot of one session."""
    paired = {member.player_id for team in session.teams for member in team.members}
    current = session.current_round
    return {
        "session_id": session.session_id,
        "phase": session.phase.value,
        "players": [player.to_dict() for player in session.players.values()],
        "unpaired": [pid for pid in session.players if pid not in paired],
        "teams": [team.to_dict() for team in session.teams],
        "current_round": current.summary() if current else None,
        "rounds_completed": len(session.completed_rounds),
        "pending_turn": _pending_turn(session.pending_turn, reveal_secret),
        "word_bank": _word_bank(session, reveal_secret),
        "result": session.result.to_dict() if session.result else None,
    }


def _pending_turn(turn: Optional["Turn"], reveal_secret: bool) -> Optional[dict]:
    if turn is None:
        return None
    data = turn.summary(reveal_word=reveal_secret)
    if reveal_secret:
        data["taboo_words"] = list(turn.taboo_words)
    return data


def _word_bank(session: "Session", reveal_secret: bool) -> Optional[dict]:
    bank = session.word_bank
    if bank is None:
        return None
    data = {"size": len(bank), "remaining": bank.remaining, "exhausted": bank.exhausted}
    if reveal_secret:
        data["used"] = sorted(bank.used)
    return data
