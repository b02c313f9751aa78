"""
alias_engine.errors — Custom exception classes
==============================================

Defines the exception hierarchy for rejected player actions.
Each exception stores full context for structured logging.

Rejections are local and non-fatal: the session that raised one is left
exactly as it was before the action arrived.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import json


class AliasEngineError(Exception):
    """Base exception for all alias_engine errors."""

    code = "ENGINE_ERROR"

    def __init__(
        self,
        reason: str,
        session_id: Optional[str] = None,
        player_id: Optional[str] = None,
        action: Optional[str] = None,
    ):
        self.reason = reason
        self.session_id = session_id
        self.player_id = player_id
        self.action = action
        super().__init__(reason)

    def with_context(
        self,
        session_id: Optional[str] = None,
        player_id: Optional[str] = None,
        action: Optional[str] = None,
    ) -> "AliasEngineError":
        """Fill in whichever context fields are still unknown."""
        self.session_id = self.session_id or session_id
        self.player_id = self.player_id or player_id
        self.action = self.action or action
        return self

    def to_payload(self) -> Dict[str, Any]:
        return {"code": self.code, "reason": self.reason}

    def format_error_log(self, snapshot: Optional[Dict[str, Any]] = None) -> str:
        return _format_error_block(
            error_type=self.code,
            session_id=self.session_id,
            player_id=self.player_id,
            action=self.action,
            reason=self.reason,
            snapshot=snapshot,
        )


class InvalidTransitionError(AliasEngineError):
    """Raised when an action is not legal in the current phase or turn state."""

    code = "INVALID_TRANSITION"


class MalformedActionError(InvalidTransitionError):
    """Raised when an inbound action cannot be parsed at all."""

    code = "MALFORMED_ACTION"

    def __init__(self, reason: str, validation_errors: Optional[List[str]] = None, **kwargs):
        self.validation_errors = validation_errors or []
        super().__init__(reason, **kwargs)

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        payload["validation_errors"] = list(self.validation_errors)
        return payload


class NotFoundError(AliasEngineError):
    """Raised when a session or player id is unknown."""

    code = "NOT_FOUND"


class SessionNotFoundError(NotFoundError):
    """Raised for unknown or torn-down sessions."""

    def __init__(self, session_id: str, **kwargs):
        super().__init__(f"Session '{session_id}' not found", session_id=session_id, **kwargs)


class PlayerNotFoundError(NotFoundError):
    """Raised when a player id is not registered in the session."""

    def __init__(self, player_id: str, **kwargs):
        self.missing_player_id = player_id
        super().__init__(f"Player '{player_id}' has not joined this session", **kwargs)


class CapacityViolationError(AliasEngineError):
    """Raised when a team-formation rule is broken."""

    code = "CAPACITY_VIOLATION"


class ConfigurationError(AliasEngineError):
    """Raised when engine configuration fails validation."""

    code = "CONFIGURATION_ERROR"

    def __init__(self, reason: str, validation_errors: Optional[List[str]] = None):
        self.validation_errors = validation_errors or []
        super().__init__(reason)


def _format_error_block(
    error_type: str,
    session_id: Optional[str],
    player_id: Optional[str],
    action: Optional[str],
    reason: str,
    snapshot: Optional[Dict[str, Any]],
) -> str:
    """Format a structured rejection block for the log file."""
    from datetime import datetime, timezone

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    lines = [
        "",
        "=" * 64,
        " ACTION REJECTED",
        "=" * 64,
        f" Timestamp:    {timestamp}",
        f" Error Type:   {error_type}",
        f" Session:      {session_id or '-'}",
        f" Player:       {player_id or '-'}",
        f" Action:       {action or '-'}",
        f" Reason:       {reason}",
    ]

    if snapshot is not None:
        lines.append("")
        lines.append(" ── SESSION STATE " + "─" * 46)
        lines.append(_indent_json(snapshot))

    lines.append("")
    lines.append("=" * 64)
    lines.append("")

    return "\n".join(lines)


def _indent_json(data: Dict[str, Any], indent: int = 2) -> str:
    """Format JSON with indentation for error logs."""
    try:
        formatted = json.dumps(data, indent=indent, default=str)
        return "\n".join(" " + line for line in formatted.split("\n"))
    except (TypeError, ValueError):
        return f" {repr(data)}"
