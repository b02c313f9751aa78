"""
alias_engine.types — Inbound action and outbound notification models
=====================================================================

These models are the whole contract with the messaging transport.

Inbound, the transport delivers one ``InboundAction`` per player action:

    >>> InboundAction(session_id="chat-42", player_id="u1", action="join",
    ...               display_name="Ada")

Outbound, every accepted action yields one or more ``Notification``
objects addressed to the session. Fields in ``describer_only`` (the
current word, its taboo words) must reach the current describer and
nobody else; ``for_recipient()`` applies that rule for a transport that
delivers per player.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError, model_validator

from ._engine.enums import ActionType
from .errors import AliasEngineError, MalformedActionError


class InboundAction(BaseModel):
    """One player action tagged with its session.

    Fields
    ------
    session_id : str
        Chat/session identifier, opaque to the engine.
    player_id : str
        Stable player identifier, authenticated by the transport.
    action : ActionType
        join, leave, form_team, start, next_turn, guessed, skip, end, status.
    display_name : str, optional
        Name shown to other players; defaults to the player id on join.
    payload : dict
        Action arguments. ``form_team`` requires ``partner_id``.
    """

    session_id: str = Field(min_length=1)
    player_id: str = Field(min_length=1)
    action: ActionType
    display_name: Optional[str] = None
    payload: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_payload(self) -> "InboundAction":
        if self.action is ActionType.FORM_TEAM:
            partner = self.payload.get("partner_id")
            if not isinstance(partner, str) or not partner:
                raise ValueError("form_team requires payload.partner_id")
        return self

    @property
    def partner_id(self) -> Optional[str]:
        return self.payload.get("partner_id")


def parse_action(data: Any) -> InboundAction:
    """
    Validate raw transport data into an InboundAction.

    Raises:
        MalformedActionError: If the data does not describe a valid action
    """
    if isinstance(data, InboundAction):
        return data
    try:
        return InboundAction.model_validate(data)
    except ValidationError as exc:
        errors = [
            f"{'.'.join(str(part) for part in err['loc']) or 'action'}: {err['msg']}"
            for err in exc.errors()
        ]
        session_id = data.get("session_id") if isinstance(data, dict) else None
        player_id = data.get("player_id") if isinstance(data, dict) else None
        raise MalformedActionError(
            "Malformed action",
            validation_errors=errors,
            session_id=session_id if isinstance(session_id, str) else None,
            player_id=player_id if isinstance(player_id, str) else None,
        ) from exc


class Notification(BaseModel):
    """State change addressed back to a session.

    Fields
    ------
    session_id : str
        Session the notification belongs to.
    event : str
        e.g. "player_joined", "turn_started", "round_complete", "game_finished".
    broadcast : dict
        Fields every player in the session may see.
    describer_only : dict
        Fields only ``describer_id`` may see. Empty for most events.
    describer_id : str, optional
        Recipient of ``describer_only``.
    """

    session_id: str
    event: str
    broadcast: Dict[str, Any] = Field(default_factory=dict)
    describer_only: Dict[str, Any] = Field(default_factory=dict)
    describer_id: Optional[str] = None

    @property
    def has_secret(self) -> bool:
        return bool(self.describer_only)

    def for_recipient(self, player_id: str) -> Dict[str, Any]:
        """Fields visible to one player."""
        fields = dict(self.broadcast)
        if self.describer_only and player_id == self.describer_id:
            fields.update(self.describer_only)
        return fields

    def public_view(self) -> Dict[str, Any]:
        """Notification with every describer-only field removed."""
        return {
            "session_id": self.session_id,
            "event": self.event,
            "fields": dict(self.broadcast),
        }


@dataclass
class ActionResult:
    """
    Outcome of one inbound action.

    Attributes:
        accepted: True if the action changed (or, for status, read) state
        notifications: Payloads for the transport, in emission order
        error: The rejection, when accepted is False
    """

    accepted: bool
    notifications: List[Notification] = field(default_factory=list)
    error: Optional[AliasEngineError] = None

    @classmethod
    def ok(cls, notifications: List[Notification]) -> "ActionResult":
        return cls(accepted=True, notifications=list(notifications))

    @classmethod
    def rejected(cls, error: AliasEngineError) -> "ActionResult":
        return cls(accepted=False, error=error)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "accepted": self.accepted,
            "notifications": [n.model_dump(mode="json") for n in self.notifications],
            "error": self.error.to_payload() if self.error else None,
        }
