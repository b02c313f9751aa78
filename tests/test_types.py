# Area: Types Tests
"""Tests for inbound actions and notification visibility."""

import pytest

from alias_engine._engine.enums import ActionType
from alias_engine.errors import MalformedActionError
from alias_engine.types import ActionResult, InboundAction, Notification, parse_action


class TestParseAction:
    """Tests for transport input validation."""

    def test_valid_action(self):
        action = parse_action({"session_id": "chat-1", "player_id": "ada", "action": "join",
                               "display_name": "Ada"})
        assert action.action is ActionType.JOIN
        assert action.display_name == "Ada"
        assert action.payload == {}

    def test_passes_through_models(self):
        action = InboundAction(session_id="chat-1", player_id="ada", action="status")
        assert parse_action(action) is action

    def test_form_team_partner(self):
        action = parse_action({"session_id": "c", "player_id": "ada", "action": "form_team",
                               "payload": {"partner_id": "bob"}})
        assert action.partner_id == "bob"

    def test_unknown_action_keeps_context(self):
        with pytest.raises(MalformedActionError) as exc_info:
            parse_action({"session_id": "chat-1", "player_id": "ada", "action": "dance"})
        error = exc_info.value
        assert error.session_id == "chat-1"
        assert error.player_id == "ada"
        assert any(e.startswith("action") for e in error.validation_errors)

    @pytest.mark.parametrize("partner", [None, "", 42])
    def test_form_team_bad_partner(self, partner):
        payload = {} if partner is None else {"partner_id": partner}
        with pytest.raises(MalformedActionError):
            parse_action({"session_id": "c", "player_id": "ada", "action": "form_team",
                          "payload": payload})


class TestNotification:
    """Describer-only fields reach the describer and nobody else."""

    @pytest.fixture
    def note(self):
        return Notification(
            session_id="chat-1",
            event="turn_started",
            broadcast={"describer": "ada", "guesser": "bob"},
            describer_only={"word": "apple"},
            describer_id="ada",
        )

    def test_describer_sees_word(self, note):
        assert note.for_recipient("ada") == {"describer": "ada", "guesser": "bob", "word": "apple"}

    def test_others_do_not(self, note):
        assert note.for_recipient("bob") == {"describer": "ada", "guesser": "bob"}
        assert note.for_recipient("cyd") == {"describer": "ada", "guesser": "bob"}

    def test_public_view(self, note):
        assert note.public_view() == {
            "session_id": "chat-1",
            "event": "turn_started",
            "fields": {"describer": "ada", "guesser": "bob"},
        }

    def test_has_secret(self, note):
        assert note.has_secret is True
        assert Notification(session_id="c", event="status").has_secret is False

    def test_for_recipient_does_not_mutate(self, note):
        note.for_recipient("ada")
        assert "word" not in note.broadcast


def test_action_result_constructors():
    ok = ActionResult.ok([Notification(session_id="c", event="status")])
    assert ok.accepted is True
    assert ok.error is None
    rejected = ActionResult.rejected(MalformedActionError("bad"))
    assert rejected.accepted is False
    assert rejected.notifications == []
