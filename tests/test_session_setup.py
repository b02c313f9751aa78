# Area: Engine Tests
"""Tests for lobby and team formation: join, leave, form_team, start."""

import pytest

from alias_engine._engine.enums import SessionPhase
from alias_engine.errors import (
    CapacityViolationError,
    InvalidTransitionError,
    MalformedActionError,
    PlayerNotFoundError,
)
from alias_engine.types import InboundAction, parse_action


class TestJoin:
    """Tests for joining a session."""

    def test_join_registers_player(self, make_session, play):
        session = make_session()
        notes = play(session, "ada", "join")

        assert session.phase is SessionPhase.LOBBY
        assert list(session.players) == ["ada"]
        assert notes[0].event == "player_joined"
        assert notes[0].broadcast["players"] == ["ada"]

    def test_display_name_defaults_to_id(self, make_session, play):
        session = make_session()
        play(session, "ada", "join")
        assert session.players["ada"].display_name == "ada"

    def test_display_name_kept(self, make_session):
        session = make_session()
        session.apply(InboundAction(
            session_id="chat-1", player_id="ada", action="join", display_name="Ada L."
        ))
        assert session.players["ada"].display_name == "Ada L."

    def test_duplicate_join_rejected(self, make_session, play):
        session = make_session()
        play(session, "ada", "join")
        with pytest.raises(CapacityViolationError):
            play(session, "ada", "join")
        assert len(session.players) == 1

    def test_join_beyond_team_limit(self, make_session, play):
        session = make_session(max_teams=1)
        play(session, "ada", "join")
        play(session, "bob", "join")
        with pytest.raises(CapacityViolationError):
            play(session, "cyd", "join")

    def test_join_allowed_during_team_formation(self, make_session, play):
        session = make_session()
        play(session, "ada", "join")
        play(session, "bob", "join")
        play(session, "ada", "form_team", partner_id="bob")
        play(session, "cyd", "join")
        assert session.phase is SessionPhase.TEAM_FORMATION
        assert [p.player_id for p in session.unpaired_players()] == ["cyd"]

    def test_join_rejected_once_game_started(self, started_session, play):
        session = started_session()
        with pytest.raises(InvalidTransitionError):
            play(session, "eve", "join")
        assert "eve" not in session.players


class TestLeave:
    """Tests for leaving before the game starts."""

    def test_leave_lobby(self, make_session, play):
        session = make_session()
        play(session, "ada", "join")
        notes = play(session, "ada", "leave")
        assert session.players == {}
        assert notes[0].event == "player_left"
        assert notes[0].broadcast["dissolved_team_id"] is None

    def test_leave_dissolves_team_and_returns_to_lobby(self, make_session, play):
        session = make_session()
        play(session, "ada", "join")
        play(session, "bob", "join")
        play(session, "ada", "form_team", partner_id="bob")

        notes = play(session, "bob", "leave")

        assert session.teams == []
        assert session.phase is SessionPhase.LOBBY
        assert list(session.players) == ["ada"]
        assert notes[0].broadcast["dissolved_team_id"] == "team-1"
        assert notes[0].broadcast["phase"] == "lobby"

    def test_leave_keeps_other_teams(self, make_session, play):
        session = make_session()
        for player in ("ada", "bob", "cyd", "dee"):
            play(session, player, "join")
        play(session, "ada", "form_team", partner_id="bob")
        play(session, "cyd", "form_team", partner_id="dee")

        play(session, "ada", "leave")

        assert [t.team_id for t in session.teams] == ["team-2"]
        assert session.phase is SessionPhase.TEAM_FORMATION

    def test_leave_unknown_player(self, make_session, play):
        session = make_session()
        with pytest.raises(PlayerNotFoundError):
            play(session, "ghost", "leave")

    def test_leave_rejected_in_game(self, started_session, play):
        session = started_session()
        with pytest.raises(InvalidTransitionError):
            play(session, "ada", "leave")
        assert "ada" in session.players


class TestFormTeam:
    """Tests for pairing players into teams."""

    @pytest.fixture
    def lobby(self, make_session, play):
        session = make_session()
        for player in ("ada", "bob", "cyd"):
            play(session, player, "join")
        return session

    def test_first_team_opens_team_formation(self, lobby, play):
        notes = play(lobby, "ada", "form_team", partner_id="bob")
        team = lobby.teams[0]
        assert lobby.phase is SessionPhase.TEAM_FORMATION
        assert team.team_id == "team-1"
        assert team.describer.player_id == "ada"
        assert notes[0].event == "team_formed"

    def test_self_pairing_rejected(self, lobby, play):
        with pytest.raises(CapacityViolationError):
            play(lobby, "ada", "form_team", partner_id="ada")
        assert lobby.teams == []

    def test_unknown_partner_rejected(self, lobby, play):
        with pytest.raises(PlayerNotFoundError) as exc_info:
            play(lobby, "ada", "form_team", partner_id="ghost")
        assert exc_info.value.missing_player_id == "ghost"

    def test_unknown_actor_rejected(self, lobby, play):
        with pytest.raises(PlayerNotFoundError):
            play(lobby, "ghost", "form_team", partner_id="ada")

    def test_player_cannot_join_two_teams(self, lobby, play):
        play(lobby, "ada", "form_team", partner_id="bob")
        with pytest.raises(CapacityViolationError):
            play(lobby, "cyd", "form_team", partner_id="bob")
        assert len(lobby.teams) == 1

    def test_team_ids_never_reused(self, lobby, play):
        play(lobby, "ada", "form_team", partner_id="bob")
        play(lobby, "bob", "leave")
        play(lobby, "ada", "form_team", partner_id="cyd")
        assert lobby.teams[0].team_id == "team-2"

    def test_missing_partner_is_malformed(self):
        with pytest.raises(MalformedActionError):
            parse_action({"session_id": "chat-1", "player_id": "ada", "action": "form_team"})


class TestStart:
    """Tests for starting a game."""

    def test_start_on_empty_lobby_only_opens_it(self, make_session, play):
        session = make_session()
        notes = play(session, "ada", "start")
        assert notes[0].event == "session_opened"
        assert session.phase is SessionPhase.LOBBY
        assert session.players == {}

    def test_start_creates_first_round(self, started_session):
        session = started_session()
        assert session.phase is SessionPhase.IN_PROGRESS
        assert session.current_round.number == 1
        assert [t.team_id for t in session.current_round.rotation] == ["team-1", "team-2"]
        assert session.pending_turn is None
        assert session.word_bank.remaining == 4

    def test_start_announces_first_team(self, make_session, play, clock):
        session = make_session()
        play(session, "ada", "join")
        play(session, "bob", "join")
        play(session, "bob", "form_team", partner_id="ada")
        notes = play(session, "ada", "start")
        assert notes[0].event == "game_started"
        assert notes[0].broadcast["next"] == {
            "team_id": "team-1", "describer": "bob", "guesser": "ada",
        }

    def test_unpaired_player_blocks_start(self, make_session, play):
        session = make_session()
        for player in ("ada", "bob", "cyd"):
            play(session, player, "join")
        play(session, "ada", "form_team", partner_id="bob")
        with pytest.raises(CapacityViolationError, match="cyd"):
            play(session, "ada", "start")
        assert session.phase is SessionPhase.TEAM_FORMATION

    def test_players_without_teams_cannot_start(self, make_session, play):
        session = make_session()
        play(session, "ada", "join")
        with pytest.raises(CapacityViolationError):
            play(session, "ada", "start")
        assert session.phase is SessionPhase.LOBBY

    def test_min_teams(self, make_session, play):
        session = make_session(min_teams=2)
        play(session, "ada", "join")
        play(session, "bob", "join")
        play(session, "ada", "form_team", partner_id="bob")
        with pytest.raises(CapacityViolationError):
            play(session, "ada", "start")

    def test_outsider_cannot_start(self, make_session, play):
        session = make_session()
        play(session, "ada", "join")
        play(session, "bob", "join")
        play(session, "ada", "form_team", partner_id="bob")
        with pytest.raises(PlayerNotFoundError):
            play(session, "ghost", "start")

    def test_start_twice_rejected(self, started_session, play):
        session = started_session()
        with pytest.raises(InvalidTransitionError):
            play(session, "ada", "start")
