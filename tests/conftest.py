# Area: Tests
"""Shared fixtures: a controllable monotonic clock and session builders."""

import random
from unittest.mock import patch

import pytest

from alias_engine._engine.session import Session
from alias_engine.config import EngineConfig
from alias_engine.types import InboundAction


MOCK_TIME = "alias_engine._engine.timer.time"


class FakeClock:
    """Drives the patched ``time.monotonic`` used by every turn timer."""

    def __init__(self, mock_time, start: float = 1000.0):
        self._mock_time = mock_time
        self.now = start
        self._mock_time.monotonic.return_value = start

    def advance(self, seconds: float) -> None:
        self.now += seconds
        self._mock_time.monotonic.return_value = self.now


@pytest.fixture
def clock():
    with patch(MOCK_TIME) as mock_time:
        yield FakeClock(mock_time)


def make_action(session_id, player_id, action, display_name=None, **payload):
    return InboundAction(
        session_id=session_id,
        player_id=player_id,
        action=action,
        display_name=display_name,
        payload=payload,
    )


@pytest.fixture
def make_session():
    """Build a Session with a seeded rng and a small word list."""

    def _make(words=("apple", "river", "castle", "piano"), session_id="chat-1", **overrides):
        config = EngineConfig(words=list(words), **overrides)
        return Session(session_id, config, config.build_word_list(), rng=random.Random(0))

    return _make


@pytest.fixture
def play():
    """Apply one action to a session and return its notifications."""

    def _play(session, player_id, action, **payload):
        return session.apply(make_action(session.session_id, player_id, action, **payload))

    return _play


@pytest.fixture
def started_session(clock, make_session, play):
    """Two teams (ada+bob, cyd+dee), game started, no turn pending."""

    def _start(**overrides):
        session = make_session(**overrides)
        for player in ("ada", "bob", "cyd", "dee"):
            play(session, player, "join")
        play(session, "ada", "form_team", partner_id="bob")
        play(session, "cyd", "form_team", partner_id="dee")
        play(session, "ada", "start")
        return session

    return _start
