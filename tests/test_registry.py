# Area: Registry Tests
"""Tests for SessionRegistry and IdleSweeper."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from alias_engine._registry.registry import SessionRegistry
from alias_engine._registry.sweeper import IdleSweeper


class TestSessionRegistry:
    """Tests for lookup, creation and removal."""

    def test_get_unknown_returns_none(self):
        assert SessionRegistry().get("chat-1") is None

    def test_get_or_create_creates_once(self, make_session):
        registry = SessionRegistry()
        calls = []

        def factory(session_id):
            calls.append(session_id)
            return make_session(session_id=session_id)

        first = registry.get_or_create("chat-1", factory)
        second = registry.get_or_create("chat-1", factory)
        assert first is second
        assert calls == ["chat-1"]
        assert registry.get("chat-1") is first
        assert "chat-1" in registry
        assert len(registry) == 1

    def test_concurrent_get_or_create_same_id(self, make_session):
        """Racing creators for one id all observe the same Session."""
        registry = SessionRegistry(stripes=4)
        barrier = threading.Barrier(16)
        calls = []

        def factory(session_id):
            calls.append(session_id)
            time.sleep(0.01)
            return make_session(session_id=session_id)

        def create(_):
            barrier.wait()
            return registry.get_or_create("chat1", factory)

        with ThreadPoolExecutor(max_workers=16) as pool:
            sessions = list(pool.map(create, range(16)))

        assert all(s is sessions[0] for s in sessions)
        assert len(calls) == 1

    def test_distinct_stripes_do_not_block(self, make_session):
        registry = SessionRegistry(stripes=8)
        first = "chat-a"
        other = next(
            f"chat-{i}" for i in range(1000)
            if registry._lock_for(f"chat-{i}") is not registry._lock_for(first)
        )
        created = threading.Event()

        def create_other():
            registry.get_or_create(other, lambda sid: make_session(session_id=sid))
            created.set()

        with registry._lock_for(first):
            worker = threading.Thread(target=create_other)
            worker.start()
            assert created.wait(timeout=2.0)
        worker.join()

    def test_remove_closes_session(self, make_session):
        registry = SessionRegistry()
        session = registry.get_or_create("chat-1", lambda sid: make_session(session_id=sid))

        assert registry.remove("chat-1") is session
        assert session.closed is True
        assert registry.get("chat-1") is None
        assert registry.remove("chat-1") is None

    def test_remove_expected_instance_only(self, make_session):
        registry = SessionRegistry()
        registry.get_or_create("chat-1", lambda sid: make_session(session_id=sid))
        stranger = make_session(session_id="chat-1")

        assert registry.remove("chat-1", expected=stranger) is None
        assert "chat-1" in registry
        assert stranger.closed is False

    def test_replace_if_swaps_matching_session(self, make_session):
        registry = SessionRegistry()
        old = registry.get_or_create("chat-1", lambda sid: make_session(session_id=sid))

        kept = registry.get_or_create(
            "chat-1", lambda sid: make_session(session_id=sid), replace_if=lambda s: False
        )
        assert kept is old

        new = registry.get_or_create(
            "chat-1", lambda sid: make_session(session_id=sid), replace_if=lambda s: s is old
        )
        assert new is not old
        assert old.closed is True
        assert registry.get("chat-1") is new
        assert len(registry) == 1

    def test_for_each_and_ids(self, make_session):
        registry = SessionRegistry()
        for sid in ("a", "b", "c"):
            registry.get_or_create(sid, lambda s: make_session(session_id=s))
        seen = []
        registry.for_each(lambda session: seen.append(session.session_id))
        assert sorted(seen) == ["a", "b", "c"]
        assert sorted(registry.ids()) == ["a", "b", "c"]

    def test_for_each_tolerates_removal(self, make_session):
        registry = SessionRegistry()
        for sid in ("a", "b"):
            registry.get_or_create(sid, lambda s: make_session(session_id=s))
        registry.for_each(lambda session: registry.remove(session.session_id))
        assert len(registry) == 0

    def test_stripes_must_be_positive(self):
        with pytest.raises(ValueError):
            SessionRegistry(stripes=0)


class TestIdleSweeper:
    """Tests for idle teardown and overdue turn expiry."""

    def test_disabled_policy_never_removes(self, make_session, clock):
        registry = SessionRegistry()
        registry.get_or_create("chat-1", lambda sid: make_session(session_id=sid))
        sweeper = IdleSweeper(registry, idle_seconds=0)

        clock.advance(10 ** 6)
        notifications, removed = sweeper.sweep()

        assert removed == []
        assert "chat-1" in registry
        assert sweeper.teardown_enabled is False

    def test_idle_session_removed(self, make_session, play, clock):
        registry = SessionRegistry()
        idle = registry.get_or_create("idle", lambda sid: make_session(session_id=sid))
        busy = registry.get_or_create("busy", lambda sid: make_session(session_id=sid))
        sweeper = IdleSweeper(registry, idle_seconds=60)

        clock.advance(30)
        play(busy, "ada", "join")
        clock.advance(31)

        _, removed = sweeper.sweep()
        assert removed == ["idle"]
        assert idle.closed is True
        assert registry.get("busy") is busy

    def test_activity_exactly_at_threshold_is_kept(self, make_session, clock):
        registry = SessionRegistry()
        registry.get_or_create("chat-1", lambda sid: make_session(session_id=sid))
        clock.advance(60)
        _, removed = IdleSweeper(registry, idle_seconds=60).sweep()
        assert removed == []

    def test_sweep_expires_overdue_turns(self, started_session, play, clock):
        registry = SessionRegistry()
        session = registry.get_or_create("chat-1", lambda sid: started_session(max_turn_seconds=20))
        play(session, "ada", "next_turn")
        clock.advance(25)

        notifications, removed = IdleSweeper(registry, idle_seconds=0).sweep()

        assert [n.event for n in notifications] == ["turn_closed"]
        assert notifications[0].broadcast["outcome"] == "timed_out"
        assert session.pending_turn is None
        assert removed == []
