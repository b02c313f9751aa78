# Area: Registry
"""
alias_engine._registry.engine — Action dispatcher
=================================================

``SessionEngine`` is the single entry point for the messaging transport:

    engine = SessionEngine(config, notifier=transport.send)
    result = engine.handle({"session_id": "chat-42", "player_id": "u1",
                            "action": "join", "display_name": "Ada"})

For each inbound action it:
    1. Validates the raw payload into an InboundAction
    2. Resolves the session (join/start create it, or replace a finished
       one; everything else must find it)
    3. Applies the action under that session's lock
    4. Tears the session down on an accepted ``end``
    5. Hands notifications to the notifier after the lock is released

Rejections come back as ``ActionResult(accepted=False)``; they never
raise out of ``handle()`` and never affect another session.

Nothing runs in the background. Overdue turns only close as ``timed_out``
without player input when the host calls ``sweep()``; the console runner
does so after every line.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Callable, List, Optional

from .._engine.enums import CREATING_ACTIONS, ActionType
from .._engine.session import Session
from .._engine.word_bank import WordList
from .._shared.logging_config import log_rejection
from ..config import EngineConfig
from ..errors import AliasEngineError, InvalidTransitionError, SessionNotFoundError
from ..types import ActionResult, InboundAction, Notification, parse_action
from .registry import SessionRegistry
from .sweeper import IdleSweeper

logger = logging.getLogger("alias_engine.engine")

Notifier = Callable[[Notification], None]


class SessionEngine:
    """
    Routes inbound actions to their sessions.

    Attributes:
        config: Engine configuration shared by every session
        word_list: Word pool every new session shuffles
        registry: Live sessions
        sweeper: Idle/overdue maintenance over the registry
    """

    def __init__(
        self,
        config: EngineConfig,
        notifier: Optional[Notifier] = None,
        word_list: Optional[WordList] = None,
        rng_factory: Optional[Callable[[str], random.Random]] = None,
    ):
        self.config = config
        self.word_list = word_list if word_list is not None else config.build_word_list()
        self.notifier = notifier
        self.registry = SessionRegistry(stripes=config.registry_stripes)
        self.sweeper = IdleSweeper(self.registry, config.idle_teardown_seconds)
        self._rng_factory = rng_factory
        logger.info(
            f"Engine ready: {len(self.word_list)} words, "
            f"game_length={config.game_length.value}, rounds={config.rounds}"
        )

    # ── Sessions ───────────────────────────────────────────────

    def _new_session(self, session_id: str) -> Session:
        rng = self._rng_factory(session_id) if self._rng_factory else None
        return Session(session_id, self.config, self.word_list, rng=rng)

    def _resolve(self, action: InboundAction) -> Session:
        if action.action in CREATING_ACTIONS:
            return self.registry.get_or_create(
                action.session_id, self._new_session, replace_if=lambda s: s.finished
            )
        session = self.registry.get(action.session_id)
        if session is None:
            raise SessionNotFoundError(
                action.session_id, player_id=action.player_id, action=action.action.value
            )
        return session

    def get_session(self, session_id: str) -> Optional[Session]:
        return self.registry.get(session_id)

    # ── Dispatch ───────────────────────────────────────────────

    def handle(self, raw: Any) -> ActionResult:
        """
        Apply one inbound action.

        Args:
            raw: An InboundAction or a mapping with the same fields

        Returns:
            ActionResult with notifications, or the rejection
        """
        session: Optional[Session] = None
        try:
            action = parse_action(raw)
            session = self._resolve(action)
            notifications = session.apply(action)
        except AliasEngineError as exc:
            self._log_rejection(exc, session)
            return ActionResult.rejected(exc)
        except Exception as exc:
            # A bug in one session must not take the others down
            logger.error(f"Unexpected error handling {raw!r}: {exc}", exc_info=True)
            error = InvalidTransitionError(f"Internal error: {exc.__class__.__name__}")
            if session is not None:
                error.with_context(session.session_id)
            return ActionResult.rejected(error)

        if action.action is ActionType.END:
            self.registry.remove(action.session_id, expected=session)

        self._emit(notifications)
        return ActionResult.ok(notifications)

    def sweep(self) -> List[Notification]:
        """Expire overdue turns and tear down idle sessions."""
        notifications, removed = self.sweeper.sweep()
        if removed:
            logger.info(f"Sweep removed {len(removed)} idle session(s)")
        self._emit(notifications)
        return notifications

    def _emit(self, notifications: List[Notification]) -> None:
        if self.notifier is None:
            return
        for notification in notifications:
            try:
                self.notifier(notification)
            except Exception as exc:
                logger.error(
                    f"[{notification.session_id}] Notifier failed for "
                    f"{notification.event}: {exc}",
                    exc_info=True,
                )

    def _log_rejection(self, error: AliasEngineError, session: Optional[Session]) -> None:
        snapshot = None
        if session is not None and logger.isEnabledFor(logging.DEBUG) and not session.closed:
            snapshot = session.snapshot(reveal_secret=True)
        log_rejection(error, snapshot)
