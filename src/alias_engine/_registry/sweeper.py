# Area: Registry
"""
alias_engine._registry.sweeper — Idle session teardown
======================================================

Periodic maintenance over the registry. Each sweep:
    1. Closes any pending turn that ran past the max turn duration
    2. Removes sessions idle for longer than the teardown threshold

Nothing runs in the background; the host calls ``sweep()`` on its own
schedule (the console runner calls it after every input line).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Tuple

from .registry import SessionRegistry

if TYPE_CHECKING:
    from .._engine.session import Session
    from ..types import Notification

logger = logging.getLogger("alias_engine.sweeper")


class IdleSweeper:
    """
    Expires overdue turns and tears down idle sessions.

    An ``idle_seconds`` of 0 disables teardown.
    """

    def __init__(self, registry: SessionRegistry, idle_seconds: float = 0.0):
        self.registry = registry
        self.idle_seconds = idle_seconds

    @property
    def teardown_enabled(self) -> bool:
        return self.idle_seconds > 0

    def sweep(self) -> Tuple[List["Notification"], List[str]]:
        """
        Run one sweep pass.

        Returns:
            (notifications from expired turns, ids of removed sessions)
        """
        notifications: List["Notification"] = []
        removed: List[str] = []

        def visit(session: "Session") -> None:
            notifications.extend(session.expire_overdue_turn())
            if self.teardown_enabled and session.idle_seconds() > self.idle_seconds:
                if self.registry.remove(session.session_id, expected=session) is not None:
                    logger.info(
                        f"[{session.session_id}] Torn down after "
                        f"{self.idle_seconds:g}s idle"
                    )
                    removed.append(session.session_id)

        self.registry.for_each(visit)
        return notifications, removed
