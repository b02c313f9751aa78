# Area: Registry
"""
alias_engine._registry.registry — Concurrent session map
========================================================

Maps session ids to live Sessions.

Reads are lock-free dict lookups. Creation takes one lock out of a fixed
set of stripes chosen by hashing the session id, then re-checks the map,
so two concurrent ``get_or_create`` calls for the same id always return
the same Session. Ids that hash to different stripes never contend.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Iterator, List, Optional

from .._engine.session import Session

logger = logging.getLogger("alias_engine.registry")


class SessionRegistry:
    """
    Thread-safe session_id -> Session map.

    Usage:
        registry = SessionRegistry(stripes=16)
        session = registry.get_or_create("chat-42", lambda sid: Session(sid, ...))
    """

    def __init__(self, stripes: int = 16):
        if stripes < 1:
            raise ValueError("stripes must be >= 1")
        self._sessions: Dict[str, Session] = {}
        self._locks = [threading.Lock() for _ in range(stripes)]

    def _lock_for(self, session_id: str) -> threading.Lock:
        return self._locks[hash(session_id) % len(self._locks)]

    def get(self, session_id: str) -> Optional[Session]:
        """Lock-free lookup."""
        return self._sessions.get(session_id)

    def get_or_create(
        self,
        session_id: str,
        factory: Callable[[str], Session],
        replace_if: Optional[Callable[[Session], bool]] = None,
    ) -> Session:
        """
        Return the live Session for an id, creating it at most once.

        Args:
            session_id: Chat/session identifier
            factory: Builds a new Session for the id; called under the stripe lock
            replace_if: If it returns True for the live session, that session
                is closed and a fresh one takes its place
        """
        session = self._sessions.get(session_id)
        if session is not None and not (replace_if and replace_if(session)):
            return session
        replaced = None
        with self._lock_for(session_id):
            session = self._sessions.get(session_id)
            if session is not None and replace_if and replace_if(session):
                replaced, session = session, None
            if session is None:
                session = factory(session_id)
                self._sessions[session_id] = session
                logger.info(f"[{session_id}] Session created ({len(self._sessions)} live)")
        if replaced is not None:
            replaced.close()
            logger.info(f"[{session_id}] Replaced finished session")
        return session

    def remove(self, session_id: str, expected: Optional[Session] = None) -> Optional[Session]:
        """
        Tear down a session.

        Args:
            session_id: Session to remove
            expected: Only remove if the live session is this instance

        Returns:
            The removed Session, or None if nothing was removed
        """
        with self._lock_for(session_id):
            session = self._sessions.get(session_id)
            if session is None or (expected is not None and session is not expected):
                return None
            del self._sessions[session_id]
        session.close()
        logger.info(f"[{session_id}] Session removed ({len(self._sessions)} live)")
        return session

    def for_each(self, fn: Callable[[Session], None]) -> None:
        """Call fn for every live session, on a snapshot of the map."""
        for session in list(self._sessions.values()):
            fn(session)

    def ids(self) -> List[str]:
        return list(self._sessions.keys())

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def __iter__(self) -> Iterator[Session]:
        return iter(list(self._sessions.values()))
