# Area: Engine
"""
alias_engine._engine.timer — Monotonic turn timer
=================================================

Measures how long a turn runs. Elapsed time is always computed as
(now - start) at the moment the turn closes; nothing ticks in the
background. The clock source is ``time.monotonic()`` so wall-clock
adjustments never skew scoring.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

logger = logging.getLogger("alias_engine.timer")


def now() -> float:
    """Current monotonic time in seconds."""
    return time.monotonic()


def to_ms(seconds: float) -> int:
    return int(round(seconds * 1000))


class TurnTimer:
    """
    Start/stop accumulator with millisecond resolution.

    A stopped timer keeps its last measurement until reset.
    """

    def __init__(self) -> None:
        self._started_at: Optional[float] = None
        self._elapsed_ms: int = 0

    @property
    def running(self) -> bool:
        return self._started_at is not None

    def start(self) -> None:
        if self._started_at is not None:
            raise RuntimeError("Timer already running")
        self._started_at = now()

    def elapsed_ms(self) -> int:
        """Elapsed time so far without stopping the timer."""
        if self._started_at is None:
            return self._elapsed_ms
        return self._elapsed_ms + max(0, to_ms(now() - self._started_at))

    def stop(self, cap_ms: Optional[int] = None) -> int:
        """
        Stop the timer and return the accumulated duration in ms.

        Args:
            cap_ms: Optional upper bound for the returned duration
        """
        if self._started_at is None:
            raise RuntimeError("Timer is not running")
        elapsed = self.elapsed_ms()
        self._started_at = None
        if cap_ms is not None and elapsed > cap_ms:
            logger.debug("Timer capped: %dms -> %dms", elapsed, cap_ms)
            elapsed = cap_ms
        self._elapsed_ms = elapsed
        return elapsed

    def reset(self) -> None:
        """Discard any running or stored measurement."""
        self._started_at = None
        self._elapsed_ms = 0
