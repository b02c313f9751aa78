# Area: Registry
"""
Multi-session layer.

This package contains:
- SessionRegistry, the striped-lock session map
- IdleSweeper for overdue turns and idle teardown
- SessionEngine, the dispatcher the transport calls
"""

from .engine import SessionEngine
from .registry import SessionRegistry
from .sweeper import IdleSweeper

__all__ = ["SessionEngine", "SessionRegistry", "IdleSweeper"]
