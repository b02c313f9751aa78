# Area: Shared
"""
Shared utilities used by the engine and the registry.

This package contains:
- Logging configuration
- Terminal and JSON log formatters
"""

from .logging_config import setup_logging, log_rejection
from .logging_formatters import JSONFormatter, TerminalFormatter

__all__ = [
    "setup_logging",
    "log_rejection",
    "JSONFormatter",
    "TerminalFormatter",
]
