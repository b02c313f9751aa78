# Area: Shared
"""
alias_engine._shared.logging_config — Structured logging setup
==============================================================

Configures dual logging: terminal (colored) + file (JSON).
Provides the rejection logger used by the session engine.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any, Dict, Optional, Union

from .logging_formatters import JSONFormatter, TerminalFormatter

if TYPE_CHECKING:
    from ..errors import AliasEngineError

# Package logger
logger = logging.getLogger("alias_engine")


def setup_logging(
    log_file_path: Optional[str] = "alias_engine.log",
    level: Union[int, str] = logging.INFO,
    stream: Optional[IO[str]] = None,
) -> None:
    """
    Configure logging for the package.

    Parameters
    ----------
    log_file_path : str, optional
        Path to the JSON log file. None disables file logging.
    level : int or str
        Logging level, e.g. logging.DEBUG or "DEBUG". Defaults to INFO.
    stream : file-like, optional
        Terminal stream. Defaults to stderr so stdout stays free for
        notification output.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    pkg_logger = logging.getLogger("alias_engine")
    pkg_logger.setLevel(level)

    # Remove existing handlers
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
        handler.close()

    terminal_handler = logging.StreamHandler(stream or sys.stderr)
    terminal_handler.setLevel(level)
    terminal_handler.setFormatter(TerminalFormatter(
        fmt="%(asctime)s │ %(levelname)s │ %(name)s │ %(message)s",
        datefmt="%H:%M:%S",
    ))
    pkg_logger.addHandler(terminal_handler)

    if log_file_path:
        try:
            log_path = Path(log_file_path)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setLevel(level)
            file_handler.setFormatter(JSONFormatter())
            pkg_logger.addHandler(file_handler)
        except OSError as e:
            pkg_logger.warning(f"Could not create log file: {e}")

    # Prevent propagation to root logger
    pkg_logger.propagate = False


def log_rejection(
    error: "AliasEngineError",
    snapshot: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Log a rejected action.

    One WARNING line carries the code and reason; the full structured
    block, with the session snapshot when given, goes out at DEBUG.
    """
    extra = {
        "session_id": error.session_id,
        "player_id": error.player_id,
        "action": error.action,
        "error_code": error.code,
    }
    logger.warning(
        f"[{error.session_id or '-'}] Rejected {error.action or 'action'} "
        f"from {error.player_id or '-'}: {error.code}: {error.reason}",
        extra=extra,
    )
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(error.format_error_log(snapshot), extra=extra)
