# Area: Runner
"""
alias_engine.runner — Local JSON-lines transport
================================================

Drives a SessionEngine from a text stream, one JSON action per line:

    {"session_id": "chat-1", "player_id": "ada", "action": "join"}
    {"session_id": "chat-1", "player_id": "ada", "action": "form_team",
     "payload": {"partner_id": "bob"}}

Every notification is written to the output stream as one JSON line.
A rejected action produces a single ``rejected`` line for the sender.
Bad input lines are logged and skipped; they never stop the loop.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import IO, Any, Dict, Optional

from ._registry.engine import SessionEngine
from ._shared import setup_logging
from .config import EngineConfig
from .types import ActionResult, Notification

logger = logging.getLogger("alias_engine.runner")


class ConsoleRunner:
    """
    Reads actions from a stream and writes notifications to another.

    Usage:
        runner = ConsoleRunner(config)
        runner.run()   # stdin -> stdout until EOF
    """

    def __init__(
        self,
        config: EngineConfig,
        input_stream: Optional[IO[str]] = None,
        output_stream: Optional[IO[str]] = None,
        engine: Optional[SessionEngine] = None,
        configure_logging: bool = True,
    ):
        self.config = config
        self.input_stream = input_stream or sys.stdin
        self.output_stream = output_stream or sys.stdout

        if configure_logging:
            setup_logging(log_file_path=config.log_file, level=config.log_level)

        self.engine = engine or SessionEngine(config)
        self.engine.notifier = self._write_notification
        self.lines_processed = 0

    def run(self) -> None:
        """Process lines until EOF. Blocks."""
        self._log_startup()
        try:
            for line in self.input_stream:
                self.process_line(line)
        except KeyboardInterrupt:
            logger.info("Interrupted")
        logger.info(f"Console runner stopped after {self.lines_processed} line(s)")

    def process_line(self, line: str) -> Optional[ActionResult]:
        """Handle one input line, then sweep. Returns None for skipped lines."""
        text = line.strip()
        if not text or text.startswith("#"):
            return None
        self.lines_processed += 1

        result = None
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning(f"Skipped line {self.lines_processed} (invalid JSON): {e}")
        else:
            if not isinstance(data, dict):
                logger.warning(f"Skipped line {self.lines_processed} (not a JSON object)")
            else:
                result = self.engine.handle(data)
                if not result.accepted:
                    self._write_rejection(data, result)

        self.engine.sweep()
        return result

    def _log_startup(self) -> None:
        logger.info("=" * 60)
        logger.info("  Alias Engine — Console Runner")
        logger.info(f"  Words:  {len(self.engine.word_list)}")
        logger.info(f"  Length: {self.config.game_length.value} (rounds={self.config.rounds})")
        logger.info(f"  Turn:   max {self.config.max_turn_seconds or '∞'}s")
        logger.info(f"  Idle:   {self.config.idle_teardown_seconds or 'never'}")
        logger.info("=" * 60)

    def _write(self, payload: Dict[str, Any]) -> None:
        self.output_stream.write(json.dumps(payload, default=str) + "\n")
        self.output_stream.flush()

    def _write_notification(self, notification: Notification) -> None:
        self._write(notification.model_dump(mode="json"))

    def _write_rejection(self, data: Dict[str, Any], result: ActionResult) -> None:
        self._write({
            "session_id": data.get("session_id"),
            "event": "rejected",
            "player_id": data.get("player_id"),
            "action": data.get("action"),
            "error": result.error.to_payload() if result.error else None,
        })
