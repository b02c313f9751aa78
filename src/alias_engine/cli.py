# Area: Runner
"""
alias_engine.cli — Command-line interface
=========================================

Runs the console runner over stdin/stdout.

Usage:
    python -m alias_engine --config config.json
    python -m alias_engine --words words.csv --rounds 2
    ALIAS_MAX_TURN_SECONDS=60 python -m alias_engine --config config.json

Settings come from the config file, then ``.env``, then ``ALIAS_*``
environment variables, then command-line flags.
"""

import argparse
import sys
from typing import List, Optional

from .config import EngineConfig, config_from_dict, load_config
from .errors import ConfigurationError
from .runner import ConsoleRunner


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="alias_engine",
        description="Alias party game engine - JSON lines on stdin, notifications on stdout",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m alias_engine --config config.json
  python -m alias_engine --words words.txt --game-length until_exhausted
  echo '{"session_id":"c1","player_id":"u1","action":"join"}' | python -m alias_engine --words words.txt
        """,
    )

    parser.add_argument("--config", type=str, help="Path to JSON config file")
    parser.add_argument("--words", type=str, help="Word list file (.csv or one word per line)")
    parser.add_argument(
        "--game-length",
        choices=["fixed_rounds", "until_exhausted"],
        help="Round-length policy",
    )
    parser.add_argument("--rounds", type=int, help="Rounds per game for fixed_rounds")
    parser.add_argument("--max-turn-seconds", type=float, help="Per-turn time limit")
    parser.add_argument("--idle-seconds", type=float, help="Idle teardown after N seconds (0 = never)")
    parser.add_argument("--seed", type=int, help="Shuffle seed for reproducible games")
    parser.add_argument("--log-file", type=str, help="JSON log file path")
    parser.add_argument("--log-level", type=str, help="DEBUG, INFO, WARNING, ...")

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> EngineConfig:
    """Merge command-line flags over the loaded configuration."""
    config = load_config(args.config)
    overrides = {
        "word_list_path": args.words,
        "game_length": args.game_length,
        "rounds": args.rounds,
        "max_turn_seconds": args.max_turn_seconds,
        "idle_teardown_seconds": args.idle_seconds,
        "shuffle_seed": args.seed,
        "log_file": args.log_file,
        "log_level": args.log_level,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if not overrides:
        return config
    data = config.model_dump(mode="json")
    data.update(overrides)
    return config_from_dict(data)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)

    try:
        config = build_config(args)
        runner = ConsoleRunner(config)
    except ConfigurationError as e:
        print(f"Error: {e.reason}", file=sys.stderr)
        for detail in e.validation_errors:
            print(f"  - {detail}", file=sys.stderr)
        return 1

    runner.run()
    return 0
