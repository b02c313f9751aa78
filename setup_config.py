#!/usr/bin/env python3
# Area: Runner
"""
Alias Engine - Configuration Setup Script
=========================================

Interactive script to generate config.json and .env files.

Usage:
    python setup_config.py
"""

import json
from pathlib import Path


def prompt(question: str, default: str = "", required: bool = True) -> str:
    """Prompt user for input with optional default value."""
    if default:
        display = f"{question} [{default}]: "
    else:
        display = f"{question}: "

    while True:
        value = input(display).strip()
        if not value and default:
            return default
        if value:
            return value
        if not required:
            return ""
        print("  This field is required. Please enter a value.")


def prompt_number(question: str, default: str, cast=float):
    """Prompt until the answer parses as a number."""
    while True:
        raw = prompt(question, default=default, required=False)
        if not raw:
            return None
        try:
            return cast(raw)
        except ValueError:
            print(f"  '{raw}' is not a number. Please try again.")


def print_header():
    """Print welcome header."""
    print()
    print("=" * 60)
    print("  Alias Engine - Configuration Setup")
    print("=" * 60)
    print()
    print("This script will help you create config.json and .env files.")
    print("Press Enter to accept default values shown in [brackets].")
    print()


def print_section(title: str):
    """Print section header."""
    print()
    print(f"--- {title} ---")
    print()


def get_config_values() -> dict:
    """Interactively collect configuration values."""
    config = {}

    print_section("Words")
    print("A word list is a .csv file (columns: text, complexity, taboo words...)")
    print("or a plain text file with one word per line.")
    print()
    config["word_list_path"] = prompt("Path to word list", default="words.txt")

    print_section("Game Length")
    print("  fixed_rounds     - play a set number of rounds")
    print("  until_exhausted  - play until the word list runs out")
    print()
    while True:
        length = prompt("Game length", default="fixed_rounds")
        if length in ("fixed_rounds", "until_exhausted"):
            break
        print("  Please enter fixed_rounds or until_exhausted.")
    config["game_length"] = length
    if length == "fixed_rounds":
        config["rounds"] = prompt_number("Rounds per game", default="3", cast=int)

    print_section("Timing")
    max_turn = prompt_number("Max seconds per turn (0 = no limit)", default="60")
    if max_turn:
        config["max_turn_seconds"] = max_turn
    cooldown = prompt_number("Seconds before a describer may skip", default="0")
    if cooldown:
        config["skip_cooldown_seconds"] = cooldown
    idle = prompt_number("Tear down idle games after N seconds (0 = never)", default="1800")
    config["idle_teardown_seconds"] = idle or 0

    print_section("Optional Settings")
    taboo = prompt("Show taboo words to the describer? (y/n)", default="n")
    config["use_taboo_words"] = taboo.lower() in ("y", "yes", "true", "1")
    config["log_file"] = prompt("Log file", default="alias_engine.log", required=False)

    return {key: value for key, value in config.items() if value is not None}


def write_config_json(config: dict, path: Path) -> None:
    """Write config.json file."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=4)
    print(f"  Created: {path}")


def write_env_file(config: dict, path: Path) -> None:
    """Write .env file."""
    env_mapping = {
        "word_list_path": "ALIAS_WORD_LIST_PATH",
        "max_turn_seconds": "ALIAS_MAX_TURN_SECONDS",
        "idle_teardown_seconds": "ALIAS_IDLE_TEARDOWN_SECONDS",
        "log_file": "ALIAS_LOG_FILE",
    }

    lines = []
    for config_key, env_key in env_mapping.items():
        if config_key in config and config[config_key]:
            lines.append(f"{env_key}={config[config_key]}")

    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")
    print(f"  Created: {path}")


def main():
    """Main entry point."""
    print_header()

    try:
        config = get_config_values()
    except KeyboardInterrupt:
        print("\n\nSetup cancelled.")
        return 1

    print_section("Generating Files")

    base_path = Path.cwd()
    write_config_json(config, base_path / "config.json")
    write_env_file(config, base_path / ".env")

    print()
    print("=" * 60)
    print("  Setup Complete!")
    print("=" * 60)
    print()
    print("Next steps:")
    print()
    print("  1. Make sure your word list is at the path you specified")
    print()
    print("  2. Play a local game over stdin/stdout:")
    print("     python -m alias_engine --config config.json")
    print()
    print("  3. Or try the scripted demo:")
    print("     python examples/local_game.py")
    print()
    return 0


if __name__ == "__main__":
    exit(main())
