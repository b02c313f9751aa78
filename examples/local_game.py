"""
local_game.py — Play one scripted game WITHOUT a chat transport
===============================================================

Feeds a fixed sequence of actions straight into a SessionEngine and
prints what each player would see. No chat server needed.

Run with:  python examples/local_game.py
"""

import os
import sys

# Add src to path so we can import alias_engine from a checkout
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

from alias_engine import EngineConfig, SessionEngine, setup_logging


CHAT = "demo-chat"
PLAYERS = ["ada", "bob", "cyd", "dee"]


def show(notification):
    """Print a notification the way a chat transport would deliver it."""
    print(f"  ── {notification.event}")
    print(f"     everyone: {notification.broadcast}")
    if notification.has_secret:
        print(f"     only {notification.describer_id}: {notification.describer_only}")


def act(engine, player, action, **payload):
    result = engine.handle({
        "session_id": CHAT,
        "player_id": player,
        "action": action,
        "payload": payload,
    })
    status = "ok" if result.accepted else f"REJECTED ({result.error.code}: {result.error.reason})"
    print(f"\n>>> {player}: {action} {payload or ''} -> {status}")
    return result


def main():
    setup_logging(log_file_path=None, level="WARNING")
    config = EngineConfig(
        words=["apple", "river", "castle", "piano", "rocket", "garden"],
        game_length="fixed_rounds",
        rounds=2,
        shuffle_seed=7,
    )
    engine = SessionEngine(config, notifier=show)

    for player in PLAYERS:
        act(engine, player, "join")
    act(engine, "ada", "form_team", partner_id="bob")
    act(engine, "cyd", "form_team", partner_id="dee")
    act(engine, "ada", "start")

    # Two rounds: every team describes once per round, roles swap each turn
    for round_number in (1, 2):
        for describer, guesser in (("ada", "bob"), ("cyd", "dee")):
            if round_number == 2:
                describer, guesser = guesser, describer
            act(engine, describer, "next_turn")
            if guesser in ("bob", "ada"):
                act(engine, guesser, "guessed")
            else:
                act(engine, describer, "skip")

    print("\nGame over.")


if __name__ == "__main__":
    main()
