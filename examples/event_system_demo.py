#!/usr/bin/env python3
"""
Example demonstrating the round engine's event system.

This script plays a few unattended rounds and prints a line for the events a
front end would care about, next to the text renderer's usual output.
"""

import random

# Check if twentyone is installed properly
try:
    from twentyone.blackjack.actor import Player
    from twentyone.blackjack.round import RoundEngine
    from twentyone.blackjack.rules import Rules
    from twentyone.common.io_interface import DummyIOInterface
    from twentyone.common.shoe import Shoe
    from twentyone.events import EngineEventType, EventEmitter, EventPriority
except ImportError:
    print("ERROR: twentyone package not found or incompletely installed.")
    print("Please ensure twentyone is installed properly with: pip install -e .")
    import sys

    sys.exit(1)


def main():
    emitter = EventEmitter()

    def on_round_started(data):
        print(f"\n--- Round started, wager {data['wager']:.2f} ---")

    def on_card_dealt(data):
        card = "a face-down card" if data["hidden"] else data["card"]
        print(f"Card dealt: {card} to {data['to']}")

    def on_action(data):
        print(f"{data['actor'].title()} chose {data['decision']}: {data['outcome']}")

    def on_hand_result(data):
        print(f"Hand result: {data['result'].value} ({data['reason']}), delta {data['delta']:+.2f}")

    def on_any_event(event_data):
        event_type, data = event_data
        # Only log the events without a handler of their own
        if event_type in ("NATURAL", "DOUBLE_DOWN", "HOLE_CARD_REVEALED"):
            print(f"[Event log] {event_type}: {data}")

    emitter.on(EngineEventType.ROUND_STARTED, on_round_started)
    emitter.on(EngineEventType.CARD_DEALT, on_card_dealt)
    emitter.on(EngineEventType.PLAYER_ACTION, on_action)
    emitter.on(EngineEventType.DEALER_ACTION, on_action)
    emitter.on(EngineEventType.HAND_RESULT, on_hand_result)

    # Subscribe to all events with lower priority
    emitter.on_any(on_any_event, EventPriority.LOW)

    rules = Rules(dealing_delay=0)
    player = Player(DummyIOInterface(stand_on=16), emitter)
    engine = RoundEngine(player, rules, emitter=emitter)
    shoe = Shoe(num_decks=rules.num_decks, rng=random.Random(2024))

    total = 0.0
    for _ in range(5):
        if rules.should_replace(shoe.dealt_count, shoe.undealt_count):
            shoe.reset()
            shoe.shuffle()
        total += engine.play_round(5.0, shoe)

    print(f"\nNet after five rounds: {total:+.2f}")


if __name__ == "__main__":
    main()
