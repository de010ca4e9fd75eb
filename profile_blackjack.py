#!/usr/bin/env python3
"""Profile blackjack simulation to identify performance bottlenecks."""

import cProfile
import pstats
import io
import random

from twentyone.blackjack.blackjack import BlackjackGame
from twentyone.blackjack.rules import Rules
from twentyone.common.io_interface import DummyIOInterface


def profile_games(num_games=10000, double_down=False):
    """Profile simulated rounds, rendering included."""
    rules = Rules(num_decks=4, dealing_delay=0)
    io_interface = DummyIOInterface(stand_on=17, double_down=double_down, wager=1.0)
    game = BlackjackGame(rules, io_interface, rng=random.Random(0))

    profiler = cProfile.Profile()
    profiler.enable()

    for _ in range(num_games):
        game.play_round()

    profiler.disable()

    # Print statistics
    s = io.StringIO()
    ps = pstats.Stats(profiler, stream=s).sort_stats("cumulative")
    ps.print_stats(40)  # Top 40 functions
    print(s.getvalue())

    # Also print by total time
    print("\n\n=== BY TOTAL TIME ===\n")
    s = io.StringIO()
    ps = pstats.Stats(profiler, stream=s).sort_stats("tottime")
    ps.print_stats(25)
    print(s.getvalue())

    print(f"Net earnings over {num_games:,} rounds: {game.stats.net_earnings:+.2f}")


if __name__ == "__main__":
    print("=== PROFILING SIMULATED ROUNDS ===\n")
    profile_games()
    print("\n\n=== PROFILING SIMULATED ROUNDS, ALWAYS DOUBLING ===\n")
    profile_games(double_down=True)
