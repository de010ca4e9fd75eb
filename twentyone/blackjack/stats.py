"""
This module contains the SimulationStats class which is responsible for
tracking and updating the statistics of played rounds.
"""

from twentyone.blackjack.outcome import RoundResult
from twentyone.blackjack.round import Round
from twentyone.common.util import round_decimal


class SimulationStats:
    """
    A class that holds the statistics of the simulation.
    """

    def __init__(self):
        """
        Initializes the SimulationStats with default values.
        """
        self.games_played = 0
        self.player_wins = 0
        self.dealer_wins = 0
        self.draws = 0
        self.naturals = 0
        self.double_downs = 0
        self.total_wagered = 0.0
        self.net_earnings = 0.0

    def update(self, rnd: Round):
        """Updates the statistics with a finished round."""
        self.games_played += 1
        if rnd.result is RoundResult.WIN:
            self.player_wins += 1
        elif rnd.result is RoundResult.LOSS:
            self.dealer_wins += 1
        else:
            self.draws += 1
        if rnd.natural:
            self.naturals += 1
        if rnd.doubled:
            self.double_downs += 1
        self.total_wagered = round_decimal(
            self.total_wagered + rnd.wager * rnd.multiplier, 2
        )
        self.net_earnings = round_decimal(self.net_earnings + rnd.delta, 2)

    @property
    def house_edge(self) -> float:
        """Share of the total wagered that went to the house, in percent."""
        if self.total_wagered <= 0:
            return 0.0
        return -self.net_earnings / self.total_wagered * 100

    def report(self):
        """
        Returns a dictionary containing the current statistics.
        """
        return {
            "games_played": self.games_played,
            "player_wins": self.player_wins,
            "dealer_wins": self.dealer_wins,
            "draws": self.draws,
            "naturals": self.naturals,
            "double_downs": self.double_downs,
            "total_wagered": self.total_wagered,
            "net_earnings": self.net_earnings,
        }
