"""
BlackjackHand and hand valuation.

A hand is valued with a single left-to-right pass: each card adds its point
value to a running total, and an Ace adds 11 unless the running total before
it is already above 10, in which case it adds 1. Values are recomputed on
every call; nothing is cached, because the hand can grow between calls.
"""

from typing import Iterable

from twentyone.blackjack.constants import BLACKJACK, get_blackjack_value
from twentyone.blackjack.outcome import BUST_THRESHOLD, Outcome, outcome_for
from twentyone.common.card import Card, Rank
from twentyone.common.hand import Hand


def hand_value(cards: Iterable[Card]) -> int:
    """Fold the cards left to right into a blackjack total."""
    total = 0
    for card in cards:
        total += get_blackjack_value(card.rank, total)
    return total


class BlackjackHand(Hand):
    """A hand in the game of Blackjack."""

    def value(self) -> int:
        """Calculate the value of the hand with ace handling."""
        return hand_value(self._cards)

    def outcome(self, bust_threshold: int = BUST_THRESHOLD) -> Outcome:
        """The hand's outcome as it stands right now."""
        return outcome_for(self.value(), bust_threshold)

    def value_with(self, card: Card) -> int:
        """The value the hand would have after `card` is added."""
        total = self.value()
        return total + get_blackjack_value(card.rank, total)

    @property
    def is_soft(self) -> bool:
        """Determine if the hand counts an ace as 11."""
        total = 0
        soft = False
        for card in self._cards:
            card_value = get_blackjack_value(card.rank, total)
            if card.rank == Rank.ACE and card_value > 1:
                soft = True
            total += card_value
        return soft and total <= BUST_THRESHOLD

    @property
    def is_blackjack(self) -> bool:
        """Determine if the hand is a natural: two cards worth exactly 21."""
        return len(self._cards) == 2 and self.value() == BLACKJACK


def get_outcome(hand: BlackjackHand, bust_threshold: int = BUST_THRESHOLD) -> Outcome:
    """Outcome of `hand`; a bust above `bust_threshold`, otherwise its total."""
    return outcome_for(hand.value(), bust_threshold)
