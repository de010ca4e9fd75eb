"""
The shoe: several standard decks merged into one dealing source.

The shoe keeps every card it was built with and a cursor to the next card, so
it can report how many cards have been dealt and how many remain. It never
decides on its own to reshuffle; the game loop asks the house rules whether
the shoe should be replaced and calls `reset()` and `shuffle()` itself.
"""

import logging
import random
from typing import List, Optional, Sequence

from twentyone.common.card import Card
from twentyone.common.deck import Deck

logger = logging.getLogger(__name__)


class ShoeExhaustedError(RuntimeError):
    """Raised when a card is requested from a shoe with no undealt cards."""

    pass


class Shoe:
    def __init__(
        self,
        num_decks: int = 4,
        rng: Optional[random.Random] = None,
        cards: Optional[Sequence[Card]] = None,
    ):
        """
        Initialize a Shoe instance.

        :param num_decks: Number of standard decks merged into the shoe (default is 4)
        :param rng: Optional random.Random used for shuffling, for reproducible shoes
        :param cards: Optional preset card order, dealt first to last. A preset
                      shoe is not shuffled on construction and `reset()`
                      restores the preset order.
        """
        if num_decks < 1:
            raise ValueError("Number of decks must be at least 1")

        self.num_decks = num_decks
        self.rng = rng or random.Random()
        self._preset: Optional[List[Card]] = list(cards) if cards is not None else None
        self.cards: List[Card] = []
        self.next_card_index = 0

        self.initialize_shoe()

    @classmethod
    def stacked(cls, cards: Sequence[Card]) -> "Shoe":
        """Build a shoe that deals exactly `cards`, in order."""
        return cls(num_decks=1, cards=cards)

    def initialize_shoe(self):
        """Fill the shoe with fresh cards and shuffle them, unless a preset order was given."""
        self.reset()
        if self._preset is None:
            self.shuffle()

    def reset(self):
        """Return every card to the shoe, unshuffled."""
        if self._preset is not None:
            self.cards = list(self._preset)
        else:
            self.cards = []
            for _ in range(self.num_decks):
                self.cards.extend(Deck())
        self.next_card_index = 0

    def shuffle(self):
        """Shuffle the undealt cards in place."""
        undealt = self.cards[self.next_card_index :]
        self.rng.shuffle(undealt)
        self.cards[self.next_card_index :] = undealt
        logger.debug("Shuffled %d undealt cards", len(undealt))
        return self

    def deal_one(self) -> Card:
        """
        Deal the next card.

        :raises ShoeExhaustedError: If every card has already been dealt.
        """
        if self.next_card_index >= len(self.cards):
            raise ShoeExhaustedError(
                f"No cards remaining in the shoe ({self.dealt_count} dealt)"
            )
        card = self.cards[self.next_card_index]
        self.next_card_index += 1
        return card

    @property
    def dealt_count(self) -> int:
        """Number of cards dealt since the last reset."""
        return self.next_card_index

    @property
    def undealt_count(self) -> int:
        """Number of cards still waiting to be dealt."""
        return len(self.cards) - self.next_card_index

    @property
    def total_cards(self) -> int:
        return len(self.cards)

    def get_penetration_percentage(self) -> float:
        """Return how far through the shoe dealing has progressed, from 0.0 to 1.0."""
        if not self.cards:
            return 0.0
        return self.next_card_index / len(self.cards)

    def __str__(self) -> str:
        return f"Shoe with {self.undealt_count} cards remaining"

    def __repr__(self) -> str:
        return f"Shoe(num_decks={self.num_decks}, dealt={self.dealt_count}, undealt={self.undealt_count})"
