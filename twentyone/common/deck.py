"""
This module contains the Deck class, which represents a single 52-card deck.

A deck is only a factory for the cards of one standard pack; dealing and
shuffling happen in the shoe the decks are merged into.

>>> deck = Deck()
>>> len(deck)
52
>>> deck.cards[0]
Card(Suit.HEARTS, Rank.TWO)
"""

from typing import Iterator, List

from twentyone.common.card import Card, Rank, Suit


class Deck:
    """
    A class representing a deck of cards.
    """

    # Precompute the default deck
    _default_deck = [Card(suit, rank) for suit in Suit for rank in Rank]

    def __init__(self):
        """Initialize a Deck instance with one card of every suit and rank."""
        self.cards: List[Card] = self.initialize_default_deck()

    @classmethod
    def initialize_default_deck(cls) -> List[Card]:
        """
        Construct a default deck with all possible combinations of suits and ranks.

        :return: A list of Card instances representing the default deck.
        """
        return cls._default_deck.copy()

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __repr__(self) -> str:
        return f"Deck({[repr(card) for card in self.cards]})"

    def __str__(self) -> str:
        return f"Deck of {len(self.cards)} cards"
