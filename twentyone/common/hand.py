"""
This module contains classes to represent a hand of cards in a card game.

It includes an abstract base class `AbstractHand`, and a concrete implementation `Hand`.
A hand only ever grows during a round: cards are appended in the order they are
dealt and never removed.

Classes:

AbstractHand: An abstract base class for a hand of cards.
Hand: A concrete implementation of a hand of cards.
"""
from abc import ABC
from typing import Iterator, List, Optional, Sequence

from twentyone.common.card import Card


class AbstractHand(ABC):
    """
    An abstract base class for a hand of cards.

    Subclasses should override the __repr__ and __str__ methods to provide a string representation of the hand.
    """

    def __init__(self, cards: Optional[Sequence[Card]] = None):
        self._cards: List[Card] = list(cards) if cards else []

    @property
    def cards(self) -> tuple:
        """Returns the cards in the hand, in the order they were dealt."""
        return tuple(self._cards)

    def add_card(self, card: Card) -> None:
        """
        Appends a card to the hand.

        Args:
            card: The card to add.
        """
        if not isinstance(card, Card):
            raise TypeError(f"Expected a Card, got {card!r}")
        self._cards.append(card)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)


class Hand(AbstractHand):
    """
    A concrete implementation of a hand of cards.

    This class provides a string representation of a hand of cards for both debugging and display purposes.
    """

    def __repr__(self) -> str:
        """
        Returns a string representation of the hand for debugging.

        Returns:
            A string in the form "Hand([Card(...), ...])".
        """
        return f"{type(self).__name__}({self._cards!r})"

    def __str__(self) -> str:
        """
        Returns a string representation of the hand for display.

        Returns:
            A string in the form "A♠ 10♥ ...".
        """
        return " ".join(str(card) for card in self._cards)
