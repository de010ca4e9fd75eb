"""
Pytest configuration shared by every test package.

Cards are written as short rank strings ("A K 9") and dealt from stacked
shoes, so each round under test is fully determined by its card list. Cards
are dealt in list order: dealer, dealer, player, player, then draws.
"""

import itertools

import pytest

from twentyone.blackjack.actor import Player
from twentyone.blackjack.round import RoundEngine
from twentyone.blackjack.rules import Rules
from twentyone.common.card import Card, Rank, Suit
from twentyone.common.io_interface import TestIOInterface
from twentyone.common.shoe import Shoe
from twentyone.events import EventEmitter

RANKS = {
    "2": Rank.TWO,
    "3": Rank.THREE,
    "4": Rank.FOUR,
    "5": Rank.FIVE,
    "6": Rank.SIX,
    "7": Rank.SEVEN,
    "8": Rank.EIGHT,
    "9": Rank.NINE,
    "10": Rank.TEN,
    "J": Rank.JACK,
    "Q": Rank.QUEEN,
    "K": Rank.KING,
    "A": Rank.ACE,
}


def cards_from(ranks):
    suits = itertools.cycle(Suit)
    return [Card(next(suits), RANKS[rank]) for rank in ranks.split()]


@pytest.fixture
def make_cards():
    """Build a card list from a string like "A K 9"."""
    return cards_from


@pytest.fixture
def stacked_shoe():
    """Build a shoe that deals the given ranks in order."""

    def build(ranks):
        return Shoe.stacked(cards_from(ranks))

    return build


@pytest.fixture
def rules():
    return Rules(dealing_delay=0)


@pytest.fixture
def io():
    return TestIOInterface()


@pytest.fixture
def emitter():
    return EventEmitter()


@pytest.fixture
def engine(io, rules, emitter):
    return RoundEngine(Player(io, emitter), rules, emitter=emitter)


@pytest.fixture
def recorded_events(emitter):
    """Every (event_type, data) pair emitted during the test."""
    events = []
    emitter.on_any(events.append)
    return events
