"""Test the shoe's counters, reset and shuffle."""

import random

import pytest

from twentyone.common.card import Card, Rank, Suit
from twentyone.common.shoe import Shoe, ShoeExhaustedError


class TestShoe:
    def test_default_shoe_has_four_decks(self):
        shoe = Shoe()
        assert shoe.total_cards == 208
        assert shoe.dealt_count == 0
        assert shoe.undealt_count == 208

    def test_invalid_deck_count(self):
        with pytest.raises(ValueError):
            Shoe(num_decks=0)

    def test_counters_follow_dealing(self):
        shoe = Shoe(num_decks=1)
        for _ in range(10):
            shoe.deal_one()
        assert shoe.dealt_count == 10
        assert shoe.undealt_count == 42
        assert shoe.get_penetration_percentage() == pytest.approx(10 / 52)

    def test_exhausted_shoe_raises(self):
        shoe = Shoe.stacked([Card(Suit.HEARTS, Rank.TWO)])
        shoe.deal_one()
        with pytest.raises(ShoeExhaustedError):
            shoe.deal_one()

    def test_stacked_shoe_deals_in_order(self, make_cards):
        cards = make_cards("A K 9")
        shoe = Shoe.stacked(cards)
        assert [shoe.deal_one() for _ in range(3)] == cards

    def test_reset_returns_every_card(self):
        shoe = Shoe(num_decks=2)
        for _ in range(60):
            shoe.deal_one()
        shoe.reset()
        assert shoe.dealt_count == 0
        assert shoe.undealt_count == 104

    def test_shuffle_only_touches_undealt_cards(self):
        shoe = Shoe(num_decks=1, rng=random.Random(3))
        dealt = [shoe.deal_one() for _ in range(5)]
        shoe.shuffle()
        assert shoe.cards[:5] == dealt
        assert shoe.dealt_count == 5

    def test_same_seed_same_order(self):
        first = Shoe(num_decks=1, rng=random.Random(11))
        second = Shoe(num_decks=1, rng=random.Random(11))
        assert first.cards == second.cards

    def test_fresh_shoe_holds_every_card_of_every_deck(self):
        shoe = Shoe(num_decks=4)
        counts = {}
        for card in shoe.cards:
            counts[card] = counts.get(card, 0) + 1
        assert len(counts) == 52
        assert set(counts.values()) == {4}
