from twentyone.blackjack.hand import BlackjackHand, get_outcome, hand_value
from twentyone.blackjack.outcome import BUST, Holding
from twentyone.common.card import Card, Rank, Suit


def test_value(make_cards):
    hand = BlackjackHand()
    for card in make_cards("A K"):
        hand.add_card(card)
    assert hand.value() == 21


def test_value_with_multiple_aces(make_cards):
    assert BlackjackHand(make_cards("A A")).value() == 12
    assert BlackjackHand(make_cards("A A 9")).value() == 21
    assert BlackjackHand(make_cards("A A A 8")).value() == 21


def test_ace_is_valued_by_the_running_total(make_cards):
    # An Ace only looks at the cards before it
    assert BlackjackHand(make_cards("5 A")).value() == 16
    assert BlackjackHand(make_cards("J A")).value() == 21
    assert BlackjackHand(make_cards("9 2 A")).value() == 12
    assert BlackjackHand(make_cards("A 5 K")).value() == 26


def test_face_cards_count_ten(make_cards):
    assert hand_value(make_cards("J Q")) == 20
    assert hand_value(make_cards("K 10")) == 20


def test_empty_hand_value():
    hand = BlackjackHand()
    assert hand.value() == 0
    assert hand.outcome() == Holding(0)


def test_hand_bust(make_cards):
    hand = BlackjackHand(make_cards("K Q 2"))
    assert hand.value() == 22
    assert hand.outcome() is BUST
    assert get_outcome(hand) is BUST


def test_outcome_is_stable_without_new_cards(make_cards):
    hand = BlackjackHand(make_cards("10 7"))
    assert hand.outcome() == hand.outcome() == Holding(17)


def test_outcome_follows_new_cards(make_cards):
    hand = BlackjackHand(make_cards("10 6"))
    assert hand.outcome() == Holding(16)
    hand.add_card(Card(Suit.CLUBS, Rank.FIVE))
    assert hand.outcome() == Holding(21)
    hand.add_card(Card(Suit.CLUBS, Rank.TWO))
    assert hand.outcome() is BUST


def test_custom_bust_threshold(make_cards):
    hand = BlackjackHand(make_cards("K Q 2"))
    assert get_outcome(hand, bust_threshold=22) == Holding(22)


def test_value_with(make_cards):
    hand = BlackjackHand(make_cards("K"))
    assert hand.value_with(Card(Suit.HEARTS, Rank.ACE)) == 21
    assert hand.value_with(Card(Suit.HEARTS, Rank.FIVE)) == 15
    assert len(hand) == 1


def test_is_soft(make_cards):
    assert BlackjackHand(make_cards("A 2")).is_soft
    assert BlackjackHand(make_cards("A 10")).is_soft
    assert not BlackjackHand(make_cards("10 2")).is_soft
    assert not BlackjackHand(make_cards("10 2 A")).is_soft
    assert not BlackjackHand(make_cards("A 5 K")).is_soft


def test_is_blackjack(make_cards):
    assert BlackjackHand(make_cards("A K")).is_blackjack
    assert BlackjackHand(make_cards("Q A")).is_blackjack
    assert not BlackjackHand(make_cards("7 7 7")).is_blackjack
    assert not BlackjackHand(make_cards("10 9")).is_blackjack
