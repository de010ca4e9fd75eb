import pytest

from twentyone.blackjack.rules import Rules, should_replace


def test_default_rules():
    rules = Rules()
    assert rules.bust_threshold == 21
    assert rules.dealer_stand_threshold == 18
    assert rules.win_multiplier == 0.6
    assert rules.double_down_multiplier == 2.0
    assert rules.deck_replacement_threshold == 0.5
    assert rules.num_decks == 4
    assert rules.dealing_delay == 0.8
    assert rules.dealer_policy == "ahead"


def test_should_replace_at_half_the_shoe():
    assert should_replace(26, 26)
    assert not should_replace(25, 27)
    assert should_replace(104, 104)
    assert not should_replace(0, 208)


def test_should_replace_with_custom_threshold():
    rules = Rules(deck_replacement_threshold=0.75)
    assert not rules.should_replace(26, 26)
    assert rules.should_replace(39, 13)
    assert should_replace(39, 13, rules)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"num_decks": 0},
        {"deck_replacement_threshold": 0},
        {"deck_replacement_threshold": 1.5},
        {"win_multiplier": -0.1},
        {"double_down_multiplier": 0.5},
        {"dealing_delay": -1},
        {"min_bet": 0},
        {"dealer_policy": "random"},
        {"starting_balance": 0.0},
        {"starting_balance": 5.0, "min_bet": 10.0},
    ],
)
def test_invalid_rules(kwargs):
    with pytest.raises(ValueError):
        Rules(**kwargs)


def test_to_dict_round_trips_through_constructor():
    rules = Rules(num_decks=6, dealer_policy="fixed", dealing_delay=0)
    assert Rules(**rules.to_dict()).to_dict() == rules.to_dict()
    assert rules.to_dict()["num_decks"] == 6


def test_describe():
    assert Rules().describe() == [
        "The dealer rewards you at +60% of your bet as winnings.",
        "4 decks are shuffled together, which refreshes when 50% of the deck is used.",
        "The dealer stands at soft 17 (when their sum is 18 or above).",
        "The dealer also stands as soon as their sum beats yours.",
    ]
    fixed = Rules(dealer_policy="fixed", dealer_stand_threshold=17).describe()
    assert fixed[-1] == "The dealer stands at hard 17 (when their sum is 17 or above)."


def test_repr():
    assert repr(Rules()).startswith("Rules(bust_threshold=21, dealer_stand_threshold=18")


def test_describe_other_stand_thresholds():
    assert Rules(dealer_stand_threshold=19).describe()[2] == (
        "The dealer stands when their sum is 19 or above."
    )
    assert Rules(dealer_stand_threshold=16).describe()[2] == (
        "The dealer stands when their sum is 16 or above."
    )
