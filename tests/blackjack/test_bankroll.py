import pytest

from twentyone.blackjack.bankroll import (
    Bankroll,
    InsufficientFundsError,
    InvalidWagerError,
    format_amount,
    report_earnings_progression,
)


def test_validate_wager_rounds_to_cents():
    bankroll = Bankroll(100.0)
    assert bankroll.validate_wager(12.344) == 12.34
    assert bankroll.validate_wager(100.0) == 100.0


def test_wager_below_a_cent_is_rejected():
    with pytest.raises(InvalidWagerError, match="at least a cent"):
        Bankroll(100.0).validate_wager(0.001)


def test_wager_above_balance_is_rejected():
    with pytest.raises(InsufficientFundsError, match="less than your balance"):
        Bankroll(100.0).validate_wager(100.5)


def test_settle_applies_delta():
    bankroll = Bankroll(100.0)
    assert bankroll.settle(6.0) is False
    assert bankroll.balance == 106.0
    assert bankroll.settle(-20.0) is False
    assert bankroll.balance == 86.0


def test_settle_rounds_to_cents():
    bankroll = Bankroll(0.1)
    bankroll.settle(0.2)
    assert bankroll.balance == 0.3


def test_charity_cent():
    bankroll = Bankroll(10.0)
    assert bankroll.settle(-10.0) is True
    assert bankroll.balance == 0.01
    assert bankroll.donations == 1


def test_balance_of_exactly_a_cent_is_not_a_donation():
    bankroll = Bankroll(1.01)
    assert bankroll.settle(-1.0) is False
    assert bankroll.balance == 0.01
    assert bankroll.donations == 0


@pytest.mark.parametrize(
    "amount, expected",
    [(100.0, "100"), (6.0, "6"), (10.5, "10.5"), (0.25, "0.25"), (0.0, "0")],
)
def test_format_amount(amount, expected):
    assert format_amount(amount) == expected


def test_report_earnings_progression():
    assert report_earnings_progression(100.0, 6.0) == "$100 + 6 ➜ $106"
    assert report_earnings_progression(100.0, -10.0) == "$100 - 10 ➜ $90"
    assert report_earnings_progression(100.0, 0.0) == "$100 ➜ $100"
    assert report_earnings_progression(10.5, 0.3, "€") == "€10.5 + 0.3 ➜ €10.8"
