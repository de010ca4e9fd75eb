"""
The player's balance across rounds.

Wagers are checked against the balance before a round starts; the round's
delta is applied once it ends. Amounts are kept in cents precision. A balance
never drops below one cent: a player who would end up with less is "donated"
a cent so the game can go on.
"""

from twentyone.common.util import round_decimal

CENT = 0.01


class InsufficientFundsError(Exception):
    """Raised when a wager is larger than the player's balance."""

    pass


class InvalidWagerError(Exception):
    """Raised when a wager is below the table minimum."""

    pass


def format_amount(amount: float) -> str:
    """Format an amount with at most two decimals and no trailing zeros."""
    text = f"{amount:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def report_earnings_progression(balance: float, change: float, currency: str = "$") -> str:
    """
    One line showing the balance before and after a round.

    >>> report_earnings_progression(100.0, 6.0)
    '$100 + 6 ➜ $106'
    """
    if change > 0:
        change_str = f"+ {format_amount(abs(change))} "
    elif change < 0:
        change_str = f"- {format_amount(abs(change))} "
    else:
        change_str = ""
    after = max(balance + change, 0.0)
    return f"{currency}{format_amount(balance)} {change_str}➜ {currency}{format_amount(after)}"


class Bankroll:
    """
    Tracks the balance of a single player.

    Attributes:
        balance: Current balance.
        min_bet: Smallest wager accepted.
        donations: How many times the balance was topped up to one cent.
    """

    def __init__(self, balance: float = 100.0, min_bet: float = CENT):
        self.balance = round_decimal(balance, 2)
        self.min_bet = min_bet
        self.donations = 0

    def validate_wager(self, amount: float) -> float:
        """
        Check a wager against the balance and round it to cents.

        Raises:
            InvalidWagerError: If the wager is below the minimum bet.
            InsufficientFundsError: If the wager is more than the balance.
        """
        if amount < self.min_bet:
            raise InvalidWagerError("You must enter at least a cent!")
        if amount > self.balance:
            raise InsufficientFundsError("Your bid must be less than your balance!")
        return round_decimal(amount, 2)

    def settle(self, delta: float) -> bool:
        """
        Apply a round's delta to the balance.

        Returns:
            bool: True if the balance had to be topped up to one cent.
        """
        new_balance = self.balance + delta
        donated = new_balance < CENT
        if donated:
            self.donations += 1
        self.balance = round_decimal(max(new_balance, CENT), 2)
        return donated
