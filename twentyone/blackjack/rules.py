"""
House rules for a single-player blackjack table.

`Rules` holds every threshold and multiplier the round engine and the shoe
policy use, so a table can be configured (a six-deck shoe, a different stand
threshold) without touching module globals.
"""

from typing import List, Optional

DEALER_POLICIES = ("ahead", "fixed")


class Rules:
    def __init__(
        self,
        bust_threshold: int = 21,
        dealer_stand_threshold: int = 18,
        win_multiplier: float = 0.6,
        double_down_multiplier: float = 2.0,
        deck_replacement_threshold: float = 0.5,
        num_decks: int = 4,
        dealing_delay: float = 0.8,
        min_bet: float = 0.01,
        starting_balance: float = 100.0,
        currency: str = "$",
        dealer_policy: str = "ahead",
    ):
        if num_decks < 1:
            raise ValueError("Number of decks must be at least 1")
        if not 0 < deck_replacement_threshold <= 1:
            raise ValueError("Deck replacement threshold must be between 0 and 1")
        if win_multiplier < 0 or double_down_multiplier < 1:
            raise ValueError("Payout multipliers must not shrink the wager")
        if dealing_delay < 0:
            raise ValueError("Dealing delay must be non-negative")
        if min_bet <= 0:
            raise ValueError("Minimum bet must be positive")
        if starting_balance < min_bet:
            raise ValueError("Starting balance must cover the minimum bet")
        if dealer_policy not in DEALER_POLICIES:
            raise ValueError(
                f"dealer_policy must be one of {', '.join(DEALER_POLICIES)}"
            )

        self.bust_threshold = bust_threshold
        self.dealer_stand_threshold = dealer_stand_threshold
        self.win_multiplier = win_multiplier
        self.double_down_multiplier = double_down_multiplier
        self.deck_replacement_threshold = deck_replacement_threshold
        self.num_decks = num_decks
        self.dealing_delay = dealing_delay
        self.min_bet = min_bet
        self.starting_balance = starting_balance
        self.currency = currency
        self.dealer_policy = dealer_policy

    def to_dict(self) -> dict:
        """Convert rules to a dictionary for serialization."""
        return {
            "bust_threshold": self.bust_threshold,
            "dealer_stand_threshold": self.dealer_stand_threshold,
            "win_multiplier": self.win_multiplier,
            "double_down_multiplier": self.double_down_multiplier,
            "deck_replacement_threshold": self.deck_replacement_threshold,
            "num_decks": self.num_decks,
            "dealing_delay": self.dealing_delay,
            "min_bet": self.min_bet,
            "starting_balance": self.starting_balance,
            "currency": self.currency,
            "dealer_policy": self.dealer_policy,
        }

    def should_replace(self, dealt_count: int, undealt_count: int) -> bool:
        """
        Decide whether the shoe is used up enough to be replaced.

        Args:
            dealt_count: Cards dealt from the shoe so far.
            undealt_count: Cards still in the shoe.

        Returns:
            bool: True once at least the replacement fraction of the shoe has been dealt.
        """
        total = dealt_count + undealt_count
        return dealt_count >= self.deck_replacement_threshold * total

    def describe(self) -> List[str]:
        """The house rules as announced before each round."""
        threshold = self.dealer_stand_threshold
        if threshold in (17, 18):
            soft_or_hard = "soft" if threshold == 18 else "hard"
            stand_line = (
                f"The dealer stands at {soft_or_hard} 17 (when their sum is "
                f"{threshold} or above)."
            )
        else:
            stand_line = f"The dealer stands when their sum is {threshold} or above."
        lines = [
            f"The dealer rewards you at +{self.win_multiplier * 100:.0f}% of your bet as winnings.",
            f"{self.num_decks} decks are shuffled together, which refreshes when "
            f"{self.deck_replacement_threshold * 100:.0f}% of the deck is used.",
            stand_line,
        ]
        if self.dealer_policy == "ahead":
            lines.append("The dealer also stands as soon as their sum beats yours.")
        return lines

    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in self.to_dict().items())
        return f"Rules({fields})"


def should_replace(dealt_count: int, undealt_count: int, rules: Optional[Rules] = None) -> bool:
    """Shoe replacement check against `rules`, or the default house rules."""
    return (rules or Rules()).should_replace(dealt_count, undealt_count)
