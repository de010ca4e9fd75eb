"""Blackjack-specific constants and value mappings."""

from twentyone.common.card import Rank

# Point value of each rank; an Ace is listed at its high value
BLACKJACK_VALUES = {
    Rank.TWO: 2,
    Rank.THREE: 3,
    Rank.FOUR: 4,
    Rank.FIVE: 5,
    Rank.SIX: 6,
    Rank.SEVEN: 7,
    Rank.EIGHT: 8,
    Rank.NINE: 9,
    Rank.TEN: 10,
    Rank.JACK: 10,
    Rank.QUEEN: 10,
    Rank.KING: 10,
    Rank.ACE: 11,
}

ACE_LOW_VALUE = 1

# An Ace drops to its low value once the running total is above this
SOFT_ACE_LIMIT = 10

# Hand total of a natural
BLACKJACK = 21


def get_blackjack_value(rank: Rank, running_total: int = 0) -> int:
    """Get the value a card of `rank` adds to a hand already worth `running_total`."""
    if rank == Rank.ACE and running_total > SOFT_ACE_LIMIT:
        return ACE_LOW_VALUE
    return BLACKJACK_VALUES[rank]
