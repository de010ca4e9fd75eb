"""
Outcomes of a blackjack hand.

An outcome is either `Holding(total)` or `Bust`. Outcomes are totally ordered:
a bust is below every holding, two busts are equal, and holdings compare by
total. `compare()` is the one place this order is defined; the rich comparison
operators on `Outcome` are built on it, and the showdown uses nothing else.
"""

from dataclasses import dataclass
from enum import Enum

BUST_THRESHOLD = 21


class RoundResult(Enum):
    """How a round ended, from the player's side."""

    WIN = "win"
    LOSS = "loss"
    PUSH = "push"


class Outcome:
    """Base class for the two outcome shapes."""

    __slots__ = ()

    is_bust = False

    def __lt__(self, other):
        if not isinstance(other, Outcome):
            return NotImplemented
        return compare(self, other) < 0

    def __le__(self, other):
        if not isinstance(other, Outcome):
            return NotImplemented
        return compare(self, other) <= 0

    def __gt__(self, other):
        if not isinstance(other, Outcome):
            return NotImplemented
        return compare(self, other) > 0

    def __ge__(self, other):
        if not isinstance(other, Outcome):
            return NotImplemented
        return compare(self, other) >= 0


@dataclass(frozen=True, eq=True)
class Holding(Outcome):
    """A hand that has not gone over the bust threshold."""

    total: int

    def __str__(self) -> str:
        return str(self.total)


@dataclass(frozen=True, eq=True)
class Bust(Outcome):
    """A hand that went over the bust threshold."""

    is_bust = True

    def __str__(self) -> str:
        return "BUST"


BUST = Bust()


def compare(a: Outcome, b: Outcome) -> int:
    """
    Compare two outcomes.

    Returns a negative number if `a` loses to `b`, zero on a push and a
    positive number if `a` beats `b`.
    """
    if a.is_bust and b.is_bust:
        return 0
    if a.is_bust:
        return -1
    if b.is_bust:
        return 1
    return (a.total > b.total) - (a.total < b.total)


def outcome_for(total: int, bust_threshold: int = BUST_THRESHOLD) -> Outcome:
    """Map a hand total to its outcome."""
    if total > bust_threshold:
        return BUST
    return Holding(total)
