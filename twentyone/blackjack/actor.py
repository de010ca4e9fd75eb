"""
This module provides the `Player` and `Dealer` decision makers for a round of Blackjack.

The `Player` defers every choice to an IO interface, i.e. to a human or a stand-in
for one. An answer the interface cannot make sense of is reported and asked
for again; it never ends the round.

The `Dealer` follows a fixed house policy. Under the default "ahead" policy
the dealer stands on 18 or more, and also stands as soon as its total beats the
player's. The "fixed" policy only looks at the stand threshold.
"""

import logging
from typing import Optional

from twentyone.blackjack.action import Decision
from twentyone.blackjack.hand import BlackjackHand
from twentyone.blackjack.rules import Rules
from twentyone.common.card import Card
from twentyone.common.io_interface import InputError, IOInterface
from twentyone.events import EngineEventType, EventEmitter

logger = logging.getLogger(__name__)


def dealer_decision(
    dealer_total: int,
    score_to_beat: int,
    stand_threshold: int = 18,
    policy: str = "ahead",
) -> Decision:
    """
    The dealer's decision for a hand worth `dealer_total`.

    Args:
        dealer_total: Current value of the dealer's hand.
        score_to_beat: Final value of the player's hand.
        stand_threshold: Dealer stands at this total or above.
        policy: "ahead" also stands once `dealer_total` exceeds `score_to_beat`;
            "fixed" ignores the player's total.
    """
    if dealer_total >= stand_threshold:
        return Decision.STAND
    if policy == "ahead" and dealer_total > score_to_beat:
        return Decision.STAND
    return Decision.HIT


class Player:
    """The human side of the table, reached through an IO interface."""

    def __init__(
        self,
        io_interface: IOInterface,
        emitter: Optional[EventEmitter] = None,
        name: str = "You",
    ):
        self.name = name
        self.io_interface = io_interface
        self.emitter = emitter or EventEmitter()

    def _report_input_error(self, error: InputError) -> None:
        logger.warning("Invalid input from %s: %s", self.name, error)
        self.emitter.emit(
            EngineEventType.INPUT_ERROR, {"player": self.name, "message": str(error)}
        )

    def decide(
        self, hand: BlackjackHand, dealer_upcard: Optional[Card] = None
    ) -> Decision:
        """Ask for hit or stand until a usable answer arrives."""
        while True:
            try:
                decision = self.io_interface.request_decision(hand, dealer_upcard)
            except InputError as e:
                self._report_input_error(e)
                continue
            if isinstance(decision, Decision):
                return decision
            self._report_input_error(InputError(f"{decision!r} is not a decision"))

    def wants_double_down(self) -> bool:
        """Ask, until answered, whether to double down."""
        while True:
            try:
                return bool(self.io_interface.request_double_down_confirmation())
            except InputError as e:
                self._report_input_error(e)


class Dealer:
    """The house side of the table."""

    def __init__(self, rules: Optional[Rules] = None, name: str = "Dealer"):
        self.name = name
        self.rules = rules or Rules()

    def decide(self, hand: BlackjackHand, score_to_beat: int) -> Decision:
        """Hit or stand, given the player's final total."""
        return dealer_decision(
            hand.value(),
            score_to_beat,
            self.rules.dealer_stand_threshold,
            self.rules.dealer_policy,
        )
