"""Applying one hit-or-stand decision to a hand."""

import logging
from typing import Optional

from twentyone.blackjack.action import Decision
from twentyone.blackjack.hand import BlackjackHand
from twentyone.blackjack.outcome import BUST_THRESHOLD, Outcome
from twentyone.common.shoe import Shoe
from twentyone.events import EngineEventType, EventEmitter

logger = logging.getLogger(__name__)


class TurnExecutor:
    """
    Applies decisions to hands, drawing from a shoe.

    A hit draws exactly one card. A `ShoeExhaustedError` from the shoe is not
    caught: running dry mid-round means the shoe was not replaced in time.
    """

    def __init__(
        self,
        shoe: Shoe,
        emitter: Optional[EventEmitter] = None,
        bust_threshold: int = BUST_THRESHOLD,
    ):
        self.shoe = shoe
        self.emitter = emitter or EventEmitter()
        self.bust_threshold = bust_threshold

    def apply(
        self, decision: Decision, hand: BlackjackHand, actor: str = "player"
    ) -> Outcome:
        """
        Apply `decision` to `hand` and return the resulting outcome.

        Emits PLAYER_ACTION or DEALER_ACTION, depending on `actor`.
        """
        card = None
        if decision is Decision.HIT:
            card = self.shoe.deal_one()
            hand.add_card(card)
        outcome = hand.outcome(self.bust_threshold)
        logger.debug("%s %s -> %s (%s)", actor, decision, outcome, hand)

        event_type = (
            EngineEventType.DEALER_ACTION
            if actor == "dealer"
            else EngineEventType.PLAYER_ACTION
        )
        self.emitter.emit(
            event_type,
            {
                "actor": actor,
                "decision": decision,
                "card": card,
                "cards": hand.cards,
                "value": hand.value(),
                "outcome": outcome,
            },
        )
        return outcome


def apply_decision(
    decision: Decision,
    hand: BlackjackHand,
    shoe: Shoe,
    emitter: Optional[EventEmitter] = None,
) -> Outcome:
    """Apply a single decision without keeping a TurnExecutor around."""
    return TurnExecutor(shoe, emitter).apply(decision, hand)
