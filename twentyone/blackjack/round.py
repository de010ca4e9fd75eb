"""
The round engine: one wager, one player hand, one dealer hand, one settlement.

`RoundEngine.play_round(wager, shoe)` deals from the shoe, runs the round
through the states in `twentyone.blackjack.state` and returns the signed change
to the player's balance. Every settlement is rounded to cents when it is
computed. A round cannot be cancelled once started; the only waits are for the
player's answers and the configured dealing delay.
"""

import logging
import time
from typing import Callable, List, Optional

from twentyone.blackjack.actor import Dealer, Player
from twentyone.blackjack.hand import BlackjackHand
from twentyone.blackjack.outcome import Outcome, RoundResult
from twentyone.blackjack.rules import Rules
from twentyone.blackjack.state import DealingState, RoundState
from twentyone.blackjack.turn import TurnExecutor
from twentyone.common.shoe import Shoe
from twentyone.common.util import round_decimal
from twentyone.events import EngineEventType, EventEmitter

logger = logging.getLogger(__name__)


class Round:
    """
    Everything that belongs to one round. Discarded once the delta is reported.

    Attributes
    ----------
    wager : float
        The amount bet on this round.
    player_hand, dealer_hand : BlackjackHand
        The two hands, in deal order.
    doubled : bool
        Whether the player doubled down.
    hole_card_hidden : bool
        Display hint: the dealer's second card is still face down.
    delta : float or None
        Signed change to the player's balance, set when the round ends.
    """

    def __init__(self, wager: float, double_down_multiplier: float = 2.0):
        self.wager = wager
        self.double_down_multiplier = double_down_multiplier
        self.player_hand = BlackjackHand()
        self.dealer_hand = BlackjackHand()
        self.doubled = False
        self.natural = False
        self.hole_card_hidden = False
        self.player_outcome: Optional[Outcome] = None
        self.dealer_outcome: Optional[Outcome] = None
        self.result: Optional[RoundResult] = None
        self.reason: Optional[str] = None
        self.delta: Optional[float] = None
        self.state: Optional[RoundState] = None
        self.history: List[str] = []

    @property
    def multiplier(self) -> float:
        return self.double_down_multiplier if self.doubled else 1.0

    @property
    def finished(self) -> bool:
        return self.result is not None

    def summary(self) -> dict:
        """Display-free description of how the round ended."""
        return {
            "wager": self.wager,
            "doubled": self.doubled,
            "natural": self.natural,
            "result": self.result,
            "reason": self.reason,
            "delta": self.delta,
            "player_cards": self.player_hand.cards,
            "player_value": self.player_hand.value(),
            "player_outcome": self.player_outcome,
            "dealer_cards": self.dealer_hand.cards,
            "dealer_value": self.dealer_hand.value(),
            "dealer_outcome": self.dealer_outcome,
        }

    def __repr__(self) -> str:
        return (
            f"Round(wager={self.wager}, state={self.state}, "
            f"result={self.result}, delta={self.delta})"
        )


class RoundEngine:
    """
    Runs rounds of single-player blackjack.

    Attributes
    ----------
    rules : Rules
        Thresholds and multipliers for every round this engine plays.
    player : Player
        Source of the player's decisions.
    dealer : Dealer
        The dealer's fixed policy.
    emitter : EventEmitter
        Where turn events and round summaries are reported.
    """

    def __init__(
        self,
        player: Player,
        rules: Optional[Rules] = None,
        dealer: Optional[Dealer] = None,
        emitter: Optional[EventEmitter] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.rules = rules or Rules()
        self.player = player
        self.dealer = dealer or Dealer(self.rules)
        self.emitter = emitter or player.emitter
        self.executor: Optional[TurnExecutor] = None
        self._sleep = sleep

    def pause(self) -> None:
        """Wait out the dealing delay so a human can follow along."""
        if self.rules.dealing_delay > 0:
            self._sleep(self.rules.dealing_delay)

    def set_state(self, rnd: Round, state: RoundState) -> None:
        """Move the round to `state`."""
        logger.debug("Round moving from %s to %s", rnd.state, state)
        rnd.state = state
        rnd.history.append(str(state))

    def settlement(self, rnd: Round, result: RoundResult) -> float:
        """The signed delta for `result`, rounded to cents."""
        if result is RoundResult.WIN:
            return round_decimal(
                rnd.wager * self.rules.win_multiplier * rnd.multiplier, 2
            )
        if result is RoundResult.LOSS:
            return round_decimal(-rnd.wager * rnd.multiplier, 2)
        return 0.0

    def finish(self, rnd: Round, result: RoundResult, reason: str) -> None:
        """Settle the round and report its summary."""
        rnd.result = result
        rnd.reason = reason
        rnd.delta = self.settlement(rnd, result)
        logger.info(
            "Round over: %s (%s), wager %.2f%s, delta %+.2f",
            result.value,
            reason,
            rnd.wager,
            " doubled" if rnd.doubled else "",
            rnd.delta,
        )
        self.emitter.emit(EngineEventType.HAND_RESULT, rnd.summary())
        self.emitter.emit(EngineEventType.ROUND_ENDED, {"delta": rnd.delta})

    def play(self, wager: float, shoe: Shoe) -> Round:
        """Play one full round and return it."""
        rnd = Round(wager, self.rules.double_down_multiplier)
        self.executor = TurnExecutor(shoe, self.emitter, self.rules.bust_threshold)
        self.emitter.emit(EngineEventType.ROUND_STARTED, {"wager": wager})
        self.set_state(rnd, DealingState())
        while not rnd.finished:
            rnd.state.handle(self, rnd)
        return rnd

    def play_round(self, wager: float, shoe: Shoe) -> float:
        """Play one full round and return the change to the player's balance."""
        return self.play(wager, shoe).delta
