"""
This module provides the state machine that drives a single round of Blackjack.
It uses the state design pattern: the round engine repeatedly hands the round to
its current state, and each state does its work, notifies listeners through the
engine's emitter, and either moves the round to the next state or settles it.

The round progresses through:
DealingState, NaturalCheckState, PlayerTurnState, then either PlayerBustState
(terminal) or DealerRevealState and DealerTurnState, and finally
ShowdownState (terminal). NaturalCheckState and DealerTurnState settle the
round themselves when a natural or a dealer bust decides it.

Classes:

RoundState: An abstract base class for round states.
DealingState: Two cards to the dealer, the second face down, then two to the player.
NaturalCheckState: Settles the round at once if either side was dealt 21.
PlayerTurnState: The double-down offer, then the player's hits and stand.
PlayerBustState: Settles a player bust as a loss.
DealerRevealState: Turns the dealer's hole card face up.
DealerTurnState: The dealer's hits and stand.
ShowdownState: Compares the two outcomes and settles the round.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from twentyone.blackjack.action import Decision
from twentyone.blackjack.constants import BLACKJACK
from twentyone.blackjack.outcome import RoundResult, compare
from twentyone.events import EngineEventType

if TYPE_CHECKING:
    from twentyone.blackjack.round import Round, RoundEngine


class RoundState(ABC):
    """
    Abstract base class for round states.
    """

    @abstractmethod
    def handle(self, engine: RoundEngine, rnd: Round) -> None:
        """Do this state's work and move the round on."""

    def __str__(self) -> str:
        return self.__class__.__name__


class DealingState(RoundState):
    """
    The dealer deals two cards to itself and two to the player.
    """

    def handle(self, engine, rnd):
        for i in range(2):
            card = engine.executor.shoe.deal_one()
            completes_natural = rnd.dealer_hand.value_with(card) == BLACKJACK
            rnd.dealer_hand.add_card(card)
            # The hole card stays down unless it makes the dealer's natural
            if i == 1 and not completes_natural:
                rnd.hole_card_hidden = True
            self.announce(engine, rnd, "dealer", card)
            engine.pause()

        for _ in range(2):
            card = engine.executor.shoe.deal_one()
            rnd.player_hand.add_card(card)
            self.announce(engine, rnd, "player", card)
            engine.pause()

        engine.set_state(rnd, NaturalCheckState())

    @staticmethod
    def announce(engine, rnd, to, card):
        hand = rnd.player_hand if to == "player" else rnd.dealer_hand
        hidden = to == "dealer" and rnd.hole_card_hidden
        engine.emitter.emit(
            EngineEventType.CARD_DEALT,
            {
                "to": to,
                "card": None if hidden else card,
                "hidden": hidden,
                "cards": hand.cards,
                "value": None if hidden else hand.value(),
                "blackjack": hand.is_blackjack,
            },
        )


class NaturalCheckState(RoundState):
    """
    Ends the round straight away when either hand was dealt 21.
    """

    def handle(self, engine, rnd):
        player_natural = rnd.player_hand.value() == BLACKJACK
        dealer_natural = rnd.dealer_hand.value() == BLACKJACK

        if not (player_natural or dealer_natural):
            engine.set_state(rnd, PlayerTurnState())
            return

        rnd.natural = True
        rnd.hole_card_hidden = False
        rnd.player_outcome = rnd.player_hand.outcome(engine.rules.bust_threshold)
        rnd.dealer_outcome = rnd.dealer_hand.outcome(engine.rules.bust_threshold)
        engine.emitter.emit(
            EngineEventType.NATURAL,
            {"player": player_natural, "dealer": dealer_natural},
        )

        if player_natural and dealer_natural:
            engine.finish(rnd, RoundResult.PUSH, "both_naturals")
        elif player_natural:
            engine.finish(rnd, RoundResult.WIN, "player_natural")
        else:
            engine.finish(rnd, RoundResult.LOSS, "dealer_natural")


class PlayerTurnState(RoundState):
    """
    The player either doubles down, taking exactly one card, or hits until
    standing or busting.
    """

    def handle(self, engine, rnd):
        engine.emitter.emit(
            EngineEventType.PLAYER_TURN,
            {"cards": rnd.player_hand.cards, "value": rnd.player_hand.value()},
        )
        executor = engine.executor

        if engine.player.wants_double_down():
            rnd.doubled = True
            engine.emitter.emit(
                EngineEventType.DOUBLE_DOWN,
                {"wager": rnd.wager, "multiplier": rnd.multiplier},
            )
            engine.pause()
            outcome = executor.apply(Decision.HIT, rnd.player_hand)
            engine.pause()
            # The forced stand is skipped when the one hit busts
            if not outcome.is_bust:
                outcome = executor.apply(Decision.STAND, rnd.player_hand)
                engine.pause()
        else:
            upcard = rnd.dealer_hand.cards[0]
            while True:
                decision = engine.player.decide(rnd.player_hand, upcard)
                outcome = executor.apply(decision, rnd.player_hand)
                if decision is Decision.STAND or outcome.is_bust:
                    break

        rnd.player_outcome = outcome
        if outcome.is_bust:
            engine.set_state(rnd, PlayerBustState())
        else:
            engine.set_state(rnd, DealerRevealState())


class PlayerBustState(RoundState):
    """The player busted; the dealer does not play."""

    def handle(self, engine, rnd):
        rnd.dealer_outcome = rnd.dealer_hand.outcome(engine.rules.bust_threshold)
        engine.finish(rnd, RoundResult.LOSS, "player_bust")


class DealerRevealState(RoundState):
    """The dealer turns the hole card face up."""

    def handle(self, engine, rnd):
        rnd.hole_card_hidden = False
        engine.emitter.emit(
            EngineEventType.HOLE_CARD_REVEALED,
            {
                "card": rnd.dealer_hand.cards[-1],
                "cards": rnd.dealer_hand.cards,
                "value": rnd.dealer_hand.value(),
            },
        )
        engine.pause()
        engine.set_state(rnd, DealerTurnState())


class DealerTurnState(RoundState):
    """
    The dealer plays its fixed policy against the player's final total.
    """

    def handle(self, engine, rnd):
        engine.emitter.emit(
            EngineEventType.DEALER_TURN,
            {"cards": rnd.dealer_hand.cards, "value": rnd.dealer_hand.value()},
        )
        score_to_beat = rnd.player_hand.value()

        while True:
            decision = engine.dealer.decide(rnd.dealer_hand, score_to_beat)
            outcome = engine.executor.apply(decision, rnd.dealer_hand, actor="dealer")
            if decision is Decision.STAND or outcome.is_bust:
                break
            engine.pause()

        rnd.dealer_outcome = outcome
        if outcome.is_bust:
            engine.finish(rnd, RoundResult.WIN, "dealer_bust")
        else:
            engine.set_state(rnd, ShowdownState())


class ShowdownState(RoundState):
    """Whoever holds the higher outcome wins; equal outcomes push."""

    def handle(self, engine, rnd):
        result = compare(rnd.player_outcome, rnd.dealer_outcome)
        if result > 0:
            engine.finish(rnd, RoundResult.WIN, "showdown")
        elif result < 0:
            engine.finish(rnd, RoundResult.LOSS, "showdown")
        else:
            engine.finish(rnd, RoundResult.PUSH, "showdown")
