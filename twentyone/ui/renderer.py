"""
Plain-text rendering of round events.

`TextRenderer` listens to an `EventEmitter` and writes one line per event to
an `IOInterface`. It only reads event data; the round never waits on it.
"""

from typing import Callable, List, Sequence

from twentyone.blackjack.action import Decision
from twentyone.blackjack.outcome import RoundResult
from twentyone.common.card import Card
from twentyone.common.io_interface import IOInterface
from twentyone.events import EngineEventType, EventEmitter

HIDDEN_CARD = "??"
PLAYER_LABEL = "    You"
DEALER_LABEL = " Dealer"


def format_hand(cards: Sequence[Card], hide_last: bool = False) -> str:
    """Cards between the two hand glyphs, the last one shown face down if asked."""
    shown = [str(card) for card in cards]
    if hide_last and shown:
        shown[-1] = HIDDEN_CARD
    return f"✋{' '.join(shown)}🤚"


class TextRenderer:
    """Turns round events into text lines."""

    def __init__(self, io_interface: IOInterface):
        self.io_interface = io_interface
        self._unsubscribers: List[Callable] = []

    def attach(self, emitter: EventEmitter) -> "TextRenderer":
        """Subscribe to every event this renderer knows how to show."""
        handlers = {
            EngineEventType.ROUND_STARTED: self.on_round_started,
            EngineEventType.CARD_DEALT: self.on_card_dealt,
            EngineEventType.NATURAL: self.on_natural,
            EngineEventType.PLAYER_TURN: self.on_player_turn,
            EngineEventType.DOUBLE_DOWN: self.on_double_down,
            EngineEventType.PLAYER_ACTION: self.on_action,
            EngineEventType.DEALER_ACTION: self.on_action,
            EngineEventType.HOLE_CARD_REVEALED: self.on_hole_card_revealed,
            EngineEventType.DEALER_TURN: self.on_dealer_turn,
            EngineEventType.HAND_RESULT: self.on_hand_result,
            EngineEventType.SHUFFLE: self.on_shuffle,
            EngineEventType.INPUT_ERROR: self.on_input_error,
        }
        for event_type, handler in handlers.items():
            self._unsubscribers.append(emitter.on(event_type, handler))
        return self

    def detach(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def write(self, message: str) -> None:
        self.io_interface.output(message)

    def on_round_started(self, data):
        self.write("\nDealing...\n")

    def on_card_dealt(self, data):
        label = DEALER_LABEL if data["to"] == "dealer" else PLAYER_LABEL
        if data["hidden"]:
            total = "?"
        elif data["blackjack"]:
            total = "BJ"
        else:
            total = str(data["value"])
        hand = format_hand(data["cards"], hide_last=data["hidden"])
        self.write(f"{label} {hand} {total}")

    def on_natural(self, data):
        if data["player"] and data["dealer"]:
            self.write(
                "\nBoth players had blackjacks, so the game is a draw. No bets are recognized."
            )
        elif data["player"]:
            self.write("\nYou got a blackjack and won the game!")
        else:
            self.write("\nThe dealer got a blackjack, so you lost the game.")

    def on_player_turn(self, data):
        self.write("\nYour turn.")

    def on_double_down(self, data):
        self.write("You doubled your wager!")

    def on_action(self, data):
        hand = format_hand(data["cards"])
        if data["decision"] is Decision.HIT:
            self.write(f"    HIT {hand} {data['outcome']}")
        else:
            self.write(f"  STAND {hand} {data['outcome']}")

    def on_hole_card_revealed(self, data):
        self.write(f"{DEALER_LABEL} {format_hand(data['cards'])} {data['value']}")

    def on_dealer_turn(self, data):
        self.write("\nDealer's turn.")

    def on_hand_result(self, summary):
        reason = summary["reason"]
        if reason == "player_bust":
            self.write("\nYour hand busted. You lost.")
        elif reason == "dealer_bust":
            self.write("\nThe dealer's hand busted. You won!")
        elif reason == "showdown":
            self.write("\nResults")
            self.write(
                f"{DEALER_LABEL} {format_hand(summary['dealer_cards'])} {summary['dealer_outcome']}"
            )
            self.write(
                f"{PLAYER_LABEL} {format_hand(summary['player_cards'])} {summary['player_outcome']}"
            )
            self.write(_SHOWDOWN_MESSAGES[summary["result"]])

    def on_shuffle(self, data):
        self.write("Reset and shuffled the deck.")

    def on_input_error(self, data):
        self.write(f"Something went wrong: {data['message']}")


_SHOWDOWN_MESSAGES = {
    RoundResult.WIN: "You won!",
    RoundResult.LOSS: "You lost!",
    RoundResult.PUSH: "Draw!",
}
