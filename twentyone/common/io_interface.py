"""
This module contains the IOInterface abstract base class and its implementations.

An IO interface is the only way the game talks to the outside world: it shows
text, and it asks the human (or a stand-in for one) for decisions, for the
double-down confirmation and for a wager. Interfaces report unusable answers
by raising `InputError`; callers retry instead of treating it as a game error.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

import aiofiles

from twentyone.blackjack.action import Decision

if TYPE_CHECKING:
    from twentyone.blackjack.hand import BlackjackHand
    from twentyone.common.card import Card


class InputError(Exception):
    """Raised when a response from the player cannot be understood or is not allowed."""

    pass


class IOInterface(ABC):
    """
    Abstract base class for an IO interface.

    This class defines the interface for input/output operations in the game.
    """

    @abstractmethod
    def output(self, message: str) -> None:
        """Output a message to the interface."""
        pass

    @abstractmethod
    def input(self, prompt: str) -> str:
        """Get input from the user with a prompt."""
        pass

    @abstractmethod
    def request_decision(
        self, hand: BlackjackHand, dealer_upcard: Optional[Card] = None
    ) -> Decision:
        """Ask the player whether to hit or stand."""
        pass

    @abstractmethod
    def request_double_down_confirmation(self) -> bool:
        """Ask the player whether to double down this round."""
        pass

    @abstractmethod
    def request_wager(self, balance: float, minimum: float) -> float:
        """Ask the player how much to bet."""
        pass


class DummyIOInterface(IOInterface):
    """
    A dummy IO interface for simulation purposes. Does not perform any actual IO.

    Decisions are made by a fixed rule: hit below `stand_on`, stand otherwise.
    The interface doubles down every round when `double_down` is set and always
    bets `wager`, or the table minimum when no wager is given. The wager is
    capped at the balance and never drops below the table minimum.
    """

    def __init__(
        self,
        stand_on: int = 17,
        double_down: bool = False,
        wager: Optional[float] = None,
    ):
        if wager is not None and wager <= 0:
            raise ValueError("Wager must be positive")
        self.stand_on = stand_on
        self.double_down = double_down
        self.wager = wager

    def output(self, message: str) -> None:
        """Simulates output operation."""
        pass

    def input(self, prompt: str) -> str:
        """Simulates input operation."""
        return ""

    def request_decision(
        self, hand: BlackjackHand, dealer_upcard: Optional[Card] = None
    ) -> Decision:
        return Decision.HIT if hand.value() < self.stand_on else Decision.STAND

    def request_double_down_confirmation(self) -> bool:
        return self.double_down

    def request_wager(self, balance: float, minimum: float) -> float:
        return max(minimum, min(self.wager or minimum, balance))


class TestIOInterface(IOInterface):
    """
    A test IO interface for testing purposes. Collects output messages and
    answers requests from queues filled in advance.

    A queued entry that is an exception instance is raised instead of returned,
    which lets tests drive the retry paths.

    Methods
    -------
    def add_decision(self, decision):
        Queue a hit/stand answer.

    def add_double_down(self, answer):
        Queue a double-down answer.

    def add_wager(self, amount):
        Queue a wager answer.
    """

    __test__ = False

    def __init__(self):
        self.sent_messages = []
        self.decisions = []
        self.double_down_answers = []
        self.wagers = []
        self.input_responses = []
        self.decision_requests = 0

    def output(self, message: str) -> None:
        self.sent_messages.append(message)

    def input(self, prompt: str) -> str:
        if self.input_responses:
            return self.input_responses.pop(0)
        return "test_input"

    def add_decision(self, decision):
        """Add a decision (or an exception to raise) to the queue."""
        self.decisions.append(decision)

    def add_double_down(self, answer):
        """Add a double-down answer (or an exception to raise) to the queue."""
        self.double_down_answers.append(answer)

    def add_wager(self, amount):
        """Add a wager (or an exception to raise) to the queue."""
        self.wagers.append(amount)

    @staticmethod
    def _next(queue: list, what: str):
        if not queue:
            raise ValueError(f"No more {what} left in TestIOInterface queue.")
        answer = queue.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        return answer

    def request_decision(
        self, hand: BlackjackHand, dealer_upcard: Optional[Card] = None
    ) -> Decision:
        self.decision_requests += 1
        return self._next(self.decisions, "decisions")

    def request_double_down_confirmation(self) -> bool:
        if not self.double_down_answers:
            return False
        return self._next(self.double_down_answers, "double-down answers")

    def request_wager(self, balance: float, minimum: float) -> float:
        return self._next(self.wagers, "wagers")


class ConsoleIOInterface(IOInterface):
    """
    A console IO interface for interactive gameplay.

    Every request reads one line; an unreadable answer raises `InputError`
    and the caller asks again.
    """

    _DECISIONS = {
        "h": Decision.HIT,
        "hit": Decision.HIT,
        "s": Decision.STAND,
        "stand": Decision.STAND,
    }

    def output(self, message: str) -> None:
        print(message)

    def input(self, prompt: str) -> str:
        return input(prompt)

    def request_decision(
        self, hand: BlackjackHand, dealer_upcard: Optional[Card] = None
    ) -> Decision:
        answer = self.input("Make a decision: [h]it or [s]tand? ").strip().lower()
        try:
            return self._DECISIONS[answer]
        except KeyError:
            raise InputError(f"'{answer}' is not a decision, type hit or stand") from None

    def request_double_down_confirmation(self) -> bool:
        answer = (
            self.input(
                "Would you like to double down? It doubles the wager but forces "
                "you to hit then stand. (Y/n) "
            )
            .strip()
            .lower()
        )
        if answer in ("", "y", "yes"):
            return True
        if answer in ("n", "no"):
            return False
        raise InputError(f"'{answer}' is not a yes or no answer")

    def request_wager(self, balance: float, minimum: float) -> float:
        answer = self.input("What is your bet? $").strip()
        try:
            amount = float(answer)
        except ValueError:
            raise InputError("Please enter a decimal!") from None
        if not math.isfinite(amount):
            raise InputError("Please enter a decimal!")
        return amount


class LoggingIOInterface(IOInterface):
    """
    A logging IO interface for recording purposes. Writes output messages to a log file.

    Requests are answered by the wrapped DummyIOInterface rules, so a logged
    game runs unattended.
    """

    def __init__(self, log_file_path: str, answers: Optional[DummyIOInterface] = None):
        self.log_file_path = log_file_path
        self.answers = answers or DummyIOInterface()

    def output(self, message: str) -> None:
        """Write an output message to the log file."""
        with open(self.log_file_path, "a", encoding="utf-8") as log_file:
            log_file.write(message + "\n")

    def input(self, prompt: str) -> str:
        """Log the prompt and return empty string."""
        self.output(f"[INPUT PROMPT] {prompt}")
        return ""

    def request_decision(
        self, hand: BlackjackHand, dealer_upcard: Optional[Card] = None
    ) -> Decision:
        decision = self.answers.request_decision(hand, dealer_upcard)
        self.output(f"[DECISION] {decision}")
        return decision

    def request_double_down_confirmation(self) -> bool:
        answer = self.answers.request_double_down_confirmation()
        self.output(f"[DOUBLE DOWN] {'yes' if answer else 'no'}")
        return answer

    def request_wager(self, balance: float, minimum: float) -> float:
        wager = self.answers.request_wager(balance, minimum)
        self.output(f"[WAGER] {wager:.2f}")
        return wager

    async def output_async(self, message: str) -> None:
        """Async version of output for callers running inside an event loop."""
        async with aiofiles.open(
            self.log_file_path, mode="a", encoding="utf-8"
        ) as log_file:
            await log_file.write(message + "\n")
