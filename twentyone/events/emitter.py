"""
Event system for the twentyone engine.

The round engine reports everything worth showing (cards dealt, turns taken,
results) by emitting events. Listeners render them, count them or ignore
them; nothing a listener does flows back into the round.
"""

from collections import defaultdict
from enum import Enum
from typing import Any, Callable, Dict, Union
import logging

# Create a logger for the event system
logger = logging.getLogger("twentyone.events")


def _discard(handlers: list, handler: dict) -> None:
    for i, existing in enumerate(handlers):
        if existing is handler:
            handlers.pop(i)
            break


class EventPriority(Enum):
    """Priority levels for event handlers."""

    LOW = 0
    NORMAL = 1
    HIGH = 2


class EngineEventType(Enum):
    """
    Event types emitted over the life of a round.
    """

    ROUND_STARTED = "round_started"
    CARD_DEALT = "card_dealt"
    NATURAL = "natural"
    PLAYER_TURN = "player_turn"
    DOUBLE_DOWN = "double_down"
    PLAYER_ACTION = "player_action"
    HOLE_CARD_REVEALED = "hole_card_revealed"
    DEALER_TURN = "dealer_turn"
    DEALER_ACTION = "dealer_action"
    HAND_RESULT = "hand_result"
    ROUND_ENDED = "round_ended"
    SHUFFLE = "shuffle"
    INPUT_ERROR = "input_error"


class EventEmitter:
    """
    Event emitter with priority-ordered subscriptions.

    Features:
    - Supports event subscription with priorities
    - Allows once-only subscriptions
    - Supports subscribing to all events with event type filtering in handler
    - A failing handler is logged and never stops the others
    """

    def __init__(self):
        """Initialize the event emitter."""
        self._listeners = defaultdict(list)
        self._global_listeners = []

    @staticmethod
    def _insert(handlers: list, handler: dict) -> None:
        # Higher priorities first, equal priorities in subscription order
        for i, existing in enumerate(handlers):
            if existing["priority"] < handler["priority"]:
                handlers.insert(i, handler)
                break
        else:
            handlers.append(handler)

    def on(
        self,
        event_type: Union[str, Enum],
        callback: Callable,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Callable:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to subscribe to (string or enum)
            callback: Function to call when event occurs, signature: fn(event_data)
            priority: Priority level for this handler

        Returns:
            Unsubscribe function that can be called to remove this subscription
        """
        if isinstance(event_type, Enum):
            event_type = event_type.name

        handler = {"callback": callback, "priority": priority.value}
        self._insert(self._listeners[event_type], handler)

        def unsubscribe():
            _discard(self._listeners[event_type], handler)

        return unsubscribe

    def once(
        self,
        event_type: Union[str, Enum],
        callback: Callable,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Callable:
        """
        Subscribe to an event type for a single occurrence.

        Returns:
            Unsubscribe function that can be called to remove this subscription
        """
        unsubscribe_ref = []

        def one_time_handler(event_data):
            try:
                callback(event_data)
            finally:
                unsubscribe_ref[0]()

        unsubscribe_ref.append(self.on(event_type, one_time_handler, priority))
        return unsubscribe_ref[0]

    def on_any(
        self, callback: Callable, priority: EventPriority = EventPriority.NORMAL
    ) -> Callable:
        """
        Subscribe to all events.

        Args:
            callback: Function to call for any event, signature: fn((event_type, event_data))
            priority: Priority level for this handler

        Returns:
            Unsubscribe function that can be called to remove this subscription
        """
        handler = {"callback": callback, "priority": priority.value}
        self._insert(self._global_listeners, handler)

        def unsubscribe():
            _discard(self._global_listeners, handler)

        return unsubscribe

    def emit(self, event_type: Union[str, Enum], data: Dict[str, Any]) -> None:
        """
        Emit an event to all registered listeners.

        Args:
            event_type: The type of event to emit
            data: The data to include with the event
        """
        if isinstance(event_type, Enum):
            event_type = event_type.name

        # Snapshot so handlers may unsubscribe while being called
        handlers_to_call = [
            (handler["callback"], data) for handler in self._listeners.get(event_type, [])
        ]
        handlers_to_call.extend(
            (handler["callback"], (event_type, data))
            for handler in self._global_listeners
        )

        for callback, args in handlers_to_call:
            try:
                callback(args)
            except Exception as e:
                logger.error(
                    f"Error in event handler for {event_type}: {e}", exc_info=True
                )

    def remove_all_listeners(self, event_type: Union[str, Enum, None] = None) -> None:
        """
        Remove all listeners for a specific event type or all events.

        Args:
            event_type: Optional event type. If None, removes all listeners for all events.
        """
        if event_type is None:
            self._listeners.clear()
            self._global_listeners.clear()
        else:
            if isinstance(event_type, Enum):
                event_type = event_type.name
            self._listeners[event_type].clear()
