"""
Event hook service for notifying collaborators about game events.

The engine raises events (game start, correct eat, wrong eat, game over) and
collaborators such as a sound player act on them. Delivery is fire-and-forget:
a failing listener is logged and never interrupts the tick.
"""

import logging
import threading
from typing import Callable, List

from domain.events import GameEvent
from domain.game_state import GameState

logger = logging.getLogger(__name__)

Listener = Callable[[GameEvent, GameState], None]


class EventHooks:
    """Registry of listeners for engine events."""

    def __init__(self):
        self._listeners: List[Listener] = []
        self._lock = threading.Lock()

    def add_listener(self, listener: Listener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def emit(self, event: GameEvent, state: GameState) -> int:
        """
        Deliver `event` to every listener.

        Args:
            event: The event being raised
            state: The snapshot the event refers to

        Returns:
            Number of listeners that handled the event without raising
        """
        with self._lock:
            listeners = list(self._listeners)

        delivered = 0
        for listener in listeners:
            try:
                listener(event, state)
                delivered += 1
            except Exception as e:
                logger.error(f"Listener failed for event {event.value}: {e}")
        return delivered
