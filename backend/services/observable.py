"""
Observable value cell used to publish engine state to renderers and other observers.

Observers always see a complete value: publishing swaps the reference under a
lock, and callbacks run after the swap with the value that was published.
"""

import logging
import threading
from typing import Callable, Generic, List, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Observable(Generic[T]):
    """
    Holds the latest value and notifies subscribers when it changes.

    Equal consecutive values are conflated, so subscribers only hear about
    real changes.
    """

    def __init__(self, initial: T, name: str = "observable"):
        self._value = initial
        self._name = name
        self._lock = threading.Lock()
        self._subscribers: List[Callable[[T], None]] = []

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> bool:
        """
        Publish a new value.

        Returns:
            True if subscribers were notified, False if the value was unchanged
        """
        with self._lock:
            if value == self._value:
                return False
            self._value = value
            subscribers = list(self._subscribers)

        for callback in subscribers:
            try:
                callback(value)
            except Exception:
                logger.exception(f"Subscriber of {self._name} failed")
        return True

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """
        Register `callback` for future values.

        Returns:
            A callable that removes the subscription
        """
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def __repr__(self):
        return f"<Observable {self._name}={self._value!r}>"
