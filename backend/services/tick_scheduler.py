"""
Tick scheduler that drives a SnakeGame in the background.

The loop idles with cheap polling while the game is inactive or paused. While
the game is running it sleeps for the current tick delay, which shrinks as the
snake grows, then re-checks the flags and advances the game by one tick.
Ticks never overlap: the next delay is only computed after the previous tick
has completed.
"""

import logging
import threading
from typing import Optional

from domain.constants import IDLE_POLL_MS

logger = logging.getLogger(__name__)


class GameLoop:
    """
    Runs `game.tick()` on its own thread for the lifetime of the engine.

    Args:
        game: Anything exposing is_active/is_paused observables,
              current_delay_ms() and tick() (normally a SnakeGame)
        idle_interval: Seconds to wait between polls while idle
    """

    def __init__(self, game, idle_interval: float = IDLE_POLL_MS / 1000):
        self.game = game
        self.idle_interval = idle_interval
        self.ticks = 0
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _should_idle(self) -> bool:
        return not self.game.is_active.value or self.game.is_paused.value

    def run(self) -> None:
        """Loop until stop() is called. Runs on the calling thread."""
        logger.info("Game loop started")
        while not self._stop_event.is_set():
            if self._should_idle():
                self._stop_event.wait(self.idle_interval)
                continue

            delay_ms = self.game.current_delay_ms()
            if self._stop_event.wait(delay_ms / 1000):
                break

            # The player may have paused or left the round while we slept
            if self._should_idle():
                continue

            try:
                self.game.tick()
                self.ticks += 1
            except Exception:
                logger.exception("Tick failed; stopping game loop")
                raise
        logger.info(f"Game loop stopped after {self.ticks} ticks")

    def start(self) -> None:
        """Start the loop on a daemon thread."""
        if self.is_running:
            logger.warning("Game loop already running")
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self.run, name="game-loop", daemon=True)
        self._thread.start()

    def stop(self, timeout: Optional[float] = 1.0) -> None:
        """Signal the loop to exit and wait for the thread."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
