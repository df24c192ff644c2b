"""
High score persistence.

The engine holds a cached high score and talks to one of these stores through
two calls: load_high_score() at construction and save_high_score() when a
round ends with a new best. Stores are allowed to fail; the engine treats
persistence as best-effort.
"""

import logging
import threading

import database
from .repositories import PreferencesRepository

logger = logging.getLogger(__name__)

PREFS_NAMESPACE = "SnakeGamePrefs"
HIGH_SCORE_KEY = "HighScore"


class HighScoreStore:
    """
    Base class/interface for high score persistence.
    """

    def load_high_score(self) -> int:
        """
        Return the persisted high score, 0 if nothing was saved yet.
        """
        raise NotImplementedError

    def save_high_score(self, score: int) -> None:
        raise NotImplementedError


class InMemoryHighScoreStore(HighScoreStore):
    """Process-local store, used by tests and headless runs."""

    def __init__(self, initial: int = 0):
        self._score = initial
        self._lock = threading.Lock()
        self.save_calls = 0

    def load_high_score(self) -> int:
        with self._lock:
            return self._score

    def save_high_score(self, score: int) -> None:
        with self._lock:
            self._score = score
            self.save_calls += 1


class SqliteHighScoreStore(HighScoreStore):
    """
    Store backed by the preferences table of the SQLite database.

    Args:
        repository: Optional preferences repository (mainly for tests)
        init_schema: Create the preferences table if it is missing
    """

    def __init__(self, repository: PreferencesRepository = None, init_schema: bool = True):
        self.repository = repository or PreferencesRepository(PREFS_NAMESPACE)
        if init_schema:
            database.init_database()

    def load_high_score(self) -> int:
        value = self.repository.get_int(HIGH_SCORE_KEY, default=0)
        logger.debug(f"Loaded high score {value} from {database.get_database_path()}")
        return value

    def save_high_score(self, score: int) -> None:
        self.repository.put_int(HIGH_SCORE_KEY, score)
        logger.info(f"Saved high score {score}")

    def reset(self) -> bool:
        """Delete the stored high score. Returns True if a row was removed."""
        return self.repository.delete(HIGH_SCORE_KEY) > 0
