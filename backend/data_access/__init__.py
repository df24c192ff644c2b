"""
Data access layer for letter snake persistence.

This module provides the high score store contract and its SQLite and
in-memory implementations.
"""

from .high_score_store import (
    HighScoreStore,
    InMemoryHighScoreStore,
    SqliteHighScoreStore,
    PREFS_NAMESPACE,
    HIGH_SCORE_KEY,
)

__all__ = [
    'HighScoreStore',
    'InMemoryHighScoreStore',
    'SqliteHighScoreStore',
    'PREFS_NAMESPACE',
    'HIGH_SCORE_KEY',
]
