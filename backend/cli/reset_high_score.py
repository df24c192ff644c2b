#!/usr/bin/env python3
"""
Reset the persisted high score.

Deletes the stored high score from the preferences table so the next
engine starts from 0. Other preferences are left alone.

Usage:
    python backend/cli/reset_high_score.py [--confirm]
"""

import os
import sys
import argparse

# Add parent directory to path to import database modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from database import get_database_path  # noqa: E402
from data_access.high_score_store import SqliteHighScoreStore  # noqa: E402


def reset_high_score(confirm: bool = False, store: SqliteHighScoreStore = None) -> bool:
    """
    Remove the stored high score.

    Args:
        confirm: If True, skip confirmation prompt
        store: Store to reset (defaults to the configured SQLite database)

    Returns:
        True if reset was successful, False otherwise
    """
    if not confirm:
        print("=" * 70)
        print("HIGH SCORE RESET")
        print("=" * 70)
        print(f"Database path: {get_database_path()}")
        print("\nThis will DELETE the saved high score.")
        print("=" * 70)

        response = input("\nType 'RESET' to confirm: ")

        if response != 'RESET':
            print("Reset cancelled")
            return False

    try:
        store = store or SqliteHighScoreStore()
        previous = store.load_high_score()
        removed = store.reset()
    except Exception as e:
        print(f"\nError resetting high score: {e}")
        return False

    if removed:
        print(f"High score {previous} cleared")
    else:
        print("No high score stored; nothing to clear")
    return True


def main():
    parser = argparse.ArgumentParser(
        description="Reset the persisted high score"
    )
    parser.add_argument(
        '--confirm',
        action='store_true',
        help="Skip confirmation prompt"
    )

    args = parser.parse_args()

    success = reset_high_score(confirm=args.confirm)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
