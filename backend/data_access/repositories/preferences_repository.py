"""
Preferences repository: namespaced integer key-value rows.
"""

from typing import Optional

from .base import BaseRepository


class PreferencesRepository(BaseRepository):
    """
    Repository for preferences table operations.
    """

    def __init__(self, namespace: str):
        self.namespace = namespace

    def get_int(self, key: str, default: Optional[int] = None) -> Optional[int]:
        """
        Read one value.

        Args:
            key: Preference key within this repository's namespace
            default: Returned when the key is absent

        Returns:
            The stored integer or `default`
        """
        with self.read_connection() as (conn, cursor):
            cursor.execute(
                "SELECT value FROM preferences WHERE namespace = ? AND key = ?",
                (self.namespace, key),
            )
            row = cursor.fetchone()
            return row['value'] if row else default

    def put_int(self, key: str, value: int) -> None:
        with self.connection() as (conn, cursor):
            cursor.execute(
                """
                INSERT INTO preferences (namespace, key, value, updated_at)
                VALUES (?, ?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(namespace, key)
                DO UPDATE SET value = excluded.value, updated_at = CURRENT_TIMESTAMP
                """,
                (self.namespace, key, int(value)),
            )

    def delete(self, key: str) -> int:
        """Remove a key. Returns the number of rows deleted."""
        with self.connection() as (conn, cursor):
            cursor.execute(
                "DELETE FROM preferences WHERE namespace = ? AND key = ?",
                (self.namespace, key),
            )
            return cursor.rowcount

