"""
SKYLOG Save Database
SQLite key/value store holding one JSON snapshot per game store.
"""

import json
import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..utils import now_ms
from .constants import SAVE_KEY_PREFIX, STORE_NAMES


class SaveDatabase:
    """Manages the SQLite database that persists game snapshots."""

    def __init__(self, db_path: str):
        """
        Initialize database connection.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = db_path
        self._ensure_data_directory()
        self.init_database()

    def _ensure_data_directory(self):
        """Ensure the data directory exists."""
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

    def init_database(self):
        """Initialize database with the saves table."""
        conn = sqlite3.connect(self.db_path)
        cursor = conn.cursor()

        cursor.execute('''
            CREATE TABLE IF NOT EXISTS saves (
                key TEXT PRIMARY KEY,
                data TEXT NOT NULL,
                updated_at INTEGER NOT NULL
            )
        ''')

        conn.commit()
        conn.close()

    @staticmethod
    def _key(name: str) -> str:
        return SAVE_KEY_PREFIX + name

    def save(self, name: str, state: Dict[str, Any]):
        """
        Write a store snapshot, replacing any previous one.

        Args:
            name: Store name ('player', 'planes', 'game', 'stories')
            state: JSON-serializable snapshot
        """
        conn = sqlite3.connect(self.db_path)
        cursor = conn.cursor()

        cursor.execute('''
            INSERT OR REPLACE INTO saves (key, data, updated_at)
            VALUES (?, ?, ?)
        ''', (self._key(name), json.dumps(state, ensure_ascii=False), now_ms()))

        conn.commit()
        conn.close()

    def load(self, name: str) -> Optional[Dict[str, Any]]:
        """
        Read a store snapshot.

        Returns:
            Snapshot dictionary, or None if missing or unreadable
        """
        try:
            conn = sqlite3.connect(self.db_path)
            cursor = conn.cursor()
            cursor.execute('SELECT data FROM saves WHERE key = ?', (self._key(name),))
            row = cursor.fetchone()
            conn.close()
        except sqlite3.Error as e:
            print(f"⚠️  Failed to load {name}: {e}")
            return None

        if row is None:
            return None

        try:
            return json.loads(row[0])
        except ValueError as e:
            print(f"⚠️  Corrupt save for {name}: {e}")
            return None

    def delete(self, name: str):
        """Remove one store snapshot."""
        conn = sqlite3.connect(self.db_path)
        cursor = conn.cursor()
        cursor.execute('DELETE FROM saves WHERE key = ?', (self._key(name),))
        conn.commit()
        conn.close()

    def clear_all_saves(self):
        """Remove every store snapshot (reset the game)."""
        for name in STORE_NAMES:
            self.delete(name)

    def list_saves(self) -> List[Dict[str, Any]]:
        """
        List saved stores.

        Returns:
            List of {'name', 'updated_at', 'size_bytes'} dictionaries
        """
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        cursor = conn.cursor()

        cursor.execute('''
            SELECT key, updated_at, LENGTH(data) AS size_bytes
            FROM saves
            WHERE key LIKE ?
            ORDER BY key
        ''', (SAVE_KEY_PREFIX + '%',))

        saves = [
            {
                'name': row['key'][len(SAVE_KEY_PREFIX):],
                'updated_at': row['updated_at'],
                'size_bytes': row['size_bytes'],
            }
            for row in cursor.fetchall()
        ]

        conn.close()
        return saves
