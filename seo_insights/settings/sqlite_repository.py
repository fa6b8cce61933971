"""
SQLite key-value store (Infrastructure)

- Implements KeyValueStore to persist the API key and small preferences
  (last active tool, etc.) between CLI runs.
- No dependencies on presentation; pure infrastructure
"""

from __future__ import annotations

import os
import sqlite3
import threading
from pathlib import Path
from typing import Optional, Dict

from .interfaces import KeyValueStore


class SqliteKeyValueStore(KeyValueStore):
    """
    SQLite-backed implementation.

    Schema:
      - kv(key TEXT PRIMARY KEY, value TEXT)
    """

    def __init__(self, db_path: Optional[str] = None) -> None:
        if db_path is None:
            # Default DB location: $SEO_DATA_DIR/data/settings.db (creates directory)
            default_dir = Path(os.getenv("SEO_DATA_DIR", ".")) / "data"
            default_dir.mkdir(parents=True, exist_ok=True)
            db_path = str(default_dir / "settings.db")
        self.db_path = db_path
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self._conn.execute("PRAGMA journal_mode=WAL;")
        self._conn.execute("PRAGMA synchronous=NORMAL;")
        self._ensure_schema()

    def _ensure_schema(self) -> None:
        with self._lock:
            self._conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                  key   TEXT PRIMARY KEY,
                  value TEXT
                )
                """
            )
            self._conn.commit()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            row = self._conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        return row[0] if row else None

    def set(self, key: str, value: Optional[str]) -> None:
        with self._lock:
            if value is None or value == "":
                self._conn.execute("DELETE FROM kv WHERE key = ?", (key,))
            else:
                self._conn.execute(
                    "INSERT INTO kv(key, value) VALUES(?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                    (key, value),
                )
            self._conn.commit()

    def all(self) -> Dict[str, str]:
        with self._lock:
            rows = self._conn.execute("SELECT key, value FROM kv").fetchall()
        return {row[0]: row[1] for row in rows}

    def close(self) -> None:
        with self._lock:
            self._conn.close()
