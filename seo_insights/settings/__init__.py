"""
Credential store factory (composition root helper)

Callers should depend on KeyValueStore (interfaces.py). This module lazily
instantiates the SQLite backend wrapped in the env-first CredentialsRepository
and returns a singleton instance.
"""

from __future__ import annotations

from typing import Optional
from .interfaces import KeyValueStore  # re-exported contract
from .credentials import GEMINI_KEY, CredentialsRepository

_store_singleton: Optional[KeyValueStore] = None


def get_credential_store(db_path: Optional[str] = None) -> KeyValueStore:
    global _store_singleton
    if _store_singleton is None:
        # Lazy import so tests that only need the in-memory store never touch disk
        from .sqlite_repository import SqliteKeyValueStore
        _store_singleton = CredentialsRepository(SqliteKeyValueStore(db_path=db_path))
    return _store_singleton


__all__ = ["KeyValueStore", "GEMINI_KEY", "CredentialsRepository", "get_credential_store"]
