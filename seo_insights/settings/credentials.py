"""
Credentials Repository

Purpose
- Resolve the Gemini API key for the coordinator through the plain
  KeyValueStore contract (get/set).
- Prefer environment variables; fall back to the persisted store.

Design
- Non-throwing get(): returns None if a key is not resolved.
- Simple, explicit env var map per store key.
- Writes always go to the backing store; the environment is never mutated.

Usage
- repo = CredentialsRepository(SqliteKeyValueStore())
- key = repo.get(GEMINI_KEY)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict, Optional

from .interfaces import KeyValueStore

GEMINI_KEY = "gemini_api_key"


@dataclass
class KeyResolution:
    key: str
    value: Optional[str]
    source: str  # "env", "store", "none"


class CredentialsRepository(KeyValueStore):
    """
    Resolve credentials with a strict priority order:

    1) Environment variables (authoritative)
    2) Backing store
    3) None
    """

    ENV_MAP: Dict[str, str] = {
        GEMINI_KEY: "GEMINI_API_KEY",
    }

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def get(self, key: str) -> Optional[str]:
        return self.get_resolution(key).value

    def get_resolution(self, key: str) -> KeyResolution:
        env_var = self.ENV_MAP.get(key)
        if env_var:
            val = (os.getenv(env_var) or "").strip()
            if val:
                return KeyResolution(key=key, value=val, source="env")

        stored = self.store.get(key)
        if stored:
            return KeyResolution(key=key, value=stored, source="store")

        return KeyResolution(key=key, value=None, source="none")

    def set(self, key: str, value: Optional[str]) -> None:
        self.store.set(key, value.strip() if value else value)

    def all(self) -> Dict[str, str]:
        return self.store.all()
