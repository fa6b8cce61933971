"""
Settings store abstractions

- The coordinator and the CLI depend only on this contract, not on a concrete DB.
- Infrastructure (sqlite, memory, env overlay) implements it.
"""

from __future__ import annotations

from typing import Protocol, Optional, Dict


class KeyValueStore(Protocol):
    """
    Contract for persisting small string settings such as the API key.
    """

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: Optional[str]) -> None:
        """
        Persist/update a value. Passing None or "" deletes the key.
        """
        ...

    def all(self) -> Dict[str, str]:
        ...
