"""
Session state

One Session per UI. It owns the mutable state and hands out frozen
SessionState snapshots to readers.

Writers
- InvocationCoordinator: begin() / settle() / reject() / abandon()
- Tool switches and logical cancellation: switch_tool() / cancel()

Correlation
- begin() dispatches a new sequence number.
- switch_tool() and cancel() advance the sequence too, so anything dispatched
  earlier can never be applied afterwards.
- settle() applies an outcome only when its tool id is still active and its
  sequence number is still the latest; otherwise it is dropped.

All mutations run under one re-entrant lock, so a UI thread switching tools
while a worker settles an invocation cannot interleave partial writes.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional, Union

from seo_insights.abstractions.dto.invocation import InvocationResult
from seo_insights.exceptions import InvocationError, InvocationInProgressError

logger = logging.getLogger(__name__)

Outcome = Union[InvocationResult, InvocationError]


@dataclass(frozen=True)
class SessionState:
    active_tool_id: str
    loading: bool = False
    result: Optional[InvocationResult] = None
    error: Optional[InvocationError] = None


class Session:
    def __init__(self, default_tool_id: str) -> None:
        self._lock = threading.RLock()
        self._state = SessionState(active_tool_id=default_tool_id)
        self._sequence = 0

    @property
    def state(self) -> SessionState:
        with self._lock:
            return self._state

    @property
    def sequence(self) -> int:
        with self._lock:
            return self._sequence

    def switch_tool(self, tool_id: str) -> SessionState:
        with self._lock:
            self._sequence += 1
            self._state = SessionState(active_tool_id=tool_id)
            return self._state

    def cancel(self) -> SessionState:
        """Logical cancellation: keep the active tool, forget anything in flight."""
        with self._lock:
            return self.switch_tool(self._state.active_tool_id)

    def ensure_idle(self) -> None:
        """Raise InvocationInProgressError if an invocation is loading."""
        with self._lock:
            if self._state.loading:
                raise InvocationInProgressError(
                    f"An invocation for '{self._state.active_tool_id}' is already in progress"
                )

    def begin(self) -> int:
        """Accept a new invocation and return its sequence number."""
        with self._lock:
            self.ensure_idle()
            self._sequence += 1
            self._state = SessionState(active_tool_id=self._state.active_tool_id, loading=True)
            return self._sequence

    def is_current(self, tool_id: str, sequence: int) -> bool:
        with self._lock:
            return tool_id == self._state.active_tool_id and sequence == self._sequence

    def settle(self, tool_id: str, sequence: int, outcome: Outcome) -> bool:
        """Apply a settled outcome if it still correlates. Returns whether it was applied."""
        with self._lock:
            if not self.is_current(tool_id, sequence):
                if sequence == self._sequence:
                    # Latest dispatch, but for a tool that is not on screen: release the gate.
                    self._state = SessionState(active_tool_id=self._state.active_tool_id)
                logger.info(f"Discarding stale outcome for '{tool_id}' (sequence {sequence}, current {self._sequence})")
                return False
            if isinstance(outcome, InvocationError):
                self._state = SessionState(active_tool_id=tool_id, error=outcome)
            else:
                self._state = SessionState(active_tool_id=tool_id, result=outcome)
            return True

    def abandon(self, sequence: int) -> None:
        """Release the gate for an invocation that ended without an outcome."""
        with self._lock:
            if sequence == self._sequence and self._state.loading:
                self._state = SessionState(active_tool_id=self._state.active_tool_id)

    def reject(self, tool_id: str, error: InvocationError) -> bool:
        """Surface a validation error that never reached dispatch."""
        with self._lock:
            if self._state.loading or tool_id != self._state.active_tool_id:
                return False
            self._state = SessionState(active_tool_id=tool_id, error=error)
            return True


__all__ = ["Session", "SessionState", "Outcome"]
