"""
Retry executor

Performs one logical POST with bounded, backoff-delayed retries.

Behavior
- Attempts are numbered 0..max_attempts-1.
- Every failure is retried the same way: connection errors, non-2xx statuses
  and undecodable bodies alike. Failure-specific policy belongs to callers.
- Between attempts the executor sleeps ``base_delay_ms * 2**attempt`` plus an
  additive jitter drawn from [0, 1000] ms.
- On success the decoded JSON body is returned as-is.

The loop is written as an explicit state machine
(ATTEMPTING -> WAITING -> ATTEMPTING ... -> SUCCEEDED | FAILED) so the
transitions can be logged and tested with an injected ``sleep``.
"""

from __future__ import annotations

import logging
import random
import time
from enum import Enum
from typing import Any, Callable, Dict, Optional

import requests

from seo_insights.exceptions import (
    ExhaustedRetriesError,
    HttpStatusError,
    InvocationError,
    NetworkFailureError,
)
from seo_insights.interfaces.services.transport import ITransport, RequestSpec

logger = logging.getLogger(__name__)

MAX_JITTER_MS = 1000.0


class RetryState(str, Enum):
    ATTEMPTING = "attempting"
    WAITING = "waiting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class RetryExecutor:
    def __init__(
        self,
        transport: ITransport,
        max_attempts: int = 3,
        base_delay_ms: float = 1000,
        sleep: Callable[[float], None] = time.sleep,
        jitter: Callable[[float, float], float] = random.uniform,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if base_delay_ms < 0:
            raise ValueError("base_delay_ms must be >= 0")
        self.transport = transport
        self.max_attempts = max_attempts
        self.base_delay_ms = base_delay_ms
        self._sleep = sleep
        self._jitter = jitter

    def delay_ms(self, attempt: int) -> float:
        """Backoff before the retry that follows ``attempt``."""
        return self.base_delay_ms * (2 ** attempt) + self._jitter(0.0, MAX_JITTER_MS)

    def execute(self, spec: RequestSpec) -> Dict[str, Any]:
        attempt = 0
        state = RetryState.ATTEMPTING
        last_error: Optional[InvocationError] = None
        body: Dict[str, Any] = {}

        while state not in (RetryState.SUCCEEDED, RetryState.FAILED):
            if state is RetryState.ATTEMPTING:
                logger.debug(f"Attempt {attempt + 1}/{self.max_attempts} -> {spec.url}")
                try:
                    body = self._attempt(spec)
                    state = RetryState.SUCCEEDED
                except InvocationError as e:
                    last_error = e
                    logger.warning(f"Attempt {attempt + 1}/{self.max_attempts} failed: {e}")
                    state = RetryState.WAITING if attempt + 1 < self.max_attempts else RetryState.FAILED
            elif state is RetryState.WAITING:
                delay = self.delay_ms(attempt)
                logger.debug(f"Backing off {delay:.0f}ms before attempt {attempt + 2}")
                self._sleep(delay / 1000.0)
                attempt += 1
                state = RetryState.ATTEMPTING

        if state is RetryState.FAILED:
            logger.error(f"Giving up after {self.max_attempts} attempt(s)")
            raise ExhaustedRetriesError(self.max_attempts, cause=last_error)
        return body

    def close(self) -> None:
        self.transport.close()

    def _attempt(self, spec: RequestSpec) -> Dict[str, Any]:
        """One transport round trip, with every failure mapped to a typed error."""
        try:
            response = self.transport.send(spec)
        except (requests.RequestException, OSError) as e:
            raise NetworkFailureError(f"Transport error: {e}", cause=e) from e

        if not 200 <= response.status_code < 300:
            raise HttpStatusError(response.status_code, body=response.text or "")

        try:
            return response.json()
        except ValueError as e:
            raise NetworkFailureError(f"Undecodable response body: {e}", cause=e) from e
