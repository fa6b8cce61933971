"""
Shared test fixtures and utilities for invocation testing.

Nothing here touches the network: the transport is a scripted fake that
returns canned responses or raises canned errors, sleeps are recorded instead
of slept, and the clock is fixed.
"""

import os
import sys
import json
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Union

import pytest
import requests

# Ensure project root is on sys.path so package imports resolve in tests
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

from seo_insights.infrastructure.gemini.client import GeminiClient
from seo_insights.infrastructure.tools.registry import default_registry
from seo_insights.infrastructure.transport.retry import RetryExecutor
from seo_insights.orchestration.coordinator import InvocationCoordinator
from seo_insights.orchestration.session import Session
from seo_insights.settings.credentials import GEMINI_KEY
from seo_insights.settings.memory import InMemoryKeyValueStore

VALID_KEY = "AIza-test-key-0123456789"
FIXED_NOW = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

REPORT_TEXT = (
    '{"targetTopic":"cloud storage","relatedKeywords":["a","b","c"],'
    '"contentStructure":[{"sectionTitle":"S1","coverageGoal":"G1"}]}'
)


# -----------------------------------------------------------------------------
# Fakes
# -----------------------------------------------------------------------------

class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: Optional[str] = None) -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


Step = Union[FakeResponse, BaseException, Callable[[], FakeResponse]]


class ScriptedTransport:
    """
    Replays a list of steps, one per send(): a FakeResponse is returned, an
    exception is raised, a callable is invoked (so a test can act "during"
    the request) and its return value used. The last step repeats.
    """

    def __init__(self, steps: List[Step]) -> None:
        self.steps = list(steps)
        self.calls: List[Any] = []
        self.closed = False

    def send(self, spec):
        self.calls.append(spec)
        step = self.steps[min(len(self.calls) - 1, len(self.steps) - 1)]
        if isinstance(step, BaseException):
            raise step
        if callable(step):
            return step()
        return step

    def close(self) -> None:
        self.closed = True


class RecordingSleep:
    def __init__(self) -> None:
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def gemini_body(text: Optional[str]) -> Dict[str, Any]:
    if text is None:
        return {"candidates": [{"content": {"parts": [{}]}}]}
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def ok(text: Optional[str]) -> FakeResponse:
    return FakeResponse(200, gemini_body(text))


def connection_error() -> requests.ConnectionError:
    return requests.ConnectionError("connection refused")


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def registry():
    return default_registry()


@pytest.fixture
def store():
    return InMemoryKeyValueStore({GEMINI_KEY: VALID_KEY})


@pytest.fixture
def sleeper():
    return RecordingSleep()


@pytest.fixture
def make_coordinator(registry, store, sleeper):
    """Factory: build a coordinator around a scripted transport."""

    def _make(steps: List[Step], max_attempts: int = 3, default_tool: Optional[str] = None):
        transport = ScriptedTransport(steps)
        executor = RetryExecutor(transport, max_attempts=max_attempts, base_delay_ms=1000,
                                 sleep=sleeper, jitter=lambda a, b: 0.0)
        coordinator = InvocationCoordinator(
            registry=registry,
            executor=executor,
            client=GeminiClient(model="gemini-test"),
            session=Session(default_tool or registry.core_tool.id),
            credentials=store,
            clock=lambda: FIXED_NOW,
        )
        return coordinator, transport

    return _make
