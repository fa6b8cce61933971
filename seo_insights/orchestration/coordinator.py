"""
Invocation coordinator

Turns (tool, user input, credential) into a StructuredResult, a TextResult or
a classified InvocationError, and writes it into the Session.

Per-invocation states:
  IDLE -> VALIDATING -> REQUESTING -> SUCCEEDED | FAILED

- The acceptance gate runs before VALIDATING: while the session is loading,
  invoke() raises InvocationInProgressError and nothing else happens.
- VALIDATING never touches the network.
- REQUESTING branches once on the descriptor kind: the core tool is parsed
  against the report schema, every other tool yields text.
- invoke() never raises an InvocationError; failures are returned and
  surfaced to the session like results.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from seo_insights.abstractions.dto.invocation import (
    InvocationRequest,
    StructuredResult,
    TextResult,
    is_usable_credential,
    MIN_CREDENTIAL_LENGTH,
)
from seo_insights.abstractions.dto.tools import ToolDescriptor, ToolKind
from seo_insights.exceptions import (
    EmptyInputError,
    EmptyResponseBodyError,
    InvocationError,
    MissingCredentialError,
)
from seo_insights.infrastructure.gemini.client import GeminiClient
from seo_insights.interfaces.services.tools import IToolCatalog
from seo_insights.interfaces.services.transport import IRequestExecutor
from seo_insights.settings.credentials import GEMINI_KEY
from seo_insights.settings.interfaces import KeyValueStore

from .session import Outcome, Session, SessionState

logger = logging.getLogger(__name__)


class InvocationPhase(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    REQUESTING = "requesting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InvocationCoordinator:
    def __init__(
        self,
        registry: IToolCatalog,
        executor: IRequestExecutor,
        client: GeminiClient,
        session: Session,
        credentials: KeyValueStore,
        credential_key: str = GEMINI_KEY,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.registry = registry
        self.executor = executor
        self.client = client
        self.session = session
        self.credentials = credentials
        self.credential_key = credential_key
        self._clock = clock

    # ---------- Session events ----------

    @property
    def state(self) -> SessionState:
        return self.session.state

    def switch_tool(self, tool_id: str) -> SessionState:
        """Make ``tool_id`` active. Unknown ids raise UnknownToolError and leave the session alone."""
        descriptor = self.registry.resolve(tool_id)
        logger.debug(f"Switching active tool to '{descriptor.id}'")
        return self.session.switch_tool(descriptor.id)

    def cancel(self) -> SessionState:
        return self.session.cancel()

    def update_credential(self, value: Optional[str]) -> SessionState:
        """Persist a new credential; anything in flight was started with the old one."""
        self.credentials.set(self.credential_key, value)
        return self.cancel()

    def close(self) -> None:
        """Release the underlying HTTP session."""
        self.executor.close()

    # ---------- Invocation ----------

    def submit(self, user_input: str, tool_id: Optional[str] = None) -> Outcome:
        """Invoke ``tool_id`` (default: the active tool) with the stored credential."""
        request = InvocationRequest(
            tool_id=tool_id or self.session.state.active_tool_id,
            user_input=user_input,
            credential=self.credentials.get(self.credential_key),
        )
        return self.invoke(request)

    def invoke(self, request: InvocationRequest) -> Outcome:
        """
        Run one invocation to completion.

        Raises:
            InvocationInProgressError: If the session is already loading
        """
        self.session.ensure_idle()

        phase = InvocationPhase.VALIDATING
        logger.debug(f"[{request.tool_id}] {InvocationPhase.IDLE.value} -> {phase.value}")
        try:
            descriptor = self._validate(request)
        except InvocationError as e:
            e.for_tool(request.tool_id)
            logger.info(f"[{request.tool_id}] rejected: {e.kind.value}: {e.message}")
            self.session.reject(request.tool_id, e)
            return e

        sequence = self.session.begin()
        phase = InvocationPhase.REQUESTING
        logger.debug(f"[{request.tool_id}] -> {phase.value} (sequence {sequence})")

        try:
            outcome: Outcome = self._request(descriptor, request)
            phase = InvocationPhase.SUCCEEDED
        except InvocationError as e:
            outcome = e.for_tool(descriptor.id)
            phase = InvocationPhase.FAILED
            logger.warning(f"[{descriptor.id}] failed: {e.kind.value}: {e.message}")
        except BaseException:
            self.session.abandon(sequence)
            raise

        logger.debug(f"[{descriptor.id}] -> {phase.value} (sequence {sequence})")
        self.session.settle(descriptor.id, sequence, outcome)
        return outcome

    def _validate(self, request: InvocationRequest) -> ToolDescriptor:
        if not is_usable_credential(request.credential):
            raise MissingCredentialError(
                f"An API key longer than {MIN_CREDENTIAL_LENGTH} characters is required"
            )
        if not (request.user_input or "").strip():
            raise EmptyInputError("Please enter a topic")
        return self.registry.resolve(request.tool_id)

    def _request(self, descriptor: ToolDescriptor, request: InvocationRequest) -> Outcome:
        spec = self.client.build_request(descriptor, request.user_input, request.credential or "")
        body = self.executor.execute(spec)

        text = self.client.extract_text(body)
        if text is None:
            raise EmptyResponseBodyError("Response contained no candidate text")

        if descriptor.kind is ToolKind.SCHEMA_DRIVEN:
            report = self.client.schema.parse(text)
            return StructuredResult(tool_id=descriptor.id, payload=report)

        if not text.strip():
            raise EmptyResponseBodyError("Response text was empty")
        return TextResult(tool_id=descriptor.id, text=text, produced_at=self._clock())


__all__ = ["InvocationCoordinator", "InvocationPhase"]
