"""
Composition module (edge wiring).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from seo_insights.config import Config

if TYPE_CHECKING:
    from seo_insights.infrastructure.tools.registry import ToolRegistry
    from seo_insights.interfaces.services.transport import ITransport
    from seo_insights.orchestration.coordinator import InvocationCoordinator
    from seo_insights.settings.interfaces import KeyValueStore


def build_registry() -> "ToolRegistry":
    from seo_insights.infrastructure.tools.registry import default_registry
    return default_registry()


def build_credential_store(db_path: Optional[str] = None) -> "KeyValueStore":
    """
    Construct and return the env-first credential store backed by SQLite.
    """
    from seo_insights.settings import get_credential_store
    return get_credential_store(db_path=db_path)


def build_coordinator(
    credentials: Optional["KeyValueStore"] = None,
    transport: Optional["ITransport"] = None,
    registry: Optional["ToolRegistry"] = None,
) -> "InvocationCoordinator":
    """
    Construct a coordinator from Config, with optional overrides for tests.
    """
    from seo_insights.infrastructure.gemini.client import GeminiClient
    from seo_insights.infrastructure.transport.http import RequestsTransport
    from seo_insights.infrastructure.transport.retry import RetryExecutor
    from seo_insights.orchestration.coordinator import InvocationCoordinator
    from seo_insights.orchestration.session import Session

    Config.validate()
    registry = registry or build_registry()
    default_tool = Config.DEFAULT_TOOL if Config.DEFAULT_TOOL in registry else registry.core_tool.id

    executor = RetryExecutor(
        transport or RequestsTransport(),
        max_attempts=Config.MAX_ATTEMPTS,
        base_delay_ms=Config.BASE_DELAY_MS,
    )
    client = GeminiClient(model=Config.GEMINI_MODEL, base_url=Config.GEMINI_BASE_URL, timeout=Config.REQUEST_TIMEOUT)
    return InvocationCoordinator(
        registry=registry,
        executor=executor,
        client=client,
        session=Session(default_tool),
        credentials=credentials if credentials is not None else build_credential_store(),
    )
