"""
Transport ports. The retry executor depends on these; infra implements them.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Protocol


@dataclass(frozen=True)
class RequestSpec:
    """One outbound HTTP POST with a JSON body."""
    url: str
    body: Dict[str, Any]
    headers: Mapping[str, str] = field(default_factory=dict, repr=False)
    timeout: float = 60.0


class HttpResponse(Protocol):
    """The subset of ``requests.Response`` the executor relies on."""
    status_code: int
    text: str

    def json(self) -> Any:
        ...


class ITransport(Protocol):
    def send(self, spec: RequestSpec) -> HttpResponse:
        """Perform a single attempt. Raise on connection-level failures."""
        ...

    def close(self) -> None:
        ...


class IRequestExecutor(Protocol):
    def execute(self, spec: RequestSpec) -> Dict[str, Any]:
        ...

    def close(self) -> None:
        ...


__all__ = ["RequestSpec", "HttpResponse", "ITransport", "IRequestExecutor"]
