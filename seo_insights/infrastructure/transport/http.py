"""
requests-backed transport.

A single attempt only: no retries, no status interpretation. Connection-level
failures propagate as ``requests.RequestException`` and are classified by the
retry executor.
"""

from __future__ import annotations

from typing import Optional

import requests

from seo_insights.interfaces.services.transport import RequestSpec


class RequestsTransport:
    def __init__(self, session: Optional[requests.Session] = None, user_agent: str = "seo-insights/0.1") -> None:
        self.session = session or requests.Session()
        self.user_agent = user_agent

    def send(self, spec: RequestSpec) -> requests.Response:
        headers = {"Content-Type": "application/json", "User-Agent": self.user_agent}
        headers.update(spec.headers)
        return self.session.post(spec.url, json=spec.body, headers=headers, timeout=spec.timeout)

    def close(self) -> None:
        self.session.close()
