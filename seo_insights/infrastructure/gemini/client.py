"""
Gemini generateContent request builder and response reader.

Responsibilities:
- build_request(descriptor, user_input, credential) -> RequestSpec
  * search grounding is always requested
  * the report schema is attached only for the core tool
- extract_text(body) -> Optional[str]
  * reads candidates[0].content.parts[0].text; None when the path is absent

The credential travels in the x-goog-api-key header rather than the query
string so it never shows up in logged URLs.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from seo_insights.abstractions.dto.tools import ToolDescriptor
from seo_insights.infrastructure.schema.report_schema import ReportSchema
from seo_insights.interfaces.services.transport import RequestSpec

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.5-flash"
SEARCH_GROUNDING_TOOL = "google_search"


class GeminiClient:
    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 60.0,
        schema: Optional[ReportSchema] = None,
    ) -> None:
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.schema = schema or ReportSchema()

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def build_body(self, descriptor: ToolDescriptor, user_input: str) -> Dict[str, Any]:
        prompt = descriptor.build_prompt(user_input)
        body: Dict[str, Any] = {
            "contents": [{"parts": [{"text": prompt.user_query}]}],
            "tools": [{SEARCH_GROUNDING_TOOL: {}}],
            "systemInstruction": {"parts": [{"text": prompt.system_prompt}]},
        }
        if descriptor.is_core:
            body["generationConfig"] = {
                "responseMimeType": "application/json",
                "responseSchema": self.schema.describe(),
            }
        return body

    def build_request(self, descriptor: ToolDescriptor, user_input: str, credential: str) -> RequestSpec:
        return RequestSpec(
            url=self.endpoint,
            body=self.build_body(descriptor, user_input),
            headers={"x-goog-api-key": credential},
            timeout=self.timeout,
        )

    @staticmethod
    def extract_text(body: Any) -> Optional[str]:
        try:
            text = body["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            return None
        return text if isinstance(text, str) else None


__all__ = ["GeminiClient", "DEFAULT_BASE_URL", "DEFAULT_MODEL", "SEARCH_GROUNDING_TOOL"]
