"""
Report schema for the core tool.

``describe()`` is sent to Gemini as ``generationConfig.responseSchema``; the
Chinese descriptions are prompt metadata for the model and play no part in
validation. ``parse()`` turns the model's reply text into a StructuredReport
or raises MalformedSchemaResponseError. Nothing else escapes ``parse``.
"""

from __future__ import annotations

import copy
import json
import logging
from typing import Any, Dict, List

from seo_insights.abstractions.dto.invocation import ContentSection, StructuredReport
from seo_insights.exceptions import MalformedSchemaResponseError

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("targetTopic", "relatedKeywords", "contentStructure")

MIN_KEYWORDS = 3
MAX_KEYWORDS = 5
MIN_SECTIONS = 5

_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "targetTopic": {
            "type": "STRING",
            "description": "用户输入的核心主题或关键词",
        },
        "relatedKeywords": {
            "type": "ARRAY",
            "description": "3到5个与主题高度相关、具有搜索量的长尾关键词",
            "items": {"type": "STRING"},
            "minItems": MIN_KEYWORDS,
            "maxItems": MAX_KEYWORDS,
        },
        "contentStructure": {
            "type": "ARRAY",
            "description": "推荐的文章内容结构，至少5个章节",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "sectionTitle": {"type": "STRING", "description": "章节标题（H2/H3）"},
                    "coverageGoal": {"type": "STRING", "description": "该章节需要覆盖的要点与搜索意图"},
                },
                "required": ["sectionTitle", "coverageGoal"],
                "propertyOrdering": ["sectionTitle", "coverageGoal"],
            },
        },
    },
    "required": list(REQUIRED_FIELDS),
    "propertyOrdering": list(REQUIRED_FIELDS),
}


def _strip_code_fence(s: str) -> str:
    """Strip a Markdown code fence some models wrap JSON replies in."""
    s = s.strip()
    if s.startswith("```json"):
        s = s[7:]
    elif s.startswith("```"):
        s = s[3:]
    if s.endswith("```"):
        s = s[:-3]
    return s.strip()


class ReportSchema:
    def describe(self) -> Dict[str, Any]:
        # Callers embed this in request bodies; hand out a copy.
        return copy.deepcopy(_SCHEMA)

    def parse(self, raw_text: str) -> StructuredReport:
        if not isinstance(raw_text, str) or not raw_text.strip():
            raise MalformedSchemaResponseError("Empty response text")

        try:
            data = json.loads(_strip_code_fence(raw_text))
        except (ValueError, RecursionError) as e:
            raise MalformedSchemaResponseError(f"Response is not valid JSON: {e}", cause=e) from e

        if not isinstance(data, dict):
            raise MalformedSchemaResponseError(f"Expected a JSON object, got {type(data).__name__}")

        missing = [f for f in REQUIRED_FIELDS if f not in data]
        if missing:
            raise MalformedSchemaResponseError(f"Missing required field(s): {', '.join(missing)}")

        topic = data["targetTopic"]
        if not isinstance(topic, str):
            raise MalformedSchemaResponseError("targetTopic must be a string")

        keywords = self._parse_keywords(data["relatedKeywords"])
        sections = self._parse_sections(data["contentStructure"])

        if not MIN_KEYWORDS <= len(keywords) <= MAX_KEYWORDS:
            logger.warning(f"Expected {MIN_KEYWORDS}-{MAX_KEYWORDS} related keywords, got {len(keywords)}")
        if len(sections) < MIN_SECTIONS:
            logger.warning(f"Expected at least {MIN_SECTIONS} content sections, got {len(sections)}")

        return StructuredReport(
            target_topic=topic,
            related_keywords=tuple(keywords),
            content_structure=tuple(sections),
        )

    @staticmethod
    def _parse_keywords(value: Any) -> List[str]:
        if not isinstance(value, list) or not all(isinstance(k, str) for k in value):
            raise MalformedSchemaResponseError("relatedKeywords must be a list of strings")
        return value

    @staticmethod
    def _parse_sections(value: Any) -> List[ContentSection]:
        if not isinstance(value, list):
            raise MalformedSchemaResponseError("contentStructure must be a list")
        sections: List[ContentSection] = []
        for i, item in enumerate(value):
            if not isinstance(item, dict):
                raise MalformedSchemaResponseError(f"contentStructure[{i}] must be an object")
            title = item.get("sectionTitle")
            goal = item.get("coverageGoal")
            if not isinstance(title, str) or not isinstance(goal, str):
                raise MalformedSchemaResponseError(
                    f"contentStructure[{i}] needs string sectionTitle and coverageGoal"
                )
            sections.append(ContentSection(section_title=title, coverage_goal=goal))
        return sections


__all__ = ["ReportSchema", "REQUIRED_FIELDS"]
