"""
Invocation DTOs: the request, the parsed core-tool report and the two result shapes.

These are plain frozen dataclasses so they can be shared with readers of the
session without copying.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, Dict, Optional, Tuple, Union

# A credential must be strictly longer than this to be considered usable.
MIN_CREDENTIAL_LENGTH = 10


def is_usable_credential(credential: Optional[str]) -> bool:
    return bool(credential) and len(credential) > MIN_CREDENTIAL_LENGTH


@dataclass(frozen=True)
class InvocationRequest:
    tool_id: str
    user_input: str
    credential: Optional[str] = field(default=None, repr=False)


@dataclass(frozen=True)
class ContentSection:
    section_title: str
    coverage_goal: str


@dataclass(frozen=True)
class StructuredReport:
    target_topic: str
    related_keywords: Tuple[str, ...]
    content_structure: Tuple[ContentSection, ...]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize back to the wire field names."""
        return {
            "targetTopic": self.target_topic,
            "relatedKeywords": list(self.related_keywords),
            "contentStructure": [
                {"sectionTitle": s.section_title, "coverageGoal": s.coverage_goal}
                for s in self.content_structure
            ],
        }


@dataclass(frozen=True)
class StructuredResult:
    kind: ClassVar[str] = "structured"

    tool_id: str
    payload: StructuredReport


@dataclass(frozen=True)
class TextResult:
    kind: ClassVar[str] = "text"

    tool_id: str
    text: str
    produced_at: datetime


InvocationResult = Union[StructuredResult, TextResult]

__all__ = [
    "MIN_CREDENTIAL_LENGTH",
    "is_usable_credential",
    "InvocationRequest",
    "ContentSection",
    "StructuredReport",
    "StructuredResult",
    "TextResult",
    "InvocationResult",
]
