"""
Shared tool DTOs for the catalog.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable


class ToolKind(str, Enum):
    SCHEMA_DRIVEN = "schema_driven"  # structured JSON report validated against the report schema
    FREE_TEXT = "free_text"


@dataclass(frozen=True)
class PromptPair:
    system_prompt: str
    user_query: str


PromptBuilder = Callable[[str], PromptPair]


@dataclass(frozen=True)
class ToolDescriptor:
    id: str
    display_name: str
    category: str
    kind: ToolKind
    prompt_builder: PromptBuilder
    description: str = ""

    @property
    def is_core(self) -> bool:
        return self.kind is ToolKind.SCHEMA_DRIVEN

    def build_prompt(self, user_input: str) -> PromptPair:
        return self.prompt_builder(user_input)


__all__ = ["ToolKind", "PromptPair", "PromptBuilder", "ToolDescriptor"]
