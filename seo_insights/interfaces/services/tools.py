"""
Tool catalog port.
"""
from __future__ import annotations
from typing import Protocol, List, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from seo_insights.abstractions.dto.tools import ToolDescriptor


class IToolCatalog(Protocol):
    @property
    def core_tool(self) -> "ToolDescriptor":
        ...
    def resolve(self, tool_id: str) -> "ToolDescriptor":
        ...
    def get(self, tool_id: str) -> Optional["ToolDescriptor"]:
        ...
    def ids(self) -> List[str]:
        ...
    def list_by_category(self) -> List[Tuple[str, List["ToolDescriptor"]]]:
        ...

__all__ = ["IToolCatalog"]
