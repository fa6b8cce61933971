from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from seo_insights.abstractions.dto.tools import ToolDescriptor
from seo_insights.exceptions import UnknownToolError

from .catalog import CATEGORY_ORDER, build_catalog


class ToolRegistry:
    """
    Read-only catalog of tool descriptors, indexed by id.

    """

    def __init__(self, descriptors: Iterable[ToolDescriptor], category_order: Sequence[str] = tuple(CATEGORY_ORDER)):
        """
        Build the index and validate the catalog.

        Args:
            descriptors: Tool descriptors in presentation order
            category_order: Fixed order of categories used by list_by_category

        Raises:
            ValueError: On duplicate ids, unknown categories, or anything but
                exactly one core descriptor
        """
        index: Dict[str, ToolDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.id in index:
                raise ValueError(f"Duplicate tool id '{descriptor.id}'")
            if descriptor.category not in category_order:
                raise ValueError(f"Tool '{descriptor.id}' has unknown category '{descriptor.category}'")
            index[descriptor.id] = descriptor

        cores = [d for d in index.values() if d.is_core]
        if len(cores) != 1:
            raise ValueError(f"Expected exactly one core tool, found {len(cores)}")

        self._tools = MappingProxyType(index)
        self._category_order: Tuple[str, ...] = tuple(category_order)
        self._core = cores[0]

    @property
    def core_tool(self) -> ToolDescriptor:
        return self._core

    def resolve(self, tool_id: str) -> ToolDescriptor:
        """
        Get a registered tool by id.

        Args:
            tool_id: Id of the tool to retrieve

        Returns:
            The matching descriptor

        Raises:
            UnknownToolError: If the tool is not registered
        """
        descriptor = self._tools.get(tool_id)
        if descriptor is None:
            raise UnknownToolError(f"Tool '{tool_id}' not found", tool_id=tool_id)
        return descriptor

    def get(self, tool_id: str) -> Optional[ToolDescriptor]:
        return self._tools.get(tool_id)

    def ids(self) -> List[str]:
        return list(self._tools)

    def list_by_category(self) -> List[Tuple[str, List[ToolDescriptor]]]:
        """
        Group tools by category in the fixed category order.

        Returns:
            (category, descriptors) pairs; categories without tools are omitted
        """
        groups: List[Tuple[str, List[ToolDescriptor]]] = []
        for category in self._category_order:
            members = [d for d in self._tools.values() if d.category == category]
            if members:
                groups.append((category, members))
        return groups

    def __contains__(self, tool_id: object) -> bool:
        return tool_id in self._tools

    def __iter__(self) -> Iterator[ToolDescriptor]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)


def default_registry() -> ToolRegistry:
    return ToolRegistry(build_catalog(), CATEGORY_ORDER)


__all__ = ["ToolRegistry", "default_registry"]
