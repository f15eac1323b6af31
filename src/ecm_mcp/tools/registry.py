"""
Tool Registry — process-wide catalogue of tools, keyed by exact name

Writes take a lock and replace the mapping wholesale; reads work on whatever
mapping is current, so lookups never block behind registration.
"""

import threading
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Set

from ecm_mcp.server.logger import get_logger
from ecm_mcp.tools.base import Tool

log = get_logger("registry")


class ToolRegistry:
    """Central registry for all tools."""

    def __init__(self):
        self._lock = threading.Lock()
        self._tools: Mapping[str, Tool] = MappingProxyType({})

    def register(self, tool: Tool) -> None:
        """Register a tool, replacing any tool already registered under its name."""
        name = tool.name
        with self._lock:
            if name in self._tools:
                log.warning(f"Tool '{name}' is already registered, overwriting")
            updated: Dict[str, Tool] = dict(self._tools)
            updated[name] = tool
            self._tools = MappingProxyType(updated)
        log.info(f"Registered MCP tool: {name} - {tool.description}")

    def register_all(self, tools: Iterable[Tool]) -> None:
        for tool in tools:
            self.register(tool)

    def get(self, name: str) -> Optional[Tool]:
        if not isinstance(name, str):
            return None
        return self._tools.get(name)

    def all(self) -> List[Tool]:
        return list(self._tools.values())

    def names(self) -> Set[str]:
        return set(self._tools)

    def by_tag(self, tag: str) -> List[Tool]:
        return [tool for tool in self._tools.values() if tag in tool.tags]

    def count(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
