"""
Tool Groups — several related operations sharing one backend client

A group declares its operations by tool name. Each operation becomes one
GroupTool in the registry; the group itself is never routed to by name prefix.
"""

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, FrozenSet, Iterable, List, Optional

from ecm_mcp.client import EcmApiClient
from ecm_mcp.tools.base import Tool, ToolResult

Handler = Callable[[Dict[str, Any]], Awaitable[Any]]


class Operation:
    """Static definition of one group operation."""

    __slots__ = ("name", "description", "input_schema", "tags", "handler")

    def __init__(
        self,
        name: str,
        description: str,
        input_schema: Dict[str, Any],
        handler: Handler,
        tags: Iterable[str] = (),
    ):
        self.name = name
        self.description = description
        self.input_schema = input_schema
        self.handler = handler
        self.tags = frozenset(tags)


class GroupTool(Tool):
    """A single registry entry backed by one operation of a group."""

    def __init__(self, group: "ToolGroup", operation: Operation):
        self._group = group
        self._operation = operation

    @property
    def name(self) -> str:
        return self._operation.name

    @property
    def description(self) -> str:
        return self._operation.description

    @property
    def input_schema(self) -> Dict[str, Any]:
        return self._operation.input_schema

    @property
    def tags(self) -> FrozenSet[str]:
        return self._operation.tags

    async def _run(self, arguments: Dict[str, Any]) -> ToolResult:
        data = await self._operation.handler(arguments)
        return ToolResult.ok(data)


class ToolGroup(ABC):
    """Base class for a bundle of related ECM operations."""

    def __init__(self, client: EcmApiClient):
        self._client = client
        self._operations: Dict[str, Operation] = {
            op.name: op for op in self.operations()
        }
        self._tools: Dict[str, GroupTool] = {
            name: GroupTool(self, op) for name, op in self._operations.items()
        }

    @abstractmethod
    def operations(self) -> List[Operation]:
        """Subclasses return their operations in display order."""

    def list_definitions(self) -> List[Dict[str, Any]]:
        return [tool.descriptor() for tool in self._tools.values()]

    def tools(self) -> List[Tool]:
        return list(self._tools.values())

    def get(self, operation_name: str) -> Optional[Tool]:
        return self._tools.get(operation_name)

    async def execute(self, operation_name: str, params: Optional[Dict[str, Any]]) -> ToolResult:
        """Run one operation by exact name. Never raises."""
        tool = self._tools.get(operation_name)
        if tool is None:
            return ToolResult.fail(f"Unknown tool: {operation_name}", "ToolNotFound")
        return await tool.execute(params)
