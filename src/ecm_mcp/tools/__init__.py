"""
ECM MCP Tools

Groups (registered in this order):
  document_tools  — 2 document tools
  search_tools    — 2 search tools
  folder_tools    — 2 folder tools
  metadata_tools  — 2 metadata tools
  version_tools   — 1 version tool
  workflow_tools  — 2 workflow tools
"""

from typing import List

from ecm_mcp.client import EcmApiClient
from ecm_mcp.tools.base import Tool, ToolResult
from ecm_mcp.tools.document_tools import DocumentTools
from ecm_mcp.tools.folder_tools import FolderTools
from ecm_mcp.tools.groups import ToolGroup
from ecm_mcp.tools.metadata_tools import MetadataTools
from ecm_mcp.tools.registry import ToolRegistry
from ecm_mcp.tools.search_tools import SearchTools
from ecm_mcp.tools.version_tools import VersionTools
from ecm_mcp.tools.workflow_tools import WorkflowTools

GROUP_CLASSES = (
    DocumentTools,
    SearchTools,
    FolderTools,
    MetadataTools,
    VersionTools,
    WorkflowTools,
)


def build_groups(client: EcmApiClient) -> List[ToolGroup]:
    return [group_cls(client) for group_cls in GROUP_CLASSES]


def build_registry(client: EcmApiClient) -> ToolRegistry:
    """Registry holding every built-in tool, bound to one backend client."""
    registry = ToolRegistry()
    for group in build_groups(client):
        registry.register_all(group.tools())
    return registry


__all__ = ["Tool", "ToolResult", "ToolGroup", "ToolRegistry", "build_groups", "build_registry"]
