"""
Version Tools

Tools:
  ecm_get_versions  — Version history of a document
"""

from typing import Any, Dict, List

from ecm_mcp.server.logger import get_logger
from ecm_mcp.tools.base import require_str
from ecm_mcp.tools.groups import Operation, ToolGroup
from ecm_mcp.tools.schema import SchemaBuilder

log = get_logger("tools.version")


class VersionTools(ToolGroup):

    def operations(self) -> List[Operation]:
        return [
            Operation(
                name="ecm_get_versions",
                description="Get version history for a document",
                input_schema=(
                    SchemaBuilder.object()
                    .property("documentId", SchemaBuilder.string()
                              .description("Document ID")
                              .required(True))
                    .build()
                ),
                handler=self._get_versions,
                tags=("version", "read"),
            ),
        ]

    async def _get_versions(self, args: Dict[str, Any]) -> Any:
        document_id = require_str(args, "documentId")
        log.info(f"Executing ecm_get_versions: {document_id}")
        versions = await self._client.get_versions(document_id)
        return versions if versions is not None else []
