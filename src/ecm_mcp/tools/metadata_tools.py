"""
Metadata Tools

Tools:
  ecm_get_metadata     — Read a document's metadata map
  ecm_update_metadata  — Patch a document's metadata map
"""

from typing import Any, Dict, List

from ecm_mcp.server.logger import get_logger
from ecm_mcp.tools.base import require_mapping, require_str
from ecm_mcp.tools.groups import Operation, ToolGroup
from ecm_mcp.tools.schema import SchemaBuilder

log = get_logger("tools.metadata")


class MetadataTools(ToolGroup):

    def operations(self) -> List[Operation]:
        return [
            Operation(
                name="ecm_get_metadata",
                description="Get metadata for a document",
                input_schema=(
                    SchemaBuilder.object()
                    .property("documentId", SchemaBuilder.string()
                              .description("Document ID")
                              .required(True))
                    .build()
                ),
                handler=self._get_metadata,
                tags=("metadata", "read"),
            ),
            Operation(
                name="ecm_update_metadata",
                description="Update metadata for a document",
                input_schema=(
                    SchemaBuilder.object()
                    .property("documentId", SchemaBuilder.string()
                              .description("Document ID")
                              .required(True))
                    .property("metadata", SchemaBuilder.object()
                              .description("Metadata key-value pairs to update")
                              .required(True))
                    .build()
                ),
                handler=self._update_metadata,
                tags=("metadata", "write"),
            ),
        ]

    async def _get_metadata(self, args: Dict[str, Any]) -> Any:
        document_id = require_str(args, "documentId")
        log.info(f"Executing ecm_get_metadata: {document_id}")
        return await self._client.get_metadata(document_id)

    async def _update_metadata(self, args: Dict[str, Any]) -> Any:
        document_id = require_str(args, "documentId")
        metadata = require_mapping(args, "metadata")
        log.info(f"Executing ecm_update_metadata: {document_id} ({len(metadata)} keys)")
        return await self._client.update_metadata(document_id, metadata)
