"""
Document Tools — single-document operations

Tools:
  ecm_get_document     — Fetch a document's details by ID
  ecm_delete_document  — Delete a document
"""

from typing import Any, Dict, List

from ecm_mcp.server.logger import get_logger
from ecm_mcp.tools.base import require_str
from ecm_mcp.tools.groups import Operation, ToolGroup
from ecm_mcp.tools.schema import SchemaBuilder

log = get_logger("tools.document")


class DocumentTools(ToolGroup):

    def operations(self) -> List[Operation]:
        return [
            Operation(
                name="ecm_get_document",
                description="Get detailed information about a document by its ID",
                input_schema=(
                    SchemaBuilder.object()
                    .property("documentId", SchemaBuilder.string()
                              .description("The unique identifier of the document")
                              .required(True))
                    .build()
                ),
                handler=self._get_document,
                tags=("document", "read"),
            ),
            Operation(
                name="ecm_delete_document",
                description="Delete a document from the ECM system",
                input_schema=(
                    SchemaBuilder.object()
                    .property("documentId", SchemaBuilder.string()
                              .description("The unique identifier of the document to delete")
                              .required(True))
                    .build()
                ),
                handler=self._delete_document,
                tags=("document", "write"),
            ),
        ]

    async def _get_document(self, args: Dict[str, Any]) -> Any:
        document_id = require_str(args, "documentId")
        log.info(f"Executing ecm_get_document: {document_id}")
        return await self._client.get_document(document_id)

    async def _delete_document(self, args: Dict[str, Any]) -> Dict[str, Any]:
        document_id = require_str(args, "documentId")
        log.info(f"Executing ecm_delete_document: {document_id}")
        await self._client.delete_document(document_id)
        return {
            "success": True,
            "message": "Document deleted successfully",
            "documentId": document_id,
        }
