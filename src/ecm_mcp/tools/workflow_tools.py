"""
Workflow Tools

Tools:
  ecm_start_workflow       — Start a named workflow on a document
  ecm_get_workflow_status  — Status of a workflow instance
"""

from typing import Any, Dict, List

from ecm_mcp.server.logger import get_logger
from ecm_mcp.tools.base import optional_mapping, require_str
from ecm_mcp.tools.groups import Operation, ToolGroup
from ecm_mcp.tools.schema import SchemaBuilder

log = get_logger("tools.workflow")


class WorkflowTools(ToolGroup):

    def operations(self) -> List[Operation]:
        return [
            Operation(
                name="ecm_start_workflow",
                description="Start a workflow on a document",
                input_schema=(
                    SchemaBuilder.object()
                    .property("documentId", SchemaBuilder.string()
                              .description("Document ID")
                              .required(True))
                    .property("workflowName", SchemaBuilder.string()
                              .description("Name of the workflow to start")
                              .required(True))
                    .property("parameters", SchemaBuilder.object()
                              .description("Optional workflow parameters"))
                    .build()
                ),
                handler=self._start_workflow,
                tags=("workflow", "write"),
            ),
            Operation(
                name="ecm_get_workflow_status",
                description="Get the status of a workflow instance",
                input_schema=(
                    SchemaBuilder.object()
                    .property("workflowId", SchemaBuilder.string()
                              .description("Workflow instance ID")
                              .required(True))
                    .build()
                ),
                handler=self._get_workflow_status,
                tags=("workflow", "read"),
            ),
        ]

    async def _start_workflow(self, args: Dict[str, Any]) -> Any:
        document_id = require_str(args, "documentId")
        workflow_name = require_str(args, "workflowName")
        parameters = optional_mapping(args, "parameters")
        log.info(
            f"Executing ecm_start_workflow: workflow='{workflow_name}', "
            f"documentId='{document_id}'"
        )
        return await self._client.start_workflow(document_id, workflow_name, parameters)

    async def _get_workflow_status(self, args: Dict[str, Any]) -> Any:
        workflow_id = require_str(args, "workflowId")
        log.info(f"Executing ecm_get_workflow_status: {workflow_id}")
        return await self._client.get_workflow_status(workflow_id)
