"""
Folder Tools — folder creation and browsing

Tools:
  ecm_create_folder         — Create a folder, optionally under a parent
  ecm_list_folder_contents  — List documents and/or subfolders of a folder
"""

from typing import Any, Dict, List

from ecm_mcp.server.logger import get_logger
from ecm_mcp.tools.base import optional_bool, optional_str, require_str
from ecm_mcp.tools.groups import Operation, ToolGroup
from ecm_mcp.tools.schema import SchemaBuilder

log = get_logger("tools.folder")


class FolderTools(ToolGroup):

    def operations(self) -> List[Operation]:
        return [
            Operation(
                name="ecm_create_folder",
                description="Create a new folder in the ECM system",
                input_schema=(
                    SchemaBuilder.object()
                    .property("name", SchemaBuilder.string()
                              .description("Name of the folder to create")
                              .required(True))
                    .property("parentId", SchemaBuilder.string()
                              .description("ID of the parent folder (optional, omit for root)"))
                    .property("description", SchemaBuilder.string()
                              .description("Description of the folder (optional)"))
                    .build()
                ),
                handler=self._create_folder,
                tags=("folder", "write"),
            ),
            Operation(
                name="ecm_list_folder_contents",
                description="List the contents of a folder including documents and subfolders",
                input_schema=(
                    SchemaBuilder.object()
                    .property("folderId", SchemaBuilder.string()
                              .description("ID of the folder to list")
                              .required(True))
                    .property("includeDocuments", SchemaBuilder.boolean()
                              .description("Include documents in the results (default: true)")
                              .default_value(True))
                    .property("includeSubfolders", SchemaBuilder.boolean()
                              .description("Include subfolders in the results (default: true)")
                              .default_value(True))
                    .build()
                ),
                handler=self._list_folder_contents,
                tags=("folder", "read"),
            ),
        ]

    async def _create_folder(self, args: Dict[str, Any]) -> Any:
        name = require_str(args, "name")
        parent_id = optional_str(args, "parentId")
        description = optional_str(args, "description")
        log.info(f"Executing ecm_create_folder: name='{name}', parentId='{parent_id}'")
        return await self._client.create_folder(name, parent_id, description)

    async def _list_folder_contents(self, args: Dict[str, Any]) -> Any:
        folder_id = require_str(args, "folderId")
        include_documents = optional_bool(args, "includeDocuments", True)
        include_subfolders = optional_bool(args, "includeSubfolders", True)
        log.info(f"Executing ecm_list_folder_contents: folderId='{folder_id}'")
        return await self._client.get_folder_contents(
            folder_id, include_documents, include_subfolders,
        )
