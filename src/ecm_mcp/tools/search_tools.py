"""
Search Tools — full-text and filtered document search

Tools:
  ecm_search_documents  — Text query search
  ecm_advanced_search   — Query plus folder, type, date range and tag filters
"""

from typing import Any, Dict, List

from ecm_mcp.client import SearchRequest
from ecm_mcp.server.logger import get_logger
from ecm_mcp.tools.base import (
    ArgumentError,
    optional_date,
    optional_int,
    optional_str,
    optional_str_list,
    require_str,
)
from ecm_mcp.tools.groups import Operation, ToolGroup
from ecm_mcp.tools.schema import SchemaBuilder

log = get_logger("tools.search")

DEFAULT_MAX_RESULTS = 50
MAX_RESULTS_LIMIT = 1000


def _query() -> SchemaBuilder:
    return SchemaBuilder.string().description("Search query text").required(True)


def _max_results() -> SchemaBuilder:
    return (
        SchemaBuilder.integer()
        .description(f"Maximum number of results to return (default: {DEFAULT_MAX_RESULTS})")
        .minimum(1)
        .maximum(MAX_RESULTS_LIMIT)
        .default_value(DEFAULT_MAX_RESULTS)
    )


def _max_results_arg(args: Dict[str, Any]) -> int:
    return optional_int(args, "maxResults", DEFAULT_MAX_RESULTS, minimum=1, maximum=MAX_RESULTS_LIMIT)


class SearchTools(ToolGroup):

    def operations(self) -> List[Operation]:
        return [
            Operation(
                name="ecm_search_documents",
                description="Search for documents using a text query",
                input_schema=(
                    SchemaBuilder.object()
                    .property("query", _query())
                    .property("maxResults", _max_results())
                    .build()
                ),
                handler=self._search_documents,
                tags=("search", "read"),
            ),
            Operation(
                name="ecm_advanced_search",
                description=(
                    "Perform advanced search with filters for document type, "
                    "date range, folder, and tags"
                ),
                input_schema=(
                    SchemaBuilder.object()
                    .property("query", _query())
                    .property("folderId", SchemaBuilder.string()
                              .description("Filter by folder ID"))
                    .property("documentType", SchemaBuilder.string()
                              .description("Filter by document type (e.g., 'pdf', 'contract', 'invoice')"))
                    .property("dateFrom", SchemaBuilder.string()
                              .description("Start date for filtering (ISO format: YYYY-MM-DD)")
                              .format("date"))
                    .property("dateTo", SchemaBuilder.string()
                              .description("End date for filtering (ISO format: YYYY-MM-DD)")
                              .format("date"))
                    .property("tags", SchemaBuilder.array()
                              .items(SchemaBuilder.string())
                              .description("Filter by tags"))
                    .property("maxResults", _max_results())
                    .build()
                ),
                handler=self._advanced_search,
                tags=("search", "read"),
            ),
        ]

    async def _search_documents(self, args: Dict[str, Any]) -> Any:
        query = require_str(args, "query")
        max_results = _max_results_arg(args)
        log.info(f"Executing ecm_search_documents: query='{query}', maxResults={max_results}")
        return await self._client.search_documents(
            SearchRequest(query=query, max_results=max_results)
        )

    async def _advanced_search(self, args: Dict[str, Any]) -> Any:
        query = require_str(args, "query")
        date_from = optional_date(args, "dateFrom")
        date_to = optional_date(args, "dateTo")
        if date_from and date_to and date_from > date_to:
            raise ArgumentError("dateFrom must not be after dateTo")
        request = SearchRequest(
            query=query,
            max_results=_max_results_arg(args),
            folder_id=optional_str(args, "folderId"),
            document_type=optional_str(args, "documentType"),
            date_from=date_from,
            date_to=date_to,
            tags=optional_str_list(args, "tags"),
        )
        log.info(f"Executing ecm_advanced_search: query='{query}'")
        return await self._client.search_documents(request)
