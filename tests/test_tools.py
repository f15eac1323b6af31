"""Tests for the ECM tool groups."""

from datetime import date

import pytest

from ecm_mcp.client import EcmApiError
from ecm_mcp.tools import build_groups
from ecm_mcp.tools.document_tools import DocumentTools
from ecm_mcp.tools.folder_tools import FolderTools
from ecm_mcp.tools.groups import ToolGroup
from ecm_mcp.tools.metadata_tools import MetadataTools
from ecm_mcp.tools.search_tools import SearchTools
from ecm_mcp.tools.version_tools import VersionTools
from ecm_mcp.tools.workflow_tools import WorkflowTools

# tool name -> (arguments that satisfy validation, backend operation)
VALID_CALLS = {
    "ecm_get_document": ({"documentId": "doc1"}, "get_document"),
    "ecm_delete_document": ({"documentId": "doc1"}, "delete_document"),
    "ecm_search_documents": ({"query": "invoice"}, "search_documents"),
    "ecm_advanced_search": ({"query": "invoice"}, "search_documents"),
    "ecm_create_folder": ({"name": "Contracts"}, "create_folder"),
    "ecm_list_folder_contents": ({"folderId": "f1"}, "get_folder_contents"),
    "ecm_get_metadata": ({"documentId": "doc1"}, "get_metadata"),
    "ecm_update_metadata": ({"documentId": "doc1", "metadata": {"k": "v"}}, "update_metadata"),
    "ecm_get_versions": ({"documentId": "doc1"}, "get_versions"),
    "ecm_start_workflow": ({"documentId": "doc1", "workflowName": "approve"}, "start_workflow"),
    "ecm_get_workflow_status": ({"workflowId": "wf1"}, "get_workflow_status"),
}

MISSING_REQUIRED = [
    ("ecm_get_document", {}, "documentId is required"),
    ("ecm_delete_document", {"documentId": ""}, "documentId is required"),
    ("ecm_search_documents", {"maxResults": 5}, "query is required"),
    ("ecm_advanced_search", {"folderId": "f1"}, "query is required"),
    ("ecm_create_folder", {"parentId": "p"}, "name is required"),
    ("ecm_list_folder_contents", {}, "folderId is required"),
    ("ecm_get_metadata", {"documentId": "  "}, "documentId is required"),
    ("ecm_update_metadata", {"documentId": "doc1"}, "metadata is required"),
    ("ecm_update_metadata", {"documentId": "doc1", "metadata": {}}, "metadata is required"),
    ("ecm_update_metadata", {"metadata": {"k": "v"}}, "documentId is required"),
    ("ecm_get_versions", {}, "documentId is required"),
    ("ecm_start_workflow", {"documentId": "doc1"}, "workflowName is required"),
    ("ecm_start_workflow", {"workflowName": "approve"}, "documentId is required"),
    ("ecm_get_workflow_status", {}, "workflowId is required"),
]


class TestDefinitions:
    def test_every_group_lists_its_definitions(self, fake_client):
        names = []
        for group in build_groups(fake_client):
            for d in group.list_definitions():
                assert set(d) == {"name", "description", "inputSchema", "tags"}
                assert d["inputSchema"]["type"] == "object"
                names.append(d["name"])
        assert sorted(names) == sorted(VALID_CALLS)

    def test_group_without_operations_cannot_be_built(self, fake_client):
        class Incomplete(ToolGroup):
            pass

        with pytest.raises(TypeError):
            Incomplete(fake_client)

    def test_get_document_schema(self, fake_client):
        (d,) = [d for d in DocumentTools(fake_client).list_definitions() if d["name"] == "ecm_get_document"]
        assert d["inputSchema"]["required"] == ["documentId"]
        assert d["inputSchema"]["properties"]["documentId"]["type"] == "string"

    def test_required_lists(self, fake_client):
        schemas = {
            d["name"]: d["inputSchema"]
            for group in build_groups(fake_client)
            for d in group.list_definitions()
        }
        assert schemas["ecm_update_metadata"]["required"] == ["documentId", "metadata"]
        assert schemas["ecm_start_workflow"]["required"] == ["documentId", "workflowName"]
        assert schemas["ecm_advanced_search"]["required"] == ["query"]
        assert schemas["ecm_search_documents"]["properties"]["maxResults"]["default"] == 50
        assert schemas["ecm_list_folder_contents"]["properties"]["includeDocuments"]["default"] is True


class TestValidationPrecedesIO:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("tool_name, args, message", MISSING_REQUIRED)
    async def test_missing_required(self, registry, fake_client, tool_name, args, message):
        result = await registry.get(tool_name).execute(args)
        assert result.success is False
        assert result.error == message
        assert result.error_details == "ArgumentError"
        assert fake_client.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("args", [
        {"query": "q", "maxResults": 0},
        {"query": "q", "maxResults": "ten"},
        {"query": "q", "dateFrom": "yesterday"},
        {"query": "q", "dateFrom": "2024-05-01", "dateTo": "2024-04-01"},
        {"query": "q", "tags": "invoice"},
    ])
    async def test_invalid_advanced_search(self, registry, fake_client, args):
        result = await registry.get("ecm_advanced_search").execute(args)
        assert result.success is False
        assert fake_client.calls == []


class TestBackendFailure:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("tool_name", sorted(VALID_CALLS))
    async def test_backend_error_becomes_error_result(self, registry, fake_client, tool_name):
        args, operation = VALID_CALLS[tool_name]
        fake_client.fail(operation, EcmApiError(500, "Backend exploded: Internal Server Error"))
        result = await registry.get(tool_name).execute(args)
        assert result.success is False
        assert result.error == "Backend exploded: Internal Server Error"
        assert result.error_details == "EcmApiError(status=500)"
        assert len(fake_client.calls) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tool_name", sorted(VALID_CALLS))
    async def test_unexpected_error_becomes_error_result(self, registry, fake_client, tool_name):
        args, operation = VALID_CALLS[tool_name]
        fake_client.fail(operation, TypeError("bad payload"))
        result = await registry.get(tool_name).execute(args)
        assert result.success is False
        assert result.error_details == "TypeError"


class TestDocumentTools:
    @pytest.mark.asyncio
    async def test_get_document_passthrough(self, fake_client):
        fake_client.responses["get_document"] = {"id": "doc123", "title": "T"}
        result = await DocumentTools(fake_client).execute("ecm_get_document", {"documentId": "doc123"})
        assert result.success is True
        assert result.data == {"id": "doc123", "title": "T"}
        assert fake_client.calls == [("get_document", ("doc123",))]

    @pytest.mark.asyncio
    async def test_delete_document_confirmation(self, fake_client):
        result = await DocumentTools(fake_client).execute("ecm_delete_document", {"documentId": "doc9"})
        assert result.data == {
            "success": True,
            "message": "Document deleted successfully",
            "documentId": "doc9",
        }

    @pytest.mark.asyncio
    async def test_unknown_operation(self, fake_client):
        result = await DocumentTools(fake_client).execute("ecm_get_metadata", {"documentId": "d"})
        assert result.success is False
        assert result.error == "Unknown tool: ecm_get_metadata"
        assert fake_client.calls == []


class TestSearchTools:
    @pytest.mark.asyncio
    async def test_default_max_results(self, fake_client):
        await SearchTools(fake_client).execute("ecm_search_documents", {"query": "invoice"})
        (operation, (request,)), = fake_client.calls
        assert operation == "search_documents"
        assert request.query == "invoice"
        assert request.max_results == 50

    @pytest.mark.asyncio
    async def test_explicit_max_results(self, fake_client):
        await SearchTools(fake_client).execute("ecm_search_documents", {"query": "q", "maxResults": 7})
        request = fake_client.calls[0][1][0]
        assert request.max_results == 7

    @pytest.mark.asyncio
    async def test_advanced_search_filters(self, fake_client):
        fake_client.responses["search_documents"] = {"documents": [], "totalCount": 0}
        result = await SearchTools(fake_client).execute("ecm_advanced_search", {
            "query": "contract",
            "folderId": "f1",
            "documentType": "pdf",
            "dateFrom": "2024-01-01",
            "dateTo": "2024-12-31",
            "tags": ["legal", "2024"],
        })
        assert result.data == {"documents": [], "totalCount": 0}
        request = fake_client.calls[0][1][0]
        assert request.folder_id == "f1"
        assert request.document_type == "pdf"
        assert request.date_from == date(2024, 1, 1)
        assert request.date_to == date(2024, 12, 31)
        assert request.tags == ["legal", "2024"]
        assert request.max_results == 50


class TestFolderTools:
    @pytest.mark.asyncio
    async def test_create_folder(self, fake_client):
        await FolderTools(fake_client).execute("ecm_create_folder", {"name": "Contracts", "parentId": "root"})
        assert fake_client.calls == [("create_folder", ("Contracts", "root", None))]

    @pytest.mark.asyncio
    async def test_list_contents_defaults_true(self, fake_client):
        await FolderTools(fake_client).execute("ecm_list_folder_contents", {"folderId": "f1"})
        assert fake_client.calls == [("get_folder_contents", ("f1", True, True))]

    @pytest.mark.asyncio
    async def test_list_contents_flags(self, fake_client):
        await FolderTools(fake_client).execute(
            "ecm_list_folder_contents",
            {"folderId": "f1", "includeDocuments": False},
        )
        assert fake_client.calls == [("get_folder_contents", ("f1", False, True))]


class TestMetadataVersionWorkflow:
    @pytest.mark.asyncio
    async def test_update_metadata(self, fake_client):
        fake_client.responses["update_metadata"] = {"k": "v", "other": 1}
        result = await MetadataTools(fake_client).execute(
            "ecm_update_metadata", {"documentId": "d1", "metadata": {"k": "v"}},
        )
        assert result.data == {"k": "v", "other": 1}
        assert fake_client.calls == [("update_metadata", ("d1", {"k": "v"}))]

    @pytest.mark.asyncio
    async def test_versions_list(self, fake_client):
        fake_client.responses["get_versions"] = [{"versionId": "v1"}, {"versionId": "v2"}]
        result = await VersionTools(fake_client).execute("ecm_get_versions", {"documentId": "d1"})
        assert result.data == [{"versionId": "v1"}, {"versionId": "v2"}]

    @pytest.mark.asyncio
    async def test_versions_empty(self, fake_client):
        fake_client.responses["get_versions"] = None
        result = await VersionTools(fake_client).execute("ecm_get_versions", {"documentId": "d1"})
        assert result.success is True
        assert result.data == []

    @pytest.mark.asyncio
    async def test_start_workflow_parameters(self, fake_client):
        await WorkflowTools(fake_client).execute("ecm_start_workflow", {
            "documentId": "d1", "workflowName": "approve", "parameters": {"priority": "high"},
        })
        assert fake_client.calls == [("start_workflow", ("d1", "approve", {"priority": "high"}))]

    @pytest.mark.asyncio
    async def test_start_workflow_parameters_must_be_object(self, fake_client):
        result = await WorkflowTools(fake_client).execute("ecm_start_workflow", {
            "documentId": "d1", "workflowName": "approve", "parameters": "x",
        })
        assert result.success is False
        assert fake_client.calls == []
