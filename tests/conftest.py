"""Shared fixtures for ECM MCP tests."""

import os
import tempfile

# Keep log files out of the real home directory
os.environ.setdefault("ECM_MCP_DATA_DIR", tempfile.mkdtemp(prefix="ecm-mcp-test-"))

import pytest

from ecm_mcp.client import EcmApiError
from ecm_mcp.server.handler import ProtocolHandler
from ecm_mcp.tools import build_registry


class FakeEcmClient:
    """In-memory backend double that records every call."""

    base_url = "http://ecm.test/api"

    def __init__(self):
        self.calls = []
        self.responses = {}
        self.failures = {}
        self.closed = False

    def fail(self, operation, exc=None):
        self.failures[operation] = exc or EcmApiError(503, "Service Unavailable")

    async def _call(self, operation, *args):
        self.calls.append((operation, args))
        if operation in self.failures:
            raise self.failures[operation]
        return self.responses.get(operation, {"operation": operation})

    async def health(self):
        return await self._call("health")

    async def get_document(self, document_id):
        return await self._call("get_document", document_id)

    async def delete_document(self, document_id):
        await self._call("delete_document", document_id)

    async def search_documents(self, request):
        return await self._call("search_documents", request)

    async def create_folder(self, name, parent_id=None, description=None):
        return await self._call("create_folder", name, parent_id, description)

    async def get_folder_contents(self, folder_id, include_documents=True, include_subfolders=True):
        return await self._call("get_folder_contents", folder_id, include_documents, include_subfolders)

    async def get_metadata(self, document_id):
        return await self._call("get_metadata", document_id)

    async def update_metadata(self, document_id, metadata):
        return await self._call("update_metadata", document_id, metadata)

    async def get_versions(self, document_id):
        return await self._call("get_versions", document_id)

    async def start_workflow(self, document_id, workflow_name, parameters=None):
        return await self._call("start_workflow", document_id, workflow_name, parameters)

    async def get_workflow_status(self, workflow_id):
        return await self._call("get_workflow_status", workflow_id)

    async def aclose(self):
        self.closed = True


@pytest.fixture
def fake_client():
    return FakeEcmClient()


@pytest.fixture
def registry(fake_client):
    return build_registry(fake_client)


@pytest.fixture
def handler(registry, fake_client):
    return ProtocolHandler(registry, fake_client)


@pytest.fixture
def tmp_data_dir(tmp_path):
    """Point the data directory at a temp directory for isolated tests."""
    data_dir = tmp_path / ".ecm-mcp"
    data_dir.mkdir()
    (data_dir / "logs").mkdir()

    from ecm_mcp import config
    saved = (config.Config.DATA_DIR, config.Config.LOG_DIR)
    config.Config.DATA_DIR = data_dir
    config.Config.LOG_DIR = data_dir / "logs"

    yield data_dir

    config.Config.DATA_DIR, config.Config.LOG_DIR = saved
