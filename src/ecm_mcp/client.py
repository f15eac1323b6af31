"""
ECM API Client — async REST client for the Enterprise Content Management backend

Every operation is one HTTP call (plus retries). Failures surface as
EcmApiError carrying the HTTP status (0 when no response was received).

Usage:
    async with EcmApiClient.from_config() as client:
        doc = await client.get_document("doc-1")
"""

import asyncio
from datetime import date
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from ecm_mcp.config import Config
from ecm_mcp.server.logger import get_logger

log = get_logger("client")


class EcmApiError(Exception):
    """The ECM backend call failed."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(message)

    @property
    def retryable(self) -> bool:
        return self.status_code == 0 or self.status_code >= 500


class SearchRequest:
    """Search filters sent to POST /documents/search."""

    __slots__ = (
        "query", "folder_id", "document_type", "date_from", "date_to",
        "tags", "max_results",
    )

    def __init__(
        self,
        query: str,
        max_results: int = 50,
        folder_id: Optional[str] = None,
        document_type: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        tags: Optional[List[str]] = None,
    ):
        self.query = query
        self.max_results = max_results
        self.folder_id = folder_id
        self.document_type = document_type
        self.date_from = date_from
        self.date_to = date_to
        self.tags = tags

    def to_payload(self) -> Dict[str, Any]:
        payload = {
            "query": self.query,
            "folderId": self.folder_id,
            "documentType": self.document_type,
            "dateFrom": self.date_from.isoformat() if self.date_from else None,
            "dateTo": self.date_to.isoformat() if self.date_to else None,
            "tags": self.tags,
            "maxResults": self.max_results,
        }
        return {k: v for k, v in payload.items() if v is not None}


def _segment(value: str) -> str:
    return quote(str(value), safe="")


class EcmApiClient:
    """Async client for the ECM REST API."""

    def __init__(
        self,
        base_url: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        api_key: Optional[str] = None,
        connect_timeout: float = 10.0,
        read_timeout: float = 30.0,
        max_retries: int = 3,
        retry_backoff: float = 1.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._max_retries = max(0, max_retries)
        self._retry_backoff = retry_backoff

        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        auth = None
        if api_key:
            headers["X-API-Key"] = api_key
        elif username:
            auth = httpx.BasicAuth(username, password or "")

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers=headers,
            auth=auth,
            timeout=httpx.Timeout(read_timeout, connect=connect_timeout),
            transport=transport,
        )

    @classmethod
    def from_config(cls) -> "EcmApiClient":
        return cls(
            base_url=Config.ECM_BASE_URL,
            username=Config.ECM_USERNAME or None,
            password=Config.ECM_PASSWORD or None,
            api_key=Config.ECM_API_KEY or None,
            connect_timeout=Config.ECM_CONNECT_TIMEOUT,
            read_timeout=Config.ECM_READ_TIMEOUT,
            max_retries=Config.ECM_MAX_RETRIES,
            retry_backoff=Config.ECM_RETRY_BACKOFF,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def __aenter__(self) -> "EcmApiClient":
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()

    async def aclose(self):
        await self._client.aclose()

    # -- request plumbing --

    async def _request(
        self,
        method: str,
        path: str,
        failure: str,
        *,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        attempt = 0
        while True:
            try:
                return await self._send(method, path, failure, json=json, params=params)
            except EcmApiError as exc:
                if not exc.retryable or attempt >= self._max_retries:
                    raise
                delay = self._retry_backoff * (2 ** attempt)
                attempt += 1
                log.warning(
                    f"{method} {path} failed ({exc.message}); "
                    f"retry {attempt}/{self._max_retries} in {delay:.1f}s"
                )
                if delay > 0:
                    await asyncio.sleep(delay)

    async def _send(self, method, path, failure, *, json=None, params=None) -> Any:
        log.debug(f"ECM API request: {method} {self._base_url}{path}")
        try:
            response = await self._client.request(method, path, json=json, params=params)
        except httpx.HTTPError as exc:
            raise EcmApiError(0, f"{failure}: {exc.__class__.__name__}: {exc}") from exc

        if response.is_error:
            log.error(f"ECM API error response: {response.status_code} {response.reason_phrase}")
            raise EcmApiError(response.status_code, f"{failure}: {response.reason_phrase}")

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise EcmApiError(response.status_code, f"{failure}: invalid JSON body") from exc

    # -- operations --

    async def health(self) -> Dict[str, Any]:
        result = await self._request("GET", "/health", "Health check failed")
        log.info("ECM API health check successful")
        return result if result is not None else {}

    async def get_document(self, document_id: str) -> Dict[str, Any]:
        return await self._request(
            "GET", f"/documents/{_segment(document_id)}",
            f"Failed to get document: {document_id}",
        )

    async def delete_document(self, document_id: str) -> None:
        await self._request(
            "DELETE", f"/documents/{_segment(document_id)}",
            f"Failed to delete document: {document_id}",
        )
        log.info(f"Document deleted: {document_id}")

    async def search_documents(self, request: SearchRequest) -> Dict[str, Any]:
        result = await self._request(
            "POST", "/documents/search", "Search failed", json=request.to_payload(),
        )
        if isinstance(result, dict):
            log.info(f"Search returned {result.get('totalCount')} results")
        return result

    async def create_folder(
        self,
        name: str,
        parent_id: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload = {
            "name": name,
            "parentId": parent_id or "",
            "description": description or "",
        }
        return await self._request("POST", "/folders", "Failed to create folder", json=payload)

    async def get_folder_contents(
        self,
        folder_id: str,
        include_documents: bool = True,
        include_subfolders: bool = True,
    ) -> Dict[str, Any]:
        params = {
            "includeDocuments": "true" if include_documents else "false",
            "includeSubfolders": "true" if include_subfolders else "false",
        }
        return await self._request(
            "GET", f"/folders/{_segment(folder_id)}/contents",
            f"Failed to get folder contents: {folder_id}", params=params,
        )

    async def get_metadata(self, document_id: str) -> Dict[str, Any]:
        return await self._request(
            "GET", f"/documents/{_segment(document_id)}/metadata", "Failed to get metadata",
        )

    async def update_metadata(self, document_id: str, metadata: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request(
            "PATCH", f"/documents/{_segment(document_id)}/metadata",
            "Failed to update metadata", json=metadata,
        )

    async def get_versions(self, document_id: str) -> List[Dict[str, Any]]:
        return await self._request(
            "GET", f"/documents/{_segment(document_id)}/versions", "Failed to get versions",
        )

    async def start_workflow(
        self,
        document_id: str,
        workflow_name: str,
        parameters: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        payload = {
            "workflowName": workflow_name,
            "documentId": document_id,
            "parameters": parameters or {},
        }
        return await self._request("POST", "/workflows", "Failed to start workflow", json=payload)

    async def get_workflow_status(self, workflow_id: str) -> Dict[str, Any]:
        return await self._request(
            "GET", f"/workflows/{_segment(workflow_id)}",
            f"Failed to get workflow status: {workflow_id}",
        )
