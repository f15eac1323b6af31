"""
HTTP Transport — FastAPI application exposing the MCP handler

Endpoints:
  POST /mcp/message       JSON-RPC envelope in, envelope out (always HTTP 200)
  GET  /mcp/tools         registered tool descriptors
  GET  /mcp/tools/{name}  one descriptor, 404 if unknown
  GET  /mcp/health        gateway status and registered tool names
  GET  /health            ECM backend health probe
"""

from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, Response

from ecm_mcp.client import EcmApiClient
from ecm_mcp.config import Config
from ecm_mcp.server.handler import ProtocolHandler
from ecm_mcp.server.logger import get_logger
from ecm_mcp.server.protocol import PARSE_ERROR, make_error
from ecm_mcp.tools import build_registry

log = get_logger("http")


def create_app(client: Optional[EcmApiClient] = None) -> FastAPI:
    """
    Build the FastAPI app.

    When no client is given, one is created from Config at startup and closed
    at shutdown. A supplied client is owned by the caller.
    """
    owns_client = client is None
    backend = client or EcmApiClient.from_config()
    handler = ProtocolHandler(build_registry(backend), backend)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log.info(
            f"{Config.SERVER_NAME} HTTP transport starting — "
            f"tools={handler.registry.count()}"
        )
        yield
        if owns_client:
            await backend.aclose()
        log.info(f"{Config.SERVER_NAME} HTTP transport stopped")

    app = FastAPI(
        title="ECM MCP Server",
        description="MCP gateway to the ECM REST API",
        version=Config.SERVER_VERSION,
        lifespan=lifespan,
    )
    app.state.handler = handler

    @app.post("/mcp/message")
    async def mcp_message(request: Request) -> Response:
        try:
            payload = await request.json()
        except ValueError as exc:
            return JSONResponse(make_error(None, PARSE_ERROR, f"Parse error: {exc}"))
        method = payload.get("method") if isinstance(payload, dict) else "?"
        log.debug(f"Received MCP request via HTTP: method={method}")
        response = await handler.handle(payload)
        if response is None:
            return Response(status_code=202)
        return JSONResponse(response)

    @app.get("/mcp/tools")
    async def list_tools() -> List[Dict[str, Any]]:
        return [tool.descriptor() for tool in handler.registry.all()]

    @app.get("/mcp/tools/{name}")
    async def get_tool(name: str) -> Dict[str, Any]:
        tool = handler.registry.get(name)
        if tool is None:
            raise HTTPException(status_code=404, detail=f"Tool not found: {name}")
        return tool.descriptor()

    @app.get("/mcp/health")
    async def mcp_health() -> Dict[str, Any]:
        return {
            "status": "UP",
            "toolCount": handler.registry.count(),
            "tools": sorted(handler.registry.names()),
        }

    @app.get("/health")
    async def health() -> Dict[str, Any]:
        try:
            ecm_health = await backend.health()
        except Exception as exc:
            return {
                "status": "DOWN",
                "server": Config.SERVER_NAME,
                "error": str(exc) or exc.__class__.__name__,
            }
        return {"status": "UP", "server": Config.SERVER_NAME, "ecmApi": ecm_health}

    return app
