"""
Protocol Handler — Dispatch JSON-RPC methods to the tool registry

Routes:
  initialize   -> server capabilities handshake
  tools/list   -> registered tool descriptors
  tools/call   -> exact-name registry lookup, tool execution
  health       -> backend health probe (never a JSON-RPC error)

Every outcome is returned as a response envelope; nothing raises out of
``handle``. Notifications (no response expected) return None.
"""

from typing import Any, Dict, Optional

from ecm_mcp.config import Config
from ecm_mcp.server.logger import get_logger
from ecm_mcp.server.protocol import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    TOOL_EXECUTION_FAILED,
    Method,
    ProtocolError,
    Request,
    initialize_result,
    make_error,
    make_response,
    tools_list_result,
)
from ecm_mcp.tools.base import ToolResult
from ecm_mcp.tools.registry import ToolRegistry

log = get_logger("handler")


class ProtocolHandler:
    """MCP method dispatcher."""

    def __init__(self, registry: ToolRegistry, client):
        self._registry = registry
        self._client = client
        self._routes = {
            Method.INITIALIZE: self._handle_initialize,
            Method.TOOLS_LIST: self._handle_tools_list,
            Method.TOOLS_CALL: self._handle_tools_call,
            Method.HEALTH: self._handle_health,
        }

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    async def handle(self, msg: Any) -> Optional[Dict[str, Any]]:
        """Turn one decoded message into one response envelope (or None)."""
        request_id = msg.get("id") if isinstance(msg, dict) else None
        try:
            request = Request.from_message(msg)
            if request.is_notification:
                log.debug(f"Notification: {request.method}")
                return None
            log.debug(f"Processing MCP request: method={request.method}, id={request.id}")
            route = self._routes[Method.parse(request.method)]
            return await route(request)

        except ProtocolError as exc:
            log.warning(f"Protocol error: {exc.message} (code={exc.code})")
            return make_error(request_id, exc.code, exc.message, exc.data)

        except Exception as exc:
            log.error(f"Unhandled error: {exc}", exc_info=True)
            return make_error(request_id, INTERNAL_ERROR, f"Internal error: {exc}")

    async def _handle_initialize(self, request: Request) -> Dict[str, Any]:
        client_info = request.params.get("clientInfo")
        if not isinstance(client_info, dict):
            client_info = {}
        log.info(
            f"Client initialize: {client_info.get('name', '?')} "
            f"protocol={request.params.get('protocolVersion', '?')}"
        )
        return make_response(request.id, initialize_result(
            server_name=Config.SERVER_NAME,
            server_version=Config.SERVER_VERSION,
            protocol_version=Config.PROTOCOL_VERSION,
            capabilities=Config.capabilities(),
        ))

    async def _handle_tools_list(self, request: Request) -> Dict[str, Any]:
        tools = [tool.descriptor() for tool in self._registry.all()]
        return make_response(request.id, tools_list_result(tools))

    async def _handle_tools_call(self, request: Request) -> Dict[str, Any]:
        name = request.params.get("name")
        arguments = request.params.get("arguments")

        tool = self._registry.get(name) if name else None
        if tool is None:
            raise ProtocolError(METHOD_NOT_FOUND, f"Tool not found: {name}")
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            raise ProtocolError(INVALID_PARAMS, "arguments must be an object")

        log.info(f"Calling tool: {name}")
        result = await tool.execute(arguments)
        return self._tool_response(request.id, name, result)

    def _tool_response(self, request_id: Any, name: str, result: ToolResult) -> Dict[str, Any]:
        if result.success:
            return make_response(request_id, result.data)

        log.error(f"Tool execution failed: {name}: {result.error}")
        data = {"error": result.error}
        if result.error_details:
            data["errorDetails"] = result.error_details
        if result.duration_ms is not None:
            data["durationMs"] = result.duration_ms
        return make_error(
            request_id,
            TOOL_EXECUTION_FAILED,
            f"Tool execution failed: {result.error}",
            data,
        )

    async def _handle_health(self, request: Request) -> Dict[str, Any]:
        try:
            status = await self._client.health()
        except Exception as exc:
            log.warning(f"Health check failed: {exc}")
            return make_response(request.id, {
                "status": "unhealthy",
                "error": str(exc) or exc.__class__.__name__,
            })
        return make_response(request.id, {"status": "healthy", "ecmApi": status})
