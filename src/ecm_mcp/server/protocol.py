"""
JSON-RPC 2.0 Protocol — MCP message construction and validation

Handles:
- Request parsing into a typed envelope
- Response/error construction
- MCP-specific result builders
"""

from enum import Enum
from typing import Any, Dict, List, Optional

JSONRPC_VERSION = "2.0"


class ProtocolError(Exception):
    """JSON-RPC protocol error"""
    def __init__(self, code: int, message: str, data: Any = None):
        self.code = code
        self.message = message
        self.data = data
        super().__init__(message)


# Standard JSON-RPC error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

# Server-defined: a tool ran and reported failure
TOOL_EXECUTION_FAILED = -32000

# Notifications carry no id and never get a response
NOTIFICATION_METHODS = frozenset({
    "initialized",
    "notifications/initialized",
    "notifications/cancelled",
})


class Method(str, Enum):
    """Methods the gateway answers."""

    INITIALIZE = "initialize"
    TOOLS_LIST = "tools/list"
    TOOLS_CALL = "tools/call"
    HEALTH = "health"

    @classmethod
    def parse(cls, value: Any) -> "Method":
        try:
            return cls(value)
        except ValueError:
            raise ProtocolError(METHOD_NOT_FOUND, f"Method not found: {value}") from None


class Request:
    """One inbound JSON-RPC call."""

    __slots__ = ("jsonrpc", "id", "method", "params")

    def __init__(self, id: Any, method: str, params: Optional[Dict[str, Any]] = None,
                 jsonrpc: str = JSONRPC_VERSION):
        self.jsonrpc = jsonrpc
        self.id = id
        self.method = method
        self.params = params if params is not None else {}

    @property
    def is_notification(self) -> bool:
        return self.method in NOTIFICATION_METHODS

    @classmethod
    def from_message(cls, msg: Any) -> "Request":
        """
        Validate a decoded JSON-RPC message and wrap it.
        Raises ProtocolError(INVALID_REQUEST) for anything that is not a request.
        A missing ``jsonrpc`` member is tolerated; a wrong one is not.
        """
        if not isinstance(msg, dict):
            raise ProtocolError(INVALID_REQUEST, "Message must be a JSON object")

        version = msg.get("jsonrpc", JSONRPC_VERSION)
        if version != JSONRPC_VERSION:
            raise ProtocolError(INVALID_REQUEST, f"Expected jsonrpc={JSONRPC_VERSION}")

        method = msg.get("method")
        if not isinstance(method, str) or not method:
            raise ProtocolError(INVALID_REQUEST, "Missing method")

        params = msg.get("params")
        if params is not None and not isinstance(params, dict):
            raise ProtocolError(INVALID_PARAMS, "params must be an object")

        return cls(id=msg.get("id"), method=method, params=params, jsonrpc=version)


def make_response(request_id: Any, result: Any) -> Dict[str, Any]:
    """Build a JSON-RPC success response."""
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": request_id,
        "result": result,
    }


def make_error(
    request_id: Any,
    code: int,
    message: str,
    data: Any = None,
) -> Dict[str, Any]:
    """Build a JSON-RPC error response."""
    error = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": request_id,
        "error": error,
    }


# --- MCP-specific result builders ---

def initialize_result(
    server_name: str,
    server_version: str,
    protocol_version: str,
    capabilities: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Build the MCP initialize result."""
    return {
        "protocolVersion": protocol_version,
        "capabilities": capabilities if capabilities is not None else {
            "tools": {"listChanged": False},
        },
        "serverInfo": {
            "name": server_name,
            "version": server_version,
        },
    }


def tools_list_result(tools: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Build the MCP tools/list result."""
    return {"tools": tools}
