"""
Tool Contract — the interface every MCP tool satisfies

A tool has a stable name, a description, a JSON-Schema input descriptor and
optional tags. ``execute`` never raises: argument errors, backend errors and
unexpected exceptions all come back as an error ToolResult.
"""

import time
from abc import ABC, abstractmethod
from datetime import date, datetime, timezone
from typing import Any, Dict, FrozenSet, List, Optional

from ecm_mcp.client import EcmApiError
from ecm_mcp.server.logger import get_logger

log = get_logger("tools")


class ArgumentError(ValueError):
    """A tool argument is missing or has the wrong shape."""


class ToolResult:
    """Uniform outcome of one tool execution: exactly one of data / error."""

    __slots__ = (
        "success", "data", "error", "error_details",
        "timestamp", "duration_ms", "metadata",
    )

    def __init__(
        self,
        success: bool,
        data: Any = None,
        error: Optional[str] = None,
        error_details: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        if success and (data is None or error is not None):
            raise ValueError("A successful ToolResult carries data and no error")
        if not success and (error is None or data is not None):
            raise ValueError("A failed ToolResult carries an error and no data")
        self.success = success
        self.data = data
        self.error = error
        self.error_details = error_details if not success else None
        self.timestamp = datetime.now(timezone.utc)
        self.duration_ms: Optional[float] = None
        self.metadata = metadata

    @classmethod
    def ok(cls, data: Any, metadata: Optional[Dict[str, Any]] = None) -> "ToolResult":
        return cls(success=True, data={} if data is None else data, metadata=metadata)

    @classmethod
    def fail(cls, error: str, error_details: Optional[str] = None) -> "ToolResult":
        return cls(success=False, error=error or "Unknown error", error_details=error_details)

    @classmethod
    def from_exception(cls, exc: Exception) -> "ToolResult":
        if isinstance(exc, EcmApiError):
            return cls.fail(exc.message, f"EcmApiError(status={exc.status_code})")
        return cls.fail(str(exc) or exc.__class__.__name__, exc.__class__.__name__)

    def to_dict(self) -> Dict[str, Any]:
        d = {
            "success": self.success,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.success:
            d["data"] = self.data
        else:
            d["error"] = self.error
            if self.error_details:
                d["errorDetails"] = self.error_details
        if self.duration_ms is not None:
            d["durationMs"] = self.duration_ms
        if self.metadata:
            d["metadata"] = self.metadata
        return d


class Tool(ABC):
    """
    Base class for all tools.

    Subclasses implement ``name``, ``description``, ``input_schema`` and
    ``_run``. ``_run`` may raise; ``execute`` converts that into data.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique tool name, stable for the life of the process."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Tool description for MCP clients."""

    @property
    @abstractmethod
    def input_schema(self) -> Dict[str, Any]:
        """JSON Schema for the tool arguments."""

    @property
    def tags(self) -> FrozenSet[str]:
        return frozenset()

    @abstractmethod
    async def _run(self, arguments: Dict[str, Any]) -> ToolResult:
        """Validate arguments, call the backend, return a ToolResult."""

    async def execute(self, arguments: Optional[Dict[str, Any]]) -> ToolResult:
        """Run the tool. Never raises."""
        start = time.perf_counter()
        try:
            result = await self._run(arguments or {})
        except ArgumentError as exc:
            log.info(f"Tool {self.name} rejected arguments: {exc}")
            result = ToolResult.fail(str(exc), "ArgumentError")
        except EcmApiError as exc:
            log.error(f"Tool {self.name} backend failure: {exc.message} (status={exc.status_code})")
            result = ToolResult.from_exception(exc)
        except Exception as exc:
            log.error(f"Tool {self.name} error: {exc}", exc_info=True)
            result = ToolResult.from_exception(exc)
        result.duration_ms = round((time.perf_counter() - start) * 1000, 3)
        return result

    def descriptor(self) -> Dict[str, Any]:
        """The tools/list entry for this tool."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
            "tags": sorted(self.tags),
        }


# --- argument narrowing ---

def require_str(args: Dict[str, Any], field: str) -> str:
    value = args.get(field)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ArgumentError(f"{field} is required")
    if not isinstance(value, str):
        raise ArgumentError(f"{field} must be a string")
    return value


def optional_str(args: Dict[str, Any], field: str) -> Optional[str]:
    value = args.get(field)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ArgumentError(f"{field} must be a string")
    return value


def optional_int(
    args: Dict[str, Any],
    field: str,
    default: int,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
) -> int:
    value = args.get(field)
    if value is None:
        return default
    if isinstance(value, bool):
        raise ArgumentError(f"{field} must be an integer")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int):
        raise ArgumentError(f"{field} must be an integer")
    if minimum is not None and value < minimum:
        raise ArgumentError(f"{field} must be >= {minimum}")
    if maximum is not None and value > maximum:
        raise ArgumentError(f"{field} must be <= {maximum}")
    return value


def optional_bool(args: Dict[str, Any], field: str, default: bool) -> bool:
    value = args.get(field)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ArgumentError(f"{field} must be a boolean")
    return value


def require_mapping(args: Dict[str, Any], field: str) -> Dict[str, Any]:
    value = args.get(field)
    if not value:
        raise ArgumentError(f"{field} is required")
    if not isinstance(value, dict):
        raise ArgumentError(f"{field} must be an object")
    return value


def optional_mapping(args: Dict[str, Any], field: str) -> Optional[Dict[str, Any]]:
    value = args.get(field)
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ArgumentError(f"{field} must be an object")
    return value


def optional_str_list(args: Dict[str, Any], field: str) -> Optional[List[str]]:
    value = args.get(field)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ArgumentError(f"{field} must be a list of strings")
    return value


def optional_date(args: Dict[str, Any], field: str) -> Optional[date]:
    value = optional_str(args, field)
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ArgumentError(f"{field} must be an ISO date (YYYY-MM-DD)") from None
