"""ECM MCP Server — MCP gateway to an Enterprise Content Management REST API."""

__version__ = "1.0.0"
