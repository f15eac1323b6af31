"""ECM MCP Server — JSON-RPC protocol, method handler and transports."""
