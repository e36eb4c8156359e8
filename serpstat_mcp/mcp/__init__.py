"""MCP surface: tool handler, registry and transports."""
